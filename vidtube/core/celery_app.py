"""Celery application for background media housekeeping."""
from celery import Celery

from vidtube.core.config import settings

celery_app = Celery(
    "vidtube",
    broker=settings.CELERY_BROKER_URL,
    include=["vidtube.workers.media"],
)
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
)
