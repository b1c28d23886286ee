"""Celery tasks for media housekeeping."""
import logging

from vidtube.core.celery_app import celery_app
from vidtube.services.storage_service import get_storage

logger = logging.getLogger(__name__)


@celery_app.task
def delete_media(urls: list[str]) -> int:
    """Delete replaced or orphaned media files. Returns how many were removed."""
    storage = get_storage()
    removed = sum(1 for url in urls if storage.delete(url))
    logger.info("[Media] removed %d of %d files", removed, len(urls))
    return removed
