"""Pydantic schemas for Video."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from vidtube.schemas.common import PageMeta
from vidtube.schemas.user import OwnerProfile


class VideoResponse(BaseModel):
    id: UUID
    title: str
    description: str
    video_file: str
    thumbnail: str
    duration: float = 0
    views: int = 0
    is_published: bool = True
    owner: OwnerProfile | None = None
    total_likes: int = 0
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class VideoPage(PageMeta):
    videos: list[VideoResponse]
    total_videos: int
