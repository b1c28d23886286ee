"""Pydantic schemas for liked-video listings."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from vidtube.schemas.common import PageMeta
from vidtube.schemas.video import VideoResponse


class LikedVideoResponse(BaseModel):
    id: UUID
    liked_at: datetime
    video: VideoResponse


class LikedVideoPage(PageMeta):
    liked_videos: list[LikedVideoResponse]
    total_liked_videos: int
