"""Pydantic schemas for the channel dashboard."""
from uuid import UUID

from pydantic import BaseModel


class ChannelStats(BaseModel):
    id: UUID
    total_subscribers: int = 0
    total_videos: int = 0
    total_views: int = 0
    total_likes: int = 0
