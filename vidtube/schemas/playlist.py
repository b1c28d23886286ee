"""Pydantic schemas for Playlist."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from vidtube.schemas.common import NonBlankStr, PageMeta
from vidtube.schemas.user import OwnerProfile


class PlaylistCreate(BaseModel):
    name: NonBlankStr
    description: NonBlankStr


class PlaylistUpdate(PlaylistCreate):
    pass


class PlaylistResponse(BaseModel):
    id: UUID
    name: str
    description: str
    owner_id: UUID
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class PlaylistSummary(BaseModel):
    """Playlist card: first published thumbnail plus totals over published videos."""
    id: UUID
    name: str
    description: str
    thumbnail: str | None = None
    total_videos: int = 0
    total_views: int = 0
    duration: float = 0
    created_at: datetime
    updated_at: datetime | None = None


class PlaylistVideoItem(BaseModel):
    id: UUID
    title: str
    description: str
    thumbnail: str
    views: int = 0
    duration: float = 0
    is_published: bool = True

    model_config = {"from_attributes": True}


class PlaylistDetail(BaseModel):
    id: UUID
    name: str
    description: str
    owner: OwnerProfile | None = None
    videos: list[PlaylistVideoItem]
    total_videos: int = 0
    total_views: int = 0
    duration: float = 0
    created_at: datetime
    updated_at: datetime | None = None


class PlaylistPage(PageMeta):
    playlists: list[PlaylistSummary]
    total_playlists: int
