"""Pydantic schemas for Comment."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from vidtube.schemas.common import NonBlankStr, PageMeta
from vidtube.schemas.user import OwnerProfile


class CommentCreate(BaseModel):
    content: NonBlankStr


class CommentUpdate(BaseModel):
    content: NonBlankStr


class CommentResponse(BaseModel):
    id: UUID
    content: str
    video_id: UUID
    owner: OwnerProfile | None = None
    total_likes: int = 0
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class CommentPage(PageMeta):
    comments: list[CommentResponse]
    total_comments: int
