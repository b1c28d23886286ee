"""Pydantic schemas for Tweet."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from vidtube.schemas.common import NonBlankStr, PageMeta
from vidtube.schemas.user import OwnerProfile


class TweetCreate(BaseModel):
    content: NonBlankStr


class TweetUpdate(BaseModel):
    content: NonBlankStr


class TweetResponse(BaseModel):
    id: UUID
    content: str
    owner: OwnerProfile | None = None
    total_likes: int = 0
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class TweetPage(PageMeta):
    tweets: list[TweetResponse]
    total_tweets: int
