"""Pydantic schemas for User."""
from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.]+$")
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=8)
    avatar: str | None = None
    cover_image: str | None = None

    @field_validator("username")
    @classmethod
    def lowercase_username(cls, value: str) -> str:
        return value.lower()

    @field_validator("full_name")
    @classmethod
    def strip_full_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("full_name must not be blank")
        return value


class UserUpdate(BaseModel):
    full_name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)] | None = None
    avatar: str | None = None
    cover_image: str | None = None


class UserResponse(BaseModel):
    id: UUID
    username: str
    email: str
    full_name: str
    avatar: str | None = None
    cover_image: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class OwnerProfile(BaseModel):
    """Public subset of a user attached to videos, comments, tweets and playlists."""
    id: UUID
    username: str
    email: str
    full_name: str
    avatar: str | None = None

    model_config = {"from_attributes": True}


class ChannelProfile(OwnerProfile):
    cover_image: str | None = None
    subscribers_count: int = 0
    channels_subscribed_to_count: int = 0
    is_subscribed: bool = False


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse


class TokenRefresh(BaseModel):
    refresh_token: str


class LoginRequest(BaseModel):
    """Log in with either email or username."""
    email: EmailStr | None = None
    username: str | None = None
    password: str
