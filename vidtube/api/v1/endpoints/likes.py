"""Like toggles for videos, comments and tweets."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.api.deps import get_current_user, get_db
from vidtube.core.config import settings
from vidtube.models.user import User
from vidtube.schemas.common import ApiResponse, ToggleLikeResponse, api_response
from vidtube.schemas.like import LikedVideoPage
from vidtube.services import like_service

router = APIRouter(prefix="/likes", tags=["likes"])


def _toggled(is_liked: bool, target: str) -> dict:
    message = f"Liked {target} successfully" if is_liked else f"Un-liked {target} successfully"
    return api_response(ToggleLikeResponse(is_liked=is_liked), message)


@router.post("/toggle/v/{video_id}", response_model=ApiResponse[ToggleLikeResponse])
async def toggle_video_like(
    video_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    is_liked = await like_service.toggle_video_like(db, video_id, current_user.id)
    await db.commit()
    return _toggled(is_liked, "video")


@router.post("/toggle/c/{comment_id}", response_model=ApiResponse[ToggleLikeResponse])
async def toggle_comment_like(
    comment_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    is_liked = await like_service.toggle_comment_like(db, comment_id, current_user.id)
    await db.commit()
    return _toggled(is_liked, "comment")


@router.post("/toggle/t/{tweet_id}", response_model=ApiResponse[ToggleLikeResponse])
async def toggle_tweet_like(
    tweet_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    is_liked = await like_service.toggle_tweet_like(db, tweet_id, current_user.id)
    await db.commit()
    return _toggled(is_liked, "tweet")


@router.get("/videos", response_model=ApiResponse[LikedVideoPage])
async def list_liked_videos(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    liked = await like_service.list_liked_videos(db, current_user.id, page=page, limit=limit)
    return api_response(liked, "Liked videos fetched successfully")
