"""Channel dashboard for the signed-in user."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.api.deps import get_current_user, get_db
from vidtube.core.config import settings
from vidtube.models.user import User
from vidtube.schemas.common import ApiResponse, api_response
from vidtube.schemas.dashboard import ChannelStats
from vidtube.schemas.video import VideoPage
from vidtube.services import dashboard_service, video_service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=ApiResponse[ChannelStats])
async def get_channel_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stats = await dashboard_service.get_channel_stats(db, current_user.id)
    return api_response(stats, "Channel stats fetched successfully")


@router.get("/videos", response_model=ApiResponse[VideoPage])
async def get_channel_videos(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    query: str | None = Query(None, max_length=200),
    sort_by: str = Query("created_at"),
    sort_type: str | None = Query(None, pattern="^(asc|desc)$"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    videos = await video_service.list_videos(
        db,
        page=page,
        limit=limit,
        query=query,
        owner_id=current_user.id,
        sort_by=sort_by,
        sort_type=sort_type,
        include_unpublished=True,
    )
    return api_response(videos, "Channel videos fetched successfully")
