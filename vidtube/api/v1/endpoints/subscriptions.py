"""Channel subscriptions."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.api.deps import get_current_user, get_current_user_optional, get_db
from vidtube.core.config import settings
from vidtube.models.user import User
from vidtube.schemas.common import ApiResponse, ToggleSubscriptionResponse, api_response
from vidtube.schemas.subscription import ChannelSubscribers, SubscribedChannels
from vidtube.services import subscription_service

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.post("/c/{channel_id}", response_model=ApiResponse[ToggleSubscriptionResponse])
async def toggle_subscription(
    channel_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    is_subscribed = await subscription_service.toggle_subscription(db, channel_id, current_user.id)
    await db.commit()
    message = "Subscribed successfully" if is_subscribed else "Unsubscribed successfully"
    return api_response(ToggleSubscriptionResponse(is_subscribed=is_subscribed), message)


@router.get("/c/{channel_id}", response_model=ApiResponse[ChannelSubscribers])
async def list_channel_subscribers(
    channel_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    result = await subscription_service.list_channel_subscribers(
        db, channel_id, current_user.id if current_user else None, page=page, limit=limit
    )
    return api_response(result, "Subscribers fetched successfully")


@router.get("/u/{subscriber_id}", response_model=ApiResponse[SubscribedChannels])
async def list_subscribed_channels(
    subscriber_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    result = await subscription_service.list_subscribed_channels(
        db, subscriber_id, current_user.id if current_user else None, page=page, limit=limit
    )
    return api_response(result, "Subscribed channels fetched successfully")
