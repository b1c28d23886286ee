"""Subscription toggle and subscriber/channel listings."""
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import Row, exists
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from vidtube.db.pagination import PageLabels, paginate
from vidtube.db.pipeline import QueryPipeline
from vidtube.models.engagement import Subscription
from vidtube.models.user import User
from vidtube.schemas.subscription import (
    ChannelPage,
    ChannelSubscribers,
    SubscribedChannels,
    SubscriberPage,
    SubscriptionProfile,
)
from vidtube.schemas.user import OwnerProfile
from vidtube.services.ownership import get_or_404, toggle_record
from vidtube.services.user_service import OWNER_FIELDS

SUBSCRIBER_PAGE = PageLabels(total="total_subscribers", items="subscribers")
CHANNEL_PAGE = PageLabels(total="total_channels", items="channels")


async def toggle_subscription(db: AsyncSession, channel_id: UUID, subscriber_id: UUID) -> bool:
    channel = await get_or_404(db, User, channel_id, "Channel")
    if channel.id == subscriber_id:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="You cannot subscribe to yourself")
    return await toggle_record(db, Subscription, subscriber_id=subscriber_id, channel_id=channel_id)


def _requester_subscribed_to(user_id_column, requester_id: UUID | None):
    theirs = aliased(Subscription)
    return exists().where(theirs.subscriber_id == requester_id, theirs.channel_id == user_id_column)


def _profile(user: User, is_subscribed) -> SubscriptionProfile:
    return SubscriptionProfile(
        id=user.id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        avatar=user.avatar,
        is_subscribed=bool(is_subscribed),
    )


async def list_channel_subscribers(
    db: AsyncSession,
    channel_id: UUID,
    requester_id: UUID | None,
    *,
    page: int,
    limit: int,
) -> ChannelSubscribers:
    channel = await get_or_404(db, User, channel_id, "Channel")
    pipeline = (
        QueryPipeline(Subscription)
        .match(Subscription.channel_id == channel.id)
        .enrich(Subscription.subscriber, fields=OWNER_FIELDS)
        .compute("is_subscribed", _requester_subscribed_to(Subscription.subscriber_id, requester_id))
        .sort("created_at")
    )

    def transform(row: Row) -> SubscriptionProfile:
        return _profile(row.Subscription.subscriber, row.is_subscribed)

    envelope = await paginate(db, pipeline, labels=SUBSCRIBER_PAGE, page=page, limit=limit, transform=transform)
    return ChannelSubscribers(
        channel=OwnerProfile.model_validate(channel),
        subscribers=SubscriberPage(**envelope),
    )


async def list_subscribed_channels(
    db: AsyncSession,
    subscriber_id: UUID,
    requester_id: UUID | None,
    *,
    page: int,
    limit: int,
) -> SubscribedChannels:
    subscriber = await get_or_404(db, User, subscriber_id, "Subscriber")
    pipeline = (
        QueryPipeline(Subscription)
        .match(Subscription.subscriber_id == subscriber.id)
        .enrich(Subscription.channel, fields=OWNER_FIELDS)
        .compute("is_subscribed", _requester_subscribed_to(Subscription.channel_id, requester_id))
        .sort("created_at")
    )

    def transform(row: Row) -> SubscriptionProfile:
        return _profile(row.Subscription.channel, row.is_subscribed)

    envelope = await paginate(db, pipeline, labels=CHANNEL_PAGE, page=page, limit=limit, transform=transform)
    return SubscribedChannels(
        subscriber=OwnerProfile.model_validate(subscriber),
        channels=ChannelPage(**envelope),
    )
