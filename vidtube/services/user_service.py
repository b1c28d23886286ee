"""User profile and channel queries."""
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.models.engagement import Subscription
from vidtube.models.user import User
from vidtube.schemas.user import ChannelProfile, UserUpdate

# Public profile subset loaded whenever a user is attached to another record
OWNER_FIELDS = (User.id, User.username, User.email, User.full_name, User.avatar)


async def update_profile(db: AsyncSession, user: User, data: UserUpdate) -> User:
    if data.full_name is not None:
        user.full_name = data.full_name
    if data.avatar is not None:
        user.avatar = data.avatar
    if data.cover_image is not None:
        user.cover_image = data.cover_image
    await db.flush()
    await db.refresh(user)
    return user


async def get_channel_profile(db: AsyncSession, username: str, viewer_id: UUID | None) -> ChannelProfile | None:
    result = await db.execute(select(User).where(User.username == username.lower()))
    channel = result.scalar_one_or_none()
    if channel is None:
        return None
    subscribers_count = await db.scalar(
        select(func.count(Subscription.id)).where(Subscription.channel_id == channel.id)
    )
    subscribed_to_count = await db.scalar(
        select(func.count(Subscription.id)).where(Subscription.subscriber_id == channel.id)
    )
    is_subscribed = False
    if viewer_id is not None:
        is_subscribed = (
            await db.scalar(
                select(Subscription.id).where(
                    Subscription.subscriber_id == viewer_id,
                    Subscription.channel_id == channel.id,
                )
            )
        ) is not None
    return ChannelProfile(
        id=channel.id,
        username=channel.username,
        email=channel.email,
        full_name=channel.full_name,
        avatar=channel.avatar,
        cover_image=channel.cover_image,
        subscribers_count=subscribers_count or 0,
        channels_subscribed_to_count=subscribed_to_count or 0,
        is_subscribed=is_subscribed,
    )
