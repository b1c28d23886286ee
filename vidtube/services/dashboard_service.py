"""Per-channel dashboard aggregates."""
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.models.engagement import Like, Subscription
from vidtube.models.video import Video
from vidtube.schemas.dashboard import ChannelStats


async def get_channel_stats(db: AsyncSession, owner_id: UUID) -> ChannelStats:
    total_subscribers = await db.scalar(
        select(func.count(Subscription.id)).where(Subscription.channel_id == owner_id)
    )
    video_totals = (
        await db.execute(
            select(func.count(Video.id), func.coalesce(func.sum(Video.views), 0)).where(Video.owner_id == owner_id)
        )
    ).one()
    total_likes = await db.scalar(
        select(func.count(Like.id)).join(Video, Like.video_id == Video.id).where(Video.owner_id == owner_id)
    )
    return ChannelStats(
        id=owner_id,
        total_subscribers=total_subscribers or 0,
        total_videos=video_totals[0] or 0,
        total_views=video_totals[1] or 0,
        total_likes=total_likes or 0,
    )
