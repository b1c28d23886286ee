"""Like toggles and liked-video listing."""
from uuid import UUID

from sqlalchemy import Row, or_
from sqlalchemy.orm import aliased
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.pagination import PageLabels, paginate
from vidtube.db.pipeline import QueryPipeline, related_count
from vidtube.models.comment import Comment
from vidtube.models.engagement import Like
from vidtube.models.tweet import Tweet
from vidtube.models.video import Video
from vidtube.schemas.like import LikedVideoPage, LikedVideoResponse
from vidtube.services.ownership import get_or_404, toggle_record
from vidtube.services.user_service import OWNER_FIELDS
from vidtube.services.video_service import video_to_response

LIKED_VIDEO_PAGE = PageLabels(total="total_liked_videos", items="liked_videos")


async def toggle_video_like(db: AsyncSession, video_id: UUID, user_id: UUID) -> bool:
    await get_or_404(db, Video, video_id, "Video")
    return await toggle_record(db, Like, liked_by_id=user_id, video_id=video_id)


async def toggle_comment_like(db: AsyncSession, comment_id: UUID, user_id: UUID) -> bool:
    await get_or_404(db, Comment, comment_id, "Comment")
    return await toggle_record(db, Like, liked_by_id=user_id, comment_id=comment_id)


async def toggle_tweet_like(db: AsyncSession, tweet_id: UUID, user_id: UUID) -> bool:
    await get_or_404(db, Tweet, tweet_id, "Tweet")
    return await toggle_record(db, Like, liked_by_id=user_id, tweet_id=tweet_id)


def _row_to_response(row: Row) -> LikedVideoResponse:
    like = row.Like
    return LikedVideoResponse(
        id=like.id,
        liked_at=like.created_at,
        video=video_to_response(like.video, row.total_likes),
    )


async def list_liked_videos(db: AsyncSession, user_id: UUID, *, page: int, limit: int) -> LikedVideoPage:
    """Videos the user liked, most recent like first. Others' unpublished videos are hidden."""
    pipeline = (
        QueryPipeline(Like)
        .match(Like.liked_by_id == user_id)
        .enrich(Like.video, Video.owner, fields=OWNER_FIELDS)
        .match(or_(Video.is_published.is_(True), Video.owner_id == user_id))
        .compute("total_likes", related_count(aliased(Like).video_id, Video.id))
        .sort("created_at")
    )
    envelope = await paginate(
        db, pipeline, labels=LIKED_VIDEO_PAGE, page=page, limit=limit, transform=_row_to_response
    )
    return LikedVideoPage(**envelope)
