"""Tweet listing and mutation logic."""
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import Row
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.pagination import PageLabels, paginate
from vidtube.db.pipeline import QueryPipeline, related_count
from vidtube.models.engagement import Like
from vidtube.models.tweet import Tweet
from vidtube.models.user import User
from vidtube.schemas.tweet import TweetPage, TweetResponse
from vidtube.services.ownership import get_or_404, get_owned
from vidtube.services.user_service import OWNER_FIELDS

TWEET_PAGE = PageLabels(total="total_tweets", items="tweets")


def tweet_pipeline() -> QueryPipeline:
    return (
        QueryPipeline(Tweet)
        .enrich(Tweet.owner, fields=OWNER_FIELDS)
        .compute("total_likes", related_count(Like.tweet_id, Tweet.id))
    )


def _row_to_response(row: Row) -> TweetResponse:
    response = TweetResponse.model_validate(row.Tweet)
    response.total_likes = row.total_likes or 0
    return response


async def fetch_tweet(db: AsyncSession, tweet_id: UUID) -> TweetResponse:
    stmt = tweet_pipeline().match(Tweet.id == tweet_id).statement()
    row = (await db.execute(stmt.execution_options(populate_existing=True))).one_or_none()
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Something went wrong while fetching the tweet",
        )
    return _row_to_response(row)


async def create_tweet(db: AsyncSession, owner_id: UUID, content: str) -> TweetResponse:
    tweet = Tweet(content=content, owner_id=owner_id)
    db.add(tweet)
    await db.flush()
    return await fetch_tweet(db, tweet.id)


async def list_user_tweets(db: AsyncSession, user_id: UUID, *, page: int, limit: int) -> TweetPage:
    await get_or_404(db, User, user_id, "User")
    pipeline = tweet_pipeline().match(Tweet.owner_id == user_id).sort("created_at")
    envelope = await paginate(
        db, pipeline, labels=TWEET_PAGE, page=page, limit=limit, transform=_row_to_response
    )
    return TweetPage(**envelope)


async def update_tweet(db: AsyncSession, tweet_id: UUID, actor_id: UUID, content: str) -> TweetResponse:
    tweet = await get_owned(db, Tweet, tweet_id, actor_id, "Tweet")
    tweet.content = content
    await db.flush()
    return await fetch_tweet(db, tweet_id)


async def delete_tweet(db: AsyncSession, tweet_id: UUID, actor_id: UUID) -> None:
    tweet = await get_owned(db, Tweet, tweet_id, actor_id, "Tweet")
    await db.delete(tweet)
    await db.flush()
