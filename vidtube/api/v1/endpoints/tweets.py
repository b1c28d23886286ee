"""Tweets: short text posts on a channel."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.api.deps import get_current_user, get_db
from vidtube.core.config import settings
from vidtube.models.user import User
from vidtube.schemas.common import ApiResponse, api_response
from vidtube.schemas.tweet import TweetCreate, TweetPage, TweetResponse, TweetUpdate
from vidtube.services import tweet_service

router = APIRouter(prefix="/tweets", tags=["tweets"])


@router.post("", response_model=ApiResponse[TweetResponse], status_code=status.HTTP_201_CREATED)
async def create_tweet(
    data: TweetCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    tweet = await tweet_service.create_tweet(db, current_user.id, data.content)
    await db.commit()
    return api_response(tweet, "Tweet created successfully", status.HTTP_201_CREATED)


@router.get("/user/{user_id}", response_model=ApiResponse[TweetPage])
async def list_user_tweets(
    user_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    db: AsyncSession = Depends(get_db),
):
    tweets = await tweet_service.list_user_tweets(db, user_id, page=page, limit=limit)
    return api_response(tweets, "User tweets fetched successfully")


@router.patch("/{tweet_id}", response_model=ApiResponse[TweetResponse])
async def update_tweet(
    tweet_id: UUID,
    data: TweetUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    tweet = await tweet_service.update_tweet(db, tweet_id, current_user.id, data.content)
    await db.commit()
    return api_response(tweet, "Tweet updated successfully")


@router.delete("/{tweet_id}", response_model=ApiResponse[dict])
async def delete_tweet(
    tweet_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await tweet_service.delete_tweet(db, tweet_id, current_user.id)
    await db.commit()
    return api_response({}, "Tweet deleted successfully")
