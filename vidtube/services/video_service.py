"""Video listing, publishing and mutation logic."""
import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import Row, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.pagination import PageLabels, paginate
from vidtube.db.pipeline import InvalidSortField, QueryPipeline, related_count
from vidtube.models.engagement import Like
from vidtube.models.video import Video
from vidtube.schemas.video import VideoPage, VideoResponse
from vidtube.services.ownership import get_or_404, get_owned
from vidtube.services.storage_service import StoredMedia
from vidtube.services.user_service import OWNER_FIELDS

logger = logging.getLogger(__name__)

VIDEO_SORT_FIELDS = ("created_at", "updated_at", "title", "views", "duration")
VIDEO_PAGE = PageLabels(total="total_videos", items="videos")


def video_pipeline(
    *,
    query: str | None = None,
    owner_id: UUID | None = None,
    include_unpublished: bool = False,
) -> QueryPipeline:
    pipeline = QueryPipeline(Video, sortable=VIDEO_SORT_FIELDS)
    if not include_unpublished:
        pipeline.match(Video.is_published.is_(True))
    if owner_id is not None:
        pipeline.match(Video.owner_id == owner_id)
    pipeline.search(query, Video.title, Video.description)
    pipeline.enrich(Video.owner, fields=OWNER_FIELDS)
    pipeline.compute("total_likes", related_count(Like.video_id, Video.id))
    return pipeline


def video_to_response(video: Video, total_likes: int = 0) -> VideoResponse:
    response = VideoResponse.model_validate(video)
    response.total_likes = total_likes or 0
    return response


def _row_to_response(row: Row) -> VideoResponse:
    return video_to_response(row.Video, row.total_likes)


async def list_videos(
    db: AsyncSession,
    *,
    page: int,
    limit: int,
    query: str | None = None,
    owner_id: UUID | None = None,
    sort_by: str = "created_at",
    sort_type: str | None = None,
    include_unpublished: bool = False,
) -> VideoPage:
    pipeline = video_pipeline(query=query, owner_id=owner_id, include_unpublished=include_unpublished)
    try:
        pipeline.sort(sort_by, sort_type)
    except InvalidSortField as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    envelope = await paginate(
        db, pipeline, labels=VIDEO_PAGE, page=page, limit=limit, transform=_row_to_response
    )
    return VideoPage(**envelope)


async def fetch_video(db: AsyncSession, video_id: UUID) -> VideoResponse:
    """Load one video with owner and like count, reloading any stale state in the session."""
    pipeline = video_pipeline(include_unpublished=True).match(Video.id == video_id)
    stmt = pipeline.statement().execution_options(populate_existing=True)
    row = (await db.execute(stmt)).one_or_none()
    if row is None:
        # The video exists (callers check first), so its owner must be missing
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Something went wrong while fetching the video",
        )
    return _row_to_response(row)


async def increment_views(db: AsyncSession, video_id: UUID) -> None:
    """Add one view. Errors are logged and dropped; a lost view is acceptable."""
    try:
        async with db.begin_nested():
            await db.execute(
                update(Video)
                .where(Video.id == video_id)
                .values(views=Video.views + 1, updated_at=Video.updated_at)
                .execution_options(synchronize_session=False)
            )
    except SQLAlchemyError as e:
        logger.warning("[Videos] view count increment failed for %s: %s", video_id, e)


async def get_video(db: AsyncSession, video_id: UUID, viewer_id: UUID | None) -> VideoResponse:
    video = await get_or_404(db, Video, video_id, "Video")
    if not video.is_published and video.owner_id != viewer_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Video is no longer available for public access",
        )
    await increment_views(db, video_id)
    return await fetch_video(db, video_id)


async def publish_video(
    db: AsyncSession,
    owner_id: UUID,
    *,
    title: str,
    description: str,
    video_file: StoredMedia,
    thumbnail: StoredMedia,
) -> VideoResponse:
    video = Video(
        owner_id=owner_id,
        title=title,
        description=description,
        video_file=video_file.url,
        thumbnail=thumbnail.url,
        duration=video_file.duration or 0,
    )
    db.add(video)
    await db.flush()
    return await fetch_video(db, video.id)


async def get_owned_video(db: AsyncSession, video_id: UUID, actor_id: UUID) -> Video:
    return await get_owned(db, Video, video_id, actor_id, "Video")


async def update_video(
    db: AsyncSession,
    video_id: UUID,
    actor_id: UUID,
    *,
    title: str,
    description: str,
    thumbnail: StoredMedia | None = None,
) -> tuple[VideoResponse, str | None]:
    """Apply new metadata. Returns the video and the URL of a thumbnail it no longer uses."""
    video = await get_owned_video(db, video_id, actor_id)
    video.title = title
    video.description = description
    replaced_thumbnail = None
    if thumbnail is not None:
        replaced_thumbnail = video.thumbnail
        video.thumbnail = thumbnail.url
    await db.flush()
    return await fetch_video(db, video_id), replaced_thumbnail


async def delete_video(db: AsyncSession, video_id: UUID, actor_id: UUID) -> list[str]:
    """Delete the video. Returns the media URLs that are now orphaned."""
    video = await get_owned_video(db, video_id, actor_id)
    media = [video.video_file, video.thumbnail]
    await db.delete(video)
    await db.flush()
    return media


async def toggle_publish_status(db: AsyncSession, video_id: UUID, actor_id: UUID) -> VideoResponse:
    video = await get_owned_video(db, video_id, actor_id)
    video.is_published = not video.is_published
    await db.flush()
    return await fetch_video(db, video_id)
