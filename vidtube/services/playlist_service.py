"""Playlist listing, detail and membership logic."""
from datetime import datetime
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import Row, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.pagination import PageLabels, paginate
from vidtube.db.pipeline import QueryPipeline
from vidtube.models.playlist import Playlist, PlaylistVideo
from vidtube.models.user import User
from vidtube.models.video import Video
from vidtube.schemas.playlist import (
    PlaylistDetail,
    PlaylistPage,
    PlaylistResponse,
    PlaylistSummary,
    PlaylistVideoItem,
)
from vidtube.schemas.user import OwnerProfile
from vidtube.services.ownership import get_or_404, get_owned
from vidtube.services.user_service import OWNER_FIELDS

PLAYLIST_SORT_FIELDS = ("created_at", "updated_at", "name")
PLAYLIST_PAGE = PageLabels(total="total_playlists", items="playlists")


def _published_entries(*columns):
    return (
        select(*columns)
        .select_from(Video)
        .join(PlaylistVideo, PlaylistVideo.video_id == Video.id)
        .where(PlaylistVideo.playlist_id == Playlist.id, Video.is_published.is_(True))
        .correlate(Playlist)
    )


def playlist_pipeline() -> QueryPipeline:
    """Playlists with totals computed over their published videos."""
    return (
        QueryPipeline(Playlist, sortable=PLAYLIST_SORT_FIELDS)
        .compute(
            "thumbnail",
            _published_entries(Video.thumbnail).order_by(PlaylistVideo.position).limit(1).scalar_subquery(),
        )
        .compute("total_videos", _published_entries(func.count()).scalar_subquery())
        .compute("total_views", _published_entries(func.coalesce(func.sum(Video.views), 0)).scalar_subquery())
        .compute("duration", _published_entries(func.coalesce(func.sum(Video.duration), 0)).scalar_subquery())
    )


def _row_to_summary(row: Row) -> PlaylistSummary:
    playlist = row.Playlist
    return PlaylistSummary(
        id=playlist.id,
        name=playlist.name,
        description=playlist.description,
        thumbnail=row.thumbnail,
        total_videos=row.total_videos or 0,
        total_views=row.total_views or 0,
        duration=row.duration or 0,
        created_at=playlist.created_at,
        updated_at=playlist.updated_at,
    )


async def create_playlist(db: AsyncSession, owner_id: UUID, name: str, description: str) -> PlaylistResponse:
    playlist = Playlist(name=name, description=description, owner_id=owner_id)
    db.add(playlist)
    await db.flush()
    await db.refresh(playlist)
    return PlaylistResponse.model_validate(playlist)


async def list_user_playlists(
    db: AsyncSession,
    user_id: UUID,
    *,
    page: int,
    limit: int,
) -> PlaylistPage:
    await get_or_404(db, User, user_id, "User")
    pipeline = (
        playlist_pipeline()
        .match(Playlist.owner_id == user_id)
        .project(Playlist.name, Playlist.description, Playlist.created_at, Playlist.updated_at)
        .sort("created_at")
    )
    envelope = await paginate(
        db, pipeline, labels=PLAYLIST_PAGE, page=page, limit=limit, transform=_row_to_summary
    )
    return PlaylistPage(**envelope)


async def get_playlist(db: AsyncSession, playlist_id: UUID) -> PlaylistDetail:
    await get_or_404(db, Playlist, playlist_id, "Playlist")
    stmt = (
        playlist_pipeline()
        .match(Playlist.id == playlist_id)
        .enrich(Playlist.owner, fields=OWNER_FIELDS)
        .statement()
        .execution_options(populate_existing=True)
    )
    row = (await db.execute(stmt)).one_or_none()
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Something went wrong while fetching the playlist",
        )
    videos = (
        await db.execute(
            select(Video)
            .join(PlaylistVideo, PlaylistVideo.video_id == Video.id)
            .where(PlaylistVideo.playlist_id == playlist_id, Video.is_published.is_(True))
            .order_by(PlaylistVideo.position)
        )
    ).scalars().all()
    playlist = row.Playlist
    return PlaylistDetail(
        id=playlist.id,
        name=playlist.name,
        description=playlist.description,
        owner=OwnerProfile.model_validate(playlist.owner),
        videos=[PlaylistVideoItem.model_validate(v) for v in videos],
        total_videos=row.total_videos or 0,
        total_views=row.total_views or 0,
        duration=row.duration or 0,
        created_at=playlist.created_at,
        updated_at=playlist.updated_at,
    )


async def _get_entry(db: AsyncSession, playlist_id: UUID, video_id: UUID) -> PlaylistVideo | None:
    return await db.get(PlaylistVideo, (playlist_id, video_id))


async def add_video(db: AsyncSession, playlist_id: UUID, video_id: UUID, actor_id: UUID) -> PlaylistDetail:
    await get_or_404(db, Video, video_id, "Video")
    playlist = await get_owned(db, Playlist, playlist_id, actor_id, "Playlist")
    if await _get_entry(db, playlist_id, video_id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Video already exists in playlist")
    last_position = await db.scalar(
        select(func.max(PlaylistVideo.position)).where(PlaylistVideo.playlist_id == playlist_id)
    )
    try:
        async with db.begin_nested():
            db.add(
                PlaylistVideo(
                    playlist_id=playlist_id,
                    video_id=video_id,
                    position=(last_position if last_position is not None else -1) + 1,
                )
            )
    except IntegrityError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Video already exists in playlist")
    playlist.updated_at = datetime.utcnow()
    await db.flush()
    return await get_playlist(db, playlist_id)


async def remove_video(db: AsyncSession, playlist_id: UUID, video_id: UUID, actor_id: UUID) -> PlaylistDetail:
    await get_or_404(db, Video, video_id, "Video")
    playlist = await get_owned(db, Playlist, playlist_id, actor_id, "Playlist")
    entry = await _get_entry(db, playlist_id, video_id)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Video is not in the playlist")
    await db.delete(entry)
    playlist.updated_at = datetime.utcnow()
    await db.flush()
    return await get_playlist(db, playlist_id)


async def update_playlist(
    db: AsyncSession,
    playlist_id: UUID,
    actor_id: UUID,
    name: str,
    description: str,
) -> PlaylistResponse:
    playlist = await get_owned(db, Playlist, playlist_id, actor_id, "Playlist")
    playlist.name = name
    playlist.description = description
    await db.flush()
    await db.refresh(playlist)
    return PlaylistResponse.model_validate(playlist)


async def delete_playlist(db: AsyncSession, playlist_id: UUID, actor_id: UUID) -> None:
    playlist = await get_owned(db, Playlist, playlist_id, actor_id, "Playlist")
    await db.delete(playlist)
    await db.flush()
