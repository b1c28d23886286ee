"""Playlists and their videos."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.api.deps import get_current_user, get_db
from vidtube.core.config import settings
from vidtube.models.user import User
from vidtube.schemas.common import ApiResponse, api_response
from vidtube.schemas.playlist import PlaylistCreate, PlaylistDetail, PlaylistPage, PlaylistResponse, PlaylistUpdate
from vidtube.services import playlist_service

router = APIRouter(prefix="/playlists", tags=["playlists"])


@router.post("", response_model=ApiResponse[PlaylistResponse], status_code=status.HTTP_201_CREATED)
async def create_playlist(
    data: PlaylistCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    playlist = await playlist_service.create_playlist(db, current_user.id, data.name, data.description)
    await db.commit()
    return api_response(playlist, "Playlist created successfully", status.HTTP_201_CREATED)


@router.get("/user/{user_id}", response_model=ApiResponse[PlaylistPage])
async def list_user_playlists(
    user_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    db: AsyncSession = Depends(get_db),
):
    playlists = await playlist_service.list_user_playlists(db, user_id, page=page, limit=limit)
    return api_response(playlists, "Playlists fetched successfully")


@router.get("/{playlist_id}", response_model=ApiResponse[PlaylistDetail])
async def get_playlist(
    playlist_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    playlist = await playlist_service.get_playlist(db, playlist_id)
    return api_response(playlist, "Playlist fetched successfully")


@router.patch("/add/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistDetail])
async def add_video_to_playlist(
    video_id: UUID,
    playlist_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    playlist = await playlist_service.add_video(db, playlist_id, video_id, current_user.id)
    await db.commit()
    return api_response(playlist, "Video added to playlist successfully")


@router.patch("/remove/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistDetail])
async def remove_video_from_playlist(
    video_id: UUID,
    playlist_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    playlist = await playlist_service.remove_video(db, playlist_id, video_id, current_user.id)
    await db.commit()
    return api_response(playlist, "Video removed from playlist successfully")


@router.patch("/{playlist_id}", response_model=ApiResponse[PlaylistResponse])
async def update_playlist(
    playlist_id: UUID,
    data: PlaylistUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    playlist = await playlist_service.update_playlist(db, playlist_id, current_user.id, data.name, data.description)
    await db.commit()
    return api_response(playlist, "Playlist updated successfully")


@router.delete("/{playlist_id}", response_model=ApiResponse[dict])
async def delete_playlist(
    playlist_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await playlist_service.delete_playlist(db, playlist_id, current_user.id)
    await db.commit()
    return api_response({}, "Playlist deleted successfully")
