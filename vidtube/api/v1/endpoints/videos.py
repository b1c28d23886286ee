"""Video listing, publishing and management."""
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.api.deps import get_current_user, get_current_user_optional, get_db
from vidtube.core.config import settings
from vidtube.models.user import User
from vidtube.schemas.common import ApiResponse, api_response
from vidtube.schemas.video import VideoPage, VideoResponse
from vidtube.services import video_service
from vidtube.services.storage_service import StoredMedia, get_storage, schedule_media_cleanup

router = APIRouter(prefix="/videos", tags=["videos"])

THUMBNAIL_TYPES = {"image/jpeg", "image/png", "image/webp"}
VIDEO_TYPES = {"video/mp4", "video/quicktime", "video/webm"}

EXT_MAP = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "video/mp4": ".mp4",
    "video/quicktime": ".mov",
    "video/webm": ".webm",
}


def _validate_file(file: UploadFile, allowed: set[str], field: str) -> str:
    content_type = file.content_type or ""
    if content_type not in allowed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {field} type: {content_type}. Allowed: {sorted(allowed)}",
        )
    return EXT_MAP[content_type]


async def _read_and_validate_size(file: UploadFile, max_size_mb: int, field: str) -> bytes:
    data = await file.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{field} file is missing")
    if len(data) > max_size_mb * 1024 * 1024:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{field} file too large. Max {max_size_mb}MB",
        )
    return data


async def _read_upload(file: UploadFile, *, allowed: set[str], max_size_mb: int, kind: str) -> tuple[bytes, str]:
    ext = _validate_file(file, allowed, kind)
    data = await _read_and_validate_size(file, max_size_mb, kind)
    return data, ext


def _store(user: User, kind: str, upload: tuple[bytes, str], stored: list[StoredMedia]) -> StoredMedia:
    media = get_storage().save(str(user.id), kind, *upload)
    stored.append(media)
    return media


def _required_text(value: str, field: str) -> str:
    value = value.strip()
    if not value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{field} is required")
    return value


@router.get("", response_model=ApiResponse[VideoPage])
async def list_videos(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    query: str | None = Query(None, max_length=200),
    sort_by: str = Query("created_at"),
    sort_type: str | None = Query(None, pattern="^(asc|desc)$"),
    user_id: UUID | None = None,
    db: AsyncSession = Depends(get_db),
):
    videos = await video_service.list_videos(
        db,
        page=page,
        limit=limit,
        query=query,
        owner_id=user_id,
        sort_by=sort_by,
        sort_type=sort_type,
    )
    return api_response(videos, "Videos fetched successfully")


@router.post("", response_model=ApiResponse[VideoResponse], status_code=status.HTTP_201_CREATED)
async def publish_video(
    title: str = Form(...),
    description: str = Form(...),
    video_file: UploadFile = File(...),
    thumbnail: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    title = _required_text(title, "title")
    description = _required_text(description, "description")
    thumbnail_upload = await _read_upload(
        thumbnail, allowed=THUMBNAIL_TYPES, max_size_mb=settings.MAX_THUMBNAIL_SIZE_MB, kind="thumbnails"
    )
    video_upload = await _read_upload(
        video_file, allowed=VIDEO_TYPES, max_size_mb=settings.MAX_VIDEO_SIZE_MB, kind="videos"
    )
    stored: list[StoredMedia] = []
    try:
        stored_thumbnail = _store(current_user, "thumbnails", thumbnail_upload, stored)
        stored_video = _store(current_user, "videos", video_upload, stored)
        video = await video_service.publish_video(
            db,
            current_user.id,
            title=title,
            description=description,
            video_file=stored_video,
            thumbnail=stored_thumbnail,
        )
        await db.commit()
    except Exception:
        # No record references these files once the publish fails
        schedule_media_cleanup(*(media.url for media in stored))
        raise
    return api_response(video, "Video published successfully", status.HTTP_201_CREATED)


@router.get("/{video_id}", response_model=ApiResponse[VideoResponse])
async def get_video(
    video_id: UUID,
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    video = await video_service.get_video(db, video_id, current_user.id if current_user else None)
    await db.commit()
    return api_response(video, "Video fetched successfully")


@router.patch("/{video_id}", response_model=ApiResponse[VideoResponse])
async def update_video(
    video_id: UUID,
    title: str = Form(...),
    description: str = Form(...),
    thumbnail: UploadFile | None = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    title = _required_text(title, "title")
    description = _required_text(description, "description")
    thumbnail_upload = None
    if thumbnail is not None and thumbnail.filename:
        # Ownership is checked before anything is written to storage
        await video_service.get_owned_video(db, video_id, current_user.id)
        thumbnail_upload = await _read_upload(
            thumbnail, allowed=THUMBNAIL_TYPES, max_size_mb=settings.MAX_THUMBNAIL_SIZE_MB, kind="thumbnails"
        )
    stored: list[StoredMedia] = []
    try:
        stored_thumbnail = _store(current_user, "thumbnails", thumbnail_upload, stored) if thumbnail_upload else None
        video, replaced_thumbnail = await video_service.update_video(
            db, video_id, current_user.id, title=title, description=description, thumbnail=stored_thumbnail
        )
        await db.commit()
    except Exception:
        schedule_media_cleanup(*(media.url for media in stored))
        raise
    schedule_media_cleanup(replaced_thumbnail)
    return api_response(video, "Video details updated successfully")


@router.delete("/{video_id}", response_model=ApiResponse[dict])
async def delete_video(
    video_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    orphaned_media = await video_service.delete_video(db, video_id, current_user.id)
    await db.commit()
    schedule_media_cleanup(*orphaned_media)
    return api_response({}, "Video deleted successfully")


@router.patch("/toggle/publish/{video_id}", response_model=ApiResponse[VideoResponse])
async def toggle_publish_status(
    video_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    video = await video_service.toggle_publish_status(db, video_id, current_user.id)
    await db.commit()
    state = "published" if video.is_published else "unpublished"
    return api_response(video, f"Video marked {state} successfully")
