"""Comments on videos."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.api.deps import get_current_user, get_db
from vidtube.core.config import settings
from vidtube.models.user import User
from vidtube.schemas.comment import CommentCreate, CommentPage, CommentResponse, CommentUpdate
from vidtube.schemas.common import ApiResponse, api_response
from vidtube.services import comment_service

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/{video_id}", response_model=ApiResponse[CommentPage])
async def list_video_comments(
    video_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    db: AsyncSession = Depends(get_db),
):
    comments = await comment_service.list_video_comments(db, video_id, page=page, limit=limit)
    return api_response(comments, "Comments fetched successfully")


@router.post("/{video_id}", response_model=ApiResponse[CommentResponse], status_code=status.HTTP_201_CREATED)
async def add_comment(
    video_id: UUID,
    data: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    comment = await comment_service.add_comment(db, video_id, current_user.id, data.content)
    await db.commit()
    return api_response(comment, "Comment added successfully", status.HTTP_201_CREATED)


@router.patch("/c/{comment_id}", response_model=ApiResponse[CommentResponse])
async def update_comment(
    comment_id: UUID,
    data: CommentUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    comment = await comment_service.update_comment(db, comment_id, current_user.id, data.content)
    await db.commit()
    return api_response(comment, "Comment updated successfully")


@router.delete("/c/{comment_id}", response_model=ApiResponse[dict])
async def delete_comment(
    comment_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await comment_service.delete_comment(db, comment_id, current_user.id)
    await db.commit()
    return api_response({}, "Comment deleted successfully")
