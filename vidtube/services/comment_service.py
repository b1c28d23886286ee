"""Comment listing and mutation logic."""
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import Row
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.pagination import PageLabels, paginate
from vidtube.db.pipeline import QueryPipeline, related_count
from vidtube.models.comment import Comment
from vidtube.models.engagement import Like
from vidtube.models.video import Video
from vidtube.schemas.comment import CommentPage, CommentResponse
from vidtube.services.ownership import get_or_404, get_owned
from vidtube.services.user_service import OWNER_FIELDS

COMMENT_PAGE = PageLabels(total="total_comments", items="comments")


def comment_pipeline() -> QueryPipeline:
    return (
        QueryPipeline(Comment)
        .enrich(Comment.owner, fields=OWNER_FIELDS)
        .compute("total_likes", related_count(Like.comment_id, Comment.id))
    )


def _row_to_response(row: Row) -> CommentResponse:
    response = CommentResponse.model_validate(row.Comment)
    response.total_likes = row.total_likes or 0
    return response


async def list_video_comments(db: AsyncSession, video_id: UUID, *, page: int, limit: int) -> CommentPage:
    await get_or_404(db, Video, video_id, "Video")
    pipeline = comment_pipeline().match(Comment.video_id == video_id).sort("created_at")
    envelope = await paginate(
        db, pipeline, labels=COMMENT_PAGE, page=page, limit=limit, transform=_row_to_response
    )
    return CommentPage(**envelope)


async def fetch_comment(db: AsyncSession, comment_id: UUID) -> CommentResponse:
    stmt = comment_pipeline().match(Comment.id == comment_id).statement()
    row = (await db.execute(stmt.execution_options(populate_existing=True))).one_or_none()
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Something went wrong while fetching the comment",
        )
    return _row_to_response(row)


async def add_comment(db: AsyncSession, video_id: UUID, owner_id: UUID, content: str) -> CommentResponse:
    await get_or_404(db, Video, video_id, "Video")
    comment = Comment(content=content, owner_id=owner_id, video_id=video_id)
    db.add(comment)
    await db.flush()
    return await fetch_comment(db, comment.id)


async def update_comment(db: AsyncSession, comment_id: UUID, actor_id: UUID, content: str) -> CommentResponse:
    comment = await get_owned(db, Comment, comment_id, actor_id, "Comment")
    comment.content = content
    await db.flush()
    return await fetch_comment(db, comment_id)


async def delete_comment(db: AsyncSession, comment_id: UUID, actor_id: UUID) -> None:
    comment = await get_owned(db, Comment, comment_id, actor_id, "Comment")
    await db.delete(comment)
    await db.flush()
