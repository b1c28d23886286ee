"""Ownership checks and toggle semantics shared by the resource services."""
import logging
from typing import TypeVar
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.session import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


async def get_or_404(db: AsyncSession, model: type[ModelT], entity_id: UUID, label: str) -> ModelT:
    entity = await db.get(model, entity_id)
    if entity is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} does not exist")
    return entity


async def get_owned(
    db: AsyncSession,
    model: type[ModelT],
    entity_id: UUID,
    actor_id: UUID,
    label: str,
) -> ModelT:
    """Fetch an entity the actor is about to mutate: 404 when absent, 403 when owned by someone else."""
    entity = await get_or_404(db, model, entity_id, label)
    if entity.owner_id != actor_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden request")
    return entity


async def toggle_record(db: AsyncSession, model: type[ModelT], **keys) -> bool:
    """Remove the row matching ``keys`` if there is one, otherwise insert it.

    Returns True when the row exists afterwards. The delete is a single
    statement and the insert runs in a savepoint against the table's unique
    constraint, so two concurrent toggles can never leave a duplicate behind.
    """
    criteria = [getattr(model, column) == value for column, value in keys.items()]
    result = await db.execute(delete(model).where(*criteria))
    if result.rowcount:
        return False
    try:
        async with db.begin_nested():
            db.add(model(**keys))
    except IntegrityError:
        # A concurrent toggle inserted the same row first
        logger.info("[Toggle] %s already present for %s", model.__tablename__, keys)
    return True
