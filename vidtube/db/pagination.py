"""Offset pagination over query pipelines."""
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import Row
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.pipeline import QueryPipeline


@dataclass(frozen=True)
class PageLabels:
    """Field names under which a page reports its total count and its items."""
    total: str
    items: str


async def paginate(
    db: AsyncSession,
    pipeline: QueryPipeline,
    *,
    labels: PageLabels,
    page: int = 1,
    limit: int = 10,
    transform: Callable[[Row], Any] | None = None,
) -> dict[str, Any]:
    """Run ``pipeline`` for one page and return the page envelope.

    ``page`` and ``limit`` must be positive; they are never clamped.
    """
    if page < 1:
        raise ValueError(f"page must be a positive integer, got {page}")
    if limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit}")

    total = await db.scalar(pipeline.count_statement()) or 0
    offset = (page - 1) * limit
    rows = (await db.execute(pipeline.statement().offset(offset).limit(limit))).all()
    items = [transform(row) for row in rows] if transform else rows

    total_pages = max(1, math.ceil(total / limit))
    has_prev_page = page > 1
    has_next_page = page < total_pages
    return {
        labels.items: items,
        labels.total: total,
        "limit": limit,
        "page": page,
        "total_pages": total_pages,
        "paging_counter": offset + 1,
        "has_prev_page": has_prev_page,
        "has_next_page": has_next_page,
        "prev_page": page - 1 if has_prev_page else None,
        "next_page": page + 1 if has_next_page else None,
    }
