# backend/app/api/pagination.py
import math
from typing import Any, List, Tuple

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.schemas.common import Pagination

MAX_PAGE_SIZE = 100


def like_pattern(search: str) -> str:
    """Substring pattern for ILIKE with the LIKE wildcards escaped."""
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


async def paginate(db: AsyncSession, query: Select, page: int, limit: int) -> Tuple[List[Any], Pagination]:
    """
    Run one COUNT and one page query for the same filtered statement.

    limit is clamped to MAX_PAGE_SIZE.
    """
    limit = min(limit, MAX_PAGE_SIZE)

    total = (await db.execute(select(func.count()).select_from(query.order_by(None).subquery()))).scalar_one()
    rows = (await db.execute(query.limit(limit).offset((page - 1) * limit))).scalars().all()

    return list(rows), Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit) if total else 0,
    )
