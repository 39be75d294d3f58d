# backend/app/api/v1/endpoints/celebrities.py
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api import deps
from backend.app.api.pagination import like_pattern, paginate
from backend.app.core.exceptions import NotFoundError
from backend.app.core.messages import translate
from backend.app.db.base import get_db
from backend.app.models.admin import AdminRole
from backend.app.models.celebrity import Celebrity
from backend.app.schemas.celebrity import CelebrityCreate, CelebrityResponse, CelebrityUpdate
from backend.app.schemas.common import MessageResponse, Page
from backend.app.schemas.token import AccessClaims

router = APIRouter()

editors = deps.require_roles(AdminRole.ADMIN, AdminRole.SUPER_ADMIN)
super_admins = deps.require_roles(AdminRole.SUPER_ADMIN)


# 1. DANH SÁCH (GET) - paginated, newest first
@router.get("", response_model=Page[CelebrityResponse])
async def list_celebrities(
        db: AsyncSession = Depends(get_db),
        current: AccessClaims = Depends(editors),
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1),
        search: Optional[str] = Query(None, max_length=100),
):
    query = select(Celebrity).order_by(Celebrity.created_at.desc())
    if search:
        query = query.where(Celebrity.name.ilike(like_pattern(search), escape="\\"))

    items, pagination = await paginate(db, query, page, limit)
    return Page[CelebrityResponse](
        data=[CelebrityResponse.model_validate(item) for item in items],
        pagination=pagination,
    )


# 2. TẠO MỚI (POST)
@router.post("", response_model=CelebrityResponse, status_code=status.HTTP_201_CREATED)
async def create_celebrity(
        celebrity_in: CelebrityCreate,
        db: AsyncSession = Depends(get_db),
        current: AccessClaims = Depends(editors),
):
    celebrity = Celebrity(**celebrity_in.model_dump())
    db.add(celebrity)
    await db.commit()
    await db.refresh(celebrity)
    return celebrity


# 3. CẬP NHẬT (PUT) - id travels in the body
@router.put("", response_model=CelebrityResponse)
async def update_celebrity(
        celebrity_in: CelebrityUpdate,
        db: AsyncSession = Depends(get_db),
        current: AccessClaims = Depends(editors),
):
    celebrity = await db.get(Celebrity, celebrity_in.id)
    if celebrity is None:
        raise NotFoundError("celebrity_not_found")

    update_data = celebrity_in.model_dump(exclude_unset=True, exclude={"id"})
    for key, value in update_data.items():
        setattr(celebrity, key, value)

    db.add(celebrity)
    await db.commit()
    await db.refresh(celebrity)
    return celebrity


# 4. XÓA (DELETE) - super_admin only, votes go with the celebrity
@router.delete("", response_model=MessageResponse)
async def delete_celebrity(
        id: uuid.UUID,
        db: AsyncSession = Depends(get_db),
        current: AccessClaims = Depends(super_admins),
        lang: str = Depends(deps.language),
):
    celebrity = await db.get(Celebrity, id)
    if celebrity is None:
        raise NotFoundError("celebrity_not_found")

    await db.delete(celebrity)
    await db.commit()
    return MessageResponse(message=translate("celebrity_deleted", lang))
