# backend/app/api/v1/endpoints/participants.py
"""Marathon registration (public) and the admin participant list."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api import deps
from backend.app.api.pagination import like_pattern, paginate
from backend.app.core.exceptions import RateLimitError
from backend.app.db.base import get_db
from backend.app.models.participant import Participant
from backend.app.schemas.common import Page
from backend.app.schemas.participant import (
    ParticipantCreate,
    ParticipantResponse,
    RegistrationResponse,
)
from backend.app.schemas.token import AccessClaims
from backend.app.security.rate_limit import RateLimiter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register(
        participant_in: ParticipantCreate,
        db: AsyncSession = Depends(get_db),
        limiter: RateLimiter = Depends(deps.get_register_limiter),
        ip: str = Depends(deps.client_ip),
):
    limit = limiter.hit(ip)
    if not limit.allowed:
        raise RateLimitError(
            "register_rate_limited",
            retry_after=limit.retry_after,
            extra={"retryAfter": limit.retry_after},
        )

    participant = Participant(**participant_in.model_dump())
    db.add(participant)
    await db.commit()

    logger.info("Participant registered: %s", participant.id)
    return RegistrationResponse(id=participant.id, name=participant.name)


@router.get("/admin/participants", response_model=Page[ParticipantResponse])
async def list_participants(
        db: AsyncSession = Depends(get_db),
        current: AccessClaims = Depends(deps.get_current_admin),
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1),
        search: Optional[str] = Query(None, max_length=100),
):
    query = select(Participant).order_by(Participant.created_at.desc())
    if search:
        pattern = like_pattern(search)
        query = query.where(
            or_(
                Participant.name.ilike(pattern, escape="\\"),
                Participant.phone_number.ilike(pattern, escape="\\"),
            )
        )

    items, pagination = await paginate(db, query, page, limit)
    return Page[ParticipantResponse](
        data=[ParticipantResponse.model_validate(item) for item in items],
        pagination=pagination,
    )
