# backend/app/api/v1/endpoints/seed.py
"""
Bootstrap endpoints.

Endpoints:
- POST /admin/seed - create the first super_admin account
- POST /vote/seed  - load the sample contest entrants once

Security:
- Both require X-Seed-Secret to match ADMIN_SEED_SECRET
- With ADMIN_SEED_SECRET unset they always answer 403
"""
import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api import deps
from backend.app.core.config import settings
from backend.app.core.exceptions import AuthorizationError, ConflictError, ValidationError
from backend.app.core.messages import translate
from backend.app.db.base import get_db
from backend.app.models.admin import Admin, AdminRole
from backend.app.models.celebrity import Celebrity
from backend.app.schemas.auth import AdminResponse, SeedAdminRequest, SeedAdminResponse
from backend.app.security import hashing

logger = logging.getLogger(__name__)

router = APIRouter()

SAMPLE_CELEBRITIES = [
    {
        "name": "أحمد البغدادي",
        "image": "/demo.jpg",
        "description": "صانع محتوى توعوي متخصص في قضايا البيئة والاستدامة، ساهم في زيادة الوعي البيئي لدى الشباب العراقي.",
        "category": "content_creator",
        "social_links": [
            {"platform": "instagram", "url": "https://instagram.com/"},
            {"platform": "twitter", "url": "https://twitter.com/"},
        ],
    },
    {
        "name": "سارة الموسوي",
        "image": "/demo.jpg",
        "description": "ناشطة بيئية ومؤثرة اجتماعية، تقود حملات تطوعية لتنظيف الأماكن العامة وزراعة الأشجار.",
        "category": "influencer",
        "social_links": [
            {"platform": "instagram", "url": "https://instagram.com/"},
            {"platform": "youtube", "url": "https://youtube.com/"},
        ],
    },
    {
        "name": "محمد الكاظمي",
        "image": "/demo.jpg",
        "description": "رياضي محترف ومحفز للشباب، يدعو للحياة الصحية والنشاط البدني من خلال محتواه المميز.",
        "category": "athlete",
        "social_links": [
            {"platform": "instagram", "url": "https://instagram.com/"},
            {"platform": "facebook", "url": "https://facebook.com/"},
            {"platform": "tiktok", "url": "https://tiktok.com/"},
        ],
    },
    {
        "name": "زينب العلي",
        "image": "/demo.jpg",
        "description": "فنانة ورسامة تستخدم فنها للتوعية بالقضايا البيئية، أقامت معارض فنية متعددة حول الاستدامة.",
        "category": "artist",
        "social_links": [
            {"platform": "instagram", "url": "https://instagram.com/"},
        ],
    },
]


def require_seed_secret(x_seed_secret: Optional[str] = Header(None)) -> None:
    expected = settings.ADMIN_SEED_SECRET
    if not expected or not x_seed_secret or not secrets.compare_digest(x_seed_secret, expected):
        raise AuthorizationError("seed_forbidden")


async def _find_admin(db: AsyncSession, username: str) -> Optional[Admin]:
    result = await db.execute(select(Admin).where(Admin.username == username))
    return result.scalars().first()


@router.post(
    "/admin/seed",
    response_model=SeedAdminResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_seed_secret)],
)
async def seed_super_admin(
        request: SeedAdminRequest,
        db: AsyncSession = Depends(get_db),
        lang: str = Depends(deps.language),
):
    username = request.username.lower()

    weaknesses = hashing.validate_password_strength(request.password)
    if weaknesses:
        raise ValidationError("weak_password", extra={"errors": weaknesses})

    if await _find_admin(db, username) is not None:
        raise ConflictError("username_taken")

    admin = Admin(
        username=username,
        password_hash=hashing.get_password_hash(request.password),
        display_name=request.display_name,
        role=AdminRole.SUPER_ADMIN,
        is_active=True,
        login_attempts=0,
    )
    db.add(admin)
    try:
        await db.commit()
    except IntegrityError:
        # a concurrent seed claimed the username after the lookup
        await db.rollback()
        logger.info("Seed for %s lost the race on the username", username)
        raise ConflictError("username_taken")

    logger.info("Seeded super_admin %s", username)
    return SeedAdminResponse(message=translate("admin_created", lang), admin=AdminResponse.model_validate(admin))


@router.post("/vote/seed", dependencies=[Depends(require_seed_secret)])
async def seed_celebrities(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Celebrity.id).limit(1))
    if result.first() is not None:
        raise ValidationError("celebrities_exist")

    db.add_all(Celebrity(**data) for data in SAMPLE_CELEBRITIES)
    await db.commit()

    logger.info("Seeded %d sample celebrities", len(SAMPLE_CELEBRITIES))
    return {"count": len(SAMPLE_CELEBRITIES)}
