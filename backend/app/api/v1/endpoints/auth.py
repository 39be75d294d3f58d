# backend/app/api/v1/endpoints/auth.py
"""
Admin session endpoints.

Login order:
    validate -> account locked? (423) -> ip:username limiter (429) ->
    password check (401, counts toward both limiter and account lock) ->
    issue access + refresh cookies
A locked account answers 423 even when the limiter would also refuse.
"""
import asyncio
import logging
import math
import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api import deps
from backend.app.core.config import settings
from backend.app.core.exceptions import (
    AuthenticationError,
    LockedError,
    NotFoundError,
    RateLimitError,
)
from backend.app.core.messages import translate
from backend.app.db.base import get_db
from backend.app.models.admin import Admin, AdminRole
from backend.app.schemas.auth import AdminResponse, LoginRequest, LoginResponse
from backend.app.schemas.common import MessageResponse
from backend.app.schemas.token import AccessClaims, TokenSubject
from backend.app.security import hashing
from backend.app.security.jwt import token_service
from backend.app.security.rate_limit import RateLimiter, login_key
from backend.app.security.session import REFRESH_COOKIE, clear_session_cookies, set_session_cookies

logger = logging.getLogger(__name__)

router = APIRouter()


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


async def _failure_delay() -> None:
    """Randomized pause on every failed login, against timing/enumeration."""
    low = settings.LOGIN_FAILURE_DELAY_MIN_MS
    high = max(low, settings.LOGIN_FAILURE_DELAY_MAX_MS)
    if high > 0:
        await asyncio.sleep(random.uniform(low, high) / 1000)


def _issue_session(response: Response, admin: Admin) -> None:
    subject = TokenSubject(
        user_id=admin.id,
        username=admin.username,
        role=AdminRole(admin.role).value,
    )
    set_session_cookies(
        response,
        token_service.issue_access(subject),
        token_service.issue_refresh(subject),
    )


@router.post("/login", response_model=LoginResponse)
async def login(
        login_in: LoginRequest,
        response: Response,
        db: AsyncSession = Depends(get_db),
        limiter: RateLimiter = Depends(deps.get_login_limiter),
        ip: str = Depends(deps.client_ip),
):
    username = login_in.username.lower()
    key = login_key(ip, username)
    now = datetime.now(timezone.utc)

    result = await db.execute(
        select(Admin).where(Admin.username == username, Admin.is_active.is_(True))
    )
    admin = result.scalars().first()

    if admin is not None:
        locked_until = _as_utc(admin.locked_until)
        if locked_until is not None and locked_until > now:
            minutes = math.ceil((locked_until - now).total_seconds() / 60)
            logger.warning("Login refused for locked account %s from %s", username, ip)
            raise LockedError(
                "account_locked",
                params={"minutes": minutes},
                extra={"lockedUntil": locked_until.isoformat()},
            )

    rate = limiter.check(key)
    if not rate.allowed:
        logger.warning("Login rate limit hit for %s", key)
        raise RateLimitError(
            "too_many_attempts",
            retry_after=rate.retry_after,
            params={"minutes": math.ceil(rate.retry_after / 60)},
            extra={"retryAfter": rate.retry_after},
        )

    if admin is None:
        limiter.record_failure(key)
        logger.warning("Failed login for unknown user %s from %s", username, ip)
        await _failure_delay()
        raise AuthenticationError("invalid_credentials")

    if not hashing.verify_password(login_in.password, admin.password_hash):
        limiter.record_failure(key)

        admin.login_attempts = (admin.login_attempts or 0) + 1
        if admin.login_attempts >= settings.LOGIN_MAX_ATTEMPTS:
            admin.locked_until = now + timedelta(minutes=settings.ACCOUNT_LOCKOUT_MINUTES)
            logger.warning(
                "Account %s locked until %s after %d failed logins",
                username, admin.locked_until.isoformat(), admin.login_attempts,
            )
        else:
            logger.warning("Failed login for %s from %s (%d)", username, ip, admin.login_attempts)
        await db.commit()

        await _failure_delay()
        raise AuthenticationError(
            "invalid_credentials",
            extra={"remainingAttempts": max(0, rate.remaining_attempts - 1)},
        )

    limiter.clear(key)
    admin.last_login_at = now
    admin.login_attempts = 0
    admin.locked_until = None
    await db.commit()

    _issue_session(response, admin)
    logger.info("Admin %s logged in from %s", username, ip)
    return LoginResponse(user=AdminResponse.model_validate(admin))


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, lang: str = Depends(deps.language)):
    clear_session_cookies(response)
    return MessageResponse(message=translate("logged_out", lang))


@router.get("/me", response_model=LoginResponse)
async def read_me(
        db: AsyncSession = Depends(get_db),
        claims: AccessClaims = Depends(deps.get_current_admin),
):
    admin = await db.get(Admin, claims.user_id)
    if admin is None:
        raise NotFoundError("user_not_found")
    return LoginResponse(user=AdminResponse.model_validate(admin))


@router.post("/refresh", response_model=MessageResponse)
async def refresh_session(
        request: Request,
        response: Response,
        db: AsyncSession = Depends(get_db),
        lang: str = Depends(deps.language),
):
    """
    Rotate the access/refresh pair.

    Every failure clears both cookies and answers 401.
    """
    token = request.cookies.get(REFRESH_COOKIE)
    if not token:
        raise AuthenticationError("refresh_missing", clear_session=True)

    claims = token_service.verify_refresh(token)
    if claims is None:
        raise AuthenticationError("refresh_invalid", clear_session=True)

    try:
        result = await db.execute(
            select(Admin).where(Admin.id == claims.user_id, Admin.is_active.is_(True))
        )
        admin = result.scalars().first()
    except Exception:
        logger.exception("Session refresh failed for %s", claims.username)
        raise AuthenticationError("refresh_invalid", clear_session=True)

    if admin is None:
        raise AuthenticationError("account_unavailable", clear_session=True)

    _issue_session(response, admin)
    return MessageResponse(message=translate("session_refreshed", lang))
