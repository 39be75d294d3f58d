# backend/app/api/deps.py
from typing import Callable, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.config import settings
from backend.app.core.exceptions import AuthenticationError, AuthorizationError
from backend.app.core.messages import pick_language
from backend.app.db.base import get_db
from backend.app.models.admin import AdminRole
from backend.app.schemas.token import AccessClaims
from backend.app.security.fingerprint import get_client_ip
from backend.app.security.jwt import token_service
from backend.app.security.rate_limit import RateLimiter
from backend.app.security.session import ACCESS_COOKIE
from backend.app.services.voting import VoteAdmissionService


def client_ip(request: Request) -> str:
    return get_client_ip(request)


def language(request: Request) -> str:
    return pick_language(request.headers.get("accept-language"))


def get_login_limiter(request: Request) -> RateLimiter:
    return request.app.state.login_limiter


def get_vote_limiter(request: Request) -> RateLimiter:
    return request.app.state.vote_limiter


def get_register_limiter(request: Request) -> RateLimiter:
    return request.app.state.register_limiter


async def get_vote_service(
        db: AsyncSession = Depends(get_db),
        limiter: RateLimiter = Depends(get_vote_limiter),
) -> VoteAdmissionService:
    return VoteAdmissionService(db, limiter, settings.VOTE_CONTEST_SALT)


async def get_current_admin(request: Request) -> AccessClaims:
    """
    Authenticate the request from the access_token cookie.

    No cookie -> 401 not authenticated.
    Bad signature, expired, malformed or a refresh token -> 401 session expired.
    """
    token: Optional[str] = request.cookies.get(ACCESS_COOKIE)
    if not token:
        raise AuthenticationError("not_authenticated")

    claims = token_service.verify_access(token)
    if claims is None:
        raise AuthenticationError("session_expired")

    return claims


def require_roles(*roles: AdminRole) -> Callable:
    """
    Dependency factory: authenticated AND one of the given roles.

    Usage:
        @router.delete("/")
        async def delete(current: AccessClaims = Depends(require_roles(AdminRole.SUPER_ADMIN))):
    """
    allowed = {role.value for role in roles}

    async def checker(claims: AccessClaims = Depends(get_current_admin)) -> AccessClaims:
        if claims.role not in allowed:
            raise AuthorizationError("insufficient_privileges")
        return claims

    return checker
