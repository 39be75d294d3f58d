# backend/app/security/session.py
"""
Cookie transport for admin sessions.

access_token  - path "/", 15 minutes
refresh_token - only sent to the refresh endpoint, 7 days
Both are httpOnly, SameSite=strict and Secure in production.
"""
from starlette.responses import Response

from backend.app.core.config import settings

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"


def _set(response: Response, key: str, value: str, path: str, max_age: int) -> None:
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age,
        path=path,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )


def set_session_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    _set(
        response,
        ACCESS_COOKIE,
        access_token,
        path="/",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    _set(
        response,
        REFRESH_COOKIE,
        refresh_token,
        path=settings.REFRESH_COOKIE_PATH,
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )


def clear_session_cookies(response: Response) -> None:
    _set(response, ACCESS_COOKIE, "", path="/", max_age=0)
    _set(response, REFRESH_COOKIE, "", path=settings.REFRESH_COOKIE_PATH, max_age=0)
