# backend/app/core/exceptions.py
"""
Application error taxonomy.

Every error carries an HTTP status, a message key from core/messages.py
and optional extra JSON fields / headers. The handlers registered in
main.py turn them into responses; nothing here knows about FastAPI.
"""
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base exception for all errors surfaced to API clients."""

    status_code = 500
    message_key = "internal_error"

    def __init__(
        self,
        message_key: Optional[str] = None,
        *,
        extra: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ):
        if message_key is not None:
            self.message_key = message_key
        self.extra = extra or {}
        self.headers = headers or {}
        self.params = params or {}
        super().__init__(self.message_key)


class ValidationError(AppError):
    """Malformed or out-of-range input."""
    status_code = 400
    message_key = "invalid_input"


class AuthenticationError(AppError):
    """Missing, invalid or expired session."""
    status_code = 401
    message_key = "not_authenticated"

    def __init__(self, message_key: Optional[str] = None, *, clear_session: bool = False, **kwargs):
        super().__init__(message_key, **kwargs)
        self.clear_session = clear_session


class AuthorizationError(AppError):
    """Valid session, insufficient role."""
    status_code = 403
    message_key = "insufficient_privileges"


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Duplicate vote, duplicate username, duplicate participant."""
    status_code = 409


class LockedError(AppError):
    """Account is temporarily locked after repeated failures."""
    status_code = 423
    message_key = "account_locked"


class RateLimitError(AppError):
    """Too many requests; carries the Retry-After value in seconds."""
    status_code = 429

    def __init__(self, message_key: Optional[str] = None, *, retry_after: Optional[int] = None, **kwargs):
        super().__init__(message_key, **kwargs)
        self.retry_after = retry_after
        if retry_after is not None:
            self.headers.setdefault("Retry-After", str(retry_after))


class InternalError(AppError):
    status_code = 500
    message_key = "internal_error"
