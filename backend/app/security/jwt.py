# backend/app/security/jwt.py
"""
Issue and verify admin session tokens (HS256 via python-jose).

Each token carries sub/username/role, its type, iat, exp and a random
jti. The jti is a replay marker only; nothing checks it yet.
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from jose import jwt, JWTError
from pydantic import ValidationError

from backend.app.core.config import settings
from backend.app.schemas.token import (
    AccessClaims,
    RefreshClaims,
    TokenSubject,
    session_claims_adapter,
)

logger = logging.getLogger(__name__)


class TokenService:
    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    def _issue(self, subject: TokenSubject, token_type: str, ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": str(subject.user_id),
            "username": subject.username,
            "role": subject.role,
            "type": token_type,
            "iat": now,
            "exp": now + ttl,
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def issue_access(self, subject: TokenSubject) -> str:
        return self._issue(subject, "access", self.access_ttl)

    def issue_refresh(self, subject: TokenSubject) -> str:
        return self._issue(subject, "refresh", self.refresh_ttl)

    def verify(self, token: str) -> Optional[Union[AccessClaims, RefreshClaims]]:
        """
        Decode and validate a token.

        Bad signature, expiry, a malformed body or an unknown type all
        give None; the caller cannot tell them apart.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            return session_claims_adapter.validate_python(payload)
        except (JWTError, ValidationError) as exc:
            logger.debug("Token rejected: %s", exc.__class__.__name__)
            return None

    def verify_access(self, token: str) -> Optional[AccessClaims]:
        claims = self.verify(token)
        return claims if isinstance(claims, AccessClaims) else None

    def verify_refresh(self, token: str) -> Optional[RefreshClaims]:
        claims = self.verify(token)
        return claims if isinstance(claims, RefreshClaims) else None


token_service = TokenService(
    secret_key=settings.SECRET_KEY,
    algorithm=settings.ALGORITHM,
    access_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    refresh_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
)
