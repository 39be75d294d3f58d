# backend/app/schemas/auth.py
import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from backend.app.schemas.common import CamelModel

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    password: str = Field(..., min_length=8, max_length=128)


class AdminResponse(CamelModel):
    """Public view of an admin account (never includes the hash)."""
    id: uuid.UUID
    username: str
    display_name: str
    role: str
    last_login_at: Optional[datetime] = None

    @field_validator("role", mode="before")
    @classmethod
    def role_value(cls, v):
        # AdminRole member from the ORM, plain string from anywhere else
        return getattr(v, "value", v)


class LoginResponse(CamelModel):
    user: AdminResponse


class SeedAdminRequest(CamelModel):
    username: str = Field(..., min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    password: str = Field(..., min_length=8, max_length=128)
    display_name: str = Field(..., min_length=1, max_length=100)


class SeedAdminResponse(CamelModel):
    message: str
    admin: AdminResponse
