# backend/app/schemas/participant.py
import re
import uuid
from datetime import datetime

from pydantic import Field, field_validator

from backend.app.schemas.common import CamelModel

TAG_RE = re.compile(r"<[^>]*>")


def sanitize_text(value: str) -> str:
    """Trim and drop anything that looks like an HTML tag."""
    return TAG_RE.sub("", value.strip())


class ParticipantCreate(CamelModel):
    name: str = Field(..., min_length=3, max_length=255)
    phone_number: str = Field(..., min_length=10, max_length=20, pattern=r"^[\d\s\-\+\(\)]+$")
    residence: str = Field(..., min_length=2, max_length=255)
    health_condition: str = Field(..., min_length=2, max_length=255)
    sport_level: str = Field(..., min_length=2, max_length=100)

    @field_validator("name", "residence", "health_condition", "sport_level", "phone_number", mode="before")
    @classmethod
    def strip_markup(cls, v):
        if isinstance(v, str):
            return sanitize_text(v)
        return v


class RegistrationResponse(CamelModel):
    id: uuid.UUID
    name: str


class ParticipantResponse(CamelModel):
    id: uuid.UUID
    name: str
    phone_number: str
    residence: str
    health_condition: str
    sport_level: str
    created_at: datetime
