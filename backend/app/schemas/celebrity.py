# backend/app/schemas/celebrity.py
import uuid
from datetime import datetime
from typing import Annotated, List, Literal, Optional
from urllib.parse import urlparse

from pydantic import AfterValidator, Field, field_validator

from backend.app.schemas.common import CamelModel

Platform = Literal["instagram", "facebook", "twitter", "youtube", "tiktok"]


def _is_absolute_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme and parsed.netloc)


def _check_image(value: str) -> str:
    if value.startswith("/") or _is_absolute_url(value):
        return value
    raise ValueError("invalid image url")


# Either a site-local path ("/uploads/x.jpg") or an absolute URL
ImageRef = Annotated[str, Field(max_length=500), AfterValidator(_check_image)]


class SocialLink(CamelModel):
    platform: Platform
    url: str = Field(..., max_length=500)

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str) -> str:
        if not _is_absolute_url(v):
            raise ValueError("invalid url")
        return v


class CelebrityCreate(CamelModel):
    name: str = Field(..., min_length=2, max_length=255)
    image: ImageRef
    description: str = Field(..., min_length=10, max_length=1000)
    category: str = Field(..., min_length=2, max_length=100)
    social_links: List[SocialLink] = []
    is_active: bool = True


class CelebrityUpdate(CamelModel):
    """Partial update; only fields that are sent are written."""
    id: uuid.UUID
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    image: Optional[ImageRef] = None
    description: Optional[str] = Field(None, min_length=10, max_length=1000)
    category: Optional[str] = Field(None, min_length=2, max_length=100)
    social_links: Optional[List[SocialLink]] = None
    is_active: Optional[bool] = None


class CelebrityResponse(CamelModel):
    id: uuid.UUID
    name: str
    image: str
    description: str
    category: str
    social_links: List[SocialLink] = []
    is_active: bool
    created_at: datetime
    updated_at: datetime
