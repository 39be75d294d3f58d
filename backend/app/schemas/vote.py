# backend/app/schemas/vote.py
import uuid
from typing import List, Optional

from pydantic import Field

from backend.app.schemas.celebrity import SocialLink
from backend.app.schemas.common import CamelModel

MIN_FINGERPRINT_LENGTH = 32


class VoteCreate(CamelModel):
    celebrity_id: uuid.UUID
    fingerprint: str = Field(..., min_length=MIN_FINGERPRINT_LENGTH, max_length=512)
    screen_resolution: Optional[str] = Field(None, max_length=20)
    timezone: Optional[str] = Field(None, max_length=50)
    language: Optional[str] = Field(None, max_length=10)


class VoteStatusRequest(CamelModel):
    fingerprint: str = Field(..., min_length=1, max_length=512)


class VoteAccepted(CamelModel):
    celebrity_id: uuid.UUID
    new_vote_count: int


class VoteStatus(CamelModel):
    has_voted: bool
    voted_for: Optional[uuid.UUID] = None


class CelebrityTally(CamelModel):
    id: uuid.UUID
    name: str
    image: str
    description: str
    category: str
    social_links: List[SocialLink] = []
    vote_count: int


class VoteTallies(CamelModel):
    celebrities: List[CelebrityTally]
    total_votes: int
