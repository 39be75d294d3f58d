# backend/app/schemas/token.py
"""
Signed session claims.

Access and refresh tokens share one wire shape but are separate types,
discriminated by the "type" claim. Endpoints ask for the variant they
need, so an access token can never satisfy a refresh check or the
other way round.
"""
import uuid
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class TokenSubject(BaseModel):
    """What the server puts into a token."""
    user_id: uuid.UUID
    username: str
    role: str


class TokenPayload(BaseModel):
    sub: str
    username: str
    role: str
    iat: int
    exp: int
    jti: str

    @property
    def user_id(self) -> uuid.UUID:
        return uuid.UUID(self.sub)


class AccessClaims(TokenPayload):
    type: Literal["access"]


class RefreshClaims(TokenPayload):
    type: Literal["refresh"]


SessionClaims = Annotated[Union[AccessClaims, RefreshClaims], Field(discriminator="type")]

session_claims_adapter = TypeAdapter(SessionClaims)
