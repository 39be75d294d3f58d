# backend/app/services/voting.py
"""
Vote admission.

submit() runs, in order:
    rate limit (per IP) -> hash fingerprint -> target exists ->
    duplicate lookup -> insert -> recount
and ends in exactly one of: accepted, RateLimitError (429),
NotFoundError (404) or ConflictError (409). Shape validation happens
before this service is called (VoteCreate).

The lookup before insert answers the common duplicate case with the
id that was voted for. Two concurrent requests with the same hash can
both pass it; the UNIQUE constraint on votes.device_fingerprint then
rejects the second insert, and that IntegrityError is reported as the
same 409.
"""
import logging
import uuid
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.exceptions import ConflictError, NotFoundError, RateLimitError
from backend.app.models.celebrity import Celebrity
from backend.app.models.vote import Vote
from backend.app.schemas.vote import (
    CelebrityTally,
    VoteAccepted,
    VoteCreate,
    VoteStatus,
    VoteTallies,
)
from backend.app.security.fingerprint import hash_device_fingerprint
from backend.app.security.rate_limit import RateLimiter

logger = logging.getLogger(__name__)


class VoteAdmissionService:
    def __init__(self, db: AsyncSession, limiter: RateLimiter, contest_salt: str):
        self.db = db
        self.limiter = limiter
        self.contest_salt = contest_salt

    def _hash(self, fingerprint: str, ip: str) -> str:
        return hash_device_fingerprint(fingerprint, ip, self.contest_salt)

    async def _find_vote(self, fingerprint_hash: str) -> Optional[Vote]:
        result = await self.db.execute(
            select(Vote).where(Vote.device_fingerprint == fingerprint_hash).limit(1)
        )
        return result.scalars().first()

    async def _count_for(self, celebrity_id: uuid.UUID) -> int:
        result = await self.db.execute(
            select(func.count(Vote.id)).where(Vote.celebrity_id == celebrity_id)
        )
        return result.scalar_one()

    @staticmethod
    def _duplicate(existing: Vote) -> ConflictError:
        return ConflictError(
            "already_voted",
            extra={"alreadyVoted": True, "votedFor": str(existing.celebrity_id)},
        )

    async def submit(self, vote: VoteCreate, ip: str, user_agent: Optional[str] = None) -> VoteAccepted:
        limit = self.limiter.hit(ip)
        if not limit.allowed:
            logger.info("Vote rate limit hit for %s", ip)
            raise RateLimitError(
                "vote_rate_limited",
                retry_after=limit.retry_after,
                extra={"retryAfter": limit.retry_after},
            )

        fingerprint_hash = self._hash(vote.fingerprint, ip)

        celebrity = await self.db.get(Celebrity, vote.celebrity_id)
        if celebrity is None:
            raise NotFoundError("celebrity_not_found")

        existing = await self._find_vote(fingerprint_hash)
        if existing is not None:
            logger.info("Duplicate vote rejected (already voted for %s)", existing.celebrity_id)
            raise self._duplicate(existing)

        self.db.add(
            Vote(
                celebrity_id=vote.celebrity_id,
                device_fingerprint=fingerprint_hash,
                ip_address=ip[:45],
                user_agent=user_agent or "",
                screen_resolution=vote.screen_resolution,
                timezone=vote.timezone,
                language=vote.language,
            )
        )
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            existing = await self._find_vote(fingerprint_hash)
            if existing is None:
                # Not a uniqueness clash: the celebrity went away mid-request
                raise NotFoundError("celebrity_not_found")
            logger.info("Concurrent duplicate vote rejected by unique constraint")
            raise self._duplicate(existing)

        new_count = await self._count_for(vote.celebrity_id)
        logger.info("Vote accepted for %s (now %d)", vote.celebrity_id, new_count)
        return VoteAccepted(celebrity_id=vote.celebrity_id, new_vote_count=new_count)

    async def check_status(self, fingerprint: str, ip: str) -> VoteStatus:
        """Read-only: no rate limit, no insert."""
        existing = await self._find_vote(self._hash(fingerprint, ip))
        if existing is None:
            return VoteStatus(has_voted=False, voted_for=None)
        return VoteStatus(has_voted=True, voted_for=existing.celebrity_id)

    async def list_tallies(self) -> VoteTallies:
        """Active entrants with their vote counts, most votes first."""
        vote_count = func.count(Vote.id).label("vote_count")
        result = await self.db.execute(
            select(Celebrity, vote_count)
            .outerjoin(Vote, Vote.celebrity_id == Celebrity.id)
            .where(Celebrity.is_active.is_(True))
            .group_by(Celebrity.id)
            .order_by(vote_count.desc(), Celebrity.created_at)
        )

        tallies = [
            CelebrityTally(
                id=celebrity.id,
                name=celebrity.name,
                image=celebrity.image,
                description=celebrity.description,
                category=celebrity.category,
                social_links=celebrity.social_links or [],
                vote_count=count,
            )
            for celebrity, count in result.all()
        ]
        return VoteTallies(
            celebrities=tallies,
            total_votes=sum(t.vote_count for t in tallies),
        )
