# backend/app/security/rate_limit.py
"""
In-memory rate limiting for logins and public endpoints.

One RateLimiter class covers both uses:
- login throttling keyed by "ip:username", counting failures only, with
  exponential backoff once the threshold is reached
- fixed-window request limits keyed by client IP (voting, registration),
  where every request counts

State is process-local. Running several server instances multiplies the
effective limits; a shared counter store behind the same interface is
required before scaling out. Losing state on restart only ever lets a
few more attempts through.
"""
import asyncio
import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

logger = logging.getLogger(__name__)


@dataclass
class RateLimitEntry:
    count: int
    reset_at: float


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining_attempts: int
    retry_after: Optional[int] = None


class RateLimiter:
    """
    Sliding-reset counter per key.

    Args:
        max_attempts: attempts allowed inside one window
        window_seconds: base window length
        backoff_multiplier: when set, each failure at or past the threshold
            pushes the reset time to now + window * multiplier ** (count - max)
        max_lockout_seconds: ceiling for a single backoff extension
        clock: seconds since the epoch, injectable for tests
    """

    def __init__(
        self,
        max_attempts: int,
        window_seconds: float,
        backoff_multiplier: Optional[int] = None,
        max_lockout_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.backoff_multiplier = backoff_multiplier
        self.max_lockout_seconds = max_lockout_seconds
        self.clock = clock
        self._entries: Dict[str, RateLimitEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _live_entry(self, key: str, now: float) -> Optional[RateLimitEntry]:
        entry = self._entries.get(key)
        if entry is None or now > entry.reset_at:
            return None
        return entry

    def check(self, key: str) -> RateLimitResult:
        """Report whether another attempt is allowed, without counting it."""
        now = self.clock()
        entry = self._live_entry(key, now)

        if entry is None:
            return RateLimitResult(allowed=True, remaining_attempts=self.max_attempts)

        if entry.count < self.max_attempts:
            return RateLimitResult(
                allowed=True,
                remaining_attempts=self.max_attempts - entry.count,
            )

        return RateLimitResult(
            allowed=False,
            remaining_attempts=0,
            retry_after=max(1, math.ceil(entry.reset_at - now)),
        )

    def record_failure(self, key: str) -> None:
        now = self.clock()
        entry = self._live_entry(key, now)

        if entry is None:
            self._entries[key] = RateLimitEntry(count=1, reset_at=now + self.window_seconds)
            return

        entry.count += 1
        if self.backoff_multiplier and entry.count >= self.max_attempts:
            extension = self.window_seconds * self.backoff_multiplier ** (entry.count - self.max_attempts)
            if self.max_lockout_seconds is not None:
                extension = min(extension, self.max_lockout_seconds)
            # Never shortens a lockout already in place
            entry.reset_at = max(entry.reset_at, now + extension)

    def hit(self, key: str) -> RateLimitResult:
        """Check and, when allowed, count this request in one step."""
        result = self.check(key)
        if not result.allowed:
            return result
        self.record_failure(key)
        return RateLimitResult(allowed=True, remaining_attempts=result.remaining_attempts - 1)

    def clear(self, key: str) -> None:
        self._entries.pop(key, None)

    def sweep(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        now = self.clock()
        expired = [key for key, entry in self._entries.items() if now > entry.reset_at]
        for key in expired:
            del self._entries[key]
        return len(expired)


def login_key(ip: str, username: str) -> str:
    return f"{ip}:{username.lower()}"


async def run_sweeper(limiters: Iterable[RateLimiter], interval: float) -> None:
    """Periodically sweep the given limiters until cancelled."""
    limiters = list(limiters)
    while True:
        await asyncio.sleep(interval)
        removed = sum(limiter.sweep() for limiter in limiters)
        if removed:
            logger.debug("Rate limiter sweep removed %d expired entries", removed)
