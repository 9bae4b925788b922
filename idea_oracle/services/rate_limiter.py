"""
Per-identity request rate limiter.

Counts scoring requests per caller identity (usually the client IP) within a
sliding window. State is an in-process LRU map with a per-entry expiry:

- an absent or expired entry counts as zero
- a counted request refreshes the entry's expiry
- at capacity, expired entries go first, then the least recently used one

Evicting an entry forgets its count, so under memory pressure the limiter can
only become more permissive, never reject a caller it should have allowed.
Restarting the process clears every counter.
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from idea_oracle.config import (
    RATE_LIMIT_MAX_IDENTITIES,
    RATE_LIMIT_REQUESTS,
    RATE_LIMIT_WINDOW_SECONDS,
)


@dataclass(frozen=True)
class RateDecision:
    """Outcome of a rate-limit check."""
    allowed: bool
    remaining: int


@dataclass
class RateWindowEntry:
    """Request count for one identity and the moment it lapses."""
    count: int
    expires_at: float


class RateLimiter:
    """
    Bounded, time-windowed request counter keyed by identity.

    Usage:
        limiter = RateLimiter(max_requests=5, window_seconds=3600)
        decision = limiter.check("203.0.113.7")
        if not decision.allowed:
            ...

    One instance is shared by every request in the process; create it once
    and pass it to the ScoringEngine.
    """

    def __init__(
        self,
        max_requests: int = None,
        window_seconds: float = None,
        max_identities: int = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize RateLimiter.

        Args:
            max_requests: Requests allowed per window. Defaults to config.RATE_LIMIT_REQUESTS.
            window_seconds: Window length. Defaults to config.RATE_LIMIT_WINDOW_SECONDS.
            max_identities: Tracked identity cap. Defaults to config.RATE_LIMIT_MAX_IDENTITIES.
            clock: Monotonic time source (injectable for tests).
        """
        self.max_requests = max_requests if max_requests is not None else RATE_LIMIT_REQUESTS
        self.window_seconds = window_seconds if window_seconds is not None else RATE_LIMIT_WINDOW_SECONDS
        self.max_identities = max_identities if max_identities is not None else RATE_LIMIT_MAX_IDENTITIES

        if self.max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if self.max_identities < 1:
            raise ValueError("max_identities must be at least 1")

        self._clock = clock
        self._entries: "OrderedDict[str, RateWindowEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def _live_entry(self, identity: str, now: float) -> Optional[RateWindowEntry]:
        """Entry for identity if present and unexpired; drops it if expired."""
        entry = self._entries.get(identity)
        if entry is None:
            return None
        if entry.expires_at <= now:
            del self._entries[identity]
            return None
        self._entries.move_to_end(identity)
        return entry

    def _make_room(self, now: float) -> None:
        """Evict until a new identity fits: expired entries first, then LRU."""
        if len(self._entries) < self.max_identities:
            return
        for key in [k for k, e in self._entries.items() if e.expires_at <= now]:
            del self._entries[key]
        while len(self._entries) >= self.max_identities:
            self._entries.popitem(last=False)

    def check(self, identity: str) -> RateDecision:
        """
        Count a request for identity if it is still within its allowance.

        A request at or past the threshold is rejected and not counted.

        Args:
            identity: Caller key (e.g. client IP).

        Returns:
            RateDecision; remaining is the number of requests still allowed
            in the current window after this one.
        """
        with self._lock:
            now = self._clock()
            entry = self._live_entry(identity, now)
            count = entry.count if entry else 0

            if count >= self.max_requests:
                return RateDecision(allowed=False, remaining=0)

            if entry is None:
                self._make_room(now)
                entry = RateWindowEntry(count=0, expires_at=now)
                self._entries[identity] = entry

            entry.count = count + 1
            entry.expires_at = now + self.window_seconds
            return RateDecision(allowed=True, remaining=self.max_requests - entry.count)

    def reset(self, identity: Optional[str] = None) -> None:
        """Forget one identity, or every identity when none is given."""
        with self._lock:
            if identity is None:
                self._entries.clear()
            else:
                self._entries.pop(identity, None)

    @property
    def tracked_identities(self) -> list[str]:
        """Tracked identities, least recently used first."""
        with self._lock:
            return list(self._entries.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"<RateLimiter max_requests={self.max_requests} "
            f"window_seconds={self.window_seconds} max_identities={self.max_identities}>"
        )
