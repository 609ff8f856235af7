"""In-memory fixed-window rate limiting.

Each key owns one entry counting requests inside a window that opens on the
key's first request and lasts ``window_seconds``. The first request of a window
is counted as 1, so exactly ``limit`` requests are admitted per window.

State is process-local: it does not survive restarts and is not shared between
instances. Behind a load balancer with N instances the effective limit per key
is ``limit * N``.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass

from app.core.logging_safety import safe_rate_limit_key
from app.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CLEANUP_INTERVAL_SECONDS = 5 * 60


@dataclass(frozen=True, slots=True)
class RateLimitPolicy:
    limit: int = 100
    window_seconds: int = 60

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise ConfigurationError(f"Rate limit must be positive, got {self.limit}")
        if self.window_seconds <= 0:
            raise ConfigurationError(f"Rate limit window must be positive, got {self.window_seconds}")


@dataclass(slots=True)
class RateLimitEntry:
    key: str
    count: int
    window_reset_at: float


@dataclass(frozen=True, slots=True)
class RateLimitDenial:
    key: str
    limit: int
    window_seconds: int
    retry_after_seconds: int
    reset_at: float


class RateLimiter:
    """Owns the per-key counters; one instance is shared by all request handlers."""

    def __init__(
        self,
        default_policy: RateLimitPolicy | None = None,
        *,
        cleanup_interval_seconds: float = DEFAULT_CLEANUP_INTERVAL_SECONDS,
    ) -> None:
        if cleanup_interval_seconds <= 0:
            raise ConfigurationError("Rate limit cleanup interval must be positive")
        self._default_policy = default_policy or RateLimitPolicy()
        self._cleanup_interval = cleanup_interval_seconds
        self._entries: dict[str, RateLimitEntry] = {}
        self._last_sweep_at: float | None = None
        self._lock = threading.Lock()

    @property
    def default_policy(self) -> RateLimitPolicy:
        return self._default_policy

    @property
    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_entry(self, key: str) -> RateLimitEntry | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            return RateLimitEntry(key=entry.key, count=entry.count, window_reset_at=entry.window_reset_at)

    def check(self, key: str, *, now: float, policy: RateLimitPolicy | None = None) -> RateLimitDenial | None:
        """Count one request for ``key`` at ``now`` and return a denial if it exceeds the policy."""
        policy = policy or self._default_policy
        with self._lock:
            self._sweep_expired(now)

            entry = self._entries.get(key)
            if entry is None or now > entry.window_reset_at:
                self._entries[key] = RateLimitEntry(
                    key=key,
                    count=1,
                    window_reset_at=now + policy.window_seconds,
                )
                return None

            entry.count += 1
            if entry.count <= policy.limit:
                return None

            denial = RateLimitDenial(
                key=key,
                limit=policy.limit,
                window_seconds=policy.window_seconds,
                retry_after_seconds=math.ceil(entry.window_reset_at - now),
                reset_at=entry.window_reset_at,
            )
            count = entry.count

        logger.warning(
            "rate_limit.exceeded key=%s count=%s limit=%s window_seconds=%s retry_after=%s",
            safe_rate_limit_key(key),
            count,
            policy.limit,
            policy.window_seconds,
            denial.retry_after_seconds,
        )
        return denial

    def _sweep_expired(self, now: float) -> None:
        if self._last_sweep_at is None:
            self._last_sweep_at = now
            return
        if now - self._last_sweep_at < self._cleanup_interval:
            return

        self._last_sweep_at = now
        expired = [key for key, entry in self._entries.items() if entry.window_reset_at < now]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.info("rate_limit.sweep removed=%s remaining=%s", len(expired), len(self._entries))


__all__ = [
    "DEFAULT_CLEANUP_INTERVAL_SECONDS",
    "RateLimitDenial",
    "RateLimitEntry",
    "RateLimitPolicy",
    "RateLimiter",
]
