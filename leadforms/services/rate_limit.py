"""Fixed-window throttling for public lead submissions.

Redis keeps the counters when it is reachable so that every API worker shares
one budget per client; otherwise each process counts in memory.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from threading import Lock
from time import monotonic
from typing import Protocol

import redis

from leadforms.core.config import settings

_LOG = logging.getLogger("leadforms.rate_limit")

LEAD_KEY_PREFIX = "leads:create:ip"


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    used: int
    retry_after_seconds: int

    @property
    def remaining(self) -> int:
        return max(self.limit - self.used, 0)

    @property
    def headers(self) -> dict[str, str]:
        return {"RateLimit-Limit": str(self.limit), "RateLimit-Remaining": str(self.remaining)}


class RateLimiter(Protocol):
    def hit(self, key: str, *, limit: int, window_seconds: int) -> RateLimitResult:
        ...


class InMemoryRateLimiter:
    def __init__(self):
        self._windows: dict[str, tuple[int, float]] = {}
        self._lock = Lock()

    def hit(self, key: str, *, limit: int, window_seconds: int) -> RateLimitResult:
        window = max(int(window_seconds), 1)
        now = monotonic()
        with self._lock:
            used, window_end = self._windows.get(key, (0, 0.0))
            if window_end <= now:
                used, window_end = 0, now + window
            used += 1
            self._windows[key] = (used, window_end)
        retry_after = max(int(round(window_end - now)), 0)
        return RateLimitResult(allowed=used <= limit, limit=limit, used=used, retry_after_seconds=retry_after)


class RedisRateLimiter:
    def __init__(self, client: redis.Redis):
        self.client = client

    def hit(self, key: str, *, limit: int, window_seconds: int) -> RateLimitResult:
        window = max(int(window_seconds), 1)
        pipe = self.client.pipeline()
        pipe.incr(key)
        pipe.ttl(key)
        used, ttl = pipe.execute()
        used, ttl = int(used), int(ttl)
        # A counter without expiry would never reset.
        if ttl < 0:
            self.client.expire(key, window)
            ttl = window
        return RateLimitResult(allowed=used <= limit, limit=limit, used=used, retry_after_seconds=ttl)


_cached_limiter: RateLimiter | None = None


def _build_limiter() -> RateLimiter:
    try:
        client = redis.Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_timeout=0.4,
            socket_connect_timeout=0.4,
        )
        client.ping()
    except Exception as exc:
        _LOG.warning("Redis unavailable for lead throttling, counting in memory: %s", exc)
        return InMemoryRateLimiter()
    return RedisRateLimiter(client)


def get_rate_limiter() -> RateLimiter:
    global _cached_limiter
    if _cached_limiter is None:
        _cached_limiter = _build_limiter()
    return _cached_limiter


def reset_rate_limiter_for_tests() -> None:
    global _cached_limiter
    _cached_limiter = None


def lead_rate_limit_key(client_ip: str | None) -> str:
    raw = str(client_ip or "").strip() or "unknown"
    return f"{LEAD_KEY_PREFIX}:{hashlib.sha256(raw.encode('utf-8')).hexdigest()[:20]}"


def hit_lead_submission(limiter: RateLimiter, client_ip: str | None) -> RateLimitResult:
    """Count one lead submission from ``client_ip`` against the configured budget."""
    return limiter.hit(
        lead_rate_limit_key(client_ip),
        limit=int(max(settings.LEAD_RATE_LIMIT, 1)),
        window_seconds=int(max(settings.LEAD_RATE_LIMIT_WINDOW_SECONDS, 1)),
    )
