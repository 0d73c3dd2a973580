"""
Rate Limiting Domain Services

``RateLimiterRegistry`` holds the named bucket templates; ``RateLimiter`` derives
one token bucket per ``(template, identity)`` lazily and answers ``try_acquire``
without ever blocking. Calls for the same bucket are serialized with a
per-bucket ``asyncio.Lock``; different buckets never contend.
"""

from __future__ import annotations

import asyncio
import time
from typing import Callable, Dict, Mapping, Optional

import structlog

from src.core.exceptions import RateLimitExceededError

from .entities import TokenBucket
from .value_objects import RateLimitKey, RateLimitQuota

logger = structlog.get_logger(__name__)

LOGIN = "login"
SENSITIVE_OPERATION = "sensitive_operation"
GLOBAL = "global"


class RateLimiterRegistry:
    """Named bucket templates, e.g. ``{"login": RateLimitQuota(5, 60)}``."""

    def __init__(self, templates: Mapping[str, RateLimitQuota]):
        self._templates: Dict[str, RateLimitQuota] = dict(templates)

    @classmethod
    def from_rate_strings(cls, templates: Mapping[str, str]) -> RateLimiterRegistry:
        return cls({name: RateLimitQuota.from_rate_string(rate) for name, rate in templates.items()})

    def get(self, template: str) -> RateLimitQuota:
        try:
            return self._templates[template]
        except KeyError:
            raise KeyError(f"Unknown rate limiter template: {template}") from None

    def register(self, template: str, quota: RateLimitQuota) -> None:
        self._templates[template] = quota

    def __contains__(self, template: str) -> bool:
        return template in self._templates


class RateLimiter:
    """
    In-process token bucket rate limiter.

    Buckets unused for ``idle_ttl_seconds`` are evicted during later acquires.
    A disabled limiter permits every call.
    """

    def __init__(
        self,
        registry: RateLimiterRegistry,
        enabled: bool = True,
        idle_ttl_seconds: float = 600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._registry = registry
        self._enabled = enabled
        self._idle_ttl = idle_ttl_seconds
        self._clock = clock
        self._buckets: Dict[str, TokenBucket] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._last_sweep = clock()

    @property
    def registry(self) -> RateLimiterRegistry:
        return self._registry

    async def try_acquire(self, template: str, identity: str) -> bool:
        """Take one token from the bucket of ``(template, identity)``.

        Returns:
            ``True`` if the call may proceed, ``False`` if the bucket is empty.
        """
        if not self._enabled:
            return True

        key = RateLimitKey(template=template, identity=identity)
        quota = self._registry.get(template)
        self._evict_idle_buckets()

        lock = self._locks.setdefault(key.bucket_name, asyncio.Lock())
        async with lock:
            now = self._clock()
            bucket = self._buckets.get(key.bucket_name)
            if bucket is None:
                bucket = TokenBucket.full(quota, now)
                self._buckets[key.bucket_name] = bucket
            allowed = bucket.try_consume(now)

        if not allowed:
            logger.warning(
                "Rate limit exceeded",
                limiter=template,
                identity=identity,
                retry_after_seconds=round(bucket.seconds_until_available(), 2),
            )
        return allowed

    async def acquire_or_raise(self, template: str, identity: str) -> None:
        """Raises:
            RateLimitExceededError: If the bucket is empty.
        """
        if not await self.try_acquire(template, identity):
            raise RateLimitExceededError(limiter=template)

    def bucket_count(self) -> int:
        return len(self._buckets)

    def _evict_idle_buckets(self) -> None:
        now = self._clock()
        if now - self._last_sweep < self._idle_ttl:
            return
        self._last_sweep = now
        for name in [name for name, bucket in self._buckets.items() if bucket.is_idle(now, self._idle_ttl)]:
            lock: Optional[asyncio.Lock] = self._locks.get(name)
            if lock is not None and lock.locked():
                continue
            self._buckets.pop(name, None)
            self._locks.pop(name, None)
        logger.debug("Idle rate limit buckets evicted", remaining=len(self._buckets))
