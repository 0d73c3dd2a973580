"""
Rate Limiting Entities

``TokenBucket`` is the mutable counter behind one ``RateLimitKey``. It is not
thread-safe on its own; ``RateLimiter`` serializes access per bucket.
"""

from __future__ import annotations

from dataclasses import dataclass

from .value_objects import RateLimitQuota


@dataclass
class TokenBucket:
    """Token bucket state.

    Attributes:
        quota: Template the bucket was derived from.
        tokens: Tokens currently available (fractional while refilling).
        last_refill: Monotonic timestamp of the last refill computation.
        last_used: Monotonic timestamp of the last acquire attempt.
    """

    quota: RateLimitQuota
    tokens: float
    last_refill: float
    last_used: float

    @classmethod
    def full(cls, quota: RateLimitQuota, now: float) -> TokenBucket:
        return cls(quota=quota, tokens=float(quota.max_requests), last_refill=now, last_used=now)

    def refill(self, now: float) -> None:
        """Add the tokens accrued since ``last_refill``, capped at capacity."""
        elapsed = max(0.0, now - self.last_refill)
        self.tokens = min(float(self.quota.max_requests), self.tokens + elapsed * self.quota.refill_rate)
        self.last_refill = now

    def try_consume(self, now: float) -> bool:
        """Refill, then take one token if at least one is available."""
        self.refill(now)
        self.last_used = now
        if self.tokens >= 1.0:
            self.tokens -= 1.0
            return True
        return False

    def seconds_until_available(self) -> float:
        if self.tokens >= 1.0:
            return 0.0
        return (1.0 - self.tokens) / self.quota.refill_rate

    def is_idle(self, now: float, idle_ttl: float) -> bool:
        return now - self.last_used >= idle_ttl
