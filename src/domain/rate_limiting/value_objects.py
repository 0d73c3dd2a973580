"""
Rate Limiting Value Objects

Immutable value objects representing core concepts in the rate limiting domain.

Value Objects:
- RateLimitQuota: Capacity and window of a bucket template
- RateLimitKey: The (template, identity) pair that names one bucket
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

ANONYMOUS_PRINCIPAL = "anonymousUser"
UNKNOWN_IDENTITY = "unknown"

PERIOD_SECONDS = {
    "second": 1,
    "minute": 60,
    "hour": 3600,
    "day": 86400,
}


@dataclass(frozen=True, slots=True)
class RateLimitQuota:
    """
    Immutable value object representing a token bucket template.

    Business Rules:
    - Capacity (``max_requests``) must be positive
    - Window duration must be positive
    - Tokens refill evenly: ``max_requests / window_seconds`` per second
    """
    max_requests: int
    window_seconds: int

    def __post_init__(self):
        """Validate quota configuration at construction time"""
        if self.max_requests <= 0:
            raise ValueError("max_requests must be positive")

        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

    @property
    def refill_rate(self) -> float:
        """Tokens added back per second."""
        return self.max_requests / self.window_seconds

    @classmethod
    def from_rate_string(cls, rate_string: str) -> RateLimitQuota:
        """
        Create quota from rate string format (e.g., "5/minute").

        Supported time units: second, minute, hour, day
        """
        try:
            count_str, period = rate_string.split("/")
            count = int(count_str)
        except (ValueError, AttributeError) as e:
            raise ValueError(f"Invalid rate string format: {rate_string}") from e

        if period not in PERIOD_SECONDS:
            raise ValueError(f"Invalid rate string format: {rate_string}")

        return cls(max_requests=count, window_seconds=PERIOD_SECONDS[period])


@dataclass(frozen=True, slots=True)
class RateLimitKey:
    """
    Immutable value object naming one bucket: a template plus an identity.

    The identity is the authenticated principal when there is one, otherwise the
    client address. ``bucket_name`` is ``"<template>#<identity>"``.
    """
    template: str
    identity: str

    def __post_init__(self):
        if not self.template:
            raise ValueError("template must be provided")
        if not self.identity:
            raise ValueError("identity must be provided")

    @property
    def bucket_name(self) -> str:
        return f"{self.template}#{self.identity}"

    @staticmethod
    def resolve_identity(
        principal: Optional[str],
        forwarded_for: Optional[str],
        peer_address: Optional[str],
    ) -> str:
        """
        Pick the identity a request is limited by.

        Order: authenticated principal (unless anonymous), first address of the
        ``X-Forwarded-For`` chain, direct peer address.
        """
        if principal and principal.strip() and principal != ANONYMOUS_PRINCIPAL:
            return principal.strip()

        if forwarded_for and forwarded_for.strip():
            first = forwarded_for.split(",")[0].strip()
            if first:
                return first

        if peer_address and peer_address.strip():
            return peer_address.strip()

        return UNKNOWN_IDENTITY
