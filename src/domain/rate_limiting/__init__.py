"""Rate Limiting Domain Module

Token bucket rate limiting keyed by ``(template, identity)``:

- Value Objects: ``RateLimitQuota`` (bucket template), ``RateLimitKey``
- Entities: ``TokenBucket``
- Domain Services: ``RateLimiterRegistry``, ``RateLimiter``
"""

from .entities import TokenBucket
from .services import GLOBAL, LOGIN, SENSITIVE_OPERATION, RateLimiter, RateLimiterRegistry
from .value_objects import RateLimitKey, RateLimitQuota

__all__ = [
    "GLOBAL",
    "LOGIN",
    "SENSITIVE_OPERATION",
    "RateLimitKey",
    "RateLimitQuota",
    "RateLimiter",
    "RateLimiterRegistry",
    "TokenBucket",
]
