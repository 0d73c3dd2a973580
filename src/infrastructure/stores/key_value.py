"""TTL key-value stores behind ``IKeyValueStore``.

``RedisKeyValueStore`` is the production store: plain ``SET ... EX`` for writes
and Lua scripts for the atomic consume operations. ``InMemoryKeyValueStore``
keeps the same semantics inside one process.
"""

import asyncio
import time
from typing import Callable, Dict, Optional, Tuple

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from src.core.exceptions import PersistenceError
from src.domain.interfaces.stores import IKeyValueStore

logger = structlog.get_logger(__name__)

# Returns the value and deletes the key, or nil.
TAKE_SCRIPT = """
local value = redis.call('GET', KEYS[1])
if value then
    redis.call('DEL', KEYS[1])
end
return value
"""

# Deletes the key only if it holds ARGV[1]; returns 1 on delete, 0 otherwise.
TAKE_IF_MATCH_SCRIPT = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
end
return 0
"""


class RedisKeyValueStore(IKeyValueStore):
    """``IKeyValueStore`` on ``redis.asyncio``.

    The client must be created with ``decode_responses=True``.
    """

    def __init__(self, redis: Redis):
        self._redis = redis

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._redis.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            logger.error("Redis SET failed", key=_key_prefix(key), error=str(e))
            raise PersistenceError() from e

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self._redis.get(key)
        except RedisError as e:
            logger.error("Redis GET failed", key=_key_prefix(key), error=str(e))
            raise PersistenceError() from e

    async def take(self, key: str) -> Optional[str]:
        try:
            return await self._redis.eval(TAKE_SCRIPT, 1, key)
        except RedisError as e:
            logger.error("Redis take failed", key=_key_prefix(key), error=str(e))
            raise PersistenceError() from e

    async def take_if_match(self, key: str, expected: str) -> bool:
        try:
            deleted = await self._redis.eval(TAKE_IF_MATCH_SCRIPT, 1, key, expected)
        except RedisError as e:
            logger.error("Redis take_if_match failed", key=_key_prefix(key), error=str(e))
            raise PersistenceError() from e
        return int(deleted or 0) == 1

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(key)
        except RedisError as e:
            logger.error("Redis DEL failed", key=_key_prefix(key), error=str(e))
            raise PersistenceError() from e


class InMemoryKeyValueStore(IKeyValueStore):
    """Process-local store; expired entries are dropped lazily on access."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: Dict[str, Tuple[str, float]] = {}
        self._lock = asyncio.Lock()
        self._clock = clock

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        async with self._lock:
            self._entries[key] = (value, self._clock() + ttl_seconds)

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            return self._live_value(key)

    async def take(self, key: str) -> Optional[str]:
        async with self._lock:
            value = self._live_value(key)
            self._entries.pop(key, None)
            return value

    async def take_if_match(self, key: str, expected: str) -> bool:
        async with self._lock:
            if self._live_value(key) != expected:
                return False
            del self._entries[key]
            return True

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._entries.pop(key, None)

    def _live_value(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value


def _key_prefix(key: str) -> str:
    return key.split(":", 1)[0] + ":..."
