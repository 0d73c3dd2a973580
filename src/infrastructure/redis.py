"""
Redis Connection Module

Builds the asynchronous Redis client that backs the key-value stores when
``STORAGE_BACKEND=redis-sql``. The client is created once by the service
container and closed on shutdown.

**Security Note**: Ensure that the Redis connection URL (REDIS_URL) uses TLS (``rediss://``) when
connecting over an untrusted network, and never log the URL (it may carry the password).
"""

import structlog
from redis.asyncio import Redis

logger = structlog.get_logger(__name__)


def create_redis_client(redis_url: str) -> Redis:
    """Create a client that returns ``str`` values (``decode_responses=True``)."""
    client = Redis.from_url(redis_url, encoding="utf-8", decode_responses=True)
    logger.debug("Redis client created")
    return client


async def close_redis_client(client: Redis) -> None:
    await client.aclose()
    logger.debug("Redis connection closed")
