"""
Redis Configuration

Async Redis client shared by the rate limiter.
Redis is optional outside production: callers must handle ``None``.
"""

import logging

from redis.asyncio import Redis, from_url

from app.core.config import settings

logger = logging.getLogger(__name__)

# Redis client instance
redis_client: Redis | None = None


async def init_redis() -> Redis:
    """
    Open the Redis connection and verify it with PING.

    Call this on application startup.
    """
    global redis_client
    client = from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    await client.ping()
    redis_client = client
    return redis_client


async def get_redis() -> Redis | None:
    """
    FastAPI dependency returning the shared client, or None when Redis is down.

    Usage:
        @router.get("/cached")
        async def cached(redis: Redis | None = Depends(get_redis)):
            if redis is None:
                ...
    """
    return redis_client


def is_redis_available() -> bool:
    """Check if the Redis client has been initialized."""
    return redis_client is not None


async def close_redis() -> None:
    """Close the Redis connection."""
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
        logger.debug("Redis connection closed")
