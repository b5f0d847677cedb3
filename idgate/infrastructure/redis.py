"""
Redis Connection Module

Provides the asynchronous Redis client that backs session state. The client is
exposed as a FastAPI dependency and closed once the request completes.

**Security Note**: Use a ``rediss://`` URL when Redis is reached over an
untrusted network, and keep the connection URL out of logs.
"""

from typing import AsyncGenerator

from redis.asyncio import Redis
from structlog import get_logger

from idgate.core.config.settings import settings

logger = get_logger(__name__)


async def get_redis() -> AsyncGenerator[Redis, None]:
    """
    Provides an asynchronous Redis client for one request.

    Yields:
        Redis: A client decoding responses as UTF-8 strings.
    """
    redis = Redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)
    logger.debug("Redis connection created")
    try:
        yield redis
    finally:
        await redis.aclose()
        logger.debug("Redis connection closed")
