"""
Redis session store and rate limiting settings.
"""
from pydantic import Field
from pydantic_settings import BaseSettings


class RedisSettings(BaseSettings):
    """
    Defines settings for the Redis connection backing session state.

    Performance Note:
        - SESSION_TTL_SECONDS bounds how long an idle session handle stays
          valid; logout removes it immediately regardless of the TTL.
    """
    REDIS_URL: str = "redis://localhost:6379/0"
    SESSION_TTL_SECONDS: int = Field(default=1800, ge=1)
    SESSION_KEY_PREFIX: str = "session:"

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_AUTH: str = "20/minute"
