"""Redis-backed session store.

A session maps an opaque, unguessable handle to the principal it was issued
for. Session state lives in Redis rather than in process memory so that every
replica of the service sees the same sessions and a logout on one replica is
honoured by all of them.
"""

import json
import secrets
from typing import Optional

from redis.asyncio import Redis
from structlog import get_logger

from idgate.domain.interfaces.services import ISessionStore
from idgate.domain.value_objects.session import SessionPrincipal

logger = get_logger(__name__)

HANDLE_BYTES = 32


class RedisSessionStore(ISessionStore):
    """Stores sessions as JSON documents with a sliding-free TTL.

    Attributes:
        redis: Async Redis client with ``decode_responses`` enabled.
        ttl_seconds: Lifetime of a session from its creation.
        key_prefix: Namespace prepended to every handle.
    """

    def __init__(self, redis: Redis, ttl_seconds: int, key_prefix: str = "session:"):
        self.redis = redis
        self.ttl_seconds = ttl_seconds
        self.key_prefix = key_prefix

    def _key(self, handle: str) -> str:
        return f"{self.key_prefix}{handle}"

    async def create(self, user_id: int, username: str, is_sysadmin: bool) -> str:
        handle = secrets.token_urlsafe(HANDLE_BYTES)
        principal = SessionPrincipal(user_id=user_id, username=username, is_sysadmin=is_sysadmin)
        await self.redis.set(
            self._key(handle), json.dumps(principal.to_mapping()), ex=self.ttl_seconds
        )
        logger.info("Session created", user_id=user_id, ttl_seconds=self.ttl_seconds)
        return handle

    async def get(self, handle: str) -> Optional[SessionPrincipal]:
        if not handle:
            return None
        raw = await self.redis.get(self._key(handle))
        if raw is None:
            return None
        return SessionPrincipal.from_mapping(json.loads(raw))

    async def destroy(self, handle: str) -> None:
        if not handle:
            return
        removed = await self.redis.delete(self._key(handle))
        logger.info("Session destroyed", existed=bool(removed))
