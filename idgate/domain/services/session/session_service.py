"""Session issuance shared by every authentication path."""

from typing import Optional

import structlog

from idgate.domain.entities.user import User
from idgate.domain.interfaces.services import ISessionStore
from idgate.domain.value_objects.session import AuthenticatedSession, SessionPrincipal

logger = structlog.get_logger(__name__)


class SessionIssuanceService:
    """Creates, resolves and revokes sessions for authenticated users.

    Local login and OAuth both end here, so a session always carries the
    same three fields no matter how the user proved their identity.
    """

    def __init__(self, session_store: ISessionStore):
        self._session_store = session_store
        logger.info("SessionIssuanceService initialized")

    async def issue(self, user: User) -> AuthenticatedSession:
        principal = SessionPrincipal(
            user_id=user.id,
            username=user.username,
            is_sysadmin=user.is_sysadmin,
        )
        handle = await self._session_store.create(
            principal.user_id, principal.username, principal.is_sysadmin
        )
        logger.info("Session issued", user_id=user.id)
        return AuthenticatedSession(handle=handle, principal=principal)

    async def resolve(self, handle: str) -> Optional[SessionPrincipal]:
        return await self._session_store.get(handle)

    async def revoke(self, handle: str) -> None:
        await self._session_store.destroy(handle)
