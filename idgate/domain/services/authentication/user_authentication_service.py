"""User Authentication Service for local credentials.

Authenticates a principal (username or email) against the salted hash in the
credential store and, on success, issues a session.
"""

from functools import lru_cache

import structlog

from idgate.core.exceptions import GENERIC_LOGIN_FAILURE, UnauthorizedError
from idgate.core.logging import mask
from idgate.domain.interfaces.repositories import IUserRepository
from idgate.domain.services.session.session_service import SessionIssuanceService
from idgate.domain.value_objects.session import AuthenticatedSession
from idgate.utils.security import (
    DEFAULT_PBKDF2_ROUNDS,
    generate_salt,
    hash_password,
    verify_password,
)

logger = structlog.get_logger(__name__)


@lru_cache(maxsize=None)
def _decoy_credentials(rounds: int) -> tuple[str, str]:
    """Salt and hash no password can match, verified when there is no real hash."""
    salt = generate_salt()
    return salt, hash_password(generate_salt(), salt, rounds=rounds)


class UserAuthenticationService:
    """Domain service for local login and logout.

    Every failure mode of ``login`` (unknown principal, user without a local
    password, wrong password) raises the same ``UnauthorizedError`` with the
    same message so callers cannot tell which one occurred.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        session_service: SessionIssuanceService,
        pbkdf2_rounds: int = DEFAULT_PBKDF2_ROUNDS,
    ):
        self._user_repository = user_repository
        self._session_service = session_service
        self._pbkdf2_rounds = pbkdf2_rounds
        logger.info("UserAuthenticationService initialized")

    async def login(self, principal: str, password: str) -> AuthenticatedSession:
        """Verify ``password`` for ``principal`` and open a session.

        Args:
            principal: Username or email address.
            password: Plaintext password.

        Returns:
            AuthenticatedSession: Handle plus the principal it maps to.

        Raises:
            UnauthorizedError: If the credentials do not verify.
        """
        if not principal or not password:
            logger.warning("Login rejected: missing credentials")
            raise UnauthorizedError(GENERIC_LOGIN_FAILURE)

        user = await self._user_repository.lookup_by_principal(principal)
        if user is None or not user.has_local_credentials:
            # Equal PBKDF2 work on every failure path.
            verify_password(password, *_decoy_credentials(self._pbkdf2_rounds))
            reason = "unknown_principal" if user is None else "no_local_credentials"
            logger.warning("Login failed", principal=mask(principal), reason=reason)
            raise UnauthorizedError(GENERIC_LOGIN_FAILURE)

        if not verify_password(password, user.salt, user.hashed_password):
            logger.warning("Login failed", user_id=user.id, reason="bad_credentials")
            raise UnauthorizedError(GENERIC_LOGIN_FAILURE)

        session = await self._session_service.issue(user)
        logger.info("Login succeeded", user_id=user.id)
        return session

    async def logout(self, handle: str) -> None:
        """Destroy the session behind ``handle``. Unknown handles are ignored."""
        principal = await self._session_service.resolve(handle)
        await self._session_service.revoke(handle)
        logger.info("Logout completed", user_id=principal.user_id if principal else None)
