"""OAuth authentication service.

Turns an authorization code from the identity provider into a local session:

1. exchange the code for an access token
2. verify the token's algorithm, signature and claims
3. onboard the user derived from ``sub`` and ``iss`` (idempotent)
4. issue a session

A failure at any step stops the flow before the next one runs, so a token
that fails verification never creates a user or a session.
"""

import structlog

from idgate.core.config.settings import Settings
from idgate.core.exceptions import BadRequestError, ConfigurationError
from idgate.domain.entities.user import NewUser
from idgate.domain.interfaces.repositories import IUserRepository
from idgate.domain.interfaces.services import IOAuthCodeExchanger, ITokenVerifier
from idgate.domain.services.session.session_service import SessionIssuanceService
from idgate.domain.value_objects.session import AuthenticatedSession

logger = structlog.get_logger(__name__)


class OAuthAuthenticationService:
    def __init__(
        self,
        user_repository: IUserRepository,
        code_exchanger: IOAuthCodeExchanger,
        token_verifier: ITokenVerifier,
        session_service: SessionIssuanceService,
        settings: Settings,
    ):
        self._user_repository = user_repository
        self._code_exchanger = code_exchanger
        self._token_verifier = token_verifier
        self._session_service = session_service
        self._settings = settings
        logger.info("OAuthAuthenticationService initialized")

    async def authenticate(self, code: str) -> AuthenticatedSession:
        """Complete the authorization code flow.

        Raises:
            BadRequestError: If ``code`` is empty.
            ConfigurationError: If the provider is not configured.
            UpstreamError: If the code exchange fails.
            InvalidTokenError: If the token does not verify.
        """
        if not code:
            raise BadRequestError("Authorization code is required.")
        if not self._settings.oauth_configured:
            raise ConfigurationError("OAuth provider is not configured.")

        access_token = await self._code_exchanger.exchange_code(code)
        claims = self._token_verifier.verify(access_token)

        user = await self._user_repository.onboard(
            NewUser(username=claims.username, email=claims.email)
        )
        session = await self._session_service.issue(user)
        logger.info("OAuth login succeeded", user_id=user.id, issuer=claims.issuer)
        return session
