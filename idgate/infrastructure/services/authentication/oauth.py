"""OAuth 2.0 authorization code exchange against the configured provider.

The exchange is a single outbound HTTPS call bounded by a timeout. Certificate
verification always uses either the system trust store or the configured CA
bundle; it is never turned off. Failures are surfaced to the caller as
``UpstreamError`` and are not retried.
"""

import asyncio
import ssl
from typing import Optional

import httpx
from authlib.integrations.base_client import OAuthError
from authlib.integrations.httpx_client import AsyncOAuth2Client
from structlog import get_logger

from idgate.core.config.settings import Settings
from idgate.core.exceptions import ConfigurationError, UpstreamError
from idgate.domain.interfaces.services import IOAuthCodeExchanger

logger = get_logger(__name__)


class OAuthCodeExchanger(IOAuthCodeExchanger):
    """Trades an authorization code for an access token using authlib.

    Attributes:
        settings: Application settings carrying the OAUTH_* values.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def _tls_context(self) -> ssl.SSLContext:
        return ssl.create_default_context(cafile=self.settings.OAUTH_CA_BUNDLE)

    def _client(self) -> AsyncOAuth2Client:
        return AsyncOAuth2Client(
            client_id=self.settings.OAUTH_CLIENT_ID,
            client_secret=self.settings.OAUTH_CLIENT_SECRET.get_secret_value(),
            redirect_uri=self.settings.OAUTH_REDIRECT_URL or None,
            timeout=self.settings.OAUTH_TIMEOUT_SECONDS,
            verify=self._tls_context(),
        )

    async def exchange_code(self, code: str) -> str:
        """Exchange ``code`` at the provider's token endpoint.

        Args:
            code: The authorization code from the provider redirect.

        Returns:
            str: The raw access token.

        Raises:
            ConfigurationError: If no token endpoint is configured.
            UpstreamError: On transport failure, timeout, a provider error
                response, or a response without an access token.
        """
        if not self.settings.OAUTH_TOKEN_URL:
            raise ConfigurationError("OAuth token endpoint is not configured.")

        token: Optional[dict] = None
        try:
            async with self._client() as client:
                token = await client.fetch_token(
                    url=self.settings.OAUTH_TOKEN_URL,
                    grant_type="authorization_code",
                    code=code,
                )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning("OAuth token exchange timed out", timeout=self.settings.OAUTH_TIMEOUT_SECONDS)
            raise UpstreamError("Identity provider did not respond in time.") from e
        except (httpx.HTTPError, OAuthError, ValueError) as e:
            logger.warning("OAuth token exchange failed", error=str(e), error_type=type(e).__name__)
            raise UpstreamError("Identity provider rejected the authorization code.") from e

        access_token = (token or {}).get("access_token")
        if not access_token:
            logger.warning("OAuth token response carried no access token")
            raise UpstreamError("Identity provider returned no access token.")

        logger.info("OAuth authorization code exchanged")
        return access_token
