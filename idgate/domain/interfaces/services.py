"""Service interfaces consumed by the authentication domain."""

from abc import ABC, abstractmethod
from typing import Optional

from idgate.domain.entities.user import User
from idgate.domain.value_objects.oauth_claims import OAuthClaims
from idgate.domain.value_objects.session import SessionPrincipal


class ISessionStore(ABC):
    """Process-external session state keyed by an opaque handle."""

    @abstractmethod
    async def create(self, user_id: int, username: str, is_sysadmin: bool) -> str:
        """Persist a new session and return its handle."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, handle: str) -> Optional[SessionPrincipal]:
        """Return the principal behind ``handle``, or None if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    async def destroy(self, handle: str) -> None:
        """Remove the session. Destroying an unknown handle is not an error."""
        raise NotImplementedError


class IEmailService(ABC):
    """Synchronous notification dispatch without retry."""

    @abstractmethod
    async def send(self, address: str, subject: str, body: str) -> None:
        """Deliver one message.

        Raises:
            EmailServiceError: If delivery fails.
        """
        raise NotImplementedError


class IPasswordResetEmailService(ABC):
    """Formats and dispatches the password reset notification."""

    @abstractmethod
    async def send_password_reset_email(self, user: User, token: str) -> None:
        raise NotImplementedError


class IOAuthCodeExchanger(ABC):
    """Trades an authorization code for an access token at the provider."""

    @abstractmethod
    async def exchange_code(self, code: str) -> str:
        """Return the raw access token.

        Raises:
            UpstreamError: On network failure, timeout or provider error.
        """
        raise NotImplementedError


class ITokenVerifier(ABC):
    """Verifies a provider-signed access token and extracts its claims."""

    @abstractmethod
    def verify(self, token: str) -> OAuthClaims:
        """
        Raises:
            InvalidTokenError: On algorithm mismatch, bad signature or bad claims.
        """
        raise NotImplementedError
