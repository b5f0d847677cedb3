"""Authentication settings: auth mode, password hashing and the OAuth provider.
"""

import logging
from enum import Enum
from typing import Final, FrozenSet, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

# Signing algorithms a provider token may use. The configured algorithm must
# be one of these; the "alg" header of an incoming token is never trusted.
ALLOWED_SIGNING_ALGORITHMS: Final[FrozenSet[str]] = frozenset(
    {
        "HS256", "HS384", "HS512",
        "RS256", "RS384", "RS512",
        "ES256", "ES384", "ES512",
    }
)


class AuthMode(str, Enum):
    """How users of the deployment prove their identity.

    Only ``DB_AUTH`` keeps passwords in the local credential store, so it is
    the only mode in which self-service password reset applies to everyone.
    """

    DB_AUTH = "db_auth"
    LDAP_AUTH = "ldap_auth"
    UAA_AUTH = "uaa_auth"
    OIDC_AUTH = "oidc_auth"


class AuthSettings(BaseSettings):
    """Defines settings for authentication and the OAuth identity provider.

    Security Note:
        - OAUTH_CLIENT_SECRET and OAUTH_SIGNING_KEY must come from the
          environment or a secret store; they are never compiled into code.
        - BOOTSTRAP_ADMIN_USERNAME names the one account that may always reset
          its password, even when AUTH_MODE delegates to an external directory.
          This is a break-glass policy; clear it to disable.
    """

    AUTH_MODE: AuthMode = AuthMode.DB_AUTH
    BOOTSTRAP_ADMIN_USERNAME: Optional[str] = "admin"
    PBKDF2_ROUNDS: int = Field(default=29000, ge=1000)

    OAUTH_CLIENT_ID: str = ""
    OAUTH_CLIENT_SECRET: SecretStr = SecretStr("")
    OAUTH_AUTH_URL: str = ""
    OAUTH_TOKEN_URL: str = ""
    OAUTH_REDIRECT_URL: str = ""
    OAUTH_SIGNING_ALGORITHM: str = "HS256"
    OAUTH_SIGNING_KEY: SecretStr = SecretStr("")
    OAUTH_TIMEOUT_SECONDS: float = Field(default=60.0, gt=0)
    OAUTH_CA_BUNDLE: Optional[str] = None

    @field_validator("OAUTH_SIGNING_ALGORITHM")
    @classmethod
    def validate_signing_algorithm(cls, value: str) -> str:
        """Rejects any algorithm outside the fixed allow-list (including ``none``)."""
        normalized = value.strip().upper()
        if normalized not in ALLOWED_SIGNING_ALGORITHMS:
            logger.error("Unsupported OAuth signing algorithm configured: %s", value)
            raise ValueError(f"Unsupported OAuth signing algorithm: {value}")
        return normalized

    @property
    def oauth_configured(self) -> bool:
        """True when every value needed to complete an OAuth exchange is present."""
        return bool(
            self.OAUTH_CLIENT_ID
            and self.OAUTH_TOKEN_URL
            and self.OAUTH_SIGNING_KEY.get_secret_value()
        )
