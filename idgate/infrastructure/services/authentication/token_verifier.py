"""Verification of provider-signed access tokens with python-jose."""

from jose import JWTError, jwt
from structlog import get_logger

from idgate.core.config.auth import ALLOWED_SIGNING_ALGORITHMS
from idgate.core.config.settings import Settings
from idgate.core.exceptions import ConfigurationError, InvalidTokenError
from idgate.domain.interfaces.services import ITokenVerifier
from idgate.domain.value_objects.oauth_claims import OAuthClaims

logger = get_logger(__name__)


class JoseTokenVerifier(ITokenVerifier):
    """Checks a token's algorithm, signature and identity claims.

    The algorithm is pinned to ``OAUTH_SIGNING_ALGORITHM``. A token whose
    header names any other algorithm is rejected before its signature is
    looked at, so ``none`` and algorithm-confusion tokens never verify.
    """

    def __init__(self, settings: Settings):
        self.algorithm = settings.OAUTH_SIGNING_ALGORITHM
        self.key = settings.OAUTH_SIGNING_KEY.get_secret_value()
        if self.algorithm not in ALLOWED_SIGNING_ALGORITHMS:
            raise ConfigurationError(f"Unsupported signing algorithm: {self.algorithm}")

    def verify(self, token: str) -> OAuthClaims:
        if not token:
            raise InvalidTokenError()
        if not self.key:
            raise ConfigurationError("OAuth signing key is not configured.")

        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            logger.warning("Malformed provider token header", error=str(e))
            raise InvalidTokenError() from e

        presented = header.get("alg")
        if presented != self.algorithm:
            logger.warning(
                "Provider token algorithm mismatch",
                presented=presented,
                expected=self.algorithm,
            )
            raise InvalidTokenError("The identity provider token uses an unexpected algorithm.")

        try:
            payload = jwt.decode(
                token,
                self.key,
                algorithms=[self.algorithm],
                options={"verify_aud": False},
            )
        except JWTError as e:
            logger.warning("Provider token failed verification", error=str(e))
            raise InvalidTokenError() from e

        subject = payload.get("sub")
        issuer = payload.get("iss")
        if not isinstance(subject, str) or not isinstance(issuer, str):
            raise InvalidTokenError("The identity provider token lacks subject or issuer.")
        try:
            claims = OAuthClaims(subject=subject, issuer=issuer, signing_algorithm=self.algorithm)
        except ValueError as e:
            raise InvalidTokenError("The identity provider token lacks subject or issuer.") from e

        logger.debug("Provider token verified", issuer=issuer)
        return claims
