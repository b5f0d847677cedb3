"""OAuth claims value object.

Holds the identity assertions extracted from a verified provider token. The
object is never persisted: it lives only long enough to derive a local user.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class OAuthClaims:
    """Verified claims of a provider-issued signed token.

    Attributes:
        subject: The ``sub`` claim, the provider's id for the user.
        issuer: The ``iss`` claim.
        signing_algorithm: The algorithm the token was verified with.
    """

    subject: str
    issuer: str
    signing_algorithm: str

    def __post_init__(self) -> None:
        if not self.subject or not self.subject.strip():
            raise ValueError("Token subject cannot be empty")
        if not self.issuer or not self.issuer.strip():
            raise ValueError("Token issuer cannot be empty")

    @property
    def username(self) -> str:
        return self.subject

    @property
    def email(self) -> str:
        return f"{self.subject}@{self.issuer}"
