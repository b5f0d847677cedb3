from .oauth_claims import OAuthClaims
from .session import AuthenticatedSession, SessionPrincipal

__all__ = ["OAuthClaims", "AuthenticatedSession", "SessionPrincipal"]
