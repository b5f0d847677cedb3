from .oauth_service import OAuthAuthenticationService
from .user_authentication_service import UserAuthenticationService

__all__ = ["OAuthAuthenticationService", "UserAuthenticationService"]
