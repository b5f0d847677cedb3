from .oauth import OAuthCodeExchanger
from .token_verifier import JoseTokenVerifier

__all__ = ["OAuthCodeExchanger", "JoseTokenVerifier"]
