from .repositories import IUserRepository
from .services import (
    IEmailService,
    IOAuthCodeExchanger,
    IPasswordResetEmailService,
    ISessionStore,
    ITokenVerifier,
)

__all__ = [
    "IUserRepository",
    "IEmailService",
    "IOAuthCodeExchanger",
    "IPasswordResetEmailService",
    "ISessionStore",
    "ITokenVerifier",
]
