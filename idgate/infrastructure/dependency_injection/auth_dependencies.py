"""Dependency injection for the authentication services.

Each factory builds one collaborator from its own dependencies so routes only
ever depend on domain services, and tests can swap any layer through
``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from idgate.core.config.settings import Settings, settings
from idgate.domain.interfaces.repositories import IUserRepository
from idgate.domain.interfaces.services import (
    IEmailService,
    IOAuthCodeExchanger,
    IPasswordResetEmailService,
    ISessionStore,
    ITokenVerifier,
)
from idgate.domain.services.authentication.oauth_service import OAuthAuthenticationService
from idgate.domain.services.authentication.user_authentication_service import (
    UserAuthenticationService,
)
from idgate.domain.services.password_reset.password_reset_request_service import (
    PasswordResetRequestService,
)
from idgate.domain.services.password_reset.password_reset_service import PasswordResetService
from idgate.domain.services.session.session_service import SessionIssuanceService
from idgate.infrastructure.database.async_db import get_async_db
from idgate.infrastructure.redis import get_redis
from idgate.infrastructure.repositories.user_repository import UserRepository
from idgate.infrastructure.services.authentication.oauth import OAuthCodeExchanger
from idgate.infrastructure.services.authentication.token_verifier import JoseTokenVerifier
from idgate.infrastructure.services.email.email_service import EmailService
from idgate.infrastructure.services.password_reset_email_service import (
    PasswordResetEmailService,
)
from idgate.infrastructure.services.session_store import RedisSessionStore

# ---------------------------------------------------------------------------
# Type aliases for dependency injection
# ---------------------------------------------------------------------------

AsyncDB = Annotated[AsyncSession, Depends(get_async_db)]
RedisClient = Annotated[Redis, Depends(get_redis)]


def get_settings() -> Settings:
    return settings


AppSettings = Annotated[Settings, Depends(get_settings)]

# ---------------------------------------------------------------------------
# Infrastructure Layer Dependencies
# ---------------------------------------------------------------------------


def get_user_repository(db: AsyncDB, app_settings: AppSettings) -> IUserRepository:
    """Factory that returns the credential store bound to the request's session."""
    return UserRepository(db, pbkdf2_rounds=app_settings.PBKDF2_ROUNDS)


def get_session_store(redis: RedisClient, app_settings: AppSettings) -> ISessionStore:
    return RedisSessionStore(
        redis,
        ttl_seconds=app_settings.SESSION_TTL_SECONDS,
        key_prefix=app_settings.SESSION_KEY_PREFIX,
    )


def get_email_service(app_settings: AppSettings) -> IEmailService:
    return EmailService(app_settings)


def get_password_reset_email_service(
    app_settings: AppSettings,
    email_service: IEmailService = Depends(get_email_service),
) -> IPasswordResetEmailService:
    return PasswordResetEmailService(email_service, app_settings)


def get_oauth_code_exchanger(app_settings: AppSettings) -> IOAuthCodeExchanger:
    return OAuthCodeExchanger(app_settings)


def get_token_verifier(app_settings: AppSettings) -> ITokenVerifier:
    return JoseTokenVerifier(app_settings)


# ---------------------------------------------------------------------------
# Domain Service Dependencies
# ---------------------------------------------------------------------------


def get_session_service(
    session_store: ISessionStore = Depends(get_session_store),
) -> SessionIssuanceService:
    return SessionIssuanceService(session_store)


def get_user_authentication_service(
    app_settings: AppSettings,
    user_repository: IUserRepository = Depends(get_user_repository),
    session_service: SessionIssuanceService = Depends(get_session_service),
) -> UserAuthenticationService:
    """Factory that returns the local login service."""
    return UserAuthenticationService(
        user_repository, session_service, pbkdf2_rounds=app_settings.PBKDF2_ROUNDS
    )


def get_oauth_service(
    app_settings: AppSettings,
    user_repository: IUserRepository = Depends(get_user_repository),
    code_exchanger: IOAuthCodeExchanger = Depends(get_oauth_code_exchanger),
    token_verifier: ITokenVerifier = Depends(get_token_verifier),
    session_service: SessionIssuanceService = Depends(get_session_service),
) -> OAuthAuthenticationService:
    """Factory that returns the OAuth authorization code login service."""
    return OAuthAuthenticationService(
        user_repository, code_exchanger, token_verifier, session_service, app_settings
    )


def get_password_reset_request_service(
    app_settings: AppSettings,
    user_repository: IUserRepository = Depends(get_user_repository),
    email_service: IPasswordResetEmailService = Depends(get_password_reset_email_service),
) -> PasswordResetRequestService:
    return PasswordResetRequestService(user_repository, email_service, app_settings)


def get_password_reset_service(
    app_settings: AppSettings,
    user_repository: IUserRepository = Depends(get_user_repository),
) -> PasswordResetService:
    return PasswordResetService(user_repository, app_settings)
