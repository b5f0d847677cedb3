"""Password Reset Request Service.

Handles the first half of the reset flow: validating the address, issuing a
single-use token and mailing the reset link.
"""

import re

import structlog

from idgate.core.config.settings import Settings
from idgate.core.exceptions import (
    GENERIC_RESET_FAILURE,
    BadRequestError,
    ForbiddenError,
    UserNotFoundError,
)
from idgate.core.logging import mask
from idgate.domain.entities.user import UserQuery
from idgate.domain.interfaces.repositories import IUserRepository
from idgate.domain.interfaces.services import IPasswordResetEmailService
from idgate.domain.services.password_reset.reset_policy import is_user_resettable
from idgate.utils.security import generate_random_string

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(
    r"^(([^<>()[\]\\.,;:\s@\"]+(\.[^<>()[\]\\.,;:\s@\"]+)*)|(\".+\"))"
    r"@((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))$"
)


def is_valid_email(email: str) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


class PasswordResetRequestService:
    """Service for handling password reset requests.

    A new request replaces any token still outstanding for the same user, so
    only the most recently mailed link works.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        email_service: IPasswordResetEmailService,
        settings: Settings,
    ):
        self._user_repository = user_repository
        self._email_service = email_service
        self._settings = settings
        logger.info("PasswordResetRequestService initialized")

    async def request_password_reset(self, email: str) -> None:
        """Issue a reset token for ``email`` and send the reset link.

        The token is stored before the email is sent. If sending fails the
        error propagates and the stored token stays valid.

        Raises:
            BadRequestError: If ``email`` is not a valid address.
            UserNotFoundError: If no user has this address.
            ForbiddenError: If the auth mode does not allow this user to reset.
            EmailServiceError: If the reset email cannot be sent.
        """
        if not is_valid_email(email):
            logger.warning("Password reset requested with invalid email")
            raise BadRequestError("Invalid email address.")

        user = await self._user_repository.lookup(UserQuery(email=email))
        if user is None:
            logger.info("Password reset requested for unknown email", email=mask(email))
            raise UserNotFoundError(GENERIC_RESET_FAILURE)

        if not is_user_resettable(user, self._settings):
            logger.error("Resetting password is not allowed for user", user_id=user.id)
            raise ForbiddenError("Password reset is not allowed for this user.")

        token = generate_random_string()
        await self._user_repository.set_reset_token(user.id, token)
        await self._email_service.send_password_reset_email(user, token)
        logger.info("Password reset requested", user_id=user.id)
