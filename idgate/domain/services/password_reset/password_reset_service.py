"""Password Reset Service.

Redeems a reset token: the second half of the reset flow.
"""

import structlog

from idgate.core.config.settings import Settings
from idgate.core.exceptions import (
    GENERIC_RESET_FAILURE,
    BadRequestError,
    ForbiddenError,
    UserNotFoundError,
)
from idgate.domain.entities.user import UserQuery
from idgate.domain.interfaces.repositories import IUserRepository
from idgate.domain.services.password_reset.reset_policy import is_user_resettable

logger = structlog.get_logger(__name__)


class PasswordResetService:
    """Sets a new password for the holder of an outstanding reset token.

    The token is consumed by the same write that stores the new password, so
    it can be redeemed at most once even under concurrent submissions.
    """

    def __init__(self, user_repository: IUserRepository, settings: Settings):
        self._user_repository = user_repository
        self._settings = settings
        logger.info("PasswordResetService initialized")

    async def reset_password(self, token: str, new_password: str) -> None:
        """
        Raises:
            BadRequestError: If the token or the new password is empty.
            UserNotFoundError: If the token is unknown or already consumed.
            ForbiddenError: If the auth mode does not allow this user to reset.
        """
        if not token:
            raise BadRequestError("Reset uuid is blank.")

        user = await self._user_repository.lookup(UserQuery(reset_uuid=token))
        if user is None:
            logger.warning("Password reset attempted with unknown token")
            raise UserNotFoundError(GENERIC_RESET_FAILURE)

        if not is_user_resettable(user, self._settings):
            logger.error("Resetting password is not allowed for user", user_id=user.id)
            raise ForbiddenError("Password reset is not allowed for this user.")

        if not new_password:
            raise BadRequestError("Password is blank.")

        if not await self._user_repository.reset_password(user.id, token, new_password):
            logger.warning("Reset token consumed concurrently", user_id=user.id)
            raise UserNotFoundError(GENERIC_RESET_FAILURE)

        logger.info("Password reset completed", user_id=user.id)
