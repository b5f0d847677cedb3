"""Infrastructure implementation of the password reset email.

Renders the reset notification from a Jinja2 template shipped with the
package and hands it to the configured ``IEmailService``.
"""

from urllib.parse import urlencode

import structlog
from jinja2 import Environment, PackageLoader, TemplateError

from idgate.core.config.settings import Settings
from idgate.core.exceptions import BadRequestError, EmailServiceError
from idgate.domain.entities.user import User
from idgate.domain.interfaces.services import IEmailService, IPasswordResetEmailService

logger = structlog.get_logger(__name__)

TEMPLATE_NAME = "reset-password-mail.txt"
RESET_HINT = "You requested a password reset. Follow the link below to choose a new password."


class PasswordResetEmailService(IPasswordResetEmailService):
    """Builds the reset link and sends it to the user's address.

    The link points at ``{EXT_ENDPOINT}/reset_password?reset_uuid=<token>``.
    """

    def __init__(self, email_service: IEmailService, settings: Settings):
        self._email_service = email_service
        self._settings = settings
        self._jinja_env = Environment(
            loader=PackageLoader("idgate", "templates"),
            autoescape=False,
            keep_trailing_newline=True,
        )
        logger.info("PasswordResetEmailService initialized")

    def build_reset_link(self, token: str) -> str:
        return f"{self._settings.EXT_ENDPOINT}/reset_password?{urlencode({'reset_uuid': token})}"

    def render(self, token: str) -> str:
        try:
            template = self._jinja_env.get_template(TEMPLATE_NAME)
            return template.render(hint=RESET_HINT, reset_link=self.build_reset_link(token))
        except TemplateError as e:
            logger.error("Failed to render reset email template", error=str(e))
            raise EmailServiceError("Failed to render the password reset email.") from e

    async def send_password_reset_email(self, user: User, token: str) -> None:
        if not user.email:
            raise BadRequestError("User has no email address.")

        body = self.render(token)
        await self._email_service.send(user.email, self._settings.RESET_EMAIL_SUBJECT, body)
        logger.info("Password reset email dispatched", user_id=user.id)
