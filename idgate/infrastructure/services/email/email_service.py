"""SMTP email delivery through fastapi-mail.

Delivery is synchronous from the caller's point of view and never retried:
a failed send surfaces as ``EmailServiceError`` so the request that triggered
it can report the failure.
"""

from typing import Optional

import structlog
from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType

from idgate.core.config.settings import Settings
from idgate.core.exceptions import EmailServiceError
from idgate.core.logging import mask
from idgate.domain.interfaces.services import IEmailService

logger = structlog.get_logger(__name__)


class EmailService(IEmailService):
    """Infrastructure email service.

    In test mode messages are logged instead of sent and no SMTP client is
    built.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._test_mode = settings.EMAIL_TEST_MODE
        self._fastmail: Optional[FastMail] = None if self._test_mode else FastMail(self._connection_config())
        logger.info(
            "EmailService initialized",
            test_mode=self._test_mode,
            smtp_configured=bool(settings.SMTP_USERNAME),
        )

    def _connection_config(self) -> ConnectionConfig:
        settings = self._settings
        password = settings.SMTP_PASSWORD.get_secret_value() if settings.SMTP_PASSWORD else ""
        return ConnectionConfig(
            MAIL_USERNAME=settings.SMTP_USERNAME or "",
            MAIL_PASSWORD=password,
            MAIL_FROM=settings.FROM_EMAIL,
            MAIL_FROM_NAME=settings.FROM_NAME,
            MAIL_PORT=settings.SMTP_PORT,
            MAIL_SERVER=settings.SMTP_HOST,
            MAIL_STARTTLS=settings.SMTP_USE_TLS,
            MAIL_SSL_TLS=settings.SMTP_USE_SSL,
            USE_CREDENTIALS=bool(settings.SMTP_USERNAME and password),
            VALIDATE_CERTS=True,
            TIMEOUT=settings.SMTP_TIMEOUT_SECONDS,
        )

    async def send(self, address: str, subject: str, body: str) -> None:
        """Send one plain-text message to ``address``.

        Raises:
            EmailServiceError: If the SMTP exchange fails.
        """
        if self._test_mode:
            logger.info("Email (test mode)", to_email=mask(address), subject=subject, body_length=len(body))
            return

        message = MessageSchema(
            subject=subject,
            recipients=[address],
            body=body,
            subtype=MessageType.plain,
        )
        try:
            await self._fastmail.send_message(message)
        except Exception as e:
            logger.error(
                "Failed to send email",
                to_email=mask(address),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise EmailServiceError("Failed to send email.") from e

        logger.info("Email sent", to_email=mask(address), subject=subject)
