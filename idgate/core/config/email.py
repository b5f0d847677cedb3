"""Email configuration settings.

Defines the SMTP connection used to dispatch password reset notifications.
"""

from typing import Optional

from pydantic import EmailStr, Field, SecretStr
from pydantic_settings import BaseSettings


class EmailSettings(BaseSettings):
    """Email configuration settings with secure defaults.

    Security considerations:
    - SMTP credentials are handled as SecretStr to prevent logging
    - TLS is enforced by default

    Attributes:
        SMTP_HOST: SMTP server hostname
        SMTP_PORT: SMTP server port (587 for STARTTLS, 465 for SSL)
        SMTP_USERNAME: SMTP authentication username
        SMTP_PASSWORD: SMTP authentication password (SecretStr)
        SMTP_USE_TLS: Enable STARTTLS
        SMTP_USE_SSL: Enable implicit SSL (alternative to STARTTLS)
        SMTP_TIMEOUT_SECONDS: Connection timeout for a single send
        FROM_EMAIL: Sender address
        FROM_NAME: Sender display name
        EMAIL_TEST_MODE: Log messages instead of sending them
        RESET_EMAIL_SUBJECT: Subject line of the reset notification
    """

    SMTP_HOST: str = Field(default="localhost", description="SMTP server hostname")
    SMTP_PORT: int = Field(default=587, ge=1, le=65535, description="SMTP server port")
    SMTP_USERNAME: Optional[str] = Field(default=None, description="SMTP authentication username")
    SMTP_PASSWORD: Optional[SecretStr] = Field(default=None, description="SMTP authentication password")
    SMTP_USE_TLS: bool = Field(default=True, description="Enable STARTTLS")
    SMTP_USE_SSL: bool = Field(default=False, description="Enable implicit SSL")
    SMTP_TIMEOUT_SECONDS: int = Field(default=60, ge=1)

    FROM_EMAIL: EmailStr = Field(default="noreply@example.com", description="Sender address")
    FROM_NAME: str = Field(default="idgate", description="Sender display name")

    EMAIL_TEST_MODE: bool = Field(default=False, description="Log emails instead of sending")
    RESET_EMAIL_SUBJECT: str = "Reset your password"
