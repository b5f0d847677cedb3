"""
Application-specific settings.
"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """
    Defines application-wide settings like project name, logging and the
    externally visible endpoint.

    Security Note:
        - EXT_ENDPOINT is embedded in password reset emails; it must point at
          the public HTTPS address of the service, never at an internal host.
    """
    PROJECT_NAME: str = "idgate"
    VERSION: str = "0.1.0"
    APP_ENV: str = "development"
    DEBUG: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    EXT_ENDPOINT: str = Field(default="http://localhost:8000")
    SESSION_COOKIE_NAME: str = "sid"

    @field_validator("EXT_ENDPOINT")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """
        Removes a trailing slash so links can be joined with a leading one.
        """
        return v.rstrip("/")
