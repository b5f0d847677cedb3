"""Main application settings and configuration management.

This module composes all the application settings from the different modules
(app, database, redis, auth, email) into a single, immutable `Settings` class.

It loads settings from environment variables and .env files, validates them,
and provides a single `settings` object used to wire the application. Domain
services never read the singleton directly: they receive a `Settings`
instance through their constructor.

Environment Support:
- Development: Uses .env
- Test: Uses .env.test when present
- Staging: Uses .env.staging when present
- Production: Uses .env.production when present
"""

import logging
import os
from pathlib import Path

from pydantic_settings import SettingsConfigDict

from .app import AppSettings
from .auth import AuthSettings
from .database import DatabaseSettings
from .email import EmailSettings
from .redis import RedisSettings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
logging.getLogger("passlib").setLevel(logging.ERROR)


class Settings(AppSettings, DatabaseSettings, RedisSettings, AuthSettings, EmailSettings):
    """The main settings class that aggregates all application configurations.

    Instances are frozen: configuration is loaded once at startup and passed
    explicitly to the services that need it.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )


ENV_FILES = {
    "development": ".env",
    "test": ".env.test",
    "staging": ".env.staging",
    "production": ".env.production",
}


def create_settings() -> Settings:
    """Create settings instance with environment-specific configuration.

    Returns:
        Settings: Configured settings instance
    """
    env = os.getenv("APP_ENV", "development")
    env_file = ENV_FILES.get(env, ".env")

    if env != "development" and Path(env_file).exists():
        logger.info(f"Loading environment configuration from {env_file}")
        settings_instance = Settings(_env_file=env_file)
    elif Path(".env").exists():
        logger.info(f"Loading environment configuration from .env (environment: {env})")
        settings_instance = Settings()
    else:
        logger.info(f"No .env file found, using environment variables only (environment: {env})")
        settings_instance = Settings()

    if settings_instance.AUTH_MODE.value != "db_auth" and not settings_instance.BOOTSTRAP_ADMIN_USERNAME:
        logger.warning("No bootstrap admin configured; password reset is disabled for everyone")

    return settings_instance


settings = create_settings()
