"""Application initialization and setup.

Runs before the application object is created: loads environment variables
and configures logging.
"""

from dotenv import load_dotenv

from idgate.core.config.settings import settings
from idgate.core.logging import configure_logging


def initialize_application() -> None:
    load_dotenv(override=True)
    configure_logging(log_level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
