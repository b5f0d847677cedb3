"""Main application entry point for the FastAPI application."""

from idgate.core.application import create_application
from idgate.core.initialization import initialize_application

initialize_application()

app = create_application()
