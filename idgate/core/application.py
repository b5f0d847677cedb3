"""Application factory for creating and configuring the FastAPI application."""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from idgate.adapters.api.v1 import api_router
from idgate.core.config.settings import settings
from idgate.core.handlers import register_exception_handlers
from idgate.core.lifecycle import create_lifespan_manager
from idgate.core.ratelimiter import get_limiter


def create_application() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Identity gateway: local login, OAuth login and password reset.",
        lifespan=create_lifespan_manager(),
        default_response_class=JSONResponse,
    )
    app.state.limiter = get_limiter()

    register_exception_handlers(app)

    app.include_router(api_router, prefix="/api/v1")

    return app
