"""Application lifecycle management."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from idgate.core.config.settings import settings
from idgate.core.logging import logger
from idgate.core.ratelimiter import get_limiter


def create_lifespan_manager():
    """Create the application lifespan manager."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.limiter = get_limiter()
        logger.info("application_startup", env=settings.APP_ENV, version=settings.VERSION)

        yield

        logger.info("application_shutdown", env=settings.APP_ENV)

    return lifespan
