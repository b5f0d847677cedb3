"""
Asynchronous Database Utilities Module

Provides the async SQLAlchemy engine and session factory used by the
credential store. The engine is built on first use so that importing this
module never opens a connection or requires the database driver.

**Security Note**: Configure DATABASE_URL with SSL parameters when the
database is reached over an untrusted network, and never log the URL since it
carries credentials.

Key Components:
    - get_engine: The cached asynchronous engine.
    - get_session_factory: The cached session factory bound to that engine.
    - get_async_db: FastAPI dependency yielding one session per request.
    - create_async_db_and_tables: Creates the schema (tests and local setups).
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from structlog import get_logger

from idgate.core.config.settings import settings

logger = get_logger(__name__)


@lru_cache
def get_engine() -> AsyncEngine:
    logger.debug("Creating async database engine")
    return create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO, future=True)


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=get_engine(), class_=AsyncSession, expire_on_commit=False)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields an AsyncSession.

    Rolls back the transaction if the request handler raises and always
    closes the session afterwards.

    Yields:
        AsyncSession: An asynchronous database session for one request.
    """
    async with get_session_factory()() as session:
        logger.debug("Async database session created")
        try:
            yield session
        except Exception:
            await session.rollback()
            logger.error("Async database session rollback due to error")
            raise
        finally:
            await session.close()
            logger.debug("Async database session closed")


async def create_async_db_and_tables(engine: AsyncEngine | None = None) -> None:
    """Create every table registered on the SQLModel metadata."""
    # Registers the users table on the metadata.
    from idgate.domain.entities import user  # noqa: F401

    target = engine or get_engine()
    async with target.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables created")
