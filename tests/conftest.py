import os

# Must run before idgate is imported: settings are read once at import time.
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("EMAIL_TEST_MODE", "true")
os.environ.setdefault("LOG_JSON", "false")

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from idgate.core.config.settings import Settings
from idgate.infrastructure.database.async_db import create_async_db_and_tables
from idgate.infrastructure.repositories.user_repository import UserRepository
from tests.factories.oauth import TEST_SIGNING_KEY
from tests.factories.user import TEST_ROUNDS



@pytest.fixture
def make_settings():
    """Builds an isolated Settings object; keyword arguments override the test defaults."""

    def _make(**overrides) -> Settings:
        values = {
            "AUTH_MODE": "db_auth",
            "BOOTSTRAP_ADMIN_USERNAME": "admin",
            "PBKDF2_ROUNDS": TEST_ROUNDS,
            "EXT_ENDPOINT": "https://idgate.example.com",
            "EMAIL_TEST_MODE": True,
            "OAUTH_CLIENT_ID": "idgate-client",
            "OAUTH_CLIENT_SECRET": "idgate-secret",
            "OAUTH_TOKEN_URL": "https://idp.example.com/oauth/token",
            "OAUTH_REDIRECT_URL": "https://idgate.example.com/api/v1/auth/oauth/callback",
            "OAUTH_SIGNING_ALGORITHM": "HS256",
            "OAUTH_SIGNING_KEY": TEST_SIGNING_KEY,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def app_settings(make_settings) -> Settings:
    return make_settings()


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """File-backed SQLite engine; every transaction takes the write lock up front."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'idgate.db'}",
        connect_args={"timeout": 30},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    await create_async_db_and_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def user_repository(db_session) -> UserRepository:
    return UserRepository(db_session, pbkdf2_rounds=TEST_ROUNDS)
