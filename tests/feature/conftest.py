"""Fixtures for end-to-end journeys through the HTTP API.

The application runs against a file-backed SQLite credential store. Redis,
SMTP and the identity provider's token endpoint are replaced with in-process
doubles.
"""

from typing import Dict, List, Optional, Tuple
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from idgate.core.application import create_application
from idgate.domain.entities.user import NewUser
from idgate.domain.interfaces.services import IEmailService
from idgate.infrastructure.database.async_db import get_async_db
from idgate.infrastructure.dependency_injection.auth_dependencies import (
    get_email_service,
    get_oauth_code_exchanger,
    get_settings,
)
from idgate.infrastructure.redis import get_redis
from idgate.infrastructure.repositories.user_repository import UserRepository
from tests.factories.user import TEST_ROUNDS


class InMemoryRedis:
    """Dict-backed double for the three Redis commands the session store uses."""

    def __init__(self):
        self.data: Dict[str, str] = {}
        self.ttls: Dict[str, Optional[int]] = {}

    async def set(self, key: str, value: str, ex: Optional[int] = None):
        self.data[key] = value
        self.ttls[key] = ex
        return True

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed


class CapturingEmailService(IEmailService):
    def __init__(self):
        self.outbox: List[Tuple[str, str, str]] = []

    async def send(self, address: str, subject: str, body: str) -> None:
        self.outbox.append((address, subject, body))


@pytest.fixture
def redis_double() -> InMemoryRedis:
    return InMemoryRedis()


@pytest.fixture
def email_double() -> CapturingEmailService:
    return CapturingEmailService()


@pytest.fixture
def code_exchanger() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def journey_settings(app_settings):
    """Settings used by the running application; tests may replace it before the first request."""
    return {"value": app_settings}


@pytest_asyncio.fixture
async def app(session_factory, redis_double, email_double, code_exchanger, journey_settings):
    application = create_application()

    async def override_db():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_async_db] = override_db
    application.dependency_overrides[get_redis] = lambda: redis_double
    application.dependency_overrides[get_email_service] = lambda: email_double
    application.dependency_overrides[get_oauth_code_exchanger] = lambda: code_exchanger
    application.dependency_overrides[get_settings] = lambda: journey_settings["value"]
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def seed_user(session_factory):
    """Registers a user directly in the credential store and returns its id."""

    async def _seed(username: str, email: str, password: Optional[str] = None, sysadmin_flag: bool = False) -> int:
        async with session_factory() as session:
            repository = UserRepository(session, pbkdf2_rounds=TEST_ROUNDS)
            return await repository.register(
                NewUser(username=username, email=email, password=password, sysadmin_flag=sysadmin_flag)
            )

    return _seed
