import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from idgate.core.application import create_application


@pytest_asyncio.fixture
async def app():
    application = create_application()
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
