"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.api.deps import get_db
from apogee.clients.base import SERVICE_KEY_HEADER
from apogee.core.config import settings
from apogee.core.constants import ServiceName
from apogee.main import create_app


@pytest.fixture
def mock_db() -> AsyncMock:
    """Async session double: flush/execute/scalar are awaitable, add is not."""
    session = AsyncMock(spec=AsyncSession)
    session.add = MagicMock()
    session.add_all = MagicMock()
    return session


@pytest.fixture
def service_headers() -> dict[str, str]:
    """Headers that authenticate as another portal service."""
    return {SERVICE_KEY_HEADER: settings.INTERNAL_SERVICE_KEY}


def _app_with_db(service: str, session: AsyncMock):
    app = create_app(service)

    async def override_get_db():
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def quoting_app(mock_db):
    app = _app_with_db(ServiceName.QUOTING, mock_db)
    yield app
    app.dependency_overrides = {}


@pytest.fixture
def designer_app(mock_db):
    app = _app_with_db(ServiceName.BENEFIT_DESIGNER, mock_db)
    yield app
    app.dependency_overrides = {}


@pytest.fixture
def customer_app(mock_db):
    app = _app_with_db(ServiceName.CUSTOMER, mock_db)
    yield app
    app.dependency_overrides = {}


@pytest.fixture
def quoting_client(quoting_app) -> TestClient:
    return TestClient(quoting_app, raise_server_exceptions=False)


@pytest.fixture
def designer_client(designer_app) -> TestClient:
    return TestClient(designer_app, raise_server_exceptions=False)


@pytest.fixture
def customer_client(customer_app) -> TestClient:
    return TestClient(customer_app, raise_server_exceptions=False)


@pytest.fixture
def recorded(mock_db) -> list:
    """Collect every ORM object added to the session; flush hands out ids."""
    added: list = []
    mock_db.add.side_effect = added.append
    mock_db.add_all.side_effect = added.extend

    async def flush():
        for index, obj in enumerate(added, start=1):
            if getattr(obj, "id", None) is None:
                obj.id = index

    mock_db.flush.side_effect = flush
    return added
