"""API test fixtures — FastAPI app per test with the DB manager swapped for SQLite.

Invariants:
    - Each test gets its own app instance (no shared dependency overrides)
    - app.state.db_manager points at the in-memory test engine
"""

import pytest
from httpx import ASGITransport, AsyncClient

from userapi.config import Settings
from userapi.infrastructure.database import DatabaseSessionManager
from userapi.main import create_app


@pytest.fixture
def test_app(test_engine, test_session_factory):
    app = create_app(Settings(database_url="sqlite+aiosqlite:///:memory:"))
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app):
    async with AsyncClient(
        transport=ASGITransport(app=test_app), base_url="http://test",
    ) as c:
        yield c
