"""API test fixtures — FastAPI test client over the in-memory test database.

Invariants:
    - get_db dependency overridden to use the test DB session
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - broken_db_client swaps get_db for a session whose execute() raises OperationalError
"""

import pytest
from sqlalchemy.exc import OperationalError
from httpx import ASGITransport, AsyncClient

from facturas_os.infrastructure.database import get_db, DatabaseSessionManager
import facturas_os.infrastructure.database as db_module
from facturas_os.main import app


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Readiness probe reads db_manager directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


class _BrokenSession:
    """Session stand-in whose every query fails like a dropped connection."""

    async def execute(self, *args, **kwargs):
        raise OperationalError(
            "SELECT ...", {}, Exception("Can't connect to MySQL server"),
        )


@pytest.fixture
async def broken_db_client():
    async def override_get_db():
        yield _BrokenSession()

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
