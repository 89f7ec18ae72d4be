"""
TaskLedger Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── database:        Fresh SQLite schema, dropped after the test
    ├── api_headers:     Headers carrying the test API key
    └── test_client:     HTTPX AsyncClient bound to the app, with `database`
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run BEFORE any taskledger import: settings and the engine are built
# at module import time
_db_dir = tempfile.mkdtemp(prefix="taskledger_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_dir}/test.db"
os.environ["APP_KEY"] = "test-key"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

TEST_API_KEY = "test-key"


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_task(mock_db_session):
            mock_db_session.get.return_value = task
            result = await task_service.get(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def api_headers():
    return {"X-Api-Key": TEST_API_KEY}


@pytest_asyncio.fixture
async def database():
    """
    Creates every table on the SQLite test database and drops them afterwards.

    The engine is disposed at the end so no pooled connection outlives the
    test's event loop.
    """
    from taskledger.database import create_tables, dispose_engine, drop_tables

    await create_tables()
    yield
    await drop_tables()
    await dispose_engine()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from taskledger.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
