"""
Scholarship Portal Backend — Test Configuration (conftest.py)
==============================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets a fresh in-memory SQLite database (aiosqlite) with the
       full schema, so service and API tests run real SQL without PostgreSQL.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── database:     Database handle on an in-memory SQLite engine
    ├── db_session:   AsyncSession from that handle
    └── test_client:  HTTPX AsyncClient bound to a fresh app using `database`
"""

import os

# Override settings for testing BEFORE any application imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["PAYMENT_GATEWAY_KEY"] = "sk_test_not_real"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from scholarship_portal.database import Database  # noqa: E402


@pytest_asyncio.fixture
async def database():
    """
    In-memory SQLite database with every collection table created.

    StaticPool keeps a single connection, so the in-memory database survives
    across sessions for the duration of one test.
    """
    db = Database("sqlite+aiosqlite://", poolclass=StaticPool)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """A session for calling services directly; rolled back afterwards."""
    async with database.session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to a freshly built app.

    ASGITransport does not run the lifespan, so the test database handle is
    placed on app.state directly.

    Usage:
        async def test_liveness(test_client):
            response = await test_client.get("/")
            assert response.text == "Server is running..."
    """
    from scholarship_portal.main import create_app

    app = create_app()
    app.state.database = database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
