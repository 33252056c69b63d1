"""
Pytest configuration and fixtures for backend tests.

This module provides the core testing infrastructure including:
- Test database setup and teardown (in-memory SQLite per test)
- Session fixtures for database access
- Test client for API integration tests
- An ApiClient wired to the app for client component tests
"""

import os

# Settings are read at import time, so the environment must be ready first.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from app.client.api import ApiClient  # noqa: E402
from app.core.config import settings  # noqa: E402
from app.core.rate_limit import limiter  # noqa: E402
from app.db.session import get_session, init_models  # noqa: E402
from app.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_BASE_URL = "http://test"


@pytest.fixture(scope="function")
async def engine():
    """Create a fresh in-memory database with every table in place."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_models(test_engine)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture(scope="function")
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh database session for each test.

    The database itself is discarded with the engine, so no cleanup of
    individual tables is needed.
    """
    async_session = sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as test_session:
        yield test_session


@pytest.fixture
def override_session(session: AsyncSession):
    """Route the app's session dependency to the test session."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = override_get_session

    # Disable rate limiting in tests
    limiter.enabled = False

    yield session

    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
async def client(override_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async HTTP client for testing API endpoints.

    Usage:
        async def test_endpoint(client: AsyncClient):
            response = await client.get("/api/v1/version")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url=TEST_BASE_URL) as test_client:
        yield test_client


@pytest.fixture
async def api_client(override_session: AsyncSession) -> AsyncGenerator[ApiClient, None]:
    """An ApiClient talking to the app in-process; set ``.token`` to authenticate."""
    async with ApiClient(
        f"{TEST_BASE_URL}{settings.API_V1_STR}",
        transport=ASGITransport(app=app),
    ) as test_api:
        yield test_api
