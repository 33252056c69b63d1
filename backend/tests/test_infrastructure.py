"""
Smoke tests to verify test infrastructure is working correctly.

These tests validate that the test database, fixtures, and basic
testing setup are functioning properly.
"""

import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.version import __version__
from app.testing import create_user, get_auth_headers


@pytest.mark.unit
async def test_database_session(session: AsyncSession):
    """Test that database session fixture works."""
    assert session is not None
    assert isinstance(session, AsyncSession)


@pytest.mark.unit
async def test_create_user_factory(session: AsyncSession):
    """Test that user factory creates users correctly."""
    user = await create_user(
        session,
        email="factory-test@example.com",
        username="factory",
        gold=25,
    )

    assert user.id is not None
    assert user.email == "factory-test@example.com"
    assert user.username == "factory"
    assert user.gold == 25
    assert user.is_active is True
    assert user.hashed_password is not None


@pytest.mark.integration
async def test_version_endpoint(client: AsyncClient):
    """Test the version endpoint to verify API is working."""
    response = await client.get("/api/v1/version")
    assert response.status_code == 200
    assert response.json() == {"version": __version__}


@pytest.mark.integration
async def test_authenticated_request(client: AsyncClient, session: AsyncSession):
    """Test that authenticated requests work with auth headers."""
    user = await create_user(session, email="auth-test@example.com", username="authtest")

    response = await client.get("/api/v1/users/me", headers=get_auth_headers(user))
    assert response.status_code == 200

    data = response.json()
    assert data["email"] == "auth-test@example.com"
    assert data["id"] == user.id
    assert data["username"] == "authtest"


@pytest.mark.integration
async def test_unauthenticated_request_is_rejected(client: AsyncClient):
    response = await client.get("/api/v1/users/me")
    assert response.status_code == 401
