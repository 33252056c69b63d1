"""Unit tests for the REST client, using httpx.MockTransport in place of a server."""

import httpx
import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from app.client.api import ApiClient, ApiError, extract_server_message
from app.testing import create_user, get_auth_token


def _client(handler, token: str | None = None) -> ApiClient:
    return ApiClient("http://test/api/v1", token=token, transport=httpx.MockTransport(handler))


async def test_get_returns_decoded_json_and_sends_token() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        seen["path"] = request.url.path
        return httpx.Response(200, json=[{"id": 1}])

    async with _client(handler, token="abc") as api:
        assert await api.get("/pet/inventory") == [{"id": 1}]

    assert seen == {"auth": "Bearer abc", "path": "/api/v1/pet/inventory"}


async def test_error_response_exposes_detail() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"detail": "Not enough gold."})

    async with _client(handler) as api:
        with pytest.raises(ApiError) as excinfo:
            await api.post("/shop/buy", json={"itemId": 1})

    assert excinfo.value.status_code == 400
    assert excinfo.value.server_message == "Not enough gold."


def test_server_message_falls_back_to_message_key() -> None:
    response = httpx.Response(500, json={"message": "Server error"})
    assert extract_server_message(response) == "Server error"


def test_server_message_ignores_structured_detail() -> None:
    """FastAPI validation errors put a list in ``detail``."""
    response = httpx.Response(422, json={"detail": [{"msg": "field required"}]})
    assert extract_server_message(response) is None


async def test_transport_failure_raises_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as api:
        with pytest.raises(ApiError) as excinfo:
            await api.get("/pet/inventory")

    assert excinfo.value.status_code is None
    assert excinfo.value.server_message is None


async def test_no_content_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    async with _client(handler) as api:
        assert await api.post("/challenges/1/join") is None


async def test_login_posts_form_and_stores_token() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v1/auth/token"
        assert b"username=alice%40example.com" in request.content
        return httpx.Response(200, json={"access_token": "tok", "token_type": "bearer"})

    async with _client(handler) as api:
        assert await api.login("alice@example.com", "Password123!") == "tok"
        assert api.token == "tok"


async def test_non_success_status_without_body_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(304)

    async with _client(handler) as api:
        with pytest.raises(ApiError) as excinfo:
            await api.get("/pet")

    assert excinfo.value.status_code == 304


async def test_collection_paths_without_trailing_slash_resolve(api_client: ApiClient, session: AsyncSession) -> None:
    user = await create_user(session)
    api_client.token = get_auth_token(user)

    pet = await api_client.get("/pet")
    groups = await api_client.get("/groups")

    assert pet is not None
    assert pet["name"]
    assert groups == []
