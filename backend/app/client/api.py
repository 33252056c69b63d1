"""Async HTTP client for the Habit Pet REST API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api/v1"


class ApiError(Exception):
    """A failed API call.

    ``server_message`` holds the message the server sent back, when it sent
    one; transport failures and unparseable responses leave it empty.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, server_message: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message


def extract_server_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    for key in ("detail", "message"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None


class ApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ) -> None:
        self.token = token
        self._client = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(f"{method} {path} failed: {exc}") from exc

        if not response.is_success:
            server_message = extract_server_message(response)
            raise ApiError(
                f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
                server_message=server_message,
            )
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"{method} {path} returned invalid JSON", status_code=response.status_code) from exc

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self._request("POST", path, json=json)

    async def login(self, login: str, password: str) -> str:
        """Exchange credentials for a bearer token and keep it for later calls."""
        payload = await self._request(
            "POST",
            "/auth/token",
            data={"username": login, "password": password},
        )
        self.token = payload["access_token"]
        return self.token
