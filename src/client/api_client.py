"""HTTP client for the Bookmarks API."""
import os
from typing import Any
from urllib.parse import quote

import httpx


def get_api_base_url() -> str:
    """Get the API base URL from environment."""
    return os.getenv("BOOKMARKS_API_URL", "http://localhost:8000")


def get_default_timeout() -> float:
    """Get the default request timeout."""
    return float(os.getenv("BOOKMARKS_API_TIMEOUT", "30.0"))


class ApiClientError(Exception):
    """
    Raised when a call fails.

    `status_code` is the HTTP status, or 0 when no response was received.
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class BookmarksApiClient:
    """
    Thin async wrapper over the REST routes.

    Every request carries the user id header. Responses are unwrapped from the
    `{success, data, error}` envelope and `data` is returned as decoded JSON.
    """

    def __init__(
        self,
        user_id: str,
        base_url: str | None = None,
        timeout: float | None = None,
        user_id_header: str = "X-User-Id",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url or get_api_base_url(),
            timeout=timeout if timeout is not None else get_default_timeout(),
            headers={user_id_header: user_id},
            transport=transport,
        )

    async def __aenter__(self) -> "BookmarksApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise ApiClientError(0, f"Request failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            if response.is_error:
                raise ApiClientError(response.status_code, response.text or response.reason_phrase)
            raise ApiClientError(response.status_code, "Unexpected response body")

        if response.is_error or not body.get("success", False):
            message = body.get("error") or response.reason_phrase or "Request failed"
            raise ApiClientError(response.status_code, message)
        return body.get("data")

    # Bookmarks

    async def list_bookmarks(self, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """GET /api/bookmarks with already-encoded query parameters."""
        return await self._request("GET", "/api/bookmarks", params=params or {})

    async def get_bookmark(self, bookmark_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/api/bookmarks/{bookmark_id}")

    async def create_bookmark(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/api/bookmarks", json=payload)

    async def replace_bookmark_tags(self, bookmark_id: str, tags: list[str]) -> dict[str, Any]:
        return await self._request("PUT", f"/api/bookmarks/{bookmark_id}/tags", json={"tags": tags})

    async def add_bookmark_tags(self, bookmark_id: str, tags: list[str]) -> dict[str, Any]:
        return await self._request("POST", f"/api/bookmarks/{bookmark_id}/tags", json={"tags": tags})

    async def remove_bookmark_tag(self, bookmark_id: str, tag_name: str) -> dict[str, Any]:
        return await self._request(
            "DELETE", f"/api/bookmarks/{bookmark_id}/tags/{quote(tag_name, safe='')}",
        )

    # Tags

    async def list_tags(self, search: str | None = None) -> list[dict[str, Any]]:
        params = {"search": search} if search else {}
        return await self._request("GET", "/api/tags", params=params)

    async def create_tag(self, name: str) -> dict[str, Any]:
        return await self._request("POST", "/api/tags", json={"name": name})

    async def update_tag(self, tag_id: str, name: str) -> dict[str, Any]:
        return await self._request("PUT", f"/api/tags/{tag_id}", json={"name": name})

    async def delete_tag(self, tag_id: str) -> None:
        await self._request("DELETE", f"/api/tags/{tag_id}")

    async def tag_stats(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/api/tags/stats")

    async def popular_tags(self, limit: int | None = None) -> list[dict[str, Any]]:
        params = {"limit": limit} if limit is not None else {}
        return await self._request("GET", "/api/tags/popular", params=params)

    # Categories

    async def list_categories(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/api/categories")

    async def create_category(self, name: str) -> dict[str, Any]:
        return await self._request("POST", "/api/categories", json={"name": name})
