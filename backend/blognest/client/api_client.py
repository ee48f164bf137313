"""
BlogNest Client — HTTP API Client
===================================

What:  Async client for the BlogNest REST API used by the presentation layer.
How:   Wraps httpx.AsyncClient. Every method sends one request, checks the
       envelope's `success` flag and returns the payload part of the
       envelope as plain dicts/lists.
Who:   BlogCard actions, scripts and end-to-end tests (which pass an
       httpx.ASGITransport to talk to an in-process app).

Example:
    async with BlogApiClient("http://localhost:8080") as api:
        user = await api.login("a@x.com", "pw123")
        for blog in await api.list_blogs():
            print(blog["title"])
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """
    The API answered with `success: false` (or a non-JSON error).

    Attributes:
        status_code: HTTP status of the response
        message:     The envelope's human-readable message
        error:       The envelope's machine-readable error kind
    """

    def __init__(self, status_code: int, message: str, error: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.error = error
        super().__init__(f"{status_code} {error or 'error'}: {message}")


class BlogApiClient:
    """One method per endpoint of the BlogNest API."""

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        api_prefix: str = "/api/v1",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.api_prefix = api_prefix.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "BlogApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── Users ─────────────────────────────────────────────────────────────

    async def register(self, username: str, email: str, password: str) -> Dict[str, Any]:
        body = await self._request(
            "POST", "/user/register",
            json={"username": username, "email": email, "password": password},
        )
        return body["user"]

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        body = await self._request("POST", "/user/login", json={"email": email, "password": password})
        return body["user"]

    async def list_users(self) -> List[Dict[str, Any]]:
        body = await self._request("GET", "/user/get-all-user")
        return body["users"]

    # ── Blogs ─────────────────────────────────────────────────────────────

    async def list_blogs(self) -> List[Dict[str, Any]]:
        body = await self._request("GET", "/blog/get-all-blogs")
        return body["blogs"]

    async def create_blog(
        self, title: str, description: str, image: str, user_id: str
    ) -> Dict[str, Any]:
        body = await self._request(
            "POST", "/blog/create-blog",
            json={"title": title, "description": description, "image": image, "user": user_id},
        )
        return body["newBlog"]

    async def get_blog(self, blog_id: str) -> Dict[str, Any]:
        body = await self._request("GET", f"/blog/get-blog/{blog_id}")
        return body["blog"]

    async def update_blog(self, blog_id: str, **fields: str) -> Dict[str, Any]:
        body = await self._request("PUT", f"/blog/update-blog/{blog_id}", json=fields)
        return body["blog"]

    async def delete_blog(self, blog_id: str) -> str:
        """Returns the server's confirmation message."""
        body = await self._request("DELETE", f"/blog/delete-blog/{blog_id}")
        return body["message"]

    async def user_blogs(self, user_id: str) -> Dict[str, Any]:
        body = await self._request("GET", f"/blog/user-blog/{user_id}")
        return body["userBlog"]

    # ── Transport ─────────────────────────────────────────────────────────

    async def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        response = await self._client.request(method, f"{self.api_prefix}{path}", **kwargs)
        try:
            body = response.json()
        except ValueError:
            raise ApiClientError(response.status_code, response.text or response.reason_phrase)

        if not response.is_success or not body.get("success", False):
            logger.debug("%s %s failed: %s", method, path, body)
            raise ApiClientError(
                response.status_code,
                body.get("message", response.reason_phrase),
                body.get("error"),
            )
        return body
