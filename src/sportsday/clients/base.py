"""Base async HTTP client with connection pooling and bounded concurrency.

The Sheets transport inherits from this base:
- Async/await for non-blocking I/O
- Connection pooling for performance
- A semaphore capping in-flight requests
- Errors mapped onto a single exception type

No retries or backoff happen here. A failed request raises immediately and
the caller decides what to do; the only timeout is the httpx one.

Usage:
    class MyAPIClient(BaseAsyncClient):
        def __init__(self, api_key: str):
            super().__init__(base_url="https://api.example.com")
            self.api_key = api_key

        async def get_data(self, name: str) -> dict:
            return await self.get(f"/data/{name}", params={"key": self.api_key})
"""

import asyncio
import logging
from typing import Any

import httpx


logger = logging.getLogger(__name__)


class SheetsAPIError(Exception):
    """Raised for any transport-level failure talking to the backend."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class BaseAsyncClient:
    """Base async HTTP client.

    Args:
        base_url: Base URL for all API requests
        headers: Default headers for all requests
        max_concurrency: Maximum simultaneous requests (default: 4)
        timeout: Request timeout in seconds (default: 30)
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        max_concurrency: int = 4,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.headers = headers or {}
        self.timeout = timeout
        self.max_concurrency = max_concurrency
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "BaseAsyncClient":
        """Async context manager entry."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            limits=httpx.Limits(
                max_keepalive_connections=self.max_concurrency,
                max_connections=self.max_concurrency * 2,
            ),
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make a single HTTP request and decode the JSON body.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path (relative to base_url)
            params: Query parameters

        Returns:
            Parsed JSON response as dictionary

        Raises:
            SheetsAPIError: On HTTP errors, invalid JSON, timeouts or
                network failures
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with context manager.")

        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"

        logger.debug("%s %s%s", method, self.base_url, endpoint)

        async with self._semaphore:
            try:
                response = await self._client.request(
                    method=method,
                    url=endpoint,
                    params=params,
                )
            except httpx.TimeoutException as e:
                logger.error("Request timeout for %s: %s", endpoint, e)
                raise SheetsAPIError(f"Request timeout: {e}") from e
            except httpx.NetworkError as e:
                logger.error("Network error for %s: %s", endpoint, e)
                raise SheetsAPIError(f"Network error: {e}") from e

        logger.debug("Response: %d for %s", response.status_code, endpoint)

        if response.status_code >= 400:
            error_body = response.text[:500]
            logger.error(
                "API error: %d %s - %s",
                response.status_code, endpoint, error_body,
            )
            raise SheetsAPIError(
                message=f"API request failed: {response.status_code}",
                status_code=response.status_code,
                response_body=error_body,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error("Failed to parse JSON response: %s", e)
            raise SheetsAPIError(
                message=f"Invalid JSON response: {e}",
                status_code=response.status_code,
                response_body=response.text[:500],
            ) from e

    async def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Convenience method for GET requests."""
        return await self._request("GET", endpoint, params=params)
