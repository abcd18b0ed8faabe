"""Tests for base async client."""

import asyncio

import httpx
import pytest

from sportsday.clients.base import BaseAsyncClient, SheetsAPIError


class TestBaseAsyncClient:
    """Tests for base async HTTP client."""

    @pytest.mark.asyncio
    async def test_context_manager_lifecycle(self, respx_mock):
        """Client should properly initialize and cleanup."""
        respx_mock.get("https://api.example.com/test").mock(
            return_value=httpx.Response(200, json={"status": "ok"})
        )

        async with BaseAsyncClient(base_url="https://api.example.com") as client:
            assert client._client is not None
            result = await client.get("/test")
            assert result == {"status": "ok"}

        assert client._client is None

    @pytest.mark.asyncio
    async def test_raises_if_used_without_context_manager(self):
        client = BaseAsyncClient(base_url="https://api.example.com")

        with pytest.raises(RuntimeError, match="not initialized"):
            await client.get("/test")

    @pytest.mark.asyncio
    async def test_request_adds_leading_slash(self, respx_mock):
        respx_mock.get("https://api.example.com/test").mock(
            return_value=httpx.Response(200, json={"data": "value"})
        )

        async with BaseAsyncClient(base_url="https://api.example.com") as client:
            assert await client.get("/test") == {"data": "value"}
            assert await client.get("test") == {"data": "value"}

    @pytest.mark.asyncio
    async def test_handles_http_errors(self, respx_mock):
        respx_mock.get("https://api.example.com/error").mock(
            return_value=httpx.Response(404, text="Not Found")
        )

        async with BaseAsyncClient(base_url="https://api.example.com") as client:
            with pytest.raises(SheetsAPIError) as exc_info:
                await client.get("/error")

            assert exc_info.value.status_code == 404
            assert "Not Found" in exc_info.value.response_body

    @pytest.mark.asyncio
    async def test_handles_invalid_json(self, respx_mock):
        respx_mock.get("https://api.example.com/invalid").mock(
            return_value=httpx.Response(200, text="not json")
        )

        async with BaseAsyncClient(base_url="https://api.example.com") as client:
            with pytest.raises(SheetsAPIError, match="Invalid JSON"):
                await client.get("/invalid")

    @pytest.mark.asyncio
    async def test_get_passes_params(self, respx_mock):
        route = respx_mock.get("https://api.example.com/data").mock(
            return_value=httpx.Response(200, json={"result": "success"})
        )

        async with BaseAsyncClient(base_url="https://api.example.com") as client:
            await client.get("/data", params={"key": "value"})

        assert route.calls.last.request.url.params["key"] == "value"


class TestNoRetry:
    """Failures surface on the first attempt; retrying is the caller's call."""

    @pytest.mark.asyncio
    async def test_no_retry_on_503(self, respx_mock):
        route = respx_mock.get("https://api.example.com/unavailable")
        route.mock(return_value=httpx.Response(503, text="Service Unavailable"))

        async with BaseAsyncClient(base_url="https://api.example.com") as client:
            with pytest.raises(SheetsAPIError) as exc_info:
                await client.get("/unavailable")

        assert exc_info.value.status_code == 503
        assert route.call_count == 1

    @pytest.mark.asyncio
    async def test_timeout_raises(self, respx_mock):
        route = respx_mock.get("https://api.example.com/slow")
        route.side_effect = httpx.ReadTimeout("Connection timed out")

        async with BaseAsyncClient(base_url="https://api.example.com") as client:
            with pytest.raises(SheetsAPIError, match="timeout"):
                await client.get("/slow")
        assert route.call_count == 1

    @pytest.mark.asyncio
    async def test_network_error_raises(self, respx_mock):
        respx_mock.get("https://api.example.com/down").mock(
            side_effect=httpx.ConnectError("Connection refused")
        )

        async with BaseAsyncClient(base_url="https://api.example.com") as client:
            with pytest.raises(SheetsAPIError, match="Network error"):
                await client.get("/down")


class TestConcurrencyLimit:
    @pytest.mark.asyncio
    async def test_in_flight_requests_bounded(self, respx_mock):
        """No more than max_concurrency requests run at once."""
        in_flight = 0
        peak = 0

        async def slow_response(request):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return httpx.Response(200, json={"ok": True})

        respx_mock.get("https://api.example.com/test").mock(side_effect=slow_response)

        async with BaseAsyncClient(base_url="https://api.example.com", max_concurrency=2) as client:
            await asyncio.gather(*(client.get("/test") for _ in range(6)))

        assert peak <= 2
