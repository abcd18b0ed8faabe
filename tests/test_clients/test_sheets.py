"""Tests for the Google Sheets values client."""

import httpx
import pytest

from sportsday.clients import SheetsAPIError, SheetsClient
from sportsday.pipeline import RangeRequest

REQUEST = RangeRequest(
    api_key="test_key_1234567890",
    sheet_id="sheet123",
    range="summary!A3:B37",
    dimension="COLUMNS",
)


class TestSheetsClient:
    @pytest.mark.asyncio
    async def test_fetch_returns_values(self, respx_mock):
        route = respx_mock.route(host="sheets.googleapis.com").mock(
            return_value=httpx.Response(
                200,
                json={
                    "range": "summary!A3:B37",
                    "majorDimension": "COLUMNS",
                    "values": [["year", 7, 7], ["form", "B", "D"]],
                },
            )
        )

        async with SheetsClient() as client:
            grid = await client.fetch(REQUEST)

        assert grid == [["year", 7, 7], ["form", "B", "D"]]
        sent = route.calls.last.request.url
        assert sent.path == "/v4/spreadsheets/sheet123/values/summary!A3:B37"
        assert sent.params["majorDimension"] == "COLUMNS"
        assert sent.params["valueRenderOption"] == "UNFORMATTED_VALUE"
        assert sent.params["key"] == "test_key_1234567890"

    @pytest.mark.asyncio
    async def test_empty_range_returns_empty_grid(self, respx_mock):
        """The API omits "values" for a range with no data."""
        respx_mock.route(host="sheets.googleapis.com").mock(
            return_value=httpx.Response(200, json={"range": "summary!A3:B37"})
        )

        async with SheetsClient() as client:
            assert await client.fetch(REQUEST) == []

    @pytest.mark.asyncio
    async def test_bad_key_raises(self, respx_mock):
        respx_mock.route(host="sheets.googleapis.com").mock(
            return_value=httpx.Response(400, json={"error": {"message": "API key not valid"}})
        )

        async with SheetsClient() as client:
            with pytest.raises(SheetsAPIError) as exc_info:
                await client.fetch(REQUEST)

        assert exc_info.value.status_code == 400
        assert "API key not valid" in exc_info.value.response_body

    def test_defaults(self):
        client = SheetsClient()
        assert client.base_url == "https://sheets.googleapis.com/v4"
        assert client.max_concurrency == 4
        assert client.timeout == 30.0
