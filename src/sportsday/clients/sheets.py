"""Google Sheets values API client.

API Documentation: https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/get

Usage:
    from sportsday.clients.sheets import SheetsClient
    from sportsday.pipeline.request import RangeRequest

    async with SheetsClient() as client:
        grid = await client.fetch(
            RangeRequest(api_key="...", sheet_id="...", range="summary!A3:B37")
        )
"""

import logging

from sportsday.clients.base import BaseAsyncClient
from sportsday.pipeline.request import SHEETS_BASE_URL, Grid, RangeRequest

logger = logging.getLogger(__name__)


class SheetsClient(BaseAsyncClient):
    """Async client for the Sheets values endpoint.

    The API key travels inside each RangeRequest rather than on the client,
    since it is part of what identifies a cached result.

    Args:
        max_concurrency: Max simultaneous requests (default: 4)
        timeout: Request timeout in seconds (default: 30)
    """

    def __init__(self, max_concurrency: int = 4, timeout: float = 30.0) -> None:
        super().__init__(
            base_url=SHEETS_BASE_URL,
            headers={"Accept": "application/json"},
            max_concurrency=max_concurrency,
            timeout=timeout,
        )

    async def fetch(self, request: RangeRequest) -> Grid:
        """Fetch the grid of cell values for a range.

        Args:
            request: The resolved range request

        Returns:
            Two-dimensional list of cells ordered by the requested major
            dimension. Empty if the range holds no values (the API omits
            the "values" field in that case).
        """
        result = await self.get(request.path, params=request.params)
        values = result.get("values", [])
        logger.debug("%s: %d %s", request.range, len(values), request.dimension.lower())
        return values
