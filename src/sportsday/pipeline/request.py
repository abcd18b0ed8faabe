"""Resolved range requests against the Google Sheets values API.

A RangeRequest pins down everything that changes the returned grid: the API
key, the spreadsheet id, the A1 range, the major dimension and the value
render option. Its cache key is derived from the fully rendered URL, so two
requests with equal parameters share one cache entry and any differing
parameter yields a different entry.
"""

import hashlib
from dataclasses import dataclass
from typing import Literal, Union
from urllib.parse import quote, urlencode


SHEETS_BASE_URL = "https://sheets.googleapis.com/v4"

Dimension = Literal["ROWS", "COLUMNS"]
CellValue = Union[str, int, float, bool]
Grid = list[list[CellValue]]

_DIMENSIONS = ("ROWS", "COLUMNS")


@dataclass(frozen=True)
class RangeRequest:
    """A single values-API range query.

    Attributes:
        api_key: Static API key, passed through opaquely
        sheet_id: Spreadsheet identifier
        range: A1 notation range, e.g. "summary!A3:B37"
        dimension: Major dimension of the returned grid
        formatted: True for display-formatted strings, False for raw values
    """

    api_key: str
    sheet_id: str
    range: str
    dimension: Dimension = "ROWS"
    formatted: bool = False

    def __post_init__(self) -> None:
        if self.dimension not in _DIMENSIONS:
            raise ValueError(
                f"dimension must be one of {_DIMENSIONS}, got '{self.dimension}'"
            )

    @property
    def path(self) -> str:
        """Endpoint path relative to the API base URL."""
        return f"/spreadsheets/{self.sheet_id}/values/{quote(self.range, safe='')}"

    @property
    def params(self) -> dict[str, str]:
        """Query parameters, in a fixed order."""
        return {
            "majorDimension": self.dimension,
            "valueRenderOption": "FORMATTED_VALUE" if self.formatted else "UNFORMATTED_VALUE",
            "key": self.api_key,
        }

    @property
    def url(self) -> str:
        """Fully resolved request URL."""
        return f"{SHEETS_BASE_URL}{self.path}?{urlencode(self.params)}"

    @property
    def cache_key(self) -> str:
        """SHA-256 hex digest of the resolved URL."""
        return hashlib.sha256(self.url.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class SheetCredentials:
    """API key and spreadsheet id shared by every request of a client.

    Both values are opaque to the pipeline engine.
    """

    api_key: str
    sheet_id: str

    def __repr__(self) -> str:
        return f"SheetCredentials(api_key='***', sheet_id={self.sheet_id!r})"

    def request(self, range: str, dimension: Dimension = "ROWS", formatted: bool = False) -> RangeRequest:
        """Resolve a range into a full RangeRequest."""
        return RangeRequest(
            api_key=self.api_key,
            sheet_id=self.sheet_id,
            range=range,
            dimension=dimension,
            formatted=formatted,
        )
