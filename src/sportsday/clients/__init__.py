"""API client layer for sportsday.

Async HTTP transport for the Google Sheets values API.
"""

from sportsday.clients.base import BaseAsyncClient, SheetsAPIError
from sportsday.clients.sheets import SheetsClient

__all__ = [
    "BaseAsyncClient",
    "SheetsAPIError",
    "SheetsClient",
]
