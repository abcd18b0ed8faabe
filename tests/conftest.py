"""Shared fixtures: an in-memory store and a scripted grid transport."""

import pytest

from sportsday.cache import MemoryStore
from sportsday.pipeline import SheetCredentials


class FakeTransport:
    """Serves canned grids by range and records every request."""

    def __init__(self, grids: dict | None = None) -> None:
        self.grids = dict(grids or {})
        self.requests = []
        self.error: Exception | None = None

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def ranges(self) -> list[str]:
        return [r.range for r in self.requests]

    async def fetch(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.grids[request.range]


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def credentials() -> SheetCredentials:
    return SheetCredentials(api_key="test_key_1234567890", sheet_id="sheet123")
