"""In-process cache store."""

import logging

logger = logging.getLogger(__name__)


class MemoryStore:
    """Dict-backed cache store.

    Shared by every pipeline holding a reference to the same instance.
    Contents are lost when the process exits.
    """

    def __init__(self) -> None:
        self._entries: dict[str, bytes] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    async def get(self, key: str) -> bytes | None:
        return self._entries.get(key)

    async def put(self, key: str, value: bytes) -> None:
        self._entries[key] = value

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def clear(self) -> None:
        logger.debug("Clearing %d in-memory cache entries", len(self._entries))
        self._entries.clear()
