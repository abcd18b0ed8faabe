"""Storage adapter contract for cached fetch results."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Exact-key byte store with last-write-wins semantics.

    Implementations must tolerate concurrent readers and writers across
    independent pipelines. A put on one key is atomic; there is no
    guarantee spanning several keys.
    """

    async def get(self, key: str) -> bytes | None:
        """Return the stored value, or None if absent."""
        ...

    async def put(self, key: str, value: bytes) -> None:
        """Store a value, replacing any previous one."""
        ...

    async def delete(self, key: str) -> None:
        """Remove a key if present."""
        ...

    async def clear(self) -> None:
        """Remove every entry."""
        ...
