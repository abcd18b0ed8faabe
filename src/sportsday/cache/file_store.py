"""File-backed cache store.

One file per cache key:
    {base_path}/{key}.json

Writes go to a temporary file in the same directory and are moved into place
with os.replace, so a reader never observes a half-written entry and the
last completed write wins.

All I/O operations run through asyncio.to_thread for non-blocking execution.
"""

import asyncio
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class FileStore:
    """Persistent cache store keeping one JSON document per key.

    Args:
        base_path: Root directory for cache files. Created if missing.
    """

    SUFFIX = ".json"

    def __init__(self, base_path: str | Path = ".sportsday_cache") -> None:
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_file_path(self, key: str) -> Path:
        """Map a cache key onto its file.

        Raises:
            ValueError: If the key would escape the base directory
        """
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid cache key: {key!r}")
        return self.base_path / f"{key}{self.SUFFIX}"

    async def get(self, key: str) -> bytes | None:
        file_path = self._get_file_path(key)

        def _read() -> bytes | None:
            try:
                return file_path.read_bytes()
            except FileNotFoundError:
                return None

        return await asyncio.to_thread(_read)

    async def put(self, key: str, value: bytes) -> None:
        file_path = self._get_file_path(key)

        def _write() -> None:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.base_path, prefix=f".{key[:16]}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(value)
                os.replace(tmp_name, file_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise

        await asyncio.to_thread(_write)

    async def delete(self, key: str) -> None:
        file_path = self._get_file_path(key)
        await asyncio.to_thread(file_path.unlink, True)

    async def clear(self) -> None:
        def _clear() -> int:
            removed = 0
            for file_path in self.base_path.glob(f"*{self.SUFFIX}"):
                file_path.unlink(missing_ok=True)
                removed += 1
            return removed

        removed = await asyncio.to_thread(_clear)
        logger.debug("Removed %d cache files from %s", removed, self.base_path)

    async def keys(self) -> list[str]:
        """List stored keys, sorted."""
        def _list() -> list[str]:
            return sorted(p.stem for p in self.base_path.glob(f"*{self.SUFFIX}"))

        return await asyncio.to_thread(_list)
