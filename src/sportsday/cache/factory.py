"""Build a cache store from configuration."""

from pathlib import Path
from typing import Literal

from sportsday.cache.base import CacheStore
from sportsday.cache.file_store import FileStore
from sportsday.cache.memory_store import MemoryStore
from sportsday.cache.sqlite_store import SQLiteStore

CacheBackend = Literal["memory", "file", "sqlite"]


def create_store(backend: CacheBackend, cache_dir: str | Path = ".sportsday_cache") -> CacheStore:
    """Create a store for the named backend.

    Args:
        backend: "memory", "file" or "sqlite"
        cache_dir: Directory for the file and sqlite backends

    Raises:
        ValueError: For an unknown backend name
    """
    if backend == "memory":
        return MemoryStore()
    if backend == "file":
        return FileStore(base_path=cache_dir)
    if backend == "sqlite":
        return SQLiteStore(db_path=Path(cache_dir) / "cache.db")
    raise ValueError(f"Unknown cache backend: '{backend}'")
