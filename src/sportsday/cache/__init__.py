"""Cache storage adapters for sportsday.

Exact-key byte stores holding serialized fetch results.
"""

from sportsday.cache.base import CacheStore
from sportsday.cache.factory import create_store
from sportsday.cache.file_store import FileStore
from sportsday.cache.memory_store import MemoryStore
from sportsday.cache.sqlite_store import SQLiteStore

__all__ = ["CacheStore", "FileStore", "MemoryStore", "SQLiteStore", "create_store"]
