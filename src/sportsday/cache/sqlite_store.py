"""SQLite-backed cache store.

Keeps every entry in a single table:

    cache_entries(key TEXT PRIMARY KEY, value BLOB, updated_at TEXT)

A connection is opened per operation inside a worker thread, so the store can
be shared freely between concurrent pipelines. Upserts give last-write-wins
semantics per key.

Usage:
    store = SQLiteStore("cache.db")
    await store.put("abc123", b'{"a": 1}')
    raw = await store.get("abc123")
"""

import asyncio
import sqlite3
from datetime import datetime, timezone
from pathlib import Path


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS cache_entries (
    key TEXT PRIMARY KEY,
    value BLOB NOT NULL,
    updated_at TEXT NOT NULL
);
"""

UPSERT_SQL = """
INSERT INTO cache_entries (key, value, updated_at)
VALUES (?, ?, ?)
ON CONFLICT(key) DO UPDATE SET
    value = excluded.value,
    updated_at = excluded.updated_at
"""


class SQLiteStore:
    """Embedded key-value cache store.

    Args:
        db_path: Database file. Parent directories are created if missing.
        timeout: Seconds to wait on a locked database (default: 10)
    """

    def __init__(self, db_path: str | Path = ".sportsday_cache/cache.db", timeout: float = 10.0) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.timeout = timeout
        conn = self._connect()
        try:
            conn.executescript(SCHEMA_SQL)
        finally:
            conn.close()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path), timeout=self.timeout)

    def _execute(self, sql: str, params: tuple = ()) -> list[tuple]:
        conn = self._connect()
        try:
            with conn:
                return conn.execute(sql, params).fetchall()
        finally:
            conn.close()

    async def get(self, key: str) -> bytes | None:
        rows = await asyncio.to_thread(
            self._execute, "SELECT value FROM cache_entries WHERE key = ?", (key,)
        )
        return bytes(rows[0][0]) if rows else None

    async def put(self, key: str, value: bytes) -> None:
        now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        await asyncio.to_thread(self._execute, UPSERT_SQL, (key, value, now))

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(
            self._execute, "DELETE FROM cache_entries WHERE key = ?", (key,)
        )

    async def clear(self) -> None:
        await asyncio.to_thread(self._execute, "DELETE FROM cache_entries")

    async def updated_at(self, key: str) -> datetime | None:
        """When the entry for a key was last written, if present."""
        rows = await asyncio.to_thread(
            self._execute, "SELECT updated_at FROM cache_entries WHERE key = ?", (key,)
        )
        if not rows:
            return None
        return datetime.strptime(rows[0][0], "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=timezone.utc)
