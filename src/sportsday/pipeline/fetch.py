"""CacheableFetch — one range request bound to a cache entry.

A fetch owns a resolved RangeRequest and computes its cache key once, at
construction. It can be resolved two ways:

- live(): always hits the network, parses the grid, stores the parsed value
  under the key (overwriting) and returns it.
- get(): returns the stored value when one decodes cleanly, otherwise falls
  back to live().

cached() exposes the cache-only path on its own, raising CacheMiss when there
is nothing usable stored, so callers that need to tell a miss apart from a
deliberate refresh can do so.

Stored values are serialized to JSON through a pydantic TypeAdapter built
from the fetch's result_type. Both paths return the decoded form, so with the
default result_type (Any) tuples come back as lists and models as dicts; with
a model type the round trip returns model instances.
"""

import logging
from typing import Any, Callable, Generic, Protocol, TypeVar

from pydantic import TypeAdapter

from sportsday.cache.base import CacheStore
from sportsday.pipeline.request import Grid, RangeRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")

ParserFunction = Callable[[Grid], T]


class ConfigurationError(Exception):
    """A fetch or pipeline was assembled incorrectly."""


class ParserNotSpecifiedError(ConfigurationError):
    """A fetch was resolved before set_parser() was called."""

    def __init__(self, request: RangeRequest) -> None:
        super().__init__(f"parser not specified for range '{request.range}'")
        self.request = request


class CacheMiss(Exception):
    """No usable cache entry exists for a key."""

    def __init__(self, key: str, reason: str = "not saved in cache") -> None:
        super().__init__(f"{key}: {reason}")
        self.key = key
        self.reason = reason


class GridTransport(Protocol):
    """Anything that can turn a RangeRequest into a grid of cells."""

    async def fetch(self, request: RangeRequest) -> Grid:
        ...


class CacheableFetch(Generic[T]):
    """A single cacheable range fetch.

    Args:
        request: The fully resolved range request
        transport: Performs the network call (e.g. SheetsClient)
        store: Cache storage adapter shared between fetches
        parser: Maps the raw grid onto the result. May be set later with
            set_parser(), but must be set before resolution.
        result_type: Type used to serialize and restore cached values
    """

    def __init__(
        self,
        request: RangeRequest,
        transport: GridTransport,
        store: CacheStore,
        parser: ParserFunction[T] | None = None,
        result_type: Any = Any,
    ) -> None:
        self.request = request
        self.transport = transport
        self.store = store
        self.key = request.cache_key
        self._parser = parser
        self._adapter: TypeAdapter[T] = TypeAdapter(result_type)

    def __repr__(self) -> str:
        return f"CacheableFetch(range={self.request.range!r}, key={self.key[:12]})"

    @property
    def parser(self) -> ParserFunction[T] | None:
        return self._parser

    def set_parser(self, parser: ParserFunction[T]) -> "CacheableFetch[T]":
        """Attach the response-shaping function. Returns self for chaining."""
        self._parser = parser
        return self

    def _require_parser(self) -> ParserFunction[T]:
        if self._parser is None:
            raise ParserNotSpecifiedError(self.request)
        return self._parser

    def parse(self, grid: Grid) -> T:
        """Apply the attached parser to a raw grid.

        Raises:
            ParserNotSpecifiedError: If no parser has been set
        """
        return self._require_parser()(grid)

    async def live(self) -> T:
        """Fetch from the network, store the parsed value and return it.

        The returned value is decoded from the stored bytes, so it equals
        what a later cached() call yields. Transport errors propagate
        unchanged and leave any existing cache entry for this key untouched.

        Raises:
            ParserNotSpecifiedError: If no parser has been set
            ConfigurationError: If the parsed value cannot be stored as
                result_type
        """
        parser = self._require_parser()
        grid = await self.transport.fetch(self.request)
        parsed = parser(grid)
        try:
            raw = self._adapter.dump_json(parsed)
            value = self._adapter.validate_json(raw)
        except ValueError as e:
            raise ConfigurationError(
                f"parsed value for range '{self.request.range}' cannot be cached: {e}"
            ) from e
        await self.store.put(self.key, raw)
        logger.debug("Stored %s under %s", self.request.range, self.key[:12])
        return value

    async def cached(self) -> T:
        """Return the stored value without touching the network.

        Raises:
            ParserNotSpecifiedError: If no parser has been set
            CacheMiss: If nothing is stored or the entry cannot be decoded
        """
        self._require_parser()
        raw = await self.store.get(self.key)
        if raw is None:
            raise CacheMiss(self.key)
        # ValueError covers pydantic ValidationError and undecodable bytes
        try:
            return self._adapter.validate_json(raw)
        except ValueError as e:
            logger.warning(
                "Unreadable cache entry %s for %s: %s",
                self.key[:12], self.request.range, e,
            )
            raise CacheMiss(self.key, reason="undecodable cache entry") from e

    async def get(self) -> T:
        """Return the cached value, falling back to a live fetch on a miss."""
        try:
            value = await self.cached()
        except CacheMiss as miss:
            logger.debug("Cache miss for %s (%s)", self.request.range, miss.reason)
            return await self.live()
        logger.debug("Cache hit for %s", self.request.range)
        return value
