"""Request composition and caching engine.

Components:
- Pipeline: immutable chain of dependent steps
- CacheableFetch: one range request bound to a cache key
- RangeRequest: resolved request parameters and key derivation
"""

from sportsday.pipeline.builder import Pipeline, Step
from sportsday.pipeline.fetch import (
    CacheableFetch,
    CacheMiss,
    ConfigurationError,
    GridTransport,
    ParserNotSpecifiedError,
)
from sportsday.pipeline.request import Grid, RangeRequest, SheetCredentials

__all__ = [
    "CacheableFetch",
    "CacheMiss",
    "ConfigurationError",
    "Grid",
    "GridTransport",
    "ParserNotSpecifiedError",
    "Pipeline",
    "RangeRequest",
    "SheetCredentials",
    "Step",
]
