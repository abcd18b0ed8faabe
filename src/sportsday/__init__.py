"""sportsday — typed, cached queries over the sports day spreadsheet.

Named queries (events list, form results, ...) are built as Pipelines of
dependent steps. Range fetches inside a pipeline are cached by a hash of
their resolved request, so repeated runs only hit the Sheets API when asked
for fresh data.
"""

from sportsday.api import (
    InvalidYearGroupError,
    LookupValidationError,
    SportsDayAPI,
    UnknownEventError,
    UnknownFormError,
    open_api,
)
from sportsday.pipeline import CacheableFetch, Pipeline, RangeRequest, SheetCredentials

__version__ = "0.3.0"

__all__ = [
    "CacheableFetch",
    "InvalidYearGroupError",
    "LookupValidationError",
    "Pipeline",
    "RangeRequest",
    "SheetCredentials",
    "SportsDayAPI",
    "UnknownEventError",
    "UnknownFormError",
    "open_api",
    "__version__",
]
