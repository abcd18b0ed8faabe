"""SportsDayAPI — named queries over the sports day spreadsheet.

Every query returns a Pipeline; nothing touches the network until run() is
awaited. Queries that need reference data (events list, forms list) embed
those pipelines as nested steps, so the reference data is resolved through
the same cache.

Usage:
    async with open_api(settings) as api:
        events = await api.get_events_list().run()
        results = await api.get_event_results("longJump", 9).run(allow_cache=False)
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable

from sportsday.a1 import a1_range
from sportsday.cache import CacheStore, create_store
from sportsday.clients import SheetsClient
from sportsday.config import Settings
from sportsday.models import (
    YEAR_GROUPS,
    BonusPointAllocations,
    EventRecordStanding,
    EventResults,
    Form,
    FormEventResult,
    SportEvent,
    SummaryStanding,
    YearGroupRecordSummary,
)
from sportsday.parsers import (
    event_results_parser,
    form_results_parser,
    parse_bonus_points,
    records_parser,
)
from sportsday.pipeline import CacheableFetch, GridTransport, Pipeline, SheetCredentials
from sportsday.pipeline.request import Dimension, Grid

logger = logging.getLogger(__name__)

EVENTS_RANGE = "event_list!A2:F13"
FORMS_RANGE = "summary!A3:B37"
BONUS_POINTS_RANGE = "point_allocations_record!B3:B5"
SUMMARY_RANGE = "summary!A3:E37"
RECORDS_SUMMARY_RANGE = "records_summary!A3:C8"

# Results blocks start on row 9; each form takes two rows
RESULTS_FIRST_ROW = 9
# Year 9 has 10 forms, every other year group has 8
RESULTS_LAST_ROW = {9: 28}
RESULTS_DEFAULT_LAST_ROW = 24


class LookupValidationError(ValueError):
    """A query parameter matched nothing known in the spreadsheet."""


class UnknownEventError(LookupValidationError):
    def __init__(self, event_db_name: str) -> None:
        super().__init__(f"invalid eventDbName: '{event_db_name}'")
        self.event_db_name = event_db_name


class InvalidYearGroupError(LookupValidationError):
    def __init__(self, year_group: Any) -> None:
        super().__init__(f"invalid yearGroup: {year_group!r} (expected one of {YEAR_GROUPS})")
        self.year_group = year_group


class UnknownFormError(LookupValidationError):
    def __init__(self, year_group: int, form_letters: str) -> None:
        super().__init__(f"invalid formLetters: '{form_letters}' in year {year_group}")
        self.year_group = year_group
        self.form_letters = form_letters


def _check_year_group(year_group: int) -> int:
    if year_group not in YEAR_GROUPS:
        raise InvalidYearGroupError(year_group)
    return year_group


class SportsDayAPI:
    """Typed queries against the sports day spreadsheet.

    Args:
        credentials: API key and spreadsheet id
        transport: Grid transport, normally an open SheetsClient
        store: Cache store shared by all queries
    """

    def __init__(
        self,
        credentials: SheetCredentials,
        transport: GridTransport,
        store: CacheStore,
    ) -> None:
        self.credentials = credentials
        self.transport = transport
        self.store = store

    def new_pipeline(self) -> Pipeline:
        """An empty pipeline bound to this API's credentials."""
        return Pipeline(credentials=self.credentials)

    def _new_request(
        self,
        range: str,
        dimension: Dimension,
        parser: Callable[[Grid], Any],
        result_type: Any = Any,
        formatted: bool = False,
    ) -> Pipeline:
        """A one-step pipeline resolving a single cacheable range fetch."""
        pipeline = self.new_pipeline()

        def _fetch(_: tuple) -> CacheableFetch:
            request = pipeline.credentials.request(range, dimension, formatted)
            return CacheableFetch(
                request, self.transport, self.store, result_type=result_type,
            ).set_parser(parser)

        return pipeline.add(_fetch)

    def get_events_list(self) -> Pipeline:
        """All events, resolved from cache whenever possible.

        Returns:
            Pipeline resolving to list[SportEvent]
        """
        return self._new_request(
            EVENTS_RANGE, "ROWS", records_parser(SportEvent), list[SportEvent],
        ).prefer_cache()

    def get_forms_list(self) -> Pipeline:
        """All forms, ordered as in the spreadsheet.

        Returns:
            Pipeline resolving to list[Form]
        """
        return self._new_request(FORMS_RANGE, "ROWS", records_parser(Form), list[Form])

    def get_bonus_points_allocations(self) -> Pipeline:
        """Bonus points awarded for records equalled or broken.

        Returns:
            Pipeline resolving to BonusPointAllocations
        """
        return self._new_request(
            BONUS_POINTS_RANGE, "ROWS", parse_bonus_points, BonusPointAllocations,
        )

    def get_summary_standings(self) -> Pipeline:
        """Total points with year group and whole school positions per form.

        Returns:
            Pipeline resolving to list[SummaryStanding]
        """
        return self._new_request(
            SUMMARY_RANGE, "ROWS", records_parser(SummaryStanding), list[SummaryStanding],
        )

    def get_event_results(self, event_db_name: str, year_group: int) -> Pipeline:
        """Positions and points per form in each sub-event of one event.

        Args:
            event_db_name: The event's "db" name from the events list
            year_group: One of 7, 8, 9, 10

        Returns:
            Pipeline resolving to EventResults

        The year group is checked before anything is fetched; the event name
        is checked against the events list before the results are fetched.
        """
        def _results_range(values: tuple) -> dict[str, Any]:
            _, events, forms = values
            matching = [e for e in events if e.db == event_db_name]
            if not matching:
                raise UnknownEventError(event_db_name)
            event = matching[0]
            year_forms = [f for f in forms if f.year == year_group]
            last_row = RESULTS_LAST_ROW.get(year_group, RESULTS_DEFAULT_LAST_ROW)
            spreadsheet_range = a1_range(
                f"y{year_group}_results",
                event.starting_col, RESULTS_FIRST_ROW,
                event.starting_col + 4, last_row,
            )
            logger.debug("%s, year %d -> %s", event_db_name, year_group, spreadsheet_range)
            return {"forms": year_forms, "range": spreadsheet_range}

        return (
            self.new_pipeline()
            .add(lambda _: _check_year_group(year_group))
            .add(lambda _: self.get_events_list())
            .add(lambda _: self.get_forms_list())
            .add(_results_range)
            .add(lambda values: self._new_request(
                values[3]["range"],
                "COLUMNS",
                event_results_parser(values[3]["forms"]),
                EventResults,
            ))
        )

    def get_year_group_records(self, year_group: int) -> Pipeline:
        """Standing and current records for every event in a year group.

        Returns:
            Pipeline resolving to list[EventRecordStanding]
        """
        return (
            self.new_pipeline()
            .add(lambda _: _check_year_group(year_group))
            .add(lambda _: self._new_request(
                f"y{year_group}_records!A4:J15",
                "ROWS",
                records_parser(EventRecordStanding),
                list[EventRecordStanding],
            ))
        )

    def get_records_summary_stats(self) -> Pipeline:
        """Records equalled and broken this year, per year group and overall.

        Returns:
            Pipeline resolving to list[YearGroupRecordSummary]
        """
        return self._new_request(
            RECORDS_SUMMARY_RANGE,
            "ROWS",
            records_parser(YearGroupRecordSummary),
            list[YearGroupRecordSummary],
        )

    def get_form_results(self, year_group: int, form_letters: str) -> Pipeline:
        """One form's positions and points in every event.

        Args:
            year_group: One of 7, 8, 9, 10
            form_letters: Letter part of the form name ("W" for 8W)

        Returns:
            Pipeline resolving to list[FormEventResult]
        """
        def _form_range(values: tuple) -> str:
            _, _, forms = values
            possible = [f.form for f in forms if f.year == year_group]
            if not possible:
                raise InvalidYearGroupError(year_group)
            if form_letters not in possible:
                raise UnknownFormError(year_group, form_letters)
            row = 2 * possible.index(form_letters) + RESULTS_FIRST_ROW
            return f"y{year_group}_results!D{row}:BF{row + 1}"

        return (
            self.new_pipeline()
            .add(lambda _: _check_year_group(year_group))
            .add(lambda _: self.get_events_list())
            .add(lambda _: self.get_forms_list())
            .add(_form_range)
            .add(lambda values: self._new_request(
                values[3],
                "COLUMNS",
                form_results_parser(values[1]),
                list[FormEventResult],
            ))
        )


@asynccontextmanager
async def open_api(settings: Settings, store: CacheStore | None = None) -> AsyncIterator[SportsDayAPI]:
    """Open a SheetsClient and yield a SportsDayAPI bound to it.

    Args:
        settings: Loaded configuration
        store: Cache store override (default: built from settings)
    """
    if store is None:
        store = create_store(settings.cache_backend, settings.cache_dir)
    credentials = SheetCredentials(api_key=settings.api_key, sheet_id=settings.sheet_id)
    async with SheetsClient(
        max_concurrency=settings.max_concurrency,
        timeout=settings.timeout,
    ) as client:
        yield SportsDayAPI(credentials, client, store)
