"""Grid parsers — raw value grids to typed records.

Every parser here takes the two-dimensional list returned by the values API
and is meant to be attached to a CacheableFetch with set_parser().
"""

from typing import Any, Callable, Sequence, TypeVar

from pydantic import BaseModel

from sportsday.models import (
    BonusPointAllocations,
    EventResults,
    Form,
    FormEventResult,
    SportEvent,
    SubeventFormResult,
)
from sportsday.pipeline.request import CellValue, Grid

M = TypeVar("M", bound=BaseModel)

SUBEVENT_TABS = ("a", "b", "c", "rb", "total")


def cell(grid: Grid, i: int, j: int) -> CellValue | None:
    """grid[i][j], or None when the API trimmed that cell away."""
    if i < len(grid) and j < len(grid[i]):
        return grid[i][j]
    return None


def records_from_grid(grid: Grid) -> list[dict[str, Any]]:
    """Use the first row as field names and key every later row by them.

    Rows shorter than the header (the API drops trailing empty cells) get
    None for the missing fields.
    """
    if not grid:
        return []
    headers, *rows = grid
    return [
        {str(name): (row[index] if index < len(row) else None) for index, name in enumerate(headers)}
        for row in rows
    ]


def records_parser(model: type[M]) -> Callable[[Grid], list[M]]:
    """Build a parser turning a header grid into a list of model instances."""
    def _parse(grid: Grid) -> list[M]:
        return [model.model_validate(record) for record in records_from_grid(grid)]

    _parse.__name__ = f"parse_{model.__name__}_records"
    return _parse


def parse_bonus_points(grid: Grid) -> BonusPointAllocations:
    """Three single-cell rows: no record, equal, beat."""
    return BonusPointAllocations(
        no_record=cell(grid, 0, 0),
        equal=cell(grid, 1, 0),
        beat=cell(grid, 2, 0),
    )


def event_results_parser(forms: Sequence[Form]) -> Callable[[Grid], EventResults]:
    """Parser for one event's results block, fetched by COLUMNS.

    The block has one column per sub-event (A, B, C, record bonus, total).
    Down each column every form of the year group takes two cells: position
    then points, in the same order as the forms list.
    """
    def _parse(grid: Grid) -> EventResults:
        tabs: dict[str, list[SubeventFormResult]] = {name: [] for name in SUBEVENT_TABS}
        for col_index, name in enumerate(SUBEVENT_TABS):
            for form_index, form in enumerate(forms):
                tabs[name].append(
                    SubeventFormResult(
                        letter=form.form,
                        pos=cell(grid, col_index, 2 * form_index),
                        pts=cell(grid, col_index, 2 * form_index + 1),
                    )
                )
        return EventResults(**tabs)

    return _parse


def form_results_parser(events: Sequence[SportEvent]) -> Callable[[Grid], list[FormEventResult]]:
    """Parser for one form's row pair across every event, fetched by COLUMNS.

    Each event spans five columns (A, B, C, record bonus, total), each column
    holding position then points. The bonus and total columns only carry
    points.
    """
    def _parse(grid: Grid) -> list[FormEventResult]:
        results = []
        for event_index, event in enumerate(events):
            base = 5 * event_index
            results.append(
                FormEventResult(
                    event_db=event.db,
                    event_pretty=event.pretty,
                    pos_a=cell(grid, base, 0),
                    pts_a=cell(grid, base, 1),
                    pos_b=cell(grid, base + 1, 0),
                    pts_b=cell(grid, base + 1, 1),
                    pos_c=cell(grid, base + 2, 0),
                    pts_c=cell(grid, base + 2, 1),
                    pts_rb=cell(grid, base + 3, 1),
                    pts_total=cell(grid, base + 4, 1),
                )
            )
        return results

    return _parse
