"""Typed records returned by the sports day queries.

Field aliases match the header names used in the spreadsheet, so records
built from a header row validate directly. Empty cells arrive as "" from
the API and are treated as missing.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sportsday.pipeline.request import CellValue

YEAR_GROUPS = (7, 8, 9, 10)


class SheetRecord(BaseModel):
    """Base for records read from a sheet."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def blank_cells_to_none(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: (None if v == "" else v) for k, v in data.items()}
        return data


class SportEvent(SheetRecord):
    """One event from the events list.

    Example:
        {"db": "longJump", "pretty": "Long Jump", "subs": "b",
         "scored": "overall", "units": "metre", "startingCol": 4}
    """

    db: str
    pretty: str
    subs: str | None = None
    scored: str | None = None
    units: str | None = None
    starting_col: int = Field(alias="startingCol")


class Form(SheetRecord):
    year: int
    form: str


class SummaryStanding(SheetRecord):
    year: int
    form: str
    points: int | float | None = None
    year_pos: int | None = Field(default=None, alias="yearPos")
    school_pos: int | None = Field(default=None, alias="schoolPos")


class BonusPointAllocations(SheetRecord):
    """Bonus points for not breaking, equalling or beating a record."""

    no_record: CellValue | None = Field(alias="noRecord")
    equal: CellValue | None
    beat: CellValue | None


class SubeventFormResult(SheetRecord):
    """A form's position and points in one sub-event column."""

    letter: str
    pos: int | None = None
    pts: int | float | None = None


class EventResults(SheetRecord):
    """Results of one event for one year group, split by sub-event."""

    a: list[SubeventFormResult]
    b: list[SubeventFormResult]
    c: list[SubeventFormResult]
    rb: list[SubeventFormResult]
    total: list[SubeventFormResult]


class EventRecordStanding(SheetRecord):
    """Standing and current record for one event in one year group."""

    event: str
    units: str | None = None
    standing_score: int | float | None = Field(default=None, alias="standingScore")
    standing_holder: str | None = Field(default=None, alias="standingHolder")
    standing_year: int | None = Field(default=None, alias="standingYear")
    current_score: int | float | None = Field(default=None, alias="currentScore")
    current_holder: str | None = Field(default=None, alias="currentHolder")
    current_form: str | None = Field(default=None, alias="currentForm")
    current_year: int | None = Field(default=None, alias="currentYear")
    do_score: int | None = Field(default=None, alias="doScore")


class YearGroupRecordSummary(SheetRecord):
    year: str
    records_equalled: int = Field(alias="recordsEqualled")
    records_broken: int = Field(alias="recordsBroken")


class FormEventResult(SheetRecord):
    """One form's positions and points in one event."""

    event_db: str = Field(alias="eventDb")
    event_pretty: str = Field(alias="eventPretty")
    pos_a: int | None = Field(default=None, alias="posA")
    pts_a: int | float | None = Field(default=None, alias="ptsA")
    pos_b: int | None = Field(default=None, alias="posB")
    pts_b: int | float | None = Field(default=None, alias="ptsB")
    pos_c: int | None = Field(default=None, alias="posC")
    pts_c: int | float | None = Field(default=None, alias="ptsC")
    pts_rb: int | float | None = Field(default=None, alias="ptsRB")
    pts_total: int | float | None = Field(default=None, alias="ptsTOTAL")
