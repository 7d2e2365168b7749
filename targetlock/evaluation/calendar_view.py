"""
Calendar Heat-Map Data

One cell per day of the displayed month, colored by how the day went
against its own strict target.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from targetlock.engine import (
    compute_daily_stats,
    compute_strict_daily_target,
    format_day_key,
    is_sunday,
    iter_month_keys,
    parse_day_key,
)
from targetlock.evaluation.formatting import MONTH_NAMES
from targetlock.models.catalog import DEFAULT_CATALOG, Catalog
from targetlock.models.records import MonthState


class DayStatus(str, Enum):
    OK = "OK"        # recorded work day, net reached the strict target
    MIN = "MIN"      # recorded work day below target
    OFF = "OFF"      # recorded day off
    EMPTY = "EMPTY"  # nothing recorded yet


class CalendarCell(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: int
    key: str
    status: DayStatus
    is_sunday: bool
    net: int
    target: int

    @property
    def has_record(self) -> bool:
        return self.status != DayStatus.EMPTY


class MonthCalendar(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    leading_blanks: int
    cells: list[CalendarCell]

    @property
    def title(self) -> str:
        return f"{MONTH_NAMES[self.month]} {self.year}"


def build_calendar(state: MonthState, catalog: Catalog = DEFAULT_CATALOG) -> MonthCalendar:
    """Build the calendar grid for the state's displayed month (weeks start on Sunday)."""
    first = parse_day_key(format_day_key(state.year, state.month, 1))
    leading_blanks = (first.weekday() + 1) % 7

    cells = []
    for day, key in enumerate(iter_month_keys(state.year, state.month), start=1):
        record = state.records.get(key)
        target = compute_strict_daily_target(state, key, catalog)
        net = 0

        if record is None:
            status = DayStatus.EMPTY
        else:
            net = compute_daily_stats(record, state.meal_allowance_per_day, catalog).net
            if not record.is_work_day:
                status = DayStatus.OFF
            elif net >= target:
                status = DayStatus.OK
            else:
                status = DayStatus.MIN

        cells.append(CalendarCell(
            day=day,
            key=key,
            status=status,
            is_sunday=is_sunday(key),
            net=net,
            target=target,
        ))

    return MonthCalendar(
        year=state.year,
        month=state.month,
        leading_blanks=leading_blanks,
        cells=cells,
    )
