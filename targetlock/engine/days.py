"""
Calendar helpers shared by the engine.

Months are 0-based (0 = January) to match the stored state. Day keys are
canonical YYYY-MM-DD strings, so plain string comparison is chronological.
"""

import calendar
from datetime import date, timedelta
from typing import Iterator, Union

from targetlock.models.records import DailyRecord, MonthState

DayLike = Union[date, str]

# Day-of-week treated as off when a day has no record (Monday=0 .. Sunday=6)
DEFAULT_OFF_WEEKDAY = 6


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month + 1)[1]


def format_day_key(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month + 1:02d}-{day:02d}"


def to_day_key(value: DayLike) -> str:
    """
    Normalize a date or date string to the canonical day key.

    Raises ValueError for strings that are not a calendar date.
    """
    if isinstance(value, date):
        return value.isoformat()
    return date.fromisoformat(value).isoformat()


def parse_day_key(key: str) -> date:
    return date.fromisoformat(key)


def is_sunday(key: str) -> bool:
    return parse_day_key(key).weekday() == DEFAULT_OFF_WEEKDAY


def shift_day(key: str, days: int) -> str:
    """Key of the day `days` away from `key` (negative goes back)."""
    return (parse_day_key(key) + timedelta(days=days)).isoformat()


def iter_month_keys(year: int, month: int) -> Iterator[str]:
    """Every day key of the month in ascending order."""
    for day in range(1, days_in_month(year, month) + 1):
        yield format_day_key(year, month, day)


def is_work_day(state: MonthState, key: str) -> bool:
    """
    An explicit record decides; without one, every day but Sunday is a workday.
    """
    record = state.records.get(key)
    if record is not None:
        return record.is_work_day
    return not is_sunday(key)


def record_or_default(state: MonthState, key: DayLike) -> DailyRecord:
    """
    The stored record for a day, or a fresh default one.

    The default is a workday with no items and no kasbon, which is also what
    a record looks like the first time the worker touches a date.
    """
    key = to_day_key(key)
    record = state.records.get(key)
    if record is not None:
        return record
    return DailyRecord(date=key)
