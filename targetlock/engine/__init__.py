"""Arithmetic core: daily stats, month projection and strict daily targets."""

from targetlock.engine.days import (
    DayLike,
    days_in_month,
    format_day_key,
    is_sunday,
    is_work_day,
    iter_month_keys,
    parse_day_key,
    record_or_default,
    shift_day,
    to_day_key,
)
from targetlock.engine.projection import compute_projection
from targetlock.engine.stats import compute_daily_stats
from targetlock.engine.targets import compute_strict_daily_target, preview_next_day_target

__all__ = [
    "DayLike",
    "compute_daily_stats",
    "compute_projection",
    "compute_strict_daily_target",
    "days_in_month",
    "format_day_key",
    "is_sunday",
    "is_work_day",
    "iter_month_keys",
    "parse_day_key",
    "preview_next_day_target",
    "record_or_default",
    "shift_day",
    "to_day_key",
]
