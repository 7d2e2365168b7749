"""
Strict Daily Target

"What must I earn today?" - the monthly target minus everything already
earned before the day, spread over the workdays from that day to the end
of the month.

DESIGN DECISION: The target is redrawn from the full record set on every
call. There is no stored schedule to drift out of sync: edit an earlier
day and every later target moves with it.
"""

from targetlock.engine.days import (
    DayLike,
    is_work_day,
    iter_month_keys,
    shift_day,
    to_day_key,
)
from targetlock.engine.stats import compute_daily_stats
from targetlock.models.catalog import DEFAULT_CATALOG, Catalog
from targetlock.models.records import DailyRecord, MonthState


def compute_strict_daily_target(
    state: MonthState,
    target_date: DayLike,
    catalog: Catalog = DEFAULT_CATALOG,
) -> int:
    """
    Compute the revenue required on `target_date`.

    Returns:
        ceil(remaining / workdays left), floored at zero. When no workday is
        left on or after the date, the raw remaining amount is returned
        as-is, which may be negative (surplus) or larger than any one day
        could earn.
    """
    target = to_day_key(target_date)

    income_prior_to_date = 0
    work_days_remaining_inclusive = 0

    for key in iter_month_keys(state.year, state.month):
        if key < target:
            stats = compute_daily_stats(
                state.records.get(key),
                state.meal_allowance_per_day,
                catalog,
            )
            income_prior_to_date += stats.net
        elif is_work_day(state, key):
            work_days_remaining_inclusive += 1

    remaining_needed = state.monthly_target - income_prior_to_date

    if work_days_remaining_inclusive <= 0:
        return remaining_needed

    # Integer ceiling division; never under-commit the worker
    per_day = -(-remaining_needed // work_days_remaining_inclusive)
    return max(0, per_day)


def preview_next_day_target(
    state: MonthState,
    record: DailyRecord,
    catalog: Catalog = DEFAULT_CATALOG,
) -> int:
    """
    Target for the day after `record.date` if `record` were saved as-is.

    Works on a copy; `state` is left untouched.
    """
    hypothetical = state.with_record(record)
    return compute_strict_daily_target(hypothetical, shift_day(record.date, 1), catalog)
