"""
Monthly Projection Engine

Splits the displayed month at a reference date, sums what was earned up to
and including that date, and extrapolates the elapsed daily average over
the workdays still ahead.
"""

from targetlock.engine.days import DayLike, is_work_day, iter_month_keys, to_day_key
from targetlock.engine.stats import compute_daily_stats
from targetlock.models.catalog import DEFAULT_CATALOG, Catalog
from targetlock.models.records import MonthState, Projection


def compute_projection(
    state: MonthState,
    reference_date: DayLike,
    catalog: Catalog = DEFAULT_CATALOG,
) -> Projection:
    """
    Project the month-end income total.

    Elapsed days (key <= reference) contribute their income and all count
    toward the average, days off included. Future days only count when they
    are workdays. With no elapsed day the average is zero.
    """
    reference = to_day_key(reference_date)

    total_net_income = 0
    days_passed = 0
    work_days_remaining = 0

    for key in iter_month_keys(state.year, state.month):
        if key <= reference:
            stats = compute_daily_stats(
                state.records.get(key),
                state.meal_allowance_per_day,
                catalog,
            )
            total_net_income += stats.net
            days_passed += 1
        elif is_work_day(state, key):
            work_days_remaining += 1

    projected_total = float(total_net_income)
    if work_days_remaining > 0:
        average = total_net_income / max(1, days_passed)
        projected_total += average * work_days_remaining

    return Projection(
        total_net_income=total_net_income,
        work_days_remaining=work_days_remaining,
        projected_total=projected_total,
        days_passed=days_passed,
        raw_deficit=state.monthly_target - total_net_income,
    )
