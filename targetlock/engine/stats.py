"""
Daily Statistics Calculator

Reduces one day's record into income, pair count, premium count, meal
allowance and kasbon. Every other view is built on these numbers.
"""

from typing import Optional

from targetlock.models.catalog import DEFAULT_CATALOG, Catalog
from targetlock.models.records import DailyRecord, DailyStats


def compute_daily_stats(
    record: Optional[DailyRecord],
    meal_allowance_per_day: int,
    catalog: Catalog = DEFAULT_CATALOG,
) -> DailyStats:
    """
    Compute the statistics for one day.

    Args:
        record: The day's record, or None when nothing was recorded
        meal_allowance_per_day: Allowance paid for a work day
        catalog: Price list used to value the items

    Returns:
        DailyStats; all zero for a missing record
    """
    if record is None:
        return DailyStats()

    # A day off earns nothing even if stale items are still on the record
    if not record.is_work_day:
        return DailyStats(kasbon=record.kasbon)

    income = 0
    total_pairs = 0
    premium_count = 0

    for item_id, count in record.items.items():
        if count <= 0:
            continue
        item = catalog.find_item(item_id)
        if item is None:
            continue

        income += item.unit_price * count
        if item.counts_as_pair:
            total_pairs += count
        if item.is_premium:
            premium_count += count

    return DailyStats(
        income=income,
        total_pairs=total_pairs,
        premium_count=premium_count,
        meal_allowance=meal_allowance_per_day,
        kasbon=record.kasbon,
    )
