"""
Dashboard Snapshot

Everything the daily screen shows for one day, computed in one pass from
the month state.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from targetlock.engine import (
    DayLike,
    compute_daily_stats,
    compute_strict_daily_target,
    is_work_day,
    preview_next_day_target,
    record_or_default,
    shift_day,
)
from targetlock.evaluation.alerts import DayWarning, WarningThresholds, evaluate_warnings
from targetlock.models.catalog import DEFAULT_CATALOG, Catalog
from targetlock.models.records import DailyRecord, DailyStats, MonthState


class DashboardSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    record: DailyRecord
    stats: DailyStats
    daily_target: int
    tomorrow_target: int
    consecutive_loss: bool
    warnings: list[DayWarning]

    @property
    def surplus(self) -> int:
        """Net minus target; negative means a deficit. Meal money is not counted."""
        return self.stats.net - self.daily_target

    @property
    def deficit(self) -> int:
        return max(0, -self.surplus)

    @property
    def take_home(self) -> int:
        return self.stats.take_home


def build_dashboard(
    state: MonthState,
    day: DayLike,
    catalog: Catalog = DEFAULT_CATALOG,
    thresholds: Optional[WarningThresholds] = None,
) -> DashboardSnapshot:
    """
    Build the dashboard for `day`.

    A loss streak needs both yesterday and today below their own strict
    targets, and yesterday must have been a workday.
    """
    record = record_or_default(state, day)
    key = record.date

    stats = compute_daily_stats(record, state.meal_allowance_per_day, catalog)
    daily_target = compute_strict_daily_target(state, key, catalog)

    yesterday = shift_day(key, -1)
    yesterday_stats = compute_daily_stats(
        state.records.get(yesterday),
        state.meal_allowance_per_day,
        catalog,
    )
    yesterday_target = compute_strict_daily_target(state, yesterday, catalog)
    consecutive_loss = (
        is_work_day(state, yesterday)
        and yesterday_stats.net < yesterday_target
        and stats.net < daily_target
    )

    return DashboardSnapshot(
        record=record,
        stats=stats,
        daily_target=daily_target,
        tomorrow_target=preview_next_day_target(state, record, catalog),
        consecutive_loss=consecutive_loss,
        warnings=evaluate_warnings(
            stats,
            record.is_work_day,
            daily_target,
            consecutive_loss,
            thresholds,
        ),
    )
