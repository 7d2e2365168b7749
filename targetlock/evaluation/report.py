"""
Monthly Report and Evaluation

Builds the day-by-day table behind the exported performance report and the
month evaluation screen (achievement so far, projection, take-home pay).

DESIGN DECISION: Payroll and performance stay separate. Kasbon and meal
allowance only appear in take-home pay; achievement and projection are
measured on service income alone.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from targetlock.engine import (
    DayLike,
    compute_daily_stats,
    compute_projection,
    is_sunday,
    iter_month_keys,
    parse_day_key,
)
from targetlock.evaluation.formatting import MONTH_NAMES, WEEKDAY_ABBREVIATIONS
from targetlock.models.catalog import DEFAULT_CATALOG, Catalog
from targetlock.models.records import MonthState, Projection


# =============================================================================
# REPORT TABLE
# =============================================================================

class ReportRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: int
    key: str
    weekday: str
    status: str  # KERJA, LIBUR, MINGGU or "-"
    pairs: int = 0
    income: int = 0
    meal: int = 0
    kasbon: int = 0


class ReportTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    income: int = 0
    meal: int = 0
    kasbon: int = 0
    pairs: int = 0

    @property
    def take_home(self) -> int:
        return self.income - self.kasbon + self.meal


class MonthlyReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    monthly_target: int
    rows: list[ReportRow]
    totals: ReportTotals

    @property
    def period(self) -> str:
        return f"{MONTH_NAMES[self.month].upper()} {self.year}"


def build_monthly_report(
    state: MonthState,
    month: Optional[int] = None,
    catalog: Catalog = DEFAULT_CATALOG,
) -> MonthlyReport:
    """
    Build the report table for one month of the state's year.

    Args:
        state: Month state holding the records
        month: 0-based month to report on; defaults to the displayed month
        catalog: Price list used to value the items
    """
    month = state.month if month is None else month
    if not 0 <= month <= 11:
        raise ValueError(f"Month must be between 0 and 11, got {month}")

    rows = []
    income = meal = kasbon = pairs = 0

    for day, key in enumerate(iter_month_keys(state.year, month), start=1):
        weekday = WEEKDAY_ABBREVIATIONS[parse_day_key(key).weekday()]
        record = state.records.get(key)

        if record is None:
            rows.append(ReportRow(
                day=day,
                key=key,
                weekday=weekday,
                status="MINGGU" if is_sunday(key) else "-",
            ))
            continue

        stats = compute_daily_stats(record, state.meal_allowance_per_day, catalog)
        income += stats.income
        meal += stats.meal_allowance
        kasbon += stats.kasbon
        pairs += stats.total_pairs

        rows.append(ReportRow(
            day=day,
            key=key,
            weekday=weekday,
            status="KERJA" if record.is_work_day else "LIBUR",
            pairs=stats.total_pairs,
            income=stats.income,
            meal=stats.meal_allowance,
            kasbon=stats.kasbon,
        ))

    return MonthlyReport(
        year=state.year,
        month=month,
        monthly_target=state.monthly_target,
        rows=rows,
        totals=ReportTotals(income=income, meal=meal, kasbon=kasbon, pairs=pairs),
    )


# =============================================================================
# MONTH EVALUATION
# =============================================================================

class PerformanceVerdict(str, Enum):
    CRITICAL = "critical"
    BEHIND = "behind"
    ON_TRACK = "on_track"


VERDICT_MESSAGES = {
    PerformanceVerdict.CRITICAL: "PATHETIC PERFORMANCE. THE PAY TARGET IS FAR AWAY.",
    PerformanceVerdict.BEHIND: "WORK HARDER. THE MONTH-END BONUS IS AT RISK.",
    PerformanceVerdict.ON_TRACK: "KEEP THIS PACE. FOCUS ON QUALITY.",
}


class MonthEvaluation(BaseModel):
    model_config = ConfigDict(frozen=True)

    projection: Projection
    monthly_target: int
    take_home: int
    total_meal_allowance: int
    total_kasbon: int

    @property
    def percent_achieved(self) -> float:
        return self.projection.total_net_income / self.monthly_target * 100

    @property
    def projected_percent(self) -> float:
        return self.projection.projected_total / self.monthly_target * 100

    @property
    def verdict(self) -> PerformanceVerdict:
        if self.projected_percent < 80:
            return PerformanceVerdict.CRITICAL
        if self.projected_percent < 100:
            return PerformanceVerdict.BEHIND
        return PerformanceVerdict.ON_TRACK

    @property
    def message(self) -> str:
        return VERDICT_MESSAGES[self.verdict]


def evaluate_month(
    state: MonthState,
    reference_date: DayLike,
    catalog: Catalog = DEFAULT_CATALOG,
) -> MonthEvaluation:
    """Evaluate the displayed month as of `reference_date`."""
    projection = compute_projection(state, reference_date, catalog)
    totals = build_monthly_report(state, catalog=catalog).totals

    # Take-home pays out what was earned so far, not the projection
    take_home = projection.total_net_income - totals.kasbon + totals.meal

    return MonthEvaluation(
        projection=projection,
        monthly_target=state.monthly_target,
        take_home=take_home,
        total_meal_allowance=totals.meal,
        total_kasbon=totals.kasbon,
    )


def report_filename(report: MonthlyReport) -> str:
    return f"Laporan_IQSHOE_{MONTH_NAMES[report.month]}_{report.year}.pdf"
