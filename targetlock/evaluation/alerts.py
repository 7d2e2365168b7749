"""
Day Warning Rules

Blunt messages shown under the dashboard when a work day is going badly.
The rules only read numbers the engine already produced; they never change
a target.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from targetlock.config import TrackerSettings
from targetlock.evaluation.formatting import format_rupiah
from targetlock.models.records import DailyStats


class WarningCode(str, Enum):
    """Which rule fired."""
    FAILED_DAY = "failed_day"
    STOPPED_EARLY = "stopped_early"
    LOSING_PATTERN = "losing_pattern"
    SHORTFALL = "shortfall"


class DayWarning(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: WarningCode
    message: str


class WarningThresholds(BaseModel):
    """Tunable limits for the warning rules."""
    model_config = ConfigDict(frozen=True)

    failed_day: int = Field(default=150_000, ge=0)
    premium_count: int = Field(default=4, ge=1)
    min_pairs: int = Field(default=14, ge=0)

    @classmethod
    def from_settings(cls, settings: TrackerSettings) -> "WarningThresholds":
        return cls(
            failed_day=settings.failed_day_threshold,
            premium_count=settings.premium_warning_count,
            min_pairs=settings.premium_min_pairs,
        )


def evaluate_warnings(
    stats: DailyStats,
    is_work_day: bool,
    daily_target: int,
    consecutive_loss: bool,
    thresholds: Optional[WarningThresholds] = None,
) -> list[DayWarning]:
    """
    Apply the warning rules to one day.

    Returns warnings in display order; empty on a day off.
    """
    if not is_work_day:
        return []

    thresholds = thresholds or WarningThresholds()
    warnings = []

    if stats.net < thresholds.failed_day:
        warnings.append(DayWarning(
            code=WarningCode.FAILED_DAY,
            message="FAILED DAY. The monthly target just got heavier.",
        ))

    # Lots of high-value items but few pairs: the worker coasted on premiums
    if stats.premium_count >= thresholds.premium_count and stats.total_pairs < thresholds.min_pairs:
        warnings.append(DayWarning(
            code=WarningCode.STOPPED_EARLY,
            message="You stopped too early. PUSH THE VOLUME.",
        ))

    if consecutive_loss:
        warnings.append(DayWarning(
            code=WarningCode.LOSING_PATTERN,
            message="This work pattern WILL FAIL.",
        ))

    shortfall = daily_target - stats.net
    if shortfall > 0:
        warnings.append(DayWarning(
            code=WarningCode.SHORTFALL,
            message=f"SHORT {format_rupiah(shortfall)} TO SURVIVE TODAY.",
        ))

    return warnings
