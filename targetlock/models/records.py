"""
Core Data Models for TargetLock

These models define the schemas for everything the tracker stores and
everything the engine derives from it.

DESIGN DECISION: Field names on the wire are the camelCase names used by
existing backup files (monthlyTarget, mealCost, isWorkDay, ...). Python code
uses snake_case; pydantic aliases map between the two so old backups stay
importable byte-for-byte.

DESIGN DECISION: Stored data is tolerant. A negative or garbage item count
is clamped or dropped during validation instead of failing the whole
document - one bad tap on the input panel must not make a month of history
unreadable.
"""

import math
from datetime import date
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


def _coerce_amount(value: Any) -> Optional[int]:
    """Turn a stored count/amount into a non-negative int, or None if unusable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return max(0, int(value))
    if isinstance(value, str):
        try:
            return max(0, int(value.strip()))
        except ValueError:
            return None
    return None


def is_day_key(value: str) -> bool:
    """True if value is a real calendar date in canonical YYYY-MM-DD form."""
    try:
        return date.fromisoformat(value).isoformat() == value
    except (TypeError, ValueError):
        return False


# =============================================================================
# STORED MODELS
# =============================================================================

class ManualDeductions(BaseModel):
    """
    Legacy per-day deduction flags.

    Only kept so that backups written by older versions round-trip unchanged.
    The meal allowance is driven by the work-day flag, not by this block.
    """
    model_config = ConfigDict(extra="allow")

    meal: bool = True


class DailyRecord(BaseModel):
    """
    One calendar day of activity.

    Created on first interaction with a date and overwritten on every edit;
    records are never deleted.
    """
    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(
        ...,
        description="Canonical day key (YYYY-MM-DD)"
    )
    is_work_day: bool = Field(
        default=True,
        alias="isWorkDay",
        description="False forfeits income and meal allowance for the day"
    )
    items: dict[str, int] = Field(
        default_factory=dict,
        description="Catalog item id -> quantity produced that day"
    )
    kasbon: int = Field(
        default=0,
        ge=0,
        description="Cash advance handed out that day (Rupiah)"
    )
    manual_deductions: ManualDeductions = Field(
        default_factory=ManualDeductions,
        alias="manualDeductions",
    )
    notes: Optional[str] = None

    @field_validator('date')
    @classmethod
    def validate_date_key(cls, v: str) -> str:
        if not is_day_key(v):
            raise ValueError(f"Invalid day key: {v!r} (expected YYYY-MM-DD)")
        return v

    @field_validator('items', mode='before')
    @classmethod
    def clamp_item_counts(cls, v: Any) -> dict[str, int]:
        """Negative counts become zero, non-numeric counts are dropped."""
        if not isinstance(v, dict):
            return {}
        cleaned = {}
        for item_id, count in v.items():
            amount = _coerce_amount(count)
            if amount is not None:
                cleaned[str(item_id)] = amount
        return cleaned

    @field_validator('kasbon', mode='before')
    @classmethod
    def clamp_kasbon(cls, v: Any) -> int:
        amount = _coerce_amount(v)
        return amount if amount is not None else 0

    def count_of(self, item_id: str) -> int:
        return self.items.get(item_id, 0)


class MonthState(BaseModel):
    """
    The single root of truth held by the application.

    `records` is sparse: a missing key means "no record yet". It may also
    hold days from other months - history is kept across month switches.
    """
    model_config = ConfigDict(populate_by_name=True)

    monthly_target: int = Field(
        ...,
        gt=0,
        alias="monthlyTarget",
        description="Revenue goal for the month (Rupiah)"
    )
    meal_allowance_per_day: int = Field(
        default=0,
        ge=0,
        alias="mealCost",
        description="Meal allowance paid per work day (Rupiah)"
    )
    year: int = Field(
        ...,
        alias="currentYear",
    )
    month: int = Field(
        ...,
        ge=0,
        le=11,
        alias="currentMonth",
        description="Displayed month, 0-based (0 = January)"
    )
    records: dict[str, DailyRecord] = Field(default_factory=dict)

    @model_validator(mode='after')
    def validate_record_keys(self) -> 'MonthState':
        """Every record must be stored under its own canonical date."""
        for key, record in self.records.items():
            if key != record.date:
                raise ValueError(
                    f"Record stored under {key!r} is dated {record.date!r}"
                )
        return self

    def with_record(self, record: DailyRecord) -> 'MonthState':
        """Return a new state with `record` written under its date."""
        records = dict(self.records)
        records[record.date] = record
        return self.model_copy(update={"records": records})

    def replace(self, **changes: Any) -> 'MonthState':
        """Return a new, re-validated state with top-level fields changed."""
        data = self.model_dump()
        data.update(changes)
        return type(self).model_validate(data)

    def to_backup_dict(self) -> dict:
        """Serialize with the field names used by backup files."""
        return self.model_dump(by_alias=True, mode="json")


# =============================================================================
# DERIVED MODELS (never stored)
# =============================================================================

class DailyStats(BaseModel):
    """
    Statistics for one day, recomputed on demand from a record.
    """
    model_config = ConfigDict(frozen=True)

    income: int = 0
    total_pairs: int = 0
    premium_count: int = 0
    meal_allowance: int = 0
    kasbon: int = 0

    @property
    def net(self) -> int:
        """Performance figure compared against targets. Same as income."""
        return self.income

    @property
    def deductions(self) -> int:
        """There is no deduction term besides kasbon; kept for report columns."""
        return 0

    @property
    def take_home(self) -> int:
        """Cash actually paid out: income minus kasbon plus meal allowance."""
        return self.income - self.kasbon + self.meal_allowance


class Projection(BaseModel):
    """Month-to-date income and a linear month-end projection."""
    model_config = ConfigDict(frozen=True)

    total_net_income: int
    work_days_remaining: int
    projected_total: float
    days_passed: int
    raw_deficit: int = Field(
        ...,
        description="Monthly target minus income so far; negative when over target"
    )

    @property
    def deficit(self) -> int:
        return max(0, self.raw_deficit)
