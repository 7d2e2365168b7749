"""
Data Models Package

This package contains all Pydantic models used in TargetLock.
All data flowing through the system must conform to these schemas.
"""

from targetlock.models.catalog import (
    DEFAULT_CATALOG,
    DISPLAY_ORDER,
    MENU_ITEMS,
    PREMIUM_CATEGORIES,
    PREMIUM_PRICE_THRESHOLD,
    Catalog,
    CatalogItem,
    ItemCategory,
)
from targetlock.models.records import (
    DailyRecord,
    DailyStats,
    ManualDeductions,
    MonthState,
    Projection,
    is_day_key,
)
from targetlock.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Catalog
    "DEFAULT_CATALOG",
    "DISPLAY_ORDER",
    "MENU_ITEMS",
    "PREMIUM_CATEGORIES",
    "PREMIUM_PRICE_THRESHOLD",
    "Catalog",
    "CatalogItem",
    "ItemCategory",
    # Records
    "DailyRecord",
    "DailyStats",
    "ManualDeductions",
    "MonthState",
    "Projection",
    "is_day_key",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
