"""Views derived from the engine: dashboard, warnings, calendar and report."""

from targetlock.evaluation.alerts import (
    DayWarning,
    WarningCode,
    WarningThresholds,
    evaluate_warnings,
)
from targetlock.evaluation.calendar_view import (
    CalendarCell,
    DayStatus,
    MonthCalendar,
    build_calendar,
)
from targetlock.evaluation.dashboard import DashboardSnapshot, build_dashboard
from targetlock.evaluation.formatting import (
    MONTH_NAMES,
    WEEKDAY_ABBREVIATIONS,
    format_money_compact,
    format_rupiah,
    format_thousands,
)
from targetlock.evaluation.report import (
    MonthEvaluation,
    MonthlyReport,
    PerformanceVerdict,
    ReportRow,
    ReportTotals,
    build_monthly_report,
    evaluate_month,
    report_filename,
)

__all__ = [
    # Warnings
    "DayWarning",
    "WarningCode",
    "WarningThresholds",
    "evaluate_warnings",
    # Calendar
    "CalendarCell",
    "DayStatus",
    "MonthCalendar",
    "build_calendar",
    # Dashboard
    "DashboardSnapshot",
    "build_dashboard",
    # Formatting
    "MONTH_NAMES",
    "WEEKDAY_ABBREVIATIONS",
    "format_money_compact",
    "format_rupiah",
    "format_thousands",
    # Report
    "MonthEvaluation",
    "MonthlyReport",
    "PerformanceVerdict",
    "ReportRow",
    "ReportTotals",
    "build_monthly_report",
    "evaluate_month",
    "report_filename",
]
