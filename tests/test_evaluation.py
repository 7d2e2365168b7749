"""
Tests for the views built on the engine: warnings, dashboard, calendar,
monthly report and formatting.
"""

import pytest

from targetlock.evaluation import (
    DayStatus,
    PerformanceVerdict,
    WarningCode,
    WarningThresholds,
    build_calendar,
    build_dashboard,
    build_monthly_report,
    evaluate_month,
    evaluate_warnings,
    format_money_compact,
    format_rupiah,
    format_thousands,
    report_filename,
)
from targetlock.models.records import DailyRecord, DailyStats, MonthState


def make_state(monthly_target=3_100_000, records=()):
    """July 2024 (month index 6), meal allowance 15000."""
    return MonthState(
        monthly_target=monthly_target,
        meal_allowance_per_day=15_000,
        year=2024,
        month=6,
        records={record.date: record for record in records},
    )


def worked(day, kasbon=0, **items):
    return DailyRecord(date=day, items=items, kasbon=kasbon)


def codes(warnings):
    return [w.code for w in warnings]


# =============================================================================
# FORMATTING
# =============================================================================

class TestFormatting:
    """Tests for Rupiah formatting."""

    def test_format_thousands(self):
        assert format_thousands(1_234_567) == "1.234.567"
        assert format_thousands(999) == "999"

    def test_format_rupiah(self):
        assert format_rupiah(1_234_567) == "Rp1.234.567"
        assert format_rupiah(0) == "Rp0"
        assert format_rupiah(-5_000) == "-Rp5.000"

    def test_format_money_compact(self):
        assert format_money_compact(0) == "0"
        assert format_money_compact(950) == "950"
        assert format_money_compact(150_000) == "150k"
        assert format_money_compact(1_500_000) == "1.5jt"
        assert format_money_compact(-2_000_000) == "-2jt"

    def test_compact_rounds_half_up(self):
        assert format_money_compact(1_250_000) == "1.3jt"
        assert format_money_compact(1_500) == "2k"


# =============================================================================
# WARNINGS
# =============================================================================

class TestWarnings:
    """Tests for evaluate_warnings."""

    def test_day_off_has_no_warnings(self):
        assert evaluate_warnings(DailyStats(), False, 500_000, True) == []

    def test_good_day_has_no_warnings(self):
        stats = DailyStats(income=200_000, total_pairs=20, premium_count=2)
        assert evaluate_warnings(stats, True, 150_000, False) == []

    def test_all_rules_in_order(self):
        stats = DailyStats(income=100_000, total_pairs=5, premium_count=5)
        warnings = evaluate_warnings(stats, True, 200_000, True)
        assert codes(warnings) == [
            WarningCode.FAILED_DAY,
            WarningCode.STOPPED_EARLY,
            WarningCode.LOSING_PATTERN,
            WarningCode.SHORTFALL,
        ]
        assert warnings[-1].message == "SHORT Rp100.000 TO SURVIVE TODAY."

    def test_stopped_early_needs_few_pairs(self):
        stats = DailyStats(income=200_000, total_pairs=14, premium_count=6)
        assert WarningCode.STOPPED_EARLY not in codes(evaluate_warnings(stats, True, 0, False))

        stats = DailyStats(income=200_000, total_pairs=13, premium_count=4)
        assert codes(evaluate_warnings(stats, True, 0, False)) == [WarningCode.STOPPED_EARLY]

    def test_failed_day_boundary(self):
        """Test exactly the threshold is not a failed day."""
        stats = DailyStats(income=150_000, total_pairs=15)
        assert evaluate_warnings(stats, True, 0, False) == []

    def test_custom_thresholds(self):
        stats = DailyStats(income=100_000, total_pairs=15)
        thresholds = WarningThresholds(failed_day=50_000)
        assert evaluate_warnings(stats, True, 0, False, thresholds) == []


# =============================================================================
# DASHBOARD
# =============================================================================

class TestDashboard:
    """Tests for build_dashboard."""

    def test_first_day_below_target(self):
        state = make_state(records=[worked("2024-07-01", basic_cleaning=10)])
        snapshot = build_dashboard(state, "2024-07-01")

        assert snapshot.stats.net == 100_000
        assert snapshot.daily_target == 114_815
        assert snapshot.surplus == -14_815
        assert snapshot.deficit == 14_815
        assert snapshot.tomorrow_target == 115_385
        assert snapshot.take_home == 115_000
        # June 30 2024 is a Sunday, so no streak
        assert snapshot.consecutive_loss is False
        assert codes(snapshot.warnings) == [WarningCode.FAILED_DAY, WarningCode.SHORTFALL]

    def test_consecutive_loss(self):
        state = make_state(records=[
            worked("2024-07-01", basic_cleaning=10),
            worked("2024-07-02", basic_cleaning=5),
        ])
        snapshot = build_dashboard(state, "2024-07-02")
        assert snapshot.consecutive_loss is True
        assert WarningCode.LOSING_PATTERN in codes(snapshot.warnings)

    def test_no_streak_after_day_off(self):
        state = make_state(records=[
            DailyRecord(date="2024-07-01", is_work_day=False),
            worked("2024-07-02", basic_cleaning=5),
        ])
        assert build_dashboard(state, "2024-07-02").consecutive_loss is False

    def test_no_streak_when_today_meets_target(self):
        state = make_state(records=[
            worked("2024-07-01", basic_cleaning=10),
            worked("2024-07-02", basic_cleaning=20),
        ])
        snapshot = build_dashboard(state, "2024-07-02")
        assert snapshot.consecutive_loss is False
        assert snapshot.surplus > 0
        assert snapshot.warnings == []

    def test_unrecorded_day_uses_default_record(self):
        state = make_state()
        snapshot = build_dashboard(state, "2024-07-05")
        assert snapshot.record.date == "2024-07-05"
        assert snapshot.record.is_work_day is True
        assert snapshot.stats.meal_allowance == 15_000
        assert state.records == {}

    def test_day_off_shows_no_warnings(self):
        state = make_state(records=[DailyRecord(date="2024-07-03", is_work_day=False, kasbon=20_000)])
        snapshot = build_dashboard(state, "2024-07-03")
        assert snapshot.warnings == []
        assert snapshot.take_home == -20_000


# =============================================================================
# CALENDAR
# =============================================================================

class TestCalendar:
    """Tests for build_calendar."""

    def test_grid_and_statuses(self):
        state = make_state(records=[
            worked("2024-07-01", basic_cleaning=10),
            worked("2024-07-02", basic_cleaning=20),
            DailyRecord(date="2024-07-03", is_work_day=False),
        ])
        calendar = build_calendar(state)

        assert calendar.title == "Juli 2024"
        # July 1 2024 is a Monday; weeks start on Sunday
        assert calendar.leading_blanks == 1
        assert len(calendar.cells) == 31

        cells = {cell.key: cell for cell in calendar.cells}
        assert cells["2024-07-01"].status == DayStatus.MIN
        assert cells["2024-07-02"].status == DayStatus.OK
        assert cells["2024-07-03"].status == DayStatus.OFF
        assert cells["2024-07-04"].status == DayStatus.EMPTY
        assert cells["2024-07-04"].has_record is False
        assert cells["2024-07-07"].is_sunday is True
        assert cells["2024-07-01"].net == 100_000
        assert cells["2024-07-01"].target == 114_815

    def test_sunday_first_has_no_blanks(self):
        # September 1 2024 is a Sunday
        state = make_state().replace(month=8)
        calendar = build_calendar(state)
        assert calendar.leading_blanks == 0
        assert len(calendar.cells) == 30


# =============================================================================
# REPORT AND EVALUATION
# =============================================================================

class TestMonthlyReport:
    """Tests for build_monthly_report and evaluate_month."""

    def _state(self, monthly_target=3_100_000):
        return make_state(
            monthly_target=monthly_target,
            records=[
                worked("2024-07-01", kasbon=25_000, basic_cleaning=10),
                DailyRecord(date="2024-07-02", is_work_day=False),
            ],
        )

    def test_rows_and_totals(self):
        report = build_monthly_report(self._state())
        rows = {row.key: row for row in report.rows}

        assert len(report.rows) == 31
        assert rows["2024-07-01"].status == "KERJA"
        assert rows["2024-07-01"].weekday == "Sen"
        assert rows["2024-07-01"].pairs == 10
        assert rows["2024-07-02"].status == "LIBUR"
        assert rows["2024-07-03"].status == "-"
        assert rows["2024-07-07"].status == "MINGGU"

        assert report.totals.income == 100_000
        assert report.totals.meal == 15_000
        assert report.totals.kasbon == 25_000
        assert report.totals.take_home == 90_000

    def test_other_month(self):
        report = build_monthly_report(self._state(), month=1)
        assert len(report.rows) == 29
        assert report.totals.income == 0
        assert report.period == "FEBRUARI 2024"

    def test_month_out_of_range(self):
        with pytest.raises(ValueError):
            build_monthly_report(self._state(), month=12)

    def test_report_filename(self):
        report = build_monthly_report(self._state())
        assert report_filename(report) == "Laporan_IQSHOE_Juli_2024.pdf"

    def test_evaluate_month_behind(self):
        evaluation = evaluate_month(self._state(), "2024-07-01")
        assert evaluation.projection.projected_total == 2_700_000
        assert evaluation.percent_achieved == pytest.approx(100_000 / 3_100_000 * 100)
        assert evaluation.verdict == PerformanceVerdict.BEHIND
        assert evaluation.take_home == 90_000
        assert evaluation.total_kasbon == 25_000

    def test_evaluate_month_critical_and_on_track(self):
        assert evaluate_month(make_state(), "2024-07-01").verdict == PerformanceVerdict.CRITICAL
        assert evaluate_month(self._state(monthly_target=2_700_000), "2024-07-01").verdict == (
            PerformanceVerdict.ON_TRACK
        )
