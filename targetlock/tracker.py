"""
Main Orchestrator for TargetLock

This module owns the month state and defines the operations the UI calls:
1. Daily edits (item counts, kasbon, work-day flag, notes)
2. Month-level edits (monthly target, displayed month)
3. Views (dashboard, calendar, report, evaluation)
4. Backup export/import

DESIGN DECISION: The state is only ever replaced, never mutated. Every edit
builds a new MonthState, swaps it in, audits the change and hands it to
storage. Views are recomputed from the current state on every call, so
they can never show numbers from before an edit.
"""

from datetime import date
from typing import Callable, Optional, Union
from uuid import UUID

from targetlock.audit import AuditLogger, configure_logging, create_correlation_id
from targetlock.config import Settings, TrackerSettings, get_settings
from targetlock.engine import DayLike, record_or_default, to_day_key
from targetlock.evaluation import (
    DashboardSnapshot,
    MonthCalendar,
    MonthEvaluation,
    MonthlyReport,
    WarningThresholds,
    build_calendar,
    build_dashboard,
    build_monthly_report,
    evaluate_month,
)
from targetlock.models.catalog import DEFAULT_CATALOG, Catalog
from targetlock.models.records import DailyRecord, MonthState
from targetlock.services.storage import (
    BackupFormatError,
    JsonFileStorage,
    MonthStateStorageInterface,
    StorageError,
    dump_backup,
    parse_backup,
)


def default_state(settings: TrackerSettings, today: date) -> MonthState:
    """A fresh state for the month containing `today`."""
    return MonthState(
        monthly_target=settings.default_monthly_target,
        meal_allowance_per_day=settings.default_meal_cost,
        year=today.year,
        month=today.month - 1,
    )


class TargetTracker:
    """
    Holds the month state and applies edits to it.

    Days default to "today" from the injected clock when not given.
    """

    def __init__(
        self,
        state: MonthState,
        storage: Optional[MonthStateStorageInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        catalog: Catalog = DEFAULT_CATALOG,
        clock: Callable[[], date] = date.today,
        settings: Optional[TrackerSettings] = None,
    ):
        self._state = state
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._catalog = catalog
        self._clock = clock
        self._settings = settings or TrackerSettings()
        self._thresholds = WarningThresholds.from_settings(self._settings)

    @property
    def state(self) -> MonthState:
        return self._state

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def today_key(self) -> str:
        return to_day_key(self._clock())

    def _key(self, day: Optional[DayLike]) -> str:
        return self.today_key() if day is None else to_day_key(day)

    def record_for(self, day: Optional[DayLike] = None) -> DailyRecord:
        return record_or_default(self._state, self._key(day))

    # =========================================================================
    # STATE CHANGES
    # =========================================================================

    def _commit(self, state: MonthState, correlation_id: Optional[UUID] = None) -> bool:
        """
        Swap in a new state and persist it.

        Returns False if storage failed; the new state is kept in memory.
        """
        self._state = state
        if self._storage is None:
            return True

        try:
            self._storage.save(state)
        except StorageError as e:
            self._audit_logger.log_save_failed(str(e), correlation_id=correlation_id)
            return False

        self._audit_logger.log_state_saved(len(state.records), correlation_id=correlation_id)
        return True

    def _write_record(self, record: DailyRecord, correlation_id: Optional[UUID] = None) -> DailyRecord:
        self._commit(self._state.with_record(record), correlation_id)
        return record

    def adjust_item(self, day: Optional[DayLike], item_id: str, delta: int) -> DailyRecord:
        """
        Add `delta` (may be negative) to an item count; counts stop at zero.

        Raises:
            ValueError: If the catalog has no such item
        """
        if self._catalog.find_item(item_id) is None:
            raise ValueError(f"Unknown catalog item: {item_id}")

        current = self.record_for(day)
        items = dict(current.items)
        items[item_id] = max(0, items.get(item_id, 0) + delta)
        record = current.model_copy(update={"items": items})

        correlation_id = create_correlation_id()
        self._audit_logger.log_record_updated(
            day=record.date,
            item_id=item_id,
            delta=delta,
            new_count=items[item_id],
            correlation_id=correlation_id,
        )
        return self._write_record(record, correlation_id)

    def set_kasbon(self, day: Optional[DayLike], amount: int) -> DailyRecord:
        """Set the day's cash advance; negative amounts are stored as zero."""
        current = self.record_for(day)
        amount = max(0, int(amount))
        record = current.model_copy(update={"kasbon": amount})

        correlation_id = create_correlation_id()
        self._audit_logger.log_kasbon_updated(
            day=record.date,
            previous=current.kasbon,
            amount=amount,
            correlation_id=correlation_id,
        )
        return self._write_record(record, correlation_id)

    def toggle_work_day(self, day: Optional[DayLike] = None) -> DailyRecord:
        """Flip the day between work day and day off."""
        current = self.record_for(day)
        record = current.model_copy(update={"is_work_day": not current.is_work_day})

        correlation_id = create_correlation_id()
        self._audit_logger.log_work_day_toggled(
            day=record.date,
            is_work_day=record.is_work_day,
            correlation_id=correlation_id,
        )
        return self._write_record(record, correlation_id)

    def set_notes(self, day: Optional[DayLike], notes: Optional[str]) -> DailyRecord:
        current = self.record_for(day)
        record = current.model_copy(update={"notes": notes or None})

        correlation_id = create_correlation_id()
        self._audit_logger.log_notes_updated(day=record.date, correlation_id=correlation_id)
        return self._write_record(record, correlation_id)

    def set_monthly_target(self, amount: int) -> MonthState:
        """
        Change the monthly target.

        Raises:
            ValueError: If the amount is not a positive whole number
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValueError(f"Monthly target must be a positive whole number, got {amount!r}")

        previous = self._state.monthly_target
        correlation_id = create_correlation_id()
        self._audit_logger.log_target_updated(previous, amount, correlation_id=correlation_id)
        self._commit(self._state.replace(monthly_target=amount), correlation_id)
        return self._state

    def select_month(self, year: int, month: int) -> MonthState:
        """
        Switch the displayed month (0-based). Records of other months are kept.

        Raises:
            ValueError: If month is outside 0-11
        """
        new_state = self._state.replace(year=year, month=month)
        correlation_id = create_correlation_id()
        self._audit_logger.log_month_selected(year, month, correlation_id=correlation_id)
        self._commit(new_state, correlation_id)
        return self._state

    # =========================================================================
    # VIEWS
    # =========================================================================

    def dashboard(self, day: Optional[DayLike] = None) -> DashboardSnapshot:
        return build_dashboard(self._state, self._key(day), self._catalog, self._thresholds)

    def calendar(self) -> MonthCalendar:
        return build_calendar(self._state, self._catalog)

    def report(self, month: Optional[int] = None) -> MonthlyReport:
        return build_monthly_report(self._state, month, self._catalog)

    def evaluation(self, reference: Optional[DayLike] = None) -> MonthEvaluation:
        return evaluate_month(self._state, self._key(reference), self._catalog)

    # =========================================================================
    # BACKUP
    # =========================================================================

    def backup_document(self) -> str:
        """The full state (all months) as a backup document. Not audited."""
        return dump_backup(self._state)

    def export_backup(self) -> str:
        """Serialize the full state as a backup document and audit the export."""
        self._audit_logger.log_backup_exported(len(self._state.records))
        return self.backup_document()

    def import_backup(self, text: Union[str, bytes]) -> MonthState:
        """
        Replace the whole state with a backup document.

        Accepts the text or the raw bytes of an uploaded file.

        Raises:
            BackupFormatError: If the document is rejected; the current
                state is left untouched
        """
        correlation_id = create_correlation_id()
        try:
            state = parse_backup(text, defaults=self._settings, today=self._clock())
        except BackupFormatError as e:
            self._audit_logger.log_backup_rejected(str(e), correlation_id=correlation_id)
            raise

        self._audit_logger.log_backup_imported(
            record_count=len(state.records),
            replaced_count=len(self._state.records),
            correlation_id=correlation_id,
        )
        self._commit(state, correlation_id)
        return self._state


def create_tracker(
    settings: Optional[Settings] = None,
    clock: Callable[[], date] = date.today,
) -> TargetTracker:
    """
    Factory function to create a tracker backed by the configured JSON file.

    A missing or unreadable file starts a fresh state for the current month;
    an unreadable file is logged and left on disk until the next save.
    """
    settings = settings or get_settings()
    tracker_settings = settings.tracker
    configure_logging(settings.app.log_level)

    audit_logger = AuditLogger()
    storage = JsonFileStorage(tracker_settings.data_path)

    state = None
    try:
        state = storage.load()
    except StorageError as e:
        audit_logger.log_error(
            error_type="state_load_failed",
            error_message=str(e),
            details={"path": str(storage.path)},
        )

    if state is None:
        state = default_state(tracker_settings, clock())

    return TargetTracker(
        state=state,
        storage=storage,
        audit_logger=audit_logger,
        clock=clock,
        settings=tracker_settings,
    )
