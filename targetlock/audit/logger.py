"""
Audit Logger

DESIGN DECISION: Every edit to the month state is logged.
This provides:
1. A trace of how each day's numbers changed
2. Debugging capability when a target looks off
3. A record of imports that replaced the whole state

The audit logger never raises: a logging failure must not lose an edit.
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from targetlock.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through stdlib logging at `level`."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.INFO))


class AuditLogger:
    """
    Central audit logging service.

    Writes every event to the structured local log.
    """

    def __init__(self, logger_name: str = "targetlock.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was written.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except (TypeError, ValueError) as e:
            # Unserializable details; keep the edit, report the failure
            logging.getLogger(__name__).error("audit_log_failed: %s", e)
            return False

        return True

    def log_record_updated(
        self,
        day: str,
        item_id: str,
        delta: int,
        new_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an item count change."""
        self.log(AuditEventBuilder.record_updated(
            day=day,
            item_id=item_id,
            delta=delta,
            new_count=new_count,
            correlation_id=correlation_id,
        ))

    def log_work_day_toggled(
        self,
        day: str,
        is_work_day: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.work_day_toggled(
            day=day,
            is_work_day=is_work_day,
            correlation_id=correlation_id,
        ))

    def log_kasbon_updated(
        self,
        day: str,
        previous: int,
        amount: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.kasbon_updated(
            day=day,
            previous=previous,
            amount=amount,
            correlation_id=correlation_id,
        ))

    def log_notes_updated(
        self,
        day: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.notes_updated(day=day, correlation_id=correlation_id))

    def log_target_updated(
        self,
        previous: int,
        target: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a monthly target change."""
        self.log(AuditEventBuilder.target_updated(
            previous=previous,
            target=target,
            correlation_id=correlation_id,
        ))

    def log_month_selected(
        self,
        year: int,
        month: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.month_selected(
            year=year,
            month=month,
            correlation_id=correlation_id,
        ))

    def log_state_saved(
        self,
        record_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.state_saved(
            record_count=record_count,
            correlation_id=correlation_id,
        ))

    def log_save_failed(
        self,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a storage failure."""
        self.log(AuditEventBuilder.save_failed(
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_backup_exported(
        self,
        record_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.backup_exported(
            record_count=record_count,
            correlation_id=correlation_id,
        ))

    def log_backup_imported(
        self,
        record_count: int,
        replaced_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.backup_imported(
            record_count=record_count,
            replaced_count=replaced_count,
            correlation_id=correlation_id,
        ))

    def log_backup_rejected(
        self,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.backup_rejected(
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g., an import) and pass it
    through the edit and the save that follows.
    """
    return uuid4()
