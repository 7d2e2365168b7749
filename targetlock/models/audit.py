"""
Audit Models for TargetLock

Every edit to the month state is logged for audit purposes.
This provides:
1. A history of how a day's numbers came to be
2. Debugging information when a target looks wrong
3. A trail of imports that replaced the whole state

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Daily record edits
    RECORD_UPDATED = "record_updated"
    WORK_DAY_TOGGLED = "work_day_toggled"
    KASBON_UPDATED = "kasbon_updated"
    NOTES_UPDATED = "notes_updated"

    # Month-level settings
    TARGET_UPDATED = "target_updated"
    MONTH_SELECTED = "month_selected"

    # Persistence
    STATE_SAVED = "state_saved"
    SAVE_FAILED = "save_failed"
    BACKUP_EXPORTED = "backup_exported"
    BACKUP_IMPORTED = "backup_imported"
    BACKUP_REJECTED = "backup_rejected"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - what is this about? ("record" + day key, "state", "backup")
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None

    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., an edit and its save)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.record_updated("2024-07-01", "basic_cleaning", 1, 3)
        event = AuditEventBuilder.target_updated(5_000_000, 6_000_000)
    """

    @staticmethod
    def record_updated(
        day: str,
        item_id: str,
        delta: int,
        new_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_UPDATED,
            entity_type="record",
            entity_id=day,
            correlation_id=correlation_id,
            description=f"{item_id} set to {new_count} on {day}",
            details={
                "item_id": item_id,
                "delta": delta,
                "new_count": new_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def work_day_toggled(
        day: str,
        is_work_day: bool,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WORK_DAY_TOGGLED,
            entity_type="record",
            entity_id=day,
            correlation_id=correlation_id,
            description=f"{day} marked as {'work day' if is_work_day else 'day off'}",
            details={"is_work_day": is_work_day},
            is_user_action=True,
        )

    @staticmethod
    def kasbon_updated(
        day: str,
        previous: int,
        amount: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.KASBON_UPDATED,
            entity_type="record",
            entity_id=day,
            correlation_id=correlation_id,
            description=f"Kasbon on {day} changed from {previous} to {amount}",
            details={"previous": previous, "amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def notes_updated(
        day: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTES_UPDATED,
            entity_type="record",
            entity_id=day,
            correlation_id=correlation_id,
            description=f"Notes edited on {day}",
            is_user_action=True,
        )

    @staticmethod
    def target_updated(
        previous: int,
        target: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TARGET_UPDATED,
            entity_type="state",
            correlation_id=correlation_id,
            description=f"Monthly target changed from {previous} to {target}",
            details={"previous": previous, "target": target},
            is_user_action=True,
        )

    @staticmethod
    def month_selected(
        year: int,
        month: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MONTH_SELECTED,
            entity_type="state",
            entity_id=f"{year:04d}-{month + 1:02d}",
            correlation_id=correlation_id,
            description=f"Switched to {year:04d}-{month + 1:02d}",
            is_user_action=True,
        )

    @staticmethod
    def state_saved(
        record_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_SAVED,
            severity=AuditSeverity.DEBUG,
            entity_type="state",
            correlation_id=correlation_id,
            description=f"State saved with {record_count} records",
            details={"record_count": record_count},
        )

    @staticmethod
    def save_failed(
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="state",
            correlation_id=correlation_id,
            description="State could not be saved",
            error_message=error_message,
        )

    @staticmethod
    def backup_exported(
        record_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BACKUP_EXPORTED,
            entity_type="backup",
            correlation_id=correlation_id,
            description=f"Backup exported with {record_count} records",
            details={"record_count": record_count},
            is_user_action=True,
        )

    @staticmethod
    def backup_imported(
        record_count: int,
        replaced_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BACKUP_IMPORTED,
            severity=AuditSeverity.WARNING,
            entity_type="backup",
            correlation_id=correlation_id,
            description=(
                f"Backup imported: {record_count} records replaced "
                f"{replaced_count} existing records"
            ),
            details={
                "record_count": record_count,
                "replaced_count": replaced_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def backup_rejected(
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BACKUP_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="backup",
            correlation_id=correlation_id,
            description="Backup file rejected",
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
