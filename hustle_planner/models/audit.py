"""
Audit Models for Hustle Planner

Every mutation and every degraded path (unreadable snapshot, failed
write, rejected input) produces an audit event. Events are written to
the structured local log; they are not persisted with the records.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Records
    RECORD_CREATED = "record_created"
    RECORD_UPDATED = "record_updated"
    RECORD_DELETED = "record_deleted"
    VALIDATION_FAILED = "validation_failed"

    # Storage
    SNAPSHOT_UNREADABLE = "snapshot_unreadable"
    RECORD_SKIPPED = "record_skipped"
    STORAGE_WRITE_FAILED = "storage_write_failed"
    OBFUSCATION_KEY_CREATED = "obfuscation_key_created"

    # Analysis
    INSIGHTS_GENERATED = "insights_generated"

    # Reminders
    REMINDER_FIRED = "reminder_fired"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'client', 'expense')"
    )
    entity_id: Optional[str] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.record_created("client", client.id)
    """

    @staticmethod
    def record_created(entity_type: str, entity_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_CREATED,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{entity_type} created",
        )

    @staticmethod
    def record_updated(
        entity_type: str,
        entity_id: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_UPDATED,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{entity_type} updated",
            details=details or {},
        )

    @staticmethod
    def record_deleted(
        entity_type: str,
        entity_id: str,
        cascaded: int = 0,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_DELETED,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{entity_type} deleted",
            details={"cascaded": cascaded} if cascaded else {},
        )

    @staticmethod
    def validation_failed(entity_type: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type=entity_type,
            description=f"{entity_type} rejected: {len(issues)} issue(s)",
            details={"issues": issues},
        )

    @staticmethod
    def snapshot_unreadable(storage_key: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SNAPSHOT_UNREADABLE,
            severity=AuditSeverity.WARNING,
            description=f"Snapshot {storage_key} could not be read",
            details={"storage_key": storage_key},
            error_message=reason,
        )

    @staticmethod
    def record_skipped(
        storage_key: str,
        index: int,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_SKIPPED,
            severity=AuditSeverity.WARNING,
            description=f"Invalid record #{index} in {storage_key} skipped",
            details={"storage_key": storage_key, "index": index},
            error_message=error_message,
        )

    @staticmethod
    def storage_write_failed(storage_key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_WRITE_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"Write to {storage_key} failed",
            details={"storage_key": storage_key},
            error_message=error_message,
        )

    @staticmethod
    def obfuscation_key_created(storage_key: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OBFUSCATION_KEY_CREATED,
            description="New obfuscation key generated",
            details={"storage_key": storage_key},
        )

    @staticmethod
    def insights_generated(count: int, by_priority: dict[str, int]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INSIGHTS_GENERATED,
            severity=AuditSeverity.DEBUG,
            description=f"{count} insight(s) generated",
            details={"count": count, "by_priority": by_priority},
        )

    @staticmethod
    def reminder_fired(reminder_id: str, repeats: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMINDER_FIRED,
            entity_type="reminder",
            entity_id=reminder_id,
            description="Reminder dispatched",
            details={"repeats": repeats},
        )
