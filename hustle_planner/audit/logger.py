"""
Audit Logger

DESIGN DECISION: Every mutation and every degraded path is logged.
This provides:
1. Traceability of what changed in the local snapshots
2. Visibility into silently recovered failures (corrupt data, failed writes)

The audit logger:
- Is synchronous, like every operation in the core
- Never raises into the caller
"""

import logging
from typing import Any, Callable, Optional

import structlog

from hustle_planner.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditSeverity,
)


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
    """Route the stdlib root logger (and so structlog) at ``level``."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level))


class AuditLogger:
    """Central audit logging service."""

    def __init__(self, logger_name: str = "hustle_planner.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        try:
            log_dict = event.to_log_dict()
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # A broken log handler must not break a save
            logging.getLogger(__name__).exception("audit logging failed")

    def _emit(self, build: Callable[..., AuditEvent], *args: Any) -> None:
        """Build an event and log it; an event that fails to build is dropped."""
        try:
            event = build(*args)
        except Exception:
            # The mutation being audited has already been saved
            logging.getLogger(__name__).exception("audit event could not be built")
            return
        self.log(event)

    def log_record_created(self, entity_type: str, entity_id: str) -> None:
        self._emit(AuditEventBuilder.record_created, entity_type, entity_id)

    def log_record_updated(
        self,
        entity_type: str,
        entity_id: str,
        details: Optional[dict] = None,
    ) -> None:
        self._emit(AuditEventBuilder.record_updated, entity_type, entity_id, details)

    def log_record_deleted(
        self,
        entity_type: str,
        entity_id: str,
        cascaded: int = 0,
    ) -> None:
        self._emit(AuditEventBuilder.record_deleted, entity_type, entity_id, cascaded)

    def log_validation_failed(self, entity_type: str, issues: list[dict]) -> None:
        self._emit(AuditEventBuilder.validation_failed, entity_type, issues)

    def log_snapshot_unreadable(self, storage_key: str, reason: str) -> None:
        self._emit(AuditEventBuilder.snapshot_unreadable, storage_key, reason)

    def log_record_skipped(
        self,
        storage_key: str,
        index: int,
        error_message: str,
    ) -> None:
        self._emit(AuditEventBuilder.record_skipped, storage_key, index, error_message)

    def log_storage_write_failed(self, storage_key: str, error_message: str) -> None:
        self._emit(AuditEventBuilder.storage_write_failed, storage_key, error_message)

    def log_obfuscation_key_created(self, storage_key: str) -> None:
        self._emit(AuditEventBuilder.obfuscation_key_created, storage_key)

    def log_insights_generated(self, count: int, by_priority: dict[str, int]) -> None:
        self._emit(AuditEventBuilder.insights_generated, count, by_priority)

    def log_reminder_fired(self, reminder_id: str, repeats: str) -> None:
        self._emit(AuditEventBuilder.reminder_fired, reminder_id, repeats)
