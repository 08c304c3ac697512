"""Audit logging package."""

from hustle_planner.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
