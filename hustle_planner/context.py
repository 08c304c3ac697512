"""
Application Context

Ties together every component the host application needs.

DESIGN DECISION: There are no module-level singletons for storage,
preferences or notifications. One AppContext is created at startup and
passed to whatever needs it; it lives as long as the process.
"""

from datetime import datetime
from typing import Optional

from hustle_planner.audit import AuditLogger, configure_logging
from hustle_planner.config import Settings, get_settings
from hustle_planner.finance import TaxEstimator
from hustle_planner.insights import InsightEngine
from hustle_planner.models import DataSnapshot, FinancialSummary, Insight
from hustle_planner.repositories import (
    AppointmentRepository,
    ClientRepository,
    EarningsRepository,
    ExpenseRepository,
    HabitLogRepository,
    HabitRepository,
    OpportunityRepository,
    ReminderRepository,
    ShiftRepository,
)
from hustle_planner.services import (
    InMemoryBackend,
    JsonFileBackend,
    KeyValueStore,
    Notifier,
    ObfuscatedStore,
    Preferences,
    ReminderService,
)
from hustle_planner.services.storage import StorageBackend
from hustle_planner.validation import RecordValidator


class AppContext:
    """Long-lived container of stores, repositories and services."""

    def __init__(
        self,
        settings: Settings,
        kv_store: KeyValueStore,
        secure_store: ObfuscatedStore,
        audit_logger: AuditLogger,
        notifier: Optional[Notifier] = None,
    ):
        self.settings = settings
        self.kv_store = kv_store
        self.secure_store = secure_store
        self.audit_logger = audit_logger

        validator = RecordValidator(audit_logger)
        shared = {"validator": validator, "audit_logger": audit_logger}

        self.clients = ClientRepository(kv_store, **shared)
        self.appointments = AppointmentRepository(kv_store, **shared)
        self.habit_logs = HabitLogRepository(kv_store, **shared)
        self.habits = HabitRepository(kv_store, logs=self.habit_logs, **shared)
        self.shifts = ShiftRepository(kv_store, **shared)

        # Financial records go through the obfuscated store
        self.expenses = ExpenseRepository(secure_store, **shared)
        self.earnings = EarningsRepository(secure_store, **shared)

        self.reminder_repository = ReminderRepository(kv_store, **shared)
        self.reminders = ReminderService(
            self.reminder_repository,
            notifier=notifier,
            audit_logger=audit_logger,
        )
        self.opportunities = OpportunityRepository(
            kv_store,
            clients=self.clients,
            reminders=self.reminders,
            **shared,
        )

        self.preferences = Preferences(kv_store)
        self.insight_engine = InsightEngine(
            settings=settings.insights,
            audit_logger=audit_logger,
        )
        self.tax_estimator = TaxEstimator(settings.tax)

    def snapshot(self) -> DataSnapshot:
        """Load everything the insight analyzers read."""
        return DataSnapshot(
            clients=self.clients.load_all(),
            earnings=self.earnings.load_all(),
            expenses=self.expenses.load_all(),
            opportunities=self.opportunities.load_all(),
            shifts=self.shifts.load_all(),
        )

    def generate_insights(self, now: Optional[datetime] = None) -> list[Insight]:
        return self.insight_engine.generate(self.snapshot(), now)

    def financial_summary(self) -> FinancialSummary:
        return self.tax_estimator.summarize(
            self.earnings.load_all(),
            self.expenses.load_all(),
        )


def create_backend(settings: Settings) -> StorageBackend:
    storage = settings.storage
    if storage.backend == "memory":
        return InMemoryBackend()
    return JsonFileBackend(storage.data_file)


def create_app_context(
    settings: Optional[Settings] = None,
    backend: Optional[StorageBackend] = None,
    notifier: Optional[Notifier] = None,
) -> AppContext:
    """
    Factory function to create the application context.

    Args:
        settings: Configuration; defaults to get_settings()
        backend: Raw storage; defaults to the backend named in settings.
                 Pass an InMemoryBackend for tests.
        notifier: Where due reminders are shown; defaults to the log

    Returns:
        A fully wired AppContext
    """
    settings = settings or get_settings()
    configure_logging(settings.app.log_level)

    audit_logger = AuditLogger()
    storage = settings.storage
    backend = backend if backend is not None else create_backend(settings)

    kv_store = KeyValueStore(backend, namespace=storage.namespace, audit_logger=audit_logger)
    secure_store = ObfuscatedStore(
        kv_store,
        prefix=storage.secure_prefix,
        key_storage_key=storage.key_storage_key,
        audit_logger=audit_logger,
    )

    return AppContext(
        settings=settings,
        kv_store=kv_store,
        secure_store=secure_store,
        audit_logger=audit_logger,
        notifier=notifier,
    )
