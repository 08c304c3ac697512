"""
Shared fixtures.

Every test runs against an in-memory backend and a fixed clock; nothing
touches the user's real storage file.
"""

from datetime import date, datetime

import pytest

from hustle_planner.audit import AuditLogger
from hustle_planner.config import InsightSettings, Settings, TaxSettings
from hustle_planner.context import create_app_context
from hustle_planner.services.storage import (
    InMemoryBackend,
    KeyValueStore,
    ObfuscatedStore,
)


@pytest.fixture
def now() -> datetime:
    """Saturday, 15 June 2024, noon."""
    return datetime(2024, 6, 15, 12, 0)


@pytest.fixture
def today(now) -> date:
    return now.date()


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger("hustle_planner.tests")


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def kv_store(backend, audit_logger) -> KeyValueStore:
    return KeyValueStore(backend, audit_logger=audit_logger)


@pytest.fixture
def secure_store(kv_store, audit_logger) -> ObfuscatedStore:
    return ObfuscatedStore(kv_store, audit_logger=audit_logger)


@pytest.fixture
def insight_settings() -> InsightSettings:
    return InsightSettings()


@pytest.fixture
def tax_settings() -> TaxSettings:
    return TaxSettings()


class RecordingNotifier:
    """Notifier that remembers what it was asked to show."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    def notify(self, title: str, body: str) -> None:
        self.sent.append((title, body))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def app(backend, notifier):
    """A fully wired context over the in-memory backend."""
    return create_app_context(settings=Settings(), backend=backend, notifier=notifier)
