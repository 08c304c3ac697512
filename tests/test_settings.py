"""Tests for configuration, preferences and application wiring."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from hustle_planner.config import (
    InsightSettings,
    Settings,
    StorageSettings,
    TaxSettings,
    get_settings,
    validate_all_settings,
)
from hustle_planner.context import create_app_context
from hustle_planner.services import (
    InMemoryBackend,
    JsonFileBackend,
    LoggingNotifier,
    Preferences,
    Theme,
)


class TestSettings:
    def test_defaults(self):
        insights = InsightSettings()
        tax = TaxSettings()

        assert insights.cold_client_days == 14
        assert insights.expense_share_threshold == 0.30
        assert tax.self_employment_rate == 0.1413
        assert tax.savings_buffer == 1.10

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("HUSTLE_INSIGHTS_COLD_CLIENT_DAYS", "30")
        monkeypatch.setenv("HUSTLE_TAX_STATE_RATE", "0")

        assert InsightSettings().cold_client_days == 30
        assert TaxSettings().state_rate == 0

    def test_invalid_backend_rejected(self):
        with pytest.raises(ValidationError):
            StorageSettings(backend="cloud")

    def test_data_file_expands_home(self):
        settings = StorageSettings(data_file="~/hustle.json")
        assert "~" not in str(settings.data_file)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()

    def test_validate_all_settings(self):
        get_settings.cache_clear()
        results = validate_all_settings()
        assert results == {"storage": True, "insights": True, "tax": True, "app": True}


class TestPreferences:
    def test_theme_defaults_to_dark(self, kv_store):
        assert Preferences(kv_store).theme == Theme.DARK

    def test_theme_round_trip(self, kv_store):
        preferences = Preferences(kv_store)
        preferences.theme = Theme.LIGHT

        assert Preferences(kv_store).theme == Theme.LIGHT
        assert kv_store.get("hustle-theme") == "light"

    def test_unknown_theme_falls_back(self, backend, kv_store):
        backend.set("hustle-theme", '"neon"')
        assert Preferences(kv_store).theme == Theme.DARK

    def test_privacy_notice_flag(self, kv_store):
        preferences = Preferences(kv_store)
        assert preferences.privacy_notice_acknowledged is False

        preferences.acknowledge_privacy_notice()

        assert Preferences(kv_store).privacy_notice_acknowledged is True


class TestAppContext:
    def test_memory_backend_from_settings(self, monkeypatch):
        monkeypatch.setenv("HUSTLE_STORAGE_BACKEND", "memory")
        app = create_app_context(settings=Settings())
        assert isinstance(app.kv_store.backend, InMemoryBackend)
        assert app.clients.load_all() == []

    def test_file_backend_from_settings(self, monkeypatch, tmp_path):
        path = tmp_path / "storage.json"
        monkeypatch.setenv("HUSTLE_STORAGE_DATA_FILE", str(path))

        app = create_app_context(settings=Settings())
        app.clients.add({"name": "Jordan"})

        reopened = create_app_context(settings=Settings())
        assert [c.name for c in reopened.clients.load_all()] == ["Jordan"]
        assert isinstance(JsonFileBackend(path).get("hustle-clients"), str)

    def test_financial_records_share_one_key(self, app, backend):
        app.earnings.add({"date": "2024-06-01", "tips": 10})
        app.expenses.add({"date": "2024-06-01", "category": "Other", "amount": 5})

        assert backend.get("_sk")
        assert app.earnings.total() == 10
        assert app.expenses.total() == 5

    def test_default_notifier_logs(self):
        app = create_app_context(settings=Settings(), backend=InMemoryBackend())
        app.reminders.add_reminder({"time": "09:00", "date": "2024-06-15", "message": "Stretch"})

        fired = app.reminders.check_due(datetime(2024, 6, 15, 9, 0))

        assert [r.message for r in fired] == ["Stretch"]

    def test_logging_notifier_never_raises(self):
        LoggingNotifier().notify("Hustle Planner Reminder", "Stretch")
