"""
Services Package

Storage, reminders, notifications and preferences.
"""

from hustle_planner.services.storage import (
    InMemoryBackend,
    JsonFileBackend,
    KeyValueStore,
    ObfuscatedStore,
    StorageError,
)
from hustle_planner.services.notifications import LoggingNotifier, Notifier
from hustle_planner.services.preferences import Preferences, Theme
from hustle_planner.services.reminders import ReminderService, is_due

__all__ = [
    "InMemoryBackend",
    "JsonFileBackend",
    "KeyValueStore",
    "LoggingNotifier",
    "Notifier",
    "ObfuscatedStore",
    "Preferences",
    "ReminderService",
    "StorageError",
    "Theme",
    "is_due",
]
