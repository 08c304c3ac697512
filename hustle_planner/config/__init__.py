"""Configuration package."""

from hustle_planner.config.settings import (
    AppSettings,
    InsightSettings,
    Settings,
    StorageSettings,
    TaxSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "InsightSettings",
    "Settings",
    "StorageSettings",
    "TaxSettings",
    "get_settings",
    "validate_all_settings",
]
