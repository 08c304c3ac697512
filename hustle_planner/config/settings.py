"""
Configuration Management for Hustle Planner

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every analyzer threshold and tax rate lives in one place so that the
rules engine and estimator stay pure functions of (records, settings).
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HUSTLE_STORAGE_",
        extra="ignore"
    )

    backend: str = Field(
        default="file",
        pattern="^(file|memory)$",
        description="Which raw storage backend to use"
    )
    data_file: Path = Field(
        default=Path.home() / ".hustle_planner" / "storage.json",
        description="Path of the JSON document backing the file backend"
    )
    namespace: str = Field(
        default="",
        description="Prefix applied to every key written by the key-value store"
    )
    secure_prefix: str = Field(
        default="secure_hustle_",
        description="Prefix for keys written by the obfuscated store"
    )
    key_storage_key: str = Field(
        default="_sk",
        min_length=1,
        description="Key under which the obfuscation key is persisted"
    )

    @field_validator('data_file')
    @classmethod
    def expand_data_file(cls, v: Path) -> Path:
        """Allow ~ in configured paths."""
        return v.expanduser()


class InsightSettings(BaseSettings):
    """Thresholds used by the insight analyzers."""

    model_config = SettingsConfigDict(
        env_prefix="HUSTLE_INSIGHTS_",
        extra="ignore"
    )

    # Client patterns
    cold_client_days: int = Field(
        default=14,
        ge=1,
        description="Days without a visit before the top client is 'going cold'"
    )
    growth_min_spend: float = Field(
        default=100.0,
        description="Lower (exclusive) bound of the upselling sweet spot"
    )
    growth_max_spend: float = Field(
        default=500.0,
        description="Upper (exclusive) bound of the upselling sweet spot"
    )
    growth_visit_window: int = Field(
        default=3,
        ge=1,
        description="How many trailing visits are averaged"
    )

    # Earnings trend
    trend_window: int = Field(
        default=7,
        ge=1,
        description="Records per comparison window"
    )
    decline_threshold_percent: float = Field(
        default=-15.0,
        description="Change below this percentage is a decline"
    )
    surge_threshold_percent: float = Field(
        default=20.0,
        description="Change above this percentage is a surge"
    )

    # Expenses
    expense_share_threshold: float = Field(
        default=0.30,
        gt=0.0,
        le=1.0,
        description="Share of total expenses that flags a category"
    )

    # Opportunities
    pipeline_value_threshold: float = Field(
        default=10000.0,
        description="Active pipeline value above which an insight is emitted"
    )

    # Work patterns
    min_shifts: int = Field(
        default=5,
        ge=1,
        description="Minimum shift records before work patterns are analyzed"
    )
    shift_window: int = Field(
        default=10,
        ge=1,
        description="How many trailing shifts are averaged"
    )
    long_shift_hours: float = Field(
        default=8.0,
        description="Average shift length that triggers a burnout warning"
    )
    min_hourly_rate: float = Field(
        default=50.0,
        description="Earnings per hour below which a suggestion is emitted"
    )


class TaxSettings(BaseSettings):
    """Rates used by the tax and budget estimator."""

    model_config = SettingsConfigDict(
        env_prefix="HUSTLE_TAX_",
        extra="ignore"
    )

    self_employment_rate: float = Field(
        default=0.1413,
        ge=0.0,
        le=1.0,
        description="Social Security + Medicare share"
    )
    federal_rate: float = Field(
        default=0.22,
        ge=0.0,
        le=1.0,
        description="Estimated federal bracket"
    )
    state_rate: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Average state rate"
    )
    savings_buffer: float = Field(
        default=1.10,
        ge=1.0,
        description="Multiplier applied to the liability for recommended savings"
    )
    emergency_fund_months: int = Field(
        default=6,
        ge=0,
        description="Months of income held as an emergency fund"
    )
    savings_rate: float = Field(
        default=0.20,
        ge=0.0,
        le=1.0,
        description="Share of monthly income set aside as savings"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for structured logs"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def insights(self) -> InsightSettings:
        return InsightSettings()

    @property
    def tax(self) -> TaxSettings:
        return TaxSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    ``<name>_error`` entry for every group that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "insights", "tax", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
