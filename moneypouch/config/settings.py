"""
Configuration Management for MoneyPouch

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage location, storage keys and ledger tunables are validated once
and handed to the components that need them.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where and under which keys the ledger collections are persisted."""

    model_config = SettingsConfigDict(
        env_prefix="MONEYPOUCH_STORAGE_",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path.home() / ".moneypouch",
        description="Directory holding one JSON file per collection"
    )

    # Keys match the web client's localStorage layout
    expenses_key: str = Field(default="moneypouch_expenses")
    budget_key: str = Field(default="moneypouch_budget")
    daily_budget_key: str = Field(default="moneypouch_daily_budget")
    goals_key: str = Field(default="moneypouch_goals")
    savings_pool_key: str = Field(default="moneypouch_savings_pool")

    write_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for a file write before reporting failure"
    )

    @field_validator("data_dir")
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        """Expand ``~`` so env values like ``~/money`` work."""
        return v.expanduser()


class LedgerSettings(BaseSettings):
    """Tunables of the derived-metrics engine."""

    model_config = SettingsConfigDict(
        env_prefix="MONEYPOUCH_LEDGER_",
        extra="ignore"
    )

    snapshot_retention_days: int = Field(
        default=30,
        ge=1,
        description="Daily allowance snapshots older than this are pruned"
    )
    default_calculation: str = Field(
        default="dynamic",
        pattern="^(dynamic|fixed)$",
        description="Calculation used when saving a budget without one"
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

    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR)$",
        description="Minimum level written to the local log"
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
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

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

    Returns a dict of {setting_name: is_valid}, plus ``<name>_error``
    entries for the ones that failed. Useful for startup checks.
    """
    results = {}
    settings = get_settings()

    for name in ("storage", "ledger", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
