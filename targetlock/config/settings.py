"""
Configuration Management for TargetLock

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Defaults match the numbers the worker started with (Rp5.000.000 monthly
target, Rp15.000 meal allowance), so the app runs with no .env at all.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackerSettings(BaseSettings):
    """Targets, allowances and warning thresholds."""

    model_config = SettingsConfigDict(
        env_prefix="TARGETLOCK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_monthly_target: int = Field(
        default=5_000_000,
        gt=0,
        description="Monthly revenue target used for a fresh state"
    )
    default_meal_cost: int = Field(
        default=15_000,
        ge=0,
        description="Meal allowance paid per work day"
    )
    data_file: str = Field(
        default="targetlock_state.json",
        description="Path of the JSON document holding the saved state"
    )

    # Warning thresholds
    failed_day_threshold: int = Field(
        default=150_000,
        ge=0,
        description="Net income below this marks the day as failed"
    )
    premium_warning_count: int = Field(
        default=4,
        ge=1,
        description="Premium items at which the stopped-early check kicks in"
    )
    premium_min_pairs: int = Field(
        default=14,
        ge=0,
        description="Minimum pairs expected once the premium count is reached"
    )

    @field_validator('data_file')
    @classmethod
    def validate_data_file(cls, v: str) -> str:
        """The parent directory must exist; the file itself is created on first save."""
        parent = Path(v).expanduser().parent
        if not parent.exists():
            raise ValueError(f"Directory for data file does not exist: {parent}")
        return v

    @property
    def data_path(self) -> Path:
        """Get the data file as an expanded Path."""
        return Path(self.data_file).expanduser()


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

    # Environment
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
    def tracker(self) -> TrackerSettings:
        return TrackerSettings()

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

    Returns a dict of {setting_name: is_valid}, with an extra
    "<name>_error" entry for every failing group.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.tracker
        results["tracker"] = True
    except ValueError as e:
        results["tracker"] = False
        results["tracker_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except ValueError as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
