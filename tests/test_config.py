"""
Tests for configuration loading.
"""

import pytest

from targetlock.config import (
    AppSettings,
    Settings,
    TrackerSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "TARGETLOCK_DEFAULT_MONTHLY_TARGET",
        "TARGETLOCK_DEFAULT_MEAL_COST",
        "TARGETLOCK_DATA_FILE",
        "TARGETLOCK_FAILED_DAY_THRESHOLD",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestTrackerSettings:
    """Tests for TrackerSettings."""

    def test_defaults(self):
        settings = TrackerSettings()
        assert settings.default_monthly_target == 5_000_000
        assert settings.default_meal_cost == 15_000
        assert settings.failed_day_threshold == 150_000
        assert settings.premium_warning_count == 4
        assert settings.premium_min_pairs == 14
        assert settings.data_path.name == "targetlock_state.json"

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TARGETLOCK_DEFAULT_MONTHLY_TARGET", "7500000")
        monkeypatch.setenv("TARGETLOCK_DATA_FILE", str(tmp_path / "data.json"))
        settings = TrackerSettings()
        assert settings.default_monthly_target == 7_500_000
        assert settings.data_path == tmp_path / "data.json"

    def test_rejects_non_positive_target(self, monkeypatch):
        monkeypatch.setenv("TARGETLOCK_DEFAULT_MONTHLY_TARGET", "0")
        with pytest.raises(ValueError):
            TrackerSettings()

    def test_rejects_missing_directory(self, tmp_path):
        with pytest.raises(ValueError, match="does not exist"):
            TrackerSettings(data_file=str(tmp_path / "nope" / "data.json"))


class TestAppSettings:
    """Tests for AppSettings and the root container."""

    def test_log_level_pattern(self, monkeypatch):
        assert AppSettings().log_level == "INFO"
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError):
            AppSettings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
        assert isinstance(get_settings(), Settings)

    def test_validate_all_settings(self, monkeypatch):
        assert validate_all_settings() == {"tracker": True, "app": True}

        monkeypatch.setenv("TARGETLOCK_FAILED_DAY_THRESHOLD", "-1")
        results = validate_all_settings()
        assert results["tracker"] is False
        assert "tracker_error" in results
