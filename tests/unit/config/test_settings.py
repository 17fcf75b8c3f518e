"""Tests for Settings configuration class."""

from pathlib import Path

import pytest


class TestSettingsDefaults:
    """Test that Settings loads sensible defaults."""

    def test_settings_loads_with_defaults(self, monkeypatch):
        """Settings should load with default values when no env vars are set."""
        for var in ("DB_PATH", "CATALOG_PATH", "LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)

        from career_match.config.settings import Settings

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.db_path == Path("./data/career_match.db")
        assert settings.catalog_path == Path("./data/careers.yaml")
        assert settings.log_level == "INFO"


class TestSettingsFromEnvironment:
    """Test that Settings reads from environment variables."""

    def test_settings_reads_paths_from_env(self, monkeypatch, tmp_path):
        """Settings should read DB_PATH and CATALOG_PATH from environment."""
        monkeypatch.setenv("DB_PATH", str(tmp_path / "x.db"))
        monkeypatch.setenv("CATALOG_PATH", str(tmp_path / "careers.json"))

        from career_match.config.settings import Settings

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.db_path == tmp_path / "x.db"
        assert settings.catalog_path == tmp_path / "careers.json"

    def test_settings_normalizes_log_level(self, monkeypatch):
        """Log level should be upper-cased."""
        monkeypatch.setenv("LOG_LEVEL", "debug")

        from career_match.config.settings import Settings

        assert Settings(_env_file=None).log_level == "DEBUG"  # type: ignore[call-arg]

    def test_settings_rejects_unknown_log_level(self, monkeypatch):
        """An unknown log level should fail validation."""
        from pydantic import ValidationError

        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        from career_match.config.settings import Settings

        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]


class TestSettingsSingleton:
    """Test the get_settings/reset_settings accessors."""

    def test_get_settings_returns_same_instance(self):
        """get_settings should cache its instance until reset."""
        from career_match.config.settings import get_settings, reset_settings

        first = get_settings()
        assert get_settings() is first

        reset_settings()
        assert get_settings() is not first
