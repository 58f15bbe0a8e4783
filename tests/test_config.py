"""Tests for settings and logging configuration."""

from __future__ import annotations

import pytest
import structlog
from pydantic import ValidationError

from src.mapsync.config import Environment, OutputFormat, Settings, get_settings
from src.mapsync.core.logging import configure_structlog


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for key in ("ENVIRONMENT", "LOG_LEVEL", "MAPPINGS_FILE", "OUTPUT_FORMAT", "INTERACTIVE"):
            monkeypatch.delenv(key, raising=False)

        settings = Settings(_env_file=None)

        assert settings.ENVIRONMENT == Environment.development
        assert settings.LOG_LEVEL == "INFO"
        assert settings.MAPPINGS_FILE == "mappings.json"
        assert settings.OUTPUT_FORMAT == "table"
        assert settings.INTERACTIVE is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("MAPPINGS_FILE", "/etc/mapsync/mappings.json")
        monkeypatch.setenv("INTERACTIVE", "false")

        settings = Settings(_env_file=None)

        assert settings.ENVIRONMENT == Environment.production
        assert settings.MAPPINGS_FILE == "/etc/mapsync/mappings.json"
        assert settings.INTERACTIVE is False

    def test_invalid_output_format_rejected(self, monkeypatch):
        monkeypatch.setenv("OUTPUT_FORMAT", "xml")

        with pytest.raises(ValidationError, match="OUTPUT_FORMAT"):
            Settings(_env_file=None)

    def test_output_format_is_enum(self, monkeypatch):
        monkeypatch.setenv("OUTPUT_FORMAT", "csv")

        assert Settings(_env_file=None).OUTPUT_FORMAT == OutputFormat.CSV

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestConfigureStructlog:
    """Test renderer selection."""

    def test_console_renderer_in_development(self, monkeypatch):
        monkeypatch.setattr(
            "src.mapsync.core.logging.get_settings",
            lambda: Settings(_env_file=None, ENVIRONMENT="development"),
        )

        configure_structlog("debug")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_renderer_in_production(self, monkeypatch):
        monkeypatch.setattr(
            "src.mapsync.core.logging.get_settings",
            lambda: Settings(_env_file=None, ENVIRONMENT="production"),
        )

        configure_structlog()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
