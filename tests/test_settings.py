"""
Tests for settings loading and logging setup.
"""

import logging

import pytest

from ghl_mcp.config import HighLevelSettings, configure_logging, get_settings
from ghl_mcp.integrations.highlevel import DEFAULT_API_VERSION, DEFAULT_BASE_URL


class TestGetSettings:
    """Tests for get_settings."""

    def test_defaults(self, monkeypatch):
        for name in ("GHL_API_KEY", "GHL_LOCATION_ID", "GHL_BASE_URL", "GHL_TIMEOUT", "GHL_DEBUG"):
            monkeypatch.delenv(name, raising=False)

        settings = get_settings()

        assert settings.is_configured is False
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.api_version == DEFAULT_API_VERSION
        assert settings.timeout == 30.0
        assert settings.debug is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("GHL_API_KEY", "pit-env")
        monkeypatch.setenv("GHL_LOCATION_ID", "loc_env")
        monkeypatch.setenv("GHL_TIMEOUT", "12.5")
        monkeypatch.setenv("GHL_DEBUG", "TRUE")

        settings = get_settings()

        assert settings.api_key.get_secret_value() == "pit-env"
        assert settings.location_id == "loc_env"
        assert settings.timeout == 12.5
        assert settings.debug is True

    def test_cached(self, monkeypatch):
        monkeypatch.setenv("GHL_LOCATION_ID", "first")
        first = get_settings()
        monkeypatch.setenv("GHL_LOCATION_ID", "second")

        assert get_settings() is first

        get_settings.cache_clear()
        assert get_settings().location_id == "second"


class TestHighLevelSettings:
    """Tests for HighLevelSettings."""

    def test_token_is_hidden(self):
        settings = HighLevelSettings(api_key="pit-secret")

        assert "pit-secret" not in repr(settings)
        assert "pit-secret" not in str(settings.model_dump())

    def test_to_client_config(self):
        settings = HighLevelSettings(
            api_key="pit-secret", location_id="loc_1", api_version="2099-01-01", timeout=3
        )

        config = settings.to_client_config()

        assert config.access_token == "pit-secret"
        assert config.location_id == "loc_1"
        assert config.version == "2099-01-01"
        assert config.timeout == 3.0

    def test_to_client_config_requires_token(self):
        with pytest.raises(ValueError, match="access token is required"):
            HighLevelSettings().to_client_config()

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValueError):
            HighLevelSettings(timeout=0)


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        level, handlers = root.level, list(root.handlers)
        yield
        root.setLevel(level)
        root.handlers[:] = handlers

    def test_debug_forces_debug_level(self):
        logging.getLogger().handlers.clear()

        configure_logging(HighLevelSettings(debug=True, log_level="ERROR"))

        assert logging.getLogger().level == logging.DEBUG

    def test_named_level(self):
        logging.getLogger().handlers.clear()

        configure_logging(HighLevelSettings(log_level="warning"))

        assert logging.getLogger().level == logging.WARNING
