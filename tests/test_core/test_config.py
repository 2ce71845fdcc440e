"""
Tests for cache configuration.
"""

import pytest
from pydantic import ValidationError

from recency_cache.core.config import DEFAULT_CAPACITY, Settings, get_settings


class TestSettingsDefaults:
    """Tests for default settings values."""

    def test_default_capacity(self, monkeypatch):
        """Test default capacity matches the module constant."""
        monkeypatch.delenv("RECENCY_CACHE_DEFAULT_CAPACITY", raising=False)
        assert Settings().default_capacity == DEFAULT_CAPACITY == 10

    def test_default_log_json_off(self, monkeypatch):
        """Test console rendering is the default."""
        monkeypatch.delenv("RECENCY_CACHE_LOG_JSON", raising=False)
        assert Settings().log_json is False


class TestSettingsEnvironment:
    """Tests for environment variable overrides."""

    def test_capacity_from_env(self, monkeypatch):
        """Test RECENCY_CACHE_DEFAULT_CAPACITY is read."""
        monkeypatch.setenv("RECENCY_CACHE_DEFAULT_CAPACITY", "64")
        assert Settings().default_capacity == 64

    def test_log_level_normalised(self, monkeypatch):
        """Test log level is upper-cased."""
        monkeypatch.setenv("RECENCY_CACHE_LOG_LEVEL", "debug")
        assert Settings().log_level == "DEBUG"

    def test_unrelated_env_ignored(self, monkeypatch):
        """Test unknown prefixed vars do not break loading."""
        monkeypatch.setenv("RECENCY_CACHE_SOMETHING_ELSE", "x")
        Settings()


class TestSettingsValidation:
    """Tests for settings validators."""

    @pytest.mark.parametrize("capacity", [0, -5])
    def test_non_positive_capacity_rejected(self, capacity):
        """Test default_capacity must be positive."""
        with pytest.raises(ValidationError):
            Settings(default_capacity=capacity)

    def test_unknown_log_level_rejected(self):
        """Test unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            Settings(log_level="CHATTY")


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_get_settings_is_cached(self):
        """Test repeated calls return the same instance."""
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self, monkeypatch):
        """Test clearing the cache picks up new env values."""
        first = get_settings()
        monkeypatch.setenv("RECENCY_CACHE_DEFAULT_CAPACITY", "3")
        get_settings.cache_clear()

        second = get_settings()
        assert second is not first
        assert second.default_capacity == 3
