"""Unit tests for configuration management (flat Settings).

Tests cover:
- Default values
- Loading from environment variables
- Validation (log level, cache backend, cache prefix)
- Environment detection
- Cached singleton behavior
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from ambukit.core.config import Settings, get_settings
from ambukit.core.enums import Environment


def load(**env: str) -> Settings:
    """Build Settings from exactly the given environment (no .env file)."""
    with patch.dict(os.environ, env, clear=True):
        return Settings(_env_file=None)


@pytest.mark.unit
class TestSettingsDefaults:
    """Test development-friendly defaults."""

    def test_defaults(self):
        settings = load()
        assert settings.environment == Environment.DEVELOPMENT
        assert settings.log_level == "INFO"
        assert settings.policy_cache_backend == "memory"
        assert settings.policy_cache_prefix == "authz"
        assert settings.database_url.startswith("postgresql+asyncpg://")
        assert settings.db_echo is False


@pytest.mark.unit
class TestSettingsFromEnvironment:
    """Test environment variable loading."""

    def test_values_from_environment(self):
        settings = load(
            ENVIRONMENT="testing",
            DATABASE_URL="sqlite+aiosqlite:///:memory:",
            REDIS_URL="redis://cache:6379/1",
            POLICY_CACHE_BACKEND="redis",
            DB_ECHO="true",
        )
        assert settings.environment == Environment.TESTING
        assert settings.database_url == "sqlite+aiosqlite:///:memory:"
        assert settings.redis_url == "redis://cache:6379/1"
        assert settings.policy_cache_backend == "redis"
        assert settings.db_echo is True

    def test_case_insensitive_names(self):
        assert load(log_level="debug").log_level == "DEBUG"


@pytest.mark.unit
class TestSettingsValidation:
    """Test Settings field validation."""

    def test_log_level_normalized(self):
        assert load(LOG_LEVEL=" warning ").log_level == "WARNING"

    def test_log_level_rejects_unknown(self):
        with pytest.raises(ValidationError) as exc_info:
            load(LOG_LEVEL="verbose")
        assert "log_level must be one of" in str(exc_info.value)

    def test_cache_backend_rejects_unknown(self):
        with pytest.raises(ValidationError):
            load(POLICY_CACHE_BACKEND="memcached")

    def test_cache_prefix_strips_separators(self):
        assert load(POLICY_CACHE_PREFIX=":ambukit:authz:").policy_cache_prefix == (
            "ambukit:authz"
        )

    def test_cache_prefix_rejects_empty(self):
        with pytest.raises(ValidationError) as exc_info:
            load(POLICY_CACHE_PREFIX=":::")
        assert "policy_cache_prefix must not be empty" in str(exc_info.value)


@pytest.mark.unit
class TestEnvironmentDetection:
    """Test environment helper properties."""

    @pytest.mark.parametrize(
        ("value", "prop"),
        [
            ("development", "is_development"),
            ("testing", "is_testing"),
            ("ci", "is_ci"),
            ("production", "is_production"),
        ],
    )
    def test_exactly_one_flag(self, value: str, prop: str):
        settings = load(ENVIRONMENT=value)
        flags = ["is_development", "is_testing", "is_ci", "is_production"]
        assert [f for f in flags if getattr(settings, f)] == [prop]


@pytest.mark.unit
class TestGetSettings:
    """Test cached singleton behavior."""

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
