"""
Unit tests for backend/settings.py
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from backend.settings import Settings, get_settings


# Environment variables that CI might set which we need to clear for default tests
CI_ENV_VARS = [
    "ENVIRONMENT",
    "LOG_LEVEL",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_ANON_KEY",
    "REMOTE_TABLE",
    "REMOTE_ROW_ID",
    "LOCAL_DATA_DIR",
    "LOCAL_STORAGE_KEY",
    "RECENT_WORKOUTS_LIMIT",
    "SENTRY_DSN",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear CI environment variables to test true defaults."""
    for var in CI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.mark.unit
class TestSettingsDefaults:
    """Test that Settings applies correct defaults."""

    def test_environment_default(self, clean_env):
        """Default environment should be development."""
        settings = Settings(_env_file=None)
        assert settings.environment == "development"
        assert settings.log_level == "INFO"

    def test_supabase_fields_default_to_none(self, clean_env):
        """Supabase fields should default to None."""
        settings = Settings(_env_file=None)
        assert settings.supabase_url is None
        assert settings.supabase_service_role_key is None
        assert settings.supabase_anon_key is None
        assert settings.supabase_key is None

    def test_snapshot_storage_defaults(self, clean_env):
        """Snapshot row and local key should match the stored data layout."""
        settings = Settings(_env_file=None)
        assert settings.remote_table == "lifting_logs"
        assert settings.remote_row_id == "main"
        assert settings.local_storage_key == "liftinglog_db_v1"
        assert settings.local_data_dir == Path.home() / ".lifting_log"

    def test_recent_workouts_limit_default(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.recent_workouts_limit == 5

    def test_sentry_dsn_default_to_none(self, clean_env):
        """Sentry DSN should default to None."""
        settings = Settings(_env_file=None)
        assert settings.sentry_dsn is None


@pytest.mark.unit
class TestSettingsValidation:
    """Test Settings validation behavior."""

    def test_valid_environments_accepted(self):
        """Valid environment values should be accepted."""
        for env in ["development", "staging", "production", "test"]:
            settings = Settings(environment=env, _env_file=None)
            assert settings.environment == env

    def test_environment_case_insensitive(self):
        """Environment validation should be case-insensitive."""
        settings = Settings(environment="PRODUCTION", _env_file=None)
        assert settings.environment == "production"

    def test_invalid_environment_raises_error(self):
        """Invalid environment should raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(environment="invalid", _env_file=None)
        assert "Invalid environment" in str(exc_info.value)

    def test_log_level_normalized(self):
        assert Settings(log_level="debug", _env_file=None).log_level == "DEBUG"

    def test_invalid_log_level_raises_error(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty", _env_file=None)

    @pytest.mark.parametrize("limit", [0, -3])
    def test_non_positive_limit_raises_error(self, limit):
        with pytest.raises(ValidationError):
            Settings(recent_workouts_limit=limit, _env_file=None)

    def test_reads_environment_variables(self, clean_env, monkeypatch):
        monkeypatch.setenv("REMOTE_ROW_ID", "shared")
        monkeypatch.setenv("LOCAL_DATA_DIR", "/tmp/lifting")
        monkeypatch.setenv("RECENT_WORKOUTS_LIMIT", "8")

        settings = Settings(_env_file=None)

        assert settings.remote_row_id == "shared"
        assert settings.local_data_dir == Path("/tmp/lifting")
        assert settings.recent_workouts_limit == 8


@pytest.mark.unit
class TestSettingsProperties:
    """Test Settings computed properties."""

    def test_supabase_key_prefers_service_role(self, clean_env):
        """supabase_key should prefer service role key over anon key."""
        settings = Settings(
            _env_file=None,
            supabase_service_role_key="service-key",
            supabase_anon_key="anon-key",
        )
        assert settings.supabase_key == "service-key"

    def test_supabase_key_falls_back_to_anon(self, clean_env):
        """supabase_key should fall back to anon key."""
        settings = Settings(_env_file=None, supabase_anon_key="anon-key")
        assert settings.supabase_key == "anon-key"


@pytest.mark.unit
class TestGetSettings:
    """Test the cached settings accessor."""

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
