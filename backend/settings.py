"""
Lifting-log configuration read from the environment and an optional .env file.

Usage:
    from backend.settings import get_settings, Settings

    settings = get_settings()
    print(settings.remote_table)
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )

    # -------------------------------------------------------------------------
    # Supabase Database
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (full access)",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous key (limited access)",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        """Get the best available Supabase key (service role preferred)."""
        return self.supabase_service_role_key or self.supabase_anon_key

    # -------------------------------------------------------------------------
    # Snapshot Storage
    # -------------------------------------------------------------------------
    remote_table: str = Field(
        default="lifting_logs",
        description="Supabase table holding the snapshot row",
    )
    remote_row_id: str = Field(
        default="main",
        description="Fixed id of the snapshot row",
    )
    local_data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".lifting_log",
        description="Directory for the on-device snapshot file",
    )
    local_storage_key: str = Field(
        default="liftinglog_db_v1",
        description="Key (file stem) of the on-device snapshot",
    )

    # -------------------------------------------------------------------------
    # Recent Workouts
    # -------------------------------------------------------------------------
    recent_workouts_limit: int = Field(
        default=5,
        ge=1,
        description="Number of workouts shown in the recent list",
    )

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {valid_levels}")
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings, built once. Tests reset it with cache_clear()."""
    return Settings()
