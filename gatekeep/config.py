"""
Library settings.

Loads settings from environment variables (GATEKEEP_ prefix) with
sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="GATEKEEP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = False

    # ==========================================================================
    # Authorization
    # ==========================================================================

    # Log the full explain() text on denials, not just the one-line message
    explain_denials: bool = True

    # Directory of YAML resource registrations, used by load_authorizer()
    config_dir: str | None = None

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
