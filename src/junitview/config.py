"""Configuration settings for junitview."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``JUNITVIEW_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="JUNITVIEW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"
    log_json_format: bool = False

    # Discovery
    file_glob: str = "*.xml"

    # Loading
    max_workers: int = Field(default=4, ge=1)

    # Navigation
    page_size: int = Field(default=10, ge=1)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
