"""Configuration management for finalizable."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogProfile = Literal["default", "rich"]


class Settings(BaseSettings):
    """Package settings, read from ``FINALIZABLE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FINALIZABLE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_profile: LogProfile = Field(default="default", description="Log sink profile (default, rich)")
    log_diagnose: bool = Field(default=False, description="Show variable values in logged tracebacks")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings()
