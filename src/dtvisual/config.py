"""Configuration settings for dtvisual."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``DTVISUAL_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DTVISUAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_json_format: bool = True

    # Decoding
    allow_empty_input: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
