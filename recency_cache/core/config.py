"""
Cache configuration using Pydantic Settings.

Only the default capacity and logging knobs are configurable; a cache's
capacity is still fixed once the instance is built.
"""

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CAPACITY = 10


class Settings(BaseSettings):
    """Settings with RECENCY_CACHE_* environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="RECENCY_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Capacity used when LRUCache() is built without one
    default_capacity: int = DEFAULT_CAPACITY

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("default_capacity")
    @classmethod
    def capacity_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("default_capacity must be > 0")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_known(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{v}'")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
