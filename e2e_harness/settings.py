"""Harness settings.

Values come from the environment (and an optional .env file). The database
bridge re-reads DB_URL/DB_CLIENT at call time; these settings supply the
fallback mapping and everything the HTTP side needs.
"""

import re
from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# URL pattern for HTTP/HTTPS endpoints
_URL_PATTERN = re.compile(r'^https?://[^\s/$.?#].[^\s]*$', re.IGNORECASE)

DEFAULT_BASE_URL = "http://localhost:3000"


class Settings(BaseSettings):
    """Harness configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HARNESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # =========================================================================
    # DATABASE
    # =========================================================================
    db_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DB_URL", "HARNESS_DB_URL"),
        description="Connection string for fixture verification",
    )
    db_client: str = Field(
        default="pg",
        validation_alias=AliasChoices("DB_CLIENT", "HARNESS_DB_CLIENT"),
        description="Client tag: pg | mysql",
    )

    # =========================================================================
    # HTTP
    # =========================================================================
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        validation_alias=AliasChoices("HARNESS_BASE_URL", "BASE_URL"),
    )
    http_timeout: float = Field(default=30.0, gt=0, le=600)

    # =========================================================================
    # LOGGING
    # =========================================================================
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not _URL_PATTERN.match(v):
            raise ValueError(f"base_url must be an http(s) URL, got: {v!r}")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"invalid log_level: {v!r}")
        return level

    def db_config(self) -> Dict[str, Any]:
        """Config mapping consumed by the database bridge as fallback."""
        config: Dict[str, Any] = {"DB_CLIENT": self.db_client}
        if self.db_url:
            config["DB_URL"] = self.db_url
        return config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reset_settings() -> None:
    """Drop the cached settings (tests that patch the environment)."""
    get_settings.cache_clear()


__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "DEFAULT_BASE_URL",
]
