"""Configuration management for sportsday.

Loads the Sheets API key, spreadsheet id and cache settings from environment
variables (prefixed SPORTSDAY_) or a .env file using Pydantic.

Usage:
    from sportsday.config import get_settings

    settings = get_settings()
    print(settings.sheet_id)
    print(settings.cache_backend)
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """sportsday configuration from environment variables.

    Attributes:
        api_key: Google Sheets API key, passed through to every request
        sheet_id: Id of the public sports day spreadsheet
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR)
        cache_backend: Where fetched ranges are cached ("memory", "file", "sqlite")
        cache_dir: Directory for the file and sqlite cache backends
        max_concurrency: Maximum simultaneous requests to the Sheets API
        timeout: Request timeout in seconds
    """

    model_config = SettingsConfigDict(
        env_prefix="SPORTSDAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(..., min_length=10, description="Google Sheets API key")
    sheet_id: str = Field(..., min_length=1, description="Spreadsheet id")

    log_level: str = Field(default="INFO", description="Logging level")
    cache_backend: Literal["memory", "file", "sqlite"] = Field(
        default="file",
        description="Cache storage backend",
    )
    cache_dir: str = Field(default=".sportsday_cache", description="Cache directory")

    max_concurrency: int = Field(default=4, ge=1, le=50, description="Max concurrent requests")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout (seconds)")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid:
            raise ValueError(f"log_level must be one of {valid}, got {v}")
        return v_upper

    @field_validator("cache_backend", mode="before")
    @classmethod
    def normalize_cache_backend(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
