"""
Settings domain model for storage and remote synchronization.

This module defines the settings that control where data lives, how the
remote API is reached, and the timeouts and pool sizes used while syncing.
"""

import logging

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://67e8429220e3af747c40d4d5.mockapi.io/TravelPlanner"


class RemoteSettings(BaseModel):
    """
    Remote API settings.

    The per-request timeout is the only timeout in the sync path.
    """

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the REST API (collections are appended)"
    )

    request_timeout: int = Field(
        default=30,
        description="Timeout in seconds for every HTTP request",
        ge=1,
        le=300
    )

    placeholder_image_url: str = Field(
        default="https://picsum.photos/200",
        description="Image URL sent when pushing a destination"
    )

    max_workers: int = Field(
        default=4,
        description="Worker threads for remote calls",
        ge=2,
        le=32
    )

    image_download_workers: int = Field(
        default=4,
        description="Worker threads for destination image downloads",
        ge=1,
        le=32
    )

    push_destination_updates: bool = Field(
        default=False,
        description="Whether local destination edits are pushed to the API"
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so collection paths can be appended."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("request_timeout")
    @classmethod
    def warn_long_timeout(cls, v: int) -> int:
        """Warn about timeouts that will make a refresh feel hung."""
        if v > 120:
            logger.warning("Request timeout of %s is very high - consider network conditions", v)
        return v


class StorageSettings(BaseModel):
    """
    Local storage settings.
    """

    db_path: str = Field(
        default="data/TravelPlanner.sqlite",
        description="SQLite database file (':memory:' for a throwaway store)"
    )

    template_path: str | None = Field(
        default=None,
        description="Bundled database copied on first run when db_path does not exist"
    )

    seed_sample_data: bool = Field(
        default=True,
        description="Insert sample destinations/trips when every table is empty"
    )


class TravelSettings(BaseModel):
    """
    Complete settings for the application.
    """

    remote: RemoteSettings = RemoteSettings()
    storage: StorageSettings = StorageSettings()

    log_level: str = Field(
        default="INFO",
        description="Console log level"
    )

    log_file: str | None = Field(
        default=None,
        description="Optional log file (always written at DEBUG)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept standard logging level names in any case."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level
