"""Configuration management for The Long Hall.

Settings come from environment variables and ``.env`` files through
pydantic-settings. They only steer the outer layers (logging, local save
slots); the simulation core never reads them, so a run replays the same
way on every machine.

Example:
    >>> from long_hall.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.storage.default_slot
    'the_long_hall_save'

Environment Variables:
    LONG_HALL_DEBUG: Enable debug mode
    LONG_HALL_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    LONG_HALL_LOG_JSON: Emit JSON log lines
    LONG_HALL_SAVE_DIRECTORY: Directory holding save slots
    LONG_HALL_DEFAULT_SLOT: Slot name used when none is given
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from long_hall.core.exceptions import ConfigurationError


_SLOT_PATTERN = re.compile(r"^[A-Za-z0-9_\-]+$")


class StorageSettings(BaseSettings):
    """Configuration for local save slots.

    Attributes:
        save_directory: Directory where save envelopes are written.
        default_slot: Slot name used when the caller does not pick one.
        verify_integrity: Check the sha256 digest when loading.
    """

    model_config = SettingsConfigDict(
        env_prefix="LONG_HALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    save_directory: Path = Field(
        default=Path("data/saves"),
        description="Directory for save slots",
    )
    default_slot: str = Field(
        default="the_long_hall_save",
        description="Default save slot name",
    )
    verify_integrity: bool = Field(
        default=True,
        description="Verify save digests on load",
    )

    @field_validator("save_directory", mode="after")
    @classmethod
    def ensure_directory_exists(cls, value: Path) -> Path:
        """Create the save directory if it is missing."""
        value.mkdir(parents=True, exist_ok=True)
        return value

    @field_validator("default_slot", mode="after")
    @classmethod
    def validate_slot_name(cls, value: str) -> str:
        """Reject slot names that are not safe file stems.

        Raises:
            ConfigurationError: If the slot name contains path characters.
        """
        if not _SLOT_PATTERN.match(value):
            raise ConfigurationError(
                f"Invalid save slot name: {value!r}",
                config_key="default_slot",
            )
        return value


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Render logs as JSON lines.
        storage: Save slot settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="LONG_HALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="The Long Hall",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON formatted logs",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)

    @property
    def is_production(self) -> bool:
        """True when not in debug mode."""
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
