"""Core infrastructure: configuration, logging, constants and exceptions.

Exports:
    Exceptions:
        LongHallError: Base exception for all application errors.
        MalformedInputError: Unusable input handed to the core.
        InvalidTransitionError: Action that does not fit the run state.
        DataIntegrityError: Action referencing a missing entity.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        log_context: Bind log keys for the duration of a block.
"""

from __future__ import annotations

from long_hall.core.config import (
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from long_hall.core.exceptions import (
    ConfigurationError,
    DataIntegrityError,
    EmptyCollectionError,
    GameEngineError,
    InvalidExpressionError,
    InvalidTransitionError,
    LongHallError,
    MalformedInputError,
    PersistenceError,
    SaveIntegrityError,
)
from long_hall.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    log_context,
)


__all__ = [
    # Config
    "Settings",
    "StorageSettings",
    "get_settings",
    "clear_settings_cache",
    # Exceptions
    "LongHallError",
    "MalformedInputError",
    "InvalidExpressionError",
    "EmptyCollectionError",
    "GameEngineError",
    "InvalidTransitionError",
    "DataIntegrityError",
    "ConfigurationError",
    "PersistenceError",
    "SaveIntegrityError",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "log_context",
]
