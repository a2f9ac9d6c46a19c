"""Custom exception hierarchy for The Long Hall simulation core.

All exceptions inherit from LongHallError so callers can handle every
engine failure at one boundary. The hierarchy mirrors the three error
kinds the core distinguishes:

- MalformedInputError: a caller handed the core something unusable
  (bad dice notation, picking from an empty pool). Always propagates.
- InvalidTransitionError: an action that does not fit the current state.
  Caught by ``apply_action`` and turned into a no-op.
- DataIntegrityError: an action that references something which does not
  exist (unknown item, ability or actor). Also resolved as a no-op.

Example:
    >>> from long_hall.core.exceptions import InvalidExpressionError
    >>> raise InvalidExpressionError("Bad dice notation", expression="3x6")
"""

from __future__ import annotations

from typing import Any


class LongHallError(Exception):
    """Base exception for all Long Hall errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Malformed Input
# =============================================================================


class MalformedInputError(LongHallError):
    """Raised when an operation receives input it cannot work with.

    These errors are fatal to the calling operation and are never
    silently defaulted.
    """


class InvalidExpressionError(MalformedInputError):
    """Raised when a dice expression cannot be parsed or is out of range."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the offending expression.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression is not None:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class EmptyCollectionError(MalformedInputError):
    """Raised when picking from an empty collection."""


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(LongHallError):
    """Base exception for state machine failures.

    Subclasses carry an optional ``log_message``. When set, the state
    machine appends it to the run history instead of failing silently.
    """

    def __init__(
        self,
        message: str,
        *,
        log_message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.log_message = log_message
        super().__init__(message, details=details)


class InvalidTransitionError(GameEngineError):
    """Raised when an action does not apply to the current run state.

    Example: attacking while it is not the player's turn, or buying an
    item the party cannot afford.
    """

    def __init__(
        self,
        message: str,
        *,
        action_type: str | None = None,
        log_message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the rejected action type.

        Args:
            message: Human-readable error description.
            action_type: The action tag that was rejected.
            log_message: Optional entry to append to the run history.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if action_type:
            combined_details["action_type"] = action_type
        super().__init__(message, log_message=log_message, details=combined_details)


class DataIntegrityError(GameEngineError):
    """Raised when an action references an entity that does not exist."""

    def __init__(
        self,
        message: str,
        *,
        entity_id: str | None = None,
        log_message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the missing entity id.

        Args:
            message: Human-readable error description.
            entity_id: Identifier of the missing actor, item or ability.
            log_message: Optional entry to append to the run history.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if entity_id:
            combined_details["entity_id"] = entity_id
        super().__init__(message, log_message=log_message, details=combined_details)


# =============================================================================
# Configuration & Persistence Exceptions
# =============================================================================


class ConfigurationError(LongHallError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class PersistenceError(LongHallError):
    """Raised when a save slot cannot be read or written."""

    def __init__(
        self,
        message: str,
        *,
        slot: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if slot:
            combined_details["slot"] = slot
        super().__init__(message, details=combined_details)


class SaveIntegrityError(PersistenceError):
    """Raised when a save file's digest does not match its contents."""


__all__ = [
    "LongHallError",
    # Malformed input
    "MalformedInputError",
    "InvalidExpressionError",
    "EmptyCollectionError",
    # Engine
    "GameEngineError",
    "InvalidTransitionError",
    "DataIntegrityError",
    # Configuration & persistence
    "ConfigurationError",
    "PersistenceError",
    "SaveIntegrityError",
]
