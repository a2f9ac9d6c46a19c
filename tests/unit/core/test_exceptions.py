"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

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


class TestLongHallError:
    """Tests for the base LongHallError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = LongHallError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = LongHallError("Test error", details={"key": "value", "count": 42})
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(LongHallError("Test", details={"x": 1}))
        assert "LongHallError" in repr_str
        assert "Test" in repr_str


class TestMalformedInput:
    """Tests for malformed-input exceptions."""

    def test_invalid_expression_keeps_expression(self) -> None:
        """Test InvalidExpressionError records the notation."""
        exc = InvalidExpressionError("Bad dice notation", expression="3x6")
        assert exc.details["expression"] == "3x6"
        assert isinstance(exc, MalformedInputError)

    def test_empty_collection_is_malformed_input(self) -> None:
        """Test EmptyCollectionError inheritance."""
        exc = EmptyCollectionError("Cannot pick from empty array")
        assert isinstance(exc, MalformedInputError)
        assert isinstance(exc, LongHallError)


class TestGameEngineExceptions:
    """Tests for state machine exceptions."""

    def test_invalid_transition_with_action_type(self) -> None:
        """Test InvalidTransitionError records the rejected action."""
        exc = InvalidTransitionError(
            "Not the player's turn",
            action_type="ATTACK",
            log_message="Wait your turn!",
        )
        assert exc.details["action_type"] == "ATTACK"
        assert exc.log_message == "Wait your turn!"
        assert isinstance(exc, GameEngineError)

    def test_data_integrity_with_entity(self) -> None:
        """Test DataIntegrityError records the missing entity."""
        exc = DataIntegrityError("Unknown item", entity_id="sword-1")
        assert exc.details["entity_id"] == "sword-1"
        assert exc.log_message is None

    @pytest.mark.parametrize("exc_type", [InvalidTransitionError, DataIntegrityError])
    def test_engine_errors_share_a_base(self, exc_type: type[GameEngineError]) -> None:
        """Test both engine errors can be caught at one boundary."""
        with pytest.raises(GameEngineError):
            raise exc_type("boom")


class TestOuterLayerExceptions:
    """Tests for configuration and persistence exceptions."""

    def test_configuration_error_with_key(self) -> None:
        """Test ConfigurationError records the key."""
        exc = ConfigurationError("Missing value", config_key="log_level")
        assert exc.details["config_key"] == "log_level"

    def test_save_integrity_is_persistence_error(self) -> None:
        """Test SaveIntegrityError inheritance and slot detail."""
        exc = SaveIntegrityError("Tampered", slot="main")
        assert isinstance(exc, PersistenceError)
        assert exc.details["slot"] == "main"
