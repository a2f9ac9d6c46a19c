"""Tests for depth-based difficulty scaling and the escape DC."""

from __future__ import annotations

import pytest

from long_hall.engine.difficulty import (
    calculate_escape_dc,
    escape_dc_breakdown,
    get_difficulty,
    get_room_in_segment,
    get_room_weights,
    get_segment,
)
from long_hall.models.enums import RoomType


class TestSegments:
    """Tests for segment arithmetic."""

    @pytest.mark.parametrize(
        ("depth", "segment", "room"),
        [(1, 1, 1), (9, 1, 9), (10, 1, 10), (11, 2, 1), (20, 2, 10), (21, 3, 1)],
    )
    def test_segment_and_room(self, depth: int, segment: int, room: int) -> None:
        """Test the intermission closes its own segment."""
        assert get_segment(depth) == segment
        assert get_room_in_segment(depth) == room


class TestGetDifficulty:
    """Tests for get_difficulty."""

    def test_first_room(self) -> None:
        """Test the opening figures."""
        difficulty = get_difficulty(1)

        assert difficulty.multiplier == 1.0
        assert (difficulty.min_power, difficulty.max_power) == (1, 2)
        assert difficulty.ac_bonus == 0
        assert difficulty.enemy_count_bonus == 0
        assert difficulty.enemy_ac == 10

    def test_ramp_within_segment(self) -> None:
        """Test later rooms in a segment are harder."""
        assert get_difficulty(9).multiplier > get_difficulty(2).multiplier
        assert get_difficulty(10).multiplier == pytest.approx(1 + 9 * 0.025)

    def test_segment_scaling(self) -> None:
        """Test segment three figures."""
        difficulty = get_difficulty(21)

        assert difficulty.multiplier == pytest.approx(1.6)
        assert (difficulty.min_power, difficulty.max_power) == (3, 6)
        assert difficulty.ac_bonus == 3
        assert difficulty.enemy_count_bonus == 1

    def test_late_band(self) -> None:
        """Test segments past the table use the late band."""
        assert (get_difficulty(95).min_power, get_difficulty(95).max_power) == (9, 13)


class TestRoomWeights:
    """Tests for the weighted room table."""

    def test_first_room_is_always_combat(self) -> None:
        """Test room 1 only offers combat."""
        assert get_room_weights(1) == [(RoomType.COMBAT, 10)]

    def test_elite_only_late_in_segment(self) -> None:
        """Test elites join past room 5 and grow likelier."""
        assert RoomType.ELITE not in dict(get_room_weights(5))
        assert dict(get_room_weights(6))[RoomType.ELITE] == 22
        assert dict(get_room_weights(9))[RoomType.ELITE] == 28


class TestEscapeDC:
    """Tests for calculate_escape_dc."""

    def test_baseline(self) -> None:
        """Test one ordinary enemy in the first segment."""
        assert calculate_escape_dc(1, 1, False, 0, False) == 10

    def test_every_term(self) -> None:
        """Test every modifier together."""
        assert calculate_escape_dc(11, 3, True, 5, True) == 10

    def test_floor_of_five(self) -> None:
        """Test the DC never drops below 5."""
        assert calculate_escape_dc(1, 1, False, 20, True) == 5

    def test_breakdown_lists_terms(self) -> None:
        """Test the human-readable breakdown."""
        text = escape_dc_breakdown(11, 3, True, 5, True)

        assert text.startswith("Base: 10")
        assert "Segment 2: +2" in text
        assert "Elite: +3" in text
        assert "Rogue: -2" in text
