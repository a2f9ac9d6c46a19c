"""Tests for dice rolling mechanics."""

from __future__ import annotations

import pytest

from long_hall.core.exceptions import InvalidExpressionError
from long_hall.engine.dice import (
    AttackRoll,
    DiceRoller,
    RollType,
    parse_dice_expression,
    roll,
    roll_advantage,
    roll_disadvantage,
    roll_with_modifier,
)
from long_hall.engine.rng import SeededRNG


class TestParseDiceExpression:
    """Tests for dice notation parsing."""

    def test_simple_expression(self) -> None:
        """Test parsing a bare die."""
        parsed = parse_dice_expression("1d20")

        assert parsed.count == 1
        assert parsed.sides == 20
        assert parsed.modifier == 0
        assert parsed.roll_type == RollType.NORMAL

    def test_modifiers(self) -> None:
        """Test positive and negative modifiers."""
        assert parse_dice_expression("2d6+3").modifier == 3
        assert parse_dice_expression("1d8-1").modifier == -1

    def test_advantage_suffix(self) -> None:
        """Test the adv and dis suffixes."""
        assert parse_dice_expression("1d20adv").roll_type == RollType.ADVANTAGE
        assert parse_dice_expression("1D20DIS").roll_type == RollType.DISADVANTAGE

    def test_notation_round_trip(self) -> None:
        """Test the canonical notation of a parsed expression."""
        assert parse_dice_expression(" 2d6+3 ").notation == "2d6+3"
        assert parse_dice_expression("1d20adv").notation == "1d20adv"

    @pytest.mark.parametrize("expression", ["", "d6", "2d", "3x6", "1d6+", "2d6+1d4", "abc"])
    def test_invalid_notation(self, expression: str) -> None:
        """Test malformed notation is rejected."""
        with pytest.raises(InvalidExpressionError):
            parse_dice_expression(expression)

    @pytest.mark.parametrize("expression", ["0d6", "101d6", "1d0", "1d1001"])
    def test_out_of_range(self, expression: str) -> None:
        """Test dice count and sides bounds."""
        with pytest.raises(InvalidExpressionError) as exc_info:
            parse_dice_expression(expression)

        assert exc_info.value.details["expression"] == expression


class TestRoll:
    """Tests for rolling against an integer source."""

    def test_scripted_total(self, fixed_rolls) -> None:
        """Test the total is the sum of dice plus modifier."""
        result = roll("2d6+3", fixed_rolls(4, 5))

        assert result.rolls == (4, 5)
        assert result.total == 12
        assert result.modifier == 3

    def test_bounds_with_seeded_source(self) -> None:
        """Test many seeded rolls stay in range."""
        rng = SeededRNG(99)
        for _ in range(200):
            assert 3 <= roll("3d6", rng).total <= 18

    def test_same_seed_same_rolls(self) -> None:
        """Test rolls are reproducible."""
        rng_a, rng_b = SeededRNG(12), SeededRNG(12)

        assert [roll("4d8", rng_a).rolls for _ in range(10)] == [
            roll("4d8", rng_b).rolls for _ in range(10)
        ]

    def test_advantage_keeps_highest(self, fixed_rolls) -> None:
        """Test advantage keeps the higher die."""
        result = roll_advantage(fixed_rolls(7, 15))

        assert result.rolls == (7, 15)
        assert result.kept_rolls == (15,)
        assert result.total == 15

    def test_disadvantage_keeps_lowest(self, fixed_rolls) -> None:
        """Test disadvantage keeps the lower die."""
        result = roll_disadvantage(fixed_rolls(7, 15))

        assert result.total == 7
        assert result.natural == 7

    def test_critical_detection(self, fixed_rolls) -> None:
        """Test a natural 20 on a d20 is critical, a 6 on a d6 is not."""
        assert roll("1d20", fixed_rolls(20)).is_critical
        assert not roll("1d6", fixed_rolls(6)).is_critical

    def test_roll_with_modifier_replaces_modifier(self, fixed_rolls) -> None:
        """Test the given modifier replaces the expression's own."""
        result = roll_with_modifier("1d8+5", 2, fixed_rolls(3))

        assert result.total == 5
        assert result.expression == "1d8+2"


class TestDiceRoller:
    """Tests for the DiceRoller class."""

    def test_d20_range(self) -> None:
        """Test d20 stays in range."""
        roller = DiceRoller(SeededRNG(42))
        for _ in range(100):
            assert 1 <= roller.d20() <= 20

    def test_roll_attack_hit_and_miss(self, fixed_rolls) -> None:
        """Test attack rolls compare natural plus bonus against AC."""
        roller = DiceRoller(fixed_rolls(12, 11))

        hit = roller.roll_attack(3, 15)
        miss = roller.roll_attack(3, 15)

        assert hit == AttackRoll(natural=12, bonus=3, target_ac=15)
        assert hit.hit and hit.total == 15
        assert not miss.hit

    def test_natural_twenty_is_critical(self, fixed_rolls) -> None:
        """Test a natural 20 is flagged critical."""
        attack = DiceRoller(fixed_rolls(20)).roll_attack(0, 30)

        assert attack.is_critical
        assert not attack.hit

    def test_roll_damage_minimum(self, fixed_rolls) -> None:
        """Test damage is clamped to the minimum."""
        roller = DiceRoller(fixed_rolls(1, 1))

        assert roller.roll_damage("1d4", -5) == 0
        assert roller.roll_damage("1d4", -5, minimum=1) == 1

    def test_source_property(self) -> None:
        """Test the bound source is exposed."""
        rng = SeededRNG(3)
        assert DiceRoller(rng).source is rng
