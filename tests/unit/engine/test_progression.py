"""Tests for experience, levels and stat points."""

from __future__ import annotations

import pytest

from conftest import make_actor

from long_hall.core.exceptions import InvalidTransitionError
from long_hall.engine.dice import DiceRoller
from long_hall.engine.progression import (
    MAX_LEVEL,
    award_xp,
    grant_xp,
    level_up,
    spend_stat_point,
    xp_for_next_level,
)
from long_hall.models.enums import Skill


class TestLevelUp:
    """Tests for level_up and grant_xp."""

    def test_level_up_gains(self, fixed_rolls) -> None:
        """Test HP gain is 1d8 + level // 2 and a stat point is granted."""
        actor = make_actor()

        message = level_up(actor, DiceRoller(fixed_rolls(5)))

        assert actor.level == 2
        assert actor.stat_points == 1
        assert actor.hp.max == 12 + 6
        assert actor.hp.current == 12 + 6
        assert actor.hit_dice.max == 2
        assert message == "Hero leveled up to 2! +6 HP (rolled 5), +1 Stat Point!"

    def test_odd_level_keeps_hit_dice(self, fixed_rolls) -> None:
        """Test hit dice only grow on even levels."""
        actor = make_actor(level=2)
        dice_before = actor.hit_dice.max

        level_up(actor, DiceRoller(fixed_rolls(1)))

        assert actor.level == 3
        assert actor.hit_dice.max == dice_before

    def test_grant_xp_crosses_several_levels(self, fixed_rolls) -> None:
        """Test one large award applies every level it reaches."""
        actor = make_actor()

        messages = grant_xp(actor, 320, DiceRoller(fixed_rolls()))

        assert actor.level == 4
        assert len(messages) == 3
        assert xp_for_next_level(actor) == 500

    def test_level_cap(self, fixed_rolls) -> None:
        """Test XP past the last threshold stops at the cap."""
        actor = make_actor()

        grant_xp(actor, 100_000, DiceRoller(fixed_rolls()))

        assert actor.level == MAX_LEVEL
        assert xp_for_next_level(actor) is None


class TestAwardXP:
    """Tests for splitting XP across the party."""

    def test_split_among_living(self, fixed_rolls) -> None:
        """Test the dead get nothing and the share rounds down."""
        alive = make_actor("a", "A")
        other = make_actor("b", "B")
        dead = make_actor("c", "C", hp=0)

        award_xp([alive, other, dead], 45, DiceRoller(fixed_rolls()))

        assert alive.xp == 22
        assert other.xp == 22
        assert dead.xp == 0

    def test_nobody_alive(self, fixed_rolls) -> None:
        assert award_xp([make_actor(hp=0)], 50, DiceRoller(fixed_rolls())) == []


class TestSpendStatPoint:
    """Tests for spend_stat_point."""

    def test_spend(self) -> None:
        actor = make_actor(stat_points=2)

        spend_stat_point(actor, Skill.FAITH)

        assert actor.skills.faith == 1
        assert actor.stat_points == 1

    def test_no_points(self) -> None:
        """Test spending without points is an invalid transition."""
        with pytest.raises(InvalidTransitionError):
            spend_stat_point(make_actor(), "strength")
