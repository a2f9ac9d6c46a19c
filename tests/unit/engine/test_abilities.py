"""Tests for role abilities."""

from __future__ import annotations

import pytest

from conftest import FixedRolls, make_actor, make_enemy, make_fight

from long_hall.content.abilities import get_ability
from long_hall.core.exceptions import DataIntegrityError, InvalidTransitionError
from long_hall.engine.abilities import cooldown_after_use, is_offensive, use_ability
from long_hall.engine.context import TurnContext
from long_hall.engine.rng import SeededRNG
from long_hall.models.enums import CombatTurn, Status


def _ctx(*rolls: int) -> TurnContext:
    return TurnContext.from_rng(SeededRNG(2), FixedRolls(*rolls))


def _cooldown(actor, ability_id: str) -> int:
    return actor.ability(ability_id).current_cooldown


class TestAbilityData:
    """Tests for the ability helpers."""

    def test_rest_abilities_park_on_sentinel(self) -> None:
        assert cooldown_after_use(get_ability("fireball")) == 999
        assert cooldown_after_use(get_ability("magic_missile")) == 2

    @pytest.mark.parametrize(
        ("ability_id", "offensive"),
        [
            ("magic_missile", True),
            ("sneak_attack", True),
            ("volley", True),
            ("cunning_action", False),
            ("second_wind", False),
            ("action_surge", False),
        ],
    )
    def test_is_offensive(self, ability_id: str, offensive: bool) -> None:
        assert is_offensive(get_ability(ability_id).effect) is offensive


class TestDamageAbilities:
    """Tests for damage and attack effects."""

    def test_magic_missile_auto_hits(self) -> None:
        """Test 3d4 + 3 + magic with no attack roll."""
        wizard = make_actor("wiz-1", "Wizard", "wizard")
        state = make_fight([wizard], [make_enemy(hp=30)])

        use_ability(state, "wiz-1", "magic_missile", "rat-0", _ctx(1, 1, 1))

        assert "[auto-hit] HIT! 9 damage." in state.history[0]
        assert state.current_room.enemies[0].hp == 21
        assert _cooldown(state.party.members[0], "magic_missile") == 1

    def test_fireball_hits_every_enemy(self) -> None:
        """Test the area effect kills both rats and ends the fight."""
        wizard = make_actor("wiz-1", "Wizard", "wizard")
        state = make_fight([wizard], [make_enemy(), make_enemy("rat-1", "Giant Rat 2")])

        use_ability(state, "wiz-1", "fireball", None, _ctx())

        assert state.victory is True
        assert state.current_room.enemies == []
        assert _cooldown(state.party.members[0], "fireball") == 999

    def test_sneak_attack_requires_hidden(self) -> None:
        rogue = make_actor("rogue-1", "Rogue", "rogue")
        state = make_fight([rogue])

        with pytest.raises(InvalidTransitionError) as exc_info:
            use_ability(state, "rogue-1", "sneak_attack", "rat-0", _ctx(20))

        assert exc_info.value.log_message == "Rogue must be hidden to use Sneak Attack."

    def test_sneak_attack_reveals(self) -> None:
        """Test weapon damage plus 2d6, and the rogue steps out of hiding."""
        rogue = make_actor("rogue-1", "Rogue", "rogue")
        rogue.add_status(Status.HIDDEN)
        state = make_fight([rogue], [make_enemy(hp=40)])

        use_ability(state, "rogue-1", "sneak_attack", "rat-0", _ctx(15, 4, 3, 3))

        assert "[15+1=16 vs AC 10] HIT! 10 damage." in state.history[0]
        assert "Rogue reveals themselves!" in state.history
        assert not state.party.members[0].has_status(Status.HIDDEN)

    def test_not_ready(self) -> None:
        wizard = make_actor("wiz-1", "Wizard", "wizard")
        wizard.ability("magic_missile").current_cooldown = 1
        state = make_fight([wizard])

        with pytest.raises(InvalidTransitionError) as exc_info:
            use_ability(state, "wiz-1", "magic_missile", "rat-0", _ctx())

        assert exc_info.value.log_message == "Magic Missile is not ready yet."

    def test_unknown_ability(self) -> None:
        """Test an ability the member does not know."""
        with pytest.raises(DataIntegrityError):
            use_ability(make_fight(), "hero-1", "fireball", None, _ctx())


class TestSupportAbilities:
    """Tests for heals, buffs, debuffs and specials."""

    def test_second_wind_heals_self(self) -> None:
        """Test 1d10 + level + faith."""
        state = make_fight([make_actor(hp=2)])

        use_ability(state, "hero-1", "second_wind", None, _ctx(5))

        assert state.party.members[0].hp.current == 8
        assert _cooldown(state.party.members[0], "second_wind") == 999

    def test_healing_word_targets_ally(self) -> None:
        cleric = make_actor("cleric-1", "Cleric", "cleric")
        state = make_fight([make_actor(hp=2), cleric], [make_enemy(hp=40)])

        use_ability(state, "cleric-1", "healing_word", "hero-1", _ctx(4))

        assert state.party.members[0].hp.current == 10
        assert state.history[0] == "Cleric heals Hero for 8 HP."

    def test_cunning_action_is_free(self) -> None:
        """Test hiding does not use up the rogue's action."""
        rogue = make_actor("rogue-1", "Rogue", "rogue")
        state = make_fight([rogue])

        use_ability(state, "rogue-1", "cunning_action", None, _ctx())

        assert state.party.members[0].has_status(Status.HIDDEN)
        assert state.acted_this_round == []
        assert state.combat_turn == CombatTurn.PLAYER
        assert state.history == ["Rogue gains hidden!", "Rogue slips into the shadows."]

    def test_action_surge_grants_extra_action(self) -> None:
        state = make_fight(acted_this_round=["hero-1"])

        use_ability(state, "hero-1", "action_surge", None, _ctx())

        assert state.extra_actions == 1
        assert state.combat_round == 1

    def test_turn_undead_only_affects_undead(self) -> None:
        """Test turned enemies skip the enemy phase."""
        cleric = make_actor("cleric-1", "Cleric", "cleric")
        skeleton = make_enemy("skeleton-0", "Skeleton", hp=20, tags=["undead"])
        rat = make_enemy(hp=20)
        state = make_fight([cleric], [skeleton, rat])

        use_ability(state, "cleric-1", "turn_undead", None, _ctx())

        enemies = {e.id: e for e in state.current_room.enemies}
        assert "Skeleton cowers in holy terror!" in state.history
        assert enemies["skeleton-0"].turned_rounds == 1
        assert enemies["rat-0"].turned_rounds == 0
        assert state.combat_round == 2

    def test_shield_buff(self) -> None:
        wizard = make_actor("wiz-1", "Wizard", "wizard")
        state = make_fight([wizard, make_actor()])

        use_ability(state, "wiz-1", "shield", None, _ctx())

        assert state.party.members[0].has_status(Status.SHIELDED)
        assert state.acted_this_round == ["wiz-1"]
