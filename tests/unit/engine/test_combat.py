"""Tests for the turn-based combat engine."""

from __future__ import annotations

import pytest

from conftest import FixedRolls, make_actor, make_enemy, make_fight, make_room, make_state

from long_hall.content.items import STARTER_SWORD
from long_hall.core.exceptions import DataIntegrityError, InvalidTransitionError
from long_hall.engine.combat import (
    attempt_escape,
    check_victory,
    damage_actor,
    end_round,
    enemy_turn,
    player_attack,
    quick_resolve,
    roll_initiative,
    spend_action,
)
from long_hall.engine.context import TurnContext
from long_hall.engine.equipment import place_item
from long_hall.engine.rng import SeededRNG
from long_hall.models.actors import AbilityState, Vital
from long_hall.models.enums import CombatTurn, EquipmentSlot, RoomType, Status


def _ctx(*rolls: int) -> TurnContext:
    return TurnContext.from_rng(SeededRNG(1), FixedRolls(*rolls))


class TestPlayerAttack:
    """Tests for the basic attack."""

    def test_natural_twenty_hits_and_kills(self) -> None:
        """Test a critical hit against AC 15 ends the fight."""
        state = make_fight(enemies=[make_enemy(ac=15)])

        player_attack(state, "hero-1", "rat-0", _ctx(20, 3))

        assert "[20+2=22 vs AC 15] CRITICAL HIT! HIT for 5 damage!" in state.history[0]
        assert state.victory is True
        assert state.combat_turn is None
        assert state.room_resolved is True
        assert state.current_room.enemies == []
        assert state.party.gold >= 8
        assert state.party.members[0].xp == 15

    def test_natural_one_misses_and_enemies_answer(self) -> None:
        """Test a miss hands the turn to the enemies, who then yield round 2."""
        state = make_fight(enemies=[make_enemy(ac=15)])

        player_attack(state, "hero-1", "rat-0", _ctx(1))

        assert state.history[0].endswith("MISS!")
        assert state.current_room.enemies[0].hp == 5
        assert state.combat_round == 2
        assert state.combat_turn == CombatTurn.PLAYER
        assert state.acted_this_round == []

    def test_champion_strike_is_consumed(self) -> None:
        """Test the pending bonus dice land once."""
        state = make_fight(enemies=[make_enemy(hp=40)])
        state.party.members[0].add_status(Status.CHAMPION_STRIKE)

        player_attack(state, "hero-1", "rat-0", _ctx(15, 4, 3, 3))

        assert "HIT for 12 (+6 Champion Strike) damage!" in state.history[0]
        assert not state.party.members[0].has_status(Status.CHAMPION_STRIKE)

    def test_weapon_records_mastery(self) -> None:
        state = make_fight(enemies=[make_enemy(hp=40)])
        place_item(state.party.members[0], STARTER_SWORD.model_copy(deep=True))

        player_attack(state, "hero-1", "rat-0", _ctx(15, 4))

        weapon = state.party.members[0].equipped(EquipmentSlot.MAIN_HAND)
        assert weapon.stats.damage_dealt == 7

    def test_attack_reveals_hidden_attacker(self) -> None:
        state = make_fight(enemies=[make_enemy(hp=40)])
        state.party.members[0].add_status(Status.HIDDEN)

        player_attack(state, "hero-1", "rat-0", _ctx(1))

        assert not state.party.members[0].has_status(Status.HIDDEN)

    def test_outside_combat(self) -> None:
        """Test attacking when no fight is running."""
        state = make_state(room=make_room("combat", [make_enemy()]))

        with pytest.raises(InvalidTransitionError):
            player_attack(state, "hero-1", "rat-0", _ctx(20))

    def test_unknown_target(self) -> None:
        with pytest.raises(DataIntegrityError):
            player_attack(make_fight(), "hero-1", "dragon-0", _ctx(20))

    def test_fallen_attacker(self) -> None:
        state = make_fight(members=[make_actor(hp=0), make_actor("hero-2", "Second")])

        with pytest.raises(InvalidTransitionError):
            player_attack(state, "hero-1", "rat-0", _ctx(20))


class TestActionEconomy:
    """Tests for acted-this-round and extra actions."""

    def test_second_member_waits_for_turn(self) -> None:
        """Test the round stays open until everyone acts."""
        state = make_fight(
            members=[make_actor(), make_actor("hero-2", "Second")],
            enemies=[make_enemy(hp=40)],
        )

        player_attack(state, "hero-1", "rat-0", _ctx(1))

        assert state.acted_this_round == ["hero-1"]
        assert state.history[-1] == "→ Second's turn"
        assert state.combat_round == 1

    def test_extra_action_is_spent(self) -> None:
        state = make_fight(acted_this_round=["hero-1"], extra_actions=1)

        spend_action(state, state.party.members[0], "ATTACK")

        assert state.extra_actions == 0
        assert state.acted_this_round == ["hero-1"]

    def test_acting_twice_without_extra(self) -> None:
        state = make_fight(acted_this_round=["hero-1"])

        with pytest.raises(InvalidTransitionError):
            spend_action(state, state.party.members[0], "ATTACK")


class TestEnemyTurn:
    """Tests for the enemy side of a round."""

    def test_hit_deals_damage(self) -> None:
        """Test 1d20 + power against AC, then the damage dice."""
        state = make_fight()

        enemy_turn(state, _ctx(15, 4))

        assert state.party.members[0].hp.current == 8
        assert "[15+1=16 vs AC 11] HIT for 4 damage!" in state.history[0]
        assert state.combat_round == 2

    def test_hidden_members_are_not_targeted(self) -> None:
        state = make_fight(members=[make_actor(), make_actor("hero-2", "Shade")])
        state.party.members[1].add_status(Status.HIDDEN)

        enemy_turn(state, _ctx(20, 4))

        assert state.party.members[0].hp.current == 8
        assert state.party.members[1].hp.current == 12

    def test_evasion_is_consumed(self) -> None:
        state = make_fight()
        state.party.members[0].add_status(Status.EVASIVE)

        enemy_turn(state, _ctx(20, 4))

        assert state.party.members[0].hp.current == 12
        assert not state.party.members[0].has_status(Status.EVASIVE)

    def test_turned_enemies_cower(self) -> None:
        state = make_fight(enemies=[make_enemy(turned_rounds=2)])

        enemy_turn(state, _ctx(20, 4))

        assert state.party.members[0].hp.current == 12
        assert state.current_room.enemies[0].turned_rounds == 1

    def test_party_wipe_ends_the_run(self) -> None:
        """Test the last member falling sets game over."""
        state = make_fight(members=[make_actor(hp=3)])

        enemy_turn(state, _ctx(20, 4))

        assert state.game_over is True
        assert state.combat_turn is None
        assert state.history[-1] == "The entire party has fallen! Game Over."

    def test_end_round_ticks_turn_cooldowns_only(self) -> None:
        """Test rest-locked abilities stay parked."""
        state = make_fight()
        member = state.party.members[0]
        member.abilities = [
            AbilityState(ability_id="champion_strike", current_cooldown=2),
            AbilityState(ability_id="second_wind", current_cooldown=999),
        ]
        member.add_status(Status.SHIELDED)

        end_round(state)

        assert [a.current_cooldown for a in member.abilities] == [1, 999]
        assert not member.has_status(Status.SHIELDED)


class TestInitiative:
    """Tests for roll_initiative."""

    def test_enemies_first(self) -> None:
        state = make_fight(combat_turn=None, combat_round=0)

        assert roll_initiative(state, _ctx(1, 20)) is True
        assert state.combat_turn == CombatTurn.PLAYER
        assert state.combat_round == 1
        assert state.history[-1] == "━━━ ROUND 1 ━━━"

    def test_ties_go_to_the_party(self) -> None:
        state = make_fight(combat_turn=None, combat_round=0)

        assert roll_initiative(state, _ctx(10, 11)) is False


class TestEscape:
    """Tests for attempt_escape."""

    def test_success_moves_one_room_deeper(self) -> None:
        """Test meeting the DC (10 - agility 1) flees."""
        state = make_fight()

        attempt_escape(state, _ctx(9))

        assert state.depth == 2
        assert state.current_room.id == "room-2"
        assert state.history[-1].startswith("Entered room 2:")

    def test_success_is_deterministic(self) -> None:
        first, second = make_fight(), make_fight()

        attempt_escape(first, _ctx(20))
        attempt_escape(second, _ctx(20))

        assert first.current_room == second.current_room

    def test_failure_draws_free_attacks(self) -> None:
        """Test a failed roll keeps the depth and the player's turn."""
        state = make_fight()

        attempt_escape(state, _ctx(8, 20, 4))

        assert state.depth == 1
        assert state.combat_turn == CombatTurn.PLAYER
        assert state.party.members[0].hp.current == 8
        assert "FAILED!" in state.history[0]

    def test_no_escape_from_boss(self) -> None:
        state = make_fight(in_boss_room=True)
        state.current_room = make_room("boss", [make_enemy()])

        with pytest.raises(InvalidTransitionError) as exc_info:
            attempt_escape(state, _ctx(20))

        assert exc_info.value.log_message == "There is no escape from this chamber!"


class TestVictory:
    """Tests for check_victory."""

    def test_guarded_shrine_stays_open(self) -> None:
        """Test clearing guards leaves the shrine usable."""
        state = make_fight(enemies=[])
        state.current_room = make_room("shrine", [], guarded=True)

        assert check_victory(state, _ctx()) is True
        assert state.room_resolved is False
        assert state.victory is True

    def test_boss_victory_returns_to_intermission(self) -> None:
        """Test loot, blessing and the way back."""
        hero = make_actor()
        place_item(hero, STARTER_SWORD.model_copy(deep=True))
        boss_room = make_room("boss", [], room_id="boss-room-10")
        boss_room.loot = [STARTER_SWORD.model_copy(deep=True, update={"id": "loot-1"})]
        intermission = make_room("intermission", [], room_id="room-10", boss_room=boss_room)
        state = make_state(
            [hero],
            boss_room,
            depth=10,
            in_boss_room=True,
            parent_intermission=intermission,
            combat_turn="player",
        )

        assert check_victory(state, _ctx()) is True

        assert state.current_room.type == RoomType.INTERMISSION
        assert state.current_room.boss_room is None
        assert state.in_boss_room is False
        assert state.parent_intermission is None
        assert [i.id for i in state.inventory.items] == ["loot-1"]
        assert state.party.members[0].equipped(EquipmentSlot.MAIN_HAND).enchant_tier >= 3
        assert "Boss Blessing" in state.shrine_boon
        assert 20 <= state.party.gold <= 49


class TestQuickResolve:
    """Tests for quick_resolve."""

    def test_non_combat_room(self) -> None:
        state = make_state(room=make_room("trader"))

        quick_resolve(state)

        assert state.room_resolved is True
        assert state.history[-1] == "Resolved trader room safely."

    def test_combat_room_is_cleared(self) -> None:
        """Test the fight ends with bounded losses."""
        state = make_fight(enemies=[make_enemy(), make_enemy("rat-1")])

        quick_resolve(state)

        member = state.party.members[0]
        assert state.current_room.enemies == []
        assert state.room_resolved is True
        assert state.combat_turn is None
        assert 0 <= member.hp.current <= 12
        assert 0 <= member.stress.current <= member.stress.max
        assert state.history[0].startswith("Combat resolved:")

    def test_stress_only_for_members_who_take_damage(self) -> None:
        """Test the lead soaks the blow and the rest of the party stays calm."""
        saw_damage = False
        for n in range(60):
            lead = make_actor()
            lead.hp = Vital(current=30, max=30)
            members = [lead, make_actor("hero-2", "Second")]
            state = make_fight(members, [make_enemy(power=1)], seed=f"s{n}")

            quick_resolve(state)

            first, second = state.party.members
            taken = 30 - first.hp.current
            assert second.hp.current == 12
            assert second.stress.current == 0
            if taken == 0:
                assert first.stress.current == 0
            else:
                saw_damage = True
        assert saw_damage

    def test_guarded_room_must_be_fought(self) -> None:
        state = make_state(room=make_room("hazard", [make_enemy()], guarded=True))

        with pytest.raises(InvalidTransitionError):
            quick_resolve(state)

    def test_already_resolved(self) -> None:
        state = make_state(room=make_room("trader"), room_resolved=True)

        with pytest.raises(InvalidTransitionError):
            quick_resolve(state)


class TestDamageActor:
    def test_only_the_killing_blow_reports_a_fall(self) -> None:
        actor = make_actor(hp=3)

        assert damage_actor(actor, 5) is True
        assert actor.hp.current == 0
        assert damage_actor(actor, 5) is False
