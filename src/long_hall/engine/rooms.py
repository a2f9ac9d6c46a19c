"""Non-combat room interactions: traps and shrines.

Both can be used once per room, and only after any guards are dead.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from long_hall.core.constants import (
    DISARM_BASE_BONUS,
    DISARM_DC,
    MAX_SHORT_RESTS,
    ROGUE_DISARM_BONUS,
)
from long_hall.core.exceptions import InvalidTransitionError
from long_hall.core.logging import get_logger
from long_hall.engine.combat import damage_actor, party_wiped
from long_hall.engine.context import TurnContext
from long_hall.engine.enchanting import enchant_equipped
from long_hall.engine.rng import SeededRNG
from long_hall.models.actors import Actor
from long_hall.models.enums import EquipmentSlot, Role, RoomType
from long_hall.models.rooms import Room
from long_hall.models.state import RunState


logger = get_logger(__name__)

DISARM_GOLD = (5, 15)
FAILED_DISARM_DAMAGE = "1d6"
TRIGGER_DAMAGE = "2d6"
CLERIC_HEAL_MULTIPLIER = 1.5
SHRINE_GOLD_BASE = 15
SHRINE_GOLD_SPREAD = 15

Boon = Callable[[RunState, Actor, SeededRNG], str]


def _require_open_room(state: RunState, room_type: RoomType, action_type: str) -> Room:
    room = state.current_room
    if room is None or room.type != room_type or state.room_resolved:
        raise InvalidTransitionError(f"No unused {room_type} here", action_type=action_type)
    if room.has_enemies:
        raise InvalidTransitionError(
            "Guards still stand",
            action_type=action_type,
            log_message="The guardians must be defeated first!",
        )
    return room


def _role_alive(state: RunState, role: Role) -> bool:
    return any(m.role == role for m in state.party.living)


# =============================================================================
# Hazards
# =============================================================================


def _spring_trap(state: RunState, room: Room, damage: int) -> None:
    """Trap damage lands on the front member; the loot is claimed regardless."""
    victim = state.party.living[0] if state.party.living else None
    if victim is not None and damage_actor(victim, damage):
        state.log(f"{victim.name} has fallen!")
    _claim_loot(state, room)
    if state.party.all_dead:
        party_wiped(state)


def _claim_loot(state: RunState, room: Room) -> None:
    if room.loot:
        state.inventory.items.extend(item.model_copy(deep=True) for item in room.loot)
        state.log("Found: " + ", ".join(item.display_name for item in room.loot))
        room.loot = []
    state.room_resolved = True


def disarm_trap(state: RunState, ctx: TurnContext) -> None:
    """Try to disarm: ``1d20 + 2 (+5 with a rogue) >= 12``.

    Success pays 5-15 gold; failure sets the trap off for 1d6.
    """
    room = _require_open_room(state, RoomType.HAZARD, "DISARM_TRAP")
    has_rogue = _role_alive(state, Role.ROGUE)
    bonus = DISARM_BASE_BONUS + (ROGUE_DISARM_BONUS if has_rogue else 0)
    natural = ctx.dice.d20()
    total = natural + bonus

    if total >= DISARM_DC:
        gold = ctx.rng.randint(*DISARM_GOLD)
        state.party.gold += gold
        state.victory = True
        rogue_note = " (Rogue +5 bonus!)" if has_rogue else ""
        state.log(
            f"Trap disarmed! (Rolled {natural}+{bonus}={total} vs DC {DISARM_DC})"
            f"{rogue_note}. +{gold} gold."
        )
        _claim_loot(state, room)
        return

    damage = ctx.dice.total(FAILED_DISARM_DAMAGE)
    state.log(f"Failed to disarm! (Rolled {total}). Trap deals {damage} damage!")
    _spring_trap(state, room, damage)


def trigger_trap(state: RunState, ctx: TurnContext) -> None:
    """Walk straight through: 2d6 damage, then the way is clear."""
    room = _require_open_room(state, RoomType.HAZARD, "TRIGGER_TRAP")
    damage = ctx.dice.total(TRIGGER_DAMAGE)
    state.log(f"Triggered the trap! Takes {damage} damage!")
    _spring_trap(state, room, damage)


# =============================================================================
# Shrines
# =============================================================================


def _heal_boon(state: RunState, lead: Actor, rng: SeededRNG) -> str:
    has_cleric = _role_alive(state, Role.CLERIC)
    amount = math.floor(lead.hp.max * 0.5)
    if has_cleric:
        amount = math.floor(amount * CLERIC_HEAL_MULTIPLIER)
    lead.hp = lead.hp.model_copy(update={"current": min(lead.hp.max, lead.hp.current + amount)})
    cleric_note = " (Cleric +50%)" if has_cleric else ""
    return f"The shrine glows warmly. Healed for {amount} HP!{cleric_note}"


def _rest_boon(state: RunState, lead: Actor, rng: SeededRNG) -> str:
    state.short_rests_remaining += 1
    return "The shrine restores your vitality. +1 Short Rest!"


def _gold_boon(state: RunState, lead: Actor, rng: SeededRNG) -> str:
    gold = SHRINE_GOLD_BASE + rng.randint(0, SHRINE_GOLD_SPREAD)
    state.party.gold += gold
    return f"Golden light showers upon you. +{gold} gold!"


def _full_heal_boon(state: RunState, lead: Actor, rng: SeededRNG) -> str:
    lead.hp = lead.hp.model_copy(update={"current": lead.hp.max})
    return "Divine energy surges through you. Fully healed!"


def _enchant_boon(state: RunState, lead: Actor, rng: SeededRNG) -> str:
    choices = [
        (member, slot) for member in state.party.living for slot in member.equipment
    ]
    member, slot = rng.pick(choices)
    result = enchant_equipped(member, slot, rng)
    upgraded = " (UPGRADED!)" if result.upgraded else ""
    return (
        f"✨ {result.tier_name} Boon{upgraded}! {member.name}'s {result.base_name} "
        f"becomes {result.item.display_name}! (+{result.bonus} power)"
    )


def _weapon_blessing(state: RunState, lead: Actor, rng: SeededRNG) -> str:
    result = enchant_equipped(lead, EquipmentSlot.MAIN_HAND, rng, source="the starting shrine")
    upgraded = " (UPGRADED!)" if result.upgraded else ""
    return (
        f"⚔️ {result.tier_name} Weapon Blessing{upgraded}! Your {result.base_name} "
        f"becomes {result.item.display_name}! (+{result.bonus} power)"
    )


def available_boons(state: RunState, lead: Actor) -> list[Boon]:
    """Boons the shrine may grant, given the party's condition."""
    damaged = lead.hp.current < lead.hp.max
    boons: list[Boon] = []
    if damaged:
        boons.append(_heal_boon)
    if state.short_rests_remaining < MAX_SHORT_RESTS:
        boons.append(_rest_boon)
    boons.append(_gold_boon)
    if damaged:
        boons.append(_full_heal_boon)
    if any(member.equipment for member in state.party.living):
        boons.append(_enchant_boon)
    return boons


def pray_at_shrine(state: RunState, ctx: TurnContext) -> None:
    """Receive one boon.

    The starting shrine always blesses the hero's weapon (gold if the
    hero is unarmed); later shrines draw from :func:`available_boons`.
    """
    _require_open_room(state, RoomType.SHRINE, "PRAY_AT_SHRINE")
    living = state.party.living
    if not living:
        raise InvalidTransitionError("Nobody left to pray", action_type="PRAY_AT_SHRINE")
    lead = living[0]

    if state.depth == 0:
        boon = _weapon_blessing if lead.equipped(EquipmentSlot.MAIN_HAND) else _gold_boon
    else:
        boon = ctx.rng.pick(available_boons(state, lead))
    message = boon(state, lead, ctx.rng)

    state.room_resolved = True
    state.shrine_boon = message
    state.log(message)
    logger.debug("Shrine boon", depth=state.depth, boon=boon.__name__)


__all__ = ["disarm_trap", "trigger_trap", "available_boons", "pray_at_shrine"]
