"""Run and actor creation, plus removal of fallen members."""

from __future__ import annotations

from long_hall.content.abilities import get_abilities_for_role
from long_hall.content.classes import INITIAL_HP, get_hit_die, starting_skills
from long_hall.content.items import STARTER_EQUIPMENT, STARTER_SWORD, UNIVERSAL_STARTER
from long_hall.content.themes import DEFAULT_THEME_ID
from long_hall.core.constants import LEVEL_UP_HP_GAIN, MAX_SHORT_RESTS, MAX_STRESS
from long_hall.core.logging import get_logger
from long_hall.engine.equipment import place_item, slot_for
from long_hall.engine.loot import instance_item, require_template, roll_starting_weapon_rarity, starting_weapon
from long_hall.engine.rng import SeededRNG
from long_hall.models.actors import AbilityState, Actor, HitDice, Vital
from long_hall.models.enums import ItemType, Role, RoomType
from long_hall.models.items import Item
from long_hall.models.rooms import Room
from long_hall.models.state import Inventory, Party, RunState


logger = get_logger(__name__)


def _starter_gear(role: Role, rng: SeededRNG | None) -> list[Item]:
    """Role kit first, then universal pieces for any slot still free.

    With a generator the kit weapon's rarity is rolled from the starting
    weapon table; without one it stays common.
    """
    gear = [require_template(item_id) for item_id in STARTER_EQUIPMENT[role]]
    if rng is not None:
        rolled = starting_weapon(role, roll_starting_weapon_rarity(rng))
        if rolled is not None:
            gear = [rolled if item.type == ItemType.WEAPON else item for item in gear]
    gear.extend(require_template(item_id) for item_id in UNIVERSAL_STARTER)
    return gear


def create_actor(
    actor_id: str,
    name: str,
    role: Role | str,
    level: int = 1,
    include_starter_gear: bool = False,
    rng: SeededRNG | None = None,
) -> Actor:
    """Build a party member.

    Args:
        actor_id: Unique id within the party.
        name: Display name.
        role: Class.
        level: Starting level; each level past 1 adds 4 max HP and a hit die.
        include_starter_gear: Equip the role kit and universal pieces.
        rng: Optional generator for the starting weapon rarity.

    Returns:
        A living actor at full HP with every ability ready.
    """
    role = Role(role)
    max_hp = INITIAL_HP[role] + (level - 1) * LEVEL_UP_HP_GAIN
    actor = Actor(
        id=actor_id,
        name=name,
        role=role,
        level=level,
        skills=starting_skills(role),
        hp=Vital(current=max_hp, max=max_hp),
        stress=Vital(current=0, max=MAX_STRESS),
        hit_dice=HitDice(current=level, max=level, die=get_hit_die(role)),
        abilities=[AbilityState(ability_id=a.id) for a in get_abilities_for_role(role)],
    )
    if include_starter_gear:
        for template in _starter_gear(role, rng):
            item = instance_item(template, f"{template.id}-{actor_id}")
            slot = slot_for(actor, item)
            if actor.equipped(slot) is None:
                place_item(actor, item, slot)
    return actor


def create_initial_run_state(seed: str) -> RunState:
    """A fresh run: a lone fighter with a rusty sword before the starting shrine."""
    hero = create_actor("hero-1", "Hero", Role.FIGHTER)
    place_item(hero, STARTER_SWORD.model_copy(deep=True))
    logger.info("Run created", seed=seed)
    return RunState(
        seed=seed,
        depth=0,
        theme_id=DEFAULT_THEME_ID,
        short_rests_remaining=MAX_SHORT_RESTS,
        party=Party(members=[hero], gold=0),
        inventory=Inventory(),
        current_room=Room(id="room-0", type=RoomType.SHRINE, theme_id=DEFAULT_THEME_ID),
        room_resolved=False,
        history=["Run started.", "You stand before an ancient shrine..."],
    )


def prune_fallen(state: RunState) -> list[str]:
    """Drop dead members from the party; returns their names."""
    fallen = [m.name for m in state.party.members if not m.is_alive]
    if fallen:
        state.party.members = [m for m in state.party.members if m.is_alive]
        logger.info("Fallen members left behind", names=fallen)
    return fallen


__all__ = ["create_actor", "create_initial_run_state", "prune_fallen"]
