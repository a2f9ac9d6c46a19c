"""Equipment: stat aggregation, slot rules and inventory transfers.

Every bonus an actor receives from gear comes from summing
:attr:`Item.total_stats` (base plus enchantment) over the equipped set.
Max-HP bonuses are applied to the actor's HP pool when an item enters or
leaves a slot, so the pool always reflects what is currently worn.
"""

from __future__ import annotations

from dataclasses import dataclass

from long_hall.core.constants import ITEM_HISTORY_LIMIT
from long_hall.core.exceptions import DataIntegrityError, InvalidTransitionError
from long_hall.core.logging import get_logger
from long_hall.models.actors import Actor
from long_hall.models.enums import DamageType, EquipmentSlot, ItemType, Skill, Status
from long_hall.models.items import Item, ItemStats
from long_hall.models.state import Inventory


logger = get_logger(__name__)

BASE_ARMOR_CLASS = 10
SHIELDED_AC_BONUS = 5


# =============================================================================
# Damage Types
# =============================================================================

_RANGED_MARKERS = ("bow", "crossbow", "sling")
_MAGIC_MARKERS = ("staff", "wand", "tome")

SKILL_PAIRS: dict[DamageType, tuple[Skill, Skill]] = {
    DamageType.MELEE: (Skill.ATTACK, Skill.STRENGTH),
    DamageType.RANGED: (Skill.RANGED, Skill.RANGED),
    DamageType.MAGIC: (Skill.MAGIC, Skill.MAGIC),
}
"""Accuracy skill and damage skill for each damage type."""


def weapon_damage_type(weapon: Item | None) -> DamageType:
    """Damage type of a weapon; unarmed attacks are melee.

    An explicit ``damage_type`` wins. Otherwise the type is inferred from
    the mechanical name, which keeps existing saves behaving as before.

    Example:
        >>> from long_hall.content.items import get_item_template
        >>> weapon_damage_type(get_item_template("ranger_bow_common"))
        <DamageType.RANGED: 'ranged'>
    """
    if weapon is None:
        return DamageType.MELEE
    if weapon.damage_type is not None:
        return DamageType(weapon.damage_type)
    name = weapon.name.lower()
    if any(marker in name for marker in _RANGED_MARKERS):
        return DamageType.RANGED
    if any(marker in name for marker in _MAGIC_MARKERS):
        return DamageType.MAGIC
    return DamageType.MELEE


# =============================================================================
# Aggregation
# =============================================================================


def equipment_bonuses(actor: Actor) -> ItemStats:
    """Sum of base and enchantment stats over every equipped item."""
    total = ItemStats()
    for item in actor.equipment.values():
        total = total.plus(item.total_stats)
    return total


def armor_class(actor: Actor) -> int:
    """Effective AC: 10 + defense + equipment, +5 while shielded."""
    ac = BASE_ARMOR_CLASS + actor.skills.defense + equipment_bonuses(actor).ac_bonus
    if actor.has_status(Status.SHIELDED):
        ac += SHIELDED_AC_BONUS
    return ac


@dataclass(frozen=True)
class AttackProfile:
    """Bonuses an actor brings to a weapon attack."""

    damage_type: DamageType
    attack_bonus: int
    damage_bonus: int


def attack_profile(actor: Actor) -> AttackProfile:
    """Accuracy and damage bonuses for the actor's main-hand weapon."""
    damage_type = weapon_damage_type(actor.equipped(EquipmentSlot.MAIN_HAND))
    hit_skill, damage_skill = SKILL_PAIRS[damage_type]
    gear = equipment_bonuses(actor)
    return AttackProfile(
        damage_type=damage_type,
        attack_bonus=actor.skills.get(hit_skill) + gear.attack_bonus,
        damage_bonus=actor.skills.get(damage_skill) + gear.damage_bonus,
    )


# =============================================================================
# HP Adjustment
# =============================================================================


def apply_max_hp_delta(actor: Actor, delta: int, *, current_floor: int = 0) -> None:
    """Shift max and current HP by ``delta``; current never drops below the floor.

    A fallen actor only has max HP adjusted and stays at 0.
    """
    if delta == 0:
        return
    new_max = max(1, actor.hp.max + delta)
    if actor.is_alive:
        new_current = min(new_max, max(current_floor, actor.hp.current + delta))
    else:
        new_current = 0
    actor.hp = actor.hp.model_copy(update={"max": new_max, "current": new_current})


# =============================================================================
# Slots
# =============================================================================

SLOT_RULES: dict[ItemType, tuple[EquipmentSlot, ...]] = {
    ItemType.WEAPON: (EquipmentSlot.MAIN_HAND,),
    ItemType.SHIELD: (EquipmentSlot.OFF_HAND,),
    ItemType.HEAD: (EquipmentSlot.HEAD,),
    ItemType.ARMOR: (EquipmentSlot.CHEST,),
    ItemType.CHEST: (EquipmentSlot.CHEST,),
    ItemType.LEGS: (EquipmentSlot.LEGS,),
    ItemType.FEET: (EquipmentSlot.FEET,),
    ItemType.NECK: (EquipmentSlot.NECK,),
    ItemType.RING: (EquipmentSlot.RING1, EquipmentSlot.RING2),
}
"""Slots each item type may occupy."""


def slot_for(actor: Actor, item: Item) -> EquipmentSlot:
    """Choose the slot an item goes into when none is requested.

    Rings fill ``ring1`` then ``ring2`` and replace ``ring1`` when both
    are taken.
    """
    slots = SLOT_RULES[ItemType(item.type)]
    for slot in slots:
        if actor.equipped(slot) is None:
            return slot
    return slots[0]


def fits_slot(item: Item, slot: EquipmentSlot | str) -> bool:
    return EquipmentSlot(slot) in SLOT_RULES[ItemType(item.type)]


def place_item(actor: Actor, item: Item, slot: EquipmentSlot | None = None) -> Item | None:
    """Put an item into a slot and return whatever it displaced.

    HP shifts by the difference between the incoming and outgoing max-HP
    bonuses.
    """
    target = slot or slot_for(actor, item)
    displaced = actor.equipment.get(target)
    equipment = dict(actor.equipment)
    equipment[target] = item
    actor.equipment = equipment
    old_bonus = displaced.total_stats.max_hp_bonus if displaced else 0
    apply_max_hp_delta(actor, item.total_stats.max_hp_bonus - old_bonus, current_floor=1)
    return displaced


def equip_from_inventory(
    actor: Actor,
    inventory: Inventory,
    item_id: str,
    slot: EquipmentSlot | str | None = None,
) -> tuple[Item, EquipmentSlot]:
    """Move an item from the inventory onto an actor.

    Raises:
        DataIntegrityError: If the item is not in the inventory.
        InvalidTransitionError: If the requested slot cannot hold the item.
    """
    item = inventory.find(item_id)
    if item is None:
        raise DataIntegrityError("Item not in inventory", entity_id=item_id)
    if slot is not None and not fits_slot(item, slot):
        raise InvalidTransitionError(
            f"{item.type} cannot go in {slot}",
            action_type="EQUIP_ITEM",
            log_message=f"{item.display_name} does not fit the {slot} slot.",
        )
    target = EquipmentSlot(slot) if slot is not None else slot_for(actor, item)
    inventory.take(item_id)
    displaced = place_item(actor, item, target)
    if displaced is not None:
        inventory.items.append(displaced)
    logger.debug("Item equipped", actor_id=actor.id, item_id=item_id, slot=str(target))
    return item, target


def unequip_to_inventory(actor: Actor, inventory: Inventory, slot: EquipmentSlot | str) -> Item:
    """Move the item in ``slot`` back to the inventory.

    Current HP is floored at 1 so removing gear never kills.

    Raises:
        DataIntegrityError: If the slot is empty.
    """
    target = EquipmentSlot(slot)
    item = actor.equipment.get(target)
    if item is None:
        raise DataIntegrityError("Slot is empty", entity_id=f"{actor.id}:{target}")
    equipment = dict(actor.equipment)
    del equipment[target]
    actor.equipment = equipment
    apply_max_hp_delta(actor, -item.total_stats.max_hp_bonus, current_floor=1)
    inventory.items.append(item)
    return item


def find_equipped(actor: Actor, item_id: str) -> EquipmentSlot | None:
    return next((slot for slot, item in actor.equipment.items() if item.id == item_id), None)


# =============================================================================
# Weapon Mastery
# =============================================================================


def push_item_history(item: Item, *entries: str) -> None:
    """Append milestone lines, keeping only the newest ten."""
    history = [*item.history, *entries]
    item.history = history[-ITEM_HISTORY_LIMIT:]


def record_hit(
    weapon: Item,
    damage: int,
    *,
    is_kill: bool,
    is_critical: bool,
    enemy_name: str | None = None,
) -> None:
    """Update a weapon's mastery counters after it lands a hit."""
    stats = weapon.stats
    milestones: list[str] = []
    if is_kill and enemy_name:
        milestones.append(f"Slew {enemy_name}")
    if damage > stats.highest_hit and damage >= 10:
        milestones.append(f"New record hit: {damage} damage!")
    if is_critical:
        milestones.append("Critical strike!")
    weapon.stats = stats.model_copy(
        update={
            "damage_dealt": stats.damage_dealt + damage,
            "highest_hit": max(stats.highest_hit, damage),
            "critical_hits": stats.critical_hits + (1 if is_critical else 0),
            "kills": stats.kills + (1 if is_kill else 0),
        }
    )
    if milestones:
        push_item_history(weapon, *milestones)


def record_encounter(actor: Actor) -> None:
    """Count a fight on the actor's main-hand weapon."""
    weapon = actor.equipped(EquipmentSlot.MAIN_HAND)
    if weapon is not None:
        weapon.stats = weapon.stats.model_copy(
            update={"encounters_used": weapon.stats.encounters_used + 1}
        )


__all__ = [
    "BASE_ARMOR_CLASS",
    "SHIELDED_AC_BONUS",
    "SKILL_PAIRS",
    "SLOT_RULES",
    "AttackProfile",
    "weapon_damage_type",
    "equipment_bonuses",
    "armor_class",
    "attack_profile",
    "apply_max_hp_delta",
    "slot_for",
    "fits_slot",
    "place_item",
    "equip_from_inventory",
    "unequip_to_inventory",
    "find_equipped",
    "push_item_history",
    "record_hit",
    "record_encounter",
]
