"""Enchantment engine.

Shrines roll a tier from a percentile biased by the owner's faith. An
item that is already enchanted has an even chance to be *upgraded*
instead: the tier rises by at least one and the new effect deltas are
stacked onto the old ones. Otherwise the old enchantment is replaced.

The item's mechanical name always carries the latest suffix; a
player-assigned custom name is left alone.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from long_hall.content.items import ARMOR_SUFFIXES, JEWELRY_SUFFIXES, TIER_NAMES, WEAPON_SUFFIXES
from long_hall.content.types import SuffixTable
from long_hall.core.constants import GODLY_TIER, MAX_SHRINE_TIER
from long_hall.core.exceptions import DataIntegrityError
from long_hall.core.logging import get_logger
from long_hall.engine.equipment import apply_max_hp_delta, push_item_history
from long_hall.engine.rng import SeededRNG
from long_hall.models.actors import Actor
from long_hall.models.enums import EquipmentSlot, ItemType
from long_hall.models.items import Enchantment, Item, ItemStats


logger = get_logger(__name__)

# Cumulative percentile bands for tiers 1-4; anything above is tier 5.
_TIER_BANDS: tuple[tuple[int, int], ...] = ((50, 1), (75, 2), (90, 3), (98, 4))

_FAITH_WEIGHT = 5
_UPGRADE_CHANCE = 0.5

_SUFFIX_PATTERN = re.compile(r" of .*$")
_GOD_PATTERN = re.compile(r" God.*$")

_ARMOR_TYPES = frozenset(
    {ItemType.SHIELD, ItemType.ARMOR, ItemType.HEAD, ItemType.CHEST, ItemType.LEGS, ItemType.FEET}
)


@dataclass(frozen=True)
class EnchantResult:
    """Outcome of one enchantment roll.

    Attributes:
        item: The enchanted item (a new instance).
        tier: Final tier applied.
        tier_name: Display name of the tier.
        bonus: Rolled bonus value behind the effect.
        upgraded: Whether the effect was stacked onto an existing one.
        base_name: The item's display name before enchanting.
    """

    item: Item
    tier: int
    tier_name: str
    bonus: int
    upgraded: bool
    base_name: str


def tier_name(tier: int) -> str:
    return TIER_NAMES[max(1, min(tier, GODLY_TIER)) - 1]


def roll_tier(rng: SeededRNG, faith: int = 0) -> int:
    """Roll a shrine tier (1-5) from ``[0, 100) + faith * 5``."""
    score = rng.randint(0, 99) + faith * _FAITH_WEIGHT
    for ceiling, tier in _TIER_BANDS:
        if score < ceiling:
            return tier
    return MAX_SHRINE_TIER


def suffix_table_for(item: Item) -> SuffixTable:
    """Weapons, armor pieces and jewelry name their enchantments differently."""
    item_type = ItemType(item.type)
    if item_type is ItemType.WEAPON:
        return WEAPON_SUFFIXES
    if item_type in _ARMOR_TYPES:
        return ARMOR_SUFFIXES
    return JEWELRY_SUFFIXES


def enchant_effect(item: Item, tier: int, bonus: int, rng: SeededRNG) -> ItemStats:
    """Stat deltas for a fresh enchantment on ``item``."""
    item_type = ItemType(item.type)
    if item_type is ItemType.WEAPON:
        return ItemStats(attack_bonus=bonus // 2 or 1, damage_bonus=bonus)
    if item_type is ItemType.SHIELD:
        return ItemStats(ac_bonus=bonus, max_hp_bonus=tier if tier >= 3 else 0)
    if item_type in _ARMOR_TYPES:
        return ItemStats(ac_bonus=bonus, max_hp_bonus=tier * 2 if tier >= 3 else 0)
    roll = rng.random()
    if roll < 0.33:
        return ItemStats(attack_bonus=bonus)
    if roll < 0.66:
        return ItemStats(damage_bonus=bonus)
    return ItemStats(max_hp_bonus=bonus * 2)


def strip_suffix(name: str) -> str:
    """Recover the base name of a previously enchanted item."""
    return _GOD_PATTERN.sub("", _SUFFIX_PATTERN.sub("", name))


def enchant_item(
    item: Item,
    rng: SeededRNG,
    *,
    faith: int = 0,
    tier: int | None = None,
    source: str = "shrine",
) -> EnchantResult:
    """Enchant a copy of ``item``.

    Args:
        item: Item to enchant; left untouched.
        rng: Generator for the upgrade check, tier, bonus and suffix.
        faith: Faith of the item's owner; raises the tier roll.
        tier: Force a tier instead of rolling one (boss blessings, godly drops).
        source: Where the enchantment came from, for the item history.

    Returns:
        The enchanted copy with its roll details.
    """
    existing_tier = item.enchant_tier
    upgraded = existing_tier > 0 and rng.random() < _UPGRADE_CHANCE
    rolled = tier if tier is not None else roll_tier(rng, faith)
    if upgraded:
        ceiling = max(MAX_SHRINE_TIER, rolled)
        final_tier = max(existing_tier, min(ceiling, max(rolled, existing_tier + 1)))
    else:
        final_tier = rolled

    bonus = final_tier + rng.randint(0, final_tier - 1)
    suffix = rng.pick(suffix_table_for(item).names_for(final_tier))
    effect = enchant_effect(item, final_tier, bonus, rng)
    if upgraded and item.enchantment is not None:
        effect = item.enchantment.effect.plus(effect)

    base_name = strip_suffix(item.name) if item.enchantment else item.name
    display_base = item.custom_name or base_name
    name = tier_name(final_tier)

    enchanted = item.model_copy(deep=True)
    enchanted.name = f"{base_name} {suffix}"
    enchanted.enchantment = Enchantment(
        tier=final_tier,
        name=suffix,
        description=f"{name} Boon",
        effect=effect,
    )
    if upgraded:
        push_item_history(enchanted, f"Stacked with {name} enchantment (Total Tier {final_tier})")
    else:
        push_item_history(enchanted, f"Blessed with {name} enchantment at {source}")

    logger.debug(
        "Item enchanted",
        item_id=item.id,
        tier=final_tier,
        upgraded=upgraded,
        bonus=bonus,
    )
    return EnchantResult(
        item=enchanted,
        tier=final_tier,
        tier_name=name,
        bonus=bonus,
        upgraded=upgraded,
        base_name=display_base,
    )


def enchant_equipped(
    actor: Actor,
    slot: EquipmentSlot | str,
    rng: SeededRNG,
    *,
    tier: int | None = None,
    source: str = "shrine",
) -> EnchantResult:
    """Enchant the item an actor wears in ``slot``.

    The owner's HP pool follows any change in the max-HP bonus.

    Raises:
        DataIntegrityError: If the slot is empty.
    """
    target = EquipmentSlot(slot)
    item = actor.equipment.get(target)
    if item is None:
        raise DataIntegrityError(
            "Nothing equipped to enchant",
            entity_id=f"{actor.id}:{target}",
            log_message="The shrine's light finds nothing to bless.",
        )
    result = enchant_item(item, rng, faith=actor.skills.faith, tier=tier, source=source)
    equipment = dict(actor.equipment)
    equipment[target] = result.item
    actor.equipment = equipment
    delta = result.item.total_stats.max_hp_bonus - item.total_stats.max_hp_bonus
    apply_max_hp_delta(actor, delta, current_floor=1)
    return result


def godly_enchant(item: Item, rng: SeededRNG) -> Item:
    """Give a godly drop its tier-6 enchantment."""
    return enchant_item(item, rng, tier=GODLY_TIER, source="forge of the gods").item


__all__ = [
    "EnchantResult",
    "tier_name",
    "roll_tier",
    "suffix_table_for",
    "enchant_effect",
    "strip_suffix",
    "enchant_item",
    "enchant_equipped",
    "godly_enchant",
]
