"""Loot: item instancing, drop tables, shop stock and room treasure."""

from __future__ import annotations

from long_hall.content.items import (
    DROP_TABLES,
    ITEMS,
    STARTER_WEAPONS,
    STARTING_WEAPON_WEIGHTS,
    get_item_template,
    items_of_rarity,
)
from long_hall.core.constants import SHOP_SIZE
from long_hall.core.exceptions import DataIntegrityError
from long_hall.core.logging import get_logger
from long_hall.engine.enchanting import godly_enchant
from long_hall.engine.rng import SeededRNG
from long_hall.models.enums import EnemyRank, Rarity, Role
from long_hall.models.items import Item
from long_hall.models.rooms import Enemy


logger = get_logger(__name__)

# Sources strong enough to roll the separate godly table.
_GODLY_SOURCES = frozenset({"high", "elite", "boss"})


# =============================================================================
# Instancing
# =============================================================================


def instance_item(template: Item, instance_id: str) -> Item:
    """Copy a catalogue template under a new instance id."""
    return template.model_copy(deep=True, update={"id": instance_id})


def mint_item(template: Item, rng: SeededRNG) -> Item:
    """Copy a template under a fresh id derived from ``rng``."""
    return instance_item(template, f"{template.id}-{rng.next():x}")


def require_template(item_id: str) -> Item:
    template = get_item_template(item_id)
    if template is None:
        raise DataIntegrityError("Unknown item template", entity_id=item_id)
    return template


# =============================================================================
# Drops
# =============================================================================


def drop_tier(enemy: Enemy) -> str:
    """Drop table key for an enemy: by rank, then by power."""
    if enemy.rank == EnemyRank.BOSS:
        return "boss"
    if enemy.rank == EnemyRank.ELITE:
        return "elite"
    if enemy.power <= 2:
        return "low"
    if enemy.power <= 4:
        return "mid"
    return "high"


def roll_drop(enemy: Enemy, rng: SeededRNG) -> Item | None:
    """Roll the item an enemy leaves behind, if any.

    High-tier sources first get a separate small chance at the godly
    pool; a godly drop arrives with a tier-6 enchantment.
    """
    tier = drop_tier(enemy)
    if tier in _GODLY_SOURCES:
        godly = DROP_TABLES["godly"]
        if rng.random() < godly.chance:
            item = godly_enchant(mint_item(require_template(rng.pick(godly.pool)), rng), rng)
            logger.info("Godly drop", enemy=enemy.name, item_id=item.id)
            return item

    table = DROP_TABLES[tier]
    if rng.random() > table.chance:
        return None
    return mint_item(require_template(rng.pick(table.pool)), rng)


def roll_kill_gold(enemy: Enemy, rng: SeededRNG) -> int:
    """Gold for a kill: ``power*3 + [0, power*2)``."""
    spread = enemy.power * 2
    return enemy.power * 3 + (rng.randint(0, spread - 1) if spread > 0 else 0)


# =============================================================================
# Room Treasure
# =============================================================================


def shop_stock(rng: SeededRNG, count: int = SHOP_SIZE) -> list[Item]:
    """A trader's wares: a seeded sample of the whole catalogue."""
    return [item.model_copy(deep=True) for item in rng.shuffled(ITEMS)[:count]]


def hazard_loot(rng: SeededRNG, room_id: str, *, guarded: bool) -> list[Item]:
    """Treasure guarded by a trap; guarded traps hold more and better items."""
    if guarded:
        pool = items_of_rarity(Rarity.UNCOMMON, Rarity.RARE, Rarity.EPIC)
    else:
        pool = items_of_rarity(Rarity.COMMON, Rarity.UNCOMMON)
    shuffled = rng.shuffled(pool)
    count = rng.randint(2, 3) if guarded else 1
    return [instance_item(t, f"{t.id}-{room_id}-{i}") for i, t in enumerate(shuffled[:count])]


def boss_loot(rng: SeededRNG, room_id: str) -> list[Item]:
    """Three to five rare-or-better items."""
    pool = items_of_rarity(Rarity.RARE, Rarity.EPIC, Rarity.LEGENDARY, Rarity.GODLY)
    shuffled = rng.shuffled(pool)
    count = rng.randint(3, 5)
    return [instance_item(t, f"{t.id}-{room_id}-{i}") for i, t in enumerate(shuffled[:count])]


# =============================================================================
# Starting Weapons
# =============================================================================


def roll_starting_weapon_rarity(rng: SeededRNG) -> Rarity:
    """Weighted rarity for a starting weapon; godly never appears."""
    total = sum(entry.weight for entry in STARTING_WEAPON_WEIGHTS)
    roll = rng.random() * total
    for entry in STARTING_WEAPON_WEIGHTS:
        roll -= entry.weight
        if roll <= 0:
            return entry.rarity
    return Rarity.COMMON


def starting_weapon(role: Role | str, rarity: Rarity | str) -> Item | None:
    """Template of a role's weapon family at the given rarity."""
    return get_item_template(f"{STARTER_WEAPONS[Role(role)]}_{rarity}")


__all__ = [
    "instance_item",
    "mint_item",
    "require_template",
    "drop_tier",
    "roll_drop",
    "roll_kill_gold",
    "shop_stock",
    "hazard_loot",
    "boss_loot",
    "roll_starting_weapon_rarity",
    "starting_weapon",
]
