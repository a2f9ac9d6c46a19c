"""Item models: flat stat bonuses, enchantments and mastery counters."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from long_hall.models.base import GameModel
from long_hall.models.enums import DamageType, ItemType, Rarity


EnchantTier = Annotated[int, Field(ge=1, le=6, description="Enchantment tier (1-6)")]


class ItemStats(GameModel):
    """Flat bonuses granted by an item or an enchantment."""

    attack_bonus: int = 0
    damage_bonus: int = 0
    ac_bonus: int = 0
    max_hp_bonus: int = 0

    def plus(self, other: ItemStats) -> ItemStats:
        """Field-wise sum of two stat blocks."""
        return ItemStats(
            attack_bonus=self.attack_bonus + other.attack_bonus,
            damage_bonus=self.damage_bonus + other.damage_bonus,
            ac_bonus=self.ac_bonus + other.ac_bonus,
            max_hp_bonus=self.max_hp_bonus + other.max_hp_bonus,
        )

    @property
    def is_empty(self) -> bool:
        return not (self.attack_bonus or self.damage_bonus or self.ac_bonus or self.max_hp_bonus)


class Enchantment(GameModel):
    """A magical bonus layered on top of an item's base stats."""

    tier: EnchantTier
    name: str
    description: str = ""
    effect: ItemStats = Field(default_factory=ItemStats)


class MasteryStats(GameModel):
    """Lifetime combat counters, accumulated only while equipped."""

    kills: int = Field(default=0, ge=0)
    damage_dealt: int = Field(default=0, ge=0)
    highest_hit: int = Field(default=0, ge=0)
    critical_hits: int = Field(default=0, ge=0)
    encounters_used: int = Field(default=0, ge=0)


class Item(GameModel):
    """A piece of equipment.

    Attributes:
        id: Instance id; templates share their catalogue id until minted.
        name: Mechanical name, carrying any enchantment suffix.
        custom_name: Player-assigned display name.
        type: Category deciding which slot the item fits.
        rarity: Rarity band.
        cost: Purchase price in gold.
        base_stats: Flat bonuses before enchantment.
        damage_type: Explicit weapon damage type; inferred from the name when unset.
        enchantment: Optional enchantment.
        stats: Mastery counters.
        history: Milestone log, newest last.
    """

    id: str
    name: str
    custom_name: str | None = None
    type: ItemType
    rarity: Rarity = Rarity.COMMON
    cost: int = Field(default=0, ge=0)
    base_stats: ItemStats = Field(default_factory=ItemStats)
    damage_type: DamageType | None = None
    enchantment: Enchantment | None = None
    stats: MasteryStats = Field(default_factory=MasteryStats)
    history: list[str] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.custom_name or self.name

    @property
    def total_stats(self) -> ItemStats:
        """Base stats plus enchantment effect."""
        if self.enchantment is None:
            return self.base_stats
        return self.base_stats.plus(self.enchantment.effect)

    @property
    def enchant_tier(self) -> int:
        return self.enchantment.tier if self.enchantment else 0


__all__ = [
    "EnchantTier",
    "ItemStats",
    "Enchantment",
    "MasteryStats",
    "Item",
]
