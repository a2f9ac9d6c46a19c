"""Immutable definitions for static content tables."""

from __future__ import annotations

from dataclasses import dataclass, field

from long_hall.models.enums import (
    CooldownType,
    EffectTarget,
    EffectType,
    Rarity,
    Role,
    Skill,
)


@dataclass(frozen=True)
class EnemyTemplate:
    """Catalogue entry for an enemy before depth scaling."""

    id: str
    name: str
    tags: tuple[str, ...]
    power: int
    hp: int
    damage: str

    def has_any_tag(self, tags: tuple[str, ...] | list[str]) -> bool:
        return any(tag in self.tags for tag in tags)


@dataclass(frozen=True)
class RecruitTemplate:
    """A hireable character before segment scaling."""

    id: str
    name: str
    role: Role
    cost: int
    description: str


@dataclass(frozen=True)
class ThemeDef:
    """A dungeon theme steering enemy selection and flavour text."""

    id: str
    name: str
    description: str
    enemy_tags: tuple[str, ...]
    trap_tags: tuple[str, ...]
    boss_pool: tuple[str, ...]
    ambiance: tuple[str, ...]


@dataclass(frozen=True)
class DropTable:
    """Chance to drop plus the template ids that can drop."""

    chance: float
    pool: tuple[str, ...]


@dataclass(frozen=True)
class AbilityEffect:
    """What an ability does when used.

    Attributes:
        type: Effect kind.
        target: Who it lands on.
        dice: Dice rolled for damage or healing (extra dice for weapon attacks).
        modifier: Flat bonus on the roll, or AC for the shield buff.
        status: Status tag granted by buffs and some specials.
        attack_bonus: Extra accuracy on weapon-based abilities.
        damage_bonus: Extra damage on weapon-based abilities.
        skill: Skill governing accuracy and power; None for weapon-based.
        auto_hit: Skip the attack roll.
        tag_filter: Only enemies carrying this tag are affected.
        duration: Rounds a debuff lasts.
    """

    type: EffectType
    target: EffectTarget
    dice: str | None = None
    modifier: int = 0
    status: str | None = None
    attack_bonus: int = 0
    damage_bonus: int = 0
    skill: Skill | None = None
    auto_hit: bool = False
    tag_filter: str | None = None
    duration: int = 0


@dataclass(frozen=True)
class AbilityDef:
    """Static definition of a role ability."""

    id: str
    name: str
    role: Role
    description: str
    cooldown_type: CooldownType
    cooldown_value: int
    effect: AbilityEffect
    requires_status: str | None = None
    free_action: bool = False


@dataclass(frozen=True)
class RarityWeight:
    rarity: Rarity
    weight: int


@dataclass(frozen=True)
class SuffixTable:
    """Enchantment suffixes for one slot category, indexed by tier - 1."""

    category: str
    tiers: tuple[tuple[str, ...], ...] = field(default_factory=tuple)

    def names_for(self, tier: int) -> tuple[str, ...]:
        index = min(max(tier, 1), len(self.tiers)) - 1
        return self.tiers[index]


__all__ = [
    "EnemyTemplate",
    "RecruitTemplate",
    "ThemeDef",
    "DropTable",
    "AbilityEffect",
    "AbilityDef",
    "RarityWeight",
    "SuffixTable",
]
