"""Enumerations shared by every model and engine module."""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Party member class."""

    FIGHTER = "fighter"
    WIZARD = "wizard"
    ROGUE = "rogue"
    CLERIC = "cleric"
    RANGER = "ranger"


class Skill(StrEnum):
    """Trainable actor skills."""

    STRENGTH = "strength"
    """Melee damage."""

    ATTACK = "attack"
    """Melee accuracy."""

    DEFENSE = "defense"
    """Armor class bonus."""

    MAGIC = "magic"
    """Spell accuracy and damage."""

    RANGED = "ranged"
    """Ranged accuracy and damage."""

    FAITH = "faith"
    """Healing and shrine luck."""

    AGILITY = "agility"
    """Initiative and escape."""


class RoomType(StrEnum):
    """Kinds of room the generator produces."""

    COMBAT = "combat"
    ELITE = "elite"
    HAZARD = "hazard"
    TRADER = "trader"
    SHRINE = "shrine"
    INTERMISSION = "intermission"
    BOSS = "boss"


class CombatTurn(StrEnum):
    """Whose turn it is inside a fight. ``None`` on the state means no fight."""

    PLAYER = "player"
    ENEMY = "enemy"


class EquipmentSlot(StrEnum):
    """Equipment slots on an actor."""

    HEAD = "head"
    NECK = "neck"
    CHEST = "chest"
    LEGS = "legs"
    FEET = "feet"
    MAIN_HAND = "main_hand"
    OFF_HAND = "off_hand"
    RING1 = "ring1"
    RING2 = "ring2"


class ItemType(StrEnum):
    """Item categories; each maps to one or more equipment slots."""

    WEAPON = "weapon"
    SHIELD = "shield"
    ARMOR = "armor"
    HEAD = "head"
    CHEST = "chest"
    LEGS = "legs"
    FEET = "feet"
    RING = "ring"
    NECK = "neck"


class Rarity(StrEnum):
    """Item rarity, lowest first."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"
    GODLY = "godly"


class DamageType(StrEnum):
    """How a weapon deals damage; selects the governing skills."""

    MELEE = "melee"
    RANGED = "ranged"
    MAGIC = "magic"


class EnemyRank(StrEnum):
    """Enemy tier, used to pick a drop table."""

    NORMAL = "normal"
    ELITE = "elite"
    BOSS = "boss"
    MINION = "minion"


class CooldownType(StrEnum):
    """How an ability recharges."""

    TURNS = "turns"
    COMBAT = "combat"
    REST = "rest"


class EffectType(StrEnum):
    """Closed set of ability effect kinds."""

    DAMAGE = "damage"
    ATTACK = "attack"
    HEAL = "heal"
    BUFF = "buff"
    DEBUFF = "debuff"
    SPECIAL = "special"


class EffectTarget(StrEnum):
    """Who an ability effect lands on."""

    SELF = "self"
    ALLY = "ally"
    ENEMY = "enemy"
    ALL_ENEMIES = "all_enemies"
    ALL_ALLIES = "all_allies"


class Status(StrEnum):
    """Transient actor status tags."""

    HIDDEN = "hidden"
    CHAMPION_STRIKE = "champion_strike"
    SHIELDED = "shielded"
    EVASIVE = "evasive"


__all__ = [
    "Role",
    "Skill",
    "RoomType",
    "CombatTurn",
    "EquipmentSlot",
    "ItemType",
    "Rarity",
    "DamageType",
    "EnemyRank",
    "CooldownType",
    "EffectType",
    "EffectTarget",
    "Status",
]
