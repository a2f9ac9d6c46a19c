"""Pydantic models for the run state and player actions.

Every model serializes to camelCase JSON so saves stay readable by
other clients of the same format.
"""

from __future__ import annotations

from long_hall.models.actions import Action, parse_action
from long_hall.models.actors import AbilityState, Actor, HitDice, Skills, Vital
from long_hall.models.base import GameModel
from long_hall.models.enums import (
    CombatTurn,
    CooldownType,
    DamageType,
    EffectTarget,
    EffectType,
    EnemyRank,
    EquipmentSlot,
    ItemType,
    Rarity,
    Role,
    RoomType,
    Skill,
    Status,
)
from long_hall.models.items import Enchantment, Item, ItemStats, MasteryStats
from long_hall.models.rooms import Enemy, RecruitOption, Room
from long_hall.models.state import Inventory, Party, RunState


__all__ = [
    "GameModel",
    # Enums
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
    # Items
    "ItemStats",
    "Enchantment",
    "MasteryStats",
    "Item",
    # Actors
    "Vital",
    "HitDice",
    "Skills",
    "AbilityState",
    "Actor",
    # Rooms
    "Enemy",
    "RecruitOption",
    "Room",
    # State
    "Party",
    "Inventory",
    "RunState",
    # Actions
    "Action",
    "parse_action",
]
