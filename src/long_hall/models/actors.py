"""Party member models."""

from __future__ import annotations

from pydantic import Field, model_validator

from long_hall.models.base import GameModel
from long_hall.models.enums import EquipmentSlot, Role, Skill, Status
from long_hall.models.items import Item


class Vital(GameModel):
    """A current/max pair such as HP or stress."""

    current: int = Field(ge=0)
    max: int = Field(ge=0)

    @property
    def missing(self) -> int:
        return max(0, self.max - self.current)

    @property
    def is_full(self) -> bool:
        return self.current >= self.max


class HitDice(GameModel):
    """Healing dice spent on short rests."""

    current: int = Field(ge=0)
    max: int = Field(ge=0)
    die: int = Field(default=8, ge=1)


class Skills(GameModel):
    """Actor skill ratings; all non-negative."""

    strength: int = Field(default=0, ge=0)
    attack: int = Field(default=0, ge=0)
    defense: int = Field(default=0, ge=0)
    magic: int = Field(default=0, ge=0)
    ranged: int = Field(default=0, ge=0)
    faith: int = Field(default=0, ge=0)
    agility: int = Field(default=0, ge=0)

    def get(self, skill: Skill | str) -> int:
        return getattr(self, Skill(skill).value)


class AbilityState(GameModel):
    """Cooldown tracking for one ability on one actor."""

    ability_id: str
    current_cooldown: int = Field(default=0, ge=0)

    @property
    def ready(self) -> bool:
        return self.current_cooldown == 0


class Actor(GameModel):
    """A party member.

    Attributes:
        id: Stable actor id.
        name: Display name.
        role: Class.
        level: Current level.
        xp: Lifetime experience.
        stat_points: Unspent skill points.
        skills: Skill ratings.
        hp: Hit points.
        stress: Stress meter.
        hit_dice: Short-rest healing dice.
        is_alive: False once HP reaches 0.
        equipment: Slot to item mapping, at most one item per slot.
        abilities: Ability cooldown states.
        statuses: Transient status tags.
    """

    id: str
    name: str
    role: Role
    level: int = Field(default=1, ge=1)
    xp: int = Field(default=0, ge=0)
    stat_points: int = Field(default=0, ge=0)
    skills: Skills = Field(default_factory=Skills)
    hp: Vital
    stress: Vital = Field(default_factory=lambda: Vital(current=0, max=20))
    hit_dice: HitDice
    is_alive: bool = True
    equipment: dict[EquipmentSlot, Item] = Field(default_factory=dict)
    abilities: list[AbilityState] = Field(default_factory=list)
    statuses: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def sync_alive_flag(self) -> Actor:
        """A member at 0 HP is never alive."""
        if self.hp.current <= 0 and self.is_alive:
            object.__setattr__(self, "is_alive", False)
        return self

    def has_status(self, status: Status | str) -> bool:
        return str(status) in self.statuses

    def add_status(self, status: Status | str) -> None:
        if str(status) not in self.statuses:
            self.statuses = [*self.statuses, str(status)]

    def remove_status(self, status: Status | str) -> bool:
        """Drop a status tag; returns whether it was present."""
        if str(status) not in self.statuses:
            return False
        self.statuses = [s for s in self.statuses if s != str(status)]
        return True

    def ability(self, ability_id: str) -> AbilityState | None:
        return next((a for a in self.abilities if a.ability_id == ability_id), None)

    def equipped(self, slot: EquipmentSlot | str) -> Item | None:
        return self.equipment.get(EquipmentSlot(slot))


__all__ = [
    "Vital",
    "HitDice",
    "Skills",
    "AbilityState",
    "Actor",
]
