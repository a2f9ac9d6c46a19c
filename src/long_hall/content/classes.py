"""Per-role starting numbers."""

from __future__ import annotations

from long_hall.models.actors import Skills
from long_hall.models.enums import Role


STARTING_SKILLS: dict[Role, Skills] = {
    Role.FIGHTER: Skills(strength=2, attack=2, defense=1, agility=1),
    Role.WIZARD: Skills(magic=3),
    Role.ROGUE: Skills(attack=1, ranged=2, agility=3),
    Role.CLERIC: Skills(strength=1, defense=1, faith=3),
    Role.RANGER: Skills(attack=1, ranged=3, faith=1, agility=2),
}

HIT_DIE: dict[Role, int] = {
    Role.FIGHTER: 10,
    Role.RANGER: 10,
    Role.CLERIC: 8,
    Role.ROGUE: 8,
    Role.WIZARD: 6,
}

INITIAL_HP: dict[Role, int] = {
    Role.FIGHTER: 12,
    Role.WIZARD: 6,
    Role.ROGUE: 8,
    Role.CLERIC: 10,
    Role.RANGER: 10,
}


def get_hit_die(role: Role | str) -> int:
    return HIT_DIE[Role(role)]


def starting_skills(role: Role | str) -> Skills:
    """A fresh copy of the role's starting skills."""
    return STARTING_SKILLS[Role(role)].model_copy()


__all__ = ["STARTING_SKILLS", "HIT_DIE", "INITIAL_HP", "get_hit_die", "starting_skills"]
