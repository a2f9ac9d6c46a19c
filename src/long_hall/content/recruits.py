"""Hireable recruits offered at intermissions."""

from __future__ import annotations

from long_hall.content.types import RecruitTemplate
from long_hall.models.enums import Role


RECRUITS: tuple[RecruitTemplate, ...] = (
    RecruitTemplate("recruit_fighter", "Sir Roland", Role.FIGHTER, 30, "A veteran knight seeking glory."),
    RecruitTemplate("recruit_wizard", "Elara the Wise", Role.WIZARD, 40, "A scholar of the arcane arts."),
    RecruitTemplate("recruit_rogue", "Shadow", Role.ROGUE, 25, "A thief with quick reflexes."),
    RecruitTemplate("recruit_cleric", "Brother Marcus", Role.CLERIC, 35, "A holy man with healing touch."),
    RecruitTemplate("recruit_fighter2", "Greta the Strong", Role.FIGHTER, 30, "A barbarian from the north."),
    RecruitTemplate("recruit_wizard2", "Merlin Jr.", Role.WIZARD, 45, "A prodigy of magical talent."),
)

RECRUIT_COST_PER_SEGMENT = 15
"""Extra hiring cost for every segment past the first."""


__all__ = ["RECRUITS", "RECRUIT_COST_PER_SEGMENT"]
