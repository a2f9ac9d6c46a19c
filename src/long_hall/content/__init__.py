"""Static game content: catalogues and tables that never change at runtime."""

from long_hall.content.abilities import ABILITIES, get_abilities_for_role, get_ability
from long_hall.content.classes import HIT_DIE, INITIAL_HP, STARTING_SKILLS, get_hit_die
from long_hall.content.enemies import ENEMIES, get_enemy
from long_hall.content.items import DROP_TABLES, ITEMS, get_item_template
from long_hall.content.recruits import RECRUITS
from long_hall.content.themes import RUN_MUTATIONS, THEMES


__all__ = [
    "ABILITIES",
    "get_abilities_for_role",
    "get_ability",
    "HIT_DIE",
    "INITIAL_HP",
    "STARTING_SKILLS",
    "get_hit_die",
    "ENEMIES",
    "get_enemy",
    "DROP_TABLES",
    "ITEMS",
    "get_item_template",
    "RECRUITS",
    "RUN_MUTATIONS",
    "THEMES",
]
