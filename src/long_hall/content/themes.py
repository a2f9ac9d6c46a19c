"""Dungeon themes and run mutations."""

from __future__ import annotations

from long_hall.content.types import ThemeDef


DEFAULT_THEME_ID = "dungeon_start"

THEMES: dict[str, ThemeDef] = {
    "dungeon_start": ThemeDef(
        id="dungeon_start",
        name="Ancient Sewers",
        description="A damp, moss-covered sewer system beneath the city.",
        enemy_tags=("vermin", "slime"),
        trap_tags=("tripwire", "spikes"),
        boss_pool=("sewer_king",),
        ambiance=(
            "The smell of rot is overpowering.",
            "Scurrying sounds echo in the darkness.",
            "Slime drips from the ceiling.",
        ),
    ),
    "crypt": ThemeDef(
        id="crypt",
        name="Forgotten Crypt",
        description="Rows of silent tombs line the walls.",
        enemy_tags=("undead", "skeleton"),
        trap_tags=("darts", "curse"),
        boss_pool=("lich_acolyte",),
        ambiance=(
            "A cold draft chills your bones.",
            "Dust motes dance in the torchlight.",
            "You feel watched by the statues.",
        ),
    ),
}

RUN_MUTATIONS: tuple[str, ...] = ("Darkness", "Fog", "Brittle Weapons", "Frenzied Enemies")
"""Modifiers a long rest may add to the run."""


__all__ = ["DEFAULT_THEME_ID", "THEMES", "RUN_MUTATIONS"]
