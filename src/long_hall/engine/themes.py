"""Theme selection."""

from __future__ import annotations

from long_hall.content.themes import DEFAULT_THEME_ID, THEMES
from long_hall.content.types import ThemeDef
from long_hall.engine.rng import SeededRNG


def generate_theme(rng: SeededRNG) -> str:
    """Pick a theme id uniformly from the catalogue."""
    theme_ids = list(THEMES)
    return theme_ids[rng.randint(0, len(theme_ids) - 1)]


def get_theme_def(theme_id: str) -> ThemeDef:
    """Look up a theme, falling back to the starting sewers."""
    return THEMES.get(theme_id, THEMES[DEFAULT_THEME_ID])


__all__ = ["generate_theme", "get_theme_def"]
