"""The Long Hall - deterministic dungeon-crawl simulation core.

A run is a pure function of its seed and the actions applied to it:

    >>> from long_hall import apply_action, create_initial_run_state
    >>> from long_hall.models.actions import PrayAtShrine
    >>> state = create_initial_run_state("t1")
    >>> state = apply_action(state, PrayAtShrine())
    >>> state.room_resolved
    True

Modules:
    core: Configuration, logging, constants and exceptions.
    content: Static catalogues (enemies, items, abilities, themes).
    models: Pydantic schemas for the run state and actions.
    engine: RNG, generator, combat and the action state machine.
    storage: Local save slots.
"""

from __future__ import annotations

from long_hall.core.config import Settings, get_settings
from long_hall.core.exceptions import LongHallError
from long_hall.core.logging import configure_logging, get_logger
from long_hall.engine.lifecycle import create_initial_run_state
from long_hall.engine.reducer import apply_action
from long_hall.engine.scoring import calculate_score
from long_hall.models.actions import Action, parse_action
from long_hall.models.state import RunState
from long_hall.storage.saves import SaveStore


__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Core
    "LongHallError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Engine
    "create_initial_run_state",
    "apply_action",
    "calculate_score",
    # Models
    "Action",
    "parse_action",
    "RunState",
    # Storage
    "SaveStore",
]
