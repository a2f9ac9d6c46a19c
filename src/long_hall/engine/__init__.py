"""Simulation engine: randomness, generation, combat and the state machine.

The public surface is small:

    create_initial_run_state(seed) -> RunState
    apply_action(state, action) -> RunState
    calculate_score(state) -> int

Everything else is exposed for tests and tooling.
"""

from __future__ import annotations

from long_hall.engine.autopilot import play_autopilot
from long_hall.engine.context import TurnContext, action_context
from long_hall.engine.dice import DiceRoller, roll
from long_hall.engine.difficulty import calculate_escape_dc, get_difficulty
from long_hall.engine.generator import generate_room
from long_hall.engine.hashing import combine_hashes, hash_string, hash_with_seed
from long_hall.engine.lifecycle import create_actor, create_initial_run_state
from long_hall.engine.reducer import apply_action
from long_hall.engine.rng import SeededRNG
from long_hall.engine.scoring import calculate_score


__all__ = [
    "SeededRNG",
    "DiceRoller",
    "roll",
    "hash_string",
    "combine_hashes",
    "hash_with_seed",
    "TurnContext",
    "action_context",
    "get_difficulty",
    "calculate_escape_dc",
    "generate_room",
    "create_actor",
    "create_initial_run_state",
    "apply_action",
    "calculate_score",
    "play_autopilot",
]
