"""Per-transition randomness.

A transition never touches an ambient random source. Each accepted
action draws from a generator derived from the run seed and the number
of actions already accepted, so replaying the same actions from the same
seed reproduces every roll.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from long_hall.engine.dice import DiceRoller, IntSource
from long_hall.engine.hashing import hash_with_seed
from long_hall.engine.rng import SeededRNG


if TYPE_CHECKING:
    from long_hall.models.state import RunState


@dataclass
class TurnContext:
    """Generator and dice used while resolving one action.

    Attributes:
        rng: Source for selections, chances and tables.
        dice: Dice roller; shares ``rng`` unless a test injects its own source.
    """

    rng: SeededRNG
    dice: DiceRoller

    @classmethod
    def from_rng(cls, rng: SeededRNG, dice_source: IntSource | None = None) -> TurnContext:
        return cls(rng=rng, dice=DiceRoller(dice_source or rng))


def action_seed(state: RunState) -> int:
    """Seed for the action about to be applied to ``state``."""
    return hash_with_seed(f"{state.seed}:action", state.action_counter)


def action_context(state: RunState) -> TurnContext:
    """Build the context for the next action on ``state``."""
    return TurnContext.from_rng(SeededRNG(action_seed(state)))


__all__ = ["TurnContext", "action_seed", "action_context"]
