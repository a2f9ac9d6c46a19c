"""Run score.

The same function scores a run for display and re-scores a submitted
save on a server, so it reads the state and nothing else.
"""

from __future__ import annotations

from long_hall.core.constants import SCORE_DEPTH_WEIGHT, SCORE_LEVEL_WEIGHT
from long_hall.models.state import RunState


ITEM_VALUE_DIVISOR = 10


def calculate_score(state: RunState) -> int:
    """Score a run.

    ``depth * 100 + gold``, plus each member's XP and 500 per level
    above 1, plus a tenth (rounded down) of the cost of every loose and
    equipped item.

    Example:
        >>> from long_hall.engine.lifecycle import create_initial_run_state
        >>> calculate_score(create_initial_run_state("t1"))
        0
    """
    score = state.depth * SCORE_DEPTH_WEIGHT + state.party.gold
    for member in state.party.members:
        score += member.xp + (member.level - 1) * SCORE_LEVEL_WEIGHT
        score += sum(item.cost // ITEM_VALUE_DIVISOR for item in member.equipment.values())
    score += sum(item.cost // ITEM_VALUE_DIVISOR for item in state.inventory.items)
    return score


__all__ = ["calculate_score"]
