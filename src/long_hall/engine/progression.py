"""Experience, levels and stat points."""

from __future__ import annotations

from collections.abc import Sequence

from long_hall.core.constants import XP_THRESHOLDS
from long_hall.core.exceptions import InvalidTransitionError
from long_hall.core.logging import get_logger
from long_hall.engine.dice import DiceRoller
from long_hall.models.actors import Actor
from long_hall.models.enums import Skill


logger = get_logger(__name__)

MAX_LEVEL = len(XP_THRESHOLDS) - 1


def xp_for_next_level(actor: Actor) -> int | None:
    """XP total needed for the next level, or None at the cap."""
    if actor.level >= MAX_LEVEL:
        return None
    return XP_THRESHOLDS[actor.level]


def level_up(actor: Actor, dice: DiceRoller) -> str:
    """Raise an actor one level.

    The actor gains a stat point and ``max(1, 1d8 + level // 2)`` HP,
    added to both max and current. Even levels add a hit die.
    """
    actor.level += 1
    actor.stat_points += 1
    rolled = dice.total("1d8")
    gain = max(1, rolled + actor.level // 2)
    actor.hp = actor.hp.model_copy(
        update={"max": actor.hp.max + gain, "current": actor.hp.current + gain}
    )
    if actor.level % 2 == 0:
        actor.hit_dice = actor.hit_dice.model_copy(
            update={"max": actor.hit_dice.max + 1, "current": actor.hit_dice.current + 1}
        )
    logger.info("Level up", actor_id=actor.id, level=actor.level, hp_gain=gain)
    return f"{actor.name} leveled up to {actor.level}! +{gain} HP (rolled {rolled}), +1 Stat Point!"


def grant_xp(actor: Actor, amount: int, dice: DiceRoller) -> list[str]:
    """Add XP and apply every level the new total reaches."""
    actor.xp += amount
    messages = []
    while actor.level < MAX_LEVEL and actor.xp >= XP_THRESHOLDS[actor.level]:
        messages.append(level_up(actor, dice))
    return messages


def award_xp(members: Sequence[Actor], amount: int, dice: DiceRoller) -> list[str]:
    """Split ``amount`` evenly (rounded down) across living members."""
    living = [m for m in members if m.is_alive]
    if not living:
        return []
    share = amount // len(living)
    messages = []
    for member in living:
        messages.extend(grant_xp(member, share, dice))
    return messages


def spend_stat_point(actor: Actor, skill: Skill | str) -> None:
    """Move one unspent point into a skill.

    Raises:
        InvalidTransitionError: If the actor has no points to spend.
    """
    if actor.stat_points <= 0:
        raise InvalidTransitionError("No stat points to spend", action_type="SPEND_STAT_POINT")
    field = Skill(skill).value
    actor.skills = actor.skills.model_copy(update={field: actor.skills.get(field) + 1})
    actor.stat_points -= 1


__all__ = [
    "MAX_LEVEL",
    "xp_for_next_level",
    "level_up",
    "grant_xp",
    "award_xp",
    "spend_stat_point",
]
