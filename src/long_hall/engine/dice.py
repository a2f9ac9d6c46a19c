"""Dice rolling mechanics.

Supports ``<count>d<sides>[+/-modifier][adv|dis]`` notation. The roller
never touches an ambient random source: every roll draws from an
injected integer source (anything with ``randint(low, high)``), which is
normally a :class:`~long_hall.engine.rng.SeededRNG` and, in tests, a
scripted stand-in.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from long_hall.core.exceptions import InvalidExpressionError
from long_hall.core.logging import get_logger


logger = get_logger(__name__)

_DICE_PATTERN = re.compile(r"^(\d+)d(\d+)([+-]\d+)?$", re.ASCII)

MIN_DICE, MAX_DICE = 1, 100
MIN_SIDES, MAX_SIDES = 1, 1000


class IntSource(Protocol):
    """Anything that can produce an integer in an inclusive range."""

    def randint(self, low: int, high: int) -> int: ...


class RollType(StrEnum):
    """Types of dice rolls."""

    NORMAL = "normal"
    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"


@dataclass(frozen=True)
class DiceExpression:
    """A parsed dice expression.

    Attributes:
        count: Number of dice.
        sides: Faces per die.
        modifier: Flat modifier added after keeping.
        roll_type: Normal, advantage or disadvantage.
    """

    count: int
    sides: int
    modifier: int = 0
    roll_type: RollType = RollType.NORMAL

    @property
    def notation(self) -> str:
        """Canonical text form, e.g. ``2d6+3``."""
        text = f"{self.count}d{self.sides}"
        if self.modifier:
            text += f"{self.modifier:+d}"
        if self.roll_type == RollType.ADVANTAGE:
            text += "adv"
        elif self.roll_type == RollType.DISADVANTAGE:
            text += "dis"
        return text


@dataclass(frozen=True)
class RollResult:
    """Outcome of a single roll.

    Attributes:
        expression: The expression that was rolled.
        total: Sum of kept dice plus modifier.
        rolls: Every die rolled, in order.
        modifier: Flat modifier that was applied.
        kept_rolls: Dice kept under advantage/disadvantage, else None.
        sides: Faces of the primary die.
    """

    expression: str
    total: int
    rolls: tuple[int, ...]
    modifier: int
    kept_rolls: tuple[int, ...] | None = None
    sides: int = 20

    @property
    def natural(self) -> int:
        """The first kept die, before modifiers."""
        if self.kept_rolls:
            return self.kept_rolls[0]
        return self.rolls[0]

    @property
    def is_critical(self) -> bool:
        """A natural 20 on a d20."""
        return self.sides == 20 and self.natural == 20


@dataclass(frozen=True)
class AttackRoll:
    """A d20 attack check against an armor class."""

    natural: int
    bonus: int
    target_ac: int

    @property
    def total(self) -> int:
        return self.natural + self.bonus

    @property
    def hit(self) -> bool:
        return self.total >= self.target_ac

    @property
    def is_critical(self) -> bool:
        return self.natural == 20


def parse_dice_expression(expression: str) -> DiceExpression:
    """Parse dice notation.

    Args:
        expression: Text such as ``"1d20+5"`` or ``"1d20adv"``.

    Returns:
        The parsed expression.

    Raises:
        InvalidExpressionError: If the text is not valid notation or the
            dice count or sides are out of range.
    """
    text = expression.lower().strip()
    roll_type = RollType.NORMAL
    if text.endswith("adv"):
        roll_type = RollType.ADVANTAGE
        text = text[:-3]
    elif text.endswith("dis"):
        roll_type = RollType.DISADVANTAGE
        text = text[:-3]

    match = _DICE_PATTERN.match(text)
    if match is None:
        raise InvalidExpressionError(
            f"Invalid dice expression: {expression}", expression=expression
        )

    count = int(match.group(1))
    sides = int(match.group(2))
    modifier = int(match.group(3)) if match.group(3) else 0

    if not MIN_DICE <= count <= MAX_DICE:
        raise InvalidExpressionError(
            f"Dice count must be between {MIN_DICE} and {MAX_DICE}: {count}",
            expression=expression,
        )
    if not MIN_SIDES <= sides <= MAX_SIDES:
        raise InvalidExpressionError(
            f"Dice sides must be between {MIN_SIDES} and {MAX_SIDES}: {sides}",
            expression=expression,
        )

    return DiceExpression(count=count, sides=sides, modifier=modifier, roll_type=roll_type)


def roll_expression(parsed: DiceExpression, source: IntSource) -> RollResult:
    """Roll an already parsed expression."""
    kept: tuple[int, ...] | None = None
    if parsed.roll_type != RollType.NORMAL:
        first = source.randint(1, parsed.sides)
        second = source.randint(1, parsed.sides)
        rolls: tuple[int, ...] = (first, second)
        if parsed.roll_type == RollType.ADVANTAGE:
            kept = (max(first, second),)
        else:
            kept = (min(first, second),)
    else:
        rolls = tuple(source.randint(1, parsed.sides) for _ in range(parsed.count))

    total = sum(kept if kept is not None else rolls) + parsed.modifier
    return RollResult(
        expression=parsed.notation,
        total=total,
        rolls=rolls,
        modifier=parsed.modifier,
        kept_rolls=kept,
        sides=parsed.sides,
    )


def roll(expression: str, source: IntSource) -> RollResult:
    """Parse and roll a dice expression.

    Raises:
        InvalidExpressionError: If the expression is invalid.

    Example:
        >>> from long_hall.engine.rng import SeededRNG
        >>> 2 <= roll("2d6", SeededRNG(7)).total <= 12
        True
    """
    return roll_expression(parse_dice_expression(expression), source)


def roll_with_modifier(expression: str, modifier: int, source: IntSource) -> RollResult:
    """Roll the dice of ``expression`` with ``modifier`` replacing its own."""
    parsed = parse_dice_expression(expression)
    return roll_expression(
        DiceExpression(
            count=parsed.count,
            sides=parsed.sides,
            modifier=modifier,
            roll_type=parsed.roll_type,
        ),
        source,
    )


def roll_advantage(source: IntSource) -> RollResult:
    """Roll 2d20 and keep the highest."""
    return roll("1d20adv", source)


def roll_disadvantage(source: IntSource) -> RollResult:
    """Roll 2d20 and keep the lowest."""
    return roll("1d20dis", source)


class DiceRoller:
    """Convenience wrapper binding the dice helpers to one integer source.

    Example:
        >>> from long_hall.engine.rng import SeededRNG
        >>> roller = DiceRoller(SeededRNG(42))
        >>> 1 <= roller.d20() <= 20
        True
    """

    def __init__(self, source: IntSource) -> None:
        self._source = source

    @property
    def source(self) -> IntSource:
        return self._source

    def roll(self, expression: str) -> RollResult:
        """Roll a dice expression."""
        return roll(expression, self._source)

    def total(self, expression: str) -> int:
        """Roll and return only the total."""
        return self.roll(expression).total

    def d20(self) -> int:
        """Roll a single d20."""
        return self._source.randint(1, 20)

    def roll_attack(self, bonus: int, target_ac: int) -> AttackRoll:
        """Roll ``1d20 + bonus`` against an armor class."""
        result = AttackRoll(natural=self.d20(), bonus=bonus, target_ac=target_ac)
        logger.debug(
            "Attack rolled",
            natural=result.natural,
            bonus=bonus,
            target_ac=target_ac,
            hit=result.hit,
        )
        return result

    def roll_damage(self, expression: str, bonus: int = 0, *, minimum: int = 0) -> int:
        """Roll damage, add a flat bonus and clamp to ``minimum``."""
        return max(minimum, self.total(expression) + bonus)


__all__ = [
    "IntSource",
    "RollType",
    "DiceExpression",
    "RollResult",
    "AttackRoll",
    "parse_dice_expression",
    "roll_expression",
    "roll",
    "roll_with_modifier",
    "roll_advantage",
    "roll_disadvantage",
    "DiceRoller",
]
