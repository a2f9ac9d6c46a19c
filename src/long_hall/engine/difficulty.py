"""Depth-based difficulty scaling.

Depth is split into segments of ten rooms. Each segment raises enemy
power, armor and headcount; within a segment a small ramp makes later
rooms slightly harder than earlier ones.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from long_hall.core.constants import BASE_ENEMY_AC, SEGMENT_LENGTH
from long_hall.models.enums import RoomType


# =============================================================================
# Difficulty
# =============================================================================

_POWER_BANDS: dict[int, tuple[int, int]] = {
    1: (1, 2),
    2: (2, 4),
    3: (3, 6),
    4: (5, 8),
    5: (7, 10),
}
_LATE_BAND = (9, 13)


@dataclass(frozen=True)
class Difficulty:
    """Scaling figures for one depth.

    Attributes:
        segment: 1-based segment index.
        room_in_segment: 1-10; the intermission is room 10.
        multiplier: HP/power/XP multiplier.
        min_power: Weakest enemy power allowed.
        max_power: Strongest enemy power allowed.
        ac_bonus: Added to enemy AC.
        enemy_count_bonus: Extra enemies a combat room may receive.
    """

    segment: int
    room_in_segment: int
    multiplier: float
    min_power: int
    max_power: int
    ac_bonus: int
    enemy_count_bonus: int

    @property
    def enemy_ac(self) -> int:
        return BASE_ENEMY_AC + self.ac_bonus


def get_segment(depth: int) -> int:
    return (depth - 1) // SEGMENT_LENGTH + 1


def get_room_in_segment(depth: int) -> int:
    return SEGMENT_LENGTH if depth % SEGMENT_LENGTH == 0 else depth % SEGMENT_LENGTH


def get_difficulty(depth: int) -> Difficulty:
    """Compute the scaling figures for ``depth``.

    Example:
        >>> get_difficulty(1).multiplier
        1.0
        >>> get_difficulty(11).min_power, get_difficulty(11).max_power
        (2, 4)
    """
    segment = get_segment(depth)
    room = get_room_in_segment(depth)
    multiplier = (1 + (segment - 1) * 0.3) * (1 + (room - 1) * 0.025)
    min_power, max_power = _POWER_BANDS.get(segment, _LATE_BAND)
    return Difficulty(
        segment=segment,
        room_in_segment=room,
        multiplier=multiplier,
        min_power=min_power,
        max_power=max_power,
        ac_bonus=math.floor((segment - 1) * 1.5),
        enemy_count_bonus=(segment - 1) // 2,
    )


def get_room_weights(room_in_segment: int) -> list[tuple[RoomType, int]]:
    """Weighted room-type table for a non-scheduled room.

    Room 1 of each segment is always a fight. Elite rooms join the table
    past the middle of the segment and grow likelier toward its end.
    """
    if room_in_segment == 1:
        return [(RoomType.COMBAT, 10)]
    weights = [
        (RoomType.COMBAT, 50),
        (RoomType.HAZARD, 20),
        (RoomType.SHRINE, 10),
        (RoomType.TRADER, 10),
    ]
    if room_in_segment > 5:
        weights.append((RoomType.ELITE, 10 + room_in_segment * 2))
    return weights


# =============================================================================
# Escape
# =============================================================================


def _escape_terms(
    depth: int,
    enemy_count: int,
    is_elite: bool,
    party_agility: int,
    has_rogue: bool,
) -> list[tuple[str, int]]:
    segment = get_segment(depth)
    terms = [("Base", 10)]
    if segment > 1:
        terms.append((f"Segment {segment}", (segment - 1) * 2))
    if enemy_count > 1:
        terms.append((f"Enemies ({enemy_count})", enemy_count - 1))
    if is_elite:
        terms.append(("Elite", 3))
    if party_agility > 0:
        terms.append(("Agility", -party_agility))
    if has_rogue:
        terms.append(("Rogue", -2))
    return terms


def calculate_escape_dc(
    depth: int,
    enemy_count: int,
    is_elite: bool,
    party_agility: int,
    has_rogue: bool,
) -> int:
    """DC the party must meet on a d20 to flee; never below 5."""
    terms = _escape_terms(depth, enemy_count, is_elite, party_agility, has_rogue)
    return max(5, sum(value for _, value in terms))


def escape_dc_breakdown(
    depth: int,
    enemy_count: int,
    is_elite: bool,
    party_agility: int,
    has_rogue: bool,
) -> str:
    """Human-readable list of the terms behind :func:`calculate_escape_dc`."""
    terms = _escape_terms(depth, enemy_count, is_elite, party_agility, has_rogue)
    parts = [f"{terms[0][0]}: {terms[0][1]}"]
    parts.extend(f"{label}: {value:+d}" for label, value in terms[1:])
    return ", ".join(parts)


__all__ = [
    "Difficulty",
    "get_segment",
    "get_room_in_segment",
    "get_difficulty",
    "get_room_weights",
    "calculate_escape_dc",
    "escape_dc_breakdown",
]
