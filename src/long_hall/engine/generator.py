"""Procedural room generator.

A room is a pure function of the run state's seed, depth and theme plus
the generator it is given. When no generator is supplied one is derived
from ``hash_with_seed(seed, depth)``, so any room can be rebuilt without
replaying the rooms before it.

Schedule:
    * depth % 10 == 0 (past 0): intermission with shop, recruits and an
      optional boss chamber.
    * depth 0 and every fifth room otherwise: shrine, possibly guarded.
    * everything else: weighted draw from :func:`get_room_weights`.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import TYPE_CHECKING

from long_hall.content.enemies import ENEMIES, enemies_in_band
from long_hall.content.recruits import RECRUIT_COST_PER_SEGMENT, RECRUITS
from long_hall.content.types import EnemyTemplate
from long_hall.core.constants import (
    BASE_BOSS_AC,
    MAX_ENEMIES_PER_ROOM,
    RECRUIT_OFFER_SIZE,
    SEGMENT_LENGTH,
    SHRINE_INTERVAL,
)
from long_hall.core.logging import get_logger
from long_hall.engine.difficulty import Difficulty, get_difficulty, get_room_weights
from long_hall.engine.hashing import hash_with_seed
from long_hall.engine.loot import boss_loot, hazard_loot, shop_stock
from long_hall.engine.rng import SeededRNG
from long_hall.engine.themes import get_theme_def
from long_hall.models.enums import EnemyRank, RoomType
from long_hall.models.rooms import Enemy, RecruitOption, Room


if TYPE_CHECKING:
    from long_hall.models.state import RunState

logger = get_logger(__name__)

ELITE_MULTIPLIER = 1.5
ELITE_AC_BONUS = 2
BOSS_HP_MULTIPLIER = 1.5
BOSS_POWER_MULTIPLIER = 1.25


def room_rng(seed: str, depth: int) -> SeededRNG:
    """Generator for the room at ``depth``."""
    return SeededRNG(hash_with_seed(seed, depth))


# =============================================================================
# Room Type
# =============================================================================


def _roll_weighted_type(rng: SeededRNG, room_in_segment: int) -> RoomType:
    weights = get_room_weights(room_in_segment)
    roll = rng.randint(1, sum(weight for _, weight in weights))
    for room_type, weight in weights:
        roll -= weight
        if roll <= 0:
            return room_type
    return RoomType.COMBAT


def choose_room_type(depth: int, rng: SeededRNG) -> tuple[RoomType, bool]:
    """Pick the room type for ``depth`` and whether it is guarded."""
    if depth > 0 and depth % SEGMENT_LENGTH == 0:
        return RoomType.INTERMISSION, False

    if depth == 0 or depth % SHRINE_INTERVAL == 0:
        guarded = depth > 0 and rng.random() < min(0.3 + depth * 0.01, 0.7)
        return RoomType.SHRINE, guarded

    room_type = _roll_weighted_type(rng, get_difficulty(depth).room_in_segment)
    guarded = False
    if room_type is RoomType.HAZARD:
        guarded = rng.random() < min(0.25 + depth * 0.005, 0.5)
    return room_type, guarded


# =============================================================================
# Enemies
# =============================================================================


def enemy_pool(difficulty: Difficulty, theme_tags: tuple[str, ...]) -> list[EnemyTemplate]:
    """Theme-and-band matches, else band matches, else the whole catalogue."""
    band = enemies_in_band(difficulty.min_power, difficulty.max_power)
    themed = [e for e in band if e.has_any_tag(theme_tags)]
    return themed or band or list(ENEMIES)


def _scale_enemy(
    proto: EnemyTemplate,
    index: int,
    name: str,
    difficulty: Difficulty,
    *,
    elite: bool,
) -> Enemy:
    mult = difficulty.multiplier
    bonus = ELITE_MULTIPLIER if elite else 1
    hp = math.floor(math.floor(proto.hp * mult) * bonus)
    power = math.floor(math.floor(proto.power * mult) * bonus)
    xp = math.floor(math.floor(proto.power * 10 * mult) * bonus)
    ac = difficulty.enemy_ac + (ELITE_AC_BONUS if elite else 0)
    return Enemy(
        id=f"{proto.id}-{index}",
        name=f"Elite {name}" if elite else name,
        hp=hp,
        max_hp=hp,
        power=power,
        damage=proto.damage,
        ac=ac,
        xp=xp,
        tags=list(proto.tags),
        rank=EnemyRank.ELITE if elite else EnemyRank.NORMAL,
    )


def populate_enemies(
    rng: SeededRNG,
    depth: int,
    theme_id: str,
    room_type: RoomType,
    *,
    guarded: bool,
) -> list[Enemy]:
    """Roll the enemies for a fight or a guarded room."""
    difficulty = get_difficulty(depth)
    pool = enemy_pool(difficulty, get_theme_def(theme_id).enemy_tags)
    elite = room_type is RoomType.ELITE

    if guarded:
        base = rng.randint(1, 2)
    elif elite:
        base = 1
    else:
        base = rng.randint(1, 3)
    extra = 0 if guarded else (difficulty.enemy_count_bonus if rng.random() < 0.5 else 0)
    count = min(MAX_ENEMIES_PER_ROOM, base + extra)

    seen: Counter[str] = Counter()
    enemies = []
    for index in range(count):
        proto = rng.pick(pool)
        seen[proto.name] += 1
        name = f"{proto.name} {seen[proto.name]}" if count > 1 else proto.name
        enemies.append(_scale_enemy(proto, index, name, difficulty, elite=elite))
    return enemies


# =============================================================================
# Intermission
# =============================================================================


def offer_recruits(rng: SeededRNG, depth: int) -> list[RecruitOption]:
    """Two recruits scaled to the segment's level."""
    segment = get_difficulty(depth).segment
    scaled = [
        RecruitOption(
            id=r.id,
            name=r.name,
            role=r.role,
            cost=r.cost + (segment - 1) * RECRUIT_COST_PER_SEGMENT,
            description=f"{r.description} (Level {segment})",
            level=segment,
        )
        for r in RECRUITS
    ]
    return rng.shuffled(scaled)[:RECRUIT_OFFER_SIZE]


def _boss_candidates(difficulty: Difficulty) -> list[EnemyTemplate]:
    top = difficulty.max_power
    candidates = enemies_in_band(top + 1, top + 3) or enemies_in_band(top, top + 3)
    preferred = [e for e in candidates if e.has_any_tag(("boss", "elite"))]
    return preferred or candidates


def build_boss_room(rng: SeededRNG, depth: int, theme_id: str) -> Room:
    """The optional boss chamber attached to an intermission."""
    difficulty = get_difficulty(depth)
    mult = difficulty.multiplier
    room_id = f"boss-room-{depth}"

    candidates = _boss_candidates(difficulty)
    if candidates:
        proto = rng.pick(candidates)
    else:
        proto = next((e for e in ENEMIES if e.power == difficulty.max_power), ENEMIES[0])

    hp = math.floor(proto.hp * mult * BOSS_HP_MULTIPLIER)
    enemies = [
        Enemy(
            id=f"{proto.id}-boss",
            name=f"{proto.name} (BOSS)",
            hp=hp,
            max_hp=hp,
            power=math.floor(proto.power * mult * BOSS_POWER_MULTIPLIER),
            damage=proto.damage,
            ac=BASE_BOSS_AC + difficulty.ac_bonus + 1,
            xp=math.floor(proto.power * 25 * mult),
            tags=list(proto.tags),
            rank=EnemyRank.BOSS,
        )
    ]

    minion_pool = [
        e
        for e in enemies_in_band(difficulty.min_power, difficulty.max_power)
        if "boss" not in e.tags
    ]
    minion_count = rng.randint(1, 2)
    for index in range(minion_count if minion_pool else 0):
        minion = rng.pick(minion_pool)
        minion_hp = math.floor(minion.hp * mult)
        enemies.append(
            Enemy(
                id=f"{minion.id}-minion-{index}",
                name=minion.name,
                hp=minion_hp,
                max_hp=minion_hp,
                power=math.floor(minion.power * mult),
                damage=minion.damage,
                ac=difficulty.enemy_ac,
                xp=math.floor(minion.power * 10 * mult),
                tags=list(minion.tags),
                rank=EnemyRank.MINION,
            )
        )

    return Room(
        id=room_id,
        type=RoomType.BOSS,
        theme_id=theme_id,
        enemies=enemies,
        loot=boss_loot(rng, room_id),
    )


# =============================================================================
# Entry Point
# =============================================================================


def generate_room(state: RunState, rng: SeededRNG | None = None) -> Room:
    """Build the room for ``state.depth``.

    Args:
        state: Supplies seed, depth and theme; never modified.
        rng: Generator to draw from. Defaults to the room generator for
            ``(state.seed, state.depth)``.

    Returns:
        A new Room.

    Example:
        >>> from long_hall.engine.lifecycle import create_initial_run_state
        >>> state = create_initial_run_state("t1").model_copy(update={"depth": 10})
        >>> generate_room(state).type
        'intermission'
    """
    depth = state.depth
    if rng is None:
        rng = room_rng(state.seed, depth)
    room_type, guarded = choose_room_type(depth, rng)
    room_id = f"room-{depth}"
    room = Room(id=room_id, type=room_type, theme_id=state.theme_id, guarded=guarded)

    if room_type in (RoomType.COMBAT, RoomType.ELITE) or guarded:
        room.enemies = populate_enemies(rng, depth, state.theme_id, room_type, guarded=guarded)

    if room_type is RoomType.HAZARD:
        room.loot = hazard_loot(rng, room_id, guarded=guarded)

    if room_type in (RoomType.TRADER, RoomType.INTERMISSION):
        room.shop_items = shop_stock(rng)

    if room_type is RoomType.INTERMISSION:
        room.available_recruits = offer_recruits(rng, depth)
        room.boss_room = build_boss_room(rng, depth, state.theme_id)

    logger.debug(
        "Room generated",
        depth=depth,
        room_type=str(room_type),
        guarded=guarded,
        enemies=len(room.enemies),
    )
    return room


__all__ = [
    "ELITE_MULTIPLIER",
    "ELITE_AC_BONUS",
    "room_rng",
    "choose_room_type",
    "enemy_pool",
    "populate_enemies",
    "offer_recruits",
    "build_boss_room",
    "generate_room",
]
