"""Fixed rule constants for The Long Hall.

These values are part of the game rules and therefore part of the
determinism contract: changing one changes every replay.
"""

from __future__ import annotations

# =============================================================================
# Logs
# =============================================================================

MAX_HISTORY_LENGTH = 100
"""Run history entries kept; older entries are dropped first."""

ITEM_HISTORY_LIMIT = 10
"""Milestone lines kept on a single item."""

# =============================================================================
# Party
# =============================================================================

MAX_PARTY_SIZE = 4
"""Maximum number of party members, hero included."""

MAX_SHORT_RESTS = 2
"""Short rests available per segment."""

MAX_STRESS = 20
"""Stress ceiling for every actor."""

LEVEL_UP_HP_GAIN = 4
"""Extra starting HP per level above 1 when an actor is created."""

XP_THRESHOLDS: tuple[int, ...] = (0, 50, 150, 300, 500, 800, 1200, 2000, 3000)
"""Total XP needed for each level; index ``n`` unlocks level ``n + 1``."""

# =============================================================================
# Combat
# =============================================================================

REST_COOLDOWN = 999
"""Cooldown sentinel for abilities that recharge only on a rest."""

SEGMENT_LENGTH = 10
"""Rooms per segment; the last room of each segment is an intermission."""

SHRINE_INTERVAL = 5
"""Depth interval at which shrines are forced."""

MAX_ENEMIES_PER_ROOM = 5
"""Hard cap on enemies in a single room."""

BASE_ENEMY_AC = 10
"""Armor class of a regular enemy before the segment bonus."""

BASE_BOSS_AC = 12
"""Armor class of a boss before the segment bonus."""

SELL_PRICE = 10
"""Flat gold paid for any sold item."""

SHOP_SIZE = 4
"""Items stocked by a trader or intermission shop."""

RECRUIT_OFFER_SIZE = 2
"""Recruits offered at each intermission."""

# =============================================================================
# Hazards
# =============================================================================

DISARM_DC = 12
"""Target for ``1d20 + 2 (+5 rogue)`` when disarming a trap."""

DISARM_BASE_BONUS = 2
"""Flat bonus on every disarm attempt."""

ROGUE_DISARM_BONUS = 5
"""Extra disarm bonus when a living rogue is in the party."""

# =============================================================================
# Enchantment
# =============================================================================

MAX_SHRINE_TIER = 5
"""Highest tier a shrine or boss reward can roll."""

GODLY_TIER = 6
"""Tier reserved for items from the godly drop pool."""

SCORE_DEPTH_WEIGHT = 100
"""Score points per depth reached."""

SCORE_LEVEL_WEIGHT = 500
"""Score points per level above 1, per actor."""

__all__ = [
    "MAX_HISTORY_LENGTH",
    "ITEM_HISTORY_LIMIT",
    "MAX_PARTY_SIZE",
    "MAX_SHORT_RESTS",
    "MAX_STRESS",
    "LEVEL_UP_HP_GAIN",
    "XP_THRESHOLDS",
    "REST_COOLDOWN",
    "SEGMENT_LENGTH",
    "SHRINE_INTERVAL",
    "MAX_ENEMIES_PER_ROOM",
    "BASE_ENEMY_AC",
    "BASE_BOSS_AC",
    "SELL_PRICE",
    "SHOP_SIZE",
    "RECRUIT_OFFER_SIZE",
    "DISARM_DC",
    "DISARM_BASE_BONUS",
    "ROGUE_DISARM_BONUS",
    "MAX_SHRINE_TIER",
    "GODLY_TIER",
    "SCORE_DEPTH_WEIGHT",
    "SCORE_LEVEL_WEIGHT",
]
