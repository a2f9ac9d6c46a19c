"""Pytest configuration and shared fixtures.

This module provides common fixtures and builders for all tests in the
Long Hall test suite.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator, Iterable

    from long_hall.models.actors import Actor
    from long_hall.models.rooms import Enemy, Room
    from long_hall.models.state import RunState


# =============================================================================
# Scripted Dice
# =============================================================================


class FixedRolls:
    """Integer source that replays queued values.

    Each ``randint`` call pops the next value and clamps it into the
    requested range, so a queued 20 on a d6 reads as 6. When the queue
    runs dry the low end of the range is returned.
    """

    def __init__(self, *values: int) -> None:
        self.values = deque(values)
        self.calls: list[tuple[int, int]] = []

    def push(self, *values: int) -> None:
        self.values.extend(values)

    def randint(self, low: int, high: int) -> int:
        if low > high:
            low, high = high, low
        self.calls.append((low, high))
        if not self.values:
            return low
        return max(low, min(high, self.values.popleft()))


@pytest.fixture
def fixed_rolls() -> type[FixedRolls]:
    """Provide the FixedRolls class for scripting dice."""
    return FixedRolls


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from long_hall.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(
    tmp_path: Any,
    monkeypatch: pytest.MonkeyPatch,
) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "LONG_HALL_DEBUG": "true",
        "LONG_HALL_LOG_LEVEL": "DEBUG",
        "LONG_HALL_SAVE_DIRECTORY": str(tmp_path / "saves"),
        "LONG_HALL_DEFAULT_SLOT": "test_slot",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Builders
# =============================================================================


def make_actor(
    actor_id: str = "hero-1",
    name: str = "Hero",
    role: str = "fighter",
    *,
    hp: int | None = None,
    **overrides: Any,
) -> Actor:
    """Build an actor through the real factory, then apply overrides."""
    from long_hall.engine.lifecycle import create_actor

    actor = create_actor(actor_id, name, role)
    if hp is not None:
        actor.hp = actor.hp.model_copy(update={"current": hp})
    for key, value in overrides.items():
        setattr(actor, key, value)
    return actor


def make_enemy(
    enemy_id: str = "rat-0",
    name: str = "Giant Rat",
    *,
    hp: int = 5,
    power: int = 1,
    ac: int = 10,
    damage: str = "1d4",
    **overrides: Any,
) -> Enemy:
    from long_hall.models.rooms import Enemy

    return Enemy(
        id=enemy_id,
        name=name,
        hp=hp,
        max_hp=hp,
        power=power,
        damage=damage,
        ac=ac,
        xp=power * 10,
        **overrides,
    )


def make_room(
    room_type: str = "combat",
    enemies: Iterable[Enemy] = (),
    *,
    room_id: str = "room-1",
    **overrides: Any,
) -> Room:
    from long_hall.models.rooms import Room

    return Room(
        id=room_id,
        type=room_type,
        theme_id="dungeon_start",
        enemies=list(enemies),
        **overrides,
    )


def make_state(
    members: Iterable[Actor] | None = None,
    room: Room | None = None,
    **overrides: Any,
) -> RunState:
    """A run state with the given party and room; defaults to a lone fighter."""
    from long_hall.models.state import Party, RunState

    party = Party(members=list(members) if members is not None else [make_actor()])
    fields: dict[str, Any] = {"seed": "test", "depth": 1, **overrides}
    return RunState(party=party, current_room=room, **fields)


def make_fight(
    members: Iterable[Actor] | None = None,
    enemies: Iterable[Enemy] | None = None,
    **overrides: Any,
) -> RunState:
    """A state mid-fight on the player's turn, round 1."""
    room = make_room("combat", enemies if enemies is not None else [make_enemy()])
    fields: dict[str, Any] = {"combat_turn": "player", "combat_round": 1, **overrides}
    return make_state(members, room, **fields)


# =============================================================================
# State Fixtures
# =============================================================================


@pytest.fixture
def fresh_state() -> RunState:
    """A new run for seed ``t1``, standing at the starting shrine."""
    from long_hall.engine.lifecycle import create_initial_run_state

    return create_initial_run_state("t1")


@pytest.fixture
def fighter() -> Actor:
    return make_actor()


@pytest.fixture
def rat() -> Enemy:
    return make_enemy()


@pytest.fixture
def fight_state() -> RunState:
    """A lone fighter facing one giant rat."""
    return make_fight()


@pytest.fixture
def temp_save_dir(tmp_path: Any) -> Any:
    """Create a temporary save directory for testing."""
    save_dir = tmp_path / "saves"
    save_dir.mkdir()
    return save_dir
