"""Tests for the procedural room generator."""

from __future__ import annotations

import pytest

from long_hall.engine.generator import (
    choose_room_type,
    generate_room,
    offer_recruits,
    populate_enemies,
    room_rng,
)
from long_hall.engine.lifecycle import create_initial_run_state
from long_hall.engine.rng import SeededRNG
from long_hall.models.enums import EnemyRank, Rarity, RoomType
from long_hall.models.state import RunState


def _at_depth(seed: str, depth: int) -> RunState:
    return create_initial_run_state(seed).model_copy(update={"depth": depth})


class TestDeterminism:
    """Tests that rooms are a pure function of seed and depth."""

    @pytest.mark.parametrize("depth", [1, 4, 7, 10, 15, 30])
    def test_same_seed_same_room(self, depth: int) -> None:
        """Test regenerating a room yields the same room."""
        state = _at_depth("determinism", depth)

        assert generate_room(state) == generate_room(state)

    def test_default_rng_is_room_rng(self) -> None:
        """Test an omitted generator falls back to the room generator."""
        state = _at_depth("seed-x", 3)

        assert generate_room(state) == generate_room(state, room_rng("seed-x", 3))

    def test_different_seeds_differ(self) -> None:
        """Test some room differs across seeds."""
        rooms_a = [generate_room(_at_depth("alpha", d)) for d in range(1, 10)]
        rooms_b = [generate_room(_at_depth("beta", d)) for d in range(1, 10)]

        assert rooms_a != rooms_b


class TestSchedule:
    """Tests for the fixed room schedule."""

    @pytest.mark.parametrize("depth", [10, 20, 30, 100])
    def test_intermissions(self, depth: int) -> None:
        """Test every tenth room is an intermission."""
        room = generate_room(_at_depth("cadence", depth))

        assert room.type == RoomType.INTERMISSION
        assert room.enemies == []
        assert len(room.shop_items) == 4
        assert len(room.available_recruits) == 2
        assert room.boss_room is not None

    @pytest.mark.parametrize("depth", [5, 15, 25])
    def test_shrines(self, depth: int) -> None:
        """Test every fifth room outside intermissions is a shrine."""
        assert generate_room(_at_depth("cadence", depth)).type == RoomType.SHRINE

    def test_depth_zero_is_unguarded_shrine(self) -> None:
        """Test the starting shrine."""
        room_type, guarded = choose_room_type(0, SeededRNG(1))

        assert room_type == RoomType.SHRINE
        assert guarded is False

    @pytest.mark.parametrize("seed", ["a", "b", "c", "d"])
    def test_first_room_of_segment_is_combat(self, seed: str) -> None:
        """Test room 1 of a segment always fights."""
        room = generate_room(_at_depth(seed, 11))

        assert room.type == RoomType.COMBAT
        assert room.has_enemies


class TestEnemies:
    """Tests for enemy population."""

    def test_elite_room_has_one_elite(self) -> None:
        """Test elite rooms hold exactly one scaled enemy."""
        enemies = populate_enemies(SeededRNG(4), 8, "dungeon_start", RoomType.ELITE, guarded=False)

        assert len(enemies) == 1
        assert enemies[0].rank == EnemyRank.ELITE
        assert enemies[0].name.startswith("Elite ")
        assert enemies[0].ac == 12

    @pytest.mark.parametrize("seed", range(20))
    def test_count_and_unique_ids(self, seed: int) -> None:
        """Test counts stay in range and ids never collide."""
        enemies = populate_enemies(
            SeededRNG(seed), 45, "dungeon_start", RoomType.COMBAT, guarded=False
        )

        assert 1 <= len(enemies) <= 5
        assert len({e.id for e in enemies}) == len(enemies)
        assert len({e.name for e in enemies}) == len(enemies)

    def test_single_enemy_has_no_ordinal(self) -> None:
        """Test a lone enemy keeps its plain name."""
        for seed in range(50):
            enemies = populate_enemies(
                SeededRNG(seed), 2, "dungeon_start", RoomType.COMBAT, guarded=False
            )
            if len(enemies) == 1:
                assert not enemies[0].name[-1].isdigit()
                return
        pytest.fail("no single-enemy room in 50 seeds")


class TestIntermission:
    """Tests for recruits and boss chambers."""

    def test_recruits_scale_with_segment(self) -> None:
        """Test level equals segment and cost rises per segment."""
        recruits = offer_recruits(SeededRNG(3), 20)

        assert len(recruits) == 2
        assert all(r.level == 2 for r in recruits)
        assert all("(Level 2)" in r.description for r in recruits)

    def test_boss_room(self) -> None:
        """Test the boss chamber holds a boss, minions and rare loot."""
        boss_room = generate_room(_at_depth("boss", 10)).boss_room

        assert boss_room.type == RoomType.BOSS
        assert boss_room.enemies[0].rank == EnemyRank.BOSS
        assert boss_room.enemies[0].name.endswith("(BOSS)")
        assert 2 <= len(boss_room.enemies) <= 3
        assert 3 <= len(boss_room.loot) <= 5
        assert all(item.rarity not in (Rarity.COMMON, Rarity.UNCOMMON) for item in boss_room.loot)
