"""Tests for the action union and wire parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from long_hall.models.actions import (
    AdvanceRoom,
    Attack,
    EquipItem,
    TakeShortRest,
    UseAbility,
    parse_action,
)


class TestParseAction:
    """Tests for parse_action."""

    def test_from_dict(self) -> None:
        action = parse_action({"type": "ATTACK", "attackerId": "hero-1", "targetId": "rat-0"})

        assert action == Attack(attacker_id="hero-1", target_id="rat-0")

    def test_from_json_text(self) -> None:
        action = parse_action('{"type": "ADVANCE_ROOM"}')

        assert isinstance(action, AdvanceRoom)

    def test_from_bytes(self) -> None:
        action = parse_action(b'{"type": "TAKE_SHORT_REST", "actorIdsToHeal": ["hero-1"]}')

        assert isinstance(action, TakeShortRest)
        assert action.actor_ids_to_heal == ["hero-1"]

    def test_optional_fields(self) -> None:
        action = parse_action({"type": "USE_ABILITY", "actorId": "w", "abilityId": "fireball"})

        assert isinstance(action, UseAbility)
        assert action.target_id is None

    def test_equip_slot(self) -> None:
        action = parse_action(
            {"type": "EQUIP_ITEM", "actorId": "hero-1", "itemId": "ring-a", "slot": "ring2"}
        )

        assert isinstance(action, EquipItem)
        assert action.slot == "ring2"

    @pytest.mark.parametrize(
        "payload",
        [
            {"type": "FLY_AWAY"},
            {"type": "ATTACK", "attackerId": "hero-1"},
            {"attackerId": "hero-1", "targetId": "rat-0"},
            {"type": "EQUIP_ITEM", "actorId": "a", "itemId": "b", "slot": "tail"},
        ],
    )
    def test_invalid_payloads(self, payload: dict) -> None:
        with pytest.raises(ValidationError):
            parse_action(payload)


class TestActionModels:
    """Tests for action immutability and wire output."""

    def test_actions_are_frozen(self) -> None:
        action = Attack(attacker_id="hero-1", target_id="rat-0")

        with pytest.raises(ValidationError):
            action.target_id = "rat-1"

    def test_dump_uses_wire_names(self) -> None:
        action = Attack(attacker_id="hero-1", target_id="rat-0")

        assert action.model_dump(by_alias=True) == {
            "type": "ATTACK",
            "attackerId": "hero-1",
            "targetId": "rat-0",
        }
