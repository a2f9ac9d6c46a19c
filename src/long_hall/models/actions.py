"""Player actions as a closed tagged union.

Each variant carries only the fields it needs and is discriminated by
its ``type`` tag, so the state machine can dispatch with an exhaustive
``match``. Payloads from the wire are parsed with :func:`parse_action`.

Example:
    >>> action = parse_action({"type": "ATTACK", "attackerId": "hero-1", "targetId": "rat-0"})
    >>> action.attacker_id
    'hero-1'
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import ConfigDict, Field, TypeAdapter

from long_hall.models.base import GameModel
from long_hall.models.enums import EquipmentSlot, Skill


class ActionBase(GameModel):
    """Common configuration: actions are immutable once built."""

    model_config = ConfigDict(frozen=True)


class StartRun(ActionBase):
    type: Literal["START_RUN"] = "START_RUN"
    seed: str


class AdvanceRoom(ActionBase):
    type: Literal["ADVANCE_ROOM"] = "ADVANCE_ROOM"


class ResolveRoom(ActionBase):
    """Quick auto-resolution of the current room."""

    type: Literal["RESOLVE_ROOM"] = "RESOLVE_ROOM"


class Attack(ActionBase):
    type: Literal["ATTACK"] = "ATTACK"
    attacker_id: str
    target_id: str


class UseAbility(ActionBase):
    type: Literal["USE_ABILITY"] = "USE_ABILITY"
    actor_id: str
    ability_id: str
    target_id: str | None = None


class Escape(ActionBase):
    type: Literal["ESCAPE"] = "ESCAPE"


class DisarmTrap(ActionBase):
    type: Literal["DISARM_TRAP"] = "DISARM_TRAP"


class TriggerTrap(ActionBase):
    type: Literal["TRIGGER_TRAP"] = "TRIGGER_TRAP"


class PrayAtShrine(ActionBase):
    type: Literal["PRAY_AT_SHRINE"] = "PRAY_AT_SHRINE"


class TakeShortRest(ActionBase):
    type: Literal["TAKE_SHORT_REST"] = "TAKE_SHORT_REST"
    actor_ids_to_heal: list[str] = Field(default_factory=list)


class TakeLongRest(ActionBase):
    type: Literal["TAKE_LONG_REST"] = "TAKE_LONG_REST"


class BuyItem(ActionBase):
    """Buy from the current room's shop; the price is the item's own cost."""

    type: Literal["BUY_ITEM"] = "BUY_ITEM"
    item_id: str


class SellItem(ActionBase):
    type: Literal["SELL_ITEM"] = "SELL_ITEM"
    item_id: str


class EquipItem(ActionBase):
    type: Literal["EQUIP_ITEM"] = "EQUIP_ITEM"
    actor_id: str
    item_id: str
    slot: EquipmentSlot | None = None


class UnequipItem(ActionBase):
    type: Literal["UNEQUIP_ITEM"] = "UNEQUIP_ITEM"
    actor_id: str
    slot: EquipmentSlot


class HireRecruit(ActionBase):
    type: Literal["HIRE_RECRUIT"] = "HIRE_RECRUIT"
    recruit_id: str


class RenameItem(ActionBase):
    type: Literal["RENAME_ITEM"] = "RENAME_ITEM"
    item_id: str
    new_name: str = Field(min_length=1, max_length=60)


class SpendStatPoint(ActionBase):
    type: Literal["SPEND_STAT_POINT"] = "SPEND_STAT_POINT"
    actor_id: str
    stat: Skill


class EnterBossRoom(ActionBase):
    type: Literal["ENTER_BOSS_ROOM"] = "ENTER_BOSS_ROOM"


class DismissPopup(ActionBase):
    type: Literal["DISMISS_POPUP"] = "DISMISS_POPUP"


Action = Annotated[
    Union[
        StartRun,
        AdvanceRoom,
        ResolveRoom,
        Attack,
        UseAbility,
        Escape,
        DisarmTrap,
        TriggerTrap,
        PrayAtShrine,
        TakeShortRest,
        TakeLongRest,
        BuyItem,
        SellItem,
        EquipItem,
        UnequipItem,
        HireRecruit,
        RenameItem,
        SpendStatPoint,
        EnterBossRoom,
        DismissPopup,
    ],
    Field(discriminator="type"),
]

_ACTION_ADAPTER: TypeAdapter[Action] = TypeAdapter(Action)


def parse_action(payload: dict[str, Any] | str | bytes) -> Action:
    """Build an action from a wire payload (dict or JSON text).

    Raises:
        pydantic.ValidationError: If the tag is unknown or a field is missing.
    """
    if isinstance(payload, (str, bytes)):
        return _ACTION_ADAPTER.validate_json(payload)
    return _ACTION_ADAPTER.validate_python(payload)


__all__ = [
    "ActionBase",
    "StartRun",
    "AdvanceRoom",
    "ResolveRoom",
    "Attack",
    "UseAbility",
    "Escape",
    "DisarmTrap",
    "TriggerTrap",
    "PrayAtShrine",
    "TakeShortRest",
    "TakeLongRest",
    "BuyItem",
    "SellItem",
    "EquipItem",
    "UnequipItem",
    "HireRecruit",
    "RenameItem",
    "SpendStatPoint",
    "EnterBossRoom",
    "DismissPopup",
    "Action",
    "parse_action",
]
