"""The run state: the complete, serializable world snapshot.

A RunState holds no live generator or callback. Every transition derives
its randomness from ``seed`` plus counters stored on the state, so the
JSON produced by :meth:`RunState.to_json` is all that is needed to resume
or replay a run.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from long_hall.core.constants import MAX_HISTORY_LENGTH, MAX_SHORT_RESTS
from long_hall.models.actors import Actor
from long_hall.models.base import GameModel
from long_hall.models.enums import CombatTurn
from long_hall.models.items import Item
from long_hall.models.rooms import Room


class Party(GameModel):
    """Ordered party members and their shared purse."""

    members: list[Actor] = Field(default_factory=list)
    gold: int = Field(default=0, ge=0)

    @property
    def living(self) -> list[Actor]:
        return [m for m in self.members if m.is_alive]

    @property
    def all_dead(self) -> bool:
        return not any(m.is_alive for m in self.members)

    def member(self, actor_id: str) -> Actor | None:
        return next((m for m in self.members if m.id == actor_id), None)


class Inventory(GameModel):
    """Loose items that are not equipped."""

    items: list[Item] = Field(default_factory=list)

    def find(self, item_id: str) -> Item | None:
        return next((i for i in self.items if i.id == item_id), None)

    def take(self, item_id: str) -> Item | None:
        """Remove and return an item, or None if it is not held."""
        for index, item in enumerate(self.items):
            if item.id == item_id:
                return self.items.pop(index)
        return None


class RunState(GameModel):
    """Complete world snapshot.

    Attributes:
        seed: Origin of all randomness.
        depth: Rooms passed so far.
        theme_id: Active theme.
        short_rests_remaining: Short rests left in this segment.
        long_rests_taken: Long rests taken over the run.
        party: Members and gold.
        inventory: Loose items.
        current_room: Room being played, if any.
        room_resolved: Whether the room's interaction is done.
        combat_turn: ``player``, ``enemy`` or None outside a fight.
        combat_round: Round counter of the current fight.
        acted_this_round: Ids of members who used their action this round.
        extra_actions: Bonus actions available this fight.
        game_over: The whole party has fallen.
        victory: A fight was just won (popup flag).
        shrine_boon: Pending boon message.
        mutations: Run-long modifiers gathered at long rests.
        history: Bounded event log.
        in_boss_room: The current room is a nested boss fight.
        parent_intermission: Intermission to return to after the boss.
        action_counter: Accepted transitions so far; feeds the action RNG.
    """

    seed: str
    depth: int = Field(default=0, ge=0)
    theme_id: str = "dungeon_start"
    short_rests_remaining: int = Field(default=MAX_SHORT_RESTS, ge=0)
    long_rests_taken: int = Field(default=0, ge=0)
    party: Party = Field(default_factory=Party)
    inventory: Inventory = Field(default_factory=Inventory)
    current_room: Room | None = None
    room_resolved: bool = False
    combat_turn: CombatTurn | None = None
    combat_round: int = Field(default=0, ge=0)
    acted_this_round: list[str] = Field(default_factory=list)
    extra_actions: int = Field(default=0, ge=0)
    game_over: bool = False
    victory: bool = False
    shrine_boon: str | None = None
    mutations: list[str] = Field(default_factory=list)
    history: list[str] = Field(default_factory=list)
    in_boss_room: bool = False
    parent_intermission: Room | None = None
    action_counter: int = Field(default=0, ge=0)

    @property
    def in_combat(self) -> bool:
        return self.combat_turn is not None

    def log(self, *entries: str) -> None:
        """Append entries to the history, dropping the oldest past the cap."""
        history = [*self.history, *entries]
        if len(history) > MAX_HISTORY_LENGTH:
            history = history[-MAX_HISTORY_LENGTH:]
        self.history = history

    def with_log(self, *entries: str) -> RunState:
        """Return a copy with entries appended; the receiver is untouched."""
        updated = self.model_copy(deep=True)
        updated.log(*entries)
        return updated

    def to_json(self) -> str:
        """Serialize with wire (camelCase) names."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, payload: str | bytes) -> RunState:
        """Restore a state written by :meth:`to_json` or another client."""
        return cls.model_validate_json(payload)

    def to_wire(self) -> dict[str, Any]:
        """JSON-compatible dict with wire names."""
        return self.model_dump(mode="json", by_alias=True)


__all__ = [
    "Party",
    "Inventory",
    "RunState",
]
