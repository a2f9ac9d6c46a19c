"""Headless autopilot.

Plays a run with a simple greedy policy: fight the weakest enemy, use
ready damage and healing abilities, deal with traps and shrines, rest
when hurt, hire when rich and keep walking. It exists so long runs over
many seeds can be checked for invariants without a UI.
"""

from __future__ import annotations

from collections.abc import Iterator

from long_hall.content.abilities import get_ability
from long_hall.core.logging import get_logger
from long_hall.core.constants import MAX_PARTY_SIZE
from long_hall.engine.lifecycle import create_initial_run_state
from long_hall.engine.reducer import apply_action
from long_hall.models.actions import (
    Action,
    AdvanceRoom,
    Attack,
    DismissPopup,
    DisarmTrap,
    HireRecruit,
    PrayAtShrine,
    ResolveRoom,
    TakeShortRest,
    UseAbility,
)
from long_hall.models.actors import Actor
from long_hall.models.enums import CombatTurn, EffectTarget, EffectType, RoomType
from long_hall.models.rooms import Enemy
from long_hall.models.state import RunState


logger = get_logger(__name__)

DEFAULT_MAX_ACTIONS = 5000
LOW_HP_RATIO = 0.4
REST_HP_RATIO = 0.5


def _is_low(actor: Actor, ratio: float) -> bool:
    return actor.hp.current < actor.hp.max * ratio


def _combat_choice(actor: Actor, target: Enemy) -> Action:
    """A ready heal when hurt, else a ready damaging ability, else a swing."""
    for ability_state in actor.abilities:
        ability = get_ability(ability_state.ability_id)
        if ability is None or not ability_state.ready or ability.requires_status:
            continue
        effect = ability.effect
        if effect.type == EffectType.HEAL and _is_low(actor, LOW_HP_RATIO):
            return UseAbility(actor_id=actor.id, ability_id=ability.id, target_id=actor.id)
        if effect.type in (EffectType.DAMAGE, EffectType.ATTACK) or (
            effect.type == EffectType.SPECIAL and effect.dice
        ):
            target_id = target.id if effect.target == EffectTarget.ENEMY else None
            return UseAbility(actor_id=actor.id, ability_id=ability.id, target_id=target_id)
    return Attack(attacker_id=actor.id, target_id=target.id)


def choose_action(state: RunState) -> Action | None:
    """The policy's next action, or None once the run is over."""
    if state.game_over:
        return None
    if state.victory or state.shrine_boon:
        return DismissPopup()

    room = state.current_room
    if state.combat_turn == CombatTurn.PLAYER and room is not None and room.has_enemies:
        target = min(room.living_enemies, key=lambda e: e.hp)
        ready = [m for m in state.party.living if m.id not in state.acted_this_round]
        if not ready and state.extra_actions > 0:
            ready = state.party.living
        if ready:
            return _combat_choice(ready[0], target)

    if room is not None and not state.room_resolved and not room.has_enemies:
        if room.type == RoomType.HAZARD:
            return DisarmTrap()
        if room.type == RoomType.SHRINE:
            return PrayAtShrine()

    if room is not None and len(state.party.members) < MAX_PARTY_SIZE:
        affordable = [r for r in room.available_recruits if r.cost <= state.party.gold]
        if affordable:
            return HireRecruit(recruit_id=affordable[0].id)

    if not state.in_combat and state.short_rests_remaining > 0:
        hurt = [m.id for m in state.party.living if _is_low(m, REST_HP_RATIO)]
        if hurt:
            return TakeShortRest(actor_ids_to_heal=hurt)

    return AdvanceRoom()


def iter_autopilot(
    seed: str,
    rooms: int,
    *,
    max_actions: int = DEFAULT_MAX_ACTIONS,
) -> Iterator[RunState]:
    """Yield every state of an autopiloted run, starting with the first.

    Stops when the party reaches ``rooms`` depth, falls, runs out of
    accepted actions or hits ``max_actions``.
    """
    state = create_initial_run_state(seed)
    yield state
    for _ in range(max_actions):
        if state.depth >= rooms:
            return
        action = choose_action(state)
        if action is None:
            return
        next_state = apply_action(state, action)
        if next_state.action_counter == state.action_counter:
            # Rejected; fall back to settling the room outright.
            next_state = apply_action(state, ResolveRoom())
            if next_state.action_counter == state.action_counter:
                logger.warning("Autopilot stuck", seed=seed, depth=state.depth, action=action.type)
                return
        state = next_state
        yield state


def play_autopilot(seed: str, rooms: int, *, max_actions: int = DEFAULT_MAX_ACTIONS) -> RunState:
    """Play a run and return its final state."""
    final = None
    for final in iter_autopilot(seed, rooms, max_actions=max_actions):
        pass
    logger.info("Autopilot finished", seed=seed, depth=final.depth, game_over=final.game_over)
    return final


__all__ = ["choose_action", "iter_autopilot", "play_autopilot"]
