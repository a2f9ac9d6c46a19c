"""The action state machine.

:func:`apply_action` is the only way a run moves forward. It is total:
an action that does not fit the current state returns the input state
unchanged (or with a single explanatory log line) instead of raising.
The input state is never modified; handlers work on a deep copy.

Example:
    >>> from long_hall.engine.lifecycle import create_initial_run_state
    >>> from long_hall.models.actions import PrayAtShrine
    >>> state = create_initial_run_state("t1")
    >>> after = apply_action(state, PrayAtShrine())
    >>> after.room_resolved, state.room_resolved
    (True, False)
"""

from __future__ import annotations

from long_hall.core.constants import MAX_PARTY_SIZE, SEGMENT_LENGTH, SELL_PRICE
from long_hall.core.exceptions import DataIntegrityError, GameEngineError, InvalidTransitionError
from long_hall.core.logging import get_logger, log_context
from long_hall.engine.abilities import use_ability
from long_hall.engine.combat import (
    attempt_escape,
    enemy_turn,
    player_attack,
    quick_resolve,
    roll_initiative,
)
from long_hall.engine.context import TurnContext, action_context
from long_hall.engine.equipment import (
    equip_from_inventory,
    find_equipped,
    record_encounter,
    unequip_to_inventory,
)
from long_hall.engine.generator import generate_room, room_rng
from long_hall.engine.lifecycle import create_actor, create_initial_run_state, prune_fallen
from long_hall.engine.loot import mint_item
from long_hall.engine.progression import spend_stat_point
from long_hall.engine.rest import long_rest, segment_long_rest, short_rest
from long_hall.engine.rooms import disarm_trap, pray_at_shrine, trigger_trap
from long_hall.models.actions import (
    Action,
    AdvanceRoom,
    Attack,
    BuyItem,
    DismissPopup,
    DisarmTrap,
    EnterBossRoom,
    EquipItem,
    Escape,
    HireRecruit,
    PrayAtShrine,
    RenameItem,
    ResolveRoom,
    SellItem,
    SpendStatPoint,
    StartRun,
    TakeLongRest,
    TakeShortRest,
    TriggerTrap,
    UnequipItem,
    UseAbility,
)
from long_hall.models.actors import Actor
from long_hall.models.enums import RoomType
from long_hall.models.rooms import Room
from long_hall.models.state import RunState


logger = get_logger(__name__)


# =============================================================================
# Movement
# =============================================================================


def _enter_fight(state: RunState, ctx: TurnContext) -> None:
    """Roll initiative; the enemies strike at once if they win it."""
    if roll_initiative(state, ctx):
        enemy_turn(state, ctx)


def advance_room(state: RunState, ctx: TurnContext) -> None:
    """Move one room deeper.

    The fallen are left behind, the next room is generated from
    ``(seed, depth)`` and, at each intermission, the party takes its
    automatic long rest with the same generator.
    """
    room = state.current_room
    if state.in_combat or state.in_boss_room or (room is not None and room.has_enemies):
        raise InvalidTransitionError(
            "Enemies block the way",
            action_type="ADVANCE_ROOM",
            log_message="You cannot advance while enemies remain!",
        )
    if room is not None and room.type == RoomType.HAZARD and not state.room_resolved:
        raise InvalidTransitionError(
            "Unresolved hazard",
            action_type="ADVANCE_ROOM",
            log_message="A trap blocks the way. Disarm or trigger it first.",
        )

    new_depth = state.depth + 1
    rng = room_rng(state.seed, new_depth)
    fallen = prune_fallen(state)
    if fallen:
        state.log(f"☠️ {', '.join(fallen)} left behind forever...")

    state.depth = new_depth
    new_room = generate_room(state, rng)
    if new_room.is_fight:
        for member in state.party.living:
            record_encounter(member)

    state.current_room = new_room
    state.room_resolved = new_room.type in (RoomType.INTERMISSION, RoomType.BOSS)
    state.combat_turn = None
    state.combat_round = 0
    state.acted_this_round = []
    state.extra_actions = 0
    state.victory = False
    state.log(f"Entered room {new_depth}: {str(new_room.type).upper()}")

    if new_depth % SEGMENT_LENGTH == 0:
        segment_long_rest(state, rng)
    if new_room.has_enemies:
        _enter_fight(state, ctx)
    logger.debug("Advanced", depth=new_depth, room_type=str(new_room.type))


def enter_boss_room(state: RunState, ctx: TurnContext) -> None:
    room = state.current_room
    if state.in_combat or room is None or room.type != RoomType.INTERMISSION or room.boss_room is None:
        raise InvalidTransitionError("No boss chamber here", action_type="ENTER_BOSS_ROOM")
    state.parent_intermission = room
    state.current_room = room.boss_room.model_copy(deep=True)
    state.in_boss_room = True
    state.room_resolved = False
    state.victory = False
    state.extra_actions = 0
    state.log("⚔️ You enter the Boss Chamber! Prepare for battle!")
    _enter_fight(state, ctx)


# =============================================================================
# Party & Trade
# =============================================================================


def _require_actor(state: RunState, actor_id: str, action_type: str) -> Actor:
    """A living party member; the fallen cannot change gear or train."""
    actor = state.party.member(actor_id)
    if actor is None:
        raise DataIntegrityError("Unknown party member", entity_id=actor_id)
    if not actor.is_alive:
        raise InvalidTransitionError(
            f"{actor.name} has fallen",
            action_type=action_type,
            log_message=f"{actor.name} has fallen and cannot do that.",
        )
    return actor


def _require_room(state: RunState, action_type: str) -> Room:
    if state.current_room is None:
        raise InvalidTransitionError("No room", action_type=action_type)
    return state.current_room


def buy_item(state: RunState, item_id: str, ctx: TurnContext) -> None:
    """Buy from the current room's shop at the item's own cost."""
    room = _require_room(state, "BUY_ITEM")
    offer = next((item for item in room.shop_items if item.id == item_id), None)
    if offer is None:
        raise DataIntegrityError(
            "Item not for sale", entity_id=item_id, log_message="That item is not for sale here."
        )
    if state.party.gold < offer.cost:
        raise InvalidTransitionError(
            "Insufficient gold",
            action_type="BUY_ITEM",
            log_message="Not enough gold to buy item.",
        )
    bought = mint_item(offer, ctx.rng)
    room.shop_items = [item for item in room.shop_items if item.id != item_id]
    state.party.gold -= offer.cost
    state.inventory.items.append(bought)
    state.log(f"Bought {bought.display_name} for {offer.cost} gold")


def sell_item(state: RunState, item_id: str) -> None:
    item = state.inventory.take(item_id)
    if item is None:
        raise DataIntegrityError(
            "Item not held", entity_id=item_id, log_message="Item not found in inventory."
        )
    state.party.gold += SELL_PRICE
    state.log(f"Sold {item.display_name} for {SELL_PRICE} gold")


def hire_recruit(state: RunState, recruit_id: str, ctx: TurnContext) -> None:
    """Hire an offered recruit; they arrive at the offered level with starter gear."""
    room = _require_room(state, "HIRE_RECRUIT")
    recruit = next((r for r in room.available_recruits if r.id == recruit_id), None)
    if recruit is None:
        raise DataIntegrityError("Recruit not offered", entity_id=recruit_id)
    if state.party.gold < recruit.cost:
        raise InvalidTransitionError(
            "Insufficient gold",
            action_type="HIRE_RECRUIT",
            log_message=f"Not enough gold to hire {recruit.name}. Need {recruit.cost} gold.",
        )
    if len(state.party.members) >= MAX_PARTY_SIZE:
        raise InvalidTransitionError(
            "Party is full",
            action_type="HIRE_RECRUIT",
            log_message=f"Party is full! Max {MAX_PARTY_SIZE} members.",
        )

    taken = {m.id for m in state.party.members}
    number = len(state.party.members) + 1
    while f"party-{number}" in taken:
        number += 1
    member = create_actor(
        f"party-{number}",
        recruit.name,
        recruit.role,
        level=recruit.level,
        include_starter_gear=True,
        rng=ctx.rng,
    )
    state.party.members = [*state.party.members, member]
    state.party.gold -= recruit.cost
    room.available_recruits = [r for r in room.available_recruits if r.id != recruit_id]
    state.log(f"{recruit.name} joins the party!")
    logger.info("Recruit hired", recruit_id=recruit_id, actor_id=member.id, cost=recruit.cost)


def rename_item(state: RunState, item_id: str, new_name: str) -> None:
    """Give an owned item a custom display name; loose items are searched first."""
    item = state.inventory.find(item_id)
    if item is None:
        for member in state.party.members:
            slot = find_equipped(member, item_id)
            if slot is not None:
                item = member.equipped(slot)
                break
    if item is None:
        raise DataIntegrityError("Item not owned", entity_id=item_id)
    item.custom_name = new_name
    state.log(f'Item renamed to "{new_name}".')


# =============================================================================
# Dispatch
# =============================================================================


def _dispatch(state: RunState, action: Action, ctx: TurnContext) -> None:
    match action:
        case AdvanceRoom():
            advance_room(state, ctx)
        case ResolveRoom():
            quick_resolve(state)
        case Attack(attacker_id=attacker_id, target_id=target_id):
            player_attack(state, attacker_id, target_id, ctx)
        case UseAbility(actor_id=actor_id, ability_id=ability_id, target_id=target_id):
            use_ability(state, actor_id, ability_id, target_id, ctx)
        case Escape():
            attempt_escape(state, ctx)
        case DisarmTrap():
            disarm_trap(state, ctx)
        case TriggerTrap():
            trigger_trap(state, ctx)
        case PrayAtShrine():
            pray_at_shrine(state, ctx)
        case TakeShortRest(actor_ids_to_heal=actor_ids):
            short_rest(state, actor_ids or [m.id for m in state.party.members])
        case TakeLongRest():
            long_rest(state)
        case BuyItem(item_id=item_id):
            buy_item(state, item_id, ctx)
        case SellItem(item_id=item_id):
            sell_item(state, item_id)
        case EquipItem(actor_id=actor_id, item_id=item_id, slot=slot):
            item, target = equip_from_inventory(
                _require_actor(state, actor_id, "EQUIP_ITEM"), state.inventory, item_id, slot
            )
            state.log(f"Equipped {item.display_name} to {target}")
        case UnequipItem(actor_id=actor_id, slot=slot):
            item = unequip_to_inventory(
                _require_actor(state, actor_id, "UNEQUIP_ITEM"), state.inventory, slot
            )
            state.log(f"Unequipped {item.display_name}.")
        case HireRecruit(recruit_id=recruit_id):
            hire_recruit(state, recruit_id, ctx)
        case RenameItem(item_id=item_id, new_name=new_name):
            rename_item(state, item_id, new_name)
        case SpendStatPoint(actor_id=actor_id, stat=stat):
            actor = _require_actor(state, actor_id, "SPEND_STAT_POINT")
            spend_stat_point(actor, stat)
            state.log(f"{actor.name} trains {stat} to {actor.skills.get(stat)}.")
        case EnterBossRoom():
            enter_boss_room(state, ctx)
        case DismissPopup():
            state.victory = False
            state.shrine_boon = None
        case _:
            raise InvalidTransitionError("Unsupported action", action_type=action.type)


def apply_action(state: RunState, action: Action, ctx: TurnContext | None = None) -> RunState:
    """Apply one action and return the resulting state.

    Args:
        state: Current state; never modified.
        action: Action to apply.
        ctx: Randomness for this action. Defaults to the generator derived
            from ``(seed, action_counter)``; tests may inject scripted dice.

    Returns:
        The new state with ``action_counter`` advanced, or the input state
        (possibly with one log line appended) if the action was rejected.
    """
    if isinstance(action, StartRun):
        return create_initial_run_state(action.seed)

    with log_context(seed=state.seed, depth=state.depth, action_type=action.type):
        try:
            if state.game_over and not isinstance(action, DismissPopup):
                raise InvalidTransitionError("The run is over", action_type=action.type)
            next_state = state.model_copy(deep=True)
            _dispatch(next_state, action, ctx if ctx is not None else action_context(state))
        except GameEngineError as exc:
            logger.info("Action rejected", reason=exc.message)
            if exc.log_message:
                return state.with_log(exc.log_message)
            return state

        next_state.action_counter += 1
        logger.debug("Action applied", new_depth=next_state.depth)
    return next_state


__all__ = [
    "advance_room",
    "enter_boss_room",
    "buy_item",
    "sell_item",
    "hire_recruit",
    "rename_item",
    "apply_action",
]
