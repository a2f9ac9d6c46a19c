"""Short and long rests.

Short rests are a per-segment budget spent between fights. The party
takes an automatic long rest on reaching each intermission, and may take
another there by choice.
"""

from __future__ import annotations

from collections.abc import Collection

from long_hall.content.themes import RUN_MUTATIONS
from long_hall.core.constants import MAX_SHORT_RESTS, REST_COOLDOWN
from long_hall.core.exceptions import InvalidTransitionError
from long_hall.core.logging import get_logger
from long_hall.engine.rng import SeededRNG
from long_hall.engine.themes import generate_theme
from long_hall.models.actors import Actor
from long_hall.models.enums import RoomType
from long_hall.models.state import RunState


logger = get_logger(__name__)

LONG_REST_STRESS_RELIEF = 5
MUTATION_CHANCE = 0.5


def _heal(actor: Actor, amount: int) -> None:
    actor.hp = actor.hp.model_copy(update={"current": min(actor.hp.max, actor.hp.current + amount)})


def _reset_cooldowns(actor: Actor, *, rest_only: bool) -> None:
    for ability in actor.abilities:
        if not rest_only or ability.current_cooldown >= REST_COOLDOWN:
            ability.current_cooldown = 0


def short_rest(state: RunState, actor_ids: Collection[str]) -> None:
    """Heal the chosen members and recharge until-rest abilities.

    A member with a hit die spends it to heal half their max HP; without
    one they heal a quarter. Fallen members are not healed.

    Raises:
        InvalidTransitionError: During a fight or with no rests left.
    """
    if state.in_combat:
        raise InvalidTransitionError(
            "Cannot rest during combat",
            action_type="TAKE_SHORT_REST",
            log_message="You cannot rest while enemies are near!",
        )
    if state.short_rests_remaining <= 0:
        raise InvalidTransitionError(
            "No short rests remaining",
            action_type="TAKE_SHORT_REST",
            log_message="No short rests remaining.",
        )
    chosen = set(actor_ids)
    for member in state.party.members:
        if member.id in chosen and member.is_alive:
            if member.hit_dice.current > 0:
                _heal(member, member.hp.max // 2)
                member.hit_dice = member.hit_dice.model_copy(
                    update={"current": member.hit_dice.current - 1}
                )
            else:
                _heal(member, member.hp.max // 4)
        _reset_cooldowns(member, rest_only=True)
    state.short_rests_remaining -= 1
    state.log("Party took a short rest. Rest abilities restored!")


def segment_long_rest(state: RunState, rng: SeededRNG) -> None:
    """The automatic long rest taken on reaching an intermission.

    Living members return to full HP, regain half their hit dice (at
    least one) and shed some stress; every cooldown clears. The dungeon
    may gain a mutation and the theme is rerolled for the next segment.
    """
    for member in state.party.living:
        member.hp = member.hp.model_copy(update={"current": member.hp.max})
        regained = max(1, member.hit_dice.max // 2)
        member.hit_dice = member.hit_dice.model_copy(
            update={"current": min(member.hit_dice.max, member.hit_dice.current + regained)}
        )
        member.stress = member.stress.model_copy(
            update={"current": max(0, member.stress.current - LONG_REST_STRESS_RELIEF)}
        )
        _reset_cooldowns(member, rest_only=False)

    entries = ["Party took a Long Rest. Theme changed."]
    if rng.random() < MUTATION_CHANCE:
        mutation = rng.pick(RUN_MUTATIONS)
        state.mutations = [*state.mutations, mutation]
        entries.append(f"New Mutation Applied: {mutation}!")
        logger.info("Mutation applied", mutation=mutation, depth=state.depth)

    state.theme_id = generate_theme(rng)
    state.short_rests_remaining = MAX_SHORT_RESTS
    state.long_rests_taken += 1
    state.log(*entries)


def long_rest(state: RunState) -> None:
    """A chosen long rest at an intermission: everything restored.

    Raises:
        InvalidTransitionError: Outside an intermission or during a fight.
    """
    room = state.current_room
    if state.in_combat or room is None or room.type != RoomType.INTERMISSION:
        raise InvalidTransitionError(
            "Long rests need a safe intermission",
            action_type="TAKE_LONG_REST",
            log_message="You can only take a long rest in a safe place.",
        )
    for member in state.party.living:
        member.hp = member.hp.model_copy(update={"current": member.hp.max})
        member.stress = member.stress.model_copy(update={"current": 0})
        member.hit_dice = member.hit_dice.model_copy(update={"current": member.hit_dice.max})
        _reset_cooldowns(member, rest_only=False)
    state.short_rests_remaining = MAX_SHORT_RESTS
    state.long_rests_taken += 1
    state.log("Party takes a long rest. All resources restored!")


__all__ = ["short_rest", "segment_long_rest", "long_rest"]
