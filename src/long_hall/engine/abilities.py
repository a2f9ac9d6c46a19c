"""Role abilities.

Abilities are data (:mod:`long_hall.content.abilities`); this module
validates a use and resolves the effect by its type tag. Offensive
effects give away a hidden user. Kills pay the same rewards as a basic
attack.
"""

from __future__ import annotations

from long_hall.content.abilities import get_ability
from long_hall.content.types import AbilityDef, AbilityEffect
from long_hall.core.constants import REST_COOLDOWN
from long_hall.core.exceptions import DataIntegrityError, InvalidTransitionError
from long_hall.core.logging import get_logger
from long_hall.engine.combat import (
    BASIC_ATTACK_DICE,
    advance_turn,
    check_victory,
    damage_enemy,
    require_enemy,
    require_member,
    require_player_turn,
    resolve_kill,
    spend_action,
)
from long_hall.engine.context import TurnContext
from long_hall.engine.equipment import attack_profile, equipment_bonuses, record_hit
from long_hall.models.actors import Actor
from long_hall.models.enums import CooldownType, EffectTarget, EffectType, EquipmentSlot, Status
from long_hall.models.rooms import Enemy, Room
from long_hall.models.state import RunState


logger = get_logger(__name__)

_OFFENSIVE = frozenset({EffectType.DAMAGE, EffectType.ATTACK})


def cooldown_after_use(ability: AbilityDef) -> int:
    """Until-rest abilities park on the rest sentinel; the rest count turns."""
    if ability.cooldown_type == CooldownType.REST:
        return REST_COOLDOWN
    return ability.cooldown_value


def is_offensive(effect: AbilityEffect) -> bool:
    return effect.type in _OFFENSIVE or (effect.type == EffectType.SPECIAL and effect.dice is not None)


# =============================================================================
# Effect Resolution
# =============================================================================


def _spell_bonuses(actor: Actor, effect: AbilityEffect) -> tuple[int, int]:
    """Accuracy and power for a skill-driven effect: skill plus gear."""
    skill = actor.skills.get(effect.skill) if effect.skill else 0
    gear = equipment_bonuses(actor)
    return skill + gear.attack_bonus, skill + gear.damage_bonus


def _area_damage(
    state: RunState, actor: Actor, ability: AbilityDef, room: Room, ctx: TurnContext
) -> None:
    _, power = _spell_bonuses(actor, ability.effect)
    parts = []
    for enemy in room.living_enemies:
        damage = max(1, ctx.dice.total(ability.effect.dice or "1d6") + ability.effect.modifier + power)
        damage_enemy(enemy, damage)
        parts.append(f"{enemy.name} takes {damage}")
    state.log(f"{actor.name} uses {ability.name}! " + ", ".join(parts) + ".")


def _single_damage(
    state: RunState,
    actor: Actor,
    ability: AbilityDef,
    target: Enemy,
    ctx: TurnContext,
) -> None:
    effect = ability.effect
    accuracy, power = _spell_bonuses(actor, effect)
    if not effect.auto_hit:
        roll = ctx.dice.roll_attack(accuracy, target.ac)
        check = f"[{roll.natural}+{roll.bonus}={roll.total} vs AC {target.ac}]"
        if not roll.hit:
            state.log(f"{actor.name} uses {ability.name} on {target.name}: {check} MISS!")
            return
    else:
        check = "[auto-hit]"
    damage = max(1, ctx.dice.total(effect.dice or "1d6") + effect.modifier + power)
    damage_enemy(target, damage)
    state.log(f"{actor.name} uses {ability.name} on {target.name}: {check} HIT! {damage} damage.")


def _weapon_strike(
    state: RunState,
    actor: Actor,
    ability: AbilityDef,
    target: Enemy,
    ctx: TurnContext,
) -> None:
    """A weapon attack with the ability's own accuracy and damage on top."""
    effect = ability.effect
    if effect.skill is not None:
        accuracy, power = _spell_bonuses(actor, effect)
    else:
        profile = attack_profile(actor)
        accuracy, power = profile.attack_bonus, profile.damage_bonus
    accuracy += effect.attack_bonus
    power += effect.damage_bonus

    roll = ctx.dice.roll_attack(accuracy, target.ac)
    check = f"[{roll.natural}+{roll.bonus}={roll.total} vs AC {target.ac}]"
    if not roll.hit:
        state.log(f"{actor.name} uses {ability.name} on {target.name}: {check} MISS!")
        return
    damage = ctx.dice.roll_damage(BASIC_ATTACK_DICE, power, minimum=1)
    if effect.dice:
        damage += ctx.dice.total(effect.dice)
    critical = " CRITICAL HIT!" if roll.is_critical else ""
    state.log(
        f"{actor.name} uses {ability.name} on {target.name}: {check}{critical} HIT! {damage} damage."
    )
    killed = damage_enemy(target, damage)
    weapon = actor.equipped(EquipmentSlot.MAIN_HAND)
    if weapon is not None:
        record_hit(
            weapon, damage, is_kill=killed, is_critical=roll.is_critical, enemy_name=target.name
        )


def _heal(state: RunState, actor: Actor, ability: AbilityDef, target: Actor, ctx: TurnContext) -> None:
    amount = ctx.dice.total(ability.effect.dice or "1d4") + actor.level + actor.skills.faith
    target.hp = target.hp.model_copy(
        update={"current": min(target.hp.max, target.hp.current + amount)}
    )
    state.log(f"{actor.name} heals {target.name} for {amount} HP.")


def _grant_status(state: RunState, target: Actor, status: str) -> None:
    target.add_status(status)
    entries = [f"{target.name} gains {status}!"]
    if status == Status.HIDDEN:
        entries.append(f"{target.name} slips into the shadows.")
    state.log(*entries)


def _turn_enemies(state: RunState, actor: Actor, ability: AbilityDef, room: Room) -> None:
    effect = ability.effect
    affected = [
        e for e in room.living_enemies if effect.tag_filter is None or effect.tag_filter in e.tags
    ]
    for enemy in affected:
        enemy.turned_rounds = max(enemy.turned_rounds, effect.duration)
    if affected:
        names = ", ".join(e.name for e in affected)
        state.log(f"{actor.name} uses {ability.name}! {names} flee in terror!")
    else:
        state.log(f"{actor.name} uses {ability.name}, but nothing answers the call.")


# =============================================================================
# Entry Point
# =============================================================================


def use_ability(
    state: RunState,
    actor_id: str,
    ability_id: str,
    target_id: str | None,
    ctx: TurnContext,
) -> None:
    """Validate and resolve one ability use.

    Args:
        state: State to mutate (already a private copy).
        actor_id: Member using the ability.
        ability_id: Ability to use; the member must know it.
        target_id: Enemy for single-target attacks, ally for heals.
        ctx: Randomness for the action.

    Raises:
        InvalidTransitionError: Wrong turn, ability on cooldown, missing
            required status, or no action left.
        DataIntegrityError: Unknown actor, ability or target.
    """
    room = require_player_turn(state, "USE_ABILITY")
    actor = require_member(state, actor_id, "USE_ABILITY")
    ability = get_ability(ability_id)
    ability_state = actor.ability(ability_id)
    if ability is None or ability_state is None:
        raise DataIntegrityError("Unknown ability", entity_id=ability_id)
    if not ability_state.ready:
        raise InvalidTransitionError(
            f"{ability.name} is on cooldown",
            action_type="USE_ABILITY",
            log_message=f"{ability.name} is not ready yet.",
        )
    if ability.requires_status and not actor.has_status(ability.requires_status):
        raise InvalidTransitionError(
            f"{ability.name} requires {ability.requires_status}",
            action_type="USE_ABILITY",
            log_message=f"{actor.name} must be {ability.requires_status} to use {ability.name}.",
        )

    effect = ability.effect
    enemy_target = None
    ally_target = actor
    if effect.target == EffectTarget.ENEMY:
        enemy_target = require_enemy(room, target_id)
    elif effect.target == EffectTarget.ALLY and target_id is not None:
        ally_target = require_member(state, target_id, "USE_ABILITY")

    if not ability.free_action:
        spend_action(state, actor, "USE_ABILITY")
    ability_state.current_cooldown = cooldown_after_use(ability)

    match effect.type:
        case EffectType.DAMAGE if enemy_target is None:
            _area_damage(state, actor, ability, room, ctx)
        case EffectType.DAMAGE:
            _single_damage(state, actor, ability, enemy_target, ctx)
        case EffectType.ATTACK:
            if enemy_target is None:
                raise DataIntegrityError("Weapon abilities need a target", entity_id=ability_id)
            _weapon_strike(state, actor, ability, enemy_target, ctx)
        case EffectType.HEAL:
            _heal(state, actor, ability, ally_target, ctx)
        case EffectType.BUFF:
            if effect.status:
                _grant_status(state, actor, effect.status)
        case EffectType.DEBUFF:
            _turn_enemies(state, actor, ability, room)
        case EffectType.SPECIAL if effect.dice is not None:
            _area_damage(state, actor, ability, room, ctx)
        case EffectType.SPECIAL if effect.status is not None:
            _grant_status(state, actor, effect.status)
        case EffectType.SPECIAL:
            state.extra_actions += 1
            state.log(f"{actor.name} surges with energy ({ability.name})! Take another action!")

    if is_offensive(effect) and actor.remove_status(Status.HIDDEN):
        state.log(f"{actor.name} reveals themselves!")

    for enemy in [e for e in room.enemies if not e.is_alive]:
        resolve_kill(state, enemy, ctx)

    logger.debug("Ability used", actor_id=actor.id, ability_id=ability_id, free=ability.free_action)
    if check_victory(state, ctx):
        return
    if not ability.free_action:
        advance_turn(state, ctx)


__all__ = ["cooldown_after_use", "is_offensive", "use_ability"]
