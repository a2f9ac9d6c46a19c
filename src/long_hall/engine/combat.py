"""Turn-based combat.

A fight alternates between the player side and the enemy side. During
the player round every living member may act once; a member who has
already acted may act again only by spending one of the party's extra
actions. When nobody is left to act, the enemies attack, cooldowns tick
and the next round starts.

Every function here works on a state the caller owns (the state machine
passes a fresh copy) and raises :class:`InvalidTransitionError` or
:class:`DataIntegrityError` before mutating anything when an action does
not apply.
"""

from __future__ import annotations

from long_hall.core.constants import REST_COOLDOWN
from long_hall.core.exceptions import DataIntegrityError, InvalidTransitionError
from long_hall.core.logging import get_logger
from long_hall.engine.context import TurnContext
from long_hall.engine.difficulty import calculate_escape_dc, escape_dc_breakdown
from long_hall.engine.enchanting import enchant_equipped
from long_hall.engine.equipment import armor_class, attack_profile, record_hit
from long_hall.engine.generator import generate_room
from long_hall.engine.hashing import hash_with_seed
from long_hall.engine.loot import roll_drop, roll_kill_gold
from long_hall.engine.progression import award_xp
from long_hall.engine.rng import SeededRNG
from long_hall.models.actors import Actor
from long_hall.models.enums import CombatTurn, EquipmentSlot, Role, RoomType, Status
from long_hall.models.rooms import Enemy, Room
from long_hall.models.state import Party, RunState


logger = get_logger(__name__)

XP_PER_POWER = 15
VICTORY_GOLD = (5, 15)
BOSS_VICTORY_GOLD = (20, 49)
CHAMPION_STRIKE_DICE = "2d6"
BASIC_ATTACK_DICE = "1d8"

# (ceiling, tier) bands over randint(0, 99) for the boss blessing.
_BOSS_BLESSING_BANDS: tuple[tuple[int, int], ...] = ((60, 3), (90, 4), (100, 5))


# =============================================================================
# Guards & Bookkeeping
# =============================================================================


def require_player_turn(state: RunState, action_type: str) -> Room:
    """The current room, provided it is the party's turn in a fight."""
    if state.combat_turn != CombatTurn.PLAYER or state.current_room is None:
        raise InvalidTransitionError("Not the player's turn", action_type=action_type)
    return state.current_room


def require_member(state: RunState, actor_id: str, action_type: str) -> Actor:
    """A living party member, by id."""
    actor = state.party.member(actor_id)
    if actor is None:
        raise DataIntegrityError("Unknown party member", entity_id=actor_id)
    if not actor.is_alive:
        raise InvalidTransitionError(f"{actor.name} has fallen", action_type=action_type)
    return actor


def require_enemy(room: Room, enemy_id: str | None) -> Enemy:
    enemy = next((e for e in room.living_enemies if e.id == enemy_id), None)
    if enemy is None:
        raise DataIntegrityError("Unknown target", entity_id=enemy_id)
    return enemy


def spend_action(state: RunState, actor: Actor, action_type: str) -> None:
    """Mark ``actor`` as having acted, or consume an extra action.

    Raises:
        InvalidTransitionError: If the actor already acted and no extra
            action is left.
    """
    if actor.id not in state.acted_this_round:
        state.acted_this_round = [*state.acted_this_round, actor.id]
        return
    if state.extra_actions <= 0:
        raise InvalidTransitionError(
            f"{actor.name} has already acted this round", action_type=action_type
        )
    state.extra_actions -= 1


def best_agility(party: Party) -> int:
    return max((m.skills.agility for m in party.living), default=0)


def damage_actor(actor: Actor, amount: int) -> bool:
    """Apply damage; returns True if this blow dropped the actor."""
    was_alive = actor.is_alive
    current = max(0, actor.hp.current - amount)
    actor.hp = actor.hp.model_copy(update={"current": current})
    if current == 0:
        actor.is_alive = False
    return was_alive and current == 0


def damage_enemy(enemy: Enemy, amount: int) -> bool:
    """Apply damage; returns True if the enemy died."""
    enemy.hp = max(0, enemy.hp - amount)
    return enemy.hp == 0


def party_wiped(state: RunState) -> None:
    """Terminal state once every member has fallen."""
    state.log("The entire party has fallen! Game Over.")
    state.game_over = True
    state.room_resolved = True
    state.combat_turn = None
    logger.info("Party wiped", depth=state.depth)


def _clear_fight_statuses(party: Party) -> None:
    for member in party.members:
        member.remove_status(Status.SHIELDED)
        member.remove_status(Status.HIDDEN)


# =============================================================================
# Initiative & Enemy Turn
# =============================================================================


def roll_initiative(state: RunState, ctx: TurnContext) -> bool:
    """Open round 1 of a fight; returns True if the enemies act first.

    The party rolls ``1d20 + best agility`` and the enemies roll
    ``1d20 + strongest power // 2``. Ties go to the party.
    """
    room = state.current_room
    enemies = room.living_enemies if room else []
    party_total = ctx.dice.d20() + best_agility(state.party)
    enemy_total = ctx.dice.d20() + max((e.power for e in enemies), default=0) // 2
    enemies_first = enemy_total > party_total
    state.combat_turn = CombatTurn.PLAYER
    state.combat_round = 1
    state.acted_this_round = []
    state.log(
        f"⚔️ Initiative: Party {party_total} vs Enemies {enemy_total}",
        "Enemies act first!" if enemies_first else "Party acts first!",
        "━━━ ROUND 1 ━━━",
    )
    return enemies_first


def enemy_attack(state: RunState, enemy: Enemy, target: Actor, ctx: TurnContext) -> None:
    """One enemy swing: ``1d20 + power`` against the target's AC."""
    if target.remove_status(Status.EVASIVE):
        state.log(f"{target.name} evades {enemy.name}'s attack!")
        return
    roll = ctx.dice.roll_attack(enemy.power, armor_class(target))
    header = (
        f"{enemy.name} attacks {target.name}: "
        f"[{roll.natural}+{roll.bonus}={roll.total} vs AC {roll.target_ac}]"
    )
    if not roll.hit:
        state.log(f"{header} MISS!")
        return
    damage = max(0, ctx.dice.total(enemy.damage))
    state.log(f"{header} HIT for {damage} damage!")
    if damage_actor(target, damage):
        state.log(f"{target.name} has fallen!")


def end_round(state: RunState) -> None:
    """Tick cooldowns and effects, then hand the turn back to the party."""
    for member in state.party.members:
        for ability in member.abilities:
            if 0 < ability.current_cooldown < REST_COOLDOWN:
                ability.current_cooldown -= 1
        member.remove_status(Status.SHIELDED)
    if state.current_room is not None:
        for enemy in state.current_room.enemies:
            if enemy.turned_rounds > 0:
                enemy.turned_rounds -= 1
    state.combat_round += 1
    state.combat_turn = CombatTurn.PLAYER
    state.acted_this_round = []
    state.log(f"━━━ ROUND {state.combat_round} ━━━")


def enemy_turn(state: RunState, ctx: TurnContext) -> None:
    """Every living enemy attacks a random visible member, then the round ends."""
    room = state.current_room
    if room is None:
        return
    state.combat_turn = CombatTurn.ENEMY
    for enemy in room.living_enemies:
        if enemy.turned_rounds > 0:
            state.log(f"{enemy.name} cowers in holy terror!")
            continue
        visible = [m for m in state.party.living if not m.has_status(Status.HIDDEN)]
        if not visible:
            state.log(f"{enemy.name} cannot find anyone to attack.")
            continue
        enemy_attack(state, enemy, ctx.rng.pick(visible), ctx)
        if state.party.all_dead:
            break

    if state.party.all_dead:
        party_wiped(state)
        return
    end_round(state)


def advance_turn(state: RunState, ctx: TurnContext) -> None:
    """After a member acts: name who is next, or start the enemy turn."""
    if state.game_over or state.combat_turn != CombatTurn.PLAYER:
        return
    waiting = [m for m in state.party.living if m.id not in state.acted_this_round]
    if waiting:
        state.log(f"→ {waiting[0].name}'s turn")
    elif state.extra_actions > 0:
        state.log(f"→ Extra action available ({state.extra_actions})")
    else:
        enemy_turn(state, ctx)


# =============================================================================
# Kills & Victory
# =============================================================================


def resolve_kill(state: RunState, enemy: Enemy, ctx: TurnContext) -> None:
    """Pay out gold, a possible drop and XP, then remove the body."""
    gold = roll_kill_gold(enemy, ctx.rng)
    drop = roll_drop(enemy, ctx.rng)
    xp = enemy.power * XP_PER_POWER

    state.party.gold += gold
    entries = [f"{enemy.name} defeated! +{gold} gold, +{xp} XP"]
    if drop is not None:
        state.inventory.items.append(drop)
        entries.append(f"🎁 {enemy.name} dropped {drop.display_name}!")
    entries.extend(award_xp(state.party.members, xp, ctx.dice))
    state.log(*entries)

    room = state.current_room
    if room is not None:
        room.enemies = [e for e in room.enemies if e.id != enemy.id]
    logger.debug("Enemy killed", enemy=enemy.name, gold=gold, xp=xp, drop=drop is not None)


def _blessing_tier(rng: SeededRNG) -> int:
    roll = rng.randint(0, 99)
    return next(tier for ceiling, tier in _BOSS_BLESSING_BANDS if roll < ceiling)


def _boss_victory(state: RunState, room: Room, ctx: TurnContext) -> None:
    gold = ctx.rng.randint(*BOSS_VICTORY_GOLD)
    state.party.gold += gold
    entries = [f"Victory! The boss is slain. +{gold} gold."]
    if room.loot:
        state.inventory.items.extend(item.model_copy(deep=True) for item in room.loot)
        entries.append(
            "🎁 Boss Loot Collected: " + ", ".join(item.display_name for item in room.loot)
        )

    boon = "🏆 The boss is defeated!"
    lead = state.party.living[0] if state.party.living else None
    if lead is not None:
        slot = (
            EquipmentSlot.MAIN_HAND
            if lead.equipped(EquipmentSlot.MAIN_HAND)
            else next(iter(lead.equipment), None)
        )
        if slot is not None:
            result = enchant_equipped(
                lead, slot, ctx.rng, tier=_blessing_tier(ctx.rng), source="the boss chamber"
            )
            boon = (
                f"🏆 {result.tier_name} Boss Blessing! {lead.name}'s {result.base_name} "
                f"becomes {result.item.display_name}!"
            )
    entries.append(boon)
    state.log(*entries)

    parent = state.parent_intermission
    state.current_room = parent.model_copy(update={"boss_room": None}) if parent else None
    state.parent_intermission = None
    state.in_boss_room = False
    state.room_resolved = False
    state.shrine_boon = boon
    logger.info("Boss defeated", depth=state.depth, gold=gold)


def check_victory(state: RunState, ctx: TurnContext) -> bool:
    """End the fight if no enemy is left standing; returns whether it ended."""
    room = state.current_room
    if room is None or room.has_enemies or state.game_over:
        return False

    state.victory = True
    state.combat_turn = None
    state.acted_this_round = []
    state.extra_actions = 0
    _clear_fight_statuses(state.party)

    if state.in_boss_room and room.type == RoomType.BOSS:
        _boss_victory(state, room, ctx)
        return True

    gold = ctx.rng.randint(*VICTORY_GOLD)
    state.party.gold += gold
    state.log(f"Victory! All enemies defeated. +{gold} gold.")
    # Guarded shrines and hazards stay open so they can still be used.
    state.room_resolved = room.type in (RoomType.COMBAT, RoomType.ELITE)
    logger.debug("Fight won", depth=state.depth, room_type=str(room.type))
    return True


def finish_player_action(state: RunState, ctx: TurnContext) -> None:
    if not check_victory(state, ctx):
        advance_turn(state, ctx)


# =============================================================================
# Player Actions
# =============================================================================


def player_attack(state: RunState, attacker_id: str, target_id: str, ctx: TurnContext) -> None:
    """Basic weapon attack.

    Hits when ``1d20 + attack bonus >= target AC``; damage is
    ``max(1, 1d8 + damage bonus)`` plus 2d6 from a pending Champion
    Strike. Attacking gives away a hidden attacker.
    """
    room = require_player_turn(state, "ATTACK")
    attacker = require_member(state, attacker_id, "ATTACK")
    target = require_enemy(room, target_id)
    spend_action(state, attacker, "ATTACK")

    profile = attack_profile(attacker)
    roll = ctx.dice.roll_attack(profile.attack_bonus, target.ac)
    attacker.remove_status(Status.HIDDEN)
    header = (
        f"{attacker.name} attacks {target.name} ({profile.damage_type}): "
        f"[{roll.natural}+{roll.bonus}={roll.total} vs AC {target.ac}]"
    )
    if not roll.hit:
        state.log(f"{header} MISS!")
        finish_player_action(state, ctx)
        return

    damage = ctx.dice.roll_damage(BASIC_ATTACK_DICE, profile.damage_bonus, minimum=1)
    extra = ""
    if attacker.remove_status(Status.CHAMPION_STRIKE):
        bonus = ctx.dice.total(CHAMPION_STRIKE_DICE)
        damage += bonus
        extra = f" (+{bonus} Champion Strike)"
    critical = " CRITICAL HIT!" if roll.is_critical else ""
    state.log(f"{header}{critical} HIT for {damage}{extra} damage!")

    killed = damage_enemy(target, damage)
    weapon = attacker.equipped(EquipmentSlot.MAIN_HAND)
    if weapon is not None:
        record_hit(
            weapon, damage, is_kill=killed, is_critical=roll.is_critical, enemy_name=target.name
        )
    if killed:
        resolve_kill(state, target, ctx)
    finish_player_action(state, ctx)


def attempt_escape(state: RunState, ctx: TurnContext) -> None:
    """Roll 1d20 against the escape DC.

    Success flees into the next room, generated from a separate
    ``seed + "retreat"`` stream; the fallen are not pruned and no
    weapon encounter is counted. Failure gives every living enemy a free
    attack and the party keeps its turn.
    """
    room = require_player_turn(state, "ESCAPE")
    if not room.is_fight or room.type == RoomType.BOSS or state.in_boss_room:
        raise InvalidTransitionError(
            "Cannot escape this room",
            action_type="ESCAPE",
            log_message="There is no escape from this chamber!",
        )
    living = state.party.living
    args = (
        state.depth,
        len(room.living_enemies),
        room.type == RoomType.ELITE,
        best_agility(state.party),
        any(m.role == Role.ROGUE for m in living),
    )
    dc = calculate_escape_dc(*args)
    breakdown = escape_dc_breakdown(*args)
    roll = ctx.dice.d20()

    if roll >= dc:
        state.log(f"🏃 Escape attempt: [{roll} vs DC {dc}] SUCCESS! ({breakdown})")
        old_depth = state.depth
        state.depth = old_depth + 1
        retreat_rng = SeededRNG(hash_with_seed(f"{state.seed}retreat", old_depth))
        new_room = generate_room(state, retreat_rng)
        state.current_room = new_room
        state.combat_turn = CombatTurn.PLAYER if new_room.is_fight else None
        state.combat_round = 1 if new_room.is_fight else 0
        state.acted_this_round = []
        state.extra_actions = 0
        state.victory = False
        state.room_resolved = new_room.type in (RoomType.INTERMISSION, RoomType.BOSS)
        _clear_fight_statuses(state.party)
        state.log(f"Entered room {state.depth}: {str(new_room.type).upper()}")
        logger.info("Escaped", from_depth=old_depth, dc=dc, roll=roll)
        return

    state.log(f"🏃 Escape attempt: [{roll} vs DC {dc}] FAILED! ({breakdown})")
    for enemy in room.living_enemies:
        targets = state.party.living
        if not targets:
            break
        enemy_attack(state, enemy, ctx.rng.pick(targets), ctx)
    if state.party.all_dead:
        party_wiped(state)


# =============================================================================
# Quick Resolve
# =============================================================================


def _lite_outcome(rng: SeededRNG, party_power: int, enemy_power: int) -> tuple[int, int]:
    """Damage and stress from a single opposed roll of party vs enemy power."""
    margin = (rng.randint(1, 20) + party_power) - (rng.randint(1, 20) + enemy_power)
    if margin < 0:
        shortfall = abs(margin) // 2
        return rng.randint(2, 6) + shortfall, rng.randint(2, 5) + shortfall
    if margin < 5:
        return rng.randint(1, 4), rng.randint(1, 3)
    if margin < 10:
        return rng.randint(0, 2), rng.randint(0, 1)
    return 0, 0


def quick_resolve(state: RunState) -> None:
    """Settle the current room in one roll instead of playing it out.

    Fights are reduced to a party-vs-enemy power contest whose margin
    sets the damage and stress taken. Damage lands on the front of the
    party in order, and only members who take some of it gain stress.
    Other rooms simply resolve.
    """
    room = state.current_room
    if room is None or state.room_resolved:
        raise InvalidTransitionError("Nothing to resolve", action_type="RESOLVE_ROOM")

    if room.type not in (RoomType.COMBAT, RoomType.ELITE):
        if room.is_fight:
            raise InvalidTransitionError(
                "Guarded rooms must be fought", action_type="RESOLVE_ROOM"
            )
        state.room_resolved = True
        state.log(f"Resolved {room.type} room safely.")
        return

    rng = SeededRNG(hash_with_seed(f"{state.seed}-resolve-{state.depth}", 0))
    party_power = 2 * len(state.party.living) + 2
    enemy_power = sum(e.power for e in room.living_enemies)
    damage, stress = _lite_outcome(rng, party_power, enemy_power)

    remaining = damage
    for member in state.party.living:
        if remaining <= 0:
            break
        taken = min(member.hp.current, remaining)
        remaining -= taken
        damage_actor(member, taken)
        member.stress = member.stress.model_copy(
            update={"current": min(member.stress.max, member.stress.current + stress)}
        )

    room.enemies = []
    state.combat_turn = None
    state.acted_this_round = []
    state.extra_actions = 0
    state.room_resolved = True
    entries = [f"Combat resolved: Took {damage} damage, {stress} stress."]
    if damage == 0:
        entries.append("Flawless victory!")
    state.log(*entries)
    if state.party.all_dead:
        party_wiped(state)
    logger.debug("Room quick-resolved", depth=state.depth, damage=damage, stress=stress)


__all__ = [
    "XP_PER_POWER",
    "require_player_turn",
    "require_member",
    "require_enemy",
    "spend_action",
    "best_agility",
    "damage_actor",
    "damage_enemy",
    "party_wiped",
    "roll_initiative",
    "enemy_attack",
    "end_round",
    "enemy_turn",
    "advance_turn",
    "resolve_kill",
    "check_victory",
    "finish_player_action",
    "player_attack",
    "attempt_escape",
    "quick_resolve",
]
