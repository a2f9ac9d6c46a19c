"""Role abilities, three per class."""

from __future__ import annotations

from long_hall.content.types import AbilityDef, AbilityEffect
from long_hall.models.enums import (
    CooldownType,
    EffectTarget,
    EffectType,
    Role,
    Skill,
    Status,
)


ABILITIES: tuple[AbilityDef, ...] = (
    # Fighter
    AbilityDef(
        id="second_wind",
        name="Second Wind",
        role=Role.FIGHTER,
        description="Heal 1d10+level HP",
        cooldown_type=CooldownType.REST,
        cooldown_value=1,
        effect=AbilityEffect(EffectType.HEAL, EffectTarget.SELF, dice="1d10"),
    ),
    AbilityDef(
        id="action_surge",
        name="Action Surge",
        role=Role.FIGHTER,
        description="Take an extra attack this turn",
        cooldown_type=CooldownType.REST,
        cooldown_value=1,
        effect=AbilityEffect(EffectType.SPECIAL, EffectTarget.SELF),
        free_action=True,
    ),
    AbilityDef(
        id="champion_strike",
        name="Champion Strike",
        role=Role.FIGHTER,
        description="+2d6 damage on next hit",
        cooldown_type=CooldownType.TURNS,
        cooldown_value=3,
        effect=AbilityEffect(
            EffectType.BUFF, EffectTarget.SELF, dice="2d6", status=Status.CHAMPION_STRIKE
        ),
    ),
    # Wizard
    AbilityDef(
        id="magic_missile",
        name="Magic Missile",
        role=Role.WIZARD,
        description="Auto-hit 3d4+3 force damage",
        cooldown_type=CooldownType.TURNS,
        cooldown_value=2,
        effect=AbilityEffect(
            EffectType.DAMAGE,
            EffectTarget.ENEMY,
            dice="3d4",
            modifier=3,
            skill=Skill.MAGIC,
            auto_hit=True,
        ),
    ),
    AbilityDef(
        id="fireball",
        name="Fireball",
        role=Role.WIZARD,
        description="6d6 fire damage to all enemies",
        cooldown_type=CooldownType.REST,
        cooldown_value=1,
        effect=AbilityEffect(
            EffectType.DAMAGE, EffectTarget.ALL_ENEMIES, dice="6d6", skill=Skill.MAGIC
        ),
    ),
    AbilityDef(
        id="shield",
        name="Shield",
        role=Role.WIZARD,
        description="+5 AC until next turn",
        cooldown_type=CooldownType.COMBAT,
        cooldown_value=1,
        effect=AbilityEffect(
            EffectType.BUFF, EffectTarget.SELF, modifier=5, status=Status.SHIELDED
        ),
    ),
    # Cleric
    AbilityDef(
        id="healing_word",
        name="Healing Word",
        role=Role.CLERIC,
        description="Heal ally 1d8+level",
        cooldown_type=CooldownType.TURNS,
        cooldown_value=2,
        effect=AbilityEffect(EffectType.HEAL, EffectTarget.ALLY, dice="1d8"),
    ),
    AbilityDef(
        id="sacred_flame",
        name="Sacred Flame",
        role=Role.CLERIC,
        description="1d8 radiant damage",
        cooldown_type=CooldownType.TURNS,
        cooldown_value=0,
        effect=AbilityEffect(
            EffectType.DAMAGE, EffectTarget.ENEMY, dice="1d8", skill=Skill.MAGIC
        ),
    ),
    AbilityDef(
        id="turn_undead",
        name="Turn Undead",
        role=Role.CLERIC,
        description="Fear undead enemies for 2 turns",
        cooldown_type=CooldownType.REST,
        cooldown_value=1,
        effect=AbilityEffect(
            EffectType.DEBUFF, EffectTarget.ALL_ENEMIES, tag_filter="undead", duration=2
        ),
    ),
    # Rogue
    AbilityDef(
        id="sneak_attack",
        name="Sneak Attack",
        role=Role.ROGUE,
        description="+2d6 damage (Requires Hidden)",
        cooldown_type=CooldownType.COMBAT,
        cooldown_value=1,
        effect=AbilityEffect(EffectType.ATTACK, EffectTarget.ENEMY, dice="2d6"),
        requires_status=Status.HIDDEN,
    ),
    AbilityDef(
        id="cunning_action",
        name="Cunning Action",
        role=Role.ROGUE,
        description="Hide - Become untargetable",
        cooldown_type=CooldownType.TURNS,
        cooldown_value=0,
        effect=AbilityEffect(EffectType.SPECIAL, EffectTarget.SELF, status=Status.HIDDEN),
        free_action=True,
    ),
    AbilityDef(
        id="evasion",
        name="Evasion",
        role=Role.ROGUE,
        description="Dodge one attack completely",
        cooldown_type=CooldownType.REST,
        cooldown_value=1,
        effect=AbilityEffect(EffectType.SPECIAL, EffectTarget.SELF, status=Status.EVASIVE),
    ),
    # Ranger
    AbilityDef(
        id="aimed_shot",
        name="Aimed Shot",
        role=Role.RANGER,
        description="High accuracy ranged attack",
        cooldown_type=CooldownType.TURNS,
        cooldown_value=2,
        effect=AbilityEffect(
            EffectType.ATTACK,
            EffectTarget.ENEMY,
            attack_bonus=5,
            damage_bonus=2,
            skill=Skill.RANGED,
        ),
    ),
    AbilityDef(
        id="volley",
        name="Volley",
        role=Role.RANGER,
        description="Attack all enemies with ranged damage",
        cooldown_type=CooldownType.REST,
        cooldown_value=1,
        effect=AbilityEffect(
            EffectType.SPECIAL, EffectTarget.ALL_ENEMIES, dice="1d6", skill=Skill.RANGED
        ),
    ),
    AbilityDef(
        id="camouflage",
        name="Camouflage",
        role=Role.RANGER,
        description="Become Hidden (Stealth)",
        cooldown_type=CooldownType.COMBAT,
        cooldown_value=1,
        effect=AbilityEffect(EffectType.BUFF, EffectTarget.SELF, status=Status.HIDDEN),
        free_action=True,
    ),
)

ABILITIES_BY_ID: dict[str, AbilityDef] = {ability.id: ability for ability in ABILITIES}


def get_ability(ability_id: str) -> AbilityDef | None:
    return ABILITIES_BY_ID.get(ability_id)


def get_abilities_for_role(role: Role | str) -> list[AbilityDef]:
    """Abilities a member of ``role`` starts with, in catalogue order."""
    return [ability for ability in ABILITIES if ability.role == Role(role)]


__all__ = ["ABILITIES", "ABILITIES_BY_ID", "get_ability", "get_abilities_for_role"]
