"""Enemy catalogue, grouped by power tier."""

from __future__ import annotations

from long_hall.content.types import EnemyTemplate


ENEMIES: tuple[EnemyTemplate, ...] = (
    # TIER 1 - Power 1-2: Early floors, weak enemies
    EnemyTemplate("rat_swarm", "Rat Swarm", ("vermin", "beast"), power=1, hp=8, damage="1d4"),
    EnemyTemplate("giant_rat", "Giant Rat", ("vermin", "beast"), power=1, hp=6, damage="1d4"),
    EnemyTemplate("kobold", "Kobold", ("humanoid", "kobold"), power=1, hp=6, damage="1d4+1"),
    EnemyTemplate("goblin", "Goblin", ("humanoid", "goblin"), power=1, hp=7, damage="1d4+1"),
    EnemyTemplate("slime", "Green Slime", ("slime", "ooze"), power=2, hp=12, damage="1d6"),
    EnemyTemplate("giant_spider", "Giant Spider", ("vermin", "beast"), power=2, hp=10, damage="1d6"),
    EnemyTemplate("stirge", "Stirge", ("vermin", "beast"), power=1, hp=4, damage="1d4"),
    EnemyTemplate("bandit", "Bandit", ("humanoid",), power=2, hp=11, damage="1d6"),
    # TIER 2 - Power 3-4: Mid-early floors
    EnemyTemplate("skeleton", "Skeleton Warrior", ("undead", "skeleton"), power=3, hp=12, damage="1d6+1"),
    EnemyTemplate("zombie", "Rotting Zombie", ("undead", "zombie"), power=3, hp=14, damage="1d6"),
    EnemyTemplate("dire_wolf", "Dire Wolf", ("beast",), power=3, hp=15, damage="1d6+2"),
    EnemyTemplate("hobgoblin", "Hobgoblin", ("humanoid", "goblin"), power=3, hp=14, damage="1d8"),
    EnemyTemplate("gnoll", "Gnoll Hunter", ("humanoid", "gnoll"), power=3, hp=16, damage="1d8"),
    EnemyTemplate("cultist", "Dark Cultist", ("humanoid", "magic"), power=3, hp=10, damage="1d8"),
    EnemyTemplate("bugbear", "Bugbear", ("humanoid", "goblin"), power=4, hp=18, damage="1d8+1"),
    EnemyTemplate("harpy", "Harpy", ("monstrosity", "flying"), power=4, hp=14, damage="1d6+2"),
    # TIER 3 - Power 5-6: Mid floors, challenging enemies
    EnemyTemplate("orc", "Orc Berserker", ("humanoid", "orc"), power=5, hp=18, damage="1d8+2"),
    EnemyTemplate("ghoul", "Ghoul", ("undead",), power=5, hp=16, damage="1d8+1"),
    EnemyTemplate("wight", "Wight", ("undead",), power=5, hp=20, damage="1d10"),
    EnemyTemplate("owlbear", "Owlbear", ("beast", "monstrosity"), power=5, hp=22, damage="1d10+2"),
    EnemyTemplate("minotaur", "Minotaur", ("monstrosity",), power=6, hp=28, damage="2d6"),
    EnemyTemplate("werewolf", "Werewolf", ("humanoid", "shapechanger"), power=6, hp=24, damage="1d10+2"),
    EnemyTemplate("troll", "Troll", ("giant",), power=6, hp=30, damage="2d6+2"),
    EnemyTemplate("wraith", "Wraith", ("undead", "incorporeal"), power=6, hp=18, damage="1d10+2"),
    # TIER 4 - Power 7-8: Deep floors, dangerous enemies
    EnemyTemplate("ogre", "Ogre", ("giant",), power=7, hp=32, damage="2d6+2"),
    EnemyTemplate("ettin", "Ettin", ("giant",), power=7, hp=36, damage="2d8"),
    EnemyTemplate("vampire_spawn", "Vampire Spawn", ("undead", "vampire"), power=7, hp=28, damage="1d10+3"),
    EnemyTemplate("manticore", "Manticore", ("monstrosity", "flying"), power=7, hp=30, damage="2d6+2"),
    EnemyTemplate("hill_giant", "Hill Giant", ("giant",), power=8, hp=45, damage="2d8+3"),
    EnemyTemplate("flesh_golem", "Flesh Golem", ("construct",), power=8, hp=40, damage="2d8+2"),
    EnemyTemplate("chimera", "Chimera", ("monstrosity", "flying"), power=8, hp=38, damage="2d8+2"),
    EnemyTemplate("oni", "Oni", ("giant", "magic"), power=8, hp=35, damage="2d8+3"),
    # TIER 5 - Power 9-10: Late floors, elite enemies
    EnemyTemplate("frost_giant", "Frost Giant", ("giant",), power=9, hp=55, damage="3d6+4"),
    EnemyTemplate("fire_giant", "Fire Giant", ("giant",), power=9, hp=50, damage="3d6+4"),
    EnemyTemplate("young_dragon", "Young Dragon", ("dragon", "flying"), power=9, hp=48, damage="2d10+3"),
    EnemyTemplate("beholder_zombie", "Beholder Zombie", ("undead", "aberration"), power=9, hp=40, damage="2d10"),
    EnemyTemplate("mind_flayer", "Mind Flayer", ("aberration", "magic"), power=10, hp=42, damage="2d10+4"),
    EnemyTemplate("death_knight", "Death Knight", ("undead", "knight"), power=10, hp=60, damage="2d10+5"),
    EnemyTemplate("stone_giant", "Stone Giant", ("giant",), power=10, hp=65, damage="3d8+4"),
    # TIER 6 - Power 11+: Boss tier, extremely dangerous
    EnemyTemplate("adult_dragon", "Adult Dragon", ("dragon", "flying", "boss"), power=12, hp=120, damage="3d10+6"),
    EnemyTemplate("lich", "Lich", ("undead", "magic", "boss"), power=12, hp=80, damage="3d8+6"),
    EnemyTemplate("vampire_lord", "Vampire Lord", ("undead", "vampire", "boss"), power=11, hp=85, damage="2d12+5"),
    EnemyTemplate("beholder", "Beholder", ("aberration", "boss"), power=11, hp=75, damage="2d10+5"),
    EnemyTemplate("demon_lord", "Demon Lord", ("fiend", "demon", "boss"), power=13, hp=100, damage="3d10+8"),
    EnemyTemplate("storm_giant", "Storm Giant", ("giant", "boss"), power=12, hp=110, damage="3d10+6"),
)
"""Every enemy the generator can place, weakest first."""

ENEMIES_BY_ID: dict[str, EnemyTemplate] = {enemy.id: enemy for enemy in ENEMIES}


def get_enemy(enemy_id: str) -> EnemyTemplate | None:
    """Look up an enemy template by id."""
    return ENEMIES_BY_ID.get(enemy_id)


def enemies_in_band(min_power: int, max_power: int) -> list[EnemyTemplate]:
    """Enemies whose power lies in ``[min_power, max_power]``, catalogue order."""
    return [e for e in ENEMIES if min_power <= e.power <= max_power]


__all__ = [
    "ENEMIES",
    "ENEMIES_BY_ID",
    "get_enemy",
    "enemies_in_band",
]
