"""Item catalogue, drop tables, starter kits and enchantment suffixes.

Catalogue entries are templates: every consumer copies one before
placing it in a run state, so the module-level instances are never
mutated.
"""

from __future__ import annotations

from long_hall.content.types import DropTable, RarityWeight, SuffixTable
from long_hall.models.enums import ItemType, Rarity, Role
from long_hall.models.items import Item, ItemStats


def _item(
    item_id: str,
    name: str,
    item_type: ItemType,
    rarity: Rarity,
    cost: int,
    *,
    attack: int = 0,
    damage: int = 0,
    ac: int = 0,
    max_hp: int = 0,
) -> Item:
    return Item(
        id=item_id,
        name=name,
        type=item_type,
        rarity=rarity,
        cost=cost,
        base_stats=ItemStats(
            attack_bonus=attack,
            damage_bonus=damage,
            ac_bonus=ac,
            max_hp_bonus=max_hp,
        ),
    )


# =============================================================================
# Catalogue
# =============================================================================

ITEMS: tuple[Item, ...] = (
    # FIGHTER EQUIPMENT (Swords, Heavy Armor)
    # Weapons
    _item("fighter_sword_common", "Iron Sword", ItemType.WEAPON, Rarity.COMMON, 15, attack=1, damage=1),
    _item("fighter_sword_uncommon", "Steel Longsword", ItemType.WEAPON, Rarity.UNCOMMON, 35, attack=2, damage=2),
    _item("fighter_sword_rare", "Knight's Blade", ItemType.WEAPON, Rarity.RARE, 70, attack=3, damage=3),
    _item("fighter_sword_epic", "Dragonslayer", ItemType.WEAPON, Rarity.EPIC, 140, attack=4, damage=4),
    _item("fighter_sword_legendary", "Excalibur", ItemType.WEAPON, Rarity.LEGENDARY, 280, attack=5, damage=5),
    _item("fighter_sword_godly", "Godsteel Blade", ItemType.WEAPON, Rarity.GODLY, 600, attack=7, damage=7),
    # Armor
    _item("fighter_armor_common", "Chainmail", ItemType.CHEST, Rarity.COMMON, 20, ac=1),
    _item("fighter_armor_uncommon", "Plate Armor", ItemType.CHEST, Rarity.UNCOMMON, 45, ac=2, max_hp=2),
    _item("fighter_armor_rare", "Crusader Plate", ItemType.CHEST, Rarity.RARE, 90, ac=3, max_hp=4),
    _item("fighter_armor_epic", "Dragon Scale", ItemType.CHEST, Rarity.EPIC, 180, ac=4, max_hp=6),
    _item("fighter_armor_legendary", "Titan's Aegis", ItemType.CHEST, Rarity.LEGENDARY, 350, ac=5, max_hp=8),
    _item("fighter_armor_godly", "Armor of the Valkyrie", ItemType.CHEST, Rarity.GODLY, 700, ac=7, max_hp=12),
    # WIZARD EQUIPMENT (Staffs, Robes)
    # Weapons
    _item("wizard_staff_common", "Oak Staff", ItemType.WEAPON, Rarity.COMMON, 12, attack=2),
    _item("wizard_staff_uncommon", "Arcane Staff", ItemType.WEAPON, Rarity.UNCOMMON, 30, attack=3, damage=1),
    _item("wizard_staff_rare", "Staff of Flames", ItemType.WEAPON, Rarity.RARE, 65, attack=4, damage=2),
    _item("wizard_staff_epic", "Voidwalker Staff", ItemType.WEAPON, Rarity.EPIC, 130, attack=5, damage=3),
    _item("wizard_staff_legendary", "Staff of Infinite Power", ItemType.WEAPON, Rarity.LEGENDARY, 260, attack=6, damage=4),
    _item("wizard_staff_godly", "Cosmic Conduit", ItemType.WEAPON, Rarity.GODLY, 550, attack=8, damage=6),
    # Armor
    _item("wizard_robe_common", "Apprentice Robe", ItemType.CHEST, Rarity.COMMON, 15, max_hp=2),
    _item("wizard_robe_uncommon", "Mage Robe", ItemType.CHEST, Rarity.UNCOMMON, 35, max_hp=4, attack=1),
    _item("wizard_robe_rare", "Archmage Vestments", ItemType.CHEST, Rarity.RARE, 75, max_hp=6, attack=2),
    _item("wizard_robe_epic", "Ethereal Robe", ItemType.CHEST, Rarity.EPIC, 150, max_hp=8, attack=3),
    _item("wizard_robe_legendary", "Robe of the Arcane", ItemType.CHEST, Rarity.LEGENDARY, 300, max_hp=10, attack=4),
    _item("wizard_robe_godly", "Astral Vestments", ItemType.CHEST, Rarity.GODLY, 650, max_hp=15, attack=6),
    # ROGUE EQUIPMENT (Daggers, Leather)
    # Weapons
    _item("rogue_dagger_common", "Sharp Dagger", ItemType.WEAPON, Rarity.COMMON, 12, attack=1, damage=1),
    _item("rogue_dagger_uncommon", "Assassin Blade", ItemType.WEAPON, Rarity.UNCOMMON, 32, attack=2, damage=2),
    _item("rogue_dagger_rare", "Shadowstrike", ItemType.WEAPON, Rarity.RARE, 68, attack=3, damage=3),
    _item("rogue_dagger_epic", "Venom Fang", ItemType.WEAPON, Rarity.EPIC, 135, attack=4, damage=4),
    _item("rogue_dagger_legendary", "Deathwhisper", ItemType.WEAPON, Rarity.LEGENDARY, 270, attack=5, damage=5),
    _item("rogue_dagger_godly", "Midnight Edge", ItemType.WEAPON, Rarity.GODLY, 580, attack=7, damage=7),
    # Armor
    _item("rogue_armor_common", "Leather Vest", ItemType.CHEST, Rarity.COMMON, 18, ac=1),
    _item("rogue_armor_uncommon", "Thieves' Garb", ItemType.CHEST, Rarity.UNCOMMON, 40, ac=2),
    _item("rogue_armor_rare", "Nightstalker Leather", ItemType.CHEST, Rarity.RARE, 85, ac=3, attack=1),
    _item("rogue_armor_epic", "Assassin's Shroud", ItemType.CHEST, Rarity.EPIC, 170, ac=4, attack=2),
    _item("rogue_armor_legendary", "Shadow Walker Armor", ItemType.CHEST, Rarity.LEGENDARY, 340, ac=5, attack=3),
    _item("rogue_armor_godly", "Cloak of Invisibility", ItemType.CHEST, Rarity.GODLY, 680, ac=7, attack=5),
    # CLERIC EQUIPMENT (Maces, Vestments)
    # Weapons
    _item("cleric_mace_common", "Holy Mace", ItemType.WEAPON, Rarity.COMMON, 15, attack=1, damage=1),
    _item("cleric_mace_uncommon", "Blessed Hammer", ItemType.WEAPON, Rarity.UNCOMMON, 35, attack=2, damage=2),
    _item("cleric_mace_rare", "Divine Scepter", ItemType.WEAPON, Rarity.RARE, 72, attack=3, damage=3),
    _item("cleric_mace_epic", "Judgment", ItemType.WEAPON, Rarity.EPIC, 145, attack=4, damage=4),
    _item("cleric_mace_legendary", "Hand of God", ItemType.WEAPON, Rarity.LEGENDARY, 290, attack=5, damage=5),
    _item("cleric_mace_godly", "Heaven's Wrath", ItemType.WEAPON, Rarity.GODLY, 620, attack=7, damage=7),
    # Armor
    _item("cleric_armor_common", "Clerical Robe", ItemType.CHEST, Rarity.COMMON, 18, max_hp=3),
    _item("cleric_armor_uncommon", "Priest Vestments", ItemType.CHEST, Rarity.UNCOMMON, 42, max_hp=5, ac=1),
    _item("cleric_armor_rare", "Holy Raiment", ItemType.CHEST, Rarity.RARE, 88, max_hp=7, ac=2),
    _item("cleric_armor_epic", "Blessed Plate", ItemType.CHEST, Rarity.EPIC, 175, max_hp=9, ac=3),
    _item("cleric_armor_legendary", "Divine Aegis", ItemType.CHEST, Rarity.LEGENDARY, 360, max_hp=12, ac=4),
    _item("cleric_armor_godly", "Celestial Vestments", ItemType.CHEST, Rarity.GODLY, 720, max_hp=18, ac=6),
    # RANGER EQUIPMENT (Bows, Cloaks)
    # Weapons
    _item("ranger_bow_common", "Short Bow", ItemType.WEAPON, Rarity.COMMON, 14, attack=2),
    _item("ranger_bow_uncommon", "Longbow", ItemType.WEAPON, Rarity.UNCOMMON, 34, attack=3, damage=1),
    _item("ranger_bow_rare", "Elven Bow", ItemType.WEAPON, Rarity.RARE, 70, attack=4, damage=2),
    _item("ranger_bow_epic", "Windpiercer", ItemType.WEAPON, Rarity.EPIC, 140, attack=5, damage=3),
    _item("ranger_bow_legendary", "Heartseeker", ItemType.WEAPON, Rarity.LEGENDARY, 280, attack=6, damage=4),
    _item("ranger_bow_godly", "Star Shot", ItemType.WEAPON, Rarity.GODLY, 600, attack=8, damage=6),
    # Armor
    _item("ranger_armor_common", "Ranger Cloak", ItemType.CHEST, Rarity.COMMON, 16, ac=1),
    _item("ranger_armor_uncommon", "Hunter's Mail", ItemType.CHEST, Rarity.UNCOMMON, 38, ac=2),
    _item("ranger_armor_rare", "Woodland Armor", ItemType.CHEST, Rarity.RARE, 80, ac=3, attack=1),
    _item("ranger_armor_epic", "Beast Hunter Gear", ItemType.CHEST, Rarity.EPIC, 160, ac=4, attack=2),
    _item("ranger_armor_legendary", "Nature's Warden", ItemType.CHEST, Rarity.LEGENDARY, 320, ac=5, attack=3),
    _item("ranger_armor_godly", "Avatar of the Wild", ItemType.CHEST, Rarity.GODLY, 660, ac=7, attack=5),
    # UNIVERSAL ACCESSORIES (Head, Shield, Ring, Neck, Feet, Legs)
    # HEAD
    _item("helm_common", "Iron Helm", ItemType.HEAD, Rarity.COMMON, 15, ac=1),
    _item("helm_uncommon", "Steel Helm", ItemType.HEAD, Rarity.UNCOMMON, 35, ac=2),
    _item("helm_rare", "Knight's Helm", ItemType.HEAD, Rarity.RARE, 70, ac=3),
    _item("helm_epic", "Dragon Helm", ItemType.HEAD, Rarity.EPIC, 140, ac=4, max_hp=4),
    _item("helm_legendary", "Crown of Kings", ItemType.HEAD, Rarity.LEGENDARY, 280, ac=5, max_hp=6),
    _item("helm_godly", "Halo of Divinity", ItemType.HEAD, Rarity.GODLY, 580, ac=7, max_hp=10),
    # SHIELD
    _item("shield_common", "Wooden Shield", ItemType.SHIELD, Rarity.COMMON, 15, ac=1),
    _item("shield_uncommon", "Iron Shield", ItemType.SHIELD, Rarity.UNCOMMON, 35, ac=2),
    _item("shield_rare", "Tower Shield", ItemType.SHIELD, Rarity.RARE, 72, ac=3, max_hp=2),
    _item("shield_epic", "Aegis", ItemType.SHIELD, Rarity.EPIC, 145, ac=4, max_hp=4),
    _item("shield_legendary", "Bulwark", ItemType.SHIELD, Rarity.LEGENDARY, 290, ac=5, max_hp=6),
    _item("shield_godly", "Shield of the Gods", ItemType.SHIELD, Rarity.GODLY, 600, ac=7, max_hp=10),
    # RING
    _item("ring_common", "Ring of Vigor", ItemType.RING, Rarity.COMMON, 18, max_hp=2),
    _item("ring_uncommon", "Ring of Power", ItemType.RING, Rarity.UNCOMMON, 40, max_hp=4, damage=1),
    _item("ring_rare", "Ring of Mastery", ItemType.RING, Rarity.RARE, 85, max_hp=6, damage=2),
    _item("ring_epic", "Ring of Legends", ItemType.RING, Rarity.EPIC, 170, max_hp=8, damage=3, attack=1),
    _item("ring_legendary", "Ring of Eternity", ItemType.RING, Rarity.LEGENDARY, 340, max_hp=10, damage=4, attack=2),
    _item("ring_godly", "Godring", ItemType.RING, Rarity.GODLY, 700, max_hp=15, damage=6, attack=4),
    # NECK
    _item("neck_common", "Lucky Charm", ItemType.NECK, Rarity.COMMON, 15, attack=1),
    _item("neck_uncommon", "Amulet of Strength", ItemType.NECK, Rarity.UNCOMMON, 38, attack=1, damage=2),
    _item("neck_rare", "Amulet of Power", ItemType.NECK, Rarity.RARE, 78, attack=2, damage=3),
    _item("neck_epic", "Heart of the Dragon", ItemType.NECK, Rarity.EPIC, 160, attack=3, damage=4, max_hp=4),
    _item("neck_legendary", "Star of Souls", ItemType.NECK, Rarity.LEGENDARY, 320, attack=4, damage=5, max_hp=6),
    _item("neck_godly", "Divine Pendant", ItemType.NECK, Rarity.GODLY, 680, attack=6, damage=7, max_hp=10),
    # FEET
    _item("boots_common", "Leather Boots", ItemType.FEET, Rarity.COMMON, 12, max_hp=2),
    _item("boots_uncommon", "Iron Boots", ItemType.FEET, Rarity.UNCOMMON, 30, max_hp=4),
    _item("boots_rare", "Boots of Speed", ItemType.FEET, Rarity.RARE, 65, max_hp=6, attack=1),
    _item("boots_epic", "Boots of Flight", ItemType.FEET, Rarity.EPIC, 130, max_hp=8, attack=2),
    _item("boots_legendary", "Winged Boots", ItemType.FEET, Rarity.LEGENDARY, 260, max_hp=10, attack=3),
    _item("boots_godly", "Boots of the Cosmos", ItemType.FEET, Rarity.GODLY, 550, max_hp=15, attack=5),
    # LEGS
    _item("legs_common", "Leather Leggings", ItemType.LEGS, Rarity.COMMON, 14, ac=1),
    _item("legs_uncommon", "Chain Leggings", ItemType.LEGS, Rarity.UNCOMMON, 32, ac=2),
    _item("legs_rare", "Plated Greaves", ItemType.LEGS, Rarity.RARE, 68, ac=3, max_hp=2),
    _item("legs_epic", "Dragon Greaves", ItemType.LEGS, Rarity.EPIC, 135, ac=4, max_hp=4),
    _item("legs_legendary", "Titan's Legguards", ItemType.LEGS, Rarity.LEGENDARY, 270, ac=5, max_hp=6),
    _item("legs_godly", "Celestial Greaves", ItemType.LEGS, Rarity.GODLY, 580, ac=7, max_hp=10),
)
"""Every purchasable or droppable item template."""

ITEMS_BY_ID: dict[str, Item] = {item.id: item for item in ITEMS}

STARTER_SWORD = Item(
    id="starter_sword",
    name="Rusty Sword",
    type=ItemType.WEAPON,
    rarity=Rarity.COMMON,
    cost=5,
    base_stats=ItemStats(attack_bonus=0, damage_bonus=1),
)
"""The hero's opening weapon."""


def get_item_template(item_id: str) -> Item | None:
    """Look up a catalogue template by id."""
    return ITEMS_BY_ID.get(item_id)


def items_of_rarity(*rarities: Rarity) -> list[Item]:
    """Catalogue templates whose rarity is one of ``rarities``."""
    wanted = {str(r) for r in rarities}
    return [item for item in ITEMS if item.rarity in wanted]


# =============================================================================
# Drop Tables
# =============================================================================

_POOL_FAMILIES = (
    "fighter_sword",
    "wizard_staff",
    "rogue_dagger",
    "cleric_mace",
    "ranger_bow",
    "fighter_armor",
    "wizard_robe",
    "rogue_armor",
    "cleric_armor",
    "ranger_armor",
    "helm",
    "shield",
    "ring",
    "neck",
    "boots",
    "legs",
)


def _pool(rarity: Rarity) -> tuple[str, ...]:
    return tuple(f"{family}_{rarity}" for family in _POOL_FAMILIES)


COMMON_POOL = _pool(Rarity.COMMON)
UNCOMMON_POOL = _pool(Rarity.UNCOMMON)
RARE_POOL = _pool(Rarity.RARE)
EPIC_POOL = _pool(Rarity.EPIC)
LEGENDARY_POOL = _pool(Rarity.LEGENDARY)
GODLY_POOL = _pool(Rarity.GODLY)

DROP_TABLES: dict[str, DropTable] = {
    "low": DropTable(chance=0.08, pool=COMMON_POOL),
    "mid": DropTable(chance=0.12, pool=COMMON_POOL + UNCOMMON_POOL),
    "high": DropTable(chance=0.15, pool=UNCOMMON_POOL + RARE_POOL),
    "elite": DropTable(chance=0.25, pool=RARE_POOL + EPIC_POOL),
    "boss": DropTable(chance=0.50, pool=EPIC_POOL + LEGENDARY_POOL),
    "shrine": DropTable(chance=0.30, pool=RARE_POOL + EPIC_POOL + LEGENDARY_POOL),
    "godly": DropTable(chance=0.02, pool=GODLY_POOL),
}
"""Drop chance and pool per source tier; ``godly`` is rolled separately."""

# =============================================================================
# Starter Gear
# =============================================================================

UNIVERSAL_STARTER: tuple[str, ...] = ("rogue_armor_common", "boots_common", "legs_common")
"""Leather vest, boots and leggings given to every recruit."""

STARTER_WEAPONS: dict[Role, str] = {
    Role.FIGHTER: "fighter_sword",
    Role.WIZARD: "wizard_staff",
    Role.ROGUE: "rogue_dagger",
    Role.CLERIC: "cleric_mace",
    Role.RANGER: "ranger_bow",
}
"""Weapon family per role; the rarity suffix is rolled."""

STARTING_WEAPON_WEIGHTS: tuple[RarityWeight, ...] = (
    RarityWeight(Rarity.COMMON, 60),
    RarityWeight(Rarity.UNCOMMON, 25),
    RarityWeight(Rarity.RARE, 10),
    RarityWeight(Rarity.EPIC, 4),
    RarityWeight(Rarity.LEGENDARY, 1),
)

STARTER_EQUIPMENT: dict[Role, tuple[str, ...]] = {
    Role.FIGHTER: ("fighter_sword_common", "shield_common"),
    Role.WIZARD: ("wizard_staff_common",),
    Role.ROGUE: ("rogue_dagger_common", "rogue_armor_common"),
    Role.CLERIC: ("cleric_mace_common", "cleric_armor_common"),
    Role.RANGER: ("ranger_bow_common", "ranger_armor_common"),
}
"""Role kit handed to hired recruits."""

# =============================================================================
# Enchantment Suffixes
# =============================================================================

WEAPON_SUFFIXES = SuffixTable(
    "weapon",
    (
        ("of Striking", "of the Blade", "of Sharpness"),
        ("of Might", "of Slaying", "of the Warrior"),
        ("of Fury", "of Destruction", "of the Champion"),
        ("of Annihilation", "of the Titan", "of Doom"),
        ("of the Gods", "of Legends", "Godslayer"),
        ("of the Apocalypse",),
    ),
)

ARMOR_SUFFIXES = SuffixTable(
    "armor",
    (
        ("of Protection", "of Warding", "of the Guard"),
        ("of Defense", "of the Sentinel", "of Resilience"),
        ("of Fortitude", "of the Bulwark", "of Endurance"),
        ("of Invincibility", "of the Immortal", "of Iron Will"),
        ("of the Divine", "of Eternity", "Godshield"),
        ("of the Divine Aegis",),
    ),
)

JEWELRY_SUFFIXES = SuffixTable(
    "jewelry",
    (
        ("of Minor Power", "of the Apprentice", "of Focus"),
        ("of Enhancement", "of the Adept", "of Clarity"),
        ("of Mastery", "of the Sage", "of Potency"),
        ("of Supremacy", "of the Archmage", "of Domination"),
        ("of Omnipotence", "of the Infinite", "Godstone"),
        ("of the Gods",),
    ),
)

TIER_NAMES: tuple[str, ...] = ("Minor", "Lesser", "Greater", "Epic", "Legendary", "Godly")
"""Display name of each enchantment tier, tier 1 first."""


__all__ = [
    "ITEMS",
    "ITEMS_BY_ID",
    "STARTER_SWORD",
    "get_item_template",
    "items_of_rarity",
    "COMMON_POOL",
    "UNCOMMON_POOL",
    "RARE_POOL",
    "EPIC_POOL",
    "LEGENDARY_POOL",
    "GODLY_POOL",
    "DROP_TABLES",
    "UNIVERSAL_STARTER",
    "STARTER_WEAPONS",
    "STARTING_WEAPON_WEIGHTS",
    "STARTER_EQUIPMENT",
    "WEAPON_SUFFIXES",
    "ARMOR_SUFFIXES",
    "JEWELRY_SUFFIXES",
    "TIER_NAMES",
]
