"""Room and enemy models."""

from __future__ import annotations

from pydantic import Field

from long_hall.models.base import GameModel
from long_hall.models.enums import EnemyRank, Role, RoomType
from long_hall.models.items import Item


class Enemy(GameModel):
    """A combat participant on the dungeon side.

    Attributes:
        id: Instance id within the room.
        name: Display name, ordinal-suffixed when duplicated.
        hp: Remaining hit points.
        max_hp: Starting hit points.
        power: Drives to-hit, XP and gold.
        damage: Dice expression rolled on a hit.
        ac: Armor class.
        xp: XP value shown to the player.
        tags: Catalogue tags (``undead``, ``boss`` ...).
        rank: Normal, elite, boss or minion.
        turned_rounds: Rounds left during which the enemy cannot attack.
    """

    id: str
    name: str
    hp: int = Field(ge=0)
    max_hp: int = Field(ge=0)
    power: int = Field(ge=0)
    damage: str
    ac: int
    xp: int = Field(default=0, ge=0)
    tags: list[str] = Field(default_factory=list)
    rank: EnemyRank = EnemyRank.NORMAL
    turned_rounds: int = Field(default=0, ge=0)

    @property
    def is_alive(self) -> bool:
        return self.hp > 0


class RecruitOption(GameModel):
    """A hireable party member offered at an intermission."""

    id: str
    name: str
    role: Role
    cost: int = Field(ge=0)
    description: str = ""
    level: int = Field(default=1, ge=1)


class Room(GameModel):
    """Per-depth content.

    Attributes:
        id: ``room-<depth>`` or ``boss-room-<depth>``.
        type: Room kind.
        theme_id: Theme active when the room was generated.
        guarded: Shrine or hazard that also holds enemies.
        enemies: Living enemies; removed when killed.
        loot: Items collected when the room is cleared.
        shop_items: Items for sale.
        available_recruits: Recruits for hire.
        boss_room: Optional nested boss fight (intermissions only).
    """

    id: str
    type: RoomType
    theme_id: str
    guarded: bool = False
    enemies: list[Enemy] = Field(default_factory=list)
    loot: list[Item] = Field(default_factory=list)
    shop_items: list[Item] = Field(default_factory=list)
    available_recruits: list[RecruitOption] = Field(default_factory=list)
    boss_room: Room | None = None

    @property
    def living_enemies(self) -> list[Enemy]:
        return [e for e in self.enemies if e.is_alive]

    @property
    def has_enemies(self) -> bool:
        return any(e.is_alive for e in self.enemies)

    @property
    def is_fight(self) -> bool:
        """Combat, elite and boss rooms, plus any guarded room with enemies left."""
        if self.type in (RoomType.COMBAT, RoomType.ELITE, RoomType.BOSS):
            return True
        return self.type in (RoomType.SHRINE, RoomType.HAZARD) and self.has_enemies


__all__ = [
    "Enemy",
    "RecruitOption",
    "Room",
]
