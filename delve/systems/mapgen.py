"""Level generation: rectangular rooms joined by L-shaped tunnels.

Rooms are tried a fixed number of times. A trial that intersects an earlier
room is dropped, not retried. The intersection test is inclusive, so rooms
that only share an edge are rejected too; this keeps at least one wall
between any two rooms and is relied on by the tunnel layout.

Monster archetypes live in ``MONSTER_ARCHETYPES``. Adding a species means
adding one row and adjusting the weights.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from delve.core.enums import AIKind, DeathPolicy, Domain
from delve.core.game_map import GameMap
from delve.core.models import DARKER_GREEN, DESATURATED_GREEN, WHITE, Color, Fighter, Vector2
from delve.core.world import World
from delve.systems.rng import DeterministicRNG

if TYPE_CHECKING:
    from delve.config import DungeonConfig
    from delve.systems.rng import RandomSource

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Rect:
    """A rectangle on the map, used to carve a room."""

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def new(cls, x: int, y: int, w: int, h: int) -> Rect:
        return cls(x, y, x + w, y + h)

    def center(self) -> Vector2:
        return Vector2((self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2)

    def intersects(self, other: Rect) -> bool:
        """Inclusive overlap test: touching edges count as intersecting."""
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )

    def interior(self) -> Iterator[tuple[int, int]]:
        """Cells strictly inside the boundary ring."""
        for y in range(self.y1 + 1, self.y2):
            for x in range(self.x1 + 1, self.x2):
                yield x, y

    @property
    def interior_area(self) -> int:
        return max(0, self.x2 - self.x1 - 1) * max(0, self.y2 - self.y1 - 1)


def create_room(game_map: GameMap, room: Rect) -> None:
    for x, y in room.interior():
        game_map.carve(x, y)


def create_h_tunnel(game_map: GameMap, x1: int, x2: int, y: int) -> None:
    for x in range(min(x1, x2), max(x1, x2) + 1):
        game_map.carve(x, y)


def create_v_tunnel(game_map: GameMap, y1: int, y2: int, x: int) -> None:
    for y in range(min(y1, y2), max(y1, y2) + 1):
        game_map.carve(x, y)


def connect_rooms(game_map: GameMap, prev: Vector2, new: Vector2, horizontal_first: bool) -> None:
    """Dig an L-shaped tunnel between two room centers."""
    if horizontal_first:
        create_h_tunnel(game_map, prev.x, new.x, prev.y)
        create_v_tunnel(game_map, prev.y, new.y, new.x)
    else:
        create_v_tunnel(game_map, prev.y, new.y, prev.x)
        create_h_tunnel(game_map, prev.x, new.x, new.y)


def carve_rooms(
    game_map: GameMap,
    rng: RandomSource,
    max_rooms: int,
    min_size: int,
    max_size: int,
) -> list[Rect]:
    """Run exactly *max_rooms* placement trials and return the accepted rooms.

    Each accepted room after the first is tunnelled to the previous one.
    """
    if not 1 <= min_size <= max_size:
        raise ValueError(f"invalid room size bounds [{min_size}, {max_size}]")
    if max_size >= game_map.width or max_size >= game_map.height:
        raise ValueError(
            f"room_max_size {max_size} does not fit a {game_map.width}x{game_map.height} map")

    rooms: list[Rect] = []
    for trial in range(max_rooms):
        w = rng.randint(min_size, max_size)
        h = rng.randint(min_size, max_size)
        x = rng.randint(0, game_map.width - w - 1)
        y = rng.randint(0, game_map.height - h - 1)
        room = Rect.new(x, y, w, h)

        if any(room.intersects(other) for other in rooms):
            logger.debug("Trial %d: room %s rejected (overlap)", trial, room)
            continue

        create_room(game_map, room)
        if rooms:
            connect_rooms(game_map, rooms[-1].center(), room.center(), rng.random() < 0.5)
        rooms.append(room)
        logger.debug("Trial %d: room %s accepted", trial, room)

    return rooms


# ---------------------------------------------------------------------------
# Monsters
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MonsterArchetype:
    """Static stats for one species."""

    name: str
    glyph: str
    color: Color
    hp: int
    defense: int
    power: int
    weight: float

    def fighter(self) -> Fighter:
        return Fighter.fresh(self.hp, self.defense, self.power, DeathPolicy.MONSTER)


MONSTER_ARCHETYPES: tuple[MonsterArchetype, ...] = (
    MonsterArchetype("orc", "o", DESATURATED_GREEN, hp=10, defense=0, power=3, weight=0.8),
    MonsterArchetype("troll", "T", DARKER_GREEN, hp=16, defense=1, power=4, weight=0.2),
)


def pick_archetype(roll: float, table: tuple[MonsterArchetype, ...] = MONSTER_ARCHETYPES) -> MonsterArchetype:
    """Map a uniform roll in [0, 1) onto the weighted archetype table."""
    acc = 0.0
    for arch in table:
        acc += arch.weight
        if roll < acc:
            return arch
    return table[-1]


def populate_room(
    world: World,
    game_map: GameMap,
    room: Rect,
    rng: RandomSource,
    max_monsters: int,
) -> int:
    """Drop up to *max_monsters* monsters into *room*. Returns how many landed.

    A draw that lands on a blocked cell or on a blocking entity is skipped.
    """
    placed = 0
    count = rng.randint(0, max_monsters)
    for _ in range(count):
        x = rng.randint(room.x1 + 1, room.x2 - 1)
        y = rng.randint(room.y1 + 1, room.y2 - 1)
        pos = Vector2(x, y)
        if game_map.is_blocked(x, y) or world.blocking_at(pos) is not None:
            logger.debug("Monster placement at %s skipped (occupied)", pos)
            continue
        arch = pick_archetype(rng.random())
        eid = world.spawn(
            arch.name, arch.glyph, arch.color, pos,
            blocks=True, fighter=arch.fighter(), ai=AIKind.BASIC,
        )
        logger.debug("Spawned %s #%d at %s", arch.name, eid, pos)
        placed += 1
    return placed


# ---------------------------------------------------------------------------
# Whole level
# ---------------------------------------------------------------------------

class GeneratedLevel(NamedTuple):
    game_map: GameMap
    world: World
    player_start: Vector2


def generate(
    width: int,
    height: int,
    max_rooms: int,
    min_size: int,
    max_size: int,
    rng: RandomSource,
    *,
    max_monsters: int = 3,
    player_name: str = "player",
    player_fighter: Fighter | None = None,
) -> GeneratedLevel:
    """Build a fresh map and entity table. The player is always row 0."""
    if max_rooms < 1:
        raise ValueError("max_rooms must be >= 1")

    game_map = GameMap(width, height)
    rooms = carve_rooms(game_map, rng, max_rooms, min_size, max_size)
    player_start = rooms[0].center()

    world = World()
    fighter = player_fighter or Fighter.fresh(30, 2, 5, DeathPolicy.PLAYER)
    world.spawn(player_name, "@", WHITE, player_start, blocks=True, fighter=fighter)

    monsters = 0
    for room in rooms:
        monsters += populate_room(world, game_map, room, rng, max_monsters)

    logger.info(
        "Generated %dx%d level: %d/%d rooms, %d monsters, player at %s",
        width, height, len(rooms), max_rooms, monsters, player_start,
    )
    return GeneratedLevel(game_map, world, player_start)


class MapGenerator:
    """Builds levels from a DungeonConfig."""

    __slots__ = ("_config",)

    def __init__(self, config: DungeonConfig) -> None:
        self._config = config

    def generate(self, rng: RandomSource | None = None) -> GeneratedLevel:
        cfg = self._config
        if rng is None:
            rng = DeterministicRNG(cfg.seed).stream(Domain.MAP_GEN)
        return generate(
            cfg.map_width, cfg.map_height,
            cfg.max_rooms, cfg.room_min_size, cfg.room_max_size,
            rng,
            max_monsters=cfg.max_room_monsters,
            player_name=cfg.player_name,
            player_fighter=Fighter.fresh(
                cfg.player_hp, cfg.player_defense, cfg.player_power, DeathPolicy.PLAYER),
        )
