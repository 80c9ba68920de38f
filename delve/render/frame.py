"""Frame data for a display: tile shades, entity sprites, draw order.

Nothing here mutates game state. A display pulls one frame after every
handled intent and paints it however it likes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from delve.core.enums import TileShade
from delve.core.models import Color

if TYPE_CHECKING:
    from delve.core.game_map import GameMap
    from delve.core.world import World
    from delve.systems.fov import VisibilityEngine


def tile_shade(game_map: GameMap, fov: VisibilityEngine, x: int, y: int) -> TileShade:
    """Shade of one cell. Wall means the cell blocks sight."""
    wall = game_map.blocks_sight(x, y)
    if fov.is_visible(x, y):
        return TileShade.LIGHT_WALL if wall else TileShade.LIGHT_GROUND
    if game_map.is_explored(x, y):
        return TileShade.DARK_WALL if wall else TileShade.DARK_GROUND
    return TileShade.HIDDEN


def shade_grid(game_map: GameMap, fov: VisibilityEngine) -> list[int]:
    """Row-major shades for the whole map."""
    return [
        int(tile_shade(game_map, fov, x, y))
        for y in range(game_map.height)
        for x in range(game_map.width)
    ]


def draw_order(world: World) -> list[int]:
    """Entity ids in paint order: non-blocking rows (corpses) under blocking ones."""
    return sorted(world.ids(), key=lambda eid: world.ref(eid).blocks)


@dataclass(frozen=True, slots=True)
class EntitySprite:
    id: int
    x: int
    y: int
    glyph: str
    color: Color
    name: str
    visible: bool


def entity_sprites(world: World, fov: VisibilityEngine, only_visible: bool = True) -> list[EntitySprite]:
    """Sprites in draw order; hidden entities are dropped unless asked for."""
    sprites: list[EntitySprite] = []
    for eid in draw_order(world):
        e = world.ref(eid)
        pos = e.pos
        visible = fov.is_visible(pos.x, pos.y)
        if only_visible and not visible:
            continue
        sprites.append(EntitySprite(eid, pos.x, pos.y, e.glyph, e.color, e.name, visible))
    return sprites


def stat_bar(world: World) -> tuple[int, int]:
    """Player ``(hp, max_hp)``; ``(0, 0)`` if the player has no Fighter."""
    fighter = world.player.fighter
    if fighter is None:
        return 0, 0
    return fighter.hp, fighter.max_hp


# RLE encode: [value, count, value, count, ...]

def rle_encode(values: list[int]) -> list[int]:
    rle: list[int] = []
    if not values:
        return rle
    cur_val = values[0]
    cur_count = 1
    for v in values[1:]:
        if v == cur_val:
            cur_count += 1
        else:
            rle.append(cur_val)
            rle.append(cur_count)
            cur_val = v
            cur_count = 1
    rle.append(cur_val)
    rle.append(cur_count)
    return rle


def rle_decode(rle: list[int]) -> list[int]:
    if len(rle) % 2:
        raise ValueError("RLE data must hold value/count pairs")
    out: list[int] = []
    for i in range(0, len(rle), 2):
        out.extend([rle[i]] * rle[i + 1])
    return out
