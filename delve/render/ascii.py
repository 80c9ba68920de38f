"""Plain-text frame for terminals and logs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from delve.core.enums import TileShade
from delve.render.frame import entity_sprites, stat_bar, tile_shade

if TYPE_CHECKING:
    from delve.core.game_map import GameMap
    from delve.core.world import World
    from delve.systems.fov import VisibilityEngine

SHADE_CHARS: dict[TileShade, str] = {
    TileShade.HIDDEN: " ",
    TileShade.DARK_WALL: "+",
    TileShade.DARK_GROUND: ",",
    TileShade.LIGHT_WALL: "#",
    TileShade.LIGHT_GROUND: ".",
}


def render_ascii(game_map: GameMap, world: World, fov: VisibilityEngine) -> str:
    rows = [
        [SHADE_CHARS[tile_shade(game_map, fov, x, y)] for x in range(game_map.width)]
        for y in range(game_map.height)
    ]
    # Later sprites overwrite earlier ones on shared cells
    for sprite in entity_sprites(world, fov):
        rows[sprite.y][sprite.x] = sprite.glyph
    hp, max_hp = stat_bar(world)
    lines = ["".join(r).rstrip() for r in rows]
    lines.append(f"HP: {hp}/{max_hp}")
    return "\n".join(lines)
