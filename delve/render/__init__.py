"""Display-side views of a running level."""

from delve.render.ascii import render_ascii
from delve.render.frame import (
    EntitySprite,
    draw_order,
    entity_sprites,
    rle_decode,
    rle_encode,
    shade_grid,
    stat_bar,
    tile_shade,
)

__all__ = [
    "EntitySprite",
    "draw_order",
    "entity_sprites",
    "render_ascii",
    "rle_decode",
    "rle_encode",
    "shade_grid",
    "stat_bar",
    "tile_shade",
]
