"""Tests for frame data: shades, draw order, sprites, RLE."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from delve.core.enums import Intent, TileShade
from delve.core.models import WHITE, Vector2
from delve.render.ascii import render_ascii
from delve.render.frame import (
    draw_order,
    entity_sprites,
    rle_decode,
    rle_encode,
    shade_grid,
    stat_bar,
    tile_shade,
)
from tests.helpers.dungeon_arena import DungeonArena


def _two_room_arena() -> DungeonArena:
    arena = DungeonArena(20, 10)
    arena.carve_room(1, 1, 5, 8)
    arena.carve_room(10, 1, 18, 8)
    return arena


class TestTileShade:

    def test_shades(self):
        arena = _two_room_arena()
        arena.add_player((3, 3))
        m, fov = arena.game_map, arena.fov
        assert tile_shade(m, fov, 3, 3) is TileShade.LIGHT_GROUND
        assert tile_shade(m, fov, 0, 3) is TileShade.LIGHT_WALL
        assert tile_shade(m, fov, 12, 3) is TileShade.HIDDEN

    def test_explored_but_not_visible_is_dark(self):
        arena = DungeonArena(20, 10, fov_radius=2)
        arena.carve_room(1, 1, 18, 8)
        arena.add_player((3, 4))
        for _ in range(5):
            arena.step(Intent.MOVE_RIGHT)
        m, fov = arena.game_map, arena.fov
        assert tile_shade(m, fov, 2, 4) is TileShade.DARK_GROUND
        assert tile_shade(m, fov, 0, 4) is TileShade.HIDDEN

    def test_shade_grid_size(self):
        arena = _two_room_arena()
        arena.add_player((3, 3))
        grid = shade_grid(arena.game_map, arena.fov)
        assert len(grid) == 20 * 10
        assert grid[3 * 20 + 3] == TileShade.LIGHT_GROUND


class TestDrawOrder:

    def test_non_blocking_first_stable_by_id(self):
        arena = _two_room_arena()
        arena.add_player((3, 3))
        a = arena.add_orc((4, 3))
        corpse = arena.world.spawn("remains of orc", "%", WHITE, Vector2(2, 2), blocks=False)
        b = arena.add_orc((4, 4))
        assert draw_order(arena.world) == [corpse, 0, a, b]

    def test_sprites_only_visible(self):
        arena = _two_room_arena()
        arena.add_player((3, 3))
        arena.add_orc((4, 3))
        hidden = arena.add_orc((12, 3))
        sprites = entity_sprites(arena.world, arena.fov)
        assert [s.glyph for s in sprites] == ["@", "o"]
        all_sprites = entity_sprites(arena.world, arena.fov, only_visible=False)
        assert [s.id for s in all_sprites if not s.visible] == [hidden]

    def test_stat_bar(self):
        arena = _two_room_arena()
        arena.add_player((3, 3), hp=30)
        arena.world.player.fighter.hp = 12
        assert stat_bar(arena.world) == (12, 30)


class TestRle:

    def test_encode(self):
        assert rle_encode([1, 1, 2, 2, 2, 0]) == [1, 2, 2, 3, 0, 1]
        assert rle_encode([]) == []

    def test_round_trip(self):
        values = [0] * 7 + [4, 4, 3] + [0] * 2
        assert rle_decode(rle_encode(values)) == values

    def test_decode_odd_length(self):
        with pytest.raises(ValueError):
            rle_decode([1, 2, 3])


class TestAscii:

    def test_render(self):
        arena = _two_room_arena()
        arena.add_player((3, 3))
        arena.add_orc((4, 3))
        text = render_ascii(arena.game_map, arena.world, arena.fov)
        lines = text.splitlines()
        assert len(lines) == 11
        assert lines[3][3] == "@"
        assert lines[3][4] == "o"
        assert lines[3][0] == "#"
        assert lines[-1] == "HP: 30/30"
