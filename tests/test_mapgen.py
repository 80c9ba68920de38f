"""Tests for room carving, tunnels and monster placement."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import random
from collections import deque

import pytest

from delve.config import DungeonConfig
from delve.core.enums import AIKind, DeathPolicy, Domain
from delve.core.game_map import GameMap
from delve.core.models import Vector2
from delve.core.world import PLAYER_ID, World
from delve.systems.mapgen import (
    MONSTER_ARCHETYPES,
    MapGenerator,
    Rect,
    carve_rooms,
    create_room,
    generate,
    pick_archetype,
    populate_room,
)
from delve.systems.rng import DeterministicRNG
from tests.helpers.dungeon_arena import ScriptedRNG


def _reachable(game_map: GameMap, start: Vector2) -> set[tuple[int, int]]:
    """BFS over 4-connected floor cells."""
    seen = {(start.x, start.y)}
    queue = deque([(start.x, start.y)])
    while queue:
        x, y = queue.popleft()
        for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            if (nx, ny) in seen or not game_map.in_bounds(nx, ny):
                continue
            if game_map.is_blocked(nx, ny):
                continue
            seen.add((nx, ny))
            queue.append((nx, ny))
    return seen


class TestRect:

    def test_new_and_center(self):
        r = Rect.new(2, 3, 6, 4)
        assert (r.x1, r.y1, r.x2, r.y2) == (2, 3, 8, 7)
        assert r.center() == Vector2(5, 5)

    def test_touching_rooms_intersect(self):
        a = Rect.new(0, 0, 5, 5)
        b = Rect.new(5, 0, 5, 5)
        assert a.intersects(b)
        assert b.intersects(a)

    def test_separated_rooms_do_not_intersect(self):
        a = Rect.new(0, 0, 5, 5)
        b = Rect.new(6, 0, 5, 5)
        assert not a.intersects(b)

    def test_interior_excludes_boundary(self):
        r = Rect.new(0, 0, 4, 3)
        cells = set(r.interior())
        assert cells == {(1, 1), (2, 1), (3, 1), (1, 2), (2, 2), (3, 2)}
        assert r.interior_area == 6


class TestCarveRooms:

    def test_scripted_layout(self):
        m = GameMap(40, 20)
        # trial 1 accepted, trial 2 overlaps it, trial 3 accepted and tunnelled
        rng = ScriptedRNG(
            ints=[6, 6, 1, 1,
                  6, 6, 3, 3,
                  6, 6, 20, 1],
            floats=[0.3],
        )
        rooms = carve_rooms(m, rng, max_rooms=3, min_size=6, max_size=6)
        assert rooms == [Rect(1, 1, 7, 7), Rect(20, 1, 26, 7)]
        assert rng.exhausted

        # horizontal-first: the tunnel runs along the first room's center row
        for x in range(4, 24):
            assert not m.is_blocked(x, 4)
        assert m.is_blocked(10, 5)
        # boundary ring stays wall
        assert m.is_blocked(1, 1)
        assert m.is_blocked(7, 2)

    def test_vertical_first_tunnel(self):
        m = GameMap(40, 30)
        rng = ScriptedRNG(ints=[6, 6, 1, 1, 6, 6, 20, 15], floats=[0.9])
        rooms = carve_rooms(m, rng, max_rooms=2, min_size=6, max_size=6)
        prev, new = rooms[0].center(), rooms[1].center()
        for y in range(prev.y, new.y + 1):
            assert not m.is_blocked(prev.x, y)
        for x in range(prev.x, new.x + 1):
            assert not m.is_blocked(x, new.y)

    def test_exact_trial_count(self):
        rng = DeterministicRNG(3).stream(Domain.MAP_GEN)
        m = GameMap(80, 45)
        rooms = carve_rooms(m, rng, max_rooms=30, min_size=6, max_size=10)
        accepted = len(rooms)
        # 4 draws per trial plus one tunnel coin per accepted room after the first
        assert rng.cursor == 30 * 4 + (accepted - 1)

    def test_invalid_size_bounds(self):
        m = GameMap(20, 20)
        with pytest.raises(ValueError):
            carve_rooms(m, random.Random(0), 5, 8, 6)
        with pytest.raises(ValueError):
            carve_rooms(m, random.Random(0), 5, 6, 20)

    @pytest.mark.parametrize("seed", [0, 1, 42, 1234])
    def test_layout_properties(self, seed):
        m = GameMap(80, 45)
        rooms = carve_rooms(m, DeterministicRNG(seed).stream(Domain.MAP_GEN), 30, 6, 10)
        assert rooms
        for i, a in enumerate(rooms):
            assert 0 <= a.x1 and a.x2 < m.width and 0 <= a.y1 and a.y2 < m.height
            for b in rooms[i + 1:]:
                assert not a.intersects(b)
            for x, y in a.interior():
                assert not m.is_blocked(x, y)

        reachable = _reachable(m, rooms[0].center())
        floor = {(p.x, p.y) for p in m.floor_cells()}
        assert floor == reachable

    def test_accepts_stdlib_random(self):
        m = GameMap(60, 40)
        rooms = carve_rooms(m, random.Random(5), 20, 6, 10)
        assert len(rooms) >= 1


class TestMonsters:

    def test_pick_archetype_split(self):
        assert pick_archetype(0.0).name == "orc"
        assert pick_archetype(0.79).name == "orc"
        assert pick_archetype(0.8).name == "troll"
        assert pick_archetype(0.999).name == "troll"

    def test_archetype_stats(self):
        orc, troll = MONSTER_ARCHETYPES
        assert (orc.glyph, orc.hp, orc.defense, orc.power) == ("o", 10, 0, 3)
        assert (troll.glyph, troll.hp, troll.defense, troll.power) == ("T", 16, 1, 4)
        assert orc.fighter().on_death is DeathPolicy.MONSTER

    def test_occupied_cell_skipped(self):
        m = GameMap(10, 10)
        room = Rect.new(1, 1, 6, 6)
        create_room(m, room)
        world = World()
        world.spawn("player", "@", (255, 255, 255), Vector2(4, 4))
        # count=2; first lands on the player, second is free
        rng = ScriptedRNG(ints=[2, 4, 4, 3, 3], floats=[0.5])
        placed = populate_room(world, m, room, rng, max_monsters=3)
        assert placed == 1
        assert len(world) == 2
        orc = world.ref(1)
        assert orc.name == "orc"
        assert orc.pos == Vector2(3, 3)
        assert orc.ai is AIKind.BASIC
        assert rng.exhausted

    def test_zero_monsters(self):
        m = GameMap(10, 10)
        room = Rect.new(1, 1, 6, 6)
        create_room(m, room)
        world = World()
        world.spawn("player", "@", (255, 255, 255), Vector2(4, 4))
        assert populate_room(world, m, room, ScriptedRNG(ints=[0]), max_monsters=3) == 0


class TestGenerate:

    def test_player_row_and_start(self):
        level = MapGenerator(DungeonConfig()).generate()
        player = level.world.player
        assert player.id == PLAYER_ID
        assert player.glyph == "@"
        assert player.pos == level.player_start
        assert not level.game_map.is_blocked(player.pos.x, player.pos.y)
        assert player.fighter.hp == 30
        assert player.fighter.on_death is DeathPolicy.PLAYER

    def test_deterministic_for_seed(self):
        a = MapGenerator(DungeonConfig(seed=77)).generate()
        b = MapGenerator(DungeonConfig(seed=77)).generate()
        assert a.game_map.floor_cells() == b.game_map.floor_cells()
        assert [(e.name, e.pos) for e in a.world] == [(e.name, e.pos) for e in b.world]

    def test_different_seeds_differ(self):
        a = MapGenerator(DungeonConfig(seed=1)).generate()
        b = MapGenerator(DungeonConfig(seed=2)).generate()
        assert a.game_map.floor_cells() != b.game_map.floor_cells()

    def test_monsters_on_free_floor(self):
        level = MapGenerator(DungeonConfig(seed=11)).generate()
        occupied: set[Vector2] = set()
        for e in level.world:
            assert not level.game_map.is_blocked(e.pos.x, e.pos.y)
            assert e.pos not in occupied
            occupied.add(e.pos)
            if e.id != PLAYER_ID:
                assert e.name in ("orc", "troll")
                assert e.ai is AIKind.BASIC
                assert e.blocks

    def test_default_levels_have_monsters(self):
        cfg = DungeonConfig()
        checked = 0
        for seed in range(10):
            rooms = carve_rooms(
                GameMap(cfg.map_width, cfg.map_height),
                DeterministicRNG(seed).stream(Domain.MAP_GEN),
                cfg.max_rooms, cfg.room_min_size, cfg.room_max_size,
            )
            carved = sum(r.interior_area for r in rooms)
            level = MapGenerator(DungeonConfig(seed=seed)).generate()
            assert not level.game_map.is_blocked(level.player_start.x, level.player_start.y)
            if carved > 200:
                checked += 1
                assert len(level.world) - 1 >= 1, f"seed {seed}: {carved} carved cells, no monsters"
        assert checked > 0

    def test_all_floor_reachable_from_start(self):
        level = MapGenerator(DungeonConfig(seed=99)).generate()
        floor = {(p.x, p.y) for p in level.game_map.floor_cells()}
        assert _reachable(level.game_map, level.player_start) == floor

    def test_generate_rejects_zero_rooms(self):
        with pytest.raises(ValueError):
            generate(40, 30, 0, 6, 10, random.Random(1))

    def test_custom_source(self):
        level = generate(50, 30, 10, 4, 8, random.Random(3), max_monsters=0)
        assert len(level.world) == 1
        assert not level.game_map.is_explored(level.player_start.x, level.player_start.y)
