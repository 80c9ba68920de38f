"""Tests for DungeonConfig defaults and validation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import dataclasses

import pytest

from delve.config import DungeonConfig
from delve.core.enums import FovAlgorithm


class TestDungeonConfig:

    def test_defaults(self):
        cfg = DungeonConfig()
        assert (cfg.map_width, cfg.map_height) == (80, 45)
        assert cfg.max_rooms == 30
        assert (cfg.room_min_size, cfg.room_max_size) == (6, 10)
        assert cfg.max_room_monsters == 3
        assert cfg.fov_radius == 10
        assert cfg.fov_light_walls is True
        assert cfg.fov_algorithm is FovAlgorithm.BASIC
        assert (cfg.player_hp, cfg.player_defense, cfg.player_power) == (30, 2, 5)

    def test_frozen(self):
        cfg = DungeonConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.seed = 7

    @pytest.mark.parametrize("overrides", [
        {"map_width": 0},
        {"room_min_size": 2},
        {"room_min_size": 8, "room_max_size": 7},
        {"map_height": 10, "room_max_size": 10},
        {"max_rooms": 0},
        {"max_room_monsters": -1},
        {"fov_radius": -1},
    ])
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ValueError):
            DungeonConfig(**overrides)
