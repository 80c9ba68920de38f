"""Dungeon configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass

from delve.core.enums import FovAlgorithm


@dataclass(frozen=True)
class DungeonConfig:
    """Immutable configuration for one generated level and its session."""

    # World
    seed: int = 42
    map_width: int = 80
    map_height: int = 45

    # Rooms
    max_rooms: int = 30
    room_min_size: int = 6
    room_max_size: int = 10

    # Monsters
    max_room_monsters: int = 3

    # Field of view
    fov_radius: int = 10           # 0 = unlimited
    fov_light_walls: bool = True
    fov_algorithm: FovAlgorithm = FovAlgorithm.BASIC

    # Player
    player_name: str = "player"
    player_hp: int = 30
    player_defense: int = 2
    player_power: int = 5

    # Messages
    message_log_size: int = 200

    # Logging
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.map_width <= 0 or self.map_height <= 0:
            raise ValueError("map dimensions must be positive")
        if self.room_min_size < 3:
            raise ValueError("room_min_size must be >= 3 so rooms have an interior")
        if self.room_min_size > self.room_max_size:
            raise ValueError("room_min_size must not exceed room_max_size")
        if self.room_max_size >= min(self.map_width, self.map_height):
            raise ValueError("room_max_size must be smaller than both map dimensions")
        if self.max_rooms < 1:
            raise ValueError("max_rooms must be >= 1 so the player has a start room")
        if self.max_room_monsters < 0:
            raise ValueError("max_room_monsters must be >= 0")
        if self.fov_radius < 0:
            raise ValueError("fov_radius must be >= 0")
