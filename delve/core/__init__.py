"""Core data models and level representation."""

from delve.core.enums import (
    AIKind,
    ActionType,
    DeathPolicy,
    Domain,
    EngineState,
    FovAlgorithm,
    Intent,
    TileShade,
    TurnResult,
)
from delve.core.errors import InvariantViolation
from delve.core.game_map import GameMap, Tile
from delve.core.models import Fighter, Vector2
from delve.core.world import PLAYER_ID, EntityRef, World

__all__ = [
    "AIKind",
    "ActionType",
    "DeathPolicy",
    "Domain",
    "EngineState",
    "EntityRef",
    "Fighter",
    "FovAlgorithm",
    "GameMap",
    "Intent",
    "InvariantViolation",
    "PLAYER_ID",
    "Tile",
    "TileShade",
    "TurnResult",
    "Vector2",
    "World",
]
