"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class ActionType(IntEnum):
    """Types of actions an entity can propose."""

    WAIT = 0
    MOVE = 1
    ATTACK = 2


@unique
class AIKind(IntEnum):
    """AI policies an entity row can be tagged with.

    Each value maps to a handler in ``delve.ai.brain.AI_HANDLERS``.
    """

    BASIC = 0


@unique
class DeathPolicy(IntEnum):
    """What happens to a Fighter when its hp drops to zero or below."""

    PLAYER = 0
    MONSTER = 1


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    MAP_GEN = 0
    SPAWN = 1
    AUTOPLAY = 2


@unique
class FovAlgorithm(IntEnum):
    """Field-of-view algorithms understood by the VisibilityEngine."""

    BASIC = 0
    SHADOWCAST = 1


@unique
class Intent(str, Enum):
    """Decoded player input handed to the TurnEngine once per step."""

    TOGGLE_FULLSCREEN = "toggle_fullscreen"
    EXIT = "exit"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    NONE = "none"


@unique
class TurnResult(str, Enum):
    """Outcome of resolving one intent."""

    TOOK_TURN = "took_turn"
    DIDNT_TAKE_TURN = "didnt_take_turn"
    EXIT = "exit"


@unique
class EngineState(str, Enum):
    """TurnEngine lifecycle."""

    AWAITING_INPUT = "awaiting_input"
    EXITED = "exited"


@unique
class TileShade(IntEnum):
    """Four-way tile coloring exposed to the display, plus never-seen."""

    HIDDEN = 0
    DARK_WALL = 1
    DARK_GROUND = 2
    LIGHT_WALL = 3
    LIGHT_GROUND = 4
