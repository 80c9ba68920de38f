"""Engine layer: turn resolution and session wiring."""

from delve.engine.session import GameSession
from delve.engine.turn_engine import TurnEngine

__all__ = ["GameSession", "TurnEngine"]
