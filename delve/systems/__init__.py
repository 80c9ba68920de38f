"""Engine systems: RNG, level generation, visibility."""

from delve.systems.fov import VisibilityEngine
from delve.systems.mapgen import GeneratedLevel, MapGenerator, Rect, generate
from delve.systems.rng import DeterministicRNG, RngStream

__all__ = [
    "DeterministicRNG",
    "GeneratedLevel",
    "MapGenerator",
    "Rect",
    "RngStream",
    "VisibilityEngine",
    "generate",
]
