"""Turn-based grid dungeon engine."""

__version__ = "0.1.0"
