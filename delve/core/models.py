"""Core data models: Vector2, Fighter, colors."""

from __future__ import annotations

from dataclasses import dataclass

from delve.core.enums import DeathPolicy, Intent

Color = tuple[int, int, int]

WHITE: Color = (255, 255, 255)
DARK_RED: Color = (127, 0, 0)
DESATURATED_GREEN: Color = (63, 127, 63)
DARKER_GREEN: Color = (0, 127, 0)

CORPSE_GLYPH = "%"
CORPSE_COLOR: Color = DARK_RED


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def distance(self, other: Vector2) -> float:
        """Euclidean distance."""
        dx = other.x - self.x
        dy = other.y - self.y
        return (dx * dx + dy * dy) ** 0.5

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


# Movement intents mapped to grid offsets
INTENT_OFFSETS: dict[Intent, Vector2] = {
    Intent.MOVE_UP: Vector2(0, -1),
    Intent.MOVE_DOWN: Vector2(0, 1),
    Intent.MOVE_LEFT: Vector2(-1, 0),
    Intent.MOVE_RIGHT: Vector2(1, 0),
}


@dataclass(slots=True)
class Fighter:
    """Mutable combat component attached to an entity row."""

    max_hp: int
    hp: int
    defense: int
    power: int
    on_death: DeathPolicy

    @classmethod
    def fresh(cls, hp: int, defense: int, power: int, on_death: DeathPolicy) -> Fighter:
        return cls(max_hp=hp, hp=hp, defense=defense, power=power, on_death=on_death)
