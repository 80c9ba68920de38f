"""Tile grid for one dungeon level."""

from __future__ import annotations

from dataclasses import dataclass

from delve.core.models import Vector2


@dataclass(frozen=True, slots=True)
class Tile:
    """Read-only view of one cell."""

    blocked: bool
    block_sight: bool
    explored: bool = False


class GameMap:
    """2D tile grid backed by flat row-major columns.

    Every cell starts as wall (``blocked`` and ``block_sight``). Generation
    carves cells empty; afterwards only ``explored`` changes, and only from
    False to True.

    Coordinates outside the grid raise ``IndexError``: callers are expected to
    stay in bounds, and ``in_bounds`` is the only non-raising probe.
    """

    __slots__ = ("width", "height", "_blocked", "_block_sight", "_explored")

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"map size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        size = width * height
        self._blocked: list[bool] = [True] * size
        self._block_sight: list[bool] = [True] * size
        self._explored: list[bool] = [False] * size

    # -- access --

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _idx(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"tile ({x}, {y}) outside {self.width}x{self.height} map")
        return y * self.width + x

    def tile(self, x: int, y: int) -> Tile:
        i = self._idx(x, y)
        return Tile(self._blocked[i], self._block_sight[i], self._explored[i])

    def is_blocked(self, x: int, y: int) -> bool:
        return self._blocked[self._idx(x, y)]

    def blocks_sight(self, x: int, y: int) -> bool:
        return self._block_sight[self._idx(x, y)]

    def is_explored(self, x: int, y: int) -> bool:
        return self._explored[self._idx(x, y)]

    # -- mutation --

    def carve(self, x: int, y: int) -> None:
        """Turn a cell into walkable, see-through floor."""
        i = self._idx(x, y)
        self._blocked[i] = False
        self._block_sight[i] = False

    def mark_explored(self, x: int, y: int) -> None:
        self._explored[self._idx(x, y)] = True

    # -- bulk --

    def floor_cells(self) -> list[Vector2]:
        """All non-blocked cells in row-major order."""
        w = self.width
        return [Vector2(i % w, i // w) for i, b in enumerate(self._blocked) if not b]

    def explored_count(self) -> int:
        return sum(self._explored)

    def copy(self) -> GameMap:
        new = GameMap.__new__(GameMap)
        new.width = self.width
        new.height = self.height
        new._blocked = list(self._blocked)
        new._block_sight = list(self._block_sight)
        new._explored = list(self._explored)
        return new
