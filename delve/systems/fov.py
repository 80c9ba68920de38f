"""Visibility engine — field of view plus persistent fog of war.

The engine snapshots which cells are see-through when it is built and keeps
the set of cells visible from the last origin it was asked about. It never
polls: the turn engine calls ``recompute`` when the player's cell changes.

Every cell found visible is flagged ``explored`` on the map. That flag is
the fog-of-war memory and is never cleared.

Algorithms:
  - BASIC: Bresenham rays from the origin to every cell on the perimeter of
    the view box. A ray stops after the first opaque cell. With walls lit,
    a second pass lights opaque cells backing any visible floor cell.
  - SHADOWCAST: recursive shadowcasting, one pass per octant.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from delve.core.enums import FovAlgorithm
from delve.core.game_map import GameMap

logger = logging.getLogger(__name__)

Coord = tuple[int, int]

# (xx, xy, yx, yy) transforms mapping octant-local (dx, dy) onto the grid
_OCTANTS: tuple[tuple[int, int, int, int], ...] = (
    (1, 0, 0, 1), (0, 1, 1, 0), (0, -1, 1, 0), (-1, 0, 0, 1),
    (-1, 0, 0, -1), (0, -1, -1, 0), (0, 1, -1, 0), (1, 0, 0, -1),
)


def bresenham(x0: int, y0: int, x1: int, y1: int) -> Iterator[Coord]:
    """Cells on the line from (x0, y0) to (x1, y1), both ends included."""
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    x, y = x0, y0
    while True:
        yield x, y
        if x == x1 and y == y1:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy


class VisibilityEngine:
    """Current visible set for one map, plus the fog-of-war side effect."""

    __slots__ = ("_map", "width", "height", "_transparent", "_visible", "_origin")

    def __init__(self, game_map: GameMap) -> None:
        self._map = game_map
        self.width = game_map.width
        self.height = game_map.height
        w = game_map.width
        self._transparent: list[bool] = [
            not game_map.blocks_sight(i % w, i // w) for i in range(w * game_map.height)]
        self._visible: frozenset[Coord] = frozenset()
        self._origin: Coord | None = None

    @classmethod
    def build(cls, game_map: GameMap) -> VisibilityEngine:
        return cls(game_map)

    # -- queries --

    @property
    def origin(self) -> Coord | None:
        """Origin of the last recompute, or None before the first one."""
        return self._origin

    def is_transparent(self, x: int, y: int) -> bool:
        return self._transparent[self._idx(x, y)]

    def is_visible(self, x: int, y: int) -> bool:
        self._idx(x, y)
        return (x, y) in self._visible

    def visible_cells(self) -> frozenset[Coord]:
        return self._visible

    def _idx(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} map")
        return y * self.width + x

    # -- compute --

    def recompute(
        self,
        origin_x: int,
        origin_y: int,
        radius: int = 0,
        light_walls: bool = True,
        algorithm: FovAlgorithm = FovAlgorithm.BASIC,
    ) -> frozenset[Coord]:
        """Replace the visible set with the view from (origin_x, origin_y).

        ``radius == 0`` means unlimited range. With ``light_walls`` False,
        opaque cells are never part of the result.
        """
        self._idx(origin_x, origin_y)
        if radius < 0:
            raise ValueError("radius must be >= 0")

        visible: set[Coord] = {(origin_x, origin_y)}
        match algorithm:
            case FovAlgorithm.BASIC:
                self._cast_rays(origin_x, origin_y, radius, light_walls, visible)
                if light_walls:
                    self._light_wall_backs(origin_x, origin_y, radius, visible)
            case FovAlgorithm.SHADOWCAST:
                limit = radius if radius > 0 else max(self.width, self.height)
                for xx, xy, yx, yy in _OCTANTS:
                    self._cast_light(
                        origin_x, origin_y, 1, 1.0, 0.0, limit, radius,
                        xx, xy, yx, yy, light_walls, visible,
                    )
            case _:
                raise ValueError(f"unknown FOV algorithm {algorithm!r}")

        self._visible = frozenset(visible)
        self._origin = (origin_x, origin_y)
        for x, y in self._visible:
            self._map.mark_explored(x, y)

        logger.debug(
            "FOV from (%d,%d) radius %d -> %d visible tiles",
            origin_x, origin_y, radius, len(self._visible),
        )
        return self._visible

    def _in_radius(self, dx: int, dy: int, radius: int) -> bool:
        return radius == 0 or dx * dx + dy * dy <= radius * radius

    def _cast_rays(self, ox: int, oy: int, radius: int, light_walls: bool, visible: set[Coord]) -> None:
        if radius > 0:
            xmin, xmax = max(0, ox - radius), min(self.width - 1, ox + radius)
            ymin, ymax = max(0, oy - radius), min(self.height - 1, oy + radius)
        else:
            xmin, xmax, ymin, ymax = 0, self.width - 1, 0, self.height - 1

        for x in range(xmin, xmax + 1):
            self._cast_ray(ox, oy, x, ymin, radius, light_walls, visible)
            self._cast_ray(ox, oy, x, ymax, radius, light_walls, visible)
        for y in range(ymin + 1, ymax):
            self._cast_ray(ox, oy, xmin, y, radius, light_walls, visible)
            self._cast_ray(ox, oy, xmax, y, radius, light_walls, visible)

    def _cast_ray(
        self, ox: int, oy: int, tx: int, ty: int,
        radius: int, light_walls: bool, visible: set[Coord],
    ) -> None:
        line = bresenham(ox, oy, tx, ty)
        next(line)  # origin
        for x, y in line:
            if not self._in_radius(x - ox, y - oy, radius):
                return
            if self._transparent[y * self.width + x]:
                visible.add((x, y))
                continue
            if light_walls:
                visible.add((x, y))
            return

    def _light_wall_backs(self, ox: int, oy: int, radius: int, visible: set[Coord]) -> None:
        """Light opaque cells just behind visible floor, on the far side from the origin.

        Rays aimed at the box perimeter skip some wall cells, most often
        corners and walls hit at a grazing angle.
        """
        walls: set[Coord] = set()
        for x, y in visible:
            if not self._transparent[y * self.width + x]:
                continue
            dx = x - ox
            dy = y - oy
            steps_x = (1 if dx > 0 else -1,) if dx else (-1, 1)
            steps_y = (1 if dy > 0 else -1,) if dy else (-1, 1)
            for sx in steps_x:
                for sy in steps_y:
                    for nx, ny in ((x + sx, y), (x, y + sy), (x + sx, y + sy)):
                        if not (0 <= nx < self.width and 0 <= ny < self.height):
                            continue
                        if self._transparent[ny * self.width + nx]:
                            continue
                        if self._in_radius(nx - ox, ny - oy, radius):
                            walls.add((nx, ny))
        visible |= walls

    def _cast_light(
        self,
        ox: int, oy: int,
        row: int, start: float, end: float,
        limit: int, radius: int,
        xx: int, xy: int, yx: int, yy: int,
        light_walls: bool, visible: set[Coord],
    ) -> None:
        if start < end:
            return
        new_start = start
        for j in range(row, limit + 1):
            dx, dy = -j - 1, -j
            blocked = False
            while dx <= 0:
                dx += 1
                mx, my = ox + dx * xx + dy * xy, oy + dx * yx + dy * yy
                l_slope = (dx - 0.5) / (dy + 0.5)
                r_slope = (dx + 0.5) / (dy - 0.5)
                if start < r_slope:
                    continue
                if end > l_slope:
                    break
                # off-map cells behave as unlit walls
                on_map = 0 <= mx < self.width and 0 <= my < self.height
                transparent = on_map and self._transparent[my * self.width + mx]
                if on_map and self._in_radius(dx, dy, radius) and (transparent or light_walls):
                    visible.add((mx, my))

                if blocked:
                    if not transparent:
                        new_start = r_slope
                        continue
                    blocked = False
                    start = new_start
                elif not transparent and j < limit:
                    blocked = True
                    self._cast_light(
                        ox, oy, j + 1, start, l_slope, limit, radius,
                        xx, xy, yx, yy, light_walls, visible,
                    )
                    new_start = r_slope
            if blocked:
                break
