"""Entity registry — a column-oriented table indexed by stable row id.

Row 0 is always the player. Rows are appended during generation and never
removed: a dead entity keeps its row with its capabilities stripped, so any
id held elsewhere keeps pointing at the same thing.

Optional components (Fighter, AI) are sparse columns keyed by row id rather
than nullable attributes on an entity class.
"""

from __future__ import annotations

from collections.abc import Iterator

from delve.core.enums import AIKind
from delve.core.errors import InvariantViolation
from delve.core.models import Color, Fighter, Vector2

PLAYER_ID = 0


class World:
    """The single source of truth for every entity on the level."""

    __slots__ = ("_pos", "_name", "_glyph", "_color", "_blocks", "_alive", "_fighters", "_ai")

    def __init__(self) -> None:
        self._pos: list[Vector2] = []
        self._name: list[str] = []
        self._glyph: list[str] = []
        self._color: list[Color] = []
        self._blocks: list[bool] = []
        self._alive: list[bool] = []
        self._fighters: dict[int, Fighter] = {}
        self._ai: dict[int, AIKind] = {}

    def __len__(self) -> int:
        return len(self._pos)

    def ids(self) -> range:
        """All row ids in index order."""
        return range(len(self._pos))

    def spawn(
        self,
        name: str,
        glyph: str,
        color: Color,
        pos: Vector2,
        *,
        blocks: bool = True,
        fighter: Fighter | None = None,
        ai: AIKind | None = None,
    ) -> int:
        """Append a row and return its id."""
        eid = len(self._pos)
        self._pos.append(pos)
        self._name.append(name)
        self._glyph.append(glyph)
        self._color.append(color)
        self._blocks.append(blocks)
        self._alive.append(True)
        if fighter is not None:
            self._fighters[eid] = fighter
        if ai is not None:
            self._ai[eid] = ai
        return eid

    # -- row handles --

    def ref(self, eid: int) -> EntityRef:
        if not 0 <= eid < len(self._pos):
            raise IndexError(f"no entity row {eid} (registry holds {len(self._pos)})")
        return EntityRef(self, eid)

    @property
    def player(self) -> EntityRef:
        if not self._pos:
            raise InvariantViolation("player row 0 does not exist")
        return EntityRef(self, PLAYER_ID)

    def __iter__(self) -> Iterator[EntityRef]:
        for eid in range(len(self._pos)):
            yield EntityRef(self, eid)

    def split_pair(self, first: int, second: int) -> tuple[EntityRef, EntityRef]:
        """Two disjoint mutable handles for an attacker/defender style pair."""
        if first == second:
            raise InvariantViolation(f"entity {first} cannot be paired with itself")
        return self.ref(first), self.ref(second)

    # -- queries --

    def blocking_at(self, pos: Vector2) -> int | None:
        """Id of a blocking entity standing on *pos*, if any."""
        for eid, p in enumerate(self._pos):
            if p == pos and self._blocks[eid]:
                return eid
        return None

    def fighter_at(self, pos: Vector2) -> int | None:
        """Lowest id of an entity with a Fighter standing on *pos*."""
        for eid, p in enumerate(self._pos):
            if p == pos and eid in self._fighters:
                return eid
        return None

    def with_ai(self) -> list[int]:
        return sorted(self._ai)

    def alive_count(self) -> int:
        return sum(self._alive)


class EntityRef:
    """Thin handle onto one row of a World."""

    __slots__ = ("_world", "id")

    def __init__(self, world: World, eid: int) -> None:
        self._world = world
        self.id = eid

    def __eq__(self, other: object) -> bool:
        return isinstance(other, EntityRef) and other._world is self._world and other.id == self.id

    def __hash__(self) -> int:
        return hash((id(self._world), self.id))

    def __repr__(self) -> str:
        return f"EntityRef({self.id}, {self.name!r} @ {self.pos})"

    # -- columns --

    @property
    def pos(self) -> Vector2:
        return self._world._pos[self.id]

    @pos.setter
    def pos(self, value: Vector2) -> None:
        self._world._pos[self.id] = value

    @property
    def name(self) -> str:
        return self._world._name[self.id]

    @name.setter
    def name(self, value: str) -> None:
        self._world._name[self.id] = value

    @property
    def glyph(self) -> str:
        return self._world._glyph[self.id]

    @glyph.setter
    def glyph(self, value: str) -> None:
        self._world._glyph[self.id] = value

    @property
    def color(self) -> Color:
        return self._world._color[self.id]

    @color.setter
    def color(self, value: Color) -> None:
        self._world._color[self.id] = value

    @property
    def blocks(self) -> bool:
        return self._world._blocks[self.id]

    @blocks.setter
    def blocks(self, value: bool) -> None:
        self._world._blocks[self.id] = value

    @property
    def alive(self) -> bool:
        return self._world._alive[self.id]

    @alive.setter
    def alive(self, value: bool) -> None:
        self._world._alive[self.id] = value

    # -- sparse components --

    @property
    def fighter(self) -> Fighter | None:
        return self._world._fighters.get(self.id)

    @fighter.setter
    def fighter(self, value: Fighter | None) -> None:
        if value is None:
            self._world._fighters.pop(self.id, None)
        else:
            self._world._fighters[self.id] = value

    @property
    def ai(self) -> AIKind | None:
        return self._world._ai.get(self.id)

    @ai.setter
    def ai(self, value: AIKind | None) -> None:
        if value is None:
            self._world._ai.pop(self.id, None)
        else:
            self._world._ai[self.id] = value

    # -- helpers --

    def distance_to(self, other: EntityRef) -> float:
        return self.pos.distance(other.pos)
