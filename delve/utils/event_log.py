"""Message log for game events shown in the display's message panel."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameEvent:
    """A single game event: an attack, a death, a blocked move."""

    turn: int
    category: str
    message: str
    entity_ids: tuple[int, ...] = ()  # IDs of entities involved in this event


class MessageLog:
    """Bounded event log. Writers append; readers copy a slice.

    Oldest events fall off once ``capacity`` is reached.
    """

    __slots__ = ("_buffer",)

    def __init__(self, capacity: int = 200) -> None:
        self._buffer: deque[GameEvent] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._buffer)

    def append(self, event: GameEvent) -> None:
        self._buffer.append(event)

    def latest(self, count: int = 50) -> list[GameEvent]:
        """Return the *count* most recent events."""
        if count <= 0:
            return []
        return list(self._buffer)[-count:]
