"""SessionManager — owns the single GameSession behind the HTTP surface.

Requests may arrive on any worker thread; every read or write of the session
happens under one lock so a frame never observes a half-resolved turn.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from delve.core.enums import EngineState, Intent, TurnResult
from delve.engine.session import GameSession
from delve.render.frame import entity_sprites, rle_encode, shade_grid, stat_bar

if TYPE_CHECKING:
    from delve.config import DungeonConfig
    from delve.render.frame import EntitySprite
    from delve.utils.event_log import GameEvent

logger = logging.getLogger(__name__)


class FrameData:
    """Plain copy of everything a display needs for one paint."""

    __slots__ = ("width", "height", "tiles", "entities", "hp", "max_hp", "messages", "turn", "state")

    def __init__(
        self,
        width: int,
        height: int,
        tiles: list[int],
        entities: list[EntitySprite],
        hp: int,
        max_hp: int,
        messages: list[GameEvent],
        turn: int,
        state: EngineState,
    ) -> None:
        self.width = width
        self.height = height
        self.tiles = tiles
        self.entities = entities
        self.hp = hp
        self.max_hp = max_hp
        self.messages = messages
        self.turn = turn
        self.state = state


class SessionManager:
    """Thread-safe access to one running level.

    Provides:
      - intent handling (one turn per call)
      - frame snapshots (RLE tiles, visible sprites, stat bar, messages)
      - reset (regenerate from the configured seed)
    """

    def __init__(self, config: DungeonConfig) -> None:
        self._config = config
        self._lock = threading.Lock()
        self._session: GameSession | None = None

    @property
    def ready(self) -> bool:
        with self._lock:
            return self._session is not None

    @property
    def config(self) -> DungeonConfig:
        """Config every reset regenerates from; fixed for the manager's life."""
        return self._config

    # -- lifecycle --

    def start(self) -> None:
        with self._lock:
            if self._session is None:
                self._session = GameSession.create(self._config)
        logger.info("SessionManager started (seed=%d)", self._config.seed)

    def stop(self) -> None:
        with self._lock:
            self._session = None
        logger.info("SessionManager stopped.")

    def reset(self) -> int:
        """Regenerate the level; returns the new turn number (always 0)."""
        with self._lock:
            self._session = GameSession.create(self._config)
            turn = self._session.turn
        logger.info("SessionManager reset.")
        return turn

    # -- turn --

    def handle(self, intent: Intent) -> tuple[TurnResult, int] | None:
        """Resolve *intent*; returns ``(result, turn)`` or None before start."""
        with self._lock:
            session = self._session
            if session is None:
                return None
            result = session.handle(intent)
            return result, session.turn

    # -- views --

    def frame(self, message_count: int = 20) -> FrameData | None:
        with self._lock:
            session = self._session
            if session is None:
                return None
            hp, max_hp = stat_bar(session.world)
            return FrameData(
                width=session.game_map.width,
                height=session.game_map.height,
                tiles=rle_encode(shade_grid(session.game_map, session.fov)),
                entities=entity_sprites(session.world, session.fov),
                hp=hp,
                max_hp=max_hp,
                messages=session.log.latest(message_count),
                turn=session.turn,
                state=session.engine.state,
            )
