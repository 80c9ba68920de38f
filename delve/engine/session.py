"""GameSession — builds and owns every component of one running level."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from delve.config import DungeonConfig
from delve.core.enums import Intent, TurnResult
from delve.engine.turn_engine import TurnEngine
from delve.systems.fov import VisibilityEngine
from delve.systems.mapgen import MapGenerator
from delve.utils.event_log import GameEvent, MessageLog

if TYPE_CHECKING:
    from delve.core.game_map import GameMap
    from delve.core.world import World
    from delve.systems.rng import RandomSource

logger = logging.getLogger(__name__)

WELCOME = "Welcome stranger! Prepare to perish in the dungeon below."


@dataclass(slots=True)
class GameSession:
    """Map, entities, visibility, message log and turn engine for one run."""

    config: DungeonConfig
    game_map: GameMap
    world: World
    fov: VisibilityEngine
    log: MessageLog
    engine: TurnEngine

    @classmethod
    def create(
        cls,
        config: DungeonConfig | None = None,
        rng: RandomSource | None = None,
        on_toggle_fullscreen: Callable[[], None] | None = None,
    ) -> GameSession:
        """Generate a fresh level and seed visibility from the player start."""
        config = config or DungeonConfig()
        level = MapGenerator(config).generate(rng)
        fov = VisibilityEngine.build(level.game_map)
        log = MessageLog(config.message_log_size)
        engine = TurnEngine(
            config, level.game_map, level.world, fov,
            log=log, on_toggle_fullscreen=on_toggle_fullscreen,
        )
        engine.refresh_visibility()
        log.append(GameEvent(turn=0, category="system", message=WELCOME))
        logger.info("Session ready (seed=%d, %d entities)", config.seed, len(level.world))
        return cls(config, level.game_map, level.world, fov, log, engine)

    @property
    def turn(self) -> int:
        return self.engine.turn

    def handle(self, intent: Intent) -> TurnResult:
        return self.engine.handle(intent)
