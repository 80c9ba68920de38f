"""TurnEngine — resolves one player intent and the AI round that follows.

Phase cycle for a movement intent:
  1. Player — move-or-attack, fully resolved (including any death it causes)
  2. Visibility — recompute FOV if the player's cell changed
  3. AI — every row with an AI tag, in ascending index order
  4. Advance — bump the turn counter

Non-movement intents never reach phase 1. ``EXIT`` is terminal: once seen,
every later call returns ``TurnResult.EXIT`` without touching the world.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from delve.actions.base import ActionProposal
from delve.actions.combat import CombatResolver
from delve.actions.move import MoveAction
from delve.ai.brain import AIBrain
from delve.core.enums import ActionType, EngineState, Intent, TurnResult
from delve.core.models import INTENT_OFFSETS, Vector2
from delve.core.world import PLAYER_ID

if TYPE_CHECKING:
    from delve.config import DungeonConfig
    from delve.core.game_map import GameMap
    from delve.core.world import World
    from delve.systems.fov import VisibilityEngine
    from delve.utils.event_log import MessageLog

logger = logging.getLogger(__name__)


class TurnEngine:
    """Single-threaded owner of the turn loop for one level."""

    __slots__ = (
        "_config",
        "_map",
        "_world",
        "_fov",
        "_combat",
        "_brain",
        "_log",
        "_state",
        "_turn",
        "_prev_player_pos",
        "_on_toggle_fullscreen",
    )

    def __init__(
        self,
        config: DungeonConfig,
        game_map: GameMap,
        world: World,
        fov: VisibilityEngine,
        log: MessageLog | None = None,
        brain: AIBrain | None = None,
        on_toggle_fullscreen: Callable[[], None] | None = None,
    ) -> None:
        self._config = config
        self._map = game_map
        self._world = world
        self._fov = fov
        self._log = log
        self._combat = CombatResolver(log)
        self._brain = brain or AIBrain()
        self._state = EngineState.AWAITING_INPUT
        self._turn = 0
        self._prev_player_pos: Vector2 | None = None
        self._on_toggle_fullscreen = on_toggle_fullscreen

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def turn(self) -> int:
        """Number of turns taken so far."""
        return self._turn

    @property
    def world(self) -> World:
        return self._world

    @property
    def game_map(self) -> GameMap:
        return self._map

    @property
    def fov(self) -> VisibilityEngine:
        return self._fov

    @property
    def combat(self) -> CombatResolver:
        return self._combat

    # -- visibility --

    def refresh_visibility(self) -> bool:
        """Recompute FOV if the player moved since the last recompute.

        Returns True when a recompute happened.
        """
        pos = self._world.player.pos
        if pos == self._prev_player_pos:
            return False
        cfg = self._config
        self._fov.recompute(pos.x, pos.y, cfg.fov_radius, cfg.fov_light_walls, cfg.fov_algorithm)
        self._prev_player_pos = pos
        return True

    # -- step --

    def handle(self, intent: Intent) -> TurnResult:
        """Resolve one decoded intent."""
        if self._state is EngineState.EXITED:
            return TurnResult.EXIT

        match intent:
            case Intent.EXIT:
                self._state = EngineState.EXITED
                logger.info("Turn %d: exit requested", self._turn)
                return TurnResult.EXIT
            case Intent.TOGGLE_FULLSCREEN:
                if self._on_toggle_fullscreen is not None:
                    self._on_toggle_fullscreen()
                return TurnResult.DIDNT_TAKE_TURN
            case Intent.NONE:
                return TurnResult.DIDNT_TAKE_TURN
            case Intent.MOVE_UP | Intent.MOVE_DOWN | Intent.MOVE_LEFT | Intent.MOVE_RIGHT:
                if not self._world.player.alive:
                    return TurnResult.DIDNT_TAKE_TURN
                self._step(INTENT_OFFSETS[intent])
                return TurnResult.TOOK_TURN

        raise ValueError(f"unhandled intent {intent!r}")

    def _step(self, delta: Vector2) -> None:
        # --- Phase 1: Player ---
        self._apply(self._player_proposal(delta))

        # --- Phase 2: Visibility ---
        self.refresh_visibility()

        # --- Phase 3: AI, fixed index order ---
        for eid in self._world.ids():
            proposal = self._brain.decide(eid, self._world, self._map, self._fov)
            if proposal is not None:
                self._apply(proposal)

        # --- Phase 4: Advance ---
        self._turn += 1

    def _player_proposal(self, delta: Vector2) -> ActionProposal:
        """Move-or-attack: any Fighter on the target cell is attacked."""
        player = self._world.player
        target = player.pos + delta
        if self._map.in_bounds(target.x, target.y):
            occupant = self._world.fighter_at(target)
            if occupant is not None and occupant != PLAYER_ID:
                return ActionProposal(actor_id=PLAYER_ID, verb=ActionType.ATTACK, target=occupant, reason="bump")
        return ActionProposal(actor_id=PLAYER_ID, verb=ActionType.MOVE, target=target, reason="walk")

    def _apply(self, proposal: ActionProposal) -> bool:
        match proposal.verb:
            case ActionType.MOVE:
                if MoveAction.validate(proposal, self._map, self._world):
                    MoveAction.apply(proposal, self._world)
                    return True
            case ActionType.ATTACK:
                self._combat.attack(self._world, proposal.actor_id, proposal.target, self._turn)
                return True
            case ActionType.WAIT:
                return False

        logger.debug("Rejected: %s", proposal)
        return False
