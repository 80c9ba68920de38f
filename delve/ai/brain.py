"""AIBrain — per-entity decision making, one proposal per turn.

Handlers are registered in AI_HANDLERS by AIKind; a new behaviour is a new
handler class plus one dict entry. The brain only decides: the TurnEngine
validates and applies what comes back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from delve.actions.base import ActionProposal
from delve.actions.move import step_toward
from delve.core.enums import AIKind, ActionType
from delve.core.world import PLAYER_ID

if TYPE_CHECKING:
    from delve.core.game_map import GameMap
    from delve.core.world import EntityRef, World
    from delve.systems.fov import VisibilityEngine

# Closer than this the monster swings instead of stepping
MELEE_DISTANCE = 2.0


@dataclass(slots=True)
class AIContext:
    """All data a handler might need."""

    actor: EntityRef
    world: World
    game_map: GameMap
    fov: VisibilityEngine


class AIHandler(ABC):
    """Base class for one AI policy."""

    @abstractmethod
    def handle(self, ctx: AIContext) -> ActionProposal:
        """Return the proposal for this turn."""


class BasicAIHandler(AIHandler):
    """Chase the player while seen, attack when adjacent.

    Visibility is symmetric: a monster standing on a cell the player can
    see is assumed to see the player.
    """

    def handle(self, ctx: AIContext) -> ActionProposal:
        actor = ctx.actor
        if not actor.alive or actor.fighter is None:
            return ActionProposal(actor_id=actor.id, verb=ActionType.WAIT, reason="inactive")

        if not ctx.fov.is_visible(actor.pos.x, actor.pos.y):
            return ActionProposal(actor_id=actor.id, verb=ActionType.WAIT, reason="out of sight")

        player = ctx.world.player
        if actor.distance_to(player) >= MELEE_DISTANCE:
            dest = actor.pos + step_toward(actor.pos, player.pos)
            return ActionProposal(actor_id=actor.id, verb=ActionType.MOVE, target=dest, reason="chase player")

        if player.alive and player.fighter is not None:
            return ActionProposal(actor_id=actor.id, verb=ActionType.ATTACK, target=PLAYER_ID, reason="melee")

        return ActionProposal(actor_id=actor.id, verb=ActionType.WAIT, reason="player dead")


AI_HANDLERS: dict[AIKind, AIHandler] = {
    AIKind.BASIC: BasicAIHandler(),
}


class AIBrain:
    """Dispatches entity AI decisions based on their AI tag."""

    __slots__ = ("_handlers",)

    def __init__(self, handlers: dict[AIKind, AIHandler] | None = None) -> None:
        self._handlers = handlers if handlers is not None else AI_HANDLERS

    def decide(
        self,
        entity_id: int,
        world: World,
        game_map: GameMap,
        fov: VisibilityEngine,
    ) -> ActionProposal | None:
        """Run the AI for *entity_id*. Returns None for rows without an AI tag."""
        actor = world.ref(entity_id)
        kind = actor.ai
        if kind is None:
            return None
        handler = self._handlers[kind]
        return handler.handle(AIContext(actor=actor, world=world, game_map=game_map, fov=fov))
