"""MoveAction — validates and applies movement proposals."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delve.actions.base import ActionProposal
from delve.core.enums import ActionType
from delve.core.models import Vector2

if TYPE_CHECKING:
    from delve.core.game_map import GameMap
    from delve.core.world import World

logger = logging.getLogger(__name__)


def is_blocked(game_map: GameMap, world: World, pos: Vector2) -> bool:
    """True if the tile is a wall or a blocking entity stands on it."""
    return game_map.is_blocked(pos.x, pos.y) or world.blocking_at(pos) is not None


def round_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value >= 0:
        return int(value + 0.5)
    return -int(-value + 0.5)


def step_toward(origin: Vector2, target: Vector2) -> Vector2:
    """Unit step from *origin* toward *target*, snapped to the 8 grid directions.

    Some angles round to a zero step; the caller treats that as no move.
    """
    dx = target.x - origin.x
    dy = target.y - origin.y
    distance = (dx * dx + dy * dy) ** 0.5
    if distance == 0:
        return Vector2(0, 0)
    return Vector2(round_away(dx / distance), round_away(dy / distance))


class MoveAction:
    """Stateless handler for MOVE proposals."""

    @staticmethod
    def validate(proposal: ActionProposal, game_map: GameMap, world: World) -> bool:
        if proposal.verb != ActionType.MOVE:
            return False

        entity = world.ref(proposal.actor_id)
        if not entity.alive:
            return False

        target: Vector2 = proposal.target
        if not game_map.in_bounds(target.x, target.y):
            logger.debug("Entity %d move off the map to %s rejected", proposal.actor_id, target)
            return False

        if game_map.is_blocked(target.x, target.y):
            logger.debug("Entity %d blocked by terrain at %s", proposal.actor_id, target)
            return False

        if world.blocking_at(target) is not None:
            logger.debug("Entity %d blocked by occupant at %s", proposal.actor_id, target)
            return False

        return True

    @staticmethod
    def apply(proposal: ActionProposal, world: World) -> None:
        entity = world.ref(proposal.actor_id)
        old_pos = entity.pos
        entity.pos = proposal.target
        logger.debug("Entity %d (%s) moved %s -> %s", entity.id, entity.name, old_pos, entity.pos)
