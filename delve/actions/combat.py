"""CombatResolver — melee damage and the death transition.

Damage is ``max(0, power - defense)``. A zero result is reported as a
no-effect event and leaves hp alone.

Death is a closed choice between two policies on the defender's Fighter.
The row is never removed from the World: a dead monster keeps its index,
loses its Fighter and AI, stops blocking and is renamed to its remains.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, assert_never

from delve.core.enums import DeathPolicy
from delve.core.errors import InvariantViolation
from delve.core.models import CORPSE_COLOR, CORPSE_GLYPH
from delve.utils.event_log import GameEvent

if TYPE_CHECKING:
    from delve.core.world import EntityRef, World
    from delve.utils.event_log import MessageLog

logger = logging.getLogger(__name__)


def _title(name: str) -> str:
    return name[:1].upper() + name[1:]


class CombatResolver:
    """Applies attacks and damage, records the resulting events."""

    __slots__ = ("_log",)

    def __init__(self, log: MessageLog | None = None) -> None:
        self._log = log

    def _emit(self, events: list[GameEvent], event: GameEvent) -> None:
        events.append(event)
        if self._log is not None:
            self._log.append(event)

    @staticmethod
    def damage_for(power: int, defense: int) -> int:
        return max(0, power - defense)

    def attack(self, world: World, attacker_id: int, defender_id: int, turn: int = 0) -> list[GameEvent]:
        """Resolve one melee attack. Returns the events it produced."""
        attacker, defender = world.split_pair(attacker_id, defender_id)
        a_fighter = attacker.fighter
        d_fighter = defender.fighter
        if a_fighter is None or d_fighter is None:
            raise InvariantViolation(
                f"attack needs two fighters, got {attacker!r} -> {defender!r}")

        events: list[GameEvent] = []
        damage = self.damage_for(a_fighter.power, d_fighter.defense)
        if damage > 0:
            self._emit(events, GameEvent(
                turn=turn,
                category="combat",
                message=f"{_title(attacker.name)} attacks {defender.name} for {damage} hit points.",
                entity_ids=(attacker.id, defender.id),
            ))
            logger.info(
                "Turn %d: Entity %d (%s) hits Entity %d (%s) for %d damage [HP: %d/%d]",
                turn, attacker.id, attacker.name, defender.id, defender.name,
                damage, d_fighter.hp - damage, d_fighter.max_hp,
            )
            events.extend(self.take_damage(world, defender.id, damage, turn))
        else:
            self._emit(events, GameEvent(
                turn=turn,
                category="combat",
                message=f"{_title(attacker.name)} attacks {defender.name} but it has no effect!",
                entity_ids=(attacker.id, defender.id),
            ))
            logger.info(
                "Turn %d: Entity %d (%s) attack on Entity %d (%s) has no effect",
                turn, attacker.id, attacker.name, defender.id, defender.name,
            )
        return events

    def take_damage(self, world: World, entity_id: int, amount: int, turn: int = 0) -> list[GameEvent]:
        """Apply *amount* directly, bypassing power/defense.

        Non-positive amounts change nothing. An entity that is already dead,
        or has no Fighter, is left untouched, so the death policy fires at
        most once.
        """
        target = world.ref(entity_id)
        fighter = target.fighter
        if fighter is None or not target.alive:
            return []

        if amount > 0:
            fighter.hp -= amount

        events: list[GameEvent] = []
        if fighter.hp <= 0:
            target.alive = False
            self._emit(events, self._on_death(target, fighter.on_death, turn))
        return events

    @staticmethod
    def _on_death(target: EntityRef, policy: DeathPolicy, turn: int) -> GameEvent:
        match policy:
            case DeathPolicy.PLAYER:
                target.glyph = CORPSE_GLYPH
                target.color = CORPSE_COLOR
                logger.info("Turn %d: the player died", turn)
                return GameEvent(turn=turn, category="death", message="You died!", entity_ids=(target.id,))
            case DeathPolicy.MONSTER:
                message = f"{_title(target.name)} is dead!"
                target.glyph = CORPSE_GLYPH
                target.color = CORPSE_COLOR
                target.blocks = False
                target.fighter = None
                target.ai = None
                target.name = f"remains of {target.name}"
                logger.info("Turn %d: Entity %d became %s", turn, target.id, target.name)
                return GameEvent(turn=turn, category="death", message=message, entity_ids=(target.id,))
            case _:
                assert_never(policy)
