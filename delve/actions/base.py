"""Base action proposal — the universal currency between AI, player input and the TurnEngine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from delve.core.enums import ActionType


@dataclass(frozen=True, slots=True)
class ActionProposal:
    """An intent produced for one entity.

    The TurnEngine validates and applies (or drops) each proposal.
    MOVE targets are ``Vector2`` cells, ATTACK targets are entity ids.
    """

    actor_id: int
    verb: ActionType
    target: Any = None
    reason: str = ""

    def __repr__(self) -> str:
        return f"Proposal(entity={self.actor_id}, {self.verb.name}, target={self.target}, reason={self.reason!r})"
