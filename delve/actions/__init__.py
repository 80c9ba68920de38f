"""Action system: proposals, validation, and execution."""

from delve.actions.base import ActionProposal
from delve.actions.combat import CombatResolver
from delve.actions.move import MoveAction, is_blocked, step_toward

__all__ = ["ActionProposal", "CombatResolver", "MoveAction", "is_blocked", "step_toward"]
