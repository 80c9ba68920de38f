"""AI layer: per-kind handlers and the dispatching brain."""

from delve.ai.brain import AI_HANDLERS, AIBrain, AIContext, AIHandler, BasicAIHandler

__all__ = ["AI_HANDLERS", "AIBrain", "AIContext", "AIHandler", "BasicAIHandler"]
