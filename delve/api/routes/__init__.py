"""Versioned API route modules."""

from fastapi import APIRouter

from delve.api.routes.config import router as config_router
from delve.api.routes.control import router as control_router
from delve.api.routes.frame import router as frame_router
from delve.api.routes.intent import router as intent_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(frame_router, tags=["Frame"])
api_router.include_router(intent_router, tags=["Intent"])
api_router.include_router(control_router, tags=["Control"])
api_router.include_router(config_router, tags=["Config"])

__all__ = ["api_router"]
