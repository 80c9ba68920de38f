"""POST /api/v1/control/{action} — session lifecycle controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from delve.api.dependencies import get_session_manager
from delve.api.engine_manager import SessionManager
from delve.api.schemas import ControlResponse

router = APIRouter()


class ControlAction(str, Enum):
    reset = "reset"


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: SessionManager = Depends(get_session_manager),
) -> ControlResponse:
    match action:
        case ControlAction.reset:
            turn = manager.reset()
            return ControlResponse(status="ok", message="Level regenerated.", turn=turn)
