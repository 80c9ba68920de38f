"""POST /api/v1/intent/{intent} — resolve one player intent."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from delve.api.dependencies import get_session_manager
from delve.api.engine_manager import SessionManager
from delve.api.schemas import IntentResponse
from delve.core.enums import Intent

router = APIRouter()


@router.post("/intent/{intent}", response_model=IntentResponse)
def post_intent(
    intent: Intent,
    manager: SessionManager = Depends(get_session_manager),
) -> IntentResponse:
    outcome = manager.handle(intent)
    if outcome is None:
        raise HTTPException(status_code=503, detail="Session not initialized yet.")
    result, turn = outcome
    return IntentResponse(result=result.value, turn=turn)
