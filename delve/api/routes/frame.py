"""GET /api/v1/frame — everything a display paints after a turn."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from delve.api.dependencies import get_session_manager
from delve.api.engine_manager import SessionManager
from delve.api.schemas import EntitySchema, EventSchema, FrameResponse, PlayerStatsSchema

router = APIRouter()


@router.get("/frame", response_model=FrameResponse)
def get_frame(
    messages: int = Query(20, ge=0, le=200, description="Number of recent messages to include"),
    manager: SessionManager = Depends(get_session_manager),
) -> FrameResponse:
    frame = manager.frame(messages)
    if frame is None:
        raise HTTPException(status_code=503, detail="Session not initialized yet.")

    return FrameResponse(
        width=frame.width,
        height=frame.height,
        tiles=frame.tiles,
        entities=[
            EntitySchema(id=s.id, x=s.x, y=s.y, glyph=s.glyph, color=s.color, name=s.name)
            for s in frame.entities
        ],
        player=PlayerStatsSchema(hp=frame.hp, max_hp=frame.max_hp),
        messages=[
            EventSchema(turn=ev.turn, category=ev.category, message=ev.message, entity_ids=list(ev.entity_ids))
            for ev in frame.messages
        ],
        turn=frame.turn,
        state=frame.state.value,
    )
