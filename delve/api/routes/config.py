"""GET /api/v1/config — expose the active dungeon configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from delve.api.dependencies import get_session_manager
from delve.api.engine_manager import SessionManager
from delve.api.schemas import DungeonConfigResponse

router = APIRouter()


@router.get("/config", response_model=DungeonConfigResponse)
def get_config(
    manager: SessionManager = Depends(get_session_manager),
) -> DungeonConfigResponse:
    cfg = manager.config
    return DungeonConfigResponse(
        seed=cfg.seed,
        map_width=cfg.map_width,
        map_height=cfg.map_height,
        max_rooms=cfg.max_rooms,
        room_min_size=cfg.room_min_size,
        room_max_size=cfg.room_max_size,
        max_room_monsters=cfg.max_room_monsters,
        fov_radius=cfg.fov_radius,
        fov_light_walls=cfg.fov_light_walls,
        fov_algorithm=cfg.fov_algorithm.name.lower(),
        player_name=cfg.player_name,
        player_hp=cfg.player_hp,
        player_defense=cfg.player_defense,
        player_power=cfg.player_power,
    )
