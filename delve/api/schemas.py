"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Frame ---

class EntitySchema(BaseModel):
    id: int
    x: int
    y: int
    glyph: str
    color: tuple[int, int, int]
    name: str

    class Config:
        frozen = True


class PlayerStatsSchema(BaseModel):
    hp: int
    max_hp: int


class EventSchema(BaseModel):
    turn: int
    category: str
    message: str
    entity_ids: list[int] = Field(default_factory=list)


class FrameResponse(BaseModel):
    width: int
    height: int
    tiles: list[int] = Field(
        description="RLE pairs [shade, count, ...] of TileShade values (0=hidden,1=dark wall,2=dark ground,3=light wall,4=light ground)",
    )
    entities: list[EntitySchema] = Field(default_factory=list, description="Visible entities in draw order")
    player: PlayerStatsSchema
    messages: list[EventSchema] = Field(default_factory=list)
    turn: int
    state: str


# --- Intent ---

class IntentResponse(BaseModel):
    result: str
    turn: int


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    turn: int = 0


# --- Config ---

class DungeonConfigResponse(BaseModel):
    seed: int
    map_width: int
    map_height: int
    max_rooms: int
    room_min_size: int
    room_max_size: int
    max_room_monsters: int
    fov_radius: int
    fov_light_walls: bool
    fov_algorithm: str
    player_name: str
    player_hp: int
    player_defense: int
    player_power: int
