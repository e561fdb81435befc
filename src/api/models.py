"""Requests and Response models"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_names: list[str]

    @field_validator("player_names")
    @classmethod
    def validate_player_names(cls, value: list[str]) -> list[str]:
        if not value:
            raise InvalidRequestError("At least one player name is required.")

        names = [name.strip() for name in value]
        if any(not name for name in names):
            raise InvalidRequestError("Player names cannot be blank.")
        return names


class GetGameRequest(BaseModel):
    game_id: UUID


class RollBody(BaseModel):
    """Body of the roll route (the game ID is part of the path)."""

    player_id: UUID
    pins: int


class RollRequest(BaseModel):
    game_id: UUID
    player_id: UUID
    pins: int


# --- RESPONSE MODELS ---
class FrameResponse(BaseModel):
    frame_number: int
    roll1: Optional[int]
    roll2: Optional[int]
    roll3: Optional[int]
    score: Optional[int]


class PlayerResponse(BaseModel):
    player_id: UUID
    name: str
    is_finished: bool
    total_score: Optional[int]
    frames: list[FrameResponse]


class GameResponse(BaseModel):
    game_id: UUID
    date_played: datetime
    is_finished: bool
    players: list[PlayerResponse]


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    code: str
    max_allowed: Optional[int] = None
