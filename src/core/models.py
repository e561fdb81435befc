"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass
class FrameModel:
    """Rolls of a single frame. None means the ball has not been thrown (yet)."""

    frame_number: int
    roll1: Optional[int] = None
    roll2: Optional[int] = None
    roll3: Optional[int] = None
    score: Optional[int] = None


@dataclass
class PlayerModel:
    player_id: UUID
    name: str
    frames: list[FrameModel] = field(default_factory=list)


@dataclass
class GameModel:
    """Transport-safe representation of a bowling game used between API, Service, DB, and Game layers."""

    date_played: datetime
    is_finished: bool
    players: list[PlayerModel]
