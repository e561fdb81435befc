"""HTTP routes for creating games, reading the score sheet and recording rolls."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.api.models import (
    CreateGameRequest,
    GameResponse,
    GetGameRequest,
    RollBody,
    RollRequest,
)
from src.db.database import get_db
from src.db.sql_repository import SQLGameRepository
from src.services.bowling_service import BowlingService

router = APIRouter(prefix="/game", tags=["game"])


def get_service(db: Session = Depends(get_db)) -> BowlingService:
    return BowlingService(SQLGameRepository(db))


@router.post("", response_model=GameResponse, status_code=201)
def create_game(
    request: CreateGameRequest, service: BowlingService = Depends(get_service)
) -> GameResponse:
    return service.create_new_game(request)


@router.get("/{game_id}", response_model=GameResponse)
def get_game(
    game_id: UUID, service: BowlingService = Depends(get_service)
) -> GameResponse:
    return service.get_game_state(GetGameRequest(game_id=game_id))


@router.post("/{game_id}/roll", response_model=GameResponse)
def roll(
    game_id: UUID, body: RollBody, service: BowlingService = Depends(get_service)
) -> GameResponse:
    request = RollRequest(game_id=game_id, player_id=body.player_id, pins=body.pins)
    return service.roll(request)
