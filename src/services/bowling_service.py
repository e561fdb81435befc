"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    FrameResponse,
    GameResponse,
    GetGameRequest,
    PlayerResponse,
    RollRequest,
)
from src.bowling.game import Game
from src.core.exceptions import GameError, GameNotFoundError
from src.core.models import GameModel
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class BowlingService:
    """Orchestration of layers for a bowling game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a new game for the requested players."""

        # Use info in CreateGameRequest to create a new Game, and convert into GameModel
        new_game = Game.new_game(request.player_names)
        created_game_data = new_game.to_model()

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(created_game_data)
        logger.info(
            "Created game %s with %d player(s)", game_id, len(stored_game.players)
        )

        # Return a GameResponse
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to refresh the score sheet.
        """
        # Retrieve persisted GameModel from repository
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def roll(self, request: RollRequest) -> GameResponse:
        """Record the pins knocked down by a player's roll."""

        # Retrieve persisted GameModel from repository
        stored_model = self._fetch_game(request.game_id)

        # Create a new Game instance from the retrieved GameModel
        game = Game.from_model(stored_model)

        # Attempt the roll. Nothing gets stored when it is rejected.
        try:
            game.roll(request.player_id, request.pins)
        except GameError as exc:
            logger.info(
                "Rejected roll of %d pin(s) by player %s in game %s: %s",
                request.pins,
                request.player_id,
                request.game_id,
                exc,
            )
            raise

        # Capture updated state in GameModel
        after_roll = game.to_model()

        # store in repository
        stored_model = self.repo.update_game(request.game_id, after_roll)
        if stored_model is None:
            raise GameNotFoundError(f"Game with game_id={request.game_id} not found.")
        logger.info(
            "Recorded roll of %d pin(s) by player %s in game %s (game finished: %s)",
            request.pins,
            request.player_id,
            request.game_id,
            stored_model.is_finished,
        )

        # Return a GameResponse
        return self._create_game_response(request.game_id, stored_model)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""

        # Per-player status and totals are derived by the domain layer
        game = Game.from_model(model)
        return GameResponse(
            game_id=game_id,
            date_played=game.date_played,
            is_finished=game.is_finished,
            players=[
                PlayerResponse(
                    player_id=player.player_id,
                    name=player.name,
                    is_finished=player.is_finished,
                    total_score=player.total_score,
                    frames=[
                        FrameResponse(
                            frame_number=frame.frame_number,
                            roll1=frame.roll1,
                            roll2=frame.roll2,
                            roll3=frame.roll3,
                            score=frame.score,
                        )
                        for frame in player.frames
                    ],
                )
                for player in game.players
            ],
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game_model
