"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns the players and their frames (aggregate root): every roll goes through the Game, which
locates the frame the roll belongs to, validates and records it, re-scores the player and checks whether the game has ended.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Self, Sequence
from uuid import UUID, uuid4

from src.bowling.frame import Frame
from src.bowling.scoring import recalculate_all
from src.core.exceptions import (
    GameAlreadyCompleteError,
    InvalidRequestError,
    PlayerNotFoundError,
)
from src.core.models import GameModel, PlayerModel
from src.core.shared_types import FRAMES_PER_GAME


def locate_open_frame(frames: Sequence[Frame]) -> Optional[Frame]:
    """First frame that still accepts rolls. None means all frames are complete and a new one is needed."""
    return next((frame for frame in frames if not frame.is_complete), None)


@dataclass
class Player:
    player_id: UUID
    name: str
    frames: list[Frame] = field(default_factory=list)

    @classmethod
    def from_model(cls, model: PlayerModel) -> Self:
        frames = sorted(
            (Frame.from_model(frame) for frame in model.frames),
            key=lambda frame: frame.frame_number,
        )
        return cls(player_id=model.player_id, name=model.name, frames=frames)

    def to_model(self) -> PlayerModel:
        return PlayerModel(
            player_id=self.player_id,
            name=self.name,
            frames=[frame.to_model() for frame in self.frames],
        )

    @property
    def is_finished(self) -> bool:
        if len(self.frames) != FRAMES_PER_GAME:
            return False
        final_frame = self.frames[-1]
        return final_frame.is_final and final_frame.is_complete

    @property
    def total_score(self) -> Optional[int]:
        """Cumulative score of the last frame that can be scored so far."""
        return next(
            (frame.score for frame in reversed(self.frames) if frame.score is not None),
            None,
        )

    def roll(self, pins: int) -> None:
        """
        Record a roll in the open frame (or a new one) and re-score all frames.
        A new frame is only added once the roll has been accepted.
        """
        frame = locate_open_frame(self.frames)
        is_new_frame = frame is None
        if frame is None:
            next_frame_number = len(self.frames) + 1
            if next_frame_number > FRAMES_PER_GAME:
                raise GameAlreadyCompleteError(
                    f"Game is already complete for player {self.name!r}."
                )
            frame = Frame(frame_number=next_frame_number)

        frame.record_roll(pins)
        if is_new_frame:
            self.frames.append(frame)

        recalculate_all(self.frames)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    date_played: datetime
    players: list[Player]
    is_finished: bool = False

    @classmethod
    def new_game(cls, player_names: Sequence[str]) -> Self:
        """Start a game with one player per name, in the given order. No frames have been played yet."""
        if not player_names:
            raise InvalidRequestError("At least one player name is required.")

        players = [Player(player_id=uuid4(), name=name) for name in player_names]
        return cls(date_played=datetime.now(timezone.utc), players=players)

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        return cls(
            date_played=model.date_played,
            players=[Player.from_model(player) for player in model.players],
            is_finished=model.is_finished,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            date_played=self.date_played,
            is_finished=self.is_finished,
            players=[player.to_model() for player in self.players],
        )

    def get_player(self, player_id: UUID) -> Player:
        player = next((p for p in self.players if p.player_id == player_id), None)
        if player is None:
            raise PlayerNotFoundError(f"Player with {player_id=} not found in this game.")
        return player

    def roll(self, player_id: UUID, pins: int) -> None:
        """
        Record a roll for a player
        -----

        1. find the player
        2. record the roll in the player's current frame (validation happens before anything changes)
        3. re-score the player's frames
        4. update game status (finished once every player has completed the final frame)
        """
        player = self.get_player(player_id)
        player.roll(pins)
        self._update_finished()

    # -- PRIVATE HELPERS ---
    def _update_finished(self) -> None:
        """Checked over all players every time. A finished game stays finished."""
        if all(player.is_finished for player in self.players):
            self.is_finished = True
