"""Implementation of (Game)Repository using SQLAlchemy"""

from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from src.core.exceptions import RepositoryError
from src.core.models import FrameModel, GameModel, PlayerModel
from src.db.schema import DBFrame, DBGame, DBPlayer


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID (with all players and their frames), if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            date_played=game.date_played,
            is_finished=game.is_finished,
            players=[
                DBPlayer(
                    id=player.player_id,
                    name=player.name,
                    position=position,
                    frames=[self._to_db_frame(frame) for frame in player.frames],
                )
                for position, player in enumerate(game.players)
            ],
        )
        self.db.add(game_db)
        self._commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """
        Store new rolls, frames, scores and status of an existing game in one go.

        Frames are append-only: existing frames are updated in place and frames not yet stored are added.
        All changes are committed in a single transaction.
        """
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None

        game_db.is_finished = game.is_finished
        players_db = {player_db.id: player_db for player_db in game_db.players}
        for player in game.players:
            player_db = players_db.get(player.player_id)
            if player_db is None:
                self.db.rollback()
                raise RepositoryError(
                    f"Player with id={player.player_id} is not registered in game {game_id}."
                )

            frames_db = {frame_db.frame_number: frame_db for frame_db in player_db.frames}
            for frame in player.frames:
                frame_db = frames_db.get(frame.frame_number)
                if frame_db is None:
                    player_db.frames.append(self._to_db_frame(frame))
                    continue
                frame_db.roll1 = frame.roll1
                frame_db.roll2 = frame.roll2
                frame_db.roll3 = frame.roll3
                frame_db.score = frame.score

        self._commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise RepositoryError(
                "Could not store the game. It was changed by another request."
            ) from exc

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        # load the complete tree up front, frames ordered by frame number (see relationship order_by)
        query = (
            select(DBGame)
            .where(DBGame.id == game_id)
            .options(selectinload(DBGame.players).selectinload(DBPlayer.frames))
            .execution_options(populate_existing=True)
        )
        return self.db.scalar(query)

    def _to_db_frame(self, frame: FrameModel) -> DBFrame:
        return DBFrame(
            frame_number=frame.frame_number,
            roll1=frame.roll1,
            roll2=frame.roll2,
            roll3=frame.roll3,
            score=frame.score,
        )

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            date_played=game_db.date_played,
            is_finished=game_db.is_finished,
            players=[
                PlayerModel(
                    player_id=player_db.id,
                    name=player_db.name,
                    frames=[
                        FrameModel(
                            frame_number=frame_db.frame_number,
                            roll1=frame_db.roll1,
                            roll2=frame_db.roll2,
                            roll3=frame_db.roll3,
                            score=frame_db.score,
                        )
                        for frame_db in player_db.frames
                    ],
                )
                for player_db in game_db.players
            ],
        )
