"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    date_played: Mapped[datetime]
    is_finished: Mapped[bool] = mapped_column(default=False)
    players: Mapped[list["DBPlayer"]] = relationship(
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="DBPlayer.position",
    )
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)


class DBPlayer(Base):
    __tablename__ = "players"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    game_id: Mapped[UUID] = mapped_column(ForeignKey("games.id"))
    name: Mapped[str]
    position: Mapped[int]  # order in which the names were supplied
    game: Mapped[DBGame] = relationship(back_populates="players")
    frames: Mapped[list["DBFrame"]] = relationship(
        back_populates="player",
        cascade="all, delete-orphan",
        order_by="DBFrame.frame_number",
    )


class DBFrame(Base):
    __tablename__ = "frames"
    # two concurrent rolls must not both create the same frame
    __table_args__ = (UniqueConstraint("player_id", "frame_number"),)
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    player_id: Mapped[UUID] = mapped_column(ForeignKey("players.id"))
    frame_number: Mapped[int]
    roll1: Mapped[Optional[int]]
    roll2: Mapped[Optional[int]]
    roll3: Mapped[Optional[int]]
    score: Mapped[Optional[int]]
    player: Mapped[DBPlayer] = relationship(back_populates="frames")
