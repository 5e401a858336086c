"""Database tables / schema"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    width: Mapped[int]
    max_players: Mapped[int]
    status: Mapped[str]
    board: Mapped[list[str]] = mapped_column(JSON)
    pool: Mapped[list[str]] = mapped_column(JSON)
    next_move_seq: Mapped[int] = mapped_column(default=0)
    next_player_order: Mapped[int] = mapped_column(default=0)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)


class DBPlayer(Base):
    __tablename__ = "players"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    game_id: Mapped[UUID] = mapped_column(ForeignKey("games.id"))
    # "order" is a reserved word in SQL
    order: Mapped[int] = mapped_column("turn_order")
    rack: Mapped[list[str]] = mapped_column(JSON)
    score: Mapped[int] = mapped_column(default=0)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)


class DBMove(Base):
    __tablename__ = "moves"
    __table_args__ = (UniqueConstraint("game_id", "seq"),)
    id: Mapped[UUID] = mapped_column(primary_key=True)
    game_id: Mapped[UUID] = mapped_column(ForeignKey("games.id"))
    player_id: Mapped[UUID] = mapped_column(ForeignKey("players.id"))
    seq: Mapped[int]
    placements: Mapped[list[str]] = mapped_column(JSON)
    score: Mapped[int]
    words: Mapped[list[str]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
