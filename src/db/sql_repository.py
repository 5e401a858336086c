"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID, uuid4

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import (
    PlayerNotFoundError,
    StaleGameStateError,
    StoreUnavailableError,
)
from src.core.models import GameModel, MoveModel, PlayerModel, StateFence
from src.db.schema import DBGame, DBMove, DBPlayer

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(id=new_id, **self._game_values(game))
        with self._transaction():
            self.db.add(game_db)
        self.db.refresh(game_db)
        return self._to_game_model(game_db), new_id

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        with self._store_errors():
            game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_game_model(game_db)
        return None

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record, together with its players and moves."""
        with self._store_errors():
            game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_game_model(game_db)
        with self._transaction():
            self.db.execute(delete(DBMove).where(DBMove.game_id == game_id))
            self.db.execute(delete(DBPlayer).where(DBPlayer.game_id == game_id))
            self.db.delete(game_db)
        return game_model

    def get_player(self, player_id: UUID) -> tuple[PlayerModel, UUID] | None:
        with self._store_errors():
            player_db = self.db.get(DBPlayer, player_id)
        if player_db:
            return self._to_player_model(player_db), player_db.game_id
        return None

    def count_players(self, game_id: UUID) -> int:
        query = select(func.count()).select_from(DBPlayer).where(DBPlayer.game_id == game_id)
        with self._store_errors():
            return self.db.scalar(query) or 0

    def get_move(self, game_id: UUID, seq: int) -> MoveModel | None:
        query = select(DBMove).where(DBMove.game_id == game_id, DBMove.seq == seq)
        with self._store_errors():
            move_db = self.db.scalar(query)
        if move_db:
            return self._to_move_model(move_db)
        return None

    def list_moves(self, game_id: UUID) -> list[MoveModel]:
        query = select(DBMove).where(DBMove.game_id == game_id).order_by(DBMove.seq)
        with self._store_errors():
            moves_db = self.db.scalars(query).all()
        return [self._to_move_model(move_db) for move_db in moves_db]

    def commit_join(
        self, game_id: UUID, fence: StateFence, game: GameModel, player: PlayerModel
    ) -> UUID:
        """Conditional update of the game + insert of the player, in a single transaction."""
        new_id = uuid4()
        with self._transaction():
            self._update_game_if_current(game_id, fence, game)
            self.db.add(
                DBPlayer(
                    id=new_id,
                    game_id=game_id,
                    order=player.order,
                    rack=list(player.rack),
                    score=player.score,
                )
            )
        return new_id

    def commit_turn(
        self,
        game_id: UUID,
        fence: StateFence,
        game: GameModel,
        player_id: UUID,
        player: PlayerModel,
        move: MoveModel,
    ) -> None:
        """Conditional update of the game + update of the player + insert of the move, in a single transaction."""
        with self._transaction():
            self._update_game_if_current(game_id, fence, game)

            player_db = self.db.get(DBPlayer, player_id)
            if player_db is None:
                raise PlayerNotFoundError(f"Player with {player_id=} not found.")
            player_db.rack = list(player.rack)
            player_db.score = player.score

            self.db.add(
                DBMove(
                    id=uuid4(),
                    game_id=game_id,
                    player_id=player_id,
                    seq=move.seq,
                    placements=list(move.placements),
                    score=move.score,
                    words=list(move.words),
                )
            )

    # -- Internal helpers --
    def _update_game_if_current(
        self, game_id: UUID, fence: StateFence, game: GameModel
    ) -> None:
        """UPDATE ... WHERE the turn counters still hold the values the writer loaded."""
        statement = (
            update(DBGame)
            .where(
                DBGame.id == game_id,
                DBGame.next_move_seq == fence.next_move_seq,
                DBGame.next_player_order == fence.next_player_order,
            )
            .values(**self._game_values(game))
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(statement)
        if result.rowcount != 1:
            raise StaleGameStateError(
                f"Game {game_id} changed since it was loaded (expected {fence})."
            )

    @contextmanager
    def _store_errors(self) -> Iterator[None]:
        """Translate driver/ORM failures into the application's infrastructure error."""
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Database operation failed")
            raise StoreUnavailableError("Game store is unavailable.") from exc

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """All-or-nothing: commit when the block succeeds, roll back on any exception."""
        try:
            with self._store_errors():
                try:
                    yield
                    self.db.commit()
                except IntegrityError as exc:
                    # Another writer stored the same move seq first.
                    self.db.rollback()
                    raise StaleGameStateError("Conflicting write for this game.") from exc
        except Exception:
            self.db.rollback()
            raise

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    @staticmethod
    def _game_values(game: GameModel) -> dict:
        return {
            "width": game.width,
            "max_players": game.max_players,
            "status": game.status,
            "board": list(game.board),
            "pool": list(game.pool),
            "next_move_seq": game.next_move_seq,
            "next_player_order": game.next_player_order,
        }

    def _to_game_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            width=game_db.width,
            max_players=game_db.max_players,
            status=game_db.status,
            board=list(game_db.board),
            pool=list(game_db.pool),
            next_move_seq=game_db.next_move_seq,
            next_player_order=game_db.next_player_order,
        )

    def _to_player_model(self, player_db: DBPlayer) -> PlayerModel:
        return PlayerModel(
            order=player_db.order, rack=list(player_db.rack), score=player_db.score
        )

    def _to_move_model(self, move_db: DBMove) -> MoveModel:
        return MoveModel(
            seq=move_db.seq,
            player_id=move_db.player_id,
            placements=list(move_db.placements),
            score=move_db.score,
            words=list(move_db.words),
        )
