"""Orchestration of communication from API layer to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from src.api.models import (
    CreateGameRequest,
    CreateGameResponse,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    GetMoveRequest,
    GetPlayerRequest,
    JoinGameRequest,
    JoinGameResponse,
    ListMovesRequest,
    MoveHistoryResponse,
    MoveRecordResponse,
    MoveRequest,
    MoveResponse,
    PlayerResponse,
)
from src.core.config import get_settings
from src.core.exceptions import (
    GameNotFoundError,
    MoveNotFoundError,
    PlayerNotFoundError,
    PlayerNotInGameError,
    RuleViolationError,
)
from src.core.models import GameModel, MoveModel, PlayerModel, StateFence
from src.db.repository import GameRepository
from src.db.sql_repository import SQLGameRepository
from src.services.game_locks import GameLockRegistry
from src.wordgame.dictionary import Dictionary, get_dictionary
from src.wordgame.game import Game, Player
from src.wordgame.rack import LetterSource, RandomLetterSource

logger = logging.getLogger(__name__)


class WordGameService:
    """Orchestration of layers for the word game."""

    def __init__(
        self,
        repository: GameRepository,
        dictionary: Dictionary,
        letters: Optional[LetterSource] = None,
        locks: Optional[GameLockRegistry] = None,
        pool_size: Optional[int] = None,
    ) -> None:
        self.repo = repository
        self.dictionary = dictionary
        self.letters = letters or RandomLetterSource()
        self.locks = GameLockRegistry() if locks is None else locks
        self.pool_size = get_settings().POOL_SIZE if pool_size is None else pool_size

    # -- API operations logic ---
    def create_new_game(self, request: CreateGameRequest) -> CreateGameResponse:
        """Create an empty game, waiting for players to join."""

        new_game = Game.new_game(
            width=request.board_width,
            max_players=request.max_players,
            letters=self.letters,
            pool_size=self.pool_size,
        )
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info(
            "Game %s created (%dx%d board, %d players)",
            game_id,
            stored_game.width,
            stored_game.width,
            stored_game.max_players,
        )
        return CreateGameResponse(
            game_id=game_id,
            width=stored_game.width,
            max_players=stored_game.max_players,
            status=stored_game.status,
        )

    def join_game(self, request: JoinGameRequest) -> JoinGameResponse:
        """A player takes the next free turn slot and gets dealt a rack."""

        with self.locks.hold(request.game_id):
            stored_model = self._fetch_game(request.game_id)
            game = Game.from_model(stored_model)

            try:
                player = game.register_player(self.repo.count_players(request.game_id))
            except RuleViolationError as exc:
                logger.warning("Join of game %s rejected: %s", request.game_id, exc)
                raise

            with_player_registered = game.to_model()
            player_id = self.repo.commit_join(
                request.game_id,
                StateFence.of(stored_model),
                with_player_registered,
                player.to_model(),
            )

        logger.info(
            "Player %s joined game %s as player %d", player_id, request.game_id, player.order
        )
        if with_player_registered.status != stored_model.status:
            logger.info("Game %s started", request.game_id)

        return JoinGameResponse(
            game_id=request.game_id,
            player_id=player_id,
            order=player.order,
            rack=list(player.rack.slots),
        )

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        if request.player_id is not None:
            self._fetch_player_of_game(request.game_id, request.player_id)
        return self._create_game_response(request.game_id, game_model)

    def get_player(self, request: GetPlayerRequest) -> PlayerResponse:
        """A player's own view: rack and score."""
        player_model = self._fetch_player_of_game(request.game_id, request.player_id)
        return PlayerResponse(
            game_id=request.game_id,
            player_id=request.player_id,
            order=player_model.order,
            rack=player_model.rack,
            score=player_model.score,
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Play a turn.

        ---
        The Game validates and scores the move on its own working copy.
        Only when it is accepted, game + player + move record are handed to the repository as one commit,
        fenced on the turn counters that were loaded.
        """
        with self.locks.hold(request.game_id):
            stored_model = self._fetch_game(request.game_id)
            player_model = self._fetch_player_of_game(request.game_id, request.player_id)

            game = Game.from_model(stored_model)
            player = Player.from_model(player_model)

            try:
                updated_player, accepted = game.take_turn(
                    player, request.seq, request.to_placements(), self.dictionary
                )
            except RuleViolationError as exc:
                logger.warning(
                    "Move %d of game %s by player %s rejected: %s",
                    request.seq,
                    request.game_id,
                    request.player_id,
                    exc,
                )
                raise

            after_move = game.to_model()
            self.repo.commit_turn(
                request.game_id,
                StateFence.of(stored_model),
                after_move,
                request.player_id,
                updated_player.to_model(),
                MoveModel(
                    seq=accepted.seq,
                    player_id=request.player_id,
                    placements=accepted.tokens,
                    score=accepted.score,
                    words=accepted.words,
                ),
            )

        logger.info(
            "Move %d of game %s accepted: %d point(s) for %s",
            accepted.seq,
            request.game_id,
            accepted.score,
            ", ".join(accepted.words) or "no words",
        )
        return MoveResponse(
            game_id=request.game_id,
            player_id=request.player_id,
            rack=list(updated_player.rack.slots),
            score=updated_player.score,
            status=after_move.status,
            next_move_seq=after_move.next_move_seq,
            next_player_order=after_move.next_player_order,
            move_score=accepted.score,
            words=accepted.words,
        )

    def get_move(self, request: GetMoveRequest) -> MoveRecordResponse:
        """Look up an accepted move by its position in the game's move sequence."""
        self._fetch_game(request.game_id)
        move_model = self.repo.get_move(request.game_id, request.seq)
        if move_model is None:
            raise MoveNotFoundError(
                f"Move {request.seq} of game {request.game_id} not found."
            )
        return self._create_move_record_response(request.game_id, move_model)

    def list_moves(self, request: ListMovesRequest) -> MoveHistoryResponse:
        self._fetch_game(request.game_id)
        return MoveHistoryResponse(
            game_id=request.game_id,
            moves=[
                self._create_move_record_response(request.game_id, move_model)
                for move_model in self.repo.list_moves(request.game_id)
            ],
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        with self.locks.hold(request.game_id):
            self.repo.delete_game(request.game_id)
        logger.info("Game %s deleted", request.game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        return GameResponse(
            game_id=game_id,
            width=model.width,
            max_players=model.max_players,
            board=model.board,
            status=model.status,
            next_move_seq=model.next_move_seq,
            next_player_order=model.next_player_order,
        )

    def _create_move_record_response(
        self, game_id: UUID, model: MoveModel
    ) -> MoveRecordResponse:
        return MoveRecordResponse(
            game_id=game_id,
            seq=model.seq,
            player_id=model.player_id,
            placements=model.placements,
            score=model.score,
            words=model.words,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game_model

    def _fetch_player_of_game(self, game_id: UUID, player_id: UUID) -> PlayerModel:
        """Attempt to find the player, and make sure they play in this game."""
        found = self.repo.get_player(player_id)
        if found is None:
            raise PlayerNotFoundError(f"Player with {player_id=} not found.")
        player_model, players_game_id = found
        if players_game_id != game_id:
            raise PlayerNotInGameError(f"Player {player_id} is not part of game {game_id}.")
        return player_model


# One registry for the whole process, so requests on different sessions still exclude each other.
_game_locks = GameLockRegistry()


def create_word_game_service(db_session: Session) -> WordGameService:
    """Service for one request: SQL repository on the given session, configured dictionary and pool size."""
    return WordGameService(
        SQLGameRepository(db_session),
        get_dictionary(),
        locks=_game_locks,
        pool_size=get_settings().POOL_SIZE,
    )
