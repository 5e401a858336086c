"""
The Game class is the entrypoint into the domain layer for the service layer.
It is responsible for the lifecycle of a single game session: letting players join, and playing a turn
(validate placements --> check connectivity --> score --> refill the rack --> pass the turn).

A Game is rebuilt from its GameModel on every request and converted back with to_model() once the request succeeded.
A failing request raises before anything is converted back, so nothing of a rejected turn can reach the store.
"""

from dataclasses import dataclass, field
from typing import Iterable, Self

from src.core.exceptions import (
    GameAlreadyStartedError,
    GameFullError,
    GameNotInProgressError,
    GameStateError,
    NotConnectedError,
    NotNextMoveError,
    NotPlayersTurnError,
)
from src.core.models import GameModel, PlayerModel
from src.core.shared_types import STATUS_ORDER, Status
from src.wordgame.board import Board
from src.wordgame.dictionary import Dictionary
from src.wordgame.placement import Placement, apply_move, flatten_placements
from src.wordgame.rack import POOL_SIZE, LetterSource, Rack, build_pool, refill_rack
from src.wordgame.scoring import tally_score


@dataclass
class Player:
    order: int
    rack: Rack
    score: int = 0

    @classmethod
    def from_model(cls, model: PlayerModel) -> Self:
        return cls(order=model.order, rack=Rack(list(model.rack)), score=model.score)

    def to_model(self) -> PlayerModel:
        return PlayerModel(order=self.order, rack=list(self.rack.slots), score=self.score)


@dataclass
class AcceptedMove:
    """Outcome of a successful turn, before it gets an owner and an identity in the store."""

    seq: int
    placements: list[Placement]
    score: int
    words: list[str] = field(default_factory=list)

    @property
    def tokens(self) -> list[str]:
        return flatten_placements(self.placements)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    pool: list[str]
    max_players: int
    status: Status
    next_move_seq: int = 0
    next_player_order: int = 0

    def __post_init__(self):
        if self.max_players < 1:
            raise GameStateError(f"A game needs at least one player, got {self.max_players}.")
        if not 0 <= self.next_player_order < self.max_players:
            raise GameStateError(
                f"Turn slot {self.next_player_order} does not exist in a game for {self.max_players} players."
            )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        if model.status not in {status.value for status in Status}:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            )

        return cls(
            board=Board(model.width, list(model.board)),
            pool=list(model.pool),
            max_players=model.max_players,
            status=Status(model.status),
            next_move_seq=model.next_move_seq,
            next_player_order=model.next_player_order,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            width=self.board.width,
            max_players=self.max_players,
            status=self.status.value,
            board=list(self.board.cells),
            pool=list(self.pool),
            next_move_seq=self.next_move_seq,
            next_player_order=self.next_player_order,
        )

    @classmethod
    def new_game(
        cls,
        width: int,
        max_players: int,
        letters: LetterSource,
        pool_size: int = POOL_SIZE,
    ) -> Self:
        """Empty board, a freshly drawn pool, waiting for players."""
        if width < 1:
            raise GameStateError(f"Board width must be positive, got {width}.")
        return cls(
            board=Board.empty(width),
            pool=build_pool(letters, pool_size),
            max_players=max_players,
            status=Status.PENDING,
        )

    def register_player(self, registered_players: int) -> Player:
        """
        A new player joins: they get the next turn slot and a full rack.

        `registered_players` is the number of players that joined before (only the store knows).
        Once the last slot is taken the turn slot wraps around to 0 and the game starts.
        """
        if self.status != Status.PENDING:
            raise GameAlreadyStartedError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )
        if registered_players >= self.max_players:
            raise GameFullError(
                f"Cannot join this game. All {self.max_players} seats are taken."
            )

        self.pool, rack = refill_rack(self.pool, Rack.empty())
        player = Player(order=self.next_player_order, rack=rack)

        self.next_player_order += 1
        if self.next_player_order == self.max_players:
            self.next_player_order = 0
            self._change_status(Status.PLAYING)
        return player

    def take_turn(
        self,
        player: Player,
        seq: int,
        placements: Iterable[Placement],
        dictionary: Dictionary,
    ) -> tuple[Player, AcceptedMove]:
        """
        Attempt a turn
        -----

        1. game must be in progress, it must be this move's turn and this player's turn
        2. apply the placements to copies of the board and rack (Move Validator)
        3. the resulting board must be connected through the center
        4. every word formed must be in the dictionary (Scoring Engine)
        5. refill the rack from the pool
        6. only now: update the game, hand back the updated player and the move record

        Any rule violation raises before step 6, leaving this Game and the given Player untouched.
        """
        if self.status != Status.PLAYING:
            raise GameNotInProgressError(f"Game is not in progress. status: {self.status}")
        if seq != self.next_move_seq:
            raise NotNextMoveError(
                f"Move {seq} is not the next move. Expected move {self.next_move_seq}."
            )
        if player.order != self.next_player_order:
            raise NotPlayersTurnError(
                f"It is not your turn. Waiting for player {self.next_player_order} to make a move first."
            )

        placements = list(placements)
        board, rack = apply_move(self.board, player.rack, placements)

        if not board.is_connected():
            raise NotConnectedError(
                "Placed letters must connect to the letters on the board (the first move must cover the center)."
            )

        scored = tally_score(placements, board, dictionary)
        pool, rack = refill_rack(self.pool, rack)

        # --- commit to the working state ---
        self.board = board
        self.pool = pool
        move = AcceptedMove(
            seq=self.next_move_seq,
            placements=placements,
            score=scored.score,
            words=scored.words,
        )
        self.next_move_seq += 1
        self.next_player_order = (self.next_player_order + 1) % self.max_players
        return Player(order=player.order, rack=rack, score=player.score + scored.score), move

    def finish(self) -> None:
        """
        Move the game to its terminal status.

        NOTE: no rule ends a game yet (pool exhaustion, passes, ...). This is where such a policy would call in.
        """
        self._change_status(Status.DONE)

    # -- PRIVATE HELPERS ---
    def _change_status(self, new_status: Status) -> None:
        if STATUS_ORDER.index(new_status) < STATUS_ORDER.index(self.status):
            raise GameStateError(f"Status cannot go back from {self.status} to {new_status}.")
        self.status = new_status
