"""
Boundary layer data model(s).

These objects are used to communicate with the Service.
Both the domain layer (Game) and the db layer (Repository) convert to/from the models defined here,
which keeps the data model of each layer decoupled from the others.

Board, rack and pool are ordered lists of one-character cells. An empty cell is a single space.
"""

from dataclasses import dataclass, field
from typing import Self
from uuid import UUID

Cell = str


@dataclass
class GameModel:
    """Transport-safe representation of a game's shared state."""

    width: int
    max_players: int
    status: str
    board: list[Cell]
    pool: list[Cell]
    next_move_seq: int = 0
    next_player_order: int = 0


@dataclass
class PlayerModel:
    order: int
    rack: list[Cell]
    score: int = 0


@dataclass
class MoveModel:
    """Historical record of an accepted turn."""

    seq: int
    player_id: UUID
    placements: list[str]  # flat: position, letter, position, letter, ...
    score: int
    words: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class StateFence:
    """Turn counters a writer saw when it loaded the game. A commit only goes through if they are still current."""

    next_move_seq: int
    next_player_order: int

    @classmethod
    def of(cls, game: GameModel) -> Self:
        return cls(game.next_move_seq, game.next_player_order)
