"""
Placements (a letter put on a position) and the Move Validator that applies a batch of them to a board and a rack.
"""

from dataclasses import dataclass
from typing import Iterable, Self, Sequence

from src.core.exceptions import (
    CellOccupiedError,
    InvalidRequestError,
    LetterNotInRackError,
    PositionOutOfBoundsError,
)
from src.wordgame.board import Board
from src.wordgame.rack import ALPHABET, Rack

TOKEN_SEPARATOR = ","


@dataclass(frozen=True)
class Placement:
    position: int
    letter: str

    @classmethod
    def from_tokens(cls, position: str | int, letter: str) -> Self:
        """Interpret one (position, letter) pair of the flat wire format."""
        try:
            parsed_position = int(position)
        except (TypeError, ValueError):
            raise InvalidRequestError(
                f"Cannot interpret {position!r} as a board position."
            ) from None

        letter = str(letter).strip().upper()
        if len(letter) != 1 or letter not in ALPHABET:
            raise InvalidRequestError(f"Cannot interpret {letter!r} as a letter.")
        return cls(parsed_position, letter)


def parse_placements(tokens: Sequence[str | int]) -> list[Placement]:
    """
    Flat token sequence [pos, letter, pos, letter, ...] --> list of Placements.

    NOTE an odd trailing token has no letter to go with it and is ignored.
    """
    pairs = len(tokens) // 2
    return [
        Placement.from_tokens(tokens[2 * i], tokens[2 * i + 1]) for i in range(pairs)
    ]


def split_placements(encoded: str) -> list[str]:
    """Comma-delimited wire string --> flat token list (empty string means no placements)."""
    if not encoded.strip():
        return []
    return [token.strip() for token in encoded.split(TOKEN_SEPARATOR)]


def flatten_placements(placements: Iterable[Placement]) -> list[str]:
    """Inverse of parse_placements, used for the stored move record."""
    tokens: list[str] = []
    for placement in placements:
        tokens.extend([str(placement.position), placement.letter])
    return tokens


def apply_move(
    board: Board, rack: Rack, placements: Iterable[Placement]
) -> tuple[Board, Rack]:
    """
    Move Validator: put every placement on (a copy of) the board, taking the letter from (a copy of) the rack.

    ----
    Per placement, in the order given:
    1. the letter must be in the rack
    2. the position must be on the board
    3. the cell must be empty (this also rejects two placements on the same position)

    The inputs are never mutated, so a failure halfway simply drops the working copies.
    """
    new_board = board.copy()
    new_rack = rack.copy()
    for placement in placements:
        if placement.letter not in new_rack:
            raise LetterNotInRackError(
                f"Player does not have letter {placement.letter!r}"
            )
        if not new_board.is_within_bounds(placement.position):
            raise PositionOutOfBoundsError(
                f"Position {placement.position} is out of bounds (board has {len(new_board)} cells)."
            )
        if new_board.is_occupied(placement.position):
            raise CellOccupiedError(
                f"Cell {placement.position} is already occupied by {new_board.letter(placement.position)!r}."
            )

        new_rack.take(placement.letter)
        new_board.place(placement.position, placement.letter)
    return new_board, new_rack
