"""Unit tests for src/wordgame/placement.py"""

import pytest

from src.core.exceptions import (
    CellOccupiedError,
    InvalidRequestError,
    LetterNotInRackError,
    PositionOutOfBoundsError,
)
from src.wordgame.board import EMPTY, Board
from src.wordgame.placement import (
    Placement,
    apply_move,
    flatten_placements,
    parse_placements,
    split_placements,
)
from src.wordgame.rack import Rack
from tests.helpers import board_from_rows

RACK_LETTERS = "CABSTXZ"


# --- PARSING ---
def test_parse_flat_tokens() -> None:
    assert parse_placements(["112", "C", "113", "A"]) == [
        Placement(112, "C"),
        Placement(113, "A"),
    ]


def test_odd_trailing_token_is_ignored() -> None:
    assert parse_placements(["112", "C", "113"]) == [Placement(112, "C")]


def test_letters_are_upper_cased() -> None:
    assert parse_placements([7, "b"]) == [Placement(7, "B")]


@pytest.mark.parametrize(
    "tokens",
    [
        ["one", "C"],  # position is not a number
        ["1.5", "C"],  # position is not an integer
        ["1", "CA"],  # more than one letter
        ["1", "7"],  # not a letter
        ["1", ""],  # no letter
        ["1", "ß"],  # upper case is "SS"
        ["1", "é"],  # not in the alphabet
    ],
)
def test_invalid_tokens(tokens: list[str]) -> None:
    with pytest.raises(InvalidRequestError):
        _ = parse_placements(tokens)


def test_split_wire_string() -> None:
    assert split_placements("112, C,113,A") == ["112", "C", "113", "A"]
    assert split_placements("") == []
    assert split_placements("   ") == []


def test_flatten_is_inverse_of_parse() -> None:
    tokens = ["40", "Q", "41", "U"]
    assert flatten_placements(parse_placements(tokens)) == tokens


# --- MOVE VALIDATOR ---
def test_apply_move_returns_updated_copies() -> None:
    board = Board.empty(5)
    rack = Rack(list(RACK_LETTERS))

    new_board, new_rack = apply_move(
        board, rack, [Placement(11, "C"), Placement(12, "A"), Placement(13, "B")]
    )

    assert [new_board.letter(p) for p in (11, 12, 13)] == ["C", "A", "B"]
    assert new_rack.slots == [EMPTY, EMPTY, EMPTY, "S", "T", "X", "Z"]
    # inputs untouched
    assert board.occupied_positions() == []
    assert rack.slots == list(RACK_LETTERS)


def test_letter_not_in_rack() -> None:
    board = Board.empty(5)
    rack = Rack(list(RACK_LETTERS))
    with pytest.raises(LetterNotInRackError):
        _ = apply_move(board, rack, [Placement(12, "C"), Placement(13, "Q")])
    assert board.occupied_positions() == []
    assert rack.slots == list(RACK_LETTERS)


def test_letter_used_more_often_than_in_rack() -> None:
    with pytest.raises(LetterNotInRackError):
        _ = apply_move(
            Board.empty(5),
            Rack(list(RACK_LETTERS)),
            [Placement(12, "C"), Placement(13, "C")],
        )


@pytest.mark.parametrize("position", [-1, 25, 1000])
def test_position_out_of_bounds(position: int) -> None:
    with pytest.raises(PositionOutOfBoundsError):
        _ = apply_move(Board.empty(5), Rack(list(RACK_LETTERS)), [Placement(position, "C")])


def test_rack_is_checked_before_bounds() -> None:
    with pytest.raises(LetterNotInRackError):
        _ = apply_move(Board.empty(5), Rack(list(RACK_LETTERS)), [Placement(-1, "Q")])


def test_cell_occupied() -> None:
    board = board_from_rows(
        ".....",
        ".....",
        "..A..",
        ".....",
        ".....",
    )
    rack = Rack(list(RACK_LETTERS))
    with pytest.raises(CellOccupiedError):
        _ = apply_move(board, rack, [Placement(12, "C")])
    assert board.letter(12) == "A"
    assert rack.slots == list(RACK_LETTERS)


def test_two_placements_on_same_cell() -> None:
    with pytest.raises(CellOccupiedError):
        _ = apply_move(
            Board.empty(5),
            Rack(list(RACK_LETTERS)),
            [Placement(12, "C"), Placement(12, "A")],
        )


def test_no_placements() -> None:
    board, rack = apply_move(Board.empty(5), Rack(list(RACK_LETTERS)), [])
    assert board.occupied_positions() == []
    assert rack.slots == list(RACK_LETTERS)
