"""Unit tests for src/wordgame/scoring.py"""

from unittest.mock import Mock

import pytest

from src.core.exceptions import UnknownWordError
from src.wordgame.dictionary import WordSet
from src.wordgame.placement import Placement
from src.wordgame.scoring import Axis, ScoredMove, run_positions, tally_score
from tests.helpers import board_from_rows


# --- RUN EXTRACTION ---
def test_across_run() -> None:
    board = board_from_rows(
        ".....",
        ".....",
        ".CAB.",
        ".....",
        ".....",
    )
    assert run_positions(board, 12, Axis.ACROSS) == [11, 12, 13]
    assert run_positions(board, 12, Axis.DOWN) == [12]


def test_down_run() -> None:
    board = board_from_rows(
        "..C..",
        "..A..",
        "..B..",
        ".....",
        "..X..",
    )
    assert run_positions(board, 7, Axis.DOWN) == [2, 7, 12]
    assert run_positions(board, 22, Axis.DOWN) == [22]


def test_across_run_stops_at_row_edge() -> None:
    """The last cell of a row and the first cell of the next row do not form a word."""
    board = board_from_rows(
        "..C",
        "AB.",
        "...",
    )
    assert run_positions(board, 3, Axis.ACROSS) == [3, 4]
    assert run_positions(board, 2, Axis.ACROSS) == [2]


# --- TALLY ---
def test_single_letter_scores_nothing() -> None:
    """A lone letter is not a word: no score and no dictionary lookup."""
    board = board_from_rows(
        "...",
        ".Q.",
        "...",
    )
    dictionary = Mock()
    assert tally_score([Placement(4, "Q")], board, dictionary) == ScoredMove(0, [])
    dictionary.contains.assert_not_called()


def test_one_word_placed_letter_by_letter(words: WordSet) -> None:
    """Three placements on the same run: the word is counted once."""
    board = board_from_rows(
        ".....",
        ".....",
        ".CAB.",
        ".....",
        ".....",
    )
    placements = [Placement(11, "C"), Placement(12, "A"), Placement(13, "B")]
    assert tally_score(placements, board, words) == ScoredMove(1, ["CAB"])


def test_shared_run_counted_once_regardless_of_order(words: WordSet) -> None:
    board = board_from_rows(
        ".....",
        ".....",
        ".CAB.",
        ".....",
        ".....",
    )
    placements = [Placement(13, "B"), Placement(11, "C")]
    assert tally_score(placements, board, words) == ScoredMove(1, ["CAB"])


def test_extending_an_existing_word(words: WordSet) -> None:
    """Only the new letter is placed, the whole run is the word."""
    board = board_from_rows(
        ".....",
        ".....",
        ".CABS",
        ".....",
        ".....",
    )
    assert tally_score([Placement(14, "S")], board, words) == ScoredMove(1, ["CABS"])


def test_word_formed_down_only(words: WordSet) -> None:
    """The T placed below the A of CAB stands alone across, and forms AT down."""
    board = board_from_rows(
        ".....",
        ".....",
        ".CAB.",
        "..T..",
        ".....",
    )
    assert tally_score([Placement(17, "T")], board, words) == ScoredMove(1, ["AT"])


def test_several_words_in_one_move(words: WordSet) -> None:
    """AT placed under C and O: AT across, CA and OT down."""
    board = board_from_rows(
        ".....",
        ".CO..",
        ".AT..",
        ".....",
        ".....",
    )
    placements = [Placement(11, "A"), Placement(12, "T")]
    assert tally_score(placements, board, words) == ScoredMove(3, ["AT", "CA", "OT"])


def test_unknown_word(words: WordSet) -> None:
    board = board_from_rows(
        ".....",
        ".....",
        ".BAC.",
        ".....",
        ".....",
    )
    with pytest.raises(UnknownWordError) as exc_info:
        _ = tally_score([Placement(11, "B"), Placement(12, "A")], board, words)
    assert exc_info.value.word == "BAC"


def test_unknown_cross_word_rejects_the_move(words: WordSet) -> None:
    """The across word is fine, the down word formed on the side is not."""
    board = board_from_rows(
        ".....",
        "...Q.",
        ".CAB.",
        ".....",
        ".....",
    )
    placements = [Placement(11, "C"), Placement(12, "A"), Placement(13, "B")]
    with pytest.raises(UnknownWordError) as exc_info:
        _ = tally_score(placements, board, words)
    assert exc_info.value.word == "QB"
