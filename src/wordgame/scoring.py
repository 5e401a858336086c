"""
Scoring Engine: find the words a move formed and score them against the dictionary.

One point per word. Letter values and word lengths do not matter.
"""

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Iterable

from src.core.exceptions import UnknownWordError
from src.wordgame.board import Board
from src.wordgame.dictionary import Dictionary
from src.wordgame.placement import Placement

POINTS_PER_WORD = 1


class Axis(Enum):
    ACROSS = "across"
    DOWN = "down"


class Counted(IntFlag):
    """Per-cell marker: which direction's run through this cell has already been scored in this move."""

    NONE = 0
    ACROSS = 1
    DOWN = 2


AXIS_FLAG: dict[Axis, Counted] = {Axis.ACROSS: Counted.ACROSS, Axis.DOWN: Counted.DOWN}


@dataclass
class ScoredMove:
    score: int = 0
    words: list[str] = field(default_factory=list)


def run_positions(board: Board, position: int, axis: Axis) -> list[int]:
    """
    Maximal run of occupied cells along the axis through `position` (which must be occupied).

    Across runs stay within the row of `position`.
    """
    step = 1 if axis == Axis.ACROSS else board.width
    row = board.row(position)

    def _in_run(candidate: int) -> bool:
        if not board.is_within_bounds(candidate) or not board.is_occupied(candidate):
            return False
        return axis == Axis.DOWN or board.row(candidate) == row

    start = position
    while _in_run(start - step):
        start -= step
    end = position
    while _in_run(end + step):
        end += step
    return list(range(start, end + step, step))


def tally_score(
    placements: Iterable[Placement], board: Board, dictionary: Dictionary
) -> ScoredMove:
    """
    Score a move on the board AFTER its placements were applied.

    ----
    For every placement (in submission order) and for both axes:
    1. skip if the run through this cell was already counted on that axis (claimed by an earlier placement)
    2. extract the run and mark all its cells as counted on that axis
    3. a run of a single letter is not a word: no score, no lookup
    4. otherwise the word must be in the dictionary (UnknownWordError if not) and earns a point
    """
    counted = [Counted.NONE] * len(board)
    result = ScoredMove()

    for placement in placements:
        for axis in Axis:
            flag = AXIS_FLAG[axis]
            if counted[placement.position] & flag:
                continue

            positions = run_positions(board, placement.position, axis)
            for position in positions:
                counted[position] |= flag

            if len(positions) < 2:
                continue

            word = "".join(board.letter(position) for position in positions)
            if not dictionary.contains(word):
                raise UnknownWordError(word)
            result.score += POINTS_PER_WORD
            result.words.append(word)

    return result
