"""Helpers shared by the test modules (import as tests.helpers)."""

from itertools import cycle
from typing import Iterable

from src.wordgame.board import EMPTY, Board


class ScriptedLetters:
    """LetterSource that hands out the given letters in order (and starts over when it runs out)."""

    def __init__(self, letters: Iterable[str]) -> None:
        self._letters = cycle(list(letters))

    def random_letter(self) -> str:
        return next(self._letters)


def pool_for_racks(*racks: str, rest: str = "") -> str:
    """
    Letters to build a pool from, such that the players joining in order get dealt exactly `racks`.
    The pool is drawn from its end, so the first rack sits reversed at the very end. `rest` stays in the pool.
    """
    return rest + "".join(rack[::-1] for rack in reversed(racks))


def board_from_rows(*rows: str) -> Board:
    """Square board from one string per row. '.' is an empty cell."""
    return Board(len(rows), [EMPTY if char == "." else char for char in "".join(rows)])
