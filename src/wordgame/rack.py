"""Racks, the shared letter pool, and the random source that fills the pool at the start of a game."""

import random
from dataclasses import dataclass
from string import ascii_uppercase
from typing import Optional, Protocol, Self

from src.core.exceptions import GameStateError, LetterNotInRackError
from src.wordgame.board import EMPTY

RACK_SIZE = 7
POOL_SIZE = 500
ALPHABET = ascii_uppercase


class LetterSource(Protocol):
    """Supplies uniformly random letters (injected, so tests can be deterministic)."""

    def random_letter(self) -> str: ...


class RandomLetterSource:
    """Default LetterSource backed by its own random.Random instance."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)

    def random_letter(self) -> str:
        return self._random.choice(ALPHABET)


def build_pool(source: LetterSource, size: int = POOL_SIZE) -> list[str]:
    return [source.random_letter() for _ in range(size)]


@dataclass
class Rack:
    """A player's hand. Always exactly RACK_SIZE slots, empty slots hold EMPTY."""

    slots: list[str]

    def __post_init__(self):
        if len(self.slots) != RACK_SIZE:
            raise GameStateError(
                f"Rack must have exactly {RACK_SIZE} slots, got {len(self.slots)}."
            )

    @classmethod
    def empty(cls) -> Self:
        return cls([EMPTY] * RACK_SIZE)

    def copy(self) -> Self:
        return type(self)(list(self.slots))

    def __contains__(self, letter: str) -> bool:
        return letter != EMPTY and letter in self.slots

    def take(self, letter: str) -> None:
        """Remove the first occurrence of `letter`, leaving an empty slot."""
        if letter not in self:
            raise LetterNotInRackError(f"Player does not have letter {letter!r}")
        self.slots[self.slots.index(letter)] = EMPTY

    def empty_slots(self) -> list[int]:
        return [index for index, slot in enumerate(self.slots) if slot == EMPTY]

    def letters(self) -> list[str]:
        return [slot for slot in self.slots if slot != EMPTY]


def refill_rack(pool: list[str], rack: Rack) -> tuple[list[str], Rack]:
    """
    Fill the empty slots of the rack (in slot order) from the end of the pool.

    Returns new pool and rack objects; the arguments are left untouched.
    Once the pool runs out the remaining slots simply stay empty.
    """
    new_pool = list(pool)
    new_rack = rack.copy()
    for index in new_rack.empty_slots():
        if not new_pool:
            break
        new_rack.slots[index] = new_pool.pop()
    return new_pool, new_rack
