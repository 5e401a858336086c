"""The Board: a square grid of cells stored as a flat list, and the connectivity rule that applies to it."""

from dataclasses import dataclass
from typing import Iterator, Self

from src.core.exceptions import GameStateError

EMPTY = " "


@dataclass
class Board:
    """
    A `width` x `width` grid addressed by a single integer position.

    Position p sits in row p // width and column p % width.
    Its neighbours are p-1 / p+1 (same row only) and p-width / p+width.
    """

    width: int
    cells: list[str]

    def __post_init__(self):
        if len(self.cells) != self.width * self.width:
            raise GameStateError(
                f"Board of width {self.width} must have {self.width * self.width} cells, got {len(self.cells)}."
            )

    @classmethod
    def empty(cls, width: int) -> Self:
        return cls(width, [EMPTY] * (width * width))

    def copy(self) -> Self:
        return type(self)(self.width, list(self.cells))

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def center(self) -> int:
        return len(self.cells) // 2

    def letter(self, position: int) -> str:
        return self.cells[position]

    def place(self, position: int, letter: str) -> None:
        self.cells[position] = letter

    def is_within_bounds(self, position: int) -> bool:
        return 0 <= position < len(self.cells)

    def is_occupied(self, position: int) -> bool:
        return self.cells[position] != EMPTY

    def occupied_positions(self) -> list[int]:
        return [position for position, cell in enumerate(self.cells) if cell != EMPTY]

    def row(self, position: int) -> int:
        return position // self.width

    def neighbours(self, position: int) -> Iterator[int]:
        """4-connected neighbours that exist on the board."""
        column = position % self.width
        if column > 0:
            yield position - 1
        if column < self.width - 1:
            yield position + 1
        if position - self.width >= 0:
            yield position - self.width
        if position + self.width < len(self.cells):
            yield position + self.width

    def is_connected(self) -> bool:
        """
        All occupied cells must form one region that contains the center cell.

        ---
        Flood fill (stack based) from the center, only if the center is occupied.
        The board is connected iff every occupied cell got reached.
        An empty board is connected.
        """
        reached: set[int] = set()
        pending: list[int] = [self.center] if self.is_occupied(self.center) else []
        while pending:
            position = pending.pop()
            if position in reached:
                continue
            reached.add(position)
            pending.extend(
                neighbour
                for neighbour in self.neighbours(position)
                if self.is_occupied(neighbour) and neighbour not in reached
            )
        return all(position in reached for position in self.occupied_positions())
