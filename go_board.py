"""
Board representation for the Go rules engine
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from go_errors import OutOfBoundsError

BOARD_SIZES = (9, 13, 19)


class Stone(IntEnum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2


# Constants for board representation
EMPTY = Stone.EMPTY
BLACK = Stone.BLACK
WHITE = Stone.WHITE

_NAMES = {BLACK: 'black', WHITE: 'white'}


def opponent_of(color: int) -> Stone:
    """Get opponent color"""
    return WHITE if color == BLACK else BLACK


def color_name(color: int) -> Optional[str]:
    """'black', 'white' or None for an empty point"""
    return _NAMES.get(Stone(color))


def color_from_name(name: Optional[str]) -> Stone:
    """Convert string color to a Stone"""
    if name is None:
        return EMPTY
    if name == 'black':
        return BLACK
    if name == 'white':
        return WHITE
    raise ValueError(f"Unknown color: {name!r}")


@dataclass(frozen=True)
class Intersection:
    """A point and its state, copied out of the board at read time."""
    x: int
    y: int
    state: Stone

    def is_empty(self) -> bool:
        return self.state == EMPTY

    def is_occupied_with(self, color: int) -> bool:
        return not self.is_empty() and self.state == color


class Board:
    """Fixed-size square grid of intersections.

    Cells live in a numpy array indexed ``grid[y, x]``. Nothing here knows
    about legality; callers decide what may be placed where.
    """

    # Pre-computed neighbor offsets, in (dx, dy) form
    _NEIGHBOR_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))

    def __init__(self, size: int = 9):
        if size not in BOARD_SIZES:
            raise ValueError("Board size must be 9, 13, or 19")
        self.size = size
        self.grid = np.zeros((size, size), dtype=np.int8)

    def is_valid_position(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def _check(self, x: int, y: int) -> None:
        if not self.is_valid_position(x, y):
            raise OutOfBoundsError(x, y, self.size)

    def state_at(self, x: int, y: int) -> Stone:
        self._check(x, y)
        return Stone(int(self.grid[y, x]))

    def intersection(self, x: int, y: int) -> Intersection:
        return Intersection(x, y, self.state_at(x, y))

    def is_empty(self, x: int, y: int) -> bool:
        return self.state_at(x, y) == EMPTY

    def set_stone(self, x: int, y: int, color: int) -> None:
        """Set a stone at a position (no legality checks)"""
        self._check(x, y)
        self.grid[y, x] = color

    def clear(self, x: int, y: int) -> None:
        self._check(x, y)
        self.grid[y, x] = EMPTY

    def neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        """In-bounds orthogonal neighbors: 2 in a corner, 3 on an edge, 4 inside"""
        self._check(x, y)
        neighbors = []
        for dx, dy in self._NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.size and 0 <= ny < self.size:
                neighbors.append((nx, ny))
        return neighbors

    def points(self) -> List[Tuple[int, int]]:
        """Every coordinate in row-major order"""
        return [(x, y) for y in range(self.size) for x in range(self.size)]

    def stones_of(self, color: int) -> List[Tuple[int, int]]:
        return [(int(x), int(y)) for y, x in np.argwhere(self.grid == color)]

    def count(self, color: int) -> int:
        return int(np.count_nonzero(self.grid == color))

    def reset(self) -> None:
        """Remove every stone"""
        self.grid.fill(EMPTY)

    def snapshot(self) -> np.ndarray:
        """Independent copy of every point's state"""
        return self.grid.copy()

    def restore(self, snapshot: np.ndarray) -> None:
        if snapshot.shape != self.grid.shape:
            raise ValueError(
                f"Snapshot shape {snapshot.shape} does not match board {self.grid.shape}")
        np.copyto(self.grid, snapshot)

    def copy(self) -> 'Board':
        new_board = Board(self.size)
        new_board.grid = self.grid.copy()
        return new_board

    def to_rows(self) -> List[List[Optional[str]]]:
        """Row-major colors, JSON friendly"""
        return [[color_name(v) for v in row] for row in self.grid.tolist()]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[str]]]) -> 'Board':
        board = cls(len(rows))
        for y, row in enumerate(rows):
            if len(row) != board.size:
                raise ValueError(f"Row {y} has {len(row)} points, expected {board.size}")
            for x, name in enumerate(row):
                board.grid[y, x] = color_from_name(name)
        return board

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.grid, other.grid)

    def __str__(self) -> str:
        symbols = {EMPTY: '.', BLACK: 'X', WHITE: 'O'}
        return "\n".join(" ".join(symbols[Stone(v)] for v in row)
                         for row in self.grid.tolist())
