"""
Group and liberty analysis.

Groups are never cached: every call flood-fills the live board, so the
answer always matches the current grid.
"""
from typing import Set, Tuple

from go_board import EMPTY, Board

Point = Tuple[int, int]


def group_at(board: Board, x: int, y: int) -> Set[Point]:
    """Get all stones connected to (x, y) through same-colored neighbors.

    An empty point has no group and yields an empty set.
    """
    color = board.state_at(x, y)
    if color == EMPTY:
        return set()

    group = set()
    stack = [(x, y)]

    while stack:
        cx, cy = stack.pop()
        if (cx, cy) in group:
            continue

        group.add((cx, cy))

        for nx, ny in board.neighbors(cx, cy):
            if (nx, ny) not in group and board.grid[ny, nx] == color:
                stack.append((nx, ny))

    return group


def liberty_points(board: Board, x: int, y: int) -> Set[Point]:
    """Distinct empty points touching any stone of the group at (x, y)"""
    liberties = set()
    for gx, gy in group_at(board, x, y):
        for nx, ny in board.neighbors(gx, gy):
            if board.grid[ny, nx] == EMPTY:
                liberties.add((nx, ny))
    return liberties


def liberties_at(board: Board, x: int, y: int) -> int:
    """Count liberties of the group containing (x, y); 0 for an empty point"""
    return len(liberty_points(board, x, y))


def in_atari(board: Board, x: int, y: int) -> bool:
    return liberties_at(board, x, y) == 1
