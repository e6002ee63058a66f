"""
Move legality: occupancy, ko, capture and suicide.

Captures are always resolved before suicide is judged, so a move into a
point with no liberties is legal when it removes an opposing group.
"""
from typing import Iterable, Optional, Set, Tuple

from go_board import EMPTY, Board, opponent_of
from go_errors import IllegalMoveError
from go_groups import group_at, in_atari, liberties_at

Point = Tuple[int, int]


def captures_for(board: Board, x: int, y: int, color: int) -> Set[Point]:
    """Opposing stones that a stone of `color` at (x, y) would remove.

    The stone is placed temporarily and the board is restored before
    returning.
    """
    opponent = opponent_of(color)
    captured: Set[Point] = set()

    original = board.state_at(x, y)
    board.set_stone(x, y, color)
    try:
        for nx, ny in board.neighbors(x, y):
            if (nx, ny) in captured or board.grid[ny, nx] != opponent:
                continue
            if liberties_at(board, nx, ny) == 0:
                captured.update(group_at(board, nx, ny))
    finally:
        board.set_stone(x, y, original)

    return captured


def would_be_suicide(board: Board, x: int, y: int, color: int) -> bool:
    """Check if a stone at the empty point (x, y) would have no liberties.

    Only a point whose neighbors are all occupied can be suicide. Joining a
    friendly group that has a spare liberty is safe, and so is touching an
    opposing group in atari since that group is taken off.
    """
    neighbors = board.neighbors(x, y)
    if any(board.grid[ny, nx] == EMPTY for nx, ny in neighbors):
        return False

    for nx, ny in neighbors:
        if board.grid[ny, nx] == color and not in_atari(board, nx, ny):
            return False

    for nx, ny in neighbors:
        if board.grid[ny, nx] != color and in_atari(board, nx, ny):
            return False

    return True


def check_move(board: Board, x: int, y: int, color: int,
               ko_point: Optional[Point] = None) -> Set[Point]:
    """Validate a move and return the stones it would capture.

    Raises IllegalMoveError for an occupied point, a ko violation or a
    suicide that captures nothing. OutOfBoundsError propagates from the
    board for coordinates off the grid.
    """
    if board.state_at(x, y) != EMPTY:
        raise IllegalMoveError('occupied', (x, y))

    if ko_point is not None and tuple(ko_point) == (x, y):
        raise IllegalMoveError('ko', (x, y))

    captured = captures_for(board, x, y, color)
    if not captured and would_be_suicide(board, x, y, color):
        raise IllegalMoveError('suicide', (x, y))

    return captured


def is_legal(board: Board, x: int, y: int, color: int,
             ko_point: Optional[Point] = None) -> bool:
    try:
        check_move(board, x, y, color, ko_point)
    except IllegalMoveError:
        return False
    return True


def ko_point_for(board: Board, x: int, y: int, captured: Iterable[Point]) -> Optional[Point]:
    """Ko point created by the stone just resolved at (x, y), if any.

    Ko applies when exactly one stone was captured and the capturing stone
    stands alone in atari, so it could be taken straight back.
    """
    captured = list(captured)
    if len(captured) != 1:
        return None
    if len(group_at(board, x, y)) == 1 and in_atari(board, x, y):
        return captured[0]
    return None
