"""
Exceptions raised by the Go rules engine
"""
from typing import Optional, Tuple


class GoError(Exception):
    """Base class for all rules engine errors"""


class IllegalMoveError(GoError):
    """A move that breaks the rules. Nothing on the board was changed."""

    def __init__(self, reason: str, point: Optional[Tuple[int, int]] = None):
        self.reason = reason
        self.point = point
        if point is not None:
            message = f"Illegal move at {point}: {reason}"
        else:
            message = f"Illegal move: {reason}"
        super().__init__(message)


class OutOfBoundsError(GoError, IndexError):
    """Coordinates outside the board. This is a caller bug, not a game event."""

    def __init__(self, x: int, y: int, size: int):
        self.x = x
        self.y = y
        self.size = size
        super().__init__(f"Invalid position: ({x}, {y}) on a {size}x{size} board")


class InvalidPhaseError(GoError):
    """Operation not allowed in the current phase of the game"""

    def __init__(self, action: str, message: str = ""):
        self.action = action
        super().__init__(message or f"Cannot {action} in the current game phase")
