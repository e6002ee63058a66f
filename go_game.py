"""
Game session: move execution, history and undo.

Every ply appends an immutable Move record holding a full copy of the
board, so undo restores a position without replaying earlier moves.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

from go_board import BLACK, EMPTY, WHITE, Board, Stone, color_name, opponent_of
from go_errors import IllegalMoveError, InvalidPhaseError
from go_rules import check_move, is_legal, ko_point_for
from go_scoring import DeadStones, Territory, compute_territory
from go_scoring import score as score_position

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


@dataclass(frozen=True)
class Move:
    """Snapshot of the game right after one ply resolved"""
    color: Stone
    position: Optional[Point]
    is_pass: bool
    board_snapshot: np.ndarray = field(repr=False, compare=False)
    captures_by_black: int = 0
    captures_by_white: int = 0
    # (x, y, color of the removed stone)
    captured_positions: Tuple[Tuple[int, int, Stone], ...] = ()
    ko_point: Optional[Point] = None

    def __post_init__(self):
        self.board_snapshot.setflags(write=False)

    @property
    def captures(self) -> Dict[Stone, int]:
        return {BLACK: self.captures_by_black, WHITE: self.captures_by_white}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'x': self.position[0] if self.position else None,
            'y': self.position[1] if self.position else None,
            'color': color_name(self.color),
            'pass': self.is_pass,
            'capturedPositions': [
                {'x': x, 'y': y, 'color': color_name(c)} for x, y, c in self.captured_positions
            ],
            'koPoint': {'x': self.ko_point[0], 'y': self.ko_point[1]} if self.ko_point else None,
        }


@dataclass(frozen=True)
class MoveOutcome:
    move: Move
    game_over: bool = False

    @property
    def captured(self) -> List[Point]:
        return [(x, y) for x, y, _ in self.move.captured_positions]


class MoveHistory:
    """Append-only list of Move records; undo drops the last one"""

    def __init__(self):
        self._moves: List[Move] = []

    def append(self, move: Move) -> None:
        self._moves.append(move)

    def pop(self) -> Optional[Move]:
        if not self._moves:
            return None
        return self._moves.pop()

    @property
    def last(self) -> Optional[Move]:
        return self._moves[-1] if self._moves else None

    def ends_with_two_passes(self) -> bool:
        return (len(self._moves) >= 2
                and self._moves[-1].is_pass
                and self._moves[-2].is_pass)

    def clear(self) -> None:
        self._moves.clear()

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[Move]:
        return iter(self._moves)

    def __getitem__(self, index):
        return self._moves[index]


class GoGame:
    """One game session: a board, its move history and dead stone marks"""

    def __init__(self, size: int = 9):
        self.board = Board(size)
        self.size = self.board.size
        self.history = MoveHistory()
        self.dead_stones = DeadStones()

    @property
    def current_player(self) -> Stone:
        last = self.history.last
        return BLACK if last is None else opponent_of(last.color)

    @property
    def captures(self) -> Dict[Stone, int]:
        last = self.history.last
        if last is None:
            return {BLACK: 0, WHITE: 0}
        return last.captures

    @property
    def ko_point(self) -> Optional[Point]:
        last = self.history.last
        return last.ko_point if last else None

    @property
    def last_move(self) -> Optional[Point]:
        last = self.history.last
        return last.position if last else None

    @property
    def game_over(self) -> bool:
        return self.is_game_over()

    def is_game_over(self) -> bool:
        return self.history.ends_with_two_passes()

    def play(self, x: int, y: int) -> MoveOutcome:
        """Play a stone for the side to move"""
        return self.play_as(x, y, self.current_player)

    def play_as(self, x: int, y: int, color: int) -> MoveOutcome:
        """Play a stone of `color` at (x, y).

        Raises InvalidPhaseError once the game is over, OutOfBoundsError for
        coordinates off the board and IllegalMoveError for a move the rules
        forbid. The game is unchanged when anything is raised.
        """
        if self.is_game_over():
            raise InvalidPhaseError('play', "Game is over")

        # Off-board coordinates fail before any rule is looked at
        self.board.state_at(x, y)
        color = Stone(color)
        if color != self.current_player:
            raise IllegalMoveError('wrong_turn', (x, y))

        captured = check_move(self.board, x, y, color, self.ko_point)

        # Place stone and take captured stones off
        opponent = opponent_of(color)
        self.board.set_stone(x, y, color)
        for cx, cy in captured:
            self.board.clear(cx, cy)

        captures = self.captures
        captures[color] += len(captured)

        move = Move(
            color=color,
            position=(x, y),
            is_pass=False,
            board_snapshot=self.board.snapshot(),
            captures_by_black=captures[BLACK],
            captures_by_white=captures[WHITE],
            captured_positions=tuple((cx, cy, opponent) for cx, cy in sorted(captured)),
            ko_point=ko_point_for(self.board, x, y, captured),
        )
        self.history.append(move)
        # Dead marks belong to the finished position only
        self.dead_stones.clear()

        logger.debug("%s played at %d %d, captured %d",
                     color_name(color), x, y, len(captured))
        return MoveOutcome(move)

    def pass_turn(self) -> Optional[MoveOutcome]:
        """Pass for the side to move; a no-op once the game is over"""
        if self.is_game_over():
            return None

        color = self.current_player
        captures = self.captures
        move = Move(
            color=color,
            position=None,
            is_pass=True,
            board_snapshot=self.board.snapshot(),
            captures_by_black=captures[BLACK],
            captures_by_white=captures[WHITE],
        )
        self.history.append(move)
        self.dead_stones.clear()

        game_over = self.is_game_over()
        logger.debug("%s passed", color_name(color))
        if game_over:
            logger.info("Game over after two passes (%d moves)", len(self.history))
        return MoveOutcome(move, game_over=game_over)

    def undo(self) -> Optional[Move]:
        """Take back the last ply. Returns the removed record, or None."""
        removed = self.history.pop()
        if removed is None:
            return None

        last = self.history.last
        if last is None:
            self.board.reset()
        else:
            self.board.restore(last.board_snapshot)

        if not self.is_game_over():
            self.dead_stones.clear()

        logger.debug("Undid %s move, %d left", color_name(removed.color), len(self.history))
        return removed

    def is_legal(self, x: int, y: int, color: Optional[int] = None) -> bool:
        if self.is_game_over():
            return False
        if color is None:
            color = self.current_player
        return is_legal(self.board, x, y, color, self.ko_point)

    def legal_moves(self, color: Optional[int] = None) -> List[Point]:
        """Every point where `color` (default: side to move) may play"""
        if self.is_game_over():
            return []
        if color is None:
            color = self.current_player
        ko = self.ko_point
        return [(x, y) for x, y in self.board.stones_of(EMPTY)
                if is_legal(self.board, x, y, color, ko)]

    def toggle_dead(self, x: int, y: int) -> List[Point]:
        """Mark or unmark the group at (x, y) as dead. Only after game over."""
        if not self.is_game_over():
            raise InvalidPhaseError('toggle dead stones', "Dead stones can only be marked after the game is over")
        return sorted(self.dead_stones.toggle(self.board, x, y))

    def is_dead_at(self, x: int, y: int) -> bool:
        return self.dead_stones.is_dead_at(x, y)

    def territory(self) -> Territory:
        return compute_territory(self.board, self.dead_stones)

    def score(self) -> Dict[str, int]:
        return score_position(self.board, self.dead_stones, self.captures)

    def current_state(self) -> Dict[str, Any]:
        """JSON friendly view of the session"""
        captures = self.captures
        ko = self.ko_point
        last = self.last_move
        game_over = self.is_game_over()

        state = {
            'size': self.size,
            'board': self.board.to_rows(),
            'currentPlayer': color_name(self.current_player),
            'captures': {'black': captures[BLACK], 'white': captures[WHITE]},
            'gameOver': game_over,
            'koPoint': {'x': ko[0], 'y': ko[1]} if ko else None,
            'lastMove': {'x': last[0], 'y': last[1]} if last else None,
            'moveNumber': len(self.history),
            'deadStones': [{'x': x, 'y': y} for x, y in self.dead_stones],
            'territory': None,
            'score': None,
        }
        if game_over:
            territory = self.territory()
            state['territory'] = territory.to_dict()
            state['score'] = score_position(self.board, self.dead_stones, captures, territory)
        return state


def new_game(size: int = 9) -> GoGame:
    logger.info("New %dx%d game", size, size)
    return GoGame(size)
