"""
Tests for move legality: occupancy, suicide, captures and ko.
"""

import pytest

from go_board import BLACK, WHITE
from go_errors import IllegalMoveError, OutOfBoundsError
from go_groups import liberties_at
from go_rules import captures_for, check_move, is_legal, ko_point_for, would_be_suicide
from tests.go_helpers import board_from_diagram


class TestOccupancy:

    @pytest.mark.unit
    def test_occupied_point(self):
        board = board_from_diagram("X")
        with pytest.raises(IllegalMoveError) as exc_info:
            check_move(board, 0, 0, WHITE)
        assert exc_info.value.reason == 'occupied'
        assert exc_info.value.point == (0, 0)

    @pytest.mark.unit
    def test_off_board(self):
        board = board_from_diagram("X")
        with pytest.raises(OutOfBoundsError):
            check_move(board, 9, 0, WHITE)

    @pytest.mark.unit
    def test_empty_board_is_all_legal(self):
        board = board_from_diagram(".")
        assert all(is_legal(board, x, y, BLACK) for x, y in board.points())


class TestSuicide:

    @pytest.mark.unit
    def test_corner_suicide(self):
        board = board_from_diagram("""
            . O
            O .
        """)
        assert would_be_suicide(board, 0, 0, BLACK)
        with pytest.raises(IllegalMoveError) as exc_info:
            check_move(board, 0, 0, BLACK)
        assert exc_info.value.reason == 'suicide'

    @pytest.mark.unit
    def test_point_with_empty_neighbor_is_not_suicide(self):
        board = board_from_diagram("""
            . O
            . .
        """)
        assert not would_be_suicide(board, 0, 0, BLACK)

    @pytest.mark.unit
    def test_joining_group_with_spare_liberty(self):
        board = board_from_diagram("""
            . X O
            O X .
            . O .
        """)
        # (1, 0)-(1, 1) has (2, 1) besides (0, 0)
        assert not would_be_suicide(board, 0, 0, BLACK)
        assert is_legal(board, 0, 0, BLACK)

    @pytest.mark.unit
    def test_filling_own_last_liberty(self):
        board = board_from_diagram("""
            . X O
            O X O
            . O .
        """)
        assert would_be_suicide(board, 0, 0, BLACK)
        assert not is_legal(board, 0, 0, BLACK)

    @pytest.mark.unit
    def test_surrounded_interior_point(self):
        board = board_from_diagram("""
            . X .
            X . X
            . X .
        """)
        assert not is_legal(board, 1, 1, WHITE)
        # Black fills its own eye without trouble
        assert is_legal(board, 1, 1, BLACK)


class TestCaptures:

    @pytest.mark.unit
    def test_capture_single_stone(self):
        board = board_from_diagram("""
            . X .
            X O .
            . X .
        """)
        assert captures_for(board, 2, 1, BLACK) == {(1, 1)}
        # Hypothetical placement leaves the board untouched
        assert board.is_empty(2, 1)

    @pytest.mark.unit
    def test_capture_before_suicide(self):
        board = board_from_diagram("""
            . O X
            O X .
        """)
        # (0, 0) has no empty neighbor, but the white stone at (1, 0) is taken
        assert would_be_suicide(board, 0, 0, BLACK) is False
        assert check_move(board, 0, 0, BLACK) == {(1, 0)}

    @pytest.mark.unit
    def test_surrounded_capture_of_group(self):
        board = board_from_diagram("""
            . X X O
            X X O .
            O O . .
        """)
        # White fills (0, 0): the black group loses its last liberty
        assert captures_for(board, 0, 0, WHITE) == {(1, 0), (2, 0), (0, 1), (1, 1)}
        assert is_legal(board, 0, 0, WHITE)

    @pytest.mark.unit
    def test_capture_of_two_groups(self):
        board = board_from_diagram("""
            X O . O X
            . X O X .
        """)
        assert captures_for(board, 2, 0, BLACK) == {(1, 0), (3, 0)}

    @pytest.mark.unit
    def test_no_capture_when_liberties_remain(self):
        board = board_from_diagram("""
            . . . . . . . . .
            . . . . . . . . .
            . . . . . . . . .
            . . . . O . . . .
            . . . . X . . . .
        """)
        assert captures_for(board, 3, 3, BLACK) == set()
        board.set_stone(3, 3, BLACK)
        assert liberties_at(board, 4, 3) == 2


class TestKo:

    @pytest.mark.unit
    def test_ko_point_blocks_only_that_point(self):
        board = board_from_diagram("""
            X . X
            O X .
        """)
        with pytest.raises(IllegalMoveError) as exc_info:
            check_move(board, 1, 0, WHITE, ko_point=(1, 0))
        assert exc_info.value.reason == 'ko'
        assert is_legal(board, 2, 1, WHITE, ko_point=(1, 0))
        assert is_legal(board, 1, 0, WHITE, ko_point=None)

    @pytest.mark.unit
    def test_ko_point_after_single_stone_capture(self):
        # Black just played (0, 0) and took a white stone at (1, 0)
        board = board_from_diagram("""
            X . X
            O X .
        """)
        assert ko_point_for(board, 0, 0, [(1, 0)]) == (1, 0)

    @pytest.mark.unit
    def test_no_ko_when_capturing_stone_has_room(self):
        # Black just played (0, 1) and took a white stone at (0, 0)
        board = board_from_diagram("""
            . X
            X .
        """)
        assert ko_point_for(board, 0, 1, [(0, 0)]) is None

    @pytest.mark.unit
    def test_no_ko_after_multi_stone_capture(self):
        board = board_from_diagram("""
            X . . X
            O X X .
        """)
        assert ko_point_for(board, 0, 0, [(1, 0), (2, 0)]) is None

    @pytest.mark.unit
    def test_no_ko_when_capturing_stone_joins_a_group(self):
        # Black played (1, 1) and took (1, 0); (1, 1) is part of a larger group
        board = board_from_diagram("""
            O . O
            X X X
            O X O
        """)
        assert ko_point_for(board, 1, 1, [(1, 0)]) is None

    @pytest.mark.unit
    def test_no_ko_without_capture(self):
        board = board_from_diagram("X")
        assert ko_point_for(board, 0, 0, []) is None
