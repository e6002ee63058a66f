"""Shared pytest fixtures and configuration for all tests."""

import pytest
import sys
import os

# Add parent directory to path so we can import modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from go_game import GoGame
from tests.go_helpers import play_moves


@pytest.fixture
def game_9x9():
    """Fresh 9x9 game."""
    return GoGame(9)


@pytest.fixture
def game_19x19():
    """Fresh 19x19 game."""
    return GoGame(19)


@pytest.fixture
def ko_game():
    """Black has just taken the white stone at (1, 0), leaving a ko.

    X . X
    O X .
    """
    game = GoGame(9)
    play_moves(game, [(2, 0), (1, 0), (1, 1), (0, 1), (0, 0)])
    return game


@pytest.fixture
def finished_game_with_white_pair():
    """Game over with a lone white pair at (4, 4)-(4, 5) and black corner stones."""
    game = GoGame(9)
    play_moves(game, [(0, 0), (4, 4), (8, 8), (4, 5), None, None])
    return game
