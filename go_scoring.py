"""
End of game scoring: dead stone marking, territory and final score.

The score counts, for each color, its territory, the stones it captured
during play, and the opposing stones marked dead. Dead stones therefore
count twice: once as territory (the region absorbs them) and once as
prisoners. This is the engine's defined rule and is kept as is.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, Mapping, Optional, Set, Tuple

from go_board import BLACK, EMPTY, WHITE, Board, Stone, color_name
from go_groups import group_at

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


class DeadStones:
    """Coordinates marked dead during scoring.

    Only coordinates are stored; the color of a dead stone is always read
    from the live board.
    """

    def __init__(self):
        self._points: Set[Point] = set()

    def __contains__(self, point) -> bool:
        return tuple(point) in self._points

    def __iter__(self) -> Iterator[Point]:
        return iter(sorted(self._points))

    def __len__(self) -> int:
        return len(self._points)

    def is_dead_at(self, x: int, y: int) -> bool:
        return (x, y) in self._points

    def toggle(self, board: Board, x: int, y: int) -> Set[Point]:
        """Flip the dead mark for the whole group at (x, y).

        Returns the points whose mark changed; an empty point changes nothing.
        """
        group = group_at(board, x, y)
        if not group:
            return set()

        if (x, y) in self._points:
            self._points.difference_update(group)
            logger.debug("Unmarked %d dead stone(s) at %s", len(group), (x, y))
        else:
            self._points.update(group)
            logger.debug("Marked %d dead stone(s) at %s", len(group), (x, y))
        return group

    def count_of(self, board: Board, color: int) -> int:
        return sum(1 for x, y in self._points if board.grid[y, x] == color)

    def clear(self) -> None:
        self._points.clear()


@dataclass(frozen=True)
class Territory:
    black: FrozenSet[Point] = field(default_factory=frozenset)
    white: FrozenSet[Point] = field(default_factory=frozenset)
    neutral: FrozenSet[Point] = field(default_factory=frozenset)

    def owner_at(self, x: int, y: int) -> Optional[Stone]:
        if (x, y) in self.black:
            return BLACK
        if (x, y) in self.white:
            return WHITE
        return None

    def to_dict(self) -> Dict[str, list]:
        return {
            'black': [{'x': x, 'y': y} for x, y in sorted(self.black)],
            'white': [{'x': x, 'y': y} for x, y in sorted(self.white)],
        }


def _region_with_boundary(board: Board, dead: DeadStones, start: Point,
                          visited: Set[Point]) -> Tuple[Set[Point], Set[int]]:
    """Flood fill the empty-or-dead region at `start`.

    Returns the region and the colors of the live stones bordering it.
    """
    region = set()
    boundary_colors = set()
    stack = [start]

    while stack:
        x, y = stack.pop()
        if (x, y) in visited:
            continue
        visited.add((x, y))
        region.add((x, y))

        for nx, ny in board.neighbors(x, y):
            value = int(board.grid[ny, nx])
            if value == EMPTY or (nx, ny) in dead:
                if (nx, ny) not in visited:
                    stack.append((nx, ny))
            else:
                boundary_colors.add(value)

    return region, boundary_colors


def compute_territory(board: Board, dead: Optional[DeadStones] = None) -> Territory:
    """Assign every empty or dead point to a color or leave it neutral.

    A region belongs to a color only when every live stone on its boundary
    is that color. Regions with no boundary or a mixed one are neutral.
    """
    if dead is None:
        dead = DeadStones()

    owned = {BLACK: set(), WHITE: set()}
    neutral = set()
    visited: Set[Point] = set()

    for x, y in board.points():
        if (x, y) in visited:
            continue
        if board.grid[y, x] != EMPTY and (x, y) not in dead:
            continue

        region, colors = _region_with_boundary(board, dead, (x, y), visited)
        if len(colors) == 1:
            owned[Stone(colors.pop())].update(region)
        else:
            neutral.update(region)

    return Territory(black=frozenset(owned[BLACK]),
                     white=frozenset(owned[WHITE]),
                     neutral=frozenset(neutral))


def score(board: Board, dead: DeadStones, captures: Mapping[int, int],
          territory: Optional[Territory] = None) -> Dict[str, int]:
    """Final score for both colors.

    `captures` maps a color to the number of opposing stones it captured
    during play.
    """
    if territory is None:
        territory = compute_territory(board, dead)

    result = {
        color_name(BLACK): (len(territory.black)
                            + captures.get(BLACK, 0)
                            + dead.count_of(board, WHITE)),
        color_name(WHITE): (len(territory.white)
                            + captures.get(WHITE, 0)
                            + dead.count_of(board, BLACK)),
    }
    logger.debug("Score: %s", result)
    return result
