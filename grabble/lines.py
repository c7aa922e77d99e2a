"""Board geometry: positions, direction vectors and straight lines.

Shared by the word detector (which scans the whole board along four
canonical directions) and the hint solver (which looks in all eight
directions from a single landing cell).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, NamedTuple, Sequence

from grabble.constants import BOARD_SIZE, MIN_WORD_LENGTH

if TYPE_CHECKING:
    from grabble.board import Board


class Position(NamedTuple):
    x: int  # column, 0 = left
    y: int  # row, 0 = top


class Direction(NamedTuple):
    dx: int
    dy: int
    name: str

    def reverse(self) -> Direction:
        return direction_of(-self.dx, -self.dy)

    @property
    def axis(self) -> tuple[int, int]:
        """Sign-insensitive line axis, so 'left' and 'right' compare equal."""
        if self.dy < 0 or (self.dy == 0 and self.dx < 0):
            return -self.dx, -self.dy
        return self.dx, self.dy


RIGHT = Direction(1, 0, "right")
LEFT = Direction(-1, 0, "left")
DOWN = Direction(0, 1, "down")
UP = Direction(0, -1, "up")
DOWN_RIGHT = Direction(1, 1, "down-right")
DOWN_LEFT = Direction(-1, 1, "down-left")
UP_RIGHT = Direction(1, -1, "up-right")
UP_LEFT = Direction(-1, -1, "up-left")

# Every line is found from exactly one of its ends when scanning all cells.
CANONICAL_DIRECTIONS: tuple[Direction, ...] = (RIGHT, DOWN, DOWN_RIGHT, DOWN_LEFT)

ALL_DIRECTIONS: tuple[Direction, ...] = (
    RIGHT, LEFT, DOWN, UP, DOWN_RIGHT, DOWN_LEFT, UP_RIGHT, UP_LEFT,
)

_BY_VECTOR = {(d.dx, d.dy): d for d in ALL_DIRECTIONS}


def direction_of(dx: int, dy: int) -> Direction:
    """Named direction for a unit step vector."""
    return _BY_VECTOR[(dx, dy)]


def in_bounds(x: int, y: int) -> bool:
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def row_major_key(pos: Position) -> tuple[int, int]:
    return pos.y, pos.x


def sort_row_major(positions: Iterable[Position]) -> list[Position]:
    """Canonical reading order: top to bottom, then left to right."""
    return sorted((Position(*p) for p in positions), key=row_major_key)


def position_key(positions: Iterable[Position]) -> tuple[Position, ...]:
    """Order-independent identity of a set of cells."""
    return tuple(sort_row_major(positions))


def line_direction(positions: Sequence[Position]) -> Direction | None:
    """Unit step between consecutive positions, in the order given.

    ``None`` unless every step is the same horizontal, vertical or 45°
    diagonal unit vector (so the positions form a gap-free line).
    """
    if len(positions) < 2:
        return None
    step = (positions[1][0] - positions[0][0], positions[1][1] - positions[0][1])
    if step not in _BY_VECTOR:
        return None
    for prev, cur in zip(positions, positions[1:]):
        if (cur[0] - prev[0], cur[1] - prev[1]) != step:
            return None
    return _BY_VECTOR[step]


def is_valid_word_line(positions: Sequence[Position]) -> bool:
    """True if at least three positions make one straight, gap-free line.

    Input order does not matter.
    """
    if len(positions) < MIN_WORD_LENGTH:
        return False
    return line_direction(sort_row_major(positions)) is not None


def line_axis(positions: Sequence[Position]) -> tuple[int, int] | None:
    direction = line_direction(sort_row_major(positions))
    return direction.axis if direction else None


def run_through(board: "Board", x: int, y: int, dx: int, dy: int) -> list[Position]:
    """Maximal run of occupied cells through (x, y) along (dx, dy).

    Positions are returned in the direction of travel.  The start cell
    itself must be occupied, otherwise the run is empty.
    """
    if not board.is_occupied(x, y):
        return []
    while board.is_occupied(x - dx, y - dy):
        x -= dx
        y -= dy
    run: list[Position] = []
    while board.is_occupied(x, y):
        run.append(Position(x, y))
        x += dx
        y += dy
    return run
