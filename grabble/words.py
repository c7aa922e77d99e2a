"""Word detection: finding and reading straight runs of tiles."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Sequence

from grabble.constants import MIN_WORD_LENGTH
from grabble.lines import (
    CANONICAL_DIRECTIONS,
    Position,
    is_valid_word_line,
    line_axis,
    position_key,
    run_through,
    sort_row_major,
)

if TYPE_CHECKING:
    from grabble.board import Board

__all__ = [
    "find_all_words",
    "extract_word_from_positions",
    "get_reverse_word",
    "is_valid_word_line",
    "contains_new_tile",
    "are_words_same_direction",
    "is_substring_word",
]


def find_all_words(board: "Board") -> list[list[Position]]:
    """Every run of 3+ contiguous tiles along a row, column or diagonal.

    Each physical line is reported once, with positions in reading order
    (top to bottom, left to right).
    """
    words: list[list[Position]] = []
    seen: set[tuple[Position, ...]] = set()
    for pos, _tile in board.tiles():
        for d in CANONICAL_DIRECTIONS:
            run = run_through(board, pos.x, pos.y, d.dx, d.dy)
            if len(run) < MIN_WORD_LENGTH:
                continue
            key = position_key(run)
            if key not in seen:
                seen.add(key)
                words.append(run)
    return words


def extract_word_from_positions(
    board: "Board",
    positions: Iterable[Position],
    preserve_order: bool = False,
) -> str:
    """Letters on *positions*.

    With ``preserve_order`` the caller's order is kept (the direction the
    player traced); otherwise positions are read in row-major order.
    Assigned blanks give their letter, unassigned ones the placeholder.
    Empty cells contribute nothing.
    """
    ordered = list(positions) if preserve_order else sort_row_major(positions)
    letters: list[str] = []
    for x, y in ordered:
        tile = board.get(x, y)
        if tile is not None:
            letters.append(tile.face)
    return "".join(letters)


def get_reverse_word(board: "Board", positions: Sequence[Position]) -> str | None:
    """The letters of *positions* read back to front, or None if not a line."""
    if not is_valid_word_line(positions):
        return None
    return extract_word_from_positions(board, list(reversed(positions)), preserve_order=True)


def contains_new_tile(positions: Iterable[Position], newly_placed: Iterable[Position]) -> bool:
    new = {Position(*p) for p in newly_placed}
    return any(Position(*p) in new for p in positions)


def are_words_same_direction(a: Sequence[Position], b: Sequence[Position]) -> bool:
    """True if both lines run along the same axis (either way round)."""
    axis_a = line_axis(a)
    return axis_a is not None and axis_a == line_axis(b)


def is_substring_word(inner: Iterable[Position], outer: Iterable[Position]) -> bool:
    """True if every cell of *inner* is also a cell of *outer*."""
    outer_cells = {Position(*p) for p in outer}
    return all(Position(*p) in outer_cells for p in inner)
