"""Hint solver: finds a playable word for a rack, then reveals it bit by bit.

The search is greedy and stops at the first word it finds:

  1. Drop one regular rack tile into each column and read the line through
     where it lands, in all eight directions.
  2. Failing that, drop each blank as every letter A-Z.
  3. Failing that, drop two different regular tiles, one after the other,
     and read through either landing cell.

Nothing here mutates the board or rack it is given; every drop is tried on
a copy.  Callers may run hints speculatively or from several threads
against a stable snapshot.
"""

from __future__ import annotations

import logging
import string
from typing import Iterable, Sequence

from grabble.board import Board
from grabble.constants import BLANK_PLACEHOLDER, MIN_WORD_LENGTH
from grabble.lines import ALL_DIRECTIONS, Direction, Position, run_through
from grabble.move import TilePlacement
from grabble.swap import get_swap_suggestion
from grabble.tiles import AnyTile, BlankTile
from grabble.trie import Trie
from grabble.words import extract_word_from_positions

logger = logging.getLogger("grabble.hints")

MAX_HINT_LEVEL = 4


class HintSolution:
    """A move the solver found.

    ``tile_indices`` / ``columns`` list every rack tile to drop and where,
    in order (one entry at depth 1, two at depth 2).
    """

    __slots__ = ("tile_indices", "columns", "depth", "word", "positions", "direction", "blank_letter")

    def __init__(
        self,
        tile_indices: list[int],
        columns: list[int],
        word: str,
        positions: list[Position],
        direction: Direction,
        blank_letter: str | None = None,
    ):
        self.tile_indices = tile_indices
        self.columns = columns
        self.depth = len(tile_indices)
        self.word = word
        self.positions = positions
        self.direction = direction
        self.blank_letter = blank_letter

    @property
    def tile_index(self) -> int:
        return self.tile_indices[0]

    @property
    def column(self) -> int:
        return self.columns[0]

    def to_dict(self) -> dict:
        return {
            "tileIndex": self.tile_index,
            "column": self.column,
            "tileIndices": list(self.tile_indices),
            "columns": list(self.columns),
            "depth": self.depth,
            "word": self.word,
            "positions": [{"x": p.x, "y": p.y} for p in self.positions],
            "direction": {"dx": self.direction.dx, "dy": self.direction.dy, "name": self.direction.name},
            "blankLetter": self.blank_letter,
        }

    def __repr__(self) -> str:
        drops = ", ".join(f"tile {i}>col {c}" for i, c in zip(self.tile_indices, self.columns))
        blank = f" (blank={self.blank_letter})" if self.blank_letter else ""
        return f"HintSolution({self.word!r} {self.direction.name}: {drops}{blank})"


class HintResult:
    """What a hint level reveals.  Unrevealed fields stay None."""

    __slots__ = (
        "level", "has_moves", "useful_tiles", "partial_word", "word_length",
        "target_columns", "full_solution", "suggest_swap", "tiles_to_swap",
    )

    def __init__(self, level: int, has_moves: bool):
        self.level = level
        self.has_moves = has_moves
        self.useful_tiles: list[int] | None = None
        self.partial_word: str | None = None
        self.word_length: int | None = None
        self.target_columns: list[int] | None = None
        self.full_solution: HintSolution | None = None
        self.suggest_swap = False
        self.tiles_to_swap: list[int] | None = None

    def to_dict(self) -> dict:
        """Plain dict for the UI / network layer; unrevealed keys omitted."""
        out: dict = {"level": self.level, "hasMoves": self.has_moves}
        if self.useful_tiles is not None:
            out["usefulTiles"] = list(self.useful_tiles)
        if self.partial_word is not None:
            out["partialWord"] = self.partial_word
            out["wordLength"] = self.word_length
        if self.target_columns is not None:
            out["targetColumns"] = list(self.target_columns)
        if self.full_solution is not None:
            out["fullSolution"] = self.full_solution.to_dict()
        if self.suggest_swap:
            out["suggestSwap"] = True
            out["tilesToSwap"] = list(self.tiles_to_swap or [])
        return out

    def __repr__(self) -> str:
        return f"HintResult({self.to_dict()})"


# trie

def build_trie_from_dictionary(words: Iterable[str]) -> Trie:
    """Trie of every word long enough to claim."""
    trie = Trie()
    for word in words:
        if len(word) >= MIN_WORD_LENGTH:
            trie.insert(word)
    return trie


# board helpers

def get_accessible_positions(board: Board) -> list[Position]:
    """Landing cell of every column that still has room."""
    cells: list[Position] = []
    for column in board.accessible_columns():
        cells.append(Position(column, board.landing_row(column)))
    return cells


def _simulate_drop(board: Board, column: int, tile: AnyTile) -> tuple[Board, Position]:
    test = board.copy()
    landed = test.place_tiles([TilePlacement(column, tile)], None)
    return test, landed[0]


def _word_through(board: Board, pos: Position, direction: Direction, trie: Trie) -> tuple[str, list[Position]] | None:
    run = run_through(board, pos.x, pos.y, direction.dx, direction.dy)
    if len(run) < MIN_WORD_LENGTH:
        return None
    word = extract_word_from_positions(board, run, preserve_order=True).upper()
    if BLANK_PLACEHOLDER in word or not trie.is_word(word):
        return None
    return word, run


# search

def find_first_valid_word(board: Board, rack: Sequence[AnyTile], trie: Trie) -> HintSolution | None:
    """First word the greedy search finds, or None."""
    accessible = get_accessible_positions(board)
    regular = [i for i, t in enumerate(rack) if not t.is_blank]
    blanks = [i for i, t in enumerate(rack) if t.is_blank]

    # Pass 1: regular tiles (cheaper, and saves the blanks)
    for cell in accessible:
        drops = {i: _simulate_drop(board, cell.x, rack[i]) for i in regular}
        for direction in ALL_DIRECTIONS:
            for i in regular:
                test, landed = drops[i]
                found = _word_through(test, landed, direction, trie)
                if found:
                    logger.debug("Hint (depth 1): %s via tile %d in column %d", found[0], i, cell.x)
                    return HintSolution([i], [cell.x], found[0], found[1], direction)

    # Pass 2: blanks as each letter
    for cell in accessible:
        for direction in ALL_DIRECTIONS:
            for i in blanks:
                for letter in string.ascii_uppercase:
                    test, landed = _simulate_drop(board, cell.x, BlankTile(letter))
                    found = _word_through(test, landed, direction, trie)
                    if found:
                        logger.debug("Hint (blank=%s): %s in column %d", letter, found[0], cell.x)
                        return HintSolution([i], [cell.x], found[0], found[1], direction, letter)

    # Pass 3: two regular tiles
    solution = _find_depth_two(board, rack, regular, trie)
    if solution is None:
        logger.debug("No hint found for rack %s", "".join(t.face for t in rack))
    return solution


def _find_depth_two(board: Board, rack: Sequence[AnyTile], regular: list[int], trie: Trie) -> HintSolution | None:
    if len(regular) < 2:
        return None
    for i in regular:
        for first in get_accessible_positions(board):
            board1, landed1 = _simulate_drop(board, first.x, rack[i])
            for j in regular:
                if j == i:
                    continue
                for second in get_accessible_positions(board1):
                    board2, landed2 = _simulate_drop(board1, second.x, rack[j])
                    for direction in ALL_DIRECTIONS:
                        found = (
                            _word_through(board2, landed1, direction, trie)
                            or _word_through(board2, landed2, direction, trie)
                        )
                        if found:
                            logger.debug(
                                "Hint (depth 2): %s via tiles %d,%d in columns %d,%d",
                                found[0], i, j, first.x, second.x,
                            )
                            return HintSolution([i, j], [first.x, second.x], found[0], found[1], direction)
    return None


# progressive disclosure

def get_hint_at_level(solution: HintSolution | None, rack: Sequence[AnyTile], level: int) -> HintResult:
    """Reveal *solution* up to *level*.

    0: a move exists.  1: which rack tiles.  2: word length and first letter
    ("C__").  3: target columns.  4: everything.  With no solution every
    level suggests tiles to swap instead.
    """
    if not 0 <= level <= MAX_HINT_LEVEL:
        raise ValueError(f"Hint level must be 0-{MAX_HINT_LEVEL}, got {level}")

    if solution is None:
        result = HintResult(level, has_moves=False)
        result.suggest_swap = True
        result.tiles_to_swap = get_swap_suggestion(rack)
        return result

    result = HintResult(level, has_moves=True)
    if level >= 1:
        result.useful_tiles = list(solution.tile_indices)
    if level >= 2:
        result.partial_word = solution.word[0] + "_" * (len(solution.word) - 1)
        result.word_length = len(solution.word)
    if level >= 3:
        result.target_columns = list(solution.columns)
    if level >= 4:
        result.full_solution = solution
    return result


def get_hint(board: Board, rack: Sequence[AnyTile], trie: Trie, level: int = 0) -> HintResult:
    return get_hint_at_level(find_first_valid_word(board, rack, trie), rack, level)


class HintSolver:
    """Hint search bound to one dictionary (the trie is built once)."""

    def __init__(self, words: Iterable[str]):
        self.trie = build_trie_from_dictionary(words)

    def find(self, board: Board, rack: Sequence[AnyTile]) -> HintSolution | None:
        return find_first_valid_word(board, rack, self.trie)

    def get_hint(self, board: Board, rack: Sequence[AnyTile], level: int = 0) -> HintResult:
        return get_hint(board, rack, self.trie, level)
