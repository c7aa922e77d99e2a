"""Tile types.

A tile is either a regular ``Tile`` with a fixed letter and point value or a
``BlankTile`` worth nothing whose letter is chosen by the player who drops
it.  Ownership is not stored on tiles; the board keeps it per cell.
"""

from __future__ import annotations

from typing import Union

from grabble.constants import BLANK, BLANK_PLACEHOLDER, TILE_VALUES
from grabble.errors import BlankTileError


class Tile:
    """Regular lettered tile.  Immutable."""

    __slots__ = ("_letter", "_points")

    is_blank = False

    def __init__(self, letter: str, points: int | None = None):
        letter = letter.upper()
        if len(letter) != 1 or not letter.isalpha():
            raise ValueError(f"Tile letter must be a single letter A-Z, got {letter!r}")
        self._letter = letter
        self._points = TILE_VALUES[letter] if points is None else points

    @property
    def letter(self) -> str:
        return self._letter

    @property
    def points(self) -> int:
        return self._points

    @property
    def face(self) -> str:
        """Letter this tile contributes to a word."""
        return self._letter

    def copy(self) -> Tile:
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self._letter == other._letter and self._points == other._points

    def __hash__(self) -> int:
        return hash((self._letter, self._points))

    def __repr__(self) -> str:
        return f"Tile({self._letter!r}, {self._points})"


class BlankTile:
    """Blank tile: zero points, optional assigned letter, lockable.

    Once a word using the blank has been scored the blank is locked and its
    letter can no longer change.
    """

    __slots__ = ("assigned", "locked")

    is_blank = True
    letter = BLANK
    points = 0

    def __init__(self, assigned: str | None = None, locked: bool = False):
        self.assigned: str | None = None
        self.locked = False
        if assigned is not None:
            self.assign(assigned)
        if locked:
            self.lock()

    @property
    def face(self) -> str:
        return self.assigned or BLANK_PLACEHOLDER

    def assign(self, letter: str) -> None:
        if self.locked:
            raise BlankTileError("Blank tile is locked")
        letter = letter.upper()
        if len(letter) != 1 or not ("A" <= letter <= "Z"):
            raise BlankTileError(f"Blank letter must be A-Z, got {letter!r}")
        self.assigned = letter

    def lock(self) -> None:
        if self.assigned is None:
            raise BlankTileError("Cannot lock a blank tile with no letter")
        self.locked = True

    def copy(self) -> BlankTile:
        tile = BlankTile()
        tile.assigned = self.assigned
        tile.locked = self.locked
        return tile

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlankTile):
            return NotImplemented
        return self.assigned == other.assigned and self.locked == other.locked

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        lock = ", locked" if self.locked else ""
        return f"BlankTile({self.assigned!r}{lock})"


AnyTile = Union[Tile, BlankTile]


def make_tile(letter: str, points: int | None = None) -> AnyTile:
    """Tile for *letter*; the blank marker gives a ``BlankTile``."""
    if letter == BLANK:
        return BlankTile()
    return Tile(letter, points)


def fresh(tile: AnyTile) -> AnyTile:
    """Rack-ready version of *tile* (blanks lose their assigned letter)."""
    if tile.is_blank:
        return BlankTile()
    return tile
