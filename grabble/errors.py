"""Exceptions and claim rejection reasons.

Structural errors (bad column, bad coordinates, unknown player, ...) are
raised: the caller broke a precondition.  Claim rejections are ordinary
values carried on a ``ClaimResult`` so a multi-word submission can report
which claim failed and why.
"""

from __future__ import annotations

from enum import Enum


class GrabbleError(Exception):
    """Base class for structural engine errors."""


class InvalidColumn(GrabbleError, ValueError):
    def __init__(self, column: int):
        super().__init__(f"Invalid column: {column}")
        self.column = column


class ColumnFull(GrabbleError):
    def __init__(self, column: int):
        super().__init__(f"Column {column} is full")
        self.column = column


class OutOfBounds(GrabbleError, IndexError):
    def __init__(self, x: int, y: int):
        super().__init__(f"Invalid position: ({x}, {y})")
        self.x = x
        self.y = y


class CellOccupied(GrabbleError):
    def __init__(self, x: int, y: int):
        super().__init__(f"Position ({x}, {y}) is already occupied")
        self.x = x
        self.y = y


class PlayerNotFound(GrabbleError, LookupError):
    def __init__(self, player_id: int):
        super().__init__(f"Player {player_id} not found")
        self.player_id = player_id


class InvalidGameSetup(GrabbleError, ValueError):
    pass


class InvalidRackIndex(GrabbleError, IndexError):
    def __init__(self, player_id: int, index: int):
        super().__init__(f"Player {player_id} has no rack tile at index {index}")
        self.player_id = player_id
        self.index = index


class RackFull(GrabbleError):
    def __init__(self, player_id: int):
        super().__init__(f"Player {player_id}'s rack is full")
        self.player_id = player_id


class BlankTileError(GrabbleError, ValueError):
    pass


class NotYourTurn(GrabbleError):
    def __init__(self, player_id: int, current_player_id: int):
        super().__init__(
            f"Player {player_id} cannot act on player {current_player_id}'s turn"
        )
        self.player_id = player_id
        self.current_player_id = current_player_id


class GameOver(GrabbleError):
    pass


class Rejection(str, Enum):
    """Why a word claim (or a whole submission) was refused."""

    NOT_STRAIGHT_LINE = "not_straight_line"
    TOO_SHORT = "too_short"
    NOT_IN_DICTIONARY = "not_in_dictionary"
    ALREADY_CLAIMED = "already_claimed"
    CREATES_INVALID_SUPERSTRING = "creates_invalid_superstring"
    NO_TILES_PLACED_THIS_TURN = "no_tiles_placed_this_turn"
