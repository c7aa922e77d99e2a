"""Players and the aggregate game state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from grabble.board import Board
from grabble.constants import DEFAULT_TARGET_SCORE, STATUS_WAITING
from grabble.errors import PlayerNotFound

if TYPE_CHECKING:
    from grabble.move import ClaimedWord
    from grabble.tiles import AnyTile


class Player:
    """A seat at the table.  ``turn_order`` is fixed for the whole game."""

    __slots__ = ("id", "name", "color", "score", "rack", "turn_order")

    def __init__(
        self,
        id: int,
        name: str,
        color: str,
        turn_order: int,
        score: int = 0,
        rack: list[AnyTile] | None = None,
    ):
        self.id = id
        self.name = name
        self.color = color
        self.turn_order = turn_order
        self.score = score
        self.rack: list[AnyTile] = rack if rack is not None else []

    def copy(self) -> Player:
        return Player(
            self.id, self.name, self.color, self.turn_order,
            score=self.score,
            rack=[t.copy() for t in self.rack],
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in self.__slots__)

    __hash__ = None

    def __repr__(self) -> str:
        rack = "".join(t.face for t in self.rack)
        return f"Player({self.id}, {self.name!r}, score={self.score}, rack={rack!r})"


class GameState:
    """Everything needed to resume a game.

    Owned by the game manager.  Anything handed to outside callers is a
    ``copy()``; no caller ever sees a half-applied move.
    """

    def __init__(
        self,
        board: Board | None = None,
        players: list[Player] | None = None,
        current_player_id: int = 0,
        tile_bag: list[AnyTile] | None = None,
        claimed_words: list[ClaimedWord] | None = None,
        target_score: int = DEFAULT_TARGET_SCORE,
        status: str = STATUS_WAITING,
        winner_id: int | None = None,
    ):
        self.board = board if board is not None else Board()
        self.players: list[Player] = players if players is not None else []
        self.current_player_id = current_player_id
        self.tile_bag: list[AnyTile] = tile_bag if tile_bag is not None else []
        self.claimed_words: list[ClaimedWord] = claimed_words if claimed_words is not None else []
        self.target_score = target_score
        self.status = status
        self.winner_id = winner_id

    def player(self, player_id: int) -> Player:
        for p in self.players:
            if p.id == player_id:
                return p
        raise PlayerNotFound(player_id)

    def copy(self) -> GameState:
        """Deep copy."""
        return GameState(
            board=self.board.copy(),
            players=[p.copy() for p in self.players],
            current_player_id=self.current_player_id,
            tile_bag=[t.copy() for t in self.tile_bag],
            claimed_words=[cw.copy() for cw in self.claimed_words],
            target_score=self.target_score,
            status=self.status,
            winner_id=self.winner_id,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return (
            self.board == other.board
            and self.players == other.players
            and self.current_player_id == other.current_player_id
            and self.tile_bag == other.tile_bag
            and self.claimed_words == other.claimed_words
            and self.target_score == other.target_score
            and self.status == other.status
            and self.winner_id == other.winner_id
        )

    __hash__ = None
