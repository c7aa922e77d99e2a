"""Move and claim value types."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from grabble.lines import Position

if TYPE_CHECKING:
    from grabble.errors import Rejection
    from grabble.tiles import AnyTile


def _positions(positions: Iterable) -> list[Position]:
    return [Position(*p) for p in positions]


class TilePlacement:
    """A tile dropped into the top of a column."""

    __slots__ = ("column", "tile")

    def __init__(self, column: int, tile: "AnyTile"):
        self.column = column
        self.tile = tile

    def __repr__(self) -> str:
        return f"TilePlacement(column={self.column}, tile={self.tile!r})"


class Drop:
    """A rack tile dropped into a column as part of a turn.

    ``letter`` names the letter a blank tile stands for.
    """

    __slots__ = ("rack_index", "column", "letter")

    def __init__(self, rack_index: int, column: int, letter: str | None = None):
        self.rack_index = rack_index
        self.column = column
        self.letter = letter

    def __repr__(self) -> str:
        extra = f", letter={self.letter!r}" if self.letter else ""
        return f"Drop(rack_index={self.rack_index}, column={self.column}{extra})"


class WordClaim:
    """A player's declaration that a straight run of tiles is a word.

    Positions are kept in the order the player traced them.
    """

    __slots__ = ("positions", "player_id")

    def __init__(self, positions: Iterable, player_id: int):
        self.positions = _positions(positions)
        self.player_id = player_id

    def __repr__(self) -> str:
        cells = " ".join(f"({p.x},{p.y})" for p in self.positions)
        return f"WordClaim(player={self.player_id}, {cells})"


class ClaimedWord:
    """Ledger entry for a scored word."""

    __slots__ = ("word", "positions", "player_id", "score", "bonuses")

    def __init__(
        self,
        word: str,
        positions: Iterable,
        player_id: int,
        score: int,
        bonuses: list[str] | None = None,
    ):
        self.word = word
        self.positions = _positions(positions)
        self.player_id = player_id
        self.score = score
        self.bonuses = list(bonuses or [])

    def copy(self) -> ClaimedWord:
        return ClaimedWord(self.word, self.positions, self.player_id, self.score, self.bonuses)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClaimedWord):
            return NotImplemented
        return (
            self.word == other.word
            and self.positions == other.positions
            and self.player_id == other.player_id
            and self.score == other.score
            and self.bonuses == other.bonuses
        )

    def __repr__(self) -> str:
        extra = f" [{', '.join(self.bonuses)}]" if self.bonuses else ""
        return f"{self.word} by player {self.player_id} = {self.score} pts{extra}"


class ClaimResult:
    """Outcome of validating one claim."""

    __slots__ = ("valid", "word", "positions", "score", "bonuses", "rejection", "error")

    def __init__(
        self,
        valid: bool,
        word: str | None = None,
        positions: list[Position] | None = None,
        score: int = 0,
        bonuses: list[str] | None = None,
        rejection: "Rejection | None" = None,
        error: str | None = None,
    ):
        self.valid = valid
        self.word = word
        self.positions = positions or []
        self.score = score
        self.bonuses = bonuses or []
        self.rejection = rejection
        self.error = error

    @classmethod
    def rejected(cls, rejection: "Rejection", error: str, word: str | None = None) -> ClaimResult:
        return cls(False, word=word, rejection=rejection, error=error)

    def __repr__(self) -> str:
        if self.valid:
            return f"ClaimResult({self.word!r}, score={self.score}, bonuses={self.bonuses})"
        return f"ClaimResult(rejected={self.rejection.value}: {self.error})"


class SubmissionResult:
    """Outcome of a whole claim submission (all-or-nothing)."""

    __slots__ = ("valid", "results", "total_score")

    def __init__(self, valid: bool, results: list[ClaimResult], total_score: int = 0):
        self.valid = valid
        self.results = results
        self.total_score = total_score

    @property
    def errors(self) -> list[str]:
        return [r.error for r in self.results if r.error]

    @property
    def rejections(self) -> list["Rejection"]:
        return [r.rejection for r in self.results if r.rejection is not None]

    def __repr__(self) -> str:
        state = "accepted" if self.valid else "rejected"
        return f"SubmissionResult({state}, total={self.total_score}, {self.results})"


class TurnResult:
    """Outcome of a complete turn: drops plus claims.

    ``placed`` lists where the dropped tiles came to rest; it is empty when
    the turn was rejected and the game left untouched.
    """

    __slots__ = ("submission", "placed", "winner_id")

    def __init__(
        self,
        submission: SubmissionResult,
        placed: list[Position] | None = None,
        winner_id: int | None = None,
    ):
        self.submission = submission
        self.placed = placed or []
        self.winner_id = winner_id

    @property
    def valid(self) -> bool:
        return self.submission.valid

    @property
    def total_score(self) -> int:
        return self.submission.total_score

    def __repr__(self) -> str:
        won = f", winner={self.winner_id}" if self.winner_id is not None else ""
        return f"TurnResult({self.submission!r}{won})"
