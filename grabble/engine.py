"""Grabble rules engine: placements, claim validation and scoring."""

from __future__ import annotations

import logging
from typing import Collection, Iterable, Sequence

from grabble.constants import (
    BONUS_DIAGONAL,
    BONUS_EMORDNILAP,
    BONUS_MULTIPLIER,
    BONUS_PALINDROME,
    MIN_WORD_LENGTH,
)
from grabble.errors import Rejection
from grabble.lines import Position, line_direction, position_key, sort_row_major
from grabble.move import ClaimedWord, ClaimResult, SubmissionResult, TilePlacement, WordClaim
from grabble.state import GameState
from grabble.tiles import AnyTile
from grabble.words import (
    are_words_same_direction,
    contains_new_tile,
    extract_word_from_positions,
    find_all_words,
    get_reverse_word,
    is_substring_word,
    is_valid_word_line,
)

log = logging.getLogger("grabble.engine")

# Anything answering ``word in dictionary`` for uppercase words: a
# Dictionary, a Trie or a plain set.
WordLookup = Collection[str]


class GrabbleEngine:
    """Applies placements and scores word claims against a ``GameState``.

    The engine mutates the state it was given in place; ``get_state``
    hands out deep copies.
    """

    def __init__(self, state: GameState):
        self._state = state

    def get_state(self) -> GameState:
        return self._state.copy()

    # board commands

    def place_tiles(self, placements: Iterable[TilePlacement], player_id: int) -> list[Position]:
        """Drop tiles into columns; returns where they came to rest."""
        self._state.player(player_id)
        return self._state.board.place_tiles(placements, player_id)

    def place_tile_at_position(self, x: int, y: int, tile: AnyTile, player_id: int) -> None:
        self._state.player(player_id)
        self._state.board.place_tile_at_position(x, y, tile, player_id)

    def remove_tile(self, x: int, y: int) -> AnyTile | None:
        return self._state.board.remove_tile(x, y)

    # words

    def extract_word(self, positions: Sequence[Position]) -> tuple[str, bool]:
        """Word on *positions* in row-major order, and whether it is a
        complete straight line of 3+ tiles."""
        if not is_valid_word_line(positions):
            return "", False
        board = self._state.board
        if any(board.is_empty(x, y) for x, y in positions):
            return "", False
        word = extract_word_from_positions(board, positions).upper()
        return word, len(word) >= MIN_WORD_LENGTH

    @staticmethod
    def is_palindrome(word: str) -> bool:
        cleaned = "".join(word.split()).upper()
        return cleaned == cleaned[::-1]

    def is_emordnilap(self, word: str, positions: Sequence[Position], dictionary: WordLookup) -> bool:
        """True if *word* read backwards along *positions* is a different
        dictionary word (and *word* itself is one)."""
        word = word.upper()
        if word not in dictionary:
            return False
        reverse = get_reverse_word(self._state.board, positions)
        if not reverse:
            return False
        reverse = reverse.upper()
        return reverse != word and reverse in dictionary

    def calculate_word_score(
        self,
        word: str,
        positions: Sequence[Position],
        dictionary: WordLookup,
    ) -> tuple[int, list[str]]:
        """Sum of tile points, doubled once per bonus earned."""
        board = self._state.board
        base = 0
        for x, y in positions:
            tile = board.get(x, y)
            if tile is not None:
                base += tile.points

        bonuses: list[str] = []
        if positions:
            start, end = positions[0], positions[-1]
            if start[0] != end[0] and start[1] != end[1]:
                bonuses.append(BONUS_DIAGONAL)
        if self.is_palindrome(word):
            bonuses.append(BONUS_PALINDROME)
        if self.is_emordnilap(word, positions, dictionary):
            bonuses.append(BONUS_EMORDNILAP)

        return base * BONUS_MULTIPLIER ** len(bonuses), bonuses

    # claims

    def validate_word_claim(
        self,
        claim: WordClaim,
        newly_placed: Iterable[Position],
        dictionary: WordLookup,
        pending: Iterable[tuple[str, tuple[Position, ...]]] = (),
    ) -> ClaimResult:
        """Check one claim against the board, dictionary and ledger.

        *pending* holds ``(word, cells)`` keys of claims accepted earlier in
        the same submission.  Rejections are returned, never raised.
        """
        positions = claim.positions
        if len(positions) < MIN_WORD_LENGTH:
            return ClaimResult.rejected(
                Rejection.TOO_SHORT, f"Words need at least {MIN_WORD_LENGTH} letters",
            )
        _word, complete = self.extract_word(positions)
        if not complete:
            return ClaimResult.rejected(
                Rejection.NOT_STRAIGHT_LINE, "Word must be a straight line of 3+ letters",
            )

        # Read in the order the player traced; a scrambled selection of a
        # valid line is read in row-major order.
        ordered = list(positions) if line_direction(positions) else sort_row_major(positions)
        word, ordered = self._read_line(ordered, dictionary)
        if word is None:
            shown = extract_word_from_positions(self._state.board, ordered, preserve_order=True).upper()
            log.debug("Rejected %s: not in dictionary", shown)
            return ClaimResult.rejected(
                Rejection.NOT_IN_DICTIONARY, f'Word "{shown}" not in dictionary', word=shown,
            )

        key = (word, position_key(ordered))
        if key in set(pending) or any(
            cw.word == word and position_key(cw.positions) == key[1]
            for cw in self._state.claimed_words
        ):
            return ClaimResult.rejected(Rejection.ALREADY_CLAIMED, "Word already claimed", word=word)

        superstring = self._invalid_superstring(ordered, newly_placed, dictionary)
        if superstring:
            return ClaimResult.rejected(
                Rejection.CREATES_INVALID_SUPERSTRING,
                f'Cannot claim "{word}" because it is part of invalid word '
                f'"{superstring}" in the same direction',
                word=word,
            )

        score, bonuses = self.calculate_word_score(word, ordered, dictionary)
        return ClaimResult(True, word=word, positions=ordered, score=score, bonuses=bonuses)

    def process_word_claims(
        self,
        claims: Sequence[WordClaim],
        newly_placed: Sequence[Position],
        dictionary: WordLookup,
    ) -> SubmissionResult:
        """Validate a turn's claims and commit them all, or none of them."""
        if not newly_placed:
            return SubmissionResult(False, [ClaimResult.rejected(
                Rejection.NO_TILES_PLACED_THIS_TURN,
                "You must place at least one tile before claiming words",
            )])
        for claim in claims:
            self._state.player(claim.player_id)

        results: list[ClaimResult] = []
        pending: list[tuple[str, tuple[Position, ...]]] = []
        for claim in claims:
            result = self.validate_word_claim(claim, newly_placed, dictionary, pending)
            results.append(result)
            if result.valid:
                pending.append((result.word, position_key(result.positions)))

        if not all(r.valid for r in results):
            log.debug("Submission rejected: %s", "; ".join(r.error for r in results if r.error))
            return SubmissionResult(False, results, 0)

        total = 0
        for claim, result in zip(claims, results):
            self._state.claimed_words.append(ClaimedWord(
                result.word, result.positions, claim.player_id, result.score, result.bonuses,
            ))
            self._state.player(claim.player_id).score += result.score
            self._lock_blanks(result.positions)
            total += result.score
            log.info(
                "Player %d claimed %s for %d%s", claim.player_id, result.word, result.score,
                f" ({', '.join(result.bonuses)})" if result.bonuses else "",
            )
        return SubmissionResult(True, results, total)

    # helpers

    def _read_line(
        self, positions: list[Position], dictionary: WordLookup,
    ) -> tuple[str | None, list[Position]]:
        """Dictionary reading of a line: as traced, else back to front."""
        board = self._state.board
        forward = extract_word_from_positions(board, positions, preserve_order=True).upper()
        if forward in dictionary:
            return forward, positions
        backward = positions[::-1]
        reverse = extract_word_from_positions(board, backward, preserve_order=True).upper()
        if reverse in dictionary:
            return reverse, backward
        return None, positions

    def _invalid_superstring(
        self,
        claim_positions: list[Position],
        newly_placed: Iterable[Position],
        dictionary: WordLookup,
    ) -> str | None:
        """A non-word on the claim's own line that swallows the claim.

        Only lines through a tile placed this turn are considered.
        Perpendicular non-words do not count against a claim.
        """
        newly_placed = list(newly_placed)
        if not newly_placed:
            return None
        claim_cells = position_key(claim_positions)
        for run in find_all_words(self._state.board):
            if not contains_new_tile(run, newly_placed):
                continue
            if position_key(run) == claim_cells:
                continue
            word, _ = self._read_line(run, dictionary)
            if word is not None:
                continue
            if are_words_same_direction(claim_positions, run) and is_substring_word(claim_positions, run):
                return extract_word_from_positions(self._state.board, run).upper()
        return None

    def _lock_blanks(self, positions: Iterable[Position]) -> None:
        board = self._state.board
        for x, y in positions:
            tile = board.get(x, y)
            if tile is not None and tile.is_blank and tile.assigned and not tile.locked:
                tile.lock()
