"""Game lifecycle: setup, turns, racks, the bag and the end of the game."""

from __future__ import annotations

import logging
import random
from typing import Iterable, Sequence, Union

from grabble.bag import create_tile_bag, draw_into, shuffle
from grabble.board import Board
from grabble.constants import (
    DEFAULT_TARGET_SCORE,
    MAX_PLAYERS,
    MIN_PLAYERS,
    PLAYER_COLORS,
    RACK_SIZE,
    STATUS_FINISHED,
    STATUS_PLAYING,
)
from grabble.engine import GrabbleEngine, WordLookup
from grabble.errors import (
    BlankTileError,
    GameOver,
    InvalidGameSetup,
    InvalidRackIndex,
    NotYourTurn,
    OutOfBounds,
    RackFull,
)
from grabble.hints import HintResult, HintSolver
from grabble.lines import Position, in_bounds
from grabble.move import (
    ClaimedWord,
    Drop,
    SubmissionResult,
    TilePlacement,
    TurnResult,
    WordClaim,
)
from grabble.state import GameState, Player
from grabble.tiles import AnyTile, fresh

log = logging.getLogger("grabble")

ClaimInput = Union[WordClaim, Sequence[Position]]


class GameManager:
    """Entry point for everything outside the engine.

    Owns the ``GameState``.  Every change goes through a method here; reads
    return copies.
    """

    def __init__(self, state: GameState, rng: random.Random | None = None):
        self._state = state
        self._engine = GrabbleEngine(state)
        self._rng = rng or random.Random()

    # construction

    @classmethod
    def create_new_game(
        cls,
        player_count: int,
        names: Sequence[str],
        target_score: int = DEFAULT_TARGET_SCORE,
        rng: random.Random | None = None,
    ) -> GameManager:
        """Shuffle a full bag, seat the players in the order given and deal.

        The first player named always starts.
        """
        if not MIN_PLAYERS <= player_count <= MAX_PLAYERS:
            raise InvalidGameSetup(f"Game must have {MIN_PLAYERS}-{MAX_PLAYERS} players")
        if len(names) != player_count:
            raise InvalidGameSetup("Player names must match number of players")
        if target_score <= 0:
            raise InvalidGameSetup("Target score must be positive")

        rng = rng or random.Random()
        bag = create_tile_bag(rng)
        players = [
            Player(i, name, PLAYER_COLORS[i], turn_order=i)
            for i, name in enumerate(names)
        ]
        for player in players:
            draw_into(player.rack, bag)

        state = GameState(
            board=Board(),
            players=players,
            current_player_id=players[0].id,
            tile_bag=bag,
            target_score=target_score,
            status=STATUS_PLAYING,
        )
        log.info(
            "New game: %s (target %d)", ", ".join(p.name for p in players), target_score,
        )
        return cls(state, rng)

    @classmethod
    def load_game(cls, state: GameState, rng: random.Random | None = None) -> GameManager:
        """Resume from a state (the manager keeps its own copy)."""
        return cls(state.copy(), rng)

    def serialize(self) -> str:
        from grabble.schemas import state_to_json

        return state_to_json(self._state)

    @classmethod
    def deserialize(cls, data: str, rng: random.Random | None = None) -> GameManager:
        from grabble.schemas import state_from_json

        return cls(state_from_json(data), rng)

    # reads

    def get_state(self) -> GameState:
        return self._engine.get_state()

    def current_player(self) -> Player:
        return self._state.player(self._state.current_player_id).copy()

    def get_player(self, player_id: int) -> Player | None:
        for p in self._state.players:
            if p.id == player_id:
                return p.copy()
        return None

    def players_by_turn_order(self) -> list[Player]:
        return [p.copy() for p in sorted(self._state.players, key=lambda p: p.turn_order)]

    def is_player_turn(self, player_id: int) -> bool:
        return self._state.current_player_id == player_id

    @property
    def status(self) -> str:
        return self._state.status

    def is_game_finished(self) -> bool:
        return self._state.status == STATUS_FINISHED

    def get_winner(self) -> Player | None:
        if not self.is_game_finished() or self._state.winner_id is None:
            return None
        return self.get_player(self._state.winner_id)

    def bag_count(self) -> int:
        return len(self._state.tile_bag)

    def leaderboard(self) -> list[Player]:
        """Players by score, highest first."""
        return sorted((p.copy() for p in self._state.players), key=lambda p: p.score, reverse=True)

    def player_scores(self) -> list[tuple[int, str, int]]:
        return [(p.id, p.name, p.score) for p in self._state.players]

    def claimed_words_for_player(self, player_id: int) -> list[ClaimedWord]:
        return [cw.copy() for cw in self._state.claimed_words if cw.player_id == player_id]

    def all_claimed_words(self) -> list[ClaimedWord]:
        return [cw.copy() for cw in self._state.claimed_words]

    # board and claims

    def place_tiles(self, placements: Iterable[TilePlacement], player_id: int) -> list[Position]:
        return self._engine.place_tiles(placements, player_id)

    def place_tile_at_position(self, x: int, y: int, tile: AnyTile, player_id: int) -> None:
        self._engine.place_tile_at_position(x, y, tile, player_id)

    def remove_tile(self, x: int, y: int) -> AnyTile | None:
        return self._engine.remove_tile(x, y)

    def process_word_claims(
        self,
        claims: Sequence[WordClaim],
        newly_placed: Sequence[Position],
        dictionary: WordLookup,
    ) -> SubmissionResult:
        return self._engine.process_word_claims(claims, newly_placed, dictionary)

    def set_blank_tile_letter(self, x: int, y: int, letter: str, player_id: int) -> bool:
        """Choose the letter of a blank on the board.

        Only the player who dropped the blank may do this, and only until a
        scored word has locked it.  Returns False when refused.
        """
        if not in_bounds(x, y):
            raise OutOfBounds(x, y)
        board = self._state.board
        tile = board.get(x, y)
        if tile is None or not tile.is_blank:
            return False
        if board.owner(x, y) != player_id or tile.locked:
            return False
        tile.assign(letter)
        return True

    def get_hint(self, player_id: int, solver: HintSolver, level: int = 0) -> HintResult:
        """Hint for a player's rack against a snapshot of the board."""
        player = self._state.player(player_id)
        return solver.get_hint(self._state.board.copy(), [t.copy() for t in player.rack], level)

    # racks and the bag

    def refill_player_rack(self, player_id: int) -> int:
        """Draw until the rack holds 7 tiles or the bag runs out."""
        return draw_into(self._state.player(player_id).rack, self._state.tile_bag)

    def remove_tiles_from_rack(self, player_id: int, indices: Iterable[int]) -> list[AnyTile]:
        """Take tiles out of a rack (highest index first)."""
        player = self._state.player(player_id)
        order = self._checked_indices(player, indices)
        return [player.rack.pop(i) for i in order]

    def return_tile_to_rack(self, player_id: int, tile: AnyTile) -> None:
        player = self._state.player(player_id)
        if len(player.rack) >= RACK_SIZE:
            raise RackFull(player_id)
        player.rack.append(fresh(tile))

    def swap_tiles(self, player_id: int, indices: Iterable[int]) -> list[AnyTile]:
        """Return tiles to the bag, reshuffle and redraw.

        Uses up the player's turn; the caller still has to ``advance_turn``.
        Returns the tiles drawn.
        """
        player = self._state.player(player_id)
        order = self._checked_indices(player, indices)
        returned = [fresh(player.rack.pop(i)) for i in order]
        self._state.tile_bag.extend(returned)
        shuffle(self._state.tile_bag, self._rng)
        before = len(player.rack)
        draw_into(player.rack, self._state.tile_bag)
        log.debug("Player %d swapped %d tiles", player_id, len(returned))
        return [t.copy() for t in player.rack[before:]]

    # turns and the end of the game

    def advance_turn(self) -> int:
        """Pass the turn to the next player in turn order; returns their id."""
        current = self._state.player(self._state.current_player_id)
        next_order = (current.turn_order + 1) % len(self._state.players)
        for p in self._state.players:
            if p.turn_order == next_order:
                self._state.current_player_id = p.id
                break
        return self._state.current_player_id

    def check_win_condition(self) -> int | None:
        """First player (roster order) at or over the target score wins."""
        for player in self._state.players:
            if player.score >= self._state.target_score:
                self._finish(player)
                return player.id
        return None

    def can_continue_game(self) -> bool:
        """False once the bag and every rack are empty."""
        if self._state.tile_bag:
            return True
        return any(p.rack for p in self._state.players)

    def end_game(self) -> Player:
        """Finish now; the highest score wins (earlier seat on a tie)."""
        winner = self._state.players[0]
        for p in self._state.players[1:]:
            if p.score > winner.score:
                winner = p
        self._finish(winner)
        return winner.copy()

    def play_turn(
        self,
        player_id: int,
        drops: Sequence[Drop],
        claims: Sequence[ClaimInput],
        dictionary: WordLookup,
    ) -> TurnResult:
        """Drop rack tiles and claim words as one atomic move.

        The move is tried on a copy of the game first.  If a drop is
        structurally invalid the error propagates; if any claim is
        rejected the rejection is returned.  Either way the game is left
        exactly as it was.  On success the rack is refilled, the turn
        passes and the win condition is checked.
        """
        if self._state.status != STATUS_PLAYING:
            raise GameOver("Game is not in progress")
        if player_id != self._state.current_player_id:
            self._state.player(player_id)
            raise NotYourTurn(player_id, self._state.current_player_id)

        word_claims = [self._as_claim(c, player_id) for c in claims]

        scratch = self._state.copy()
        engine = GrabbleEngine(scratch)
        player = scratch.player(player_id)
        indices = [d.rack_index for d in drops]
        self._checked_indices(player, indices)
        for i in indices:
            if indices.count(i) > 1:
                raise InvalidRackIndex(player_id, i)

        placements: list[TilePlacement] = []
        for drop in drops:
            tile = player.rack[drop.rack_index]
            if drop.letter is not None:
                if not tile.is_blank:
                    raise BlankTileError("Only blank tiles take a chosen letter")
                tile.assign(drop.letter)
            placements.append(TilePlacement(drop.column, tile))

        placed = engine.place_tiles(placements, player_id)
        for i in sorted(indices, reverse=True):
            player.rack.pop(i)

        submission = engine.process_word_claims(word_claims, placed, dictionary)
        if not submission.valid:
            return TurnResult(submission)

        self._adopt(scratch)
        self.refill_player_rack(player_id)
        self.advance_turn()
        winner_id = self.check_win_condition()
        return TurnResult(submission, placed, winner_id)

    # helpers

    def _finish(self, winner: Player) -> None:
        self._state.status = STATUS_FINISHED
        self._state.winner_id = winner.id
        log.info("%s wins with %d points", winner.name, winner.score)

    @staticmethod
    def _checked_indices(player: Player, indices: Iterable[int]) -> list[int]:
        """Distinct rack indices, highest first.  Raises on a bad index."""
        order = sorted(set(indices), reverse=True)
        for i in order:
            if not 0 <= i < len(player.rack):
                raise InvalidRackIndex(player.id, i)
        return order

    @staticmethod
    def _as_claim(claim: ClaimInput, player_id: int) -> WordClaim:
        if isinstance(claim, WordClaim):
            if claim.player_id != player_id:
                raise NotYourTurn(claim.player_id, player_id)
            return claim
        return WordClaim(claim, player_id)

    def _adopt(self, other: GameState) -> None:
        """Take over the contents of *other* without replacing the state
        object the engine holds."""
        s = self._state
        s.board = other.board
        s.players = other.players
        s.current_player_id = other.current_player_id
        s.tile_bag = other.tile_bag
        s.claimed_words = other.claimed_words
        s.target_score = other.target_score
        s.status = other.status
        s.winner_id = other.winner_id
