"""Grabble -- gravity word game rules engine."""

from grabble.constants import BOARD_SIZE, RACK_SIZE, TILE_DISTRIBUTION, TILE_VALUES
from grabble.errors import GrabbleError, Rejection
from grabble.tiles import Tile, BlankTile
from grabble.lines import Position
from grabble.trie import Trie, TrieNode
from grabble.dictionary import Dictionary
from grabble.board import Board
from grabble.move import ClaimedWord, ClaimResult, Drop, SubmissionResult, TilePlacement, TurnResult, WordClaim
from grabble.state import GameState, Player
from grabble.engine import GrabbleEngine
from grabble.game import GameManager
from grabble.hints import HintResult, HintSolution, HintSolver, get_hint
from grabble.swap import get_swap_suggestion

__all__ = [
    "BOARD_SIZE",
    "RACK_SIZE",
    "TILE_DISTRIBUTION",
    "TILE_VALUES",
    "Board",
    "BlankTile",
    "ClaimResult",
    "ClaimedWord",
    "Dictionary",
    "Drop",
    "GameManager",
    "GameState",
    "GrabbleEngine",
    "GrabbleError",
    "HintResult",
    "HintSolution",
    "HintSolver",
    "Player",
    "Position",
    "Rejection",
    "SubmissionResult",
    "Tile",
    "TilePlacement",
    "Trie",
    "TrieNode",
    "TurnResult",
    "WordClaim",
    "get_hint",
    "get_swap_suggestion",
]
