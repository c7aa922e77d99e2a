"""Game constants for Grabble."""

from __future__ import annotations

BOARD_SIZE = 7
BOTTOM_ROW = BOARD_SIZE - 1
RACK_SIZE = 7
MIN_WORD_LENGTH = 3

MIN_PLAYERS = 2
MAX_PLAYERS = 4
DEFAULT_TARGET_SCORE = 100

# Blank tiles carry this letter; an unassigned blank reads as the placeholder.
BLANK = " "
BLANK_PLACEHOLDER = "?"

# ── Tile distribution ───────────────────────────────────────────────────
# letter -> (count, points).  Total: 100 tiles (98 lettered + 2 blanks).

# fmt: off
TILE_DISTRIBUTION: dict[str, tuple[int, int]] = {
    "A": (9, 1),  "E": (12, 1), "I": (9, 1),  "O": (8, 1),  "U": (4, 1),
    "L": (4, 1),  "N": (6, 1),  "S": (4, 1),  "T": (6, 1),  "R": (6, 1),
    "D": (4, 2),  "G": (3, 2),
    "B": (2, 3),  "C": (2, 3),  "M": (2, 3),  "P": (2, 3),
    "F": (2, 4),  "H": (2, 4),  "V": (2, 4),  "W": (2, 4),  "Y": (2, 4),
    "K": (1, 5),
    "J": (1, 8),  "X": (1, 8),
    "Q": (1, 10), "Z": (1, 10),
    BLANK: (2, 0),
}
# fmt: on

TILE_VALUES: dict[str, int] = {
    letter: points for letter, (_count, points) in TILE_DISTRIBUTION.items()
}

PLAYER_COLORS = ("#FF6B6B", "#4ECDC4", "#45B7D1", "#FFA07A")

# Bonus names recorded in the claimed-word ledger
BONUS_DIAGONAL = "diagonal"
BONUS_PALINDROME = "palindrome"
BONUS_EMORDNILAP = "emordnilap"
BONUS_MULTIPLIER = 2

STATUS_WAITING = "waiting"
STATUS_PLAYING = "playing"
STATUS_FINISHED = "finished"
