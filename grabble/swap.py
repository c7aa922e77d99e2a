"""Swap advice for Grabble.

When the hint solver cannot find any word for a rack, the player is better
off trading tiles in.  This module ranks rack tiles by how easily their
letter shows up in words and picks the hardest ones to get rid of.
"""

from __future__ import annotations

from typing import Sequence

from grabble.constants import BLANK
from grabble.tiles import AnyTile

MAX_SWAP_SUGGESTIONS = 3

# ── Letter playability ──────────────────────────────────────────────────
#
# Higher = easier to use in words.  Roughly follows how often each letter
# appears in short dictionary words.  Blanks fit anywhere.

LETTER_PLAYABILITY: dict[str, float] = {
    "E": 0.95, "A": 0.90, "R": 0.85, "I": 0.85, "O": 0.82,
    "T": 0.80, "N": 0.78, "S": 0.77, "L": 0.72, "C": 0.65,
    "U": 0.60, "D": 0.55, "P": 0.52, "M": 0.50, "H": 0.48,
    "G": 0.42, "B": 0.38, "F": 0.35, "Y": 0.32, "W": 0.30,
    "K": 0.25, "V": 0.22, "X": 0.10, "Z": 0.08, "J": 0.06, "Q": 0.04,
    BLANK: 0.99,
}

DEFAULT_PLAYABILITY = 0.5


def playability(tile: AnyTile) -> float:
    return LETTER_PLAYABILITY.get(tile.letter, DEFAULT_PLAYABILITY)


# ── Public API ───────────────────────────────────────────────────────────

def get_swap_suggestion(rack: Sequence[AnyTile]) -> list[int]:
    """Indices of up to three rack tiles with the lowest playability,
    least playable first.  Ties keep rack order."""
    ranked = sorted(range(len(rack)), key=lambda i: playability(rack[i]))
    return ranked[:MAX_SWAP_SUGGESTIONS]
