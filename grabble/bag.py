"""Tile bag for Grabble.

Builds the 100-tile bag from the letter distribution in
``grabble.constants`` and shuffles it.  The back of the bag list is the
next tile drawn.
"""

from __future__ import annotations

import random
from typing import MutableSequence, TypeVar

from grabble.constants import RACK_SIZE, TILE_DISTRIBUTION
from grabble.tiles import AnyTile, make_tile

T = TypeVar("T")

TOTAL_TILES = sum(count for count, _points in TILE_DISTRIBUTION.values())  # 100


def make_full_bag() -> list[AnyTile]:
    """Return a list of all tiles in the bag (unshuffled)."""
    bag: list[AnyTile] = []
    for letter, (count, points) in TILE_DISTRIBUTION.items():
        bag.extend(make_tile(letter, points) for _ in range(count))
    return bag


def shuffle(items: MutableSequence[T], rng: random.Random | None = None) -> MutableSequence[T]:
    """Fisher-Yates shuffle in place; returns *items* for chaining."""
    rng = rng or random.Random()
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def create_tile_bag(rng: random.Random | None = None) -> list[AnyTile]:
    """A freshly shuffled full bag."""
    bag = make_full_bag()
    shuffle(bag, rng)
    return bag


def draw_into(rack: list[AnyTile], bag: list[AnyTile], rack_size: int = RACK_SIZE) -> int:
    """Pop tiles from the back of *bag* until *rack* is full or the bag is
    empty.  Returns how many tiles were drawn."""
    drawn = 0
    while len(rack) < rack_size and bag:
        rack.append(bag.pop())
        drawn += 1
    return drawn
