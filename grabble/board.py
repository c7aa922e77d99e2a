"""7×7 Grabble board with column gravity."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator

from grabble.constants import BOARD_SIZE, BOTTOM_ROW
from grabble.errors import CellOccupied, ColumnFull, InvalidColumn, OutOfBounds
from grabble.lines import Position, in_bounds

if TYPE_CHECKING:
    from grabble.move import TilePlacement
    from grabble.tiles import AnyTile


class Board:
    """7x7 game board. Cells hold a tile or None; row 0 is the top.

    Who dropped each tile is tracked in a parallel ``owners`` grid.  Tiles
    always rest packed at the bottom of their column (see
    ``resolve_gravity``); only ``place_tile_at_position`` may leave a gap.
    """

    def __init__(self):
        self.cells: list[list[AnyTile | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        self.owners: list[list[int | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # queries

    def get(self, x: int, y: int) -> AnyTile | None:
        """Tile at column x, row y, or None."""
        if in_bounds(x, y):
            return self.cells[y][x]
        return None

    def owner(self, x: int, y: int) -> int | None:
        """Id of the player who placed the tile at (x, y)."""
        if in_bounds(x, y):
            return self.owners[y][x]
        return None

    def is_empty(self, x: int, y: int) -> bool:
        return self.get(x, y) is None

    def is_occupied(self, x: int, y: int) -> bool:
        return not self.is_empty(x, y)

    def is_board_empty(self) -> bool:
        return self.count_tiles() == 0

    def is_full(self) -> bool:
        return self.count_tiles() == BOARD_SIZE * BOARD_SIZE

    def count_tiles(self) -> int:
        return sum(1 for _pos, _tile in self.tiles())

    def tiles(self) -> Iterator[tuple[Position, AnyTile]]:
        """Occupied cells in row-major order."""
        for y in range(BOARD_SIZE):
            for x in range(BOARD_SIZE):
                tile = self.cells[y][x]
                if tile is not None:
                    yield Position(x, y), tile

    def landing_row(self, column: int) -> int:
        """Lowest empty row in *column*, or -1 if the column is full."""
        self._check_column(column)
        for row in range(BOTTOM_ROW, -1, -1):
            if self.cells[row][column] is None:
                return row
        return -1

    def accessible_columns(self) -> list[int]:
        return [c for c in range(BOARD_SIZE) if self.landing_row(c) >= 0]

    def is_packed(self) -> bool:
        """True if no column has an empty cell below an occupied one."""
        for x in range(BOARD_SIZE):
            seen_tile = False
            for y in range(BOARD_SIZE):
                if self.cells[y][x] is not None:
                    seen_tile = True
                elif seen_tile:
                    return False
        return True

    # mutation

    def place_tiles(self, placements: Iterable[TilePlacement], player_id: int | None) -> list[Position]:
        """Drop tiles into column tops, then let gravity settle them.

        Each tile takes the first empty cell scanning its column from the
        top.  Returns where each placed tile came to rest, in placement
        order.  Nothing changes if any placement is invalid.
        """
        placements = list(placements)
        free = {}
        for p in placements:
            self._check_column(p.column)
            if p.column not in free:
                free[p.column] = sum(1 for y in range(BOARD_SIZE) if self.cells[y][p.column] is None)
            free[p.column] -= 1
            if free[p.column] < 0:
                raise ColumnFull(p.column)

        dropped: list[Position] = []
        for p in placements:
            for row in range(BOARD_SIZE):
                if self.cells[row][p.column] is None:
                    self.cells[row][p.column] = p.tile
                    self.owners[row][p.column] = player_id
                    dropped.append(Position(p.column, row))
                    break

        moves = self.resolve_gravity()
        return [moves.get(pos, pos) for pos in dropped]

    def place_tile_at_position(self, x: int, y: int, tile: AnyTile, player_id: int | None) -> None:
        """Put a tile on a specific cell.  No gravity is applied."""
        self._check_position(x, y)
        if self.cells[y][x] is not None:
            raise CellOccupied(x, y)
        self.cells[y][x] = tile
        self.owners[y][x] = player_id

    def remove_tile(self, x: int, y: int) -> AnyTile | None:
        """Clear a cell and return its tile (None if it was empty)."""
        self._check_position(x, y)
        tile = self.cells[y][x]
        if tile is None:
            return None
        self.cells[y][x] = None
        self.owners[y][x] = None
        self.resolve_gravity()
        return tile

    def resolve_gravity(self) -> dict[Position, Position]:
        """Pack every column toward the bottom, keeping tile order.

        Returns the cells that moved as ``{old: new}``; an already packed
        board returns an empty mapping and is left as it was.
        """
        moves: dict[Position, Position] = {}
        for col in range(BOARD_SIZE):
            stack: list[tuple[int, AnyTile, int | None]] = []
            for row in range(BOARD_SIZE):
                tile = self.cells[row][col]
                if tile is not None:
                    stack.append((row, tile, self.owners[row][col]))
                    self.cells[row][col] = None
                    self.owners[row][col] = None

            row_index = BOTTOM_ROW
            for old_row, tile, owner in reversed(stack):
                self.cells[row_index][col] = tile
                self.owners[row_index][col] = owner
                if old_row != row_index:
                    moves[Position(col, old_row)] = Position(col, row_index)
                row_index -= 1
        return moves

    def copy(self) -> Board:
        """Independent copy (blank tiles are copied, not shared)."""
        b = Board()
        for y in range(BOARD_SIZE):
            b.cells[y] = [t.copy() if t is not None else None for t in self.cells[y]]
            b.owners[y] = self.owners[y][:]
        return b

    # helpers

    @staticmethod
    def _check_column(column: int) -> None:
        if not 0 <= column < BOARD_SIZE:
            raise InvalidColumn(column)

    @staticmethod
    def _check_position(x: int, y: int) -> None:
        if not in_bounds(x, y):
            raise OutOfBounds(x, y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells and self.owners == other.owners

    __hash__ = None

    def __str__(self) -> str:
        header = "    " + " ".join(f"{c:>2}" for c in range(BOARD_SIZE))
        sep = "   " + "---" * BOARD_SIZE
        lines = [header, sep]
        for y in range(BOARD_SIZE):
            parts = [f"{y:>2} |"]
            for x in range(BOARD_SIZE):
                tile = self.cells[y][x]
                if tile is None:
                    parts.append(" . ")
                elif tile.is_blank:
                    parts.append(f" {tile.face.lower()} ")
                else:
                    parts.append(f" {tile.letter} ")
            lines.append("".join(parts))
        return "\n".join(lines)
