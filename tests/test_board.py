import random

import pytest

from grabble.board import Board
from grabble.errors import CellOccupied, ColumnFull, InvalidColumn, OutOfBounds
from grabble.lines import Position
from grabble.move import TilePlacement
from grabble.tiles import BlankTile, Tile


def drop(board, column, letters, player=0):
    """Drop letters one at a time into a column."""
    landed = []
    for letter in letters:
        landed.extend(board.place_tiles([TilePlacement(column, Tile(letter))], player))
    return landed


def column_letters(board, column):
    return "".join(
        board.get(column, y).face for y in range(7) if board.get(column, y) is not None
    )


def test_single_tile_lands_on_bottom_row():
    board = Board()
    landed = board.place_tiles([TilePlacement(3, Tile("A"))], 0)
    assert landed == [Position(3, 6)]
    assert board.get(3, 6) == Tile("A")
    assert board.owner(3, 6) == 0


def test_sequential_drops_stack_upward():
    board = Board()
    landed = drop(board, 0, "CAT")
    assert landed == [Position(0, 6), Position(0, 5), Position(0, 4)]
    assert column_letters(board, 0) == "TAC"


def test_one_call_into_same_column_puts_last_tile_lowest():
    board = Board()
    landed = board.place_tiles(
        [TilePlacement(0, Tile("C")), TilePlacement(0, Tile("A")), TilePlacement(0, Tile("T"))], 1,
    )
    assert landed == [Position(0, 4), Position(0, 5), Position(0, 6)]
    assert column_letters(board, 0) == "CAT"
    assert all(board.owner(0, y) == 1 for y in (4, 5, 6))


def test_landing_row_and_accessible_columns():
    board = Board()
    assert board.landing_row(2) == 6
    drop(board, 2, "ABCDEFG")
    assert board.landing_row(2) == -1
    assert 2 not in board.accessible_columns()
    assert len(board.accessible_columns()) == 6


def test_full_column_raises():
    board = Board()
    drop(board, 4, "ABCDEFG")
    with pytest.raises(ColumnFull):
        board.place_tiles([TilePlacement(4, Tile("H"))], 0)


def test_failed_placement_changes_nothing():
    board = Board()
    drop(board, 0, "ABCDEF")
    before = board.copy()
    with pytest.raises(ColumnFull):
        board.place_tiles([TilePlacement(1, Tile("X")), TilePlacement(0, Tile("Y")), TilePlacement(0, Tile("Z"))], 0)
    assert board == before


@pytest.mark.parametrize("column", [-1, 7, 100])
def test_invalid_column_raises(column):
    board = Board()
    with pytest.raises(InvalidColumn):
        board.place_tiles([TilePlacement(column, Tile("A"))], 0)


def test_place_at_position_does_not_pack():
    board = Board()
    board.place_tile_at_position(2, 1, Tile("Q"), 0)
    assert board.get(2, 1) == Tile("Q")
    assert not board.is_packed()

    moves = board.resolve_gravity()
    assert moves == {Position(2, 1): Position(2, 6)}
    assert board.is_packed()
    assert board.owner(2, 6) == 0
    assert board.owner(2, 1) is None


def test_place_at_position_errors():
    board = Board()
    board.place_tile_at_position(0, 0, Tile("A"), 0)
    with pytest.raises(CellOccupied):
        board.place_tile_at_position(0, 0, Tile("B"), 0)
    with pytest.raises(OutOfBounds):
        board.place_tile_at_position(7, 0, Tile("B"), 0)


def test_remove_tile_lets_column_fall():
    board = Board()
    drop(board, 0, "AB", player=0)
    drop(board, 0, "C", player=1)
    removed = board.remove_tile(0, 6)
    assert removed == Tile("A")
    assert column_letters(board, 0) == "CB"
    assert board.get(0, 6) == Tile("B")
    assert board.owner(0, 5) == 1
    assert board.is_packed()


def test_remove_empty_cell_returns_none():
    board = Board()
    assert board.remove_tile(3, 3) is None
    with pytest.raises(OutOfBounds):
        board.remove_tile(-1, 3)


def test_gravity_is_idempotent_on_packed_board():
    board = Board()
    drop(board, 0, "ABC")
    drop(board, 5, "XY")
    before = board.copy()
    assert board.resolve_gravity() == {}
    assert board == before


def test_packing_holds_under_random_play():
    rng = random.Random(7)
    board = Board()
    for _ in range(300):
        if rng.random() < 0.6:
            column = rng.randrange(7)
            if board.landing_row(column) >= 0:
                board.place_tiles([TilePlacement(column, Tile(rng.choice("ABCDE")))], rng.randrange(2))
        else:
            board.remove_tile(rng.randrange(7), rng.randrange(7))
        assert board.is_packed()


def test_counts_and_queries():
    board = Board()
    assert board.is_board_empty()
    drop(board, 1, "AB")
    assert board.count_tiles() == 2
    assert board.is_occupied(1, 6)
    assert board.is_empty(1, 4)
    assert board.get(9, 9) is None
    assert board.owner(9, 9) is None
    assert [pos for pos, _tile in board.tiles()] == [Position(1, 5), Position(1, 6)]


def test_full_board():
    board = Board()
    for column in range(7):
        drop(board, column, "ABCDEFG")
    assert board.is_full()
    assert board.accessible_columns() == []


def test_copy_does_not_share_blanks():
    board = Board()
    board.place_tiles([TilePlacement(0, BlankTile("E"))], 0)
    clone = board.copy()
    clone.get(0, 6).assign("S")
    assert board.get(0, 6).face == "E"
    assert clone.get(0, 6).face == "S"
