import random

import pytest

from grabble.board import Board
from grabble.errors import (
    BlankTileError,
    GameOver,
    InvalidColumn,
    InvalidGameSetup,
    InvalidRackIndex,
    NotYourTurn,
    OutOfBounds,
    PlayerNotFound,
    RackFull,
)
from grabble.game import GameManager
from grabble.lines import Position
from grabble.move import Drop, TilePlacement, WordClaim
from grabble.state import GameState, Player
from grabble.tiles import BlankTile, Tile

BOTTOM3 = [Position(0, 6), Position(1, 6), Position(2, 6)]


def tiles(letters):
    return [BlankTile() if ch == "?" else Tile(ch) for ch in letters]


def make_game(racks=("CATQZJX", "DOGEEEE"), bag="ABCDEFGHIJ", scores=None, target=100):
    """Manager over a hand-built state with known racks and bag."""
    scores = scores or [0] * len(racks)
    players = [
        Player(i, f"P{i}", "#000", i, score=scores[i], rack=tiles(rack))
        for i, rack in enumerate(racks)
    ]
    state = GameState(
        board=Board(),
        players=players,
        current_player_id=0,
        tile_bag=tiles(bag),
        target_score=target,
        status="playing",
    )
    return GameManager.load_game(state, rng=random.Random(3))


# setup

def test_create_new_game_deals_racks():
    game = GameManager.create_new_game(3, ["Ann", "Bob", "Cy"], rng=random.Random(42))
    state = game.get_state()
    assert state.status == "playing"
    assert state.current_player_id == 0
    assert [p.turn_order for p in state.players] == [0, 1, 2]
    assert [p.name for p in state.players] == ["Ann", "Bob", "Cy"]
    assert all(len(p.rack) == 7 for p in state.players)
    assert game.bag_count() == 100 - 21
    assert len({p.color for p in state.players}) == 3


def test_full_bag_distribution():
    game = GameManager.create_new_game(2, ["Ann", "Bob"], rng=random.Random(1))
    state = game.get_state()
    every = state.tile_bag + [t for p in state.players for t in p.rack]
    assert len(every) == 100
    assert sum(1 for t in every if t.is_blank) == 2
    assert sum(1 for t in every if t.letter == "E") == 12


def test_seeded_games_are_reproducible():
    a = GameManager.create_new_game(2, ["Ann", "Bob"], rng=random.Random(5))
    b = GameManager.create_new_game(2, ["Ann", "Bob"], rng=random.Random(5))
    assert a.get_state() == b.get_state()


@pytest.mark.parametrize("count, names", [
    (1, ["Solo"]),
    (5, ["A", "B", "C", "D", "E"]),
    (2, ["Only one"]),
])
def test_bad_setup_raises(count, names):
    with pytest.raises(InvalidGameSetup):
        GameManager.create_new_game(count, names)


def test_bad_target_raises():
    with pytest.raises(InvalidGameSetup):
        GameManager.create_new_game(2, ["A", "B"], target_score=0)


# turns

@pytest.mark.parametrize("count", [2, 3, 4])
def test_advance_turn_cycles(count):
    game = GameManager.create_new_game(count, [f"P{i}" for i in range(count)], rng=random.Random(0))
    seen = [game.advance_turn() for _ in range(count)]
    assert seen == list(range(1, count)) + [0]
    assert game.is_player_turn(0)


def test_win_condition_threshold():
    assert make_game(scores=[99, 0]).check_win_condition() is None

    game = make_game(scores=[40, 100])
    assert game.check_win_condition() == 1
    assert game.is_game_finished()
    assert game.get_winner().id == 1


def test_first_player_in_roster_wins_ties():
    game = make_game(scores=[120, 150])
    assert game.check_win_condition() == 0


def test_end_game_picks_highest_score():
    game = make_game(scores=[7, 12])
    assert game.end_game().id == 1
    assert game.status == "finished"
    assert [p.id for p in game.leaderboard()] == [1, 0]


def test_can_continue_game():
    assert make_game().can_continue_game()
    assert make_game(racks=("", "A"), bag="").can_continue_game()
    assert not make_game(racks=("", ""), bag="").can_continue_game()


# racks and the bag

def test_refill_draws_from_back_of_bag():
    game = make_game(bag="XYZ")
    removed = game.remove_tiles_from_rack(0, [0, 2])
    assert [t.letter for t in removed] == ["T", "C"]
    assert game.refill_player_rack(0) == 2
    rack = game.get_player(0).rack
    assert [t.letter for t in rack] == list("AQZJX") + ["Z", "Y"]
    assert game.bag_count() == 1


def test_refill_stops_when_bag_empty():
    game = make_game(bag="K")
    game.remove_tiles_from_rack(0, [0, 1, 2])
    assert game.refill_player_rack(0) == 1
    assert len(game.get_player(0).rack) == 5


def test_swap_keeps_counts():
    game = make_game()
    drawn = game.swap_tiles(0, [3, 4, 5])
    assert len(drawn) == 3
    assert len(game.get_player(0).rack) == 7
    assert game.bag_count() == 10
    letters = sorted(t.letter for t in game.get_state().tile_bag + game.get_player(0).rack)
    assert letters == sorted("CATQZJX" + "ABCDEFGHIJ")


def test_swap_bad_index():
    game = make_game()
    with pytest.raises(InvalidRackIndex):
        game.swap_tiles(0, [7])
    with pytest.raises(PlayerNotFound):
        game.swap_tiles(5, [0])


def test_return_tile_to_rack():
    game = make_game()
    with pytest.raises(RackFull):
        game.return_tile_to_rack(0, Tile("E"))
    game.remove_tiles_from_rack(0, [0])
    game.return_tile_to_rack(0, BlankTile("S"))
    returned = game.get_player(0).rack[-1]
    assert returned.is_blank and returned.assigned is None


# blanks

def test_set_blank_tile_letter_rules():
    game = make_game()
    game.place_tiles([TilePlacement(0, BlankTile()), TilePlacement(1, Tile("A"))], 0)

    assert not game.set_blank_tile_letter(0, 6, "C", 1)
    assert not game.set_blank_tile_letter(1, 6, "C", 0)
    assert not game.set_blank_tile_letter(4, 6, "C", 0)
    assert game.set_blank_tile_letter(0, 6, "C", 0)
    assert game.get_state().board.get(0, 6).face == "C"
    with pytest.raises(OutOfBounds):
        game.set_blank_tile_letter(7, 0, "C", 0)
    with pytest.raises(BlankTileError):
        game.set_blank_tile_letter(0, 6, "7", 0)


def test_locked_blank_cannot_change():
    game = make_game()
    game.place_tiles(
        [TilePlacement(0, BlankTile("C")), TilePlacement(1, Tile("A")), TilePlacement(2, Tile("T"))], 0,
    )
    result = game.process_word_claims([WordClaim(BOTTOM3, 0)], BOTTOM3, {"CAT"})
    assert result.valid
    assert not game.set_blank_tile_letter(0, 6, "B", 0)


# atomic turns

def test_play_turn_scores_refills_and_advances():
    game = make_game()
    drops = [Drop(0, 0), Drop(1, 1), Drop(2, 2)]
    result = game.play_turn(0, drops, [BOTTOM3], {"CAT"})

    assert result.valid
    assert result.total_score == 5
    assert result.placed == BOTTOM3
    state = game.get_state()
    assert state.players[0].score == 5
    assert len(state.players[0].rack) == 7
    assert game.bag_count() == 7
    assert state.current_player_id == 1
    assert state.board.owner(1, 6) == 0
    assert game.claimed_words_for_player(0)[0].word == "CAT"


def test_rejected_turn_leaves_game_untouched():
    game = make_game()
    before = game.get_state()
    result = game.play_turn(0, [Drop(0, 0), Drop(1, 1), Drop(3, 2)], [BOTTOM3], {"CAT"})
    assert not result.valid
    assert result.placed == []
    assert game.get_state() == before


def test_structural_error_leaves_game_untouched():
    game = make_game()
    before = game.get_state()
    with pytest.raises(InvalidColumn):
        game.play_turn(0, [Drop(0, 0), Drop(1, 9)], [BOTTOM3], {"CAT"})
    with pytest.raises(InvalidRackIndex):
        game.play_turn(0, [Drop(0, 0), Drop(0, 1)], [BOTTOM3], {"CAT"})
    with pytest.raises(InvalidRackIndex):
        game.play_turn(0, [Drop(8, 0)], [], {"CAT"})
    assert game.get_state() == before


def test_play_turn_out_of_turn():
    game = make_game()
    with pytest.raises(NotYourTurn):
        game.play_turn(1, [Drop(0, 0)], [], {"CAT"})
    with pytest.raises(PlayerNotFound):
        game.play_turn(7, [Drop(0, 0)], [], {"CAT"})
    with pytest.raises(NotYourTurn):
        game.play_turn(0, [Drop(0, 0)], [WordClaim(BOTTOM3, 1)], {"CAT"})


def test_play_turn_with_blank():
    game = make_game(racks=("?ATQZJX", "DOGEEEE"))
    result = game.play_turn(0, [Drop(0, 0, "c"), Drop(1, 1), Drop(2, 2)], [BOTTOM3], {"CAT"})
    assert result.valid
    assert result.total_score == 2
    blank = game.get_state().board.get(0, 6)
    assert blank.face == "C" and blank.locked


def test_letter_for_regular_tile_is_refused():
    game = make_game()
    with pytest.raises(BlankTileError):
        game.play_turn(0, [Drop(0, 0, "B")], [], {"CAT"})


def test_play_turn_can_win_and_end_the_game():
    game = make_game(target=5)
    result = game.play_turn(0, [Drop(0, 0), Drop(1, 1), Drop(2, 2)], [BOTTOM3], {"CAT"})
    assert result.winner_id == 0
    assert game.is_game_finished()
    with pytest.raises(GameOver):
        game.play_turn(1, [Drop(0, 3)], [], {"CAT"})


# reads

def test_reads_are_copies():
    game = make_game()
    game.current_player().rack.clear()
    game.get_player(0).score = 99
    game.get_state().players[0].rack.clear()
    assert len(game.get_player(0).rack) == 7
    assert game.get_player(0).score == 0
    assert game.get_player(5) is None


def test_players_by_turn_order():
    players = [Player(7, "Late", "#000", 1), Player(3, "Early", "#fff", 0)]
    game = GameManager(GameState(players=players, current_player_id=3, status="playing"))
    assert [p.id for p in game.players_by_turn_order()] == [3, 7]
    assert game.advance_turn() == 7
    assert game.advance_turn() == 3
    assert game.player_scores() == [(7, "Late", 0), (3, "Early", 0)]
