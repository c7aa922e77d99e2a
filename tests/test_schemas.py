import json
import random

import pytest
from pydantic import ValidationError

from grabble.game import GameManager
from grabble.move import Drop
from grabble.schemas import dump_state, load_state, state_from_json, state_to_json
from grabble.state import GameState
from grabble.tiles import BlankTile, Tile


def played_game():
    """A seeded game after one scored turn that used a blank."""
    game = GameManager.create_new_game(2, ["Ann", "Bob"], target_score=50, rng=random.Random(11))
    state = game.get_state()
    state.players[0].rack = [BlankTile(), Tile("A"), Tile("T"), Tile("E"), Tile("Q"), Tile("Z"), Tile("J")]
    state.tile_bag.append(BlankTile("S"))
    game = GameManager.load_game(state, rng=random.Random(11))
    bottom = [(0, 6), (1, 6), (2, 6)]
    result = game.play_turn(0, [Drop(0, 0, "C"), Drop(1, 1), Drop(2, 2)], [bottom], {"CAT"})
    assert result.valid
    return game


def test_round_trip_is_exact():
    state = played_game().get_state()
    again = state_from_json(state_to_json(state))
    assert again == state
    assert again.board.get(0, 6).locked
    assert again.board.owner(0, 6) == 0
    assert [t.letter for t in again.tile_bag] == [t.letter for t in state.tile_bag]


def test_dict_round_trip():
    state = played_game().get_state()
    assert load_state(dump_state(state)) == state


def test_record_uses_flat_camel_case_fields():
    data = json.loads(state_to_json(played_game().get_state()))
    assert set(data) == {
        "board", "players", "currentPlayerId", "tileBag", "claimedWords",
        "targetScore", "gameStatus", "winnerId",
    }
    cell = data["board"][6][0]
    assert cell == {"letter": " ", "points": 0, "playerId": 0, "blankLetter": "C", "isBlankLocked": True}
    assert data["board"][0][0] is None
    assert data["claimedWords"][0]["word"] == "CAT"
    assert data["claimedWords"][0]["positions"][0] == {"x": 0, "y": 6}
    assert data["players"][0]["turnOrder"] == 0
    assert data["gameStatus"] == "playing"


def test_manager_serialize_and_resume():
    game = played_game()
    resumed = GameManager.deserialize(game.serialize())
    assert resumed.get_state() == game.get_state()
    assert resumed.current_player().id == 1


def test_empty_state_round_trip():
    state = GameState(target_score=10)
    assert load_state(dump_state(state)) == state


def test_bad_record_raises():
    data = dump_state(played_game().get_state())
    del data["targetScore"]
    with pytest.raises(ValidationError):
        load_state(data)

    data = dump_state(played_game().get_state())
    data["gameStatus"] = "paused"
    with pytest.raises(ValidationError):
        load_state(data)
