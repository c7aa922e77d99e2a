"""Flat save / replication record for a game.

The models mirror what a persistence or network layer stores: plain
camelCase fields, no behaviour.  ``dump_state`` / ``load_state`` convert
between them and the engine's ``GameState``; a round trip reproduces the
state exactly (owners, blank letters and locks, bag and rack order).
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from grabble.board import Board
from grabble.constants import BOARD_SIZE
from grabble.lines import Position
from grabble.move import ClaimedWord
from grabble.state import GameState, Player
from grabble.tiles import AnyTile, BlankTile, Tile

GameStatus = Literal['waiting', 'playing', 'finished']


class TileModel(BaseModel):
    letter: str = Field(..., min_length=1, max_length=1)
    points: int = 0
    blankLetter: Optional[str] = None
    isBlankLocked: Optional[bool] = None


class CellModel(TileModel):
    playerId: Optional[int] = None


class PositionModel(BaseModel):
    x: int = Field(..., ge=0, lt=BOARD_SIZE)
    y: int = Field(..., ge=0, lt=BOARD_SIZE)


class PlayerModel(BaseModel):
    id: int
    name: str
    color: str
    score: int = Field(0, ge=0)
    rack: List[TileModel] = []
    turnOrder: int


class ClaimedWordModel(BaseModel):
    word: str
    positions: List[PositionModel]
    playerId: int
    score: int
    bonuses: List[str] = []


class GameStateModel(BaseModel):
    board: List[List[Optional[CellModel]]]
    players: List[PlayerModel]
    currentPlayerId: int
    tileBag: List[TileModel] = []
    claimedWords: List[ClaimedWordModel] = []
    targetScore: int = Field(..., gt=0)
    gameStatus: GameStatus = 'waiting'
    winnerId: Optional[int] = None


# engine -> record

def _tile_fields(tile: AnyTile) -> dict:
    if tile.is_blank:
        return {
            'letter': tile.letter,
            'points': tile.points,
            'blankLetter': tile.assigned,
            'isBlankLocked': tile.locked,
        }
    return {'letter': tile.letter, 'points': tile.points}


def to_model(state: GameState) -> GameStateModel:
    board = []
    for y in range(BOARD_SIZE):
        row = []
        for x in range(BOARD_SIZE):
            tile = state.board.cells[y][x]
            if tile is None:
                row.append(None)
            else:
                row.append(CellModel(playerId=state.board.owners[y][x], **_tile_fields(tile)))
        board.append(row)

    return GameStateModel(
        board=board,
        players=[
            PlayerModel(
                id=p.id,
                name=p.name,
                color=p.color,
                score=p.score,
                rack=[TileModel(**_tile_fields(t)) for t in p.rack],
                turnOrder=p.turn_order,
            )
            for p in state.players
        ],
        currentPlayerId=state.current_player_id,
        tileBag=[TileModel(**_tile_fields(t)) for t in state.tile_bag],
        claimedWords=[
            ClaimedWordModel(
                word=cw.word,
                positions=[PositionModel(x=p.x, y=p.y) for p in cw.positions],
                playerId=cw.player_id,
                score=cw.score,
                bonuses=list(cw.bonuses),
            )
            for cw in state.claimed_words
        ],
        targetScore=state.target_score,
        gameStatus=state.status,
        winnerId=state.winner_id,
    )


# record -> engine

def _tile(model: TileModel) -> AnyTile:
    if model.blankLetter is not None or model.isBlankLocked is not None or model.letter == BlankTile.letter:
        return BlankTile(model.blankLetter, bool(model.isBlankLocked))
    return Tile(model.letter, model.points)


def from_model(model: GameStateModel) -> GameState:
    if len(model.board) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in model.board):
        raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}")

    board = Board()
    for y, row in enumerate(model.board):
        for x, cell in enumerate(row):
            if cell is not None:
                board.cells[y][x] = _tile(cell)
                board.owners[y][x] = cell.playerId

    return GameState(
        board=board,
        players=[
            Player(
                p.id, p.name, p.color, p.turnOrder,
                score=p.score,
                rack=[_tile(t) for t in p.rack],
            )
            for p in model.players
        ],
        current_player_id=model.currentPlayerId,
        tile_bag=[_tile(t) for t in model.tileBag],
        claimed_words=[
            ClaimedWord(
                cw.word,
                [Position(p.x, p.y) for p in cw.positions],
                cw.playerId,
                cw.score,
                cw.bonuses,
            )
            for cw in model.claimedWords
        ],
        target_score=model.targetScore,
        status=model.gameStatus,
        winner_id=model.winnerId,
    )


# public helpers

def dump_state(state: GameState) -> dict:
    return to_model(state).model_dump()


def load_state(data: dict) -> GameState:
    """Rebuild a ``GameState``; raises pydantic's ``ValidationError`` on a bad record."""
    return from_model(GameStateModel.model_validate(data))


def state_to_json(state: GameState) -> str:
    return to_model(state).model_dump_json()


def state_from_json(data: str) -> GameState:
    return from_model(GameStateModel.model_validate_json(data))
