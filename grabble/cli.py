"""Terminal hot-seat mode for Grabble."""

from __future__ import annotations

import argparse
import logging
import random

from grabble.constants import DEFAULT_TARGET_SCORE, MAX_PLAYERS, MIN_PLAYERS
from grabble.dictionary import Dictionary
from grabble.errors import GrabbleError
from grabble.game import GameManager
from grabble.hints import HintSolver
from grabble.lines import Position
from grabble.move import Drop, TurnResult

HELP = """\
Commands:
  drop IDX COL [LETTER]     -- queue rack tile IDX into column COL (LETTER for a blank)
  claim X,Y X,Y X,Y ...     -- queue a word claim, cells in reading order
  play                      -- submit the queued drops and claims
  undo                      -- forget the queued drops and claims
  swap IDX [IDX ...]        -- swap rack tiles with the bag (ends your turn)
  hint [LEVEL]              -- hint for your rack, LEVEL 0-4
  pass                      -- end your turn
  show                      -- print the board, racks and scores
  quit                      -- stop the game now"""


def _show(game: GameManager) -> None:
    state = game.get_state()
    print()
    print(state.board)
    print()
    for p in game.players_by_turn_order():
        marker = ">" if p.id == state.current_player_id else " "
        rack = " ".join(f"{i}:{t.face}" for i, t in enumerate(p.rack))
        print(f" {marker} {p.name:<12} {p.score:>4} pts   rack {rack}")
    print(f"   Bag: {game.bag_count()} tiles   Target: {state.target_score}")


def _parse_cell(text: str) -> Position:
    x, y = text.split(",")
    return Position(int(x), int(y))


def _report(result: TurnResult) -> None:
    if result.valid:
        for r in result.submission.results:
            extra = f" ({', '.join(r.bonuses)})" if r.bonuses else ""
            print(f"  {r.word}: {r.score} pts{extra}")
        print(f"  Turn total: {result.total_score}")
        return
    for r in result.submission.results:
        if r.rejection is not None:
            print(f"  Rejected [{r.rejection.value}]: {r.error}")


def run_cli(game: GameManager, dictionary: Dictionary) -> None:
    """Play until someone wins, the tiles run out or a player quits."""
    solver = HintSolver(dictionary)
    drops: list[Drop] = []
    claims: list[list[Position]] = []

    print(HELP)
    _show(game)

    while not game.is_game_finished():
        if not game.can_continue_game():
            game.end_game()
            break

        player = game.current_player()
        try:
            inp = input(f"\n  {player.name}> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        parts = inp.split()
        if not parts:
            continue
        cmd, args = parts[0].lower(), parts[1:]

        try:
            if cmd == "quit":
                game.end_game()
            elif cmd == "show":
                _show(game)
            elif cmd == "help":
                print(HELP)
            elif cmd == "drop":
                letter = args[2].upper() if len(args) > 2 else None
                drops.append(Drop(int(args[0]), int(args[1]), letter))
                print(f"  Queued {drops[-1]!r}")
            elif cmd == "claim":
                claims.append([_parse_cell(a) for a in args])
                print(f"  Queued claim of {len(args)} cells")
            elif cmd == "undo":
                drops, claims = [], []
            elif cmd == "play":
                result = game.play_turn(player.id, drops, claims, dictionary)
                drops, claims = [], []
                _report(result)
                if result.valid:
                    _show(game)
            elif cmd == "swap":
                drawn = game.swap_tiles(player.id, [int(a) for a in args])
                print(f"  Drew {' '.join(t.face for t in drawn)}")
                drops, claims = [], []
                game.advance_turn()
            elif cmd == "hint":
                level = int(args[0]) if args else 0
                print(f"  {game.get_hint(player.id, solver, level).to_dict()}")
            elif cmd == "pass":
                drops, claims = [], []
                game.advance_turn()
            else:
                print("  Unknown command (try 'help')")
        except (GrabbleError, ValueError, IndexError) as e:
            print(f"  Error: {e}")

    winner = game.get_winner()
    print()
    for p in game.leaderboard():
        print(f"  {p.name:<12} {p.score:>4}")
    if winner is not None:
        print(f"\nWINNER: {winner.name} with {winner.score} points!")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Grabble -- drop tiles, claim words, race to the target score",
    )
    parser.add_argument("--dict", type=str, default=None,
                        help="Path to dictionary / word list file")
    parser.add_argument("--players", nargs="+", default=["Player 1", "Player 2"],
                        help=f"Player names ({MIN_PLAYERS}-{MAX_PLAYERS})")
    parser.add_argument("--target", type=int, default=DEFAULT_TARGET_SCORE,
                        help="Score needed to win")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed the tile bag shuffle")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug-level logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    print("GRABBLE")

    dictionary = Dictionary(args.dict)
    try:
        game = GameManager.create_new_game(
            len(args.players), args.players, args.target, rng=random.Random(args.seed),
        )
    except GrabbleError as e:
        parser.error(str(e))

    run_cli(game, dictionary)


if __name__ == "__main__":
    main()
