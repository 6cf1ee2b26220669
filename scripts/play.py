#!/usr/bin/env python3
"""Interactive CLI for playing MiniChess.

Usage:
    python scripts/play.py                       # Human vs Human
    python scripts/play.py --vs-ai 3             # Human (White) vs engine at depth 3
    python scripts/play.py --vs-ai 3 --black     # Human plays Black
    python scripts/play.py --ai-vs-ai 2 3        # Engine vs engine
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from minichess.config import load_config
from minichess.engine.evaluation import evaluate
from minichess.engine.player import MinimaxPlayer
from minichess.game.board import render_board
from minichess.game.notation import game_to_record, move_to_notation, notation_to_move
from minichess.game.rules import GameStatus, all_legal_moves, apply_move, game_status, get_winner
from minichess.game.state import Player, Position

UNDO = "undo"


def display_position(position: Position, player: Player):
    """Print the board and the static score."""
    print(render_board(position, current_player=int(player)))
    print(f"Evaluation: {evaluate(position):+d} (positive favors Black)")
    print()


def human_turn(position: Position, player: Player):
    """Get a human move. Returns a Move, UNDO, or None to quit."""
    moves = all_legal_moves(position, player)
    player_name = "White" if player == Player.WHITE else "Black"
    print(f"\n{player_name}'s turn. Legal moves:")
    for i, move in enumerate(moves):
        print(f"  {i+1:3d}. {move_to_notation(position, move)}")
    print(f"\nEnter move number (1-{len(moves)}), notation, 'u' to undo, or 'q' to quit:")

    while True:
        inp = input("> ").strip()
        if inp.lower() == "q":
            return None
        if inp.lower() == "u":
            return UNDO

        try:
            idx = int(inp) - 1
            if 0 <= idx < len(moves):
                return moves[idx]
            print(f"Invalid number. Enter 1-{len(moves)}.")
            continue
        except ValueError:
            pass

        try:
            parsed = notation_to_move(inp)
        except ValueError:
            print("Invalid input. Enter a move number or notation like a2-a3.")
            continue
        if parsed in moves:
            return parsed
        print("That move is not legal in this position.")


def play_game(white_depth: int | None = None, black_depth: int | None = None,
              config_path: str | None = None):
    """Play a full game. A depth of None means a human plays that side."""
    config = load_config(config_path)
    players = {
        Player.WHITE: MinimaxPlayer(white_depth, config=config) if white_depth else None,
        Player.BLACK: MinimaxPlayer(black_depth, config=config) if black_depth else None,
    }

    print("=" * 40)
    print("  MiniChess 6x5")
    print("=" * 40)
    for side, engine in players.items():
        print(f"  {side.name.title()}: {engine if engine else 'human'}")
    print("=" * 40)

    position = Position.initial()
    player = Player.WHITE
    # (position_before, move) pairs; positions double as undo snapshots
    history = []

    while True:
        status = game_status(position, player)
        if status in (GameStatus.KING_CAPTURED, GameStatus.CHECKMATE, GameStatus.STALEMATE):
            break

        display_position(position, player)
        if status == GameStatus.CHECK:
            print(f"{player.name.title()} is in check!")

        engine = players[player]
        if engine is None:
            move = human_turn(position, player)
            if move is None:
                print("Game aborted.")
                return
            if move == UNDO:
                # Step back to the last human decision
                steps = 1 if all(players.values()) or not any(players.values()) else 2
                for _ in range(min(steps, len(history))):
                    position, _ = history.pop()
                    player = player.opponent
                continue
        else:
            move = engine.get_move(position, player)
            result = engine.last_result
            print(f"{player.name.title()} (engine) plays: {move_to_notation(position, move)} "
                  f"[depth {result.depth}, {result.nodes} nodes, {result.elapsed_ms:.0f}ms]")

        history.append((position, move))
        position, captured = apply_move(position, move)
        if captured is not None:
            print(f"Captured {captured.symbol}")
        player = player.opponent

    display_position(position, player)
    winner = get_winner(position)
    if status == GameStatus.CHECKMATE:
        winner = player.opponent
        print(f"Checkmate! {winner.name.title()} wins!")
    elif status == GameStatus.STALEMATE:
        print("Stalemate - draw!")
    else:
        print(f"{winner.name.title()} wins! {winner.opponent.name.title()} king captured.")

    result = "1/2-1/2" if winner is None else ("1-0" if winner == Player.WHITE else "0-1")
    print()
    print(game_to_record(history, result=result))


def main():
    parser = argparse.ArgumentParser(description="Play MiniChess")
    parser.add_argument("--vs-ai", type=int, metavar="DEPTH",
                        help="Play against the engine searching to DEPTH")
    parser.add_argument("--black", action="store_true",
                        help="With --vs-ai, play Black instead of White")
    parser.add_argument("--ai-vs-ai", type=int, nargs=2, metavar=("W_DEPTH", "B_DEPTH"),
                        help="Watch engine vs engine")
    parser.add_argument("--config", type=str, default="configs/engine.yaml")
    args = parser.parse_args()

    config = load_config(args.config)
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.ai_vs_ai:
        play_game(args.ai_vs_ai[0], args.ai_vs_ai[1], args.config)
    elif args.vs_ai:
        if args.black:
            play_game(white_depth=args.vs_ai, config_path=args.config)
        else:
            play_game(black_depth=args.vs_ai, config_path=args.config)
    else:
        play_game(config_path=args.config)


if __name__ == "__main__":
    main()
