#!/usr/bin/env python3
"""Measure nodes and time per depth on a fixed set of positions.

Re-run after changing the evaluator or the search to compare node counts
and move choices at equal depth.

Usage:
    python scripts/bench_search.py [--max-depth 3] [--budget-ms 60000]
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from minichess.engine.search import search
from minichess.game.notation import move_to_notation
from minichess.game.state import Player, Position

# Fixed positions, row 0 first; same set for every comparison
POSITIONS = [
    ("Start", Player.WHITE, Position.initial().to_rows()),
    ("Open center", Player.BLACK, [
        "rnqkb",
        "pp.pp",
        ".....",
        "..p..",
        "PP.PP",
        "RNQKB",
    ]),
    ("Queen raid", Player.WHITE, [
        "r.qkb",
        "pp.pp",
        "..n..",
        ".Q...",
        "PP.PP",
        "RN.KB",
    ]),
    ("Pawn race", Player.WHITE, [
        "...k.",
        "P....",
        ".....",
        ".....",
        "....p",
        ".K...",
    ]),
]


def main():
    parser = argparse.ArgumentParser(description="Benchmark the MiniChess search")
    parser.add_argument("--max-depth", type=int, default=3)
    parser.add_argument("--budget-ms", type=int, default=60000)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    print(f"{'Position':<12} {'Depth':>5} {'Move':<10} {'Score':>7} {'Nodes':>9} {'Time(ms)':>9}")
    print("-" * 58)

    for label, player, rows in POSITIONS:
        position = Position.from_rows(rows)
        for depth in range(1, args.max_depth + 1):
            result = search(position, player, depth, time_budget_ms=args.budget_ms)
            move = move_to_notation(position, result.move) if result.move else "(none)"
            score = result.score if result.score is not None else 0
            print(f"{label:<12} {depth:>5} {move:<10} {score:>7} "
                  f"{result.nodes:>9,} {result.elapsed_ms:>9,.0f}")


if __name__ == "__main__":
    main()
