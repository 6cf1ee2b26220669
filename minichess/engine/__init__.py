"""MiniChess engine: static evaluation and alpha-beta search."""

from minichess.engine.evaluation import evaluate, evaluate_breakdown, score_for, MAXIMIZING_PLAYER
from minichess.engine.search import (
    SearchContext, SearchResult, minimax, search, best_move, MATE_SCORE,
)
from minichess.engine.player import MinimaxPlayer

__all__ = [
    "evaluate", "evaluate_breakdown", "score_for", "MAXIMIZING_PLAYER",
    "SearchContext", "SearchResult", "minimax", "search", "best_move", "MATE_SCORE",
    "MinimaxPlayer",
]
