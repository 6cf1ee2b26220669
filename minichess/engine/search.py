"""Iterative-deepening minimax with alpha-beta pruning under a time budget.

Value convention: scores come from ``evaluate`` and are positive when Black
is better. Black is the maximizing side and White the minimizing side at
every node, regardless of who moves at the root.

Time handling is cooperative. A deadline is fixed when the top-level search
starts and every node checks it: once it has passed, nodes return their
static evaluation instead of expanding, so the search unwinds quickly. A
depth that was running when the deadline passed is discarded and the move
from the last fully searched depth is kept.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Optional

from minichess.engine.evaluation import MAXIMIZING_PLAYER, evaluate
from minichess.game.board import rc_to_notation
from minichess.game.rules import all_legal_moves, apply_move, is_game_over, is_in_check
from minichess.game.state import Move, Player, Position

logger = logging.getLogger("minichess.search")

MATE_SCORE = 100000
DEFAULT_TIME_BUDGET_MS = 5000
DEFAULT_PLY_CAP = 100


@dataclass
class SearchContext:
    """Per-search bookkeeping threaded through the recursion.

    Nothing here is shared between searches, so concurrent searches on
    different positions do not interfere.
    """
    deadline: float  # time.monotonic() value, math.inf for no limit
    ply_cap: int = DEFAULT_PLY_CAP
    nodes: int = 0
    start_time: float = field(default_factory=time.monotonic)

    @classmethod
    def start(cls, time_budget_ms: Optional[float] = DEFAULT_TIME_BUDGET_MS,
              ply_cap: int = DEFAULT_PLY_CAP) -> SearchContext:
        """Create a context whose deadline is ``time_budget_ms`` from now (None = no limit)."""
        now = time.monotonic()
        deadline = math.inf if time_budget_ms is None else now + time_budget_ms / 1000.0
        return cls(deadline=deadline, ply_cap=ply_cap, start_time=now)

    def timed_out(self) -> bool:
        return time.monotonic() >= self.deadline

    def elapsed_ms(self) -> float:
        return (time.monotonic() - self.start_time) * 1000.0


@dataclass
class SearchResult:
    """Outcome of a top-level search."""
    move: Optional[Move]  # None when the side to move has no legal moves
    score: Optional[int]  # Score of the last completed depth, None if none completed
    depth: int  # Last completed depth
    nodes: int
    elapsed_ms: float
    timed_out: bool


def _player_for(maximizing: bool) -> Player:
    return MAXIMIZING_PLAYER if maximizing else MAXIMIZING_PLAYER.opponent


def minimax(position: Position, depth: int, alpha: float, beta: float,
            maximizing: bool, ply: int, ctx: SearchContext) -> float:
    """Alpha-beta minimax value of ``position``.

    Args:
        position: Position to score. Never modified.
        depth: Remaining depth in plies.
        alpha: Best value the maximizer can already guarantee.
        beta: Best value the minimizer can already guarantee.
        maximizing: True when Black is to move at this node.
        ply: Distance from the root, used for the runaway cap and mate distance.
        ctx: Search context holding the deadline and node counter.
    """
    if ctx.timed_out():
        return evaluate(position)

    ctx.nodes += 1

    if depth <= 0 or is_game_over(position) or ply > ctx.ply_cap:
        return evaluate(position)

    player = _player_for(maximizing)
    moves = all_legal_moves(position, player)

    if not moves:
        if is_in_check(position, player):
            # Checkmate: nearer mates score further from zero
            return -MATE_SCORE + ply if maximizing else MATE_SCORE - ply
        return 0  # Stalemate

    best: Optional[float] = None
    for move in moves:
        if ctx.timed_out():
            break

        child, _ = apply_move(position, move)
        value = minimax(child, depth - 1, alpha, beta, not maximizing, ply + 1, ctx)

        if maximizing:
            if best is None or value > best:
                best = value
            alpha = max(alpha, value)
        else:
            if best is None or value < best:
                best = value
            beta = min(beta, value)

        if beta <= alpha:
            break

    if best is None:
        # Deadline passed before any child was searched
        return evaluate(position)
    return best


def search_depth(position: Position, player: Player, moves: list[Move], depth: int,
                 ctx: SearchContext) -> tuple[Optional[Move], Optional[float]]:
    """Score every root move at a fixed depth and return the best one.

    Each root move gets a full window, so its value is exact. Ties go to
    the move generated first. Returns (None, None) if the deadline passed
    before the first move was scored.
    """
    maximizing = player == MAXIMIZING_PLAYER
    best_move: Optional[Move] = None
    best_value: Optional[float] = None

    for move in moves:
        if ctx.timed_out():
            logger.info(f"Early stopping at depth {depth}, nodes: {ctx.nodes}")
            break

        child, _ = apply_move(position, move)
        value = minimax(child, depth - 1, -math.inf, math.inf, not maximizing, 1, ctx)

        if best_value is None or (value > best_value if maximizing else value < best_value):
            best_value = value
            best_move = move

    return best_move, best_value


def search(position: Position, player: Player, max_depth: int,
           time_budget_ms: Optional[float] = DEFAULT_TIME_BUDGET_MS,
           ply_cap: int = DEFAULT_PLY_CAP) -> SearchResult:
    """Iterative deepening from depth 1 to ``max_depth`` within the time budget.

    Always returns a move when one exists: if no depth completes in time,
    the first generated move is returned.
    """
    ctx = SearchContext.start(time_budget_ms, ply_cap)
    moves = all_legal_moves(position, player)

    if not moves:
        logger.info(f"No legal moves for {player.name}")
        return SearchResult(None, None, 0, ctx.nodes, ctx.elapsed_ms(), False)

    best_move = moves[0]
    best_score: Optional[float] = None
    completed = 0

    depth = 1
    while depth <= max_depth and not ctx.timed_out():
        depth_move, depth_score = search_depth(position, player, moves, depth, ctx)

        # A depth cut short by the deadline is unreliable
        if depth_move is not None and not ctx.timed_out():
            best_move, best_score, completed = depth_move, depth_score, depth
            logger.debug(
                f"depth {depth} score {depth_score} nodes {ctx.nodes} "
                f"time {ctx.elapsed_ms():.0f}ms best "
                f"{rc_to_notation(*best_move.from_rc)}{rc_to_notation(*best_move.to_rc)}"
            )

        depth += 1

    timed_out = ctx.timed_out()
    logger.info(
        f"Search completed: {ctx.nodes} nodes, {ctx.elapsed_ms():.0f}ms, "
        f"final depth: {completed}" + (" (deadline reached)" if timed_out else "")
    )

    score = int(best_score) if best_score is not None else None
    return SearchResult(best_move, score, completed, ctx.nodes, ctx.elapsed_ms(), timed_out)


def best_move(position: Position, player: Player, max_depth: int,
              time_budget_ms: Optional[float] = DEFAULT_TIME_BUDGET_MS) -> Optional[Move]:
    """Pick a move for ``player``, or None if they have no legal moves.

    A None result is checkmate when ``is_in_check(position, player)`` is
    true and stalemate otherwise.
    """
    return search(position, player, max_depth, time_budget_ms).move
