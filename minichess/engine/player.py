"""Automated player wrapping the minimax search."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from minichess.config import EngineConfig
from minichess.engine.search import SearchResult, search
from minichess.game.state import Move, Player, Position

logger = logging.getLogger("minichess.player")


class MinimaxPlayer:
    """Plays the best move found by iterative-deepening alpha-beta.

    ``difficulty`` is the maximum search depth. Searches can run on a
    background thread via ``get_move_async`` so that a UI loop keeps
    running; one worker thread means searches from the same player never
    overlap.
    """

    def __init__(self, difficulty: Optional[int] = None,
                 time_budget_ms: Optional[int] = None,
                 config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.difficulty = difficulty if difficulty is not None else self.config.search.max_depth
        self.time_budget_ms = time_budget_ms
        self.last_result: Optional[SearchResult] = None
        self._executor: Optional[ThreadPoolExecutor] = None

    def set_difficulty(self, depth: int):
        if depth < 1:
            raise ValueError(f"Difficulty must be >= 1, got {depth}")
        self.difficulty = depth

    @property
    def budget_ms(self) -> int:
        if self.time_budget_ms is not None:
            return self.time_budget_ms
        return self.config.search.time_budget_ms

    def get_move(self, position: Position, player: Player) -> Optional[Move]:
        """Search and return a move, or None if ``player`` has no legal moves."""
        self.last_result = search(
            position, player, self.difficulty,
            time_budget_ms=self.budget_ms,
            ply_cap=self.config.search.ply_cap,
        )
        if self.last_result.move is None:
            logger.info(f"{player.name} has no legal moves")
        else:
            logger.debug(f"{player.name} plays {self.last_result.move} "
                         f"(depth {self.last_result.depth}/{self.difficulty})")
        return self.last_result.move

    def get_move_async(self, position: Position, player: Player) -> Future:
        """Run ``get_move`` on the worker thread and return its Future."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="minichess-search")
        # The worker gets its own copy; the caller may keep mutating theirs
        return self._executor.submit(self.get_move, position.clone(), player)

    def close(self):
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self):
        return f"MinimaxPlayer(difficulty={self.difficulty}, budget_ms={self.budget_ms})"
