"""Static evaluation of MiniChess positions.

Scores are in centipawns from a fixed perspective: positive favors Black,
negative favors White. The search maximizes for Black and minimizes for
White, whatever side is to move.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from minichess.game.board import CENTER_COL
from minichess.game.rules import is_in_check
from minichess.game.state import PieceType, Player, Position

# Side whose advantage is counted as positive
MAXIMIZING_PLAYER = Player.BLACK

PIECE_VALUES = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20000,
}

CENTER_BONUS = 10
CHECK_BONUS = 50

# Piece-square tables in White's orientation (row 0 is White's promotion
# row). Black reads the same tables flipped vertically.
PAWN_TABLE = np.array([
    [0, 0, 0, 0, 0],
    [50, 50, 50, 50, 50],
    [10, 10, 20, 10, 10],
    [5, 5, 10, 5, 5],
    [0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0],
], dtype=np.int32)

KNIGHT_TABLE = np.array([
    [-50, -40, -30, -40, -50],
    [-40, -20, 0, -20, -40],
    [-30, 5, 10, 5, -30],
    [-30, 5, 10, 5, -30],
    [-40, -20, 0, -20, -40],
    [-50, -40, -30, -40, -50],
], dtype=np.int32)

KING_TABLE = np.array([
    [-30, -40, -40, -40, -30],
    [-30, -40, -40, -40, -30],
    [-30, -40, -40, -40, -30],
    [-30, -40, -40, -40, -30],
    [-20, -30, -30, -30, -20],
    [20, 20, 0, 0, 20],
], dtype=np.int32)

# Bishops, rooks and queens get no positional term
POSITION_TABLES = {
    Player.WHITE: {
        PieceType.PAWN: PAWN_TABLE,
        PieceType.KNIGHT: KNIGHT_TABLE,
        PieceType.KING: KING_TABLE,
    },
    Player.BLACK: {
        PieceType.PAWN: np.flipud(PAWN_TABLE),
        PieceType.KNIGHT: np.flipud(KNIGHT_TABLE),
        PieceType.KING: np.flipud(KING_TABLE),
    },
}


@dataclass
class PositionEval:
    """Evaluation of a position, split by term (positive favors Black)."""
    score: int
    material: int
    positional: int
    center: int
    check: int


def _sign(player: Player) -> int:
    return 1 if player == MAXIMIZING_PLAYER else -1


def evaluate_breakdown(position: Position) -> PositionEval:
    """Evaluate a position and report each term separately."""
    material = 0
    positional = 0
    center = 0

    for row, col, piece in position.pieces():
        sign = _sign(piece.player)
        material += sign * PIECE_VALUES[piece.piece_type]

        table = POSITION_TABLES[piece.player].get(piece.piece_type)
        if table is not None:
            positional += sign * int(table[row, col])

        if col == CENTER_COL:
            center += sign * CENTER_BONUS

    check = 0
    if is_in_check(position, MAXIMIZING_PLAYER):
        check -= CHECK_BONUS
    if is_in_check(position, MAXIMIZING_PLAYER.opponent):
        check += CHECK_BONUS

    return PositionEval(
        score=material + positional + center + check,
        material=material,
        positional=positional,
        center=center,
        check=check,
    )


def evaluate(position: Position) -> int:
    """Static score of a position (positive favors Black)."""
    return evaluate_breakdown(position).score


def score_for(position: Position, player: Player) -> int:
    """Static score from ``player``'s point of view (positive = good for them)."""
    return _sign(player) * evaluate(position)
