"""Move generation, check detection, move application and game-over tests.

Pseudo-legal generation follows the per-piece movement rules only. Legal
generation additionally rejects any move that leaves the mover's own king
attacked, which is decided by applying the move to a clone and asking
whether an enemy piece can reach the king. Attack queries use the
unfiltered generator so they never recurse into legality checks.

Kings can be captured. A missing king means that side has lost.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from minichess.game.board import PAWN_START_ROW, PROMOTION_ROW, in_bounds
from minichess.game.state import Move, Piece, PieceType, Player, Position

Cell = tuple[int, int]

KNIGHT_OFFSETS = [
    (-2, -1), (-2, 1), (-1, -2), (-1, 2),
    (1, -2), (1, 2), (2, -1), (2, 1),
]
DIAGONAL_DIRS = [(-1, -1), (-1, 1), (1, -1), (1, 1)]
ORTHOGONAL_DIRS = [(-1, 0), (1, 0), (0, -1), (0, 1)]
# All 8 directions, also the king's neighbourhood
ALL_DIRS = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
]


class GameStatus(Enum):
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    KING_CAPTURED = "king_captured"


def _forward(player: Player) -> int:
    return -1 if player == Player.WHITE else 1


def _gen_pawn_moves(position: Position, row: int, col: int, player: Player,
                    moves: list[Cell]):
    """Pawn: 1 forward onto an empty square, 2 from the start row, diagonal captures."""
    forward = _forward(player)

    r2 = row + forward
    if in_bounds(r2, col) and position.board[r2][col] is None:
        moves.append((r2, col))

        r3 = row + 2 * forward
        if row == PAWN_START_ROW[player] and position.get_piece_at(r3, col) is None:
            moves.append((r3, col))

    # Diagonal captures only
    for dc in (-1, 1):
        c2 = col + dc
        if not in_bounds(r2, c2):
            continue
        target = position.board[r2][c2]
        if target is not None and target.player != player:
            moves.append((r2, c2))


def _gen_step_moves(position: Position, row: int, col: int, player: Player,
                    offsets, moves: list[Cell]):
    """Single jump per offset (knight, king): empty or enemy-occupied targets."""
    for dr, dc in offsets:
        r2, c2 = row + dr, col + dc
        if not in_bounds(r2, c2):
            continue
        target = position.board[r2][c2]
        if target is None or target.player != player:
            moves.append((r2, c2))


def _gen_sliding_moves(position: Position, row: int, col: int, player: Player,
                       directions, moves: list[Cell]):
    """Ray-cast each direction until the edge or the first occupied square."""
    for dr, dc in directions:
        r2, c2 = row + dr, col + dc
        while in_bounds(r2, c2):
            target = position.board[r2][c2]
            if target is None:
                moves.append((r2, c2))
            else:
                if target.player != player:
                    moves.append((r2, c2))
                break  # Blocked
            r2 += dr
            c2 += dc


def pseudo_legal_moves(position: Position, cell: Cell) -> list[Cell]:
    """Destinations for the piece on ``cell`` by movement rules alone.

    Does not check whether the move exposes the mover's king. Returns an
    empty list for an empty or off-board square.
    """
    row, col = cell
    piece = position.get_piece_at(row, col)
    if piece is None:
        return []

    player = piece.player
    moves: list[Cell] = []
    pt = piece.piece_type

    if pt == PieceType.PAWN:
        _gen_pawn_moves(position, row, col, player, moves)
    elif pt == PieceType.KNIGHT:
        _gen_step_moves(position, row, col, player, KNIGHT_OFFSETS, moves)
    elif pt == PieceType.BISHOP:
        _gen_sliding_moves(position, row, col, player, DIAGONAL_DIRS, moves)
    elif pt == PieceType.ROOK:
        _gen_sliding_moves(position, row, col, player, ORTHOGONAL_DIRS, moves)
    elif pt == PieceType.QUEEN:
        _gen_sliding_moves(position, row, col, player, ALL_DIRS, moves)
    elif pt == PieceType.KING:
        _gen_step_moves(position, row, col, player, ALL_DIRS, moves)

    return moves


def legal_moves(position: Position, cell: Cell, player: Player,
                ignore_check: bool = False) -> list[Cell]:
    """Legal destinations for ``player``'s piece on ``cell``.

    Returns an empty list when the square is empty, off the board, or holds
    an enemy piece. With ``ignore_check`` the self-check filter is skipped
    and the pseudo-legal destinations are returned.
    """
    piece = position.get_piece_at(*cell)
    if piece is None or piece.player != player:
        return []

    destinations = pseudo_legal_moves(position, cell)
    if ignore_check:
        return destinations

    legal = []
    for to_rc in destinations:
        test_position, _ = apply_move(position, Move(cell, to_rc))
        if not is_in_check(test_position, player):
            legal.append(to_rc)
    return legal


def all_legal_moves(position: Position, player: Player) -> list[Move]:
    """All legal moves for a player, scanning squares in row-major order.

    The order is deterministic and is the search's tie-break order.
    """
    moves: list[Move] = []
    for row, col, _ in position.pieces(player):
        for to_rc in legal_moves(position, (row, col), player):
            moves.append(Move((row, col), to_rc))
    return moves


def is_square_attacked(position: Position, cell: Cell, by_player: Player) -> bool:
    """Check if any piece of ``by_player`` has ``cell`` among its pseudo-legal targets."""
    cell = tuple(cell)
    for row, col, _ in position.pieces(by_player):
        if cell in pseudo_legal_moves(position, (row, col)):
            return True
    return False


def is_in_check(position: Position, player: Player) -> bool:
    """Check if the given player's king is attacked."""
    king_pos = position.find_king(player)
    if king_pos is None:
        return False  # King already captured
    return is_square_attacked(position, king_pos, player.opponent)


def _make_move(position: Position, move: Move) -> Optional[Piece]:
    """Apply a move to ``position`` in place and return the captured piece.

    A pawn arriving on its promotion row becomes a queen.
    """
    fr, fc = move.from_rc
    tr, tc = move.to_rc
    piece = position.get_piece_at(fr, fc)
    captured = position.get_piece_at(tr, tc)

    position.set_piece(tr, tc, piece)
    position.set_piece(fr, fc, None)

    if piece is not None and piece.piece_type == PieceType.PAWN \
            and tr == PROMOTION_ROW[piece.player]:
        position.set_piece(tr, tc, Piece(PieceType.QUEEN, piece.player))

    return captured


def apply_move(position: Position, move: Move) -> tuple[Position, Optional[Piece]]:
    """Apply a move to a copy of ``position``.

    Returns:
        (new_position, captured_piece_or_None). The input is not modified.
    """
    new_position = position.clone()
    captured = _make_move(new_position, move)
    return new_position, captured


def is_game_over(position: Position) -> bool:
    """The game is over once either king has been captured."""
    return position.find_king(Player.WHITE) is None or \
        position.find_king(Player.BLACK) is None


def get_winner(position: Position) -> Optional[Player]:
    """Return the side whose opponent has lost its king, or None."""
    if position.find_king(Player.BLACK) is None:
        return Player.WHITE
    if position.find_king(Player.WHITE) is None:
        return Player.BLACK
    return None


def game_status(position: Position, player_to_move: Player) -> GameStatus:
    """Classify the position for the side about to move."""
    if is_game_over(position):
        return GameStatus.KING_CAPTURED

    in_check = is_in_check(position, player_to_move)
    has_moves = bool(all_legal_moves(position, player_to_move))

    if not has_moves:
        return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
    if in_check:
        return GameStatus.CHECK
    return GameStatus.ONGOING
