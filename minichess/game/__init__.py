"""MiniChess game rules: position, move generation, notation."""

from minichess.game.state import Position, Player, PieceType, Piece, Move
from minichess.game.rules import (
    GameStatus, legal_moves, pseudo_legal_moves, all_legal_moves,
    is_square_attacked, is_in_check, apply_move, is_game_over, get_winner, game_status,
)
from minichess.game.board import ROWS, COLS, INITIAL_LAYOUT, render_board
from minichess.game.notation import move_to_notation, notation_to_move, game_to_record, record_to_game

__all__ = [
    "Position", "Player", "PieceType", "Piece", "Move",
    "GameStatus", "legal_moves", "pseudo_legal_moves", "all_legal_moves",
    "is_square_attacked", "is_in_check", "apply_move", "is_game_over", "get_winner",
    "game_status",
    "ROWS", "COLS", "INITIAL_LAYOUT", "render_board",
    "move_to_notation", "notation_to_move", "game_to_record", "record_to_game",
]
