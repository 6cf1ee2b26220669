"""Long-algebraic move notation for the 6x5 board.

Move formats:
  Pa2-a3     Pawn from a2 to a3
  Nb1xc3     Capture: knight on b1 takes the piece on c3
  Pb5-b6=Q   Pawn reaches the last rank and becomes a queen

Game format (similar to PGN):
  [White "Human"]
  [Black "Minimax d3"]
  [Result "0-1"]

  1. Pa2-a3 Pb5-b4
  2. Nb1-c3 Pd5-d4
  ...
"""

from __future__ import annotations

import re
from typing import Optional

from minichess.game.board import PROMOTION_ROW, notation_to_rc, rc_to_notation
from minichess.game.state import Move, PieceType, Position

RESULTS = ("1-0", "0-1", "1/2-1/2", "*")


def move_to_notation(position: Position, move: Move) -> str:
    """Convert a move to notation.

    Args:
        position: The position BEFORE the move is applied.
        move: The move to convert.
    """
    piece = position.get_piece_at(*move.from_rc)
    target = position.get_piece_at(*move.to_rc)
    piece_char = piece.char if piece else "?"
    sep = "x" if target is not None else "-"
    text = f"{piece_char}{rc_to_notation(*move.from_rc)}{sep}{rc_to_notation(*move.to_rc)}"
    if piece is not None and piece.piece_type == PieceType.PAWN \
            and move.to_rc[0] == PROMOTION_ROW[piece.player]:
        text += "=Q"
    return text


_MOVE_RE = re.compile(r"^([PNBRQK]?)([a-e][1-6])([-x])([a-e][1-6])(=Q)?$")


def notation_to_move(text: str) -> Move:
    """Parse a notation string into a Move.

    The piece letter, capture marker and promotion suffix are informational;
    only the two squares make up the move.

    Raises:
        ValueError: If the notation is invalid.
    """
    text = text.strip()
    m = _MOVE_RE.match(text)
    if not m:
        raise ValueError(f"Invalid move notation: {text!r}")
    return Move(notation_to_rc(m.group(2)), notation_to_rc(m.group(4)))


def game_to_record(positions_and_moves: list[tuple[Position, Move]],
                   headers: Optional[dict[str, str]] = None,
                   result: Optional[str] = None) -> str:
    """Convert (position_before_move, move) pairs to a numbered game record."""
    lines = []

    if headers:
        for key, value in headers.items():
            lines.append(f'[{key} "{value}"]')
    if result:
        lines.append(f'[Result "{result}"]')
    if headers or result:
        lines.append("")

    move_strs = [move_to_notation(position, move) for position, move in positions_and_moves]

    # Numbered move pairs
    for i in range(0, len(move_strs), 2):
        pair = " ".join(move_strs[i:i + 2])
        lines.append(f"{i // 2 + 1}. {pair}")

    if result:
        lines.append(result)

    return "\n".join(lines)


def record_to_game(text: str) -> tuple[dict[str, str], list[Move], Optional[str]]:
    """Parse a game record.

    Returns:
        (headers, moves, result)

    Raises:
        ValueError: If a move token cannot be parsed.
    """
    headers: dict[str, str] = {}
    moves: list[Move] = []
    result: Optional[str] = None

    for line in text.strip().split("\n"):
        line = line.strip()
        if not line:
            continue

        if line.startswith("[") and line.endswith("]"):
            m = re.match(r'(\w+)\s+"([^"]*)"', line[1:-1])
            if m:
                headers[m.group(1)] = m.group(2)
            continue

        # Strip move number prefix
        line = re.sub(r"^\d+\.\s*", "", line)
        for token in line.split():
            if token in RESULTS:
                result = token
                continue
            moves.append(notation_to_move(token))

    if result is None:
        result = headers.get("Result")
    return headers, moves, result
