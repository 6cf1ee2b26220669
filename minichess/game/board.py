"""Board constants, the starting layout, square names and text rendering."""

from __future__ import annotations

ROWS = 6
COLS = 5

# Starting layout, row 0 first. Uppercase = White, lowercase = Black.
# White starts on rows 4-5 and advances toward row 0; Black mirrors it.
INITIAL_LAYOUT: tuple[str, ...] = (
    "rnqkb",
    "ppppp",
    ".....",
    ".....",
    "PPPPP",
    "RNQKB",
)

# Pawns on these rows may advance two squares
PAWN_START_ROW = {0: 4, 1: 1}
# Pawns reaching these rows promote
PROMOTION_ROW = {0: 0, 1: ROWS - 1}

CENTER_COL = COLS // 2

# Column labels for notation
COL_LABELS = "abcde"
# Rank labels, rank 1 is White's back rank (row 5)
ROW_LABELS = "123456"


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < ROWS and 0 <= col < COLS


def rc_to_notation(row: int, col: int) -> str:
    """Convert (row, col) to a square name like 'a1' (row 5, col 0)."""
    return COL_LABELS[col] + ROW_LABELS[ROWS - 1 - row]


def notation_to_rc(sq: str) -> tuple[int, int]:
    """Convert a square name like 'a1' to (row, col).

    Raises:
        ValueError: If the square is not on the board.
    """
    if len(sq) != 2 or sq[0] not in COL_LABELS or sq[1] not in ROW_LABELS:
        raise ValueError(f"Invalid square: {sq!r}")
    col = COL_LABELS.index(sq[0])
    row = ROWS - 1 - ROW_LABELS.index(sq[1])
    return (row, col)


def render_board(position, current_player: int | None = None) -> str:
    """Render a position as a text diagram.

    Args:
        position: A Position (anything with get_piece_at).
        current_player: Optional side to move (0=White, 1=Black).
    """
    lines = []

    if current_player is not None:
        player_name = "White" if current_player == 0 else "Black"
        lines.append(f"{player_name} to move")
        lines.append("")

    header = "    " + "   ".join(COL_LABELS)
    border = "  +" + "---+" * COLS

    lines.append(header)
    lines.append(border)
    for row in range(ROWS):
        rank = ROW_LABELS[ROWS - 1 - row]
        row_str = f"{rank} |"
        for col in range(COLS):
            piece = position.get_piece_at(row, col)
            row_str += f" {piece.symbol} |" if piece is not None else "   |"
        row_str += f" {rank}"
        lines.append(row_str)
        lines.append(border)
    lines.append(header)

    return "\n".join(lines)
