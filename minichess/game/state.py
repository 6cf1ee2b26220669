"""Position representation for 6x5 MiniChess."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from minichess.game.board import COLS, INITIAL_LAYOUT, ROWS, in_bounds


class Player(IntEnum):
    WHITE = 0
    BLACK = 1

    @property
    def opponent(self) -> Player:
        return Player(1 - self)


class PieceType(IntEnum):
    PAWN = 0
    KNIGHT = 1
    BISHOP = 2
    ROOK = 3
    QUEEN = 4
    KING = 5


# Map character codes to PieceType
PIECE_CHARS = {
    "P": PieceType.PAWN,
    "N": PieceType.KNIGHT,
    "B": PieceType.BISHOP,
    "R": PieceType.ROOK,
    "Q": PieceType.QUEEN,
    "K": PieceType.KING,
}
PIECE_NAMES = {v: k for k, v in PIECE_CHARS.items()}


@dataclass
class Piece:
    piece_type: PieceType
    player: Player

    @property
    def char(self) -> str:
        return PIECE_NAMES[self.piece_type]

    @property
    def symbol(self) -> str:
        """Board letter: uppercase for White, lowercase for Black."""
        return self.char if self.player == Player.WHITE else self.char.lower()

    @classmethod
    def from_symbol(cls, symbol: str) -> Piece:
        piece_type = PIECE_CHARS[symbol.upper()]
        player = Player.WHITE if symbol.isupper() else Player.BLACK
        return cls(piece_type, player)

    def __eq__(self, other):
        if not isinstance(other, Piece):
            return NotImplemented
        return self.piece_type == other.piece_type and self.player == other.player

    def __hash__(self):
        return hash((self.piece_type, self.player))


@dataclass
class Move:
    """Move a piece from one square to another.

    Promotion is not part of the move: a pawn landing on its last row
    becomes a queen when the move is applied.
    """
    from_rc: tuple[int, int]
    to_rc: tuple[int, int]

    def __eq__(self, other):
        if not isinstance(other, Move):
            return NotImplemented
        return self.from_rc == other.from_rc and self.to_rc == other.to_rc

    def __hash__(self):
        return hash(("move", self.from_rc, self.to_rc))


class Position:
    """Piece placement on the 6x5 grid.

    Positions are treated as immutable once handed to the search: every
    trial move is made on a clone.
    """

    def __init__(self, board: Optional[list[list[Optional[Piece]]]] = None):
        if board is None:
            board = [[None] * COLS for _ in range(ROWS)]
        self.board: list[list[Optional[Piece]]] = board

    @classmethod
    def initial(cls) -> Position:
        """Return the starting position."""
        return cls.from_rows(INITIAL_LAYOUT)

    @classmethod
    def empty(cls) -> Position:
        return cls()

    @classmethod
    def from_rows(cls, rows) -> Position:
        """Build a position from text rows like ``"rnqkb"`` ('.' = empty).

        Raises:
            ValueError: If the rows do not describe a 6x5 board,
                or a color has more than one king.
        """
        rows = list(rows)
        if len(rows) != ROWS or any(len(r) != COLS for r in rows):
            raise ValueError(f"Expected {ROWS} rows of {COLS} squares, got {rows!r}")
        position = cls()
        for row, text in enumerate(rows):
            for col, ch in enumerate(text):
                if ch == ".":
                    continue
                if ch.upper() not in PIECE_CHARS:
                    raise ValueError(f"Unknown piece {ch!r} at row {row}, col {col}")
                position.board[row][col] = Piece.from_symbol(ch)
        position._check_kings()
        return position

    def to_rows(self) -> list[str]:
        return ["".join(cell.symbol if cell is not None else "." for cell in row)
                for row in self.board]

    def clone(self) -> Position:
        """Return a full copy sharing no mutable state."""
        new = Position.__new__(Position)
        new.board = [[cell if cell is None else Piece(cell.piece_type, cell.player)
                      for cell in row] for row in self.board]
        return new

    def get_piece_at(self, row: int, col: int) -> Optional[Piece]:
        """Get piece at position, or None (also when off the board)."""
        if in_bounds(row, col):
            return self.board[row][col]
        return None

    def set_piece(self, row: int, col: int, piece: Optional[Piece]):
        """Place (or clear) a square. Writes off the board are ignored."""
        if in_bounds(row, col):
            self.board[row][col] = piece

    def find_king(self, player: Player) -> Optional[tuple[int, int]]:
        """Find the king's square for a player, or None once captured."""
        for row in range(ROWS):
            for col in range(COLS):
                p = self.board[row][col]
                if p is not None and p.player == player and p.piece_type == PieceType.KING:
                    return (row, col)
        return None

    def _check_kings(self):
        """Raise ValueError if either color has more than one king."""
        for player in Player:
            kings = [(row, col) for row, col, p in self.pieces(player)
                     if p.piece_type == PieceType.KING]
            if len(kings) > 1:
                raise ValueError(f"{player.name} has {len(kings)} kings at {kings}")

    def pieces(self, player: Optional[Player] = None):
        """Yield (row, col, piece) in row-major order, optionally for one side."""
        for row in range(ROWS):
            for col in range(COLS):
                p = self.board[row][col]
                if p is not None and (player is None or p.player == player):
                    yield row, col, p

    def get_board_tuple(self) -> tuple:
        """Return a hashable representation of the board."""
        return tuple(
            None if cell is None else (cell.piece_type, cell.player)
            for row in self.board for cell in row
        )

    def __eq__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self.get_board_tuple() == other.get_board_tuple()

    def __hash__(self):
        return hash(self.get_board_tuple())

    def __repr__(self):
        return f"Position({self.to_rows()!r})"

    def serialize(self) -> str:
        """Serialize the position to a JSON string."""
        board_data = []
        for row in range(ROWS):
            row_data = []
            for col in range(COLS):
                cell = self.board[row][col]
                if cell is None:
                    row_data.append(None)
                else:
                    row_data.append({"type": int(cell.piece_type), "player": int(cell.player)})
            board_data.append(row_data)
        return json.dumps({"board": board_data})

    @classmethod
    def deserialize(cls, data: str) -> Position:
        """Deserialize a position from a JSON string.

        Raises:
            ValueError: If a color has more than one king.
        """
        d = json.loads(data)
        position = cls()
        for row in range(ROWS):
            for col in range(COLS):
                cell = d["board"][row][col]
                if cell is not None:
                    position.board[row][col] = Piece(
                        PieceType(cell["type"]), Player(cell["player"])
                    )
        position._check_kings()
        return position
