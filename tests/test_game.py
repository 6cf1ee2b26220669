"""Unit tests for the MiniChess rules: board, position, move generation."""

import random

import pytest

from minichess.game.board import (
    COLS, INITIAL_LAYOUT, ROWS, notation_to_rc, rc_to_notation, render_board,
)
from minichess.game.rules import (
    GameStatus, all_legal_moves, apply_move, game_status, get_winner, is_game_over,
    is_in_check, is_square_attacked, legal_moves, pseudo_legal_moves,
)
from minichess.game.state import Move, Piece, PieceType, Player, Position


def _position(*rows):
    return Position.from_rows(rows)


class TestBoard:
    def test_board_size(self):
        assert ROWS == 6
        assert COLS == 5

    def test_notation_conversion(self):
        assert rc_to_notation(5, 0) == "a1"
        assert rc_to_notation(0, 4) == "e6"
        assert rc_to_notation(3, 2) == "c3"

    def test_notation_roundtrip(self):
        for r in range(ROWS):
            for c in range(COLS):
                assert notation_to_rc(rc_to_notation(r, c)) == (r, c)

    def test_notation_off_board(self):
        with pytest.raises(ValueError):
            notation_to_rc("f1")
        with pytest.raises(ValueError):
            notation_to_rc("a7")

    def test_render_board(self, initial_position):
        text = render_board(initial_position, current_player=0)
        assert "White to move" in text
        assert "K" in text and "k" in text


class TestPosition:
    def test_initial_layout(self, initial_position):
        assert initial_position.to_rows() == list(INITIAL_LAYOUT)
        assert initial_position.get_piece_at(5, 3) == Piece(PieceType.KING, Player.WHITE)
        assert initial_position.get_piece_at(0, 3) == Piece(PieceType.KING, Player.BLACK)
        assert initial_position.get_piece_at(2, 2) is None

    def test_out_of_bounds_access(self, initial_position):
        assert initial_position.get_piece_at(-1, 0) is None
        assert initial_position.get_piece_at(6, 0) is None
        assert initial_position.get_piece_at(0, 5) is None
        # Writes off the board are ignored
        initial_position.set_piece(9, 9, Piece(PieceType.QUEEN, Player.WHITE))
        assert initial_position.to_rows() == list(INITIAL_LAYOUT)

    def test_clone_is_independent(self, initial_position):
        clone = initial_position.clone()
        initial_position.set_piece(2, 2, Piece(PieceType.QUEEN, Player.WHITE))
        assert clone.get_piece_at(2, 2) is None
        assert clone != initial_position

    def test_find_king(self, kings_only_position):
        assert kings_only_position.find_king(Player.WHITE) == (5, 4)
        assert kings_only_position.find_king(Player.BLACK) == (0, 0)
        kings_only_position.set_piece(0, 0, None)
        assert kings_only_position.find_king(Player.BLACK) is None

    def test_from_rows_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            Position.from_rows(["rnqkb"])
        with pytest.raises(ValueError):
            Position.from_rows(["rnqkbx", ".....", ".....", ".....", ".....", "....."])

    def test_from_rows_rejects_unknown_piece(self):
        with pytest.raises(ValueError):
            Position.from_rows(["z....", ".....", ".....", ".....", ".....", "....K"])

    def test_serialize_roundtrip(self, initial_position):
        restored = Position.deserialize(initial_position.serialize())
        assert restored == initial_position
        assert hash(restored) == hash(initial_position)

    def test_rejects_second_king(self):
        with pytest.raises(ValueError, match="BLACK has 2 kings"):
            Position.from_rows(["kk...", ".....", ".....", ".....", ".....", "R...K"])

        pos = _position("k....", ".....", ".....", ".....", ".....", "....K")
        pos.set_piece(2, 2, Piece(PieceType.KING, Player.WHITE))
        with pytest.raises(ValueError, match="WHITE has 2 kings"):
            Position.deserialize(pos.serialize())

    def test_empty_board(self):
        pos = Position.empty()
        assert list(pos.pieces()) == []
        assert pos.to_rows() == ["....."] * 6
        pos.set_piece(0, 0, Piece(PieceType.KING, Player.BLACK))
        pos.set_piece(5, 4, Piece(PieceType.KING, Player.WHITE))
        assert pos == _position("k....", ".....", ".....", ".....", ".....", "....K")


class TestPieceMoves:
    def test_initial_white_moves(self, initial_position):
        moves = all_legal_moves(initial_position, Player.WHITE)
        assert len(moves) == 12
        assert moves == [
            Move((4, 0), (3, 0)), Move((4, 0), (2, 0)),
            Move((4, 1), (3, 1)), Move((4, 1), (2, 1)),
            Move((4, 2), (3, 2)), Move((4, 2), (2, 2)),
            Move((4, 3), (3, 3)), Move((4, 3), (2, 3)),
            Move((4, 4), (3, 4)), Move((4, 4), (2, 4)),
            Move((5, 1), (3, 0)), Move((5, 1), (3, 2)),
        ]

    def test_initial_black_moves(self, initial_position):
        moves = all_legal_moves(initial_position, Player.BLACK)
        assert len(moves) == 12
        knight_moves = {m.to_rc for m in moves if m.from_rc == (0, 1)}
        assert knight_moves == {(2, 0), (2, 2)}

    def test_pawn_single_step_off_start_row(self):
        pos = _position("k....", ".....", ".....", "..P..", ".....", "....K")
        assert legal_moves(pos, (3, 2), Player.WHITE) == [(2, 2)]

    def test_pawn_double_step_blocked(self):
        # Blocked directly in front: no forward moves at all
        pos = _position("k....", ".....", ".....", ".p...", ".P...", "....K")
        assert legal_moves(pos, (4, 1), Player.WHITE) == []
        # Destination of the double step occupied: only the single step
        pos = _position("k....", ".....", ".p...", ".....", ".P...", "....K")
        assert legal_moves(pos, (4, 1), Player.WHITE) == [(3, 1)]

    def test_pawn_captures_diagonally_only(self):
        pos = _position("k....", ".....", ".....", "n.n..", ".P...", "....K")
        dests = set(legal_moves(pos, (4, 1), Player.WHITE))
        assert dests == {(3, 1), (2, 1), (3, 0), (3, 2)}
        # Friendly pieces on the diagonals are not captured
        pos = _position("k....", ".....", ".....", "N.N..", ".P...", "....K")
        assert set(legal_moves(pos, (4, 1), Player.WHITE)) == {(3, 1), (2, 1)}

    def test_black_pawn_moves_down(self):
        pos = _position("k....", ".p...", "..P..", ".....", ".....", "....K")
        assert set(legal_moves(pos, (1, 1), Player.BLACK)) == {(2, 1), (3, 1), (2, 2)}

    def test_knight_moves(self):
        pos = _position("k....", ".....", "..N..", ".....", ".....", "....K")
        dests = set(legal_moves(pos, (2, 2), Player.WHITE))
        assert dests == {(0, 1), (0, 3), (1, 0), (1, 4), (3, 0), (3, 4), (4, 1), (4, 3)}

    def test_knight_in_corner(self):
        pos = _position("k....", ".....", ".....", ".....", ".....", "N...K")
        assert set(legal_moves(pos, (5, 0), Player.WHITE)) == {(3, 1), (4, 2)}

    def test_rook_rays(self):
        pos = _position("k....", ".....", "..R.p", ".....", "..P..", "....K")
        dests = set(legal_moves(pos, (2, 2), Player.WHITE))
        # Captures the pawn on (2, 4), stops before its own pawn on (4, 2)
        assert dests == {(1, 2), (0, 2), (3, 2), (2, 1), (2, 0), (2, 3), (2, 4)}

    def test_bishop_rays_include_king_capture(self):
        pos = _position("k....", ".....", "..B..", ".....", ".....", "....K")
        dests = set(legal_moves(pos, (2, 2), Player.WHITE))
        assert dests == {(1, 1), (0, 0), (1, 3), (0, 4), (3, 1), (4, 0), (3, 3), (4, 4)}

    def test_queen_combines_rook_and_bishop(self):
        pos = _position("k....", ".....", "..Q..", ".....", ".....", "....K")
        assert len(legal_moves(pos, (2, 2), Player.WHITE)) == 17

    def test_king_moves(self, kings_only_position):
        dests = set(legal_moves(kings_only_position, (5, 4), Player.WHITE))
        assert dests == {(4, 3), (4, 4), (5, 3)}

    def test_empty_enemy_and_off_board_cells(self, initial_position):
        assert legal_moves(initial_position, (2, 2), Player.WHITE) == []
        assert legal_moves(initial_position, (1, 0), Player.WHITE) == []
        assert legal_moves(initial_position, (7, 7), Player.WHITE) == []
        assert pseudo_legal_moves(initial_position, (-1, 3)) == []


class TestLegality:
    def test_king_cannot_step_into_attack(self):
        pos = _position("k..r.", ".....", ".....", ".....", ".....", "....K")
        assert legal_moves(pos, (5, 4), Player.WHITE) == [(4, 4)]

    def test_pinned_rook_stays_on_file(self):
        pos = _position("k.r..", ".....", ".....", "..R..", ".....", "..K..")
        assert set(legal_moves(pos, (3, 2), Player.WHITE)) == {(2, 2), (1, 2), (0, 2), (4, 2)}
        # The unfiltered generator still reports sideways moves
        assert len(legal_moves(pos, (3, 2), Player.WHITE, ignore_check=True)) == 8
        assert len(pseudo_legal_moves(pos, (3, 2))) == 8

    def test_must_resolve_check(self, checkmate_position):
        pos = checkmate_position.clone()
        # Give Black a rook that can capture the checking rook
        pos.set_piece(5, 4, Piece(PieceType.ROOK, Player.BLACK))
        pos.set_piece(1, 4, None)
        moves = all_legal_moves(pos, Player.BLACK)
        for move in moves:
            after, _ = apply_move(pos, move)
            assert not is_in_check(after, Player.BLACK)
        assert Move((5, 4), (0, 4)) in moves

    def test_legal_moves_never_leave_king_attacked(self, initial_position):
        rng = random.Random(7)
        position = initial_position
        player = Player.WHITE
        for _ in range(30):
            moves = all_legal_moves(position, player)
            if not moves or is_game_over(position):
                break
            for move in moves:
                after, _ = apply_move(position, move)
                assert not is_in_check(after, player)
            position, _ = apply_move(position, rng.choice(moves))
            player = player.opponent

    def test_all_moves_is_sum_of_piece_moves(self):
        pos = _position("rnqkb", "p.p.p", ".p.p.", "..P..", "PP.PP", "RNQKB")
        for player in Player:
            moves = all_legal_moves(pos, player)
            per_piece = sum(len(legal_moves(pos, (r, c), player))
                            for r, c, _ in pos.pieces(player))
            assert len(moves) == per_piece
            assert len(set(moves)) == len(moves)


class TestCheck:
    def test_square_attacked(self):
        pos = _position("k....", ".....", ".....", ".n...", "..P..", "....K")
        # Pawn attacks the knight diagonally
        assert is_square_attacked(pos, (3, 1), Player.WHITE)
        assert not is_square_attacked(pos, (3, 3), Player.WHITE)
        # Knight on (3, 1) reaches (5, 2) and (4, 3)
        assert is_square_attacked(pos, (5, 2), Player.BLACK)
        assert is_square_attacked(pos, (4, 3), Player.BLACK)

    def test_square_attacked_accepts_list_cell(self):
        pos = _position("k....", ".....", ".....", ".n...", "..P..", "....K")
        assert is_square_attacked(pos, [3, 1], Player.WHITE)
        assert is_square_attacked(pos, [5, 2], Player.BLACK)

    def test_in_check(self, checkmate_position):
        assert is_in_check(checkmate_position, Player.BLACK)
        assert not is_in_check(checkmate_position, Player.WHITE)

    def test_no_check_without_king(self, kings_only_position):
        kings_only_position.set_piece(0, 0, None)
        assert not is_in_check(kings_only_position, Player.BLACK)

    def test_checkmate(self, checkmate_position):
        assert not is_game_over(checkmate_position)
        assert is_in_check(checkmate_position, Player.BLACK)
        assert all_legal_moves(checkmate_position, Player.BLACK) == []
        assert game_status(checkmate_position, Player.BLACK) == GameStatus.CHECKMATE

    def test_stalemate(self, stalemate_position):
        assert not is_in_check(stalemate_position, Player.BLACK)
        assert all_legal_moves(stalemate_position, Player.BLACK) == []
        assert game_status(stalemate_position, Player.BLACK) == GameStatus.STALEMATE

    def test_status_check_and_ongoing(self, initial_position):
        assert game_status(initial_position, Player.WHITE) == GameStatus.ONGOING
        pos = _position("k...R", ".....", ".....", ".....", ".....", "..K..")
        assert game_status(pos, Player.BLACK) == GameStatus.CHECK


class TestApplyMove:
    def test_returns_new_position(self, initial_position):
        after, captured = apply_move(initial_position, Move((4, 0), (2, 0)))
        assert captured is None
        assert after.get_piece_at(2, 0) == Piece(PieceType.PAWN, Player.WHITE)
        assert after.get_piece_at(4, 0) is None
        # Original untouched
        assert initial_position.to_rows() == list(INITIAL_LAYOUT)

    def test_capture_returns_piece(self):
        pos = _position("k....", ".....", ".....", "..n..", ".P...", "....K")
        after, captured = apply_move(pos, Move((4, 1), (3, 2)))
        assert captured == Piece(PieceType.KNIGHT, Player.BLACK)
        assert after.get_piece_at(3, 2) == Piece(PieceType.PAWN, Player.WHITE)

    def test_white_promotion(self):
        pos = _position("....k", "P....", ".....", ".....", ".....", "....K")
        after, _ = apply_move(pos, Move((1, 0), (0, 0)))
        assert after.get_piece_at(0, 0) == Piece(PieceType.QUEEN, Player.WHITE)

    def test_black_promotion_by_capture(self):
        pos = _position("k....", ".....", ".....", ".....", "p....", ".N..K")
        after, captured = apply_move(pos, Move((4, 0), (5, 1)))
        assert captured == Piece(PieceType.KNIGHT, Player.WHITE)
        assert after.get_piece_at(5, 1) == Piece(PieceType.QUEEN, Player.BLACK)

    def test_other_pieces_do_not_promote(self):
        pos = _position("....k", "R....", ".....", ".....", ".....", "....K")
        after, _ = apply_move(pos, Move((1, 0), (0, 0)))
        assert after.get_piece_at(0, 0) == Piece(PieceType.ROOK, Player.WHITE)

    def test_king_capture_ends_game(self):
        pos = _position("k....", ".....", "..B..", ".....", ".....", "....K")
        assert not is_game_over(pos)
        assert get_winner(pos) is None
        after, captured = apply_move(pos, Move((2, 2), (0, 0)))
        assert captured == Piece(PieceType.KING, Player.BLACK)
        assert is_game_over(after)
        assert get_winner(after) == Player.WHITE
        assert game_status(after, Player.BLACK) == GameStatus.KING_CAPTURED
