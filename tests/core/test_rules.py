"""Tests for StandardChess movement shapes."""

import pytest

from infinichess.board import Board
from infinichess.constants import BISHOP, KING, KNIGHT, PAWN, QUEEN, ROOK
from infinichess.piece import Color, Piece, Square
from infinichess.rules import StandardChess


def _can(board: Board, rules: StandardChess, origin: Square, target: Square) -> bool:
    return rules.can_move(board, board.get_piece_at(*origin), target)


class TestSliders:
    @pytest.mark.parametrize(
        "target, expected",
        [(Square(3, 9), True), (Square(5, 3), True), (Square(5, 5), False), (Square(4, 5), False)],
    )
    def test_rook_shapes(self, board: Board, rules: StandardChess, target, expected) -> None:
        board.place_piece(Piece(ROOK, Color.WHITE, 3, 3))
        assert _can(board, rules, Square(3, 3), target) is expected

    def test_bishop_diagonals(self, board: Board, rules: StandardChess) -> None:
        board.place_piece(Piece(BISHOP, Color.BLACK, 3, 3))
        assert _can(board, rules, Square(3, 3), Square(5, 5))
        assert _can(board, rules, Square(3, 3), Square(2, 2))
        assert _can(board, rules, Square(3, 3), Square(5, 1))
        assert not _can(board, rules, Square(3, 3), Square(3, 5))

    def test_queen_combines_both(self, board: Board, rules: StandardChess) -> None:
        board.place_piece(Piece(QUEEN, Color.WHITE, 3, 3))
        assert _can(board, rules, Square(3, 3), Square(3, 100))
        assert _can(board, rules, Square(3, 3), Square(5, 5))
        assert not _can(board, rules, Square(3, 3), Square(5, 4))

    def test_sliders_are_blocked(self, board: Board, rules: StandardChess) -> None:
        board.place_piece(Piece(QUEEN, Color.WHITE, 3, 3))
        board.place_piece(Piece(KNIGHT, Color.BLACK, 3, 5))
        assert _can(board, rules, Square(3, 3), Square(3, 5))
        assert not _can(board, rules, Square(3, 3), Square(3, 6))

    def test_far_moves_through_pawn_rank_are_blocked(
        self, board: Board, rules: StandardChess
    ) -> None:
        board.place_piece(Piece(ROOK, Color.WHITE, 3, 3))
        assert not _can(board, rules, Square(3, 3), Square(-3, 3))


class TestKnight:
    def test_knight_jumps(self, board: Board, rules: StandardChess) -> None:
        board.place_piece(Piece(KNIGHT, Color.WHITE, 3, 3))
        board.place_piece(Piece(ROOK, Color.BLACK, 4, 3))
        assert _can(board, rules, Square(3, 3), Square(5, 4))
        assert _can(board, rules, Square(3, 3), Square(2, 1))
        assert not _can(board, rules, Square(3, 3), Square(5, 5))
        assert not _can(board, rules, Square(3, 3), Square(4, 3))


class TestPawn:
    def test_white_single_and_double_step(self, start_board: Board, rules: StandardChess) -> None:
        assert _can(start_board, rules, Square(6, 4), Square(5, 4))
        assert _can(start_board, rules, Square(6, 4), Square(4, 4))
        assert not _can(start_board, rules, Square(6, 4), Square(3, 4))
        assert not _can(start_board, rules, Square(6, 4), Square(7, 4))

    def test_black_moves_toward_higher_ranks(self, start_board: Board, rules: StandardChess) -> None:
        assert _can(start_board, rules, Square(1, 4), Square(2, 4))
        assert _can(start_board, rules, Square(1, 4), Square(3, 4))
        assert not _can(start_board, rules, Square(1, 4), Square(0, 4))

    def test_double_step_only_from_start_rank(self, board: Board, rules: StandardChess) -> None:
        board.place_piece(Piece(PAWN, Color.WHITE, 4, 4))
        assert not _can(board, rules, Square(4, 4), Square(2, 4))

    def test_blocked_advance(self, start_board: Board, rules: StandardChess) -> None:
        start_board.place_piece(Piece(KNIGHT, Color.BLACK, 5, 4))
        assert not _can(start_board, rules, Square(6, 4), Square(5, 4))
        assert not _can(start_board, rules, Square(6, 4), Square(4, 4))

    def test_diagonal_needs_a_piece(self, board: Board, rules: StandardChess) -> None:
        board.place_piece(Piece(PAWN, Color.WHITE, 4, 4))
        assert not _can(board, rules, Square(4, 4), Square(3, 5))
        board.place_piece(Piece(KNIGHT, Color.BLACK, 3, 5))
        assert _can(board, rules, Square(4, 4), Square(3, 5))

    def test_en_passant_after_double_step(self, board: Board, rules: StandardChess) -> None:
        board.place_piece(Piece(PAWN, Color.WHITE, 3, 4))
        victim = board.get_piece_at(1, 5)
        assert board.try_move(rules, Square(1, 5), Square(3, 5))

        assert board.try_move(rules, Square(3, 4), Square(2, 5))
        assert board.piece(victim).captured
        assert board.turn == 2

    def test_en_passant_requires_last_moved_pawn(self, board: Board, rules: StandardChess) -> None:
        board.place_piece(Piece(PAWN, Color.WHITE, 3, 4))
        board.place_piece(Piece(PAWN, Color.BLACK, 3, 5))
        assert not _can(board, rules, Square(3, 4), Square(2, 5))

    def test_en_passant_after_single_step_is_allowed(
        self, board: Board, rules: StandardChess
    ) -> None:
        board.place_piece(Piece(PAWN, Color.WHITE, 3, 4))
        board.place_piece(Piece(PAWN, Color.BLACK, 2, 5))
        assert board.try_move(rules, Square(2, 5), Square(3, 5))
        assert _can(board, rules, Square(3, 4), Square(2, 5))


class TestKing:
    def test_single_steps(self, board: Board, rules: StandardChess) -> None:
        board.place_piece(Piece(KING, Color.WHITE, 3, 3))
        assert _can(board, rules, Square(3, 3), Square(4, 4))
        assert _can(board, rules, Square(3, 3), Square(2, 3))
        assert not _can(board, rules, Square(3, 3), Square(5, 3))

    def test_castling_blocked_at_start(self, start_board: Board, rules: StandardChess) -> None:
        assert not _can(start_board, rules, Square(7, 4), Square(7, 6))
        assert not _can(start_board, rules, Square(7, 4), Square(7, 2))

    def test_castling_when_clear(self, board: Board, rules: StandardChess) -> None:
        king = board.place_piece(Piece(KING, Color.WHITE, 7, 4))
        rook = board.place_piece(Piece(ROOK, Color.WHITE, 7, 7))
        assert board.try_move(rules, Square(7, 4), Square(7, 6))
        assert board.piece(king).square == Square(7, 6)
        assert board.piece(rook).square == Square(7, 5)

    def test_no_castling_after_rook_moved(self, board: Board, rules: StandardChess) -> None:
        board.place_piece(Piece(KING, Color.WHITE, 7, 4))
        board.place_piece(Piece(ROOK, Color.WHITE, 7, 0))
        assert board.try_move(rules, Square(7, 0), Square(7, 1))
        assert board.try_move(rules, Square(7, 1), Square(7, 0))
        assert not _can(board, rules, Square(7, 4), Square(7, 2))

    def test_no_castling_with_enemy_rook(self, board: Board, rules: StandardChess) -> None:
        board.place_piece(Piece(KING, Color.WHITE, 7, 4))
        board.place_piece(Piece(ROOK, Color.BLACK, 7, 7))
        assert not _can(board, rules, Square(7, 4), Square(7, 6))


class TestUnknownType:
    def test_unknown_type_never_moves(self, board: Board, rules: StandardChess) -> None:
        board.place_piece(Piece("wizard", Color.WHITE, 3, 3))
        assert not _can(board, rules, Square(3, 3), Square(3, 4))
