"""Game-start placement of the back-rank pieces."""

from infinichess.board import Board
from infinichess.constants import (
    BACK_RANK_ORDER,
    BLACK_BACK_RANK,
    BLACK_PAWN_RANK,
    WHITE_BACK_RANK,
    WHITE_PAWN_RANK,
)
from infinichess.piece import Color, Piece


def standard_setup(board: Board) -> Board:
    """
    Place both back ranks on files 0..7 and return the board.

    Pawns are not placed here; the board materializes them on first lookup.
    Black's pieces come first for each file, then White's.
    """
    for file, piece_type in enumerate(BACK_RANK_ORDER):
        board.place_piece(Piece(piece_type, Color.BLACK, BLACK_BACK_RANK, file))
        board.place_piece(Piece(piece_type, Color.WHITE, WHITE_BACK_RANK, file))
    return board


def prime_pawns(board: Board, file: int, width: int) -> None:
    """Materialize the default pawns of both colors on files [file, file + width)."""
    for f in range(file, file + width):
        board.get_piece_at(BLACK_PAWN_RANK, f)
        board.get_piece_at(WHITE_PAWN_RANK, f)
