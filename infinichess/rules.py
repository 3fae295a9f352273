"""
Movement-shape rules.

A rule set answers one question: can piece P reach square S, given the
current occupancy? It does not decide whether the destination holds a piece
of the mover's own color; Board.is_move_legal() applies that filter on top of
whatever the rule set answers. Rule sets are called with the board lock held
and must not block or take locks themselves.
"""

from typing import TYPE_CHECKING, Protocol

from infinichess.constants import (
    BISHOP,
    BLACK_PAWN_RANK,
    CASTLING_ROOK_FILES,
    KING,
    KING_START_FILE,
    KNIGHT,
    PAWN,
    QUEEN,
    ROOK,
    WHITE_PAWN_RANK,
)
from infinichess.piece import Color, Piece, Square

if TYPE_CHECKING:
    from infinichess.board import Board


class PieceRules(Protocol):
    def can_move(self, board: "Board", piece_id: int, target: Square) -> bool:
        ...


class StandardChess:
    """
    Orthodox piece movement on an unbounded board.

    White pawns start on rank 6 and advance toward rank 0; Black pawns start
    on rank 1 and advance the other way. Check is never considered.

    En passant is allowed when the pawn beside the mover on the target file
    is an enemy pawn and was the last piece moved. Whether that move was a
    two-square advance is not checked.
    """

    def __init__(self) -> None:
        self._shapes = {
            PAWN: self._pawn,
            KNIGHT: self._knight,
            BISHOP: self._bishop,
            ROOK: self._rook,
            QUEEN: self._queen,
            KING: self._king,
        }

    def can_move(self, board: "Board", piece_id: int, target: Square) -> bool:
        piece = board.piece(piece_id)
        shape = self._shapes.get(piece.piece_type)
        if shape is None:
            return False
        return shape(board, piece_id, piece, target)

    # -----------------------------------------------------------------------
    # Per-type shapes
    # -----------------------------------------------------------------------

    def _pawn(self, board: "Board", piece_id: int, piece: Piece, target: Square) -> bool:
        forward = -1 if piece.color is Color.WHITE else 1
        start_rank = WHITE_PAWN_RANK if piece.color is Color.WHITE else BLACK_PAWN_RANK
        dr = target.rank - piece.rank
        df = target.file - piece.file

        if df == 0:
            if dr == forward:
                return board.get_piece_at(target.rank, target.file) is None
            if dr == 2 * forward and piece.rank == start_rank:
                return (
                    board.clear_path(piece.square, target)
                    and board.get_piece_at(target.rank, target.file) is None
                )
            return False

        if abs(df) != 1 or dr != forward:
            return False
        if board.get_piece_at(target.rank, target.file) is not None:
            return True

        beside = board.get_piece_at(piece.rank, target.file)
        if beside is None or beside != board.last_move():
            return False
        victim = board.piece(beside)
        return victim.piece_type == PAWN and victim.color is not piece.color

    def _knight(self, board: "Board", piece_id: int, piece: Piece, target: Square) -> bool:
        dr = abs(target.rank - piece.rank)
        df = abs(target.file - piece.file)
        return {dr, df} == {1, 2}

    def _bishop(self, board: "Board", piece_id: int, piece: Piece, target: Square) -> bool:
        dr = abs(target.rank - piece.rank)
        df = abs(target.file - piece.file)
        return dr == df != 0 and board.clear_path(piece.square, target)

    def _rook(self, board: "Board", piece_id: int, piece: Piece, target: Square) -> bool:
        straight = (target.rank == piece.rank) != (target.file == piece.file)
        return straight and board.clear_path(piece.square, target)

    def _queen(self, board: "Board", piece_id: int, piece: Piece, target: Square) -> bool:
        return self._rook(board, piece_id, piece, target) or self._bishop(
            board, piece_id, piece, target
        )

    def _king(self, board: "Board", piece_id: int, piece: Piece, target: Square) -> bool:
        dr = abs(target.rank - piece.rank)
        df = abs(target.file - piece.file)
        if max(dr, df) == 1:
            return True
        if dr != 0 or piece.file != KING_START_FILE or target.file not in CASTLING_ROOK_FILES:
            return False
        return self._can_castle(board, piece_id, piece, target.file)

    def _can_castle(self, board: "Board", king_id: int, king: Piece, king_file: int) -> bool:
        if board.moves.has_moved(king_id):
            return False
        rook_file, _ = CASTLING_ROOK_FILES[king_file]
        rook_id = board.get_piece_at(king.rank, rook_file)
        if rook_id is None or board.moves.has_moved(rook_id):
            return False
        rook = board.piece(rook_id)
        if rook.piece_type != ROOK or rook.color is not king.color:
            return False
        return board.clear_path(king.square, Square(king.rank, rook_file))
