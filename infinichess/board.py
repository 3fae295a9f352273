"""
Board state machine for chess on an unbounded grid.

The board owns every piece ever created (an append-only arena indexed by
piece id), the two pawn-rank trackers, the move history, and the turn
counter. It answers lookups, tests line of sight, applies moves, promotes
pieces, and orchestrates legality checks against a pluggable rule set.

Lazy pawns:
    Both pawn ranks are conceptually full at game start, on every one of the
    infinitely many files. Instead of storing them up front, get_piece_at()
    creates the default pawn the first time its square is looked at and marks
    the file in the tracker so it is never created twice. Every lookup does
    this, including the ones made by read-only legality queries, so the order
    in which squares are touched never changes what a client sees.

Nothing here is thread-safe. SharedBoard serializes access for the server.
"""

import logging
from typing import TYPE_CHECKING

from infinichess.constants import (
    BLACK_PAWN_RANK,
    CASTLING_ROOK_FILES,
    KING,
    PAWN,
    WHITE_PAWN_RANK,
)
from infinichess.moves import Move, MoveHistory
from infinichess.pawn_rank import PawnRankTracker
from infinichess.piece import Color, Piece, Square

if TYPE_CHECKING:
    from infinichess.rules import PieceRules

_log = logging.getLogger(__name__)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Board:
    """
    Authoritative game state.

    Attributes:
        turn:        Number of committed moves. Advanced by try_move() only;
                     promotions leave it unchanged.
        pieces:      Piece arena. A piece's id is its index here and is never
                     reused; captured pieces stay with captured=True.
        white_pawns: Files whose white default pawn has been materialized.
        black_pawns: Files whose black default pawn has been materialized.
        moves:       History of applied moves.
    """

    def __init__(self) -> None:
        self.turn: int = 0
        self.pieces: list[Piece] = []
        self.white_pawns = PawnRankTracker()
        self.black_pawns = PawnRankTracker()
        self.moves = MoveHistory()

    # -----------------------------------------------------------------------
    # Arena
    # -----------------------------------------------------------------------

    def place_piece(self, piece: Piece) -> int:
        """Add a piece to the arena and return its id."""
        self.pieces.append(piece)
        return len(self.pieces) - 1

    def piece(self, piece_id: int) -> Piece:
        """
        Return the record for a piece id.

        Ids come from this board, so an unknown id is a programming error and
        the IndexError is left to propagate.
        """
        if piece_id < 0:
            raise IndexError(f"piece id out of range: {piece_id}")
        return self.pieces[piece_id]

    def active_pieces(self) -> list[tuple[int, Piece]]:
        """All non-captured pieces with their ids, in arena order."""
        return [(i, p) for i, p in enumerate(self.pieces) if not p.captured]

    def last_move(self) -> int | None:
        return self.moves.last()

    # -----------------------------------------------------------------------
    # Lookup
    # -----------------------------------------------------------------------

    def get_piece_at(self, rank: int, file: int) -> int | None:
        """
        Return the id of the live piece on (rank, file), or None.

        Materializes the default pawn first if the square lies on a pawn
        rank whose file has not been touched yet. Linear in arena size.
        """
        if rank == BLACK_PAWN_RANK and not self.black_pawns.has_materialized(file):
            self.black_pawns.mark_materialized(file)
            self.place_piece(Piece(PAWN, Color.BLACK, rank, file))
        if rank == WHITE_PAWN_RANK and not self.white_pawns.has_materialized(file):
            self.white_pawns.mark_materialized(file)
            self.place_piece(Piece(PAWN, Color.WHITE, rank, file))

        for i, piece in enumerate(self.pieces):
            if piece.rank == rank and piece.file == file and not piece.captured:
                return i
        return None

    def clear_path(self, origin: Square, target: Square) -> bool:
        """
        True if every square strictly between origin and target is empty.

        Only meaningful when the two squares share a rank, a file, or a 45°
        diagonal.

        Equivalent to looking up each square in turn and stopping at the first
        occupied one, but the cost depends on the arena and the pawn trackers
        rather than on the distance. The first blocking square is the nearest
        of: a live piece on the path, or a pawn-rank square whose default pawn
        has not been materialized yet. Only that square is looked up, which
        materializes its pawn exactly as the square-by-square walk would.
        """
        dr = _sign(target.rank - origin.rank)
        df = _sign(target.file - origin.file)
        steps = max(abs(target.rank - origin.rank), abs(target.file - origin.file))

        def step_of(rank: int, file: int) -> int | None:
            k = (rank - origin.rank) * dr if dr else (file - origin.file) * df
            if not 0 < k < steps:
                return None
            if rank != origin.rank + k * dr or file != origin.file + k * df:
                return None
            return k

        candidates = [
            step_of(piece.rank, piece.file) for piece in self.pieces if not piece.captured
        ]
        for pawn_rank, tracker in (
            (BLACK_PAWN_RANK, self.black_pawns),
            (WHITE_PAWN_RANK, self.white_pawns),
        ):
            candidates.append(
                self._first_unmaterialized(origin, dr, df, steps, pawn_rank, tracker)
            )

        hits = [k for k in candidates if k is not None]
        if not hits:
            return True
        first = min(hits)
        self.get_piece_at(origin.rank + first * dr, origin.file + first * df)
        return False

    @staticmethod
    def _first_unmaterialized(
        origin: Square,
        dr: int,
        df: int,
        steps: int,
        pawn_rank: int,
        tracker: PawnRankTracker,
    ) -> int | None:
        """Step index of the nearest untouched pawn square strictly inside the path."""
        if dr:
            k = (pawn_rank - origin.rank) * dr
            if 0 < k < steps and not tracker.has_materialized(origin.file + k * df):
                return k
            return None
        if origin.rank != pawn_rank:
            return None
        # Along the pawn rank itself: skip the finitely many marked files.
        k = 1
        while k < steps and tracker.has_materialized(origin.file + k * df):
            k += 1
        return k if k < steps else None

    # -----------------------------------------------------------------------
    # Mutation
    # -----------------------------------------------------------------------

    def apply_move(self, origin: Square, target: Square) -> bool:
        """
        Move the piece on origin to target without checking legality.

        Handles, in order of precedence: a capture on the target square, an
        en passant capture of whatever piece stands beside a pawn on the
        target file, and the rook hop of a castling king. Appends the move to
        the history but does not advance the turn counter.

        Args:
            origin: Square of the moving piece.
            target: Destination square.

        Returns:
            True once the move is applied. False if origin is empty, or if a
            king castles toward file 2 or 6 and the matching corner rook is
            missing. On False nothing changes.
        """
        mover_id = self.get_piece_at(origin.rank, origin.file)
        if mover_id is None:
            return False
        mover = self.pieces[mover_id]

        occupant = self.get_piece_at(target.rank, target.file)
        if occupant is not None:
            self.pieces[occupant].capture()
        elif mover.piece_type == PAWN:
            beside = self.get_piece_at(origin.rank, target.file)
            if beside is not None and beside != mover_id:
                self.pieces[beside].capture()
        elif mover.piece_type == KING and abs(origin.file - target.file) >= 2:
            if not self._castle_rook(origin.rank, target.file):
                return False

        mover.goto(target.rank, target.file)
        self.moves.append(Move(mover_id))
        _log.debug(
            "applied %s %s %s -> %s (piece %d)",
            mover.color.value, mover.piece_type, tuple(origin), tuple(target), mover_id,
        )
        return True

    def _castle_rook(self, rank: int, king_file: int) -> bool:
        """Hop the corner rook for a castling king. False if the rook is missing."""
        files = CASTLING_ROOK_FILES.get(king_file)
        if files is None:
            return True
        rook_from, rook_to = files
        rook = self.get_piece_at(rank, rook_from)
        if rook is None:
            return False
        self.pieces[rook].goto(rank, rook_to)
        return True

    def promote(self, rank: int, file: int, new_type: str) -> int | None:
        """
        Rewrite the type of the piece on (rank, file).

        Returns the piece id, or None if the square is empty. Neither the
        history nor the turn counter changes.
        """
        piece_id = self.get_piece_at(rank, file)
        if piece_id is None:
            return None
        self.pieces[piece_id].piece_type = new_type
        _log.debug("promoted piece %d at %s to %s", piece_id, (rank, file), new_type)
        return piece_id

    def try_move(self, rules: "PieceRules", origin: Square, target: Square) -> bool:
        """Apply the move and advance the turn if it is legal and applies; otherwise no-op."""
        if not self.is_move_legal(rules, origin, target):
            return False
        if not self.apply_move(origin, target):
            return False
        self.turn += 1
        return True

    # -----------------------------------------------------------------------
    # Legality
    # -----------------------------------------------------------------------

    def is_move_legal(self, rules: "PieceRules", origin: Square, target: Square) -> bool:
        """
        Decide whether the piece on origin may move to target.

        The rule set judges the movement shape. A destination held by a piece
        of the mover's own color is rejected here whatever the rule set says.
        """
        if origin == target:
            return False
        mover_id = self.get_piece_at(origin.rank, origin.file)
        if mover_id is None:
            return False

        shape_ok = rules.can_move(self, mover_id, target)
        occupant = self.get_piece_at(target.rank, target.file)
        if occupant is not None and self.pieces[occupant].color is self.pieces[mover_id].color:
            return False
        return shape_ok

    def legal_moves(
        self,
        rules: "PieceRules",
        origin: Square,
        rank: int,
        file: int,
        size: int,
    ) -> list[Square]:
        """
        Legal destinations from origin inside a square window.

        The window covers ranks [rank, rank + size) and files
        [file, file + size). Results are ordered rank-major, both ascending.
        A non-positive size yields an empty list.
        """
        results: list[Square] = []
        for r in range(rank, rank + size):
            for f in range(file, file + size):
                target = Square(r, f)
                if self.is_move_legal(rules, origin, target):
                    results.append(target)
        return results
