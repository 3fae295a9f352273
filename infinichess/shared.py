"""
Process-wide shared board with version-gated reads.

Threading model:
    One Board sits behind a single threading.Condition. Every operation,
    reads included, takes the same exclusive lock, because lookups can
    materialize pawns. There is no reader/writer split and no per-square
    locking; all critical sections are short and do no I/O.

    Mutations notify every waiter before the lock is released. A
    version-gated read sleeps on the condition until turn >= version,
    re-checking the predicate on each wake, or until its timeout expires.
"""

import logging
import threading

from infinichess.board import Board
from infinichess.constants import LONG_POLL_TIMEOUT_S
from infinichess.piece import Square
from infinichess.rules import PieceRules
from infinichess.serializer import BoardSnapshot, PieceRecord, board_snapshot, piece_record
from infinichess.setup_position import prime_pawns

_log = logging.getLogger(__name__)


class SharedBoard:
    """
    Thread-safe front for one Board and its rule set.

    Attributes:
        board: The wrapped board. Only touch it while holding ``cond``.
        rules: Rule set used for every legality check.
        cond:  Condition guarding ``board``; its lock is the board lock.
    """

    def __init__(self, board: Board, rules: PieceRules) -> None:
        self.board = board
        self.rules = rules
        self.cond = threading.Condition(threading.Lock())

    @property
    def turn(self) -> int:
        with self.cond:
            return self.board.turn

    def snapshot(self) -> BoardSnapshot:
        with self.cond:
            return board_snapshot(self.board)

    def wait_for_version(
        self,
        version: int,
        timeout: float | None = LONG_POLL_TIMEOUT_S,
    ) -> BoardSnapshot:
        """
        Return a snapshot no older than ``version``.

        Returns at once when the board is already there. Otherwise blocks
        until a committed move raises the turn far enough, or until
        ``timeout`` seconds pass, in which case the current (older) snapshot
        is returned and the caller can poll again. ``timeout=None`` waits
        indefinitely.
        """
        with self.cond:
            reached = self.cond.wait_for(lambda: self.board.turn >= version, timeout)
            if not reached:
                _log.info(
                    "long poll for version %d timed out at turn %d", version, self.board.turn
                )
            return board_snapshot(self.board)

    def piece_at(self, rank: int, file: int) -> PieceRecord | None:
        with self.cond:
            piece_id = self.board.get_piece_at(rank, file)
            if piece_id is None:
                return None
            return piece_record(piece_id, self.board.piece(piece_id))

    def legal_moves(self, origin: Square, rank: int, file: int, size: int) -> list[Square]:
        with self.cond:
            return self.board.legal_moves(self.rules, origin, rank, file, size)

    def submit_move(self, origin: Square, target: Square) -> tuple[bool, int]:
        """
        Apply the move if it is legal and wake every waiter.

        Returns (committed, turn), both read under the lock, so the turn is
        the one this request produced or saw. An illegal request leaves the
        board untouched and reports committed=False.
        """
        with self.cond:
            committed = self.board.try_move(self.rules, origin, target)
            self.cond.notify_all()
            return committed, self.board.turn

    def prime_pawns(self, file: int, width: int) -> BoardSnapshot:
        """Materialize both pawn ranks over [file, file + width) and return a snapshot."""
        with self.cond:
            prime_pawns(self.board, file, width)
            return board_snapshot(self.board)

    def promote(self, rank: int, file: int, new_type: str) -> int | None:
        """
        Change the type of the piece on (rank, file) and wake every waiter.

        The turn counter does not move, so a waiter whose version is still
        ahead of the board goes back to sleep.
        """
        with self.cond:
            piece_id = self.board.promote(rank, file, new_type)
            self.cond.notify_all()
            return piece_id
