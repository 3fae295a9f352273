"""Tests for SharedBoard: locking, notifications, and version-gated reads."""

import threading
import time

import pytest

from infinichess.board import Board
from infinichess.constants import ROOK
from infinichess.piece import Color, Piece, Square
from infinichess.rules import StandardChess
from infinichess.serializer import BoardSnapshot
from infinichess.setup_position import prime_pawns, standard_setup
from infinichess.shared import SharedBoard


@pytest.fixture
def shared() -> SharedBoard:
    return SharedBoard(standard_setup(Board()), StandardChess())


def _wait_in_thread(shared: SharedBoard, version: int, timeout: float):
    result: dict[str, BoardSnapshot] = {}

    def target() -> None:
        result["snapshot"] = shared.wait_for_version(version, timeout=timeout)

    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return thread, result


class TestSnapshotAndQueries:
    def test_snapshot(self, shared: SharedBoard) -> None:
        snapshot = shared.snapshot()
        assert snapshot.turn == "0"
        assert len(snapshot.pieces) == 16

    def test_piece_at(self, shared: SharedBoard) -> None:
        record = shared.piece_at(6, 100)
        assert record is not None
        assert (record.type, record.color.value, record.file) == ("pawn", "white", "100")
        assert shared.piece_at(3, 3) is None

    def test_legal_moves(self, shared: SharedBoard) -> None:
        assert shared.legal_moves(Square(0, 6), 0, 0, 8) == [Square(2, 5), Square(2, 7)]

    def test_illegal_move_leaves_turn(self, shared: SharedBoard) -> None:
        committed, turn = shared.submit_move(Square(7, 0), Square(5, 0))
        assert not committed
        assert turn == 0
        assert shared.turn == 0

    def test_legal_move_advances_turn(self, shared: SharedBoard) -> None:
        committed, turn = shared.submit_move(Square(6, 4), Square(4, 4))
        assert committed
        assert turn == 1
        assert shared.turn == 1


class TestVersionGatedRead:
    def test_reached_version_returns_immediately(self, shared: SharedBoard) -> None:
        start = time.monotonic()
        snapshot = shared.wait_for_version(0, timeout=5.0)
        assert snapshot.turn == "0"
        assert time.monotonic() - start < 1.0

    def test_older_version_returns_immediately(self, shared: SharedBoard) -> None:
        shared.submit_move(Square(6, 4), Square(4, 4))
        assert shared.wait_for_version(-3, timeout=5.0).turn == "1"

    def test_wakes_on_committed_move(self, shared: SharedBoard) -> None:
        thread, result = _wait_in_thread(shared, 1, timeout=5.0)
        time.sleep(0.05)
        assert thread.is_alive()

        assert shared.submit_move(Square(6, 4), Square(4, 4))[0]
        thread.join(timeout=5.0)
        assert not thread.is_alive()
        assert result["snapshot"].turn == "1"

    def test_illegal_move_does_not_release(self, shared: SharedBoard) -> None:
        thread, result = _wait_in_thread(shared, 1, timeout=0.3)
        time.sleep(0.05)
        shared.submit_move(Square(7, 0), Square(5, 0))
        thread.join(timeout=5.0)
        assert result["snapshot"].turn == "0"

    def test_promotion_does_not_release(self, shared: SharedBoard) -> None:
        thread, result = _wait_in_thread(shared, 1, timeout=0.3)
        time.sleep(0.05)
        assert shared.promote(7, 3, "wizard") is not None
        time.sleep(0.05)
        assert thread.is_alive()

        thread.join(timeout=5.0)
        snapshot = result["snapshot"]
        assert snapshot.turn == "0"
        assert "wizard" in {p.type for p in snapshot.pieces}

    def test_timeout_returns_current_snapshot(self, shared: SharedBoard) -> None:
        start = time.monotonic()
        snapshot = shared.wait_for_version(10, timeout=0.1)
        assert snapshot.turn == "0"
        assert time.monotonic() - start >= 0.09

    def test_several_waiters_all_wake(self, shared: SharedBoard) -> None:
        waiters = [_wait_in_thread(shared, 1, timeout=5.0) for _ in range(4)]
        time.sleep(0.05)
        shared.submit_move(Square(6, 4), Square(4, 4))
        for thread, result in waiters:
            thread.join(timeout=5.0)
            assert result["snapshot"].turn == "1"


class TestPrimePawns:
    def test_prime_pawns_materializes_both_colors(self) -> None:
        board = Board()
        prime_pawns(board, -2, 4)
        assert sorted(board.white_pawns) == [-2, -1, 0, 1]
        assert sorted(board.black_pawns) == [-2, -1, 0, 1]
        assert len(board.pieces) == 8

    def test_shared_prime_pawns_returns_snapshot(self, shared: SharedBoard) -> None:
        snapshot = shared.prime_pawns(-2, 4)
        assert snapshot.white_pawn_files == ["-2", "-1", "0", "1"]
        assert snapshot.black_pawn_files == ["-2", "-1", "0", "1"]
        assert len(snapshot.pieces) == 24
        assert shared.turn == 0


class TestLongSlide:
    def test_far_rook_move_releases_lock(self) -> None:
        board = Board()
        board.place_piece(Piece(ROOK, Color.WHITE, 3, 0))
        shared = SharedBoard(board, StandardChess())
        outcome: dict[str, tuple[bool, int]] = {}

        def target() -> None:
            outcome["move"] = shared.submit_move(Square(3, 0), Square(3, 10**12))

        thread = threading.Thread(target=target, daemon=True)
        thread.start()
        thread.join(timeout=5.0)
        assert not thread.is_alive()
        assert outcome["move"] == (True, 1)
        assert shared.cond.acquire(timeout=1.0)
        shared.cond.release()
        assert shared.piece_at(3, 10**12) is not None
