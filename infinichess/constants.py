"""
Board constants: start ranks, castling files, and server limits.

All fixed numbers used by the engine and the front ends live here so that no
module introduces its own magic numbers. Ranks grow from Black's side of the
board (rank 0) toward White's side (rank 7); files are unbounded in both
directions.
"""

import re

import chess

# ---------------------------------------------------------------------------
# Piece vocabulary
# ---------------------------------------------------------------------------
# python-chess indexes its names by piece type constant, with a None
# placeholder at index 0.

PAWN: str = chess.piece_name(chess.PAWN)
KNIGHT: str = chess.piece_name(chess.KNIGHT)
BISHOP: str = chess.piece_name(chess.BISHOP)
ROOK: str = chess.piece_name(chess.ROOK)
QUEEN: str = chess.piece_name(chess.QUEEN)
KING: str = chess.piece_name(chess.KING)

STANDARD_PIECE_TYPES: tuple[str, ...] = tuple(
    name for name in chess.PIECE_NAMES if name is not None
)

# ---------------------------------------------------------------------------
# Ranks
# ---------------------------------------------------------------------------
# Every file of the two pawn ranks holds a pawn at game start. Those pawns are
# created on first lookup rather than up front, since there are infinitely
# many of them.

BLACK_BACK_RANK: int = 0
BLACK_PAWN_RANK: int = 1
WHITE_PAWN_RANK: int = 6
WHITE_BACK_RANK: int = 7

# Back-rank order for files 0..7.
BACK_RANK_ORDER: tuple[str, ...] = (
    ROOK, KNIGHT, BISHOP, QUEEN, KING, BISHOP, KNIGHT, ROOK,
)

# ---------------------------------------------------------------------------
# Castling
# ---------------------------------------------------------------------------
# King destination file -> (rook origin file, rook destination file).

KING_START_FILE: int = 4
QUEENSIDE_KING_FILE: int = 2
KINGSIDE_KING_FILE: int = 6
CASTLING_ROOK_FILES: dict[int, tuple[int, int]] = {
    QUEENSIDE_KING_FILE: (0, 3),
    KINGSIDE_KING_FILE: (7, 5),
}

# ---------------------------------------------------------------------------
# Server limits
# ---------------------------------------------------------------------------
# LONG_POLL_TIMEOUT_S: upper bound on how long GET /board/{version} parks a
# worker thread before answering with the current snapshot.
LONG_POLL_TIMEOUT_S: float = 30.0

# MAX_WINDOW_SIZE: largest side length accepted by the windowed legal-move
# query. Each square in the window costs one legality check, and each check
# scans the whole piece arena.
MAX_WINDOW_SIZE: int = 256

# INTEGER_TEXT: accepted spelling of a coordinate on the wire. ASCII digits
# with an optional leading minus; no whitespace, "+" sign, or underscores,
# which int() would otherwise let through.
INTEGER_TEXT: re.Pattern[str] = re.compile(r"-?[0-9]+", re.ASCII)
