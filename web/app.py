"""
FastAPI web application for the infinite chess server.

Holds one shared board for the whole process and exposes it over plain GET
endpoints: snapshot, long-poll snapshot, windowed legal moves, move, promote,
single-square lookup, and pawn-rank priming. Serves the browser client via static files.

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  so a long poll parks one worker thread on the board's condition variable
  instead of blocking the event loop.
- Path parameters arrive as strings and are parsed here, so any malformed
  coordinate produces the same 400 response before the board is touched.
- Static files mounted LAST: route registration is first-match, so API routes
  must be registered before the StaticFiles catch-all.
"""

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from infinichess.board import Board
from infinichess.constants import INTEGER_TEXT, LONG_POLL_TIMEOUT_S, MAX_WINDOW_SIZE
from infinichess.piece import Square
from infinichess.rules import StandardChess
from infinichess.serializer import BoardSnapshot, PieceRecord
from infinichess.setup_position import standard_setup
from infinichess.shared import SharedBoard

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

_STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(title="Infinite Chess", version="1.0.0")

shared = SharedBoard(standard_setup(Board()), StandardChess())


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class LegalMovesResponse(BaseModel):
    """
    Legal destinations inside the requested window.

    Fields:
        moves: [rank, file] pairs as decimal strings, rank-major, ascending.
    """

    moves: list[tuple[str, str]]


class MoveResponse(BaseModel):
    """
    Outcome of a move request.

    Fields:
        ok:   True if the move was legal and applied. Illegal moves are not
              errors; they simply leave the board unchanged.
        turn: Turn counter after the request.
    """

    ok: bool
    turn: str


class PromoteResponse(BaseModel):
    piece: int | None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_int(text: str) -> int:
    """Parse a path parameter as an int, or reject the request with a 400."""
    if not INTEGER_TEXT.fullmatch(text):
        raise HTTPException(status_code=400, detail="Bad request")
    try:
        return int(text)
    except ValueError:
        raise HTTPException(status_code=400, detail="Bad request") from None


# ---------------------------------------------------------------------------
# API routes (registered BEFORE StaticFiles mount)
# ---------------------------------------------------------------------------


@app.get("/board", response_model=BoardSnapshot)
def get_board() -> BoardSnapshot:
    """Current snapshot of every live piece."""
    return shared.snapshot()


@app.get("/board/{version}", response_model=BoardSnapshot)
def get_board_version(version: str) -> BoardSnapshot:
    """
    Snapshot no older than ``version`` (long poll).

    Answers immediately when the board's turn has reached ``version``.
    Otherwise waits for a committed move, up to LONG_POLL_TIMEOUT_S seconds,
    then answers with whatever the board holds; clients compare ``turn`` and
    poll again. Promotions alone never satisfy the wait.
    """
    wanted = _parse_int(version)
    return shared.wait_for_version(wanted, timeout=LONG_POLL_TIMEOUT_S)


@app.get(
    "/legal/{rank}/{file}/{window_rank}/{window_file}/{size}",
    response_model=LegalMovesResponse,
)
def get_legal(
    rank: str, file: str, window_rank: str, window_file: str, size: str
) -> LegalMovesResponse:
    """
    Legal destinations for the piece on (rank, file) inside a window.

    The window covers ranks [window_rank, window_rank + size) and files
    [window_file, window_file + size). Sizes above MAX_WINDOW_SIZE are
    rejected with the same 400 as malformed numbers.
    """
    origin = Square(_parse_int(rank), _parse_int(file))
    wr = _parse_int(window_rank)
    wf = _parse_int(window_file)
    side = _parse_int(size)
    if side > MAX_WINDOW_SIZE:
        raise HTTPException(status_code=400, detail="Bad request")

    squares = shared.legal_moves(origin, wr, wf, side)
    return LegalMovesResponse(moves=[(str(s.rank), str(s.file)) for s in squares])


@app.get("/move/{rank}/{file}/{to_rank}/{to_file}", response_model=MoveResponse)
def get_move(rank: str, file: str, to_rank: str, to_file: str) -> MoveResponse:
    """Apply a move if it is legal and wake every long poll."""
    origin = Square(_parse_int(rank), _parse_int(file))
    target = Square(_parse_int(to_rank), _parse_int(to_file))

    ok, turn = shared.submit_move(origin, target)
    if ok:
        _log.info("Move %s -> %s committed, turn=%d", tuple(origin), tuple(target), turn)
    return MoveResponse(ok=ok, turn=str(turn))


@app.get("/promote/{rank}/{file}/{piece_type}", response_model=PromoteResponse)
def get_promote(rank: str, file: str, piece_type: str) -> PromoteResponse:
    """
    Rewrite the type of the piece on (rank, file).

    The turn counter is not advanced, so long polls waiting for the next
    turn are not released by a promotion.
    """
    r = _parse_int(rank)
    f = _parse_int(file)
    if not piece_type:
        raise HTTPException(status_code=400, detail="Bad request")

    piece_id = shared.promote(r, f, piece_type)
    if piece_id is not None:
        _log.info("Promoted piece %d at %s to %s", piece_id, (r, f), piece_type)
    return PromoteResponse(piece=piece_id)


@app.get("/piece/{rank}/{file}", response_model=PieceRecord | None)
def get_piece(rank: str, file: str) -> PieceRecord | None:
    """The live piece on (rank, file), or null for an empty square."""
    return shared.piece_at(_parse_int(rank), _parse_int(file))


@app.get("/pawns/{file}/{width}", response_model=BoardSnapshot)
def get_pawns(file: str, width: str) -> BoardSnapshot:
    """
    Materialize both pawn ranks over files [file, file + width).

    Lets a client that scrolls to new files fetch their pawns in one request
    instead of one lookup per square. Widths above MAX_WINDOW_SIZE are
    rejected with a 400. Answers with the full snapshot afterwards.
    """
    start = _parse_int(file)
    count = _parse_int(width)
    if count > MAX_WINDOW_SIZE:
        raise HTTPException(status_code=400, detail="Bad request")
    return shared.prime_pawns(start, count)


@app.get("/", include_in_schema=False)
def serve_root() -> FileResponse:
    """Serve the browser client."""
    return FileResponse(_STATIC_DIR / "index.html")


# ---------------------------------------------------------------------------
# Static file mount — MUST be last (catch-all for /static/* assets)
# ---------------------------------------------------------------------------

app.mount("/static", StaticFiles(directory=_STATIC_DIR), name="static")
