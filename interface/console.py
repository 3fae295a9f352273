"""
Line-oriented console protocol for the infinite chess board.

Drives one in-process board from stdin, one command per line, with replies on
stdout. It is the scripting and benchmarking counterpart of the HTTP server:
same board, same rules, no network.

Protocol overview:
    board                         JSON snapshot of the board
    wait <version>                snapshot if turn >= version, else "pending <turn>"
    piece <rank> <file>           JSON piece record or "null"
    legal <r> <f> <wr> <wf> <n>   legal destinations inside an n x n window
    move <r> <f> <tr> <tf>        "ok <turn>" or "illegal <turn>"
    promote <r> <f> <type>        promoted piece id or "null"
    show <r> <f> <n>              text picture of an n x n window
    pawns <file> <width>          materialize both pawn ranks, then JSON snapshot
    new                           reset to the starting position
    quit                          exit

Critical rule: stdout carries protocol replies only. Diagnostics go to
stderr, including "error: bad request" for malformed integer arguments.
"""

import json
import logging
import os
import sys

# ---------------------------------------------------------------------------
# Path setup: make 'infinichess' importable when this script is run directly
# as `python interface/console.py` from the repo root.
# ---------------------------------------------------------------------------
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from infinichess.board import Board
from infinichess.constants import INTEGER_TEXT, MAX_WINDOW_SIZE
from infinichess.piece import Square
from infinichess.rules import StandardChess
from infinichess.serializer import board_serialize, piece_record
from infinichess.setup_position import prime_pawns, standard_setup

_log = logging.getLogger(__name__)


class BadRequest(ValueError):
    """A command argument could not be parsed."""


def _send(line: str) -> None:
    print(line, flush=True)


def _parse_ints(tokens: list[str], count: int) -> list[int]:
    if len(tokens) != count:
        raise BadRequest(f"expected {count} arguments, got {len(tokens)}")
    for token in tokens:
        if not INTEGER_TEXT.fullmatch(token):
            raise BadRequest(f"not an integer: {token!r}")
    try:
        return [int(token) for token in tokens]
    except ValueError as exc:
        raise BadRequest(str(exc)) from exc


class ConsoleHandler:
    """
    Stateful handler for the console protocol.

    Attributes:
        board: The board being played, reset by "new".
        rules: Rule set for legality checks.
    """

    def __init__(self) -> None:
        self.rules = StandardChess()
        self.board: Board = standard_setup(Board())

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_board(self, tokens: list[str]) -> None:
        _parse_ints(tokens, 0)
        _send(board_serialize(self.board))

    def handle_wait(self, tokens: list[str]) -> None:
        """
        Non-blocking version check.

        The console has a single client, so nothing could ever advance the
        turn while it waited; instead of blocking it reports "pending".
        """
        (version,) = _parse_ints(tokens, 1)
        if self.board.turn >= version:
            _send(board_serialize(self.board))
        else:
            _send(f"pending {self.board.turn}")

    def handle_piece(self, tokens: list[str]) -> None:
        rank, file = _parse_ints(tokens, 2)
        piece_id = self.board.get_piece_at(rank, file)
        if piece_id is None:
            _send("null")
        else:
            _send(piece_record(piece_id, self.board.piece(piece_id)).model_dump_json())

    def handle_legal(self, tokens: list[str]) -> None:
        rank, file, window_rank, window_file, size = _parse_ints(tokens, 5)
        if size > MAX_WINDOW_SIZE:
            raise BadRequest(f"window size {size} exceeds {MAX_WINDOW_SIZE}")
        squares = self.board.legal_moves(
            self.rules, Square(rank, file), window_rank, window_file, size
        )
        _send(json.dumps([[str(s.rank), str(s.file)] for s in squares]))

    def handle_move(self, tokens: list[str]) -> None:
        rank, file, to_rank, to_file = _parse_ints(tokens, 4)
        ok = self.board.try_move(self.rules, Square(rank, file), Square(to_rank, to_file))
        _send(f"{'ok' if ok else 'illegal'} {self.board.turn}")

    def handle_promote(self, tokens: list[str]) -> None:
        if len(tokens) != 3 or not tokens[2]:
            raise BadRequest("expected rank, file and piece type")
        rank, file = _parse_ints(tokens[:2], 2)
        piece_id = self.board.promote(rank, file, tokens[2])
        _send("null" if piece_id is None else str(piece_id))

    def handle_show(self, tokens: list[str]) -> None:
        """
        Print an n x n window, one rank per line, '.' for empty squares.

        Looking at a pawn rank materializes its pawns, exactly as a lookup
        from any other client would.
        """
        rank, file, size = _parse_ints(tokens, 3)
        if size > MAX_WINDOW_SIZE:
            raise BadRequest(f"window size {size} exceeds {MAX_WINDOW_SIZE}")
        for r in range(rank, rank + size):
            row = []
            for f in range(file, file + size):
                piece_id = self.board.get_piece_at(r, f)
                row.append("." if piece_id is None else self.board.piece(piece_id).symbol())
            _send("".join(row))

    def handle_pawns(self, tokens: list[str]) -> None:
        file, width = _parse_ints(tokens, 2)
        if width > MAX_WINDOW_SIZE:
            raise BadRequest(f"width {width} exceeds {MAX_WINDOW_SIZE}")
        prime_pawns(self.board, file, width)
        _send(board_serialize(self.board))

    def handle_new(self, tokens: list[str]) -> None:
        _parse_ints(tokens, 0)
        self.board = standard_setup(Board())

    def dispatch(self, command: str, args: list[str]) -> bool:
        """
        Run one command. Returns False when the loop should stop.

        Malformed arguments are reported on stderr and the board is left
        untouched.
        """
        if command == "quit":
            return False
        handler = getattr(self, f"handle_{command}", None)
        if handler is None:
            _log.warning("console: ignoring unknown command: %r", command)
            return True
        try:
            handler(args)
        except BadRequest as exc:
            _log.debug("console: bad request for %r: %s", command, exc)
            print("error: bad request", file=sys.stderr, flush=True)
        return True


def run_console_loop() -> None:
    """
    Main console loop.

    Reads lines from stdin and dispatches each command to a ConsoleHandler
    until "quit" or end of input.
    """
    handler = ConsoleHandler()

    for raw_line in sys.stdin:
        line = raw_line.strip()
        if not line:
            continue
        tokens = line.split()
        if not handler.dispatch(tokens[0], tokens[1:]):
            break


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, stream=sys.stderr)
    run_console_loop()
