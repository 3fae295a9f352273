"""
JSON form of pieces and boards.

Coordinates and the turn counter are arbitrary-precision ints. JSON numbers
lose precision past 2**53 in browser clients, so every such value travels as
a decimal string and is parsed back with int().

Wire format (BoardSnapshot):
    {
      "turn": "12",
      "pieces": [{"id": 0, "type": "rook", "color": "black",
                  "rank": "0", "file": "0"}, ...],
      "white_pawn_files": ["-3", "4", ...],
      "black_pawn_files": ["0", ...]
    }

Only live pieces are listed. The pawn-file lists record which default pawns
have already been materialized, so a rebuilt board does not create them a
second time.
"""

from pydantic import BaseModel, Field, field_validator

from infinichess.board import Board
from infinichess.constants import INTEGER_TEXT
from infinichess.piece import Color, Piece


def _integer_text(value: object) -> str:
    """Normalize an int or decimal string to canonical decimal text."""
    if isinstance(value, bool):
        raise ValueError("expected an integer")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and INTEGER_TEXT.fullmatch(value):
        return str(int(value))
    raise ValueError("expected an integer")


class PieceRecord(BaseModel):
    id: int
    type: str = Field(min_length=1)
    color: Color
    rank: str
    file: str

    @field_validator("rank", "file", mode="before")
    @classmethod
    def integral(cls, v: object) -> str:
        return _integer_text(v)


class BoardSnapshot(BaseModel):
    turn: str = "0"
    pieces: list[PieceRecord] = []
    white_pawn_files: list[str] = []
    black_pawn_files: list[str] = []

    @field_validator("turn", mode="before")
    @classmethod
    def integral_turn(cls, v: object) -> str:
        return _integer_text(v)

    @field_validator("white_pawn_files", "black_pawn_files", mode="before")
    @classmethod
    def integral_files(cls, v: object) -> list[str]:
        if not isinstance(v, (list, tuple)):
            raise ValueError("expected a list of integers")
        return [_integer_text(item) for item in v]


def piece_record(piece_id: int, piece: Piece) -> PieceRecord:
    return PieceRecord(
        id=piece_id,
        type=piece.piece_type,
        color=piece.color,
        rank=str(piece.rank),
        file=str(piece.file),
    )


def board_snapshot(board: Board) -> BoardSnapshot:
    return BoardSnapshot(
        turn=str(board.turn),
        pieces=[piece_record(i, p) for i, p in board.active_pieces()],
        white_pawn_files=[str(f) for f in sorted(board.white_pawns)],
        black_pawn_files=[str(f) for f in sorted(board.black_pawns)],
    )


def board_serialize(board: Board) -> str:
    return board_snapshot(board).model_dump_json()


def board_deserialize(board: Board, text: str) -> Board:
    """
    Load a serialized board into an empty Board.

    Pieces are placed in listed order, so ids are renumbered densely; the
    turn counter and pawn trackers are restored. Raises
    pydantic.ValidationError for malformed input.
    """
    snapshot = BoardSnapshot.model_validate_json(text)
    for record in snapshot.pieces:
        board.place_piece(
            Piece(record.type, record.color, int(record.rank), int(record.file))
        )
    for file in snapshot.white_pawn_files:
        board.white_pawns.mark_materialized(int(file))
    for file in snapshot.black_pawn_files:
        board.black_pawns.mark_materialized(int(file))
    board.turn = int(snapshot.turn)
    return board
