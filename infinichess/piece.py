"""
Squares, colors, and piece records.

A piece is identified by its index in the board's arena, not by the object
itself; the record here only carries the mutable attributes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

import chess

from infinichess.constants import STANDARD_PIECE_TYPES


class Square(NamedTuple):
    """A (rank, file) coordinate. Both components are unbounded ints."""

    rank: int
    file: int


class Color(Enum):
    WHITE = "white"
    BLACK = "black"


@dataclass
class Piece:
    """
    Mutable piece record stored in the board's arena.

    Attributes:
        piece_type: Type label ("pawn", "knight", ...). Open-ended so that
                    variant rule sets can introduce their own pieces.
        color:      Owning side.
        rank:       Current rank.
        file:       Current file.
        captured:   Tombstone flag. Captured pieces stay in the arena so their
                    ids remain valid for the move history.
    """

    piece_type: str
    color: Color
    rank: int
    file: int
    captured: bool = False

    @property
    def square(self) -> Square:
        return Square(self.rank, self.file)

    def goto(self, rank: int, file: int) -> None:
        self.rank = rank
        self.file = file

    def capture(self) -> None:
        self.captured = True

    def symbol(self) -> str:
        """
        Single-character symbol: uppercase for White, lowercase for Black.

        Standard types use python-chess's letters; unknown labels fall back
        to their first character.
        """
        if self.piece_type in STANDARD_PIECE_TYPES:
            letter = chess.piece_symbol(chess.PIECE_NAMES.index(self.piece_type))
        else:
            letter = (self.piece_type[:1] or "?").lower()
        return letter.upper() if self.color is Color.WHITE else letter
