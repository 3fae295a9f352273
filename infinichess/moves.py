"""Append-only history of applied moves."""

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Move:
    """One applied move. Only the identity of the moving piece is kept."""

    piece: int


class MoveHistory:
    """Moves in application order. Entries are never removed or rewritten."""

    def __init__(self) -> None:
        self._moves: list[Move] = []

    def append(self, move: Move) -> None:
        self._moves.append(move)

    def last(self) -> int | None:
        """Id of the most recently moved piece, or None before the first move."""
        return self._moves[-1].piece if self._moves else None

    def has_moved(self, piece_id: int) -> bool:
        return any(move.piece == piece_id for move in self._moves)

    def __iter__(self) -> Iterator[Move]:
        return iter(self._moves)

    def __len__(self) -> int:
        return len(self._moves)
