"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from infinichess.board import Board
from infinichess.piece import Square
from infinichess.rules import StandardChess
from infinichess.setup_position import standard_setup


class AlwaysAllowed:
    """Rule set that accepts every shape; isolates the board's own filters."""

    def can_move(self, board: Board, piece_id: int, target: Square) -> bool:
        return True


@pytest.fixture
def board() -> Board:
    """An empty board with no back ranks."""
    return Board()


@pytest.fixture
def start_board() -> Board:
    """A board with both back ranks placed."""
    return standard_setup(Board())


@pytest.fixture
def rules() -> StandardChess:
    return StandardChess()


@pytest.fixture
def always_allowed() -> AlwaysAllowed:
    return AlwaysAllowed()
