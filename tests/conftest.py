"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chesscore.core.board import Board
from chesscore.core.enums import MoveResult
from chesscore.core.types import parse_coordinate

PlayFn = Callable[..., list[MoveResult]]


@pytest.fixture
def board() -> Board:
    """A fresh board in the standard starting position."""
    return Board.initial()


def play_moves(board: Board, *moves: str) -> list[MoveResult]:
    """Apply moves written as ``"e2e4"`` and return every result."""
    results: list[MoveResult] = []
    for move in moves:
        frm = parse_coordinate(move[:2])
        to = parse_coordinate(move[2:])
        results.append(board.move_piece(frm, to))
    return results


@pytest.fixture
def play() -> PlayFn:
    return play_moves
