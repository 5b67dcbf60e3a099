"""High-level rules: legal targets, check, checkmate and stalemate."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from chesscore.core.enums import Color, Direction, MateState, PieceKind
from chesscore.core.legality import check_move, is_king_in_danger
from chesscore.core.types import Coordinate

if TYPE_CHECKING:
    from chesscore.core.board import Board
    from chesscore.core.piece import Piece

# 100 half-moves without a pawn move or capture ends the game.
HALFMOVE_LIMIT = 100


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

ROOK_DIRS: tuple[Direction, ...] = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)
BISHOP_DIRS: tuple[Direction, ...] = (
    Direction.UP_RIGHT,
    Direction.DOWN_RIGHT,
    Direction.UP_LEFT,
    Direction.DOWN_LEFT,
)
QUEEN_DIRS: tuple[Direction, ...] = ROOK_DIRS + BISHOP_DIRS

_SLIDER_DIRS: dict[PieceKind, tuple[Direction, ...]] = {
    PieceKind.ROOK: ROOK_DIRS,
    PieceKind.BISHOP: BISHOP_DIRS,
    PieceKind.QUEEN: QUEEN_DIRS,
}


def _ray(board: Board, start: Coordinate, direction: Direction) -> Iterator[Coordinate]:
    """Squares along *direction*, up to and including the first occupied one."""
    d_col, d_row = direction.step
    current = start.offset(d_col, d_row)
    while current is not None:
        yield current
        if not board.is_empty(current):
            return
        current = current.offset(d_col, d_row)


def _candidates(board: Board, coord: Coordinate, piece: Piece) -> Iterator[Coordinate]:
    """Geometric candidates for *piece*; legality is decided by ``check_move``."""
    if piece.kind == PieceKind.PAWN:
        step = piece.color.forward
        offsets: tuple[tuple[int, int], ...] = ((0, step), (0, 2 * step), (-1, step), (1, step))
    elif piece.kind == PieceKind.KNIGHT:
        offsets = KNIGHT_OFFSETS
    elif piece.kind == PieceKind.KING:
        offsets = KING_OFFSETS + ((2, 0), (-2, 0))
    else:
        for direction in _SLIDER_DIRS[piece.kind]:
            yield from _ray(board, coord, direction)
        return

    for d_col, d_row in offsets:
        target = coord.offset(d_col, d_row)
        if target is not None:
            yield target


def iter_legal_targets(board: Board, coord: Coordinate) -> Iterator[Coordinate]:
    piece = board[coord]
    if piece is None:
        return
    for target in _candidates(board, coord, piece):
        if check_move(board, coord, target).legal:
            yield target


def legal_targets(board: Board, coord: Coordinate) -> list[Coordinate]:
    """Squares the piece on *coord* may legally move to (empty if none)."""
    return list(iter_legal_targets(board, coord))


def legal_move_available(board: Board) -> bool:
    """Does the side to move have at least one legal move?"""
    for coord, _ in board.pieces(board.turn):
        for _target in iter_legal_targets(board, coord):
            return True
    return False


def king_checkmate_state(board: Board, color: Color) -> MateState:
    """Classify *color*'s king, *color* being the side to move."""
    in_danger = is_king_in_danger(board, color)
    can_move = legal_move_available(board)
    if in_danger:
        return MateState.CHECK if can_move else MateState.CHECKMATE
    return MateState.SAFE if can_move else MateState.STALEMATE


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def is_in_check(board: Board) -> bool:
        return is_king_in_danger(board, board.turn)

    @staticmethod
    def state(board: Board) -> MateState:
        return king_checkmate_state(board, board.turn)

    @staticmethod
    def is_checkmate(board: Board) -> bool:
        return Rules.state(board) == MateState.CHECKMATE

    @staticmethod
    def is_stalemate(board: Board) -> bool:
        return Rules.state(board) == MateState.STALEMATE

    @staticmethod
    def is_fifty_move_rule(board: Board, limit: int = HALFMOVE_LIMIT) -> bool:
        return board.halfmove_clock >= limit
