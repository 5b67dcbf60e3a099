"""Move legality, path obstruction and attack detection.

Every question here is answered against the shared direction / distance
classification of :func:`chesscore.core.types.measure_distance`, then
dispatched to one rule function per piece kind.  Hypothetical positions
(would this leave my king attacked? is castling through these squares
safe?) are evaluated on a full :meth:`Board.copy` that is thrown away
afterwards.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from chesscore.core.enums import Color, Direction, PieceKind
from chesscore.core.piece import Piece
from chesscore.core.types import Column, Coordinate, Relation, measure_distance, squares_between

if TYPE_CHECKING:
    from chesscore.core.board import Board


@dataclass(frozen=True, slots=True)
class MoveCheck:
    """Verdict on a candidate move and the side effects it implies.

    ``captured_color`` / ``captured_kind`` are only meaningful when
    ``is_capture`` is true.
    """

    legal: bool
    direction: Direction
    distance: int
    is_capture: bool = False
    captured_color: Color | None = None
    captured_kind: PieceKind | None = None
    # Square emptied by an en passant capture (differs from the destination).
    en_passant_victim: Coordinate | None = None
    # En passant target to record once this move is applied.
    new_en_passant: Coordinate | None = None


RuleFn = Callable[["Board", Piece, Coordinate, Coordinate, Relation, "Piece | None", bool], MoveCheck]

_PAWN_CAPTURES: dict[Color, tuple[Direction, Direction]] = {
    Color.WHITE: (Direction.UP_LEFT, Direction.UP_RIGHT),
    Color.BLACK: (Direction.DOWN_LEFT, Direction.DOWN_RIGHT),
}

_PAWN_FORWARD: dict[Color, Direction] = {
    Color.WHITE: Direction.UP,
    Color.BLACK: Direction.DOWN,
}


def _reject(relation: Relation) -> MoveCheck:
    return MoveCheck(False, relation.direction, relation.distance)


def _accept(relation: Relation, target: Piece | None, **effects: Coordinate | None) -> MoveCheck:
    if target is None:
        return MoveCheck(True, relation.direction, relation.distance, **effects)
    return MoveCheck(
        True,
        relation.direction,
        relation.distance,
        is_capture=True,
        captured_color=target.color,
        captured_kind=target.kind,
        **effects,
    )


# -- Path clearance ------------------------------------------------------------


def path_is_clear(board: Board, frm: Coordinate, to: Coordinate, direction: Direction) -> bool:
    """True unless a piece stands strictly between *frm* and *to*.

    Knight hops and non-moves have nothing in between and always pass.
    """
    for coord in squares_between(frm, to, direction):
        if not board.is_empty(coord):
            return False
    return True


# -- Per-kind rules ------------------------------------------------------------


def _pawn_rule(
    board: Board,
    piece: Piece,
    frm: Coordinate,
    to: Coordinate,
    relation: Relation,
    target: Piece | None,
    allow_castling: bool,
) -> MoveCheck:
    color = piece.color
    direction, distance = relation.direction, relation.distance

    if direction == _PAWN_FORWARD[color]:
        if target is not None:
            return _reject(relation)
        if distance == 1:
            return _accept(relation, None)
        if distance == 2 and frm.row == color.pawn_row:
            return _accept(relation, None, new_en_passant=frm.offset(0, color.forward))
        return _reject(relation)

    if direction in _PAWN_CAPTURES[color] and distance == 2:
        if target is not None:
            return _accept(relation, target)
        if board.en_passant is not None and to == board.en_passant:
            victim_sq = Coordinate(to.column, frm.row)
            victim = board[victim_sq]
            if victim == Piece(color.opposite, PieceKind.PAWN):
                return _accept(relation, victim, en_passant_victim=victim_sq)

    return _reject(relation)


def _knight_rule(
    board: Board,
    piece: Piece,
    frm: Coordinate,
    to: Coordinate,
    relation: Relation,
    target: Piece | None,
    allow_castling: bool,
) -> MoveCheck:
    if relation.direction == Direction.J_HOOK:
        return _accept(relation, target)
    return _reject(relation)


def _rook_rule(
    board: Board,
    piece: Piece,
    frm: Coordinate,
    to: Coordinate,
    relation: Relation,
    target: Piece | None,
    allow_castling: bool,
) -> MoveCheck:
    if relation.direction.is_orthogonal:
        return _accept(relation, target)
    return _reject(relation)


def _bishop_rule(
    board: Board,
    piece: Piece,
    frm: Coordinate,
    to: Coordinate,
    relation: Relation,
    target: Piece | None,
    allow_castling: bool,
) -> MoveCheck:
    if relation.direction.is_diagonal:
        return _accept(relation, target)
    return _reject(relation)


def _queen_rule(
    board: Board,
    piece: Piece,
    frm: Coordinate,
    to: Coordinate,
    relation: Relation,
    target: Piece | None,
    allow_castling: bool,
) -> MoveCheck:
    if relation.direction.is_sliding:
        return _accept(relation, target)
    return _reject(relation)


def _king_rule(
    board: Board,
    piece: Piece,
    frm: Coordinate,
    to: Coordinate,
    relation: Relation,
    target: Piece | None,
    allow_castling: bool,
) -> MoveCheck:
    direction, distance = relation.direction, relation.distance

    # Sum-distance: an orthogonal step measures 1, a diagonal step 2.
    if distance == 1 or (distance == 2 and direction.is_diagonal):
        return _accept(relation, target)

    if distance == 2 and direction.is_horizontal and allow_castling and target is None:
        if castle_is_available(board, piece.color, kingside=direction == Direction.RIGHT):
            return _accept(relation, None)

    return _reject(relation)


_RULES: dict[PieceKind, RuleFn] = {
    PieceKind.PAWN: _pawn_rule,
    PieceKind.KNIGHT: _knight_rule,
    PieceKind.BISHOP: _bishop_rule,
    PieceKind.ROOK: _rook_rule,
    PieceKind.QUEEN: _queen_rule,
    PieceKind.KING: _king_rule,
}


# -- Public API ----------------------------------------------------------------


def _geometry_check(
    board: Board, frm: Coordinate, to: Coordinate, allow_castling: bool
) -> MoveCheck:
    """Everything except the leave-own-king-attacked filter."""
    relation = measure_distance(frm, to)
    piece = board[frm]
    if piece is None:
        return _reject(relation)

    if relation.direction.is_sliding and not path_is_clear(board, frm, to, relation.direction):
        return _reject(relation)

    target = board[to]
    if target is not None and target.color == piece.color:
        return _reject(relation)

    return _RULES[piece.kind](board, piece, frm, to, relation, target, allow_castling)


def check_move(board: Board, frm: Coordinate, to: Coordinate) -> MoveCheck:
    """Full legality verdict for moving the piece on *frm* to *to*.

    Whose turn it is is not considered here; :meth:`Board.move_piece` checks
    that before calling in.
    """
    verdict = _geometry_check(board, frm, to, allow_castling=True)
    if not verdict.legal:
        return verdict
    target = board[to]
    if target is not None and target.kind == PieceKind.KING:
        # Kings are never captured; threat detection still sees the square.
        return replace(verdict, legal=False)

    mover = board[frm]
    assert mover is not None
    trial = board.copy()
    trial.commit(frm, to, verdict)
    if is_king_in_danger(trial, mover.color):
        return replace(verdict, legal=False)
    return verdict


def square_threatens_square(board: Board, frm: Coordinate, to: Coordinate) -> bool:
    """Could the piece on *frm* capture on *to*?

    Pawns only threaten their two forward diagonals, never the squares in
    front of them.  A pinned piece still threatens.
    """
    piece = board[frm]
    if piece is None:
        return False
    verdict = _geometry_check(board, frm, to, allow_castling=False)
    if not verdict.legal:
        return False
    if piece.kind == PieceKind.PAWN:
        return verdict.distance == 2 and not verdict.direction.is_vertical
    return True


def is_king_in_danger(board: Board, color: Color) -> bool:
    """Is *color*'s king (at its cached square) attacked by the other side?"""
    king_sq = board.king_square(color)
    for coord, _ in board.pieces(color.opposite):
        if square_threatens_square(board, coord, king_sq):
            return True
    return False


_CASTLING_HOPS: dict[bool, tuple[Column, Column]] = {
    True: (Column.F, Column.G),
    False: (Column.D, Column.C),
}


def castle_is_available(board: Board, color: Color, kingside: bool) -> bool:
    """Whether *color* may castle on the given wing right now.

    Requires the right to be intact, king and rook on their original
    squares with nothing between them, the king not in check, and the king
    unattacked on each square it crosses.
    """
    if not board.side(color).can_castle(kingside):
        return False

    row = color.home_row
    king_home = Coordinate(Column.E, row)
    rook_home = Coordinate(Column.H if kingside else Column.A, row)
    king = board[king_home]
    if king != Piece(color, PieceKind.KING) or board.king_square(color) != king_home:
        return False
    if board[rook_home] != Piece(color, PieceKind.ROOK):
        return False

    wing = Direction.RIGHT if kingside else Direction.LEFT
    if not path_is_clear(board, king_home, rook_home, wing):
        return False

    if is_king_in_danger(board, color):
        return False

    trial = board.copy()
    previous = king_home
    for column in _CASTLING_HOPS[kingside]:
        hop = Coordinate(column, row)
        trial[previous] = None
        trial[hop] = king
        trial.side(color).king_square = hop
        if is_king_in_danger(trial, color):
            return False
        previous = hop
    return True
