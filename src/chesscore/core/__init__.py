"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chesscore.core import Board, MoveResult, parse_coordinate

    board = Board.initial()
    result = board.move_piece(parse_coordinate("e2"), parse_coordinate("e4"))
    assert result == MoveResult.COMPLETED_SAFELY
"""

from chesscore.core.board import HALFMOVE_LIMIT, Board, SideInfo
from chesscore.core.enums import Color, Direction, MateState, MoveResult, PieceKind
from chesscore.core.errors import (
    BoardInvariantError,
    ChessError,
    FenError,
    InvalidCoordinateError,
    InvalidMoveTextError,
)
from chesscore.core.legality import (
    MoveCheck,
    castle_is_available,
    check_move,
    is_king_in_danger,
    path_is_clear,
    square_threatens_square,
)
from chesscore.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from chesscore.core.piece import Piece
from chesscore.core.rules import (
    Rules,
    king_checkmate_state,
    legal_move_available,
    legal_targets,
)
from chesscore.core.types import (
    Column,
    Coordinate,
    Relation,
    measure_distance,
    parse_coordinate,
    squares_between,
)

__all__ = [
    # Enums
    "Color",
    "Direction",
    "MateState",
    "MoveResult",
    "PieceKind",
    # Errors
    "BoardInvariantError",
    "ChessError",
    "FenError",
    "InvalidCoordinateError",
    "InvalidMoveTextError",
    # Types / helpers
    "Column",
    "Coordinate",
    "Relation",
    "measure_distance",
    "parse_coordinate",
    "squares_between",
    # Domain objects
    "Board",
    "HALFMOVE_LIMIT",
    "MoveCheck",
    "Piece",
    "Rules",
    "SideInfo",
    # Legality
    "castle_is_available",
    "check_move",
    "is_king_in_danger",
    "path_is_clear",
    "square_threatens_square",
    "king_checkmate_state",
    "legal_move_available",
    "legal_targets",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
