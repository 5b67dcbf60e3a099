"""Notation package: canonical FEN text for board positions."""

from chesscore.core.notation.fen import STARTING_FEN, board_from_fen, board_to_fen

__all__ = [
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
