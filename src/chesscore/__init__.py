"""chesscore — chess move legality, move application and FEN text."""

__version__ = "0.1.0"
