"""Shared game-layer types: lifecycle phases and user settings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto

from chesscore.core.board import HALFMOVE_LIMIT
from chesscore.core.notation import STARTING_FEN

# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    GAME_OVER = auto()


# ── Settings data class ──────────────────────────────────────────────────────


@dataclass
class GameSettings:
    """All user-configurable settings."""

    # Position a new game starts from
    start_fen: str = STARTING_FEN

    # Half-moves without a pawn move or capture before the game is drawn
    halfmove_limit: int = HALFMOVE_LIMIT

    # Keep a board snapshot per move so moves can be taken back
    keep_history: bool = True

    def __post_init__(self) -> None:
        if self.halfmove_limit < 1:
            raise ValueError(f"halfmove_limit must be positive, got {self.halfmove_limit}")
