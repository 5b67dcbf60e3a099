"""Game state machine — tracks phase transitions and move history."""

from __future__ import annotations

from dataclasses import dataclass, field

from chesscore.core.board import Board
from chesscore.core.enums import Color, MoveResult
from chesscore.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from chesscore.core.types import Coordinate
from chesscore.game.interfaces import GamePhase


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    from_square: Coordinate
    to_square: Coordinate
    result: MoveResult
    fen_after: str


@dataclass
class GameState:
    """Manages game lifecycle: board, phase, last result, move history.

    This is a pure data/logic class — no I/O, no UI.
    """

    board: Board = field(default_factory=Board.initial, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    result: MoveResult | None = field(default=None, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_fen: str = field(default=STARTING_FEN, init=False)
    _snapshots: list[Board] = field(default_factory=list, init=False, repr=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game.

        The FEN is decoded before anything is reset, so a bad string leaves
        the current game as it was.
        """
        start_fen = fen or STARTING_FEN
        board = board_from_fen(start_fen)
        self.start_fen = start_fen
        self.board = board
        self.phase = GamePhase.AWAITING_MOVE
        self.result = None
        self.move_history.clear()
        self._snapshots.clear()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(
        self,
        frm: Coordinate,
        to: Coordinate,
        *,
        halfmove_limit: int,
        keep_snapshot: bool = True,
    ) -> MoveResult:
        """Ask the board to play *frm* → *to* and record the outcome."""
        if self.phase != GamePhase.AWAITING_MOVE:
            return MoveResult.MOVE_ILLEGAL

        snapshot = self.board.copy() if keep_snapshot else None
        result = self.board.move_piece(frm, to, halfmove_limit=halfmove_limit)
        if not result.is_applied:
            return result

        if snapshot is not None:
            self._snapshots.append(snapshot)
        self.move_history.append(
            MoveRecord(
                from_square=frm,
                to_square=to,
                result=result,
                fen_after=board_to_fen(self.board),
            )
        )
        self.result = result
        if result.is_game_over:
            self.phase = GamePhase.GAME_OVER
        return result

    def undo_last_move(self) -> MoveRecord | None:
        """Restore the board from before the last move, if a snapshot exists."""
        if not self.move_history or not self._snapshots:
            return None

        record = self.move_history.pop()
        self.board = self._snapshots.pop()
        self.result = self.move_history[-1].result if self.move_history else None
        self.phase = GamePhase.AWAITING_MOVE
        return record

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.board.turn

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    def fen(self) -> str:
        return board_to_fen(self.board)
