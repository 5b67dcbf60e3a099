"""GameController — the surface an interactive front end talks to.

A command loop submits moves as algebraic text and gets a
:class:`MoveResult` back; a display layer asks for the legal targets of a
square.  Listeners can subscribe to applied moves and to game over.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from chesscore.core.enums import MoveResult
from chesscore.core.errors import InvalidMoveTextError
from chesscore.core.rules import legal_targets
from chesscore.core.types import Coordinate, parse_coordinate
from chesscore.game.interfaces import GamePhase, GameSettings
from chesscore.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

_MOVE_TEXT = re.compile(r"^\s*([a-hA-H][1-8])\s*[- ]?\s*([a-hA-H][1-8])\s*$")

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
GameOverCallback = Callable[[MoveResult], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


def parse_move_text(text: str) -> tuple[Coordinate, Coordinate]:
    """Split ``'e2e4'``, ``'e2 e4'`` or ``'e2-e4'`` into two coordinates."""
    match = _MOVE_TEXT.match(text)
    if match is None:
        raise InvalidMoveTextError(f"Invalid move text: {text!r}")
    return parse_coordinate(match.group(1)), parse_coordinate(match.group(2))


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Owns one game: validates input text, applies moves, notifies listeners.

    Thread-safety: methods are meant to be called from a single thread; a
    display query must not run while a move is being applied.
    """

    __slots__ = ("_settings", "_state", "events")

    def __init__(self, settings: GameSettings | None = None) -> None:
        self._settings = settings if settings is not None else GameSettings()
        self._state = GameState()
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        """Start over from *fen*, or from the configured start position.

        Raises :class:`FenError` for a malformed *fen*; the running game is
        then left untouched.
        """
        self._state.setup(fen or self._settings.start_fen)
        _LOGGER.debug("New game from %s", self._state.start_fen)

    def submit(self, from_text: str, to_text: str) -> MoveResult:
        """Play a move given as two algebraic squares, e.g. ``("e2", "e4")``.

        Malformed squares raise :class:`InvalidCoordinateError` before the
        board is touched.
        """
        frm = parse_coordinate(from_text)
        to = parse_coordinate(to_text)
        return self.submit_move(frm, to)

    def submit_text(self, move_text: str) -> MoveResult:
        """Play a move given as one string, e.g. ``"e2e4"``."""
        frm, to = parse_move_text(move_text)
        return self.submit_move(frm, to)

    def submit_move(self, frm: Coordinate, to: Coordinate) -> MoveResult:
        self._ensure_started()
        result = self._state.apply_move(
            frm,
            to,
            halfmove_limit=self._settings.halfmove_limit,
            keep_snapshot=self._settings.keep_history,
        )
        if not result.is_applied:
            _LOGGER.debug("Move %s-%s refused: %s", frm, to, result.name)
            return result

        record = self._state.move_history[-1]
        for cb in self.events.on_move:
            cb(record, self._state)

        if result.is_game_over:
            _LOGGER.info("Game over after %d plies: %s", self._state.ply_count, result.name)
            for cb in self.events.on_game_over:
                cb(result)
        return result

    def undo_move(self) -> bool:
        """Take back the last move. False when there is nothing to undo."""
        return self._state.undo_last_move() is not None

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_targets(self, square_text: str) -> list[Coordinate]:
        """Legal destinations of the piece on *square_text*, in a stable order."""
        coord = parse_coordinate(square_text)
        self._ensure_started()
        return legal_targets(self._state.board, coord)

    def fen(self) -> str:
        self._ensure_started()
        return self._state.fen()

    def _ensure_started(self) -> None:
        # Queries and moves before new_game() see the configured start position.
        if self._state.phase == GamePhase.NOT_STARTED:
            self.new_game()
