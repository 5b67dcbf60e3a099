"""Game management layer — controller, settings, state machine.

Quick start::

    from chesscore.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.submit("e2", "e4")
    ctrl.legal_targets("g8")  # [f6, h6]
"""

from chesscore.game.controller import GameController, GameEvents, parse_move_text
from chesscore.game.interfaces import GamePhase, GameSettings
from chesscore.game.state import GameState, MoveRecord

__all__ = [
    "GameController",
    "GameEvents",
    "GamePhase",
    "GameSettings",
    "GameState",
    "MoveRecord",
    "parse_move_text",
]
