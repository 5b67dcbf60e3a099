"""Exception hierarchy.

Input problems (bad coordinates, bad move text, bad FEN) subclass
:class:`ValueError` and are meant to be caught and reported by the caller.
:class:`BoardInvariantError` means the board was already corrupt; it is a
programming error, not an input error.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by this package."""


class InvalidCoordinateError(ChessError, ValueError):
    """A coordinate is malformed or off the board."""


class InvalidMoveTextError(ChessError, ValueError):
    """Move text could not be split into two coordinates."""


class FenError(ChessError, ValueError):
    """A serialised position could not be decoded."""


class BoardInvariantError(ChessError, RuntimeError):
    """The board contradicts its own invariants (missing king, stale cache…)."""
