"""Coordinates and the square-to-square direction model.

Columns are letters A–H (index 0–7), rows are the algebraic numbers 1–8.
Distances are the *sum* of the column and row deltas, so a one-square
diagonal step measures 2 and a knight hop measures 3.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from chesscore.core.enums import Direction
from chesscore.core.errors import InvalidCoordinateError


class Column(IntEnum):
    """Board file with a bijection to 0–7."""

    A = 0
    B = 1
    C = 2
    D = 3
    E = 4
    F = 5
    G = 6
    H = 7

    @property
    def letter(self) -> str:
        return self.name.lower()

    @classmethod
    def from_index(cls, index: int) -> Column:
        if not 0 <= index <= 7:
            raise InvalidCoordinateError(f"Column index out of range: {index}")
        return cls(index)

    @classmethod
    def from_letter(cls, letter: str) -> Column:
        """Parse a column letter, ignoring case."""
        if len(letter) != 1 or letter.lower() not in "abcdefgh":
            raise InvalidCoordinateError(f"Invalid column letter: {letter!r}")
        return cls(ord(letter.lower()) - ord("a"))


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A square address: column plus row 1–8."""

    column: Column
    row: int

    def __post_init__(self) -> None:
        if not isinstance(self.column, Column):
            raise InvalidCoordinateError(f"Invalid column: {self.column!r}")
        if isinstance(self.row, bool) or not isinstance(self.row, int):
            raise InvalidCoordinateError(f"Invalid row: {self.row!r}")
        if not 1 <= self.row <= 8:
            raise InvalidCoordinateError(f"Row out of range: {self.row}")

    def __str__(self) -> str:
        return f"{self.column.letter}{self.row}"

    def __repr__(self) -> str:
        return f"Coordinate({self})"

    def offset(self, d_col: int, d_row: int) -> Coordinate | None:
        """Coordinate shifted by the given deltas, or ``None`` off the board."""
        col = self.column + d_col
        row = self.row + d_row
        if 0 <= col <= 7 and 1 <= row <= 8:
            return Coordinate(Column(col), row)
        return None


def parse_coordinate(text: str) -> Coordinate:
    """Parse algebraic text such as ``'e4'`` or ``'E4'``."""
    if not isinstance(text, str) or len(text) != 2:
        raise InvalidCoordinateError(f"Invalid square name: {text!r}")
    column = Column.from_letter(text[0])
    if text[1] not in "12345678":
        raise InvalidCoordinateError(f"Invalid row in square name: {text!r}")
    return Coordinate(column, int(text[1]))


def all_coordinates() -> tuple[Coordinate, ...]:
    """Every square, a1, b1, … h1, a2, … h8."""
    return _ALL_COORDINATES


_ALL_COORDINATES: tuple[Coordinate, ...] = tuple(
    Coordinate(column, row) for row in range(1, 9) for column in Column
)


# -- Direction / distance ------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Relation:
    """Direction and sum-distance from one square to another."""

    direction: Direction
    distance: int


_NO_RELATION = Relation(Direction.NO_MOVE, 0)

_DIAGONALS: dict[tuple[bool, bool], Direction] = {
    # (moving up, moving right)
    (True, True): Direction.UP_RIGHT,
    (True, False): Direction.UP_LEFT,
    (False, True): Direction.DOWN_RIGHT,
    (False, False): Direction.DOWN_LEFT,
}


def measure_distance(frm: Coordinate, to: Coordinate) -> Relation:
    """Classify the move *frm* → *to*."""
    if not (1 <= frm.row <= 8 and 1 <= to.row <= 8):
        return _NO_RELATION

    d_col = to.column - frm.column
    d_row = to.row - frm.row
    lateral = abs(d_col)
    vertical = abs(d_row)
    distance = lateral + vertical

    if d_col == 0 and d_row == 0:
        direction = Direction.NO_MOVE
    elif d_col == 0:
        direction = Direction.UP if d_row > 0 else Direction.DOWN
    elif d_row == 0:
        direction = Direction.RIGHT if d_col > 0 else Direction.LEFT
    elif lateral == vertical:
        direction = _DIAGONALS[(d_row > 0, d_col > 0)]
    elif (lateral, vertical) in ((1, 2), (2, 1)):
        direction = Direction.J_HOOK
    else:
        direction = Direction.ILLEGAL
    return Relation(direction, distance)


def squares_between(
    frm: Coordinate, to: Coordinate, direction: Direction
) -> list[Coordinate]:
    """Coordinates strictly between *frm* and *to*, in travel order.

    Empty for directions that cannot be obstructed (knight hops, no move,
    illegal geometry).
    """
    if not direction.is_sliding:
        return []
    d_col, d_row = direction.step
    between: list[Coordinate] = []
    current = frm.offset(d_col, d_row)
    while current is not None and current != to:
        between.append(current)
        current = current.offset(d_col, d_row)
    return between


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Coordinate(c, 1) for c in Column)
A2, B2, C2, D2, E2, F2, G2, H2 = (Coordinate(c, 2) for c in Column)
A3, B3, C3, D3, E3, F3, G3, H3 = (Coordinate(c, 3) for c in Column)
A4, B4, C4, D4, E4, F4, G4, H4 = (Coordinate(c, 4) for c in Column)
A5, B5, C5, D5, E5, F5, G5, H5 = (Coordinate(c, 5) for c in Column)
A6, B6, C6, D6, E6, F6, G6, H6 = (Coordinate(c, 6) for c in Column)
A7, B7, C7, D7, E7, F7, G7, H7 = (Coordinate(c, 7) for c in Column)
A8, B8, C8, D8, E8, F8, G8, H8 = (Coordinate(c, 8) for c in Column)
