"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Row step of this side's pawns (+1 for white, -1 for black)."""
        return 1 if self == Color.WHITE else -1

    @property
    def home_row(self) -> int:
        """Row holding this side's king and rooks at the start."""
        return 1 if self == Color.WHITE else 8

    @property
    def pawn_row(self) -> int:
        """Row holding this side's pawns at the start."""
        return 2 if self == Color.WHITE else 7

    def __str__(self) -> str:
        return "w" if self == Color.WHITE else "b"


class PieceKind(IntEnum):
    """Piece kinds, in display order for captured-piece lists."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def value_points(self) -> int:
        """Conventional material value (the king carries none)."""
        return _MATERIAL_VALUES[self]


_MATERIAL_VALUES: dict[PieceKind, int] = {
    PieceKind.PAWN: 1,
    PieceKind.KNIGHT: 3,
    PieceKind.BISHOP: 3,
    PieceKind.ROOK: 5,
    PieceKind.QUEEN: 9,
    PieceKind.KING: 0,
}


class Direction(Enum):
    """Relationship between two squares as seen from the first one."""

    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UP_LEFT = (-1, 1)
    UP_RIGHT = (1, 1)
    DOWN_LEFT = (-1, -1)
    DOWN_RIGHT = (1, -1)
    J_HOOK = "j-hook"
    NO_MOVE = "no-move"
    ILLEGAL = "illegal"

    @property
    def is_orthogonal(self) -> bool:
        return self in (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @property
    def is_diagonal(self) -> bool:
        return self in (
            Direction.UP_LEFT,
            Direction.UP_RIGHT,
            Direction.DOWN_LEFT,
            Direction.DOWN_RIGHT,
        )

    @property
    def is_sliding(self) -> bool:
        """Directions along which a path can be obstructed."""
        return self.is_orthogonal or self.is_diagonal

    @property
    def step(self) -> tuple[int, int]:
        """Unit (column, row) step; only defined for sliding directions."""
        if not self.is_sliding:
            raise ValueError(f"{self.name} has no unit step")
        return self.value


class MateState(IntEnum):
    """Safety classification of a side's king."""

    SAFE = auto()
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()


class MoveResult(IntEnum):
    """Outcome of a move-application request."""

    COMPLETED_SAFELY = auto()
    WHITE_KING_CHECKED = auto()
    BLACK_KING_CHECKED = auto()
    WHITE_KING_CHECKMATED = auto()
    BLACK_KING_CHECKMATED = auto()
    STALEMATE = auto()
    WRONG_TURN = auto()
    MOVE_ILLEGAL = auto()
    EMPTY_SQUARE = auto()

    @property
    def is_applied(self) -> bool:
        """Whether the board was mutated to produce this result."""
        return self not in (
            MoveResult.WRONG_TURN,
            MoveResult.MOVE_ILLEGAL,
            MoveResult.EMPTY_SQUARE,
        )

    @property
    def is_game_over(self) -> bool:
        return self in (
            MoveResult.WHITE_KING_CHECKMATED,
            MoveResult.BLACK_KING_CHECKMATED,
            MoveResult.STALEMATE,
        )

    @classmethod
    def from_mate_state(cls, state: MateState, color: Color) -> MoveResult:
        """Map *color*'s king state after a move to the caller-visible result."""
        if state == MateState.CHECK:
            return cls.WHITE_KING_CHECKED if color == Color.WHITE else cls.BLACK_KING_CHECKED
        if state == MateState.CHECKMATE:
            return (
                cls.WHITE_KING_CHECKMATED
                if color == Color.WHITE
                else cls.BLACK_KING_CHECKMATED
            )
        if state == MateState.STALEMATE:
            return cls.STALEMATE
        return cls.COMPLETED_SAFELY
