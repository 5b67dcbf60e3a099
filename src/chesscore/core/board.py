"""Board — the 8x8 grid plus per-side metadata, mutated one move at a time."""

from __future__ import annotations

import logging
from bisect import insort
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field

from chesscore.core import legality, rules
from chesscore.core.enums import Color, Direction, MoveResult, PieceKind
from chesscore.core.errors import BoardInvariantError
from chesscore.core.piece import Piece
from chesscore.core.types import Column, Coordinate, all_coordinates

_LOGGER = logging.getLogger(__name__)

HALFMOVE_LIMIT = rules.HALFMOVE_LIMIT

STARTING_ALLOTMENT: dict[PieceKind, int] = {
    PieceKind.PAWN: 8,
    PieceKind.KNIGHT: 2,
    PieceKind.BISHOP: 2,
    PieceKind.ROOK: 2,
    PieceKind.QUEEN: 1,
    PieceKind.KING: 1,
}

_BACK_ROW: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)

Row = list[Piece | None]


def _kind_letters(kinds: list[PieceKind]) -> str:
    return " ".join(str(Piece(Color.WHITE, kind)) for kind in kinds)


@dataclass(slots=True)
class SideInfo:
    """Per-side state that is not visible on the grid itself."""

    king_square: Coordinate | None = None
    can_castle_kingside: bool = True
    can_castle_queenside: bool = True
    # Kinds this side has captured, kept sorted for display.
    captured: list[PieceKind] = field(default_factory=list)

    def can_castle(self, kingside: bool) -> bool:
        return self.can_castle_kingside if kingside else self.can_castle_queenside

    def revoke_castling(self, kingside: bool) -> None:
        if kingside:
            self.can_castle_kingside = False
        else:
            self.can_castle_queenside = False

    def move_king(self, to: Coordinate) -> None:
        """Record the king's new square; any king move forfeits castling."""
        self.king_square = to
        self.can_castle_kingside = False
        self.can_castle_queenside = False

    def add_captured(self, kind: PieceKind) -> None:
        insort(self.captured, kind)

    @property
    def material_captured(self) -> int:
        return sum(kind.value_points for kind in self.captured)

    def copy(self) -> SideInfo:
        return SideInfo(
            king_square=self.king_square,
            can_castle_kingside=self.can_castle_kingside,
            can_castle_queenside=self.can_castle_queenside,
            captured=self.captured.copy(),
        )


class Board:
    """Complete position: grid, side to move, castling, en passant, clocks.

    Row index 0 of the grid holds rank 8, index 7 holds rank 1.  Every
    change to a live board goes through :meth:`move_piece`; hypothetical
    moves are tried on a :meth:`copy`.
    """

    __slots__ = (
        "_rows",
        "_sides",
        "turn",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
    )

    def __init__(self) -> None:
        self._rows: list[Row] = [[None] * 8 for _ in range(8)]
        self._sides: tuple[SideInfo, SideInfo] = (SideInfo(), SideInfo())
        self.turn = Color.WHITE
        self.en_passant: Coordinate | None = None
        self.halfmove_clock = 0
        self.fullmove_number = 1

    # -- Factories ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        """Blank grid with no kings and no castling rights."""
        board = cls()
        for side in board._sides:
            side.can_castle_kingside = False
            side.can_castle_queenside = False
        return board

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        board = cls()
        for color in Color:
            for column, kind in zip(Column, _BACK_ROW):
                board[Coordinate(column, color.home_row)] = Piece(color, kind)
                board[Coordinate(column, color.pawn_row)] = Piece(color, PieceKind.PAWN)
            board.side(color).king_square = Coordinate(Column.E, color.home_row)
        return board

    # -- Element access -------------------------------------------------------

    @staticmethod
    def _index(coord: Coordinate) -> tuple[int, int]:
        return 8 - coord.row, int(coord.column)

    def __getitem__(self, coord: Coordinate) -> Piece | None:
        row_idx, col_idx = self._index(coord)
        return self._rows[row_idx][col_idx]

    def __setitem__(self, coord: Coordinate, piece: Piece | None) -> None:
        """Raw grid write; side metadata is left untouched."""
        row_idx, col_idx = self._index(coord)
        self._rows[row_idx][col_idx] = piece

    def is_empty(self, coord: Coordinate) -> bool:
        return self[coord] is None

    def rows(self) -> list[tuple[Piece | None, ...]]:
        """Snapshot of the grid, rank 8 first."""
        return [tuple(row) for row in self._rows]

    def side(self, color: Color) -> SideInfo:
        return self._sides[int(color)]

    def king_square(self, color: Color) -> Coordinate:
        """Cached square of *color*'s king."""
        sq = self._sides[int(color)].king_square
        if sq is None:
            raise BoardInvariantError(f"No {color.name} king on board")
        return sq

    def pieces(self, color: Color) -> Iterator[tuple[Coordinate, Piece]]:
        """Occupied squares of *color*, a1 to h8."""
        for coord in all_coordinates():
            piece = self[coord]
            if piece is not None and piece.color == color:
                yield coord, piece

    # -- Copying / comparison -------------------------------------------------

    def copy(self) -> Board:
        """Fully independent clone."""
        board = Board()
        board._rows = [row.copy() for row in self._rows]
        board._sides = (self._sides[0].copy(), self._sides[1].copy())
        board.turn = self.turn
        board.en_passant = self.en_passant
        board.halfmove_clock = self.halfmove_clock
        board.fullmove_number = self.fullmove_number
        return board

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._rows == other._rows
            and self._sides == other._sides
            and self.turn == other.turn
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    __hash__ = None  # type: ignore[assignment]

    # -- Move application -----------------------------------------------------

    def move_piece(
        self,
        frm: Coordinate,
        to: Coordinate,
        *,
        halfmove_limit: int = HALFMOVE_LIMIT,
    ) -> MoveResult:
        """Validate and apply *frm* → *to*, returning the outcome.

        Rejections (empty square, wrong turn, illegal move) leave the board
        untouched.  After an applied move the result describes the state of
        the side that now has to move.
        """
        piece = self[frm]
        if piece is None:
            return MoveResult.EMPTY_SQUARE
        if piece.color != self.turn:
            return MoveResult.WRONG_TURN

        check = legality.check_move(self, frm, to)
        if not check.legal:
            _LOGGER.debug("Rejected %s %s-%s", piece, frm, to)
            return MoveResult.MOVE_ILLEGAL

        self.commit(frm, to, check)
        _LOGGER.debug("Applied %s %s-%s", piece, frm, to)

        if self.halfmove_clock >= halfmove_limit:
            return MoveResult.STALEMATE

        opponent = piece.color.opposite
        state = rules.king_checkmate_state(self, opponent)
        return MoveResult.from_mate_state(state, opponent)

    def commit(self, frm: Coordinate, to: Coordinate, check: legality.MoveCheck) -> None:
        """Apply an already-validated move as one transaction.

        Runs on live boards from :meth:`move_piece` and on clones inside the
        legality engine.  Does not classify the resulting position.
        """
        piece = self[frm]
        if piece is None:
            raise BoardInvariantError(f"Committing a move from empty square {frm}")
        side = self.side(piece.color)

        # King / rook bookkeeping against the pre-move grid.
        if piece.kind == PieceKind.KING:
            if check.distance == 2 and check.direction.is_horizontal:
                self._castle(piece.color, kingside=check.direction == Direction.RIGHT)
            side.move_king(to)
        elif piece.kind == PieceKind.ROOK:
            if frm.column == Column.A:
                side.revoke_castling(kingside=False)
            elif frm.column == Column.H:
                side.revoke_castling(kingside=True)

        captured = self[to]
        if captured is not None and captured.kind == PieceKind.ROOK:
            self._revoke_corner_rights(captured.color, to)

        self.en_passant = check.new_en_passant

        self[frm] = None
        self[to] = piece

        if check.en_passant_victim is not None:
            self[check.en_passant_victim] = None

        if check.is_capture:
            side.add_captured(check.captured_kind)

        if piece.kind == PieceKind.PAWN or check.is_capture:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if self.turn == Color.BLACK:
            self.fullmove_number += 1
        self.turn = self.turn.opposite

    def _castle(self, color: Color, kingside: bool) -> None:
        """Move king and rook to their castled squares in one step."""
        row = color.home_row
        king_from = Coordinate(Column.E, row)
        rook_from = Coordinate(Column.H if kingside else Column.A, row)
        king = self[king_from]
        rook = self[rook_from]
        if king != Piece(color, PieceKind.KING):
            raise BoardInvariantError(f"Castling without a {color.name} king on {king_from}")
        if rook != Piece(color, PieceKind.ROOK):
            raise BoardInvariantError(f"Castling without a {color.name} rook on {rook_from}")

        self[king_from] = None
        self[rook_from] = None
        self[Coordinate(Column.G if kingside else Column.C, row)] = king
        self[Coordinate(Column.F if kingside else Column.D, row)] = rook
        _LOGGER.debug("%s castles %s", color.name, "kingside" if kingside else "queenside")

    def _revoke_corner_rights(self, color: Color, square: Coordinate) -> None:
        """A rook captured on its original corner takes its right with it."""
        if square.row != color.home_row:
            return
        if square.column == Column.A:
            self.side(color).revoke_castling(kingside=False)
        elif square.column == Column.H:
            self.side(color).revoke_castling(kingside=True)

    # -- Material / invariants -----------------------------------------------

    def sync_king_squares(self) -> None:
        """Set the king caches from the grid (used when building a board)."""
        for color in Color:
            kings = [c for c, p in self.pieces(color) if p.kind == PieceKind.KING]
            if len(kings) != 1:
                raise BoardInvariantError(
                    f"Expected one {color.name} king, found {len(kings)}"
                )
            self.side(color).king_square = kings[0]

    def reconcile_material(self) -> None:
        """Rebuild both captured lists from the starting allotment."""
        for color in Color:
            on_board = Counter(p.kind for _, p in self.pieces(color))
            if on_board[PieceKind.KING] == 0:
                raise BoardInvariantError(f"No {color.name} king on board")
            missing: list[PieceKind] = []
            for kind, count in STARTING_ALLOTMENT.items():
                missing.extend([kind] * max(0, count - on_board[kind]))
            self.side(color.opposite).captured = sorted(missing)

    def material_balance(self) -> int:
        """White's captured material minus black's."""
        return (
            self.side(Color.WHITE).material_captured
            - self.side(Color.BLACK).material_captured
        )

    def validate(self) -> None:
        """Raise :class:`BoardInvariantError` if the board contradicts itself."""
        for color in Color:
            kings = [c for c, p in self.pieces(color) if p.kind == PieceKind.KING]
            if len(kings) != 1:
                raise BoardInvariantError(
                    f"Expected one {color.name} king, found {len(kings)}"
                )
            if self.side(color).king_square != kings[0]:
                raise BoardInvariantError(
                    f"{color.name} king cached on {self.side(color).king_square}, "
                    f"found on {kings[0]}"
                )
            on_board = Counter(p.kind for _, p in self.pieces(color))
            taken = Counter(self.side(color.opposite).captured)
            for kind, count in STARTING_ALLOTMENT.items():
                if on_board[kind] + taken[kind] != count:
                    raise BoardInvariantError(
                        f"{color.name} {kind.name.lower()} count does not reconcile: "
                        f"{on_board[kind]} on board + {taken[kind]} captured"
                    )

    # -- Dunder helpers -------------------------------------------------------

    def __repr__(self) -> str:
        lines: list[str] = []
        black_taken = _kind_letters(self.side(Color.BLACK).captured)
        white_taken = _kind_letters(self.side(Color.WHITE).captured)
        balance = self.material_balance()
        lines.append(f"< {black_taken} >" + (f" +{-balance}" if balance < 0 else ""))
        for row_idx, row in enumerate(self._rows):
            cells = " ".join(str(p) if p else "." for p in row)
            lines.append(f"{8 - row_idx} {cells}")
        lines.append("  a b c d e f g h")
        lines.append(f"< {white_taken} >" + (f" +{balance}" if balance > 0 else ""))
        return "\n".join(lines)
