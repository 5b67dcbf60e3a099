"""FEN parsing and serialization."""

from __future__ import annotations

from collections import Counter

from chesscore.core.board import STARTING_ALLOTMENT, Board
from chesscore.core.enums import Color, PieceKind
from chesscore.core.errors import FenError, InvalidCoordinateError
from chesscore.core.legality import is_king_in_danger
from chesscore.core.piece import Piece
from chesscore.core.types import Column, Coordinate, parse_coordinate

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Castling field letters in their fixed output order.
_CASTLING_LETTERS: tuple[tuple[str, Color, bool], ...] = (
    ("K", Color.WHITE, True),
    ("Q", Color.WHITE, False),
    ("k", Color.BLACK, True),
    ("q", Color.BLACK, False),
)

_DIGITS = "0123456789"


def _is_number(text: str) -> bool:
    """Unsigned decimal without leading zeros."""
    if not text or any(ch not in _DIGITS for ch in text):
        return False
    return len(text) == 1 or text[0] != "0"


def board_from_fen(fen: str) -> Board:
    """Parse a FEN string into a new :class:`Board`.

    Nothing is returned unless the whole string is valid; a malformed
    string raises :class:`FenError`.
    """
    parts = fen.split(" ")
    if len(parts) != 6:
        raise FenError(f"Invalid FEN (need 6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part, half_part, full_part = parts
    board = Board.empty()

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FenError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    for rank_idx, rank_text in enumerate(ranks):
        row = 8 - rank_idx
        col = 0
        prev = ""
        for ch in rank_text:
            if ch in _DIGITS:
                step = int(ch)
                if not 1 <= step <= 8:
                    raise FenError(f"Invalid FEN digit {ch!r}: {fen!r}")
                if prev and prev in _DIGITS:
                    raise FenError(f"Invalid FEN adjacent digits {prev + ch!r}: {fen!r}")
                col += step
            else:
                try:
                    piece = Piece.from_char(ch)
                except ValueError:
                    raise FenError(f"Invalid FEN piece {ch!r}: {fen!r}") from None
                if col >= 8:
                    raise FenError(f"Invalid FEN rank width: {fen!r}")
                board[Coordinate(Column(col), row)] = piece
                col += 1
            if col > 8:
                raise FenError(f"Invalid FEN rank width: {fen!r}")
            prev = ch
        if col != 8:
            raise FenError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        board.turn = Color.WHITE
    elif side_part == "b":
        board.turn = Color.BLACK
    else:
        raise FenError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    if castling_part != "-":
        letters = [letter for letter, _, _ in _CASTLING_LETTERS]
        positions = [letters.index(ch) if ch in letters else -1 for ch in castling_part]
        if not castling_part or -1 in positions or positions != sorted(set(positions)):
            raise FenError(f"Invalid FEN castling field: {castling_part!r}")
        for letter, color, kingside in _CASTLING_LETTERS:
            if letter in castling_part:
                side = board.side(color)
                if kingside:
                    side.can_castle_kingside = True
                else:
                    side.can_castle_queenside = True

    # 4. En passant
    if ep_part != "-":
        try:
            ep = parse_coordinate(ep_part)
        except InvalidCoordinateError:
            raise FenError(f"Invalid FEN en-passant square: {ep_part!r}") from None
        if ep_part != ep_part.lower():
            raise FenError(f"Invalid FEN en-passant square: {ep_part!r}")
        expected_row = 6 if board.turn == Color.WHITE else 3
        if ep.row != expected_row:
            raise FenError(f"Invalid FEN en-passant square for side-to-move: {ep_part!r}")
        board.en_passant = ep

    # 5–6. Clocks
    if not _is_number(half_part):
        raise FenError(f"Invalid FEN halfmove clock: {half_part!r}")
    if not _is_number(full_part) or int(full_part) < 1:
        raise FenError(f"Invalid FEN fullmove number: {full_part!r}")
    board.halfmove_clock = int(half_part)
    board.fullmove_number = int(full_part)

    _check_material(board, fen)
    board.sync_king_squares()
    if is_king_in_danger(board, board.turn.opposite):
        raise FenError(f"Invalid FEN: side not to move is in check: {fen!r}")
    board.reconcile_material()
    return board


def _check_material(board: Board, fen: str) -> None:
    for color in Color:
        counts = Counter(p.kind for _, p in board.pieces(color))
        if counts[PieceKind.KING] != 1:
            raise FenError(
                f"Invalid FEN: expected one {color.name.lower()} king, "
                f"found {counts[PieceKind.KING]}: {fen!r}"
            )
        for kind, allowed in STARTING_ALLOTMENT.items():
            if counts[kind] > allowed:
                raise FenError(
                    f"Invalid FEN: too many {color.name.lower()} "
                    f"{kind.name.lower()}s ({counts[kind]}): {fen!r}"
                )


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    # 1. Board
    rows: list[str] = []
    for grid_row in board.rows():
        empty = 0
        row = ""
        for piece in grid_row:
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = str(board.turn)

    # 3. Castling
    castling_str = "".join(
        letter
        for letter, color, kingside in _CASTLING_LETTERS
        if board.side(color).can_castle(kingside)
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = str(board.en_passant) if board.en_passant is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{board.halfmove_clock} {board.fullmove_number}"
    )
