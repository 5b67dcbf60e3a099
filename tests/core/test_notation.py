"""Tests for FEN notation."""

from collections.abc import Callable

import pytest

from chesscore.core.board import Board
from chesscore.core.enums import Color, MoveResult, PieceKind
from chesscore.core.errors import ChessError, FenError
from chesscore.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from chesscore.core.piece import Piece
from chesscore.core.types import A1, E1, E3, E6, E8, G1, H8

PlayFn = Callable[..., list[MoveResult]]


class TestFenParsing:
    def test_starting_matches_initial_board(self) -> None:
        assert board_from_fen(STARTING_FEN) == Board.initial()

    def test_starting_side(self) -> None:
        board = board_from_fen(STARTING_FEN)
        assert board.turn == Color.WHITE

    def test_starting_kings(self) -> None:
        board = board_from_fen(STARTING_FEN)
        assert board[E1] == Piece(Color.WHITE, PieceKind.KING)
        assert board[E8] == Piece(Color.BLACK, PieceKind.KING)
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8

    def test_en_passant_square(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        board = board_from_fen(fen)
        assert board.en_passant == E3
        assert board.turn == Color.BLACK

    def test_white_en_passant_on_sixth_row(self) -> None:
        fen = "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq e6 0 2"
        assert board_from_fen(fen).en_passant == E6

    def test_no_castling(self) -> None:
        board = board_from_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1")
        for color in Color:
            assert not board.side(color).can_castle_kingside
            assert not board.side(color).can_castle_queenside

    def test_partial_castling(self) -> None:
        board = board_from_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w Kq - 0 1")
        assert board.side(Color.WHITE).can_castle_kingside
        assert not board.side(Color.WHITE).can_castle_queenside
        assert not board.side(Color.BLACK).can_castle_kingside
        assert board.side(Color.BLACK).can_castle_queenside

    def test_clocks(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3 b - - 37 112")
        assert board.halfmove_clock == 37
        assert board.fullmove_number == 112

    def test_king_cache_follows_grid(self) -> None:
        board = board_from_fen("7k/8/8/8/8/8/8/K7 w - - 0 1")
        assert board.king_square(Color.WHITE) == A1
        assert board.king_square(Color.BLACK) == H8

    def test_captured_lists_reconciled(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K1N1 w - - 0 1")
        assert board.side(Color.BLACK).captured.count(PieceKind.KNIGHT) == 1
        assert len(board.side(Color.BLACK).captured) == 14
        assert len(board.side(Color.WHITE).captured) == 15
        board.validate()

    def test_side_to_move_may_be_in_check(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4RK2 b - - 0 1")
        assert board.turn == Color.BLACK
        assert board_to_fen(board) == "4k3/8/8/8/8/8/8/4RK2 b - - 0 1"

    def test_decoded_board_is_consistent(self) -> None:
        board = board_from_fen("r3k2r/pp3ppp/2n5/3p4/3P4/2N5/PP3PPP/R3K2R w KQkq - 4 12")
        board.validate()
        assert board[G1] is None


class TestFenErrors:
    @pytest.mark.parametrize(
        ("fen", "match"),
        [
            ("", "6 fields"),
            ("invalid", "6 fields"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0", "6 fields"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1 x", "6 fields"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR  w KQkq - 0 1", "6 fields"),
            ("rnbqkbnr/pppppppp/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", "8 ranks"),
            ("rnbqkbnr/pppppppp/8/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", "8 ranks"),
            ("rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", "digit"),
            ("rnbqkbnr/pppppppp/08/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", "digit"),
            ("rnbqkbnr/pppppppp/p8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", "rank width"),
            ("rnbqkbnr/pppppppp/7/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", "rank width"),
            ("rnbqkbnrr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBN w KQkq - 0 1", "rank width"),
            ("rnbqkbnx/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1", "piece"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1", "side-to-move"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR W KQkq - 0 1", "side-to-move"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w QK - 0 1", "castling"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KK - 0 1", "castling"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KX - 0 1", "castling"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq- - 0 1", "castling"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e9 0 1", "en-passant"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq E6 0 1", "en-passant"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e3 0 1", "en-passant"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR b KQkq e6 0 1", "en-passant"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1", "halfmove"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - x 1", "halfmove"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 0", "fullmove"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 +1", "fullmove"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQ1BNR w kq - 0 1", "one white king"),
            ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1 ", "6 fields"),
            ("knbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQ - 0 1", "one black king"),
            ("rnbqkbnr/pppppppp/8/8/8/P7/PPPPPPPP/RNBQKBNR w KQkq - 0 1", "too many"),
            ("4k3/8/8/8/8/8/8/NNN1K3 w - - 0 1", "too many"),
            ("4k3/8/8/44/8/8/8/4K3 w - - 0 1", "adjacent digits"),
            ("4k3/8/8/8/8/8/8/4K3 w - - 00 1", "halfmove"),
            ("4k3/8/8/8/8/8/8/4K3 w - - 07 1", "halfmove"),
            ("4k3/8/8/8/8/8/8/4K3 w - - 0 01", "fullmove"),
            ("4k3/8/8/8/8/8/8/4RK2 w - - 0 1", "not to move is in check"),
            ("4k3/8/8/8/8/8/8/3qK3 b - - 0 1", "not to move is in check"),
        ],
    )
    def test_rejected(self, fen: str, match: str) -> None:
        with pytest.raises(FenError, match=match):
            board_from_fen(fen)

    def test_error_types(self) -> None:
        with pytest.raises(ValueError):
            board_from_fen("invalid")
        with pytest.raises(ChessError):
            board_from_fen("invalid")


class TestFenSerialization:
    def test_starting_round_trip(self) -> None:
        assert board_to_fen(board_from_fen(STARTING_FEN)) == STARTING_FEN

    def test_initial_board(self) -> None:
        assert board_to_fen(Board.initial()) == STARTING_FEN

    @pytest.mark.parametrize(
        "fen",
        [
            "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1",
            "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq e6 0 2",
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3",
            "8/8/4k3/8/8/4K3/8/8 b - - 99 140",
            "r3k2r/pp3ppp/2n5/3p4/3P4/2N5/PP3PPP/R3K2R w Kq - 4 12",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        assert board_to_fen(board_from_fen(fen)) == fen

    def test_after_moves(self, board: Board, play: PlayFn) -> None:
        play(board, "e2e4", "c7c5", "g1f3")
        assert board_to_fen(board) == (
            "rnbqkbnr/pp1ppppp/8/2p5/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2"
        )

    def test_castling_letters_follow_rights(self, board: Board, play: PlayFn) -> None:
        play(board, "h2h4", "a7a5", "h1h2", "a8a7")
        assert board_to_fen(board).split(" ")[2] == "Qk"
