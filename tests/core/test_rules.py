"""Tests for Rules: check, checkmate, stalemate, material draws."""

import logging

from gambit.core.board import Board
from gambit.core.enums import Color, GameStatus
from gambit.core.fen import board_from_fen
from gambit.core.rules import Rules


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        board = Board.initial()
        assert not Rules.is_in_check(board, Color.WHITE)
        assert not Rules.is_in_check(board, Color.BLACK)
        assert Rules.determine_status(board, Color.WHITE) == GameStatus.ACTIVE

    def test_rook_check(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/r3K3")
        assert Rules.is_in_check(board, Color.WHITE)
        assert Rules.determine_status(board, Color.WHITE) == GameStatus.CHECK

    def test_missing_king_is_not_check(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/r7")
        assert not Rules.is_in_check(board, Color.WHITE)

    def test_missing_king_warns_once(self, caplog) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/R7")
        with caplog.at_level(logging.WARNING, logger="gambit.core"):
            status = Rules.determine_status(board, Color.WHITE)
        assert status == GameStatus.ACTIVE
        warnings = [r for r in caplog.records if "No white king" in r.getMessage()]
        assert len(warnings) == 1
        assert warnings[0].name == "gambit.core.rules"


class TestCheckmate:
    def test_fools_mate(self, initial_state, play) -> None:
        state = play(initial_state, "f2f3", "e7e5", "g2g4", "d8h4")
        assert Rules.is_checkmate(state.board, Color.WHITE)
        assert state.status == GameStatus.CHECKMATE
        assert state.is_game_over
        move = state.last_move
        assert move is not None
        assert move.is_check and move.is_checkmate

    def test_back_rank_mate(self) -> None:
        # R on a8 checks black king d8; white king d6 covers all escapes
        board = board_from_fen("R2k4/8/3K4/8/8/8/8/8")
        assert Rules.is_checkmate(board, Color.BLACK)
        assert Rules.determine_status(board, Color.BLACK) == GameStatus.CHECKMATE

    def test_not_checkmate_when_can_escape(self) -> None:
        board = board_from_fen("R2k4/8/8/3K4/8/8/8/8")
        assert not Rules.is_checkmate(board, Color.BLACK)
        assert Rules.determine_status(board, Color.BLACK) == GameStatus.CHECK

    def test_not_checkmate_when_checker_can_be_taken(self) -> None:
        board = board_from_fen("R2k4/2n5/3K4/8/8/8/8/8")
        assert Rules.determine_status(board, Color.BLACK) == GameStatus.CHECK


class TestStalemate:
    def test_queen_stalemate(self) -> None:
        board = board_from_fen("7k/5K2/6Q1/8/8/8/8/8")
        assert Rules.is_stalemate(board, Color.BLACK)
        assert not Rules.is_checkmate(board, Color.BLACK)
        assert Rules.determine_status(board, Color.BLACK) == GameStatus.STALEMATE

    def test_same_position_other_side_to_move(self) -> None:
        board = board_from_fen("7k/5K2/6Q1/8/8/8/8/8")
        assert not Rules.is_stalemate(board, Color.WHITE)

    def test_king_and_pawn_stalemate(self) -> None:
        # The a-pawn covers b8, the white king covers a7 and b7.
        board = board_from_fen("k7/P7/K7/8/8/8/8/8")
        assert Rules.determine_status(board, Color.BLACK) == GameStatus.STALEMATE


class TestInsufficientMaterial:
    def test_kings_only(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3")
        assert Rules.is_insufficient_material(board)
        assert Rules.determine_status(board, Color.WHITE) == GameStatus.DRAW

    def test_king_and_bishop(self) -> None:
        assert Rules.is_insufficient_material(board_from_fen("4k3/8/8/8/8/8/8/2B1K3"))

    def test_king_and_knight(self) -> None:
        assert Rules.is_insufficient_material(board_from_fen("4k1n1/8/8/8/8/8/8/4K3"))

    def test_rook_is_enough(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/R3K3")
        assert not Rules.is_insufficient_material(board)
        assert Rules.determine_status(board, Color.BLACK) == GameStatus.ACTIVE

    def test_pawn_is_enough(self) -> None:
        assert not Rules.is_insufficient_material(
            board_from_fen("4k3/8/8/8/8/8/4P3/4K3")
        )

    def test_two_minor_pieces_are_enough(self) -> None:
        assert not Rules.is_insufficient_material(
            board_from_fen("4k3/8/8/8/8/8/8/1N2KB2")
        )

    def test_stalemate_reported_before_material(self) -> None:
        board = board_from_fen("7k/5K2/6B1/8/8/8/8/8")
        assert Rules.is_insufficient_material(board)
        assert Rules.determine_status(board, Color.BLACK) == GameStatus.STALEMATE
