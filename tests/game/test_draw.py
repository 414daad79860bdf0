"""Tests for draws decided by the move history."""

import logging
from dataclasses import replace

from gambit.core.enums import Color, PieceType
from gambit.core.fen import board_from_fen
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import E2, E4, E5, F1, G1
from gambit.game.draw import (
    is_fifty_move_rule,
    is_history_draw,
    is_threefold_repetition,
)
from gambit.game.state import GameState, create_empty_game_state

KNIGHT_SHUFFLE = ("g1f3", "g8f6", "f3g1", "f6g8")


def _shuffle(count: int) -> tuple[Move, ...]:
    """*count* quiet king moves alternating between f1 and g1."""
    king = Piece(Color.WHITE, PieceType.KING, F1, has_moved=True)
    moves = []
    for i in range(count):
        src, dst = (F1, G1) if i % 2 == 0 else (G1, F1)
        moves.append(Move(src, dst, king.moved_to(dst)))
    return tuple(moves)


def _with_history(state: GameState, history: tuple[Move, ...]) -> GameState:
    return replace(state, move_history=history)


class TestFiftyMoveRule:
    def test_hundred_quiet_plies(self, initial_state) -> None:
        assert is_fifty_move_rule(_with_history(initial_state, _shuffle(100)))

    def test_ninety_nine_is_not_enough(self, initial_state) -> None:
        assert not is_fifty_move_rule(_with_history(initial_state, _shuffle(99)))

    def test_pawn_move_resets(self, initial_state) -> None:
        pawn = Piece(Color.WHITE, PieceType.PAWN, E4, has_moved=True)
        history = _shuffle(50) + (Move(E2, E4, pawn),) + _shuffle(99)
        assert not is_fifty_move_rule(_with_history(initial_state, history))
        assert is_fifty_move_rule(_with_history(initial_state, history + _shuffle(1)))

    def test_capture_resets(self, initial_state) -> None:
        king = Piece(Color.WHITE, PieceType.KING, G1, has_moved=True)
        victim = Piece(Color.BLACK, PieceType.KNIGHT, G1)
        capture = Move(F1, G1, king, captured_piece=victim)
        history = _shuffle(30) + (capture,) + _shuffle(99)
        assert not is_fifty_move_rule(_with_history(initial_state, history))
        assert is_fifty_move_rule(_with_history(initial_state, history + _shuffle(1)))

    def test_fresh_game(self, initial_state) -> None:
        assert not is_fifty_move_rule(initial_state)


class TestThreefoldRepetition:
    def test_third_occurrence(self, initial_state, play) -> None:
        state = play(initial_state, *KNIGHT_SHUFFLE, *KNIGHT_SHUFFLE)
        assert is_threefold_repetition(state)

    def test_second_occurrence_is_not_enough(self, initial_state, play) -> None:
        state = play(initial_state, *KNIGHT_SHUFFLE, *KNIGHT_SHUFFLE[:3])
        assert not is_threefold_repetition(state)

    def test_counts_from_custom_start(self, play) -> None:
        start = create_empty_game_state(board_from_fen("4k3/8/8/8/8/8/8/R3K3"))
        shuffle = ("a1a2", "e8d8", "a2a1", "d8e8")
        assert not is_threefold_repetition(play(start, *shuffle))
        assert is_threefold_repetition(play(start, *shuffle, *shuffle))

    def test_irreversible_moves_break_repetition(self, initial_state, play) -> None:
        state = play(initial_state, "e2e4", "e7e5", *KNIGHT_SHUFFLE)
        assert not is_threefold_repetition(state)

    def test_counts_recorded_keys_without_replaying(
        self, initial_state, play, monkeypatch
    ) -> None:
        state = play(initial_state, *KNIGHT_SHUFFLE, *KNIGHT_SHUFFLE)

        def fail(*args: object) -> None:
            raise AssertionError("history was replayed")

        monkeypatch.setattr("gambit.game.draw.execute_move", fail)
        assert is_threefold_repetition(state)
        assert not is_threefold_repetition(play(initial_state, *KNIGHT_SHUFFLE))

    def test_recorded_keys_match_replay(self, initial_state, play) -> None:
        state = play(initial_state, "e2e4", "e7e5", *KNIGHT_SHUFFLE, "d2d4")
        replayed = initial_state
        keys = [replayed.board.position_key()]
        for move in state.move_history:
            replayed = play(replayed, str(move))
            keys.append(replayed.board.position_key())
        assert state.position_keys == tuple(keys)

    def test_hand_built_history_is_replayed(self, initial_state, play) -> None:
        played = play(initial_state, *KNIGHT_SHUFFLE, *KNIGHT_SHUFFLE)
        rebuilt = _with_history(initial_state, played.move_history)
        assert rebuilt.position_keys == initial_state.position_keys
        assert is_threefold_repetition(rebuilt)

    def test_unplayable_history_is_logged(self, initial_state, caplog) -> None:
        pawn = Piece(Color.WHITE, PieceType.PAWN, E5, has_moved=True)
        bogus = _with_history(initial_state, (Move(E4, E5, pawn),))
        with caplog.at_level(logging.WARNING, logger="gambit.game.draw"):
            assert not is_threefold_repetition(bogus)
        assert "does not replay" in caplog.text


class TestHistoryDraw:
    def test_either_rule(self, initial_state, play) -> None:
        assert not is_history_draw(initial_state)
        state = play(initial_state, *KNIGHT_SHUFFLE, *KNIGHT_SHUFFLE)
        assert is_history_draw(state)
        assert is_history_draw(_with_history(initial_state, _shuffle(100)))
