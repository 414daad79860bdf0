"""Draws that depend on the move history rather than on the board alone."""

from __future__ import annotations

import logging
from collections import Counter

from gambit.core.board import Board
from gambit.core.enums import PieceType
from gambit.game.executor import execute_move
from gambit.game.state import GameState, create_empty_game_state

_LOGGER = logging.getLogger(__name__)

_FIFTY_MOVE_PLIES = 100  # 50 moves per side
_REPETITION_LIMIT = 3


def is_fifty_move_rule(state: GameState) -> bool:
    """100 half-moves in a row without a pawn move or a capture."""
    history = state.move_history
    if len(history) < _FIFTY_MOVE_PLIES:
        return False
    return not any(
        move.piece.piece_type == PieceType.PAWN or move.is_promotion or move.is_capture
        for move in history[-_FIFTY_MOVE_PLIES:]
    )


def is_threefold_repetition(state: GameState) -> bool:
    """Whether some piece placement has occurred three times.

    Counts the keys recorded by :func:`execute_move`. A state whose history
    was assembled by hand, without matching keys, is replayed from its start
    position instead.
    """
    keys = state.position_keys
    if len(keys) != state.ply_count + 1:
        keys = _replayed_keys(state)
    counts = Counter(keys)
    return any(n >= _REPETITION_LIMIT for n in counts.values())


def _replayed_keys(state: GameState) -> tuple[str, ...]:
    start = state.start_board if state.start_board is not None else Board.initial()
    replay = create_empty_game_state(start, state.start_turn)
    for move in state.move_history:
        next_state = execute_move(replay, move.from_sq, move.to_sq, move.promotion)
        if next_state is None:
            _LOGGER.warning("History does not replay at %s; no repetition found", move)
            return ()
        replay = next_state
    return replay.position_keys


def is_history_draw(state: GameState) -> bool:
    return is_fifty_move_rule(state) or is_threefold_repetition(state)
