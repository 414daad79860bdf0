"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from gambit.core.enums import PieceType
from gambit.core.types import parse_square
from gambit.game.executor import execute_move
from gambit.game.state import GameState, create_empty_game_state

_PROMO_LETTERS = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}

PlayFn = Callable[..., GameState]


def _play(state: GameState, *uci_moves: str) -> GameState:
    for uci in uci_moves:
        promotion = _PROMO_LETTERS[uci[4]] if len(uci) == 5 else None
        result = execute_move(
            state, parse_square(uci[:2]), parse_square(uci[2:4]), promotion
        )
        assert result is not None, f"{uci} was rejected"
        state = result
    return state


@pytest.fixture
def play() -> PlayFn:
    """Apply long-algebraic moves (``"e2e4"``, ``"a7a8q"``) one after another."""
    return _play


@pytest.fixture
def initial_state() -> GameState:
    return create_empty_game_state()
