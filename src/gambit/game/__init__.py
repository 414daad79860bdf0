"""Game layer: immutable game states, the move executor, draw rules.

Quick start::

    from gambit.core import parse_square
    from gambit.game import GameController

    ctrl = GameController()
    ctrl.submit_move(parse_square("e2"), parse_square("e4"))
    print(ctrl.state.current_turn, ctrl.state.status)
"""

from gambit.game.controller import DrawPolicy, GameController, GameEvents
from gambit.game.draw import (
    is_fifty_move_rule,
    is_history_draw,
    is_threefold_repetition,
)
from gambit.game.executor import cancel_promotion, execute_move, select_piece
from gambit.game.state import (
    CheckInfo,
    GameState,
    PendingPromotion,
    create_empty_game_state,
)

__all__ = [
    # State
    "CheckInfo",
    "GameState",
    "PendingPromotion",
    "create_empty_game_state",
    # Transitions
    "cancel_promotion",
    "execute_move",
    "select_piece",
    # Draw rules
    "is_fifty_move_rule",
    "is_history_draw",
    "is_threefold_repetition",
    # Controller
    "DrawPolicy",
    "GameController",
    "GameEvents",
]
