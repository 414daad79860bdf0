"""GameController: owns the current game state and drives transitions.

Coordinates: selection, move execution, promotion choice, history draws.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import IntEnum, auto

from gambit.core.board import Board
from gambit.core.enums import Color, GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.types import Square
from gambit.game.draw import is_history_draw
from gambit.game.executor import cancel_promotion, execute_move, select_piece
from gambit.game.state import GameState, PendingPromotion, create_empty_game_state

_LOGGER = logging.getLogger(__name__)


class DrawPolicy(IntEnum):
    """How the fifty-move rule and threefold repetition end a game."""

    AUTOMATIC = auto()  # applied after every move
    CLAIM = auto()  # only through GameController.claim_draw()


# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, GameState], None]
StatusCallback = Callable[[GameStatus], None]
PromotionCallback = Callable[[PendingPromotion], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_status_changed: list[StatusCallback] = field(default_factory=list)
    on_promotion_pending: list[PromotionCallback] = field(default_factory=list)
    on_game_over: list[StatusCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Holds the one live :class:`GameState` and replaces it on every action.

    Past states handed out by :attr:`state` are never modified, so callers
    may keep them as snapshots.
    """

    __slots__ = ("_state", "_draw_policy", "events")

    def __init__(self, draw_policy: DrawPolicy = DrawPolicy.AUTOMATIC) -> None:
        self._state = create_empty_game_state()
        self._draw_policy = draw_policy
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def draw_policy(self) -> DrawPolicy:
        return self._draw_policy

    # ── Actions ──────────────────────────────────────────────────────────

    def new_game(self, board: Board | None = None, turn: Color = Color.WHITE) -> None:
        """Start over from the standard setup, or from *board*."""
        self._state = create_empty_game_state(board, turn)
        self._emit_status(self._state.status)

    def select_square(self, sq: Square) -> bool:
        """Handle a click on *sq*. Returns True when a move was accepted.

        An own piece becomes the selection; with a selection active, any other
        square is a move attempt, and a rejected attempt clears the selection.
        """
        state = self._state
        if state.is_game_over or state.pending_promotion is not None:
            return False

        piece = state.board.piece_at(sq)
        if piece is not None and piece.color == state.current_turn:
            self._state = select_piece(state, sq)
            return False

        if state.selected_piece is None:
            return False
        return self.submit_move(state.selected_piece.position, sq)

    def submit_move(
        self, from_sq: Square, to_sq: Square, promotion: PieceType | None = None
    ) -> bool:
        """Try a move. Returns True when accepted.

        An accepted promotion without *promotion* leaves the game waiting for
        :meth:`choose_promotion`.
        """
        if self._state.is_game_over:
            return False

        result = execute_move(self._state, from_sq, to_sq, promotion)
        if result is None:
            self._state = replace(self._state, selected_piece=None, valid_moves=())
            return False

        if result.ply_count == self._state.ply_count:
            self._state = result
            pending = result.pending_promotion
            if pending is not None:
                self._emit_promotion_pending(pending)
            return True

        self._commit(result)
        return True

    def choose_promotion(self, piece_type: PieceType) -> bool:
        pending = self._state.pending_promotion
        if pending is None:
            return False
        return self.submit_move(pending.from_sq, pending.to_sq, piece_type)

    def cancel_promotion(self) -> None:
        self._state = cancel_promotion(self._state)

    def claim_draw(self) -> bool:
        """End the game as drawn if a history draw rule holds."""
        if self._state.is_game_over or not is_history_draw(self._state):
            return False
        _LOGGER.info("Draw claimed after %d plies", self._state.ply_count)
        self._state = replace(self._state, status=GameStatus.DRAW)
        self._emit_status(GameStatus.DRAW)
        self._emit_game_over(GameStatus.DRAW)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _commit(self, state: GameState) -> None:
        previous = self._state.status
        if (
            self._draw_policy == DrawPolicy.AUTOMATIC
            and state.status == GameStatus.ACTIVE
            and is_history_draw(state)
        ):
            _LOGGER.info("Draw by move history after %d plies", state.ply_count)
            state = replace(state, status=GameStatus.DRAW)

        self._state = state
        move = state.last_move
        assert move is not None
        self._emit_move(move)

        if state.status != previous:
            self._emit_status(state.status)
        if state.is_game_over:
            _LOGGER.info("Game over: %s after %s", state.status, move)
            self._emit_game_over(state.status)

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)

    def _emit_status(self, status: GameStatus) -> None:
        for cb in self.events.on_status_changed:
            cb(status)

    def _emit_promotion_pending(self, pending: PendingPromotion) -> None:
        for cb in self.events.on_promotion_pending:
            cb(pending)

    def _emit_game_over(self, status: GameStatus) -> None:
        for cb in self.events.on_game_over:
            cb(status)
