"""Immutable game state snapshots."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from gambit.core.attacks import find_king
from gambit.core.board import Board
from gambit.core.enums import Color, GameStatus
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.types import Square


def _no_captures() -> Mapping[Color, tuple[Piece, ...]]:
    return MappingProxyType({Color.WHITE: (), Color.BLACK: ()})


@dataclass(frozen=True, slots=True)
class CheckInfo:
    in_check: bool = False
    king_position: Square | None = None


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A legal promotion move waiting for the piece choice."""

    from_sq: Square
    to_sq: Square
    pawn: Piece


@dataclass(frozen=True, slots=True)
class GameState:
    """One complete, never-mutated snapshot of a game.

    Every transition builds a new instance; ``board`` is owned by this
    snapshot and must not be written to. ``captured_pieces`` is a read-only
    mapping keyed by the colour of the captured pieces. ``position_keys``
    holds :meth:`Board.position_key` for the start position and after every
    ply, in order.
    """

    board: Board
    current_turn: Color = Color.WHITE
    move_history: tuple[Move, ...] = ()
    captured_pieces: Mapping[Color, tuple[Piece, ...]] = field(
        default_factory=_no_captures
    )
    status: GameStatus = GameStatus.ACTIVE
    check: CheckInfo = CheckInfo()
    selected_piece: Piece | None = None
    valid_moves: tuple[Square, ...] = ()
    pending_promotion: PendingPromotion | None = None
    # Position the history is replayed from.
    start_board: Board | None = None
    start_turn: Color = Color.WHITE
    position_keys: tuple[str, ...] = ()

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def last_move(self) -> Move | None:
        return self.move_history[-1] if self.move_history else None

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def fullmove_display(self) -> int:
        """Current full-move number for display."""
        return (self.ply_count // 2) + 1


def create_empty_game_state(
    board: Board | None = None, turn: Color = Color.WHITE
) -> GameState:
    """Fresh game: standard setup (or *board*), empty history, no captures."""
    if board is None:
        start = Board.initial()
        return GameState(
            board=start.copy(),
            current_turn=turn,
            start_board=start,
            start_turn=turn,
            position_keys=(start.position_key(),),
        )

    start = board.copy()
    status = Rules.determine_status(start, turn)
    return GameState(
        board=start.copy(),
        current_turn=turn,
        status=status,
        check=check_info(start, turn, status),
        start_board=start,
        start_turn=turn,
        position_keys=(start.position_key(),),
    )


def check_info(board: Board, color: Color, status: GameStatus) -> CheckInfo:
    if status not in (GameStatus.CHECK, GameStatus.CHECKMATE):
        return CheckInfo()
    return CheckInfo(True, find_king(board, color))
