"""Move execution: the only way a game advances.

Every function here maps a :class:`GameState` to a new one (or to ``None``
for a rejected move) and leaves its input untouched.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from types import MappingProxyType

from gambit.core.board import Board
from gambit.core.enums import GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import generate_moves
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.special_moves import (
    execute_castling,
    execute_en_passant,
    execute_promotion,
    is_castling_move,
    is_promotion_move,
    promotion_options,
)
from gambit.core.types import Square, is_on_board
from gambit.game.state import GameState, PendingPromotion, check_info

_LOGGER = logging.getLogger(__name__)


def execute_move(
    state: GameState,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceType | None = None,
) -> GameState | None:
    """Play *from_sq* → *to_sq* for the side to move.

    Returns the next state, or ``None`` when the move is rejected. A
    promotion without *promotion* returns a state awaiting the piece choice
    (same board, same turn, ``pending_promotion`` set).
    """
    if not (is_on_board(from_sq) and is_on_board(to_sq)):
        return _reject("%r or %r is off the board", from_sq, to_sq)

    board = state.board
    piece = board[from_sq]
    if piece is None:
        return _reject("no piece on %s", from_sq)
    if piece.color != state.current_turn:
        return _reject("%s to move, not %s", state.current_turn, piece.color)

    pending = state.pending_promotion
    if pending is not None and (pending.from_sq, pending.to_sq) != (from_sq, to_sq):
        return _reject("promotion pending on %s%s", pending.from_sq, pending.to_sq)

    if to_sq not in generate_moves(board, piece, state.last_move):
        return _reject("%s%s is not legal for %s", from_sq, to_sq, piece.symbol)

    if is_promotion_move(piece, to_sq):
        if promotion is None:
            return replace(
                state, pending_promotion=PendingPromotion(from_sq, to_sq, piece)
            )
        if promotion not in promotion_options():
            return _reject("cannot promote to %s", promotion)
    elif promotion is not None:
        _LOGGER.debug("Ignoring promotion choice %s for a non-promotion", promotion)
        promotion = None

    return _apply(state, piece, to_sq, promotion)


def cancel_promotion(state: GameState) -> GameState:
    """Abandon a pending promotion; board, turn and history stay as they are."""
    return replace(state, pending_promotion=None, selected_piece=None, valid_moves=())


def select_piece(state: GameState, sq: Square) -> GameState:
    """Select the side-to-move's piece on *sq* and list its destinations.

    Anything else on *sq* clears the current selection.
    """
    piece = state.board.piece_at(sq)
    if piece is None or piece.color != state.current_turn:
        return replace(state, selected_piece=None, valid_moves=())
    targets = generate_moves(state.board, piece, state.last_move)
    return replace(state, selected_piece=piece, valid_moves=tuple(targets))


# ── Internal ─────────────────────────────────────────────────────────────


def _reject(reason: str, *args: object) -> None:
    _LOGGER.debug("Move rejected: " + reason, *args)
    return None


def _apply(
    state: GameState,
    piece: Piece,
    to_sq: Square,
    promotion: PieceType | None,
) -> GameState:
    from_sq = piece.position
    board = state.board.copy()
    captured: Piece | None = None
    is_castle = is_en_passant = False

    if is_castling_move(piece, from_sq, to_sq):
        execute_castling(board, from_sq, to_sq)
        is_castle = True
        moved = _at(board, to_sq)
    elif _is_en_passant(state.board, piece, to_sq):
        captured = execute_en_passant(board, piece, to_sq)
        is_en_passant = True
        moved = _at(board, to_sq)
    elif promotion is not None:
        captured = board[to_sq]
        moved = execute_promotion(board, piece, to_sq, promotion)
    else:
        captured = board.remove(to_sq)
        board.remove(from_sq)
        moved = piece.moved_to(to_sq)
        board.place(moved)

    record = Move(
        from_sq,
        to_sq,
        moved,
        captured_piece=captured,
        is_castle=is_castle,
        is_en_passant=is_en_passant,
        is_pawn_double_move=(
            piece.piece_type == PieceType.PAWN and abs(to_sq.row - from_sq.row) == 2
        ),
        is_promotion=promotion is not None,
        promotion=promotion,
    )

    next_turn = state.current_turn.opposite
    status = Rules.determine_status(board, next_turn, record)
    record = replace(
        record,
        is_check=status in (GameStatus.CHECK, GameStatus.CHECKMATE),
        is_checkmate=status == GameStatus.CHECKMATE,
    )

    captured_pieces = dict(state.captured_pieces)
    if captured is not None:
        captured_pieces[captured.color] = (
            *captured_pieces.get(captured.color, ()),
            captured,
        )

    _LOGGER.debug("Applied %s, %s to move (%s)", record, next_turn, status)
    return replace(
        state,
        board=board,
        current_turn=next_turn,
        move_history=(*state.move_history, record),
        position_keys=(*state.position_keys, board.position_key()),
        captured_pieces=MappingProxyType(captured_pieces),
        status=status,
        check=check_info(board, next_turn, status),
        selected_piece=None,
        valid_moves=(),
        pending_promotion=None,
    )


def _is_en_passant(board: Board, piece: Piece, to_sq: Square) -> bool:
    # A diagonal pawn step onto an empty square can only be en passant.
    return (
        piece.piece_type == PieceType.PAWN
        and to_sq.col != piece.position.col
        and board[to_sq] is None
    )


def _at(board: Board, sq: Square) -> Piece:
    piece = board[sq]
    assert piece is not None
    return piece
