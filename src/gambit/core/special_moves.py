"""Castling, en passant and promotion: eligibility checks and board updates.

The ``execute_*`` helpers write to the board they are given; callers pass a
fresh copy, never a board owned by a committed game state.
"""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.attacks import is_square_attacked
from gambit.core.board import Board
from gambit.core.enums import CastlingSide, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece, new_piece_id
from gambit.core.types import Square

_KING_HOME_COL = 4

# side -> (rook start col, rook target col, king target col, king transit cols)
_CASTLING_COLS: dict[CastlingSide, tuple[int, int, int, tuple[int, ...]]] = {
    CastlingSide.KINGSIDE: (7, 5, 6, (5, 6)),
    CastlingSide.QUEENSIDE: (0, 3, 2, (3, 2)),
}

_PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class CastlingCheck:
    """Outcome of :func:`can_castle`; ``rook_move`` is (from, to) when legal."""

    legal: bool
    rook_move: tuple[Square, Square] | None = None

    def __bool__(self) -> bool:
        return self.legal


_ILLEGAL = CastlingCheck(False)


# ── Castling ────────────────────────────────────────────────────────────────


def can_castle(board: Board, king: Piece, side: CastlingSide) -> CastlingCheck:
    if king.piece_type != PieceType.KING or king.has_moved:
        return _ILLEGAL

    row = king.color.back_row
    if king.position != Square(row, _KING_HOME_COL):
        return _ILLEGAL

    opponent = king.color.opposite
    if is_square_attacked(board, king.position, opponent):
        return _ILLEGAL

    rook_col, rook_target_col, _, transit_cols = _CASTLING_COLS[side]
    rook = board.piece_at(Square(row, rook_col))
    if (
        rook is None
        or rook.piece_type != PieceType.ROOK
        or rook.color != king.color
        or rook.has_moved
    ):
        return _ILLEGAL

    lo, hi = sorted((_KING_HOME_COL, rook_col))
    if any(board[Square(row, col)] is not None for col in range(lo + 1, hi)):
        return _ILLEGAL

    if any(
        is_square_attacked(board, Square(row, col), opponent) for col in transit_cols
    ):
        return _ILLEGAL

    return CastlingCheck(True, (Square(row, rook_col), Square(row, rook_target_col)))


def generate_castling_moves(board: Board, king: Piece) -> list[Square]:
    """King destinations for every side on which castling is currently legal."""
    row = king.color.back_row
    return [
        Square(row, _CASTLING_COLS[side][2])
        for side in (CastlingSide.KINGSIDE, CastlingSide.QUEENSIDE)
        if can_castle(board, king, side)
    ]


def is_castling_move(piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    return piece.piece_type == PieceType.KING and abs(to_sq.col - from_sq.col) == 2


def execute_castling(board: Board, king_from: Square, king_to: Square) -> None:
    """Relocate king and paired rook, marking both as moved."""
    king = board.piece_at(king_from)
    if king is None:
        return

    side = (
        CastlingSide.KINGSIDE if king_to.col > king_from.col else CastlingSide.QUEENSIDE
    )
    rook_col, rook_target_col, _, _ = _CASTLING_COLS[side]
    rook_from = Square(king_from.row, rook_col)
    rook_to = Square(king_from.row, rook_target_col)

    board.remove(king_from)
    board.place(king.moved_to(king_to))

    rook = board.remove(rook_from)
    if rook is not None:
        board.place(rook.moved_to(rook_to))


# ── En passant ──────────────────────────────────────────────────────────────


def can_capture_en_passant(
    pawn: Piece, target: Square, last_move: Move | None
) -> bool:
    """Whether *pawn* may take en passant on *target* right after *last_move*."""
    if pawn.piece_type != PieceType.PAWN or last_move is None:
        return False
    moved = last_move.piece
    if moved.piece_type != PieceType.PAWN or moved.color == pawn.color:
        return False
    if abs(last_move.to_sq.row - last_move.from_sq.row) != 2:
        return False

    landed = last_move.to_sq
    if landed.row != pawn.position.row or abs(landed.col - pawn.position.col) != 1:
        return False

    expected_row = pawn.position.row + pawn.color.pawn_direction
    return target.row == expected_row and target.col == landed.col


def generate_en_passant_moves(pawn: Piece, last_move: Move | None) -> list[Square]:
    if last_move is None:
        return []
    row = pawn.position.row + pawn.color.pawn_direction
    targets = (Square(row, pawn.position.col - 1), Square(row, pawn.position.col + 1))
    return [t for t in targets if can_capture_en_passant(pawn, t, last_move)]


def execute_en_passant(board: Board, pawn: Piece, target: Square) -> Piece | None:
    """Move *pawn* to *target*, lifting the passed pawn beside it.

    Returns the captured pawn.
    """
    captured = board.remove(Square(pawn.position.row, target.col))
    board.remove(pawn.position)
    board.place(pawn.moved_to(target))
    return captured


# ── Promotion ───────────────────────────────────────────────────────────────


def is_promotion_move(pawn: Piece, target: Square) -> bool:
    if pawn.piece_type != PieceType.PAWN:
        return False
    return target.row == pawn.color.opposite.back_row


def promotion_options() -> tuple[PieceType, ...]:
    return _PROMOTION_TYPES


def execute_promotion(
    board: Board, pawn: Piece, target: Square, promote_to: PieceType
) -> Piece:
    """Replace *pawn* with a freshly minted *promote_to* piece on *target*."""
    if promote_to not in _PROMOTION_TYPES:
        raise ValueError(f"Cannot promote to {promote_to!s}")
    promoted = Piece(
        pawn.color,
        promote_to,
        target,
        has_moved=True,
        id=new_piece_id(pawn.color, promote_to),
    )
    board.remove(pawn.position)
    board.remove(target)
    board.place(promoted)
    return promoted
