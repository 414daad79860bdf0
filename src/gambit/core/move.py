"""Move record - one entry of the game history."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of a move that has been played.

    ``piece`` is the mover as it stands after the move (the promoted piece
    for a promotion).
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured_piece: Piece | None = None
    is_check: bool = False
    is_checkmate: bool = False
    is_castle: bool = False
    is_en_passant: bool = False
    is_pawn_double_move: bool = False
    is_promotion: bool = False
    promotion: PieceType | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base
