"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def pawn_direction(self) -> int:
        """Row step of a forward pawn move (white climbs towards row 0)."""
        return -1 if self == Color.WHITE else 1

    @property
    def back_row(self) -> int:
        """Row of this side's back rank."""
        return 7 if self == Color.WHITE else 0

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    def __str__(self) -> str:
        return self.name.lower()


class CastlingSide(IntEnum):
    KINGSIDE = auto()
    QUEENSIDE = auto()

    def __str__(self) -> str:
        return self.name.lower()


class GameStatus(IntEnum):
    """Status of the side to move after a transition."""

    ACTIVE = auto()
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()
    DRAW = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE, GameStatus.DRAW)

    def __str__(self) -> str:
        return self.name.lower()
