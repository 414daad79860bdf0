"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square, is_on_board, square_name

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 64-cell board.

    Committed game states never share a board that is later written to:
    every transition works on a :meth:`copy`.
    """

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: list[Piece | None] = [None] * 64

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._cells[sq.index]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        if piece is not None and piece.position != sq:
            raise ValueError(
                f"{piece!s} at {square_name(piece.position)} cannot be stored "
                f"on {square_name(sq)}"
            )
        self._cells[sq.index] = piece

    def piece_at(self, sq: Square) -> Piece | None:
        """Occupant of *sq*; None when empty or off the board."""
        if not is_on_board(sq):
            return None
        return self._cells[sq.index]

    def is_empty(self, sq: Square) -> bool:
        return self.piece_at(sq) is None

    def has_opponent_piece(self, sq: Square, color: Color) -> bool:
        piece = self.piece_at(sq)
        return piece is not None and piece.color != color

    def has_friendly_piece(self, sq: Square, color: Color) -> bool:
        piece = self.piece_at(sq)
        return piece is not None and piece.color == color

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> Iterator[Piece]:
        """Pieces on the board in row-major order, optionally one side only."""
        for piece in self._cells:
            if piece is not None and (color is None or piece.color == color):
                yield piece

    def position_key(self) -> str:
        """Canonical placement string: one FEN letter or '.' per square."""
        return "".join("." if p is None else str(p) for p in self._cells)

    # -- Mutation / copying -------------------------------------------------

    def place(self, piece: Piece) -> None:
        """Put *piece* on its own ``position``."""
        self[piece.position] = piece

    def remove(self, sq: Square) -> Piece | None:
        """Empty *sq*, returning what stood there."""
        piece = self._cells[sq.index]
        self._cells[sq.index] = None
        return piece

    def copy(self) -> Board:
        # Pieces are frozen values, so a new cell list is a full deep copy.
        b = Board()
        b._cells = self._cells.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position, every piece with its own id."""
        b = cls()
        for col in range(8):
            for color in (Color.BLACK, Color.WHITE):
                sq = Square(color.back_row + color.pawn_direction, col)
                b.place(Piece(color, PieceType.PAWN, sq, id=f"{color!s}-pawn-{col}"))

        for col, pt in enumerate(_BACK_RANK):
            for color in (Color.BLACK, Color.WHITE):
                sq = Square(color.back_row, col)
                b.place(Piece(color, pt, sq, id=f"{color!s}-{pt!s}-{col}"))
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            row_cells = self._cells[row * 8 : row * 8 + 8]
            cells = [str(p) if p else "." for p in row_cells]
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
