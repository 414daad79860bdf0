"""FEN piece-placement parsing and serialisation.

Only the placement field is handled. Whether a piece has moved is inferred
from where it stands: pieces on their home squares of the standard setup
count as unmoved, everything else as moved.
"""

from __future__ import annotations

from dataclasses import replace

from gambit.core.board import Board
from gambit.core.enums import PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

_HOME_COLS: dict[PieceType, tuple[int, ...]] = {
    PieceType.ROOK: (0, 7),
    PieceType.KNIGHT: (1, 6),
    PieceType.BISHOP: (2, 5),
    PieceType.QUEEN: (3,),
    PieceType.KING: (4,),
}


def _looks_unmoved(piece: Piece) -> bool:
    color, sq = piece.color, piece.position
    if piece.piece_type == PieceType.PAWN:
        return sq.row == color.back_row + color.pawn_direction
    return sq.row == color.back_row and sq.col in _HOME_COLS.get(piece.piece_type, ())


def board_from_fen(placement: str) -> Board:
    """Parse a FEN placement field (a full FEN string is also accepted)."""
    fields = placement.split()
    if not fields:
        raise ValueError(f"Invalid FEN placement: {placement!r}")

    rows = fields[0].split("/")
    if len(rows) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {placement!r}")

    board = Board()
    for row, row_text in enumerate(rows):
        col = 0
        for ch in row_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {placement!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {placement!r}")
                piece = Piece.from_char(ch, Square(row, col))
                if not _looks_unmoved(piece):
                    piece = replace(piece, has_moved=True)
                board.place(piece)
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {placement!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {placement!r}")
    return board


def board_to_fen(board: Board) -> str:
    """Serialise *board* to a FEN placement field."""
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = board[Square(row, col)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    return "/".join(rows)
