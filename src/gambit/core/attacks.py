"""Attack detection and the legality filter built on it.

Attack detection is unconditional threat: a pinned piece still attacks.
"""

from __future__ import annotations

from collections.abc import Iterable

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import ALL_SQUARES, Square, is_on_board

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

_ORTHOGONAL_SLIDERS = (PieceType.ROOK, PieceType.QUEEN)
_DIAGONAL_SLIDERS = (PieceType.BISHOP, PieceType.QUEEN)


# -- Attack detection -------------------------------------------------------


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?"""
    return (
        _attacked_by_pawn(board, sq, by_color)
        or _attacked_by_knight(board, sq, by_color)
        or _attacked_by_slider(board, sq, by_color)
        or _attacked_by_king(board, sq, by_color)
    )


def find_king(board: Board, color: Color) -> Square | None:
    for sq in ALL_SQUARES:
        piece = board[sq]
        if piece is not None and piece.piece_type == PieceType.KING:
            if piece.color == color:
                return sq
    return None


def is_king_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?

    A board without that king counts as not in check.
    """
    king_sq = find_king(board, color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)


def _attacked_by_pawn(board: Board, sq: Square, by_color: Color) -> bool:
    # An attacking pawn stands one step "behind" sq from its own point of view.
    row = sq.row - by_color.pawn_direction
    for col in (sq.col - 1, sq.col + 1):
        piece = board.piece_at(Square(row, col))
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.PAWN
        ):
            return True
    return False


def _attacked_by_knight(board: Board, sq: Square, by_color: Color) -> bool:
    return _attacked_by_jumper(board, sq, by_color, KNIGHT_OFFSETS, PieceType.KNIGHT)


def _attacked_by_king(board: Board, sq: Square, by_color: Color) -> bool:
    return _attacked_by_jumper(board, sq, by_color, KING_OFFSETS, PieceType.KING)


def _attacked_by_jumper(
    board: Board,
    sq: Square,
    by_color: Color,
    offsets: tuple[tuple[int, int], ...],
    piece_type: PieceType,
) -> bool:
    for drow, dcol in offsets:
        piece = board.piece_at(sq.offset(drow, dcol))
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == piece_type
        ):
            return True
    return False


def _attacked_by_slider(board: Board, sq: Square, by_color: Color) -> bool:
    for drow, dcol in QUEEN_DIRS:
        attackers = _DIAGONAL_SLIDERS if drow and dcol else _ORTHOGONAL_SLIDERS
        target = sq.offset(drow, dcol)
        while is_on_board(target):
            piece = board[target]
            if piece is not None:
                if piece.color == by_color and piece.piece_type in attackers:
                    return True
                break
            target = target.offset(drow, dcol)
    return False


# -- Legality filter --------------------------------------------------------


def simulate_move(board: Board, from_sq: Square, to_sq: Square) -> Board:
    """Copy of *board* with the piece on *from_sq* relocated to *to_sq*.

    En passant also lifts the passed pawn and castling also slides the rook,
    so the copy reflects every square the move vacates.
    """
    test_board = board.copy()
    piece = test_board.remove(from_sq)
    if piece is None:
        return test_board

    if (
        piece.piece_type == PieceType.PAWN
        and from_sq.col != to_sq.col
        and test_board[to_sq] is None
    ):
        test_board.remove(Square(from_sq.row, to_sq.col))
    elif piece.piece_type == PieceType.KING and abs(to_sq.col - from_sq.col) == 2:
        rook_from, rook_to = (
            (Square(from_sq.row, 7), Square(from_sq.row, 5))
            if to_sq.col > from_sq.col
            else (Square(from_sq.row, 0), Square(from_sq.row, 3))
        )
        rook = test_board.remove(rook_from)
        if rook is not None:
            test_board.place(rook.moved_to(rook_to))

    test_board.remove(to_sq)
    test_board.place(piece.moved_to(to_sq))
    return test_board


def would_move_result_in_check(
    board: Board, from_sq: Square, to_sq: Square, color: Color
) -> bool:
    if board.piece_at(from_sq) is None:
        return False
    return is_king_in_check(simulate_move(board, from_sq, to_sq), color)


def filter_legal_moves(
    board: Board, piece: Piece, candidates: Iterable[Square]
) -> list[Square]:
    """Drop every candidate that would leave *piece*'s own king attacked."""
    return [
        sq
        for sq in candidates
        if not would_move_result_in_check(board, piece.position, sq, piece.color)
    ]
