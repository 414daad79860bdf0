"""Per-piece legal move generation."""

from __future__ import annotations

from gambit.core.attacks import (
    BISHOP_DIRS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    QUEEN_DIRS,
    ROOK_DIRS,
    filter_legal_moves,
)
from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.special_moves import (
    generate_castling_moves,
    generate_en_passant_moves,
)
from gambit.core.types import Square, is_on_board

_SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


class MoveGenerator:
    """Generates destination squares for pieces on a :class:`Board`.

    *last_move* is the most recent history entry; it only matters for en
    passant. The board is never written to.
    """

    __slots__ = ("_board", "_last_move")

    def __init__(self, board: Board, last_move: Move | None = None) -> None:
        self._board = board
        self._last_move = last_move

    # -- Public API ---------------------------------------------------------

    def generate_moves(self, piece: Piece) -> list[Square]:
        """Strictly legal destinations for *piece*."""
        return filter_legal_moves(self._board, piece, self.pseudo_legal_moves(piece))

    def pseudo_legal_moves(self, piece: Piece) -> list[Square]:
        """Destinations that may still leave the mover's king attacked."""
        if piece.piece_type == PieceType.PAWN:
            return self._gen_pawn(piece)
        if piece.piece_type == PieceType.KNIGHT:
            return self._gen_jumps(piece, KNIGHT_OFFSETS)
        if piece.piece_type == PieceType.KING:
            moves = self._gen_jumps(piece, KING_OFFSETS)
            moves.extend(generate_castling_moves(self._board, piece))
            return moves
        return self._gen_sliding(piece, _SLIDER_DIRS[piece.piece_type])

    def is_valid_move(self, piece: Piece, target: Square) -> bool:
        return target in self.generate_moves(piece)

    def has_legal_moves(self, color: Color) -> bool:
        """Whether any piece of *color* has at least one legal destination."""
        return any(self.generate_moves(piece) for piece in self._board.pieces(color))

    def legal_moves(self, color: Color) -> dict[Piece, list[Square]]:
        """Legal destinations of every *color* piece that has any."""
        result: dict[Piece, list[Square]] = {}
        for piece in self._board.pieces(color):
            moves = self.generate_moves(piece)
            if moves:
                result[piece] = moves
        return result

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, pawn: Piece) -> list[Square]:
        board = self._board
        moves: list[Square] = []
        direction = pawn.color.pawn_direction
        start_row = pawn.color.back_row + direction

        one_step = pawn.position.offset(direction, 0)
        if is_on_board(one_step) and board.is_empty(one_step):
            moves.append(one_step)
            if pawn.position.row == start_row:
                two_step = pawn.position.offset(2 * direction, 0)
                if board.is_empty(two_step):
                    moves.append(two_step)

        for dcol in (-1, 1):
            cap_sq = pawn.position.offset(direction, dcol)
            if board.has_opponent_piece(cap_sq, pawn.color):
                moves.append(cap_sq)

        moves.extend(generate_en_passant_moves(pawn, self._last_move))
        return moves

    def _gen_jumps(
        self, piece: Piece, offsets: tuple[tuple[int, int], ...]
    ) -> list[Square]:
        moves: list[Square] = []
        for drow, dcol in offsets:
            to_sq = piece.position.offset(drow, dcol)
            if is_on_board(to_sq) and not self._board.has_friendly_piece(
                to_sq, piece.color
            ):
                moves.append(to_sq)
        return moves

    def _gen_sliding(
        self, piece: Piece, directions: tuple[tuple[int, int], ...]
    ) -> list[Square]:
        board = self._board
        moves: list[Square] = []
        for drow, dcol in directions:
            to_sq = piece.position.offset(drow, dcol)
            while is_on_board(to_sq):
                target = board[to_sq]
                if target is None:
                    moves.append(to_sq)
                    to_sq = to_sq.offset(drow, dcol)
                    continue
                if target.color != piece.color:
                    moves.append(to_sq)
                break
        return moves


def generate_moves(
    board: Board, piece: Piece, last_move: Move | None = None
) -> list[Square]:
    """Legal destinations of *piece* on *board*."""
    return MoveGenerator(board, last_move).generate_moves(piece)


def is_valid_move(
    board: Board, piece: Piece, target: Square, last_move: Move | None = None
) -> bool:
    return MoveGenerator(board, last_move).is_valid_move(piece, target)
