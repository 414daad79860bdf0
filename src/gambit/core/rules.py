"""High-level chess rules: check, checkmate, stalemate, material draws."""

from __future__ import annotations

import logging

from gambit.core.attacks import find_king, is_king_in_check
from gambit.core.board import Board
from gambit.core.enums import Color, GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator

_LOGGER = logging.getLogger(__name__)

_MINOR_PIECES = (PieceType.BISHOP, PieceType.KNIGHT)


class Rules:
    """Static rule-checker that operates on a :class:`Board`.

    Methods that classify a position take the optional last move so that an
    en passant reply counts as a legal move.
    """

    # Product policy:
    # - Automatic draw here: insufficient material.
    # - History draws (fifty-move rule, threefold repetition) need the move
    #   list and live in :mod:`gambit.game.draw`.

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return is_king_in_check(board, color)

    @staticmethod
    def is_checkmate(
        board: Board, color: Color, last_move: Move | None = None
    ) -> bool:
        return Rules.determine_status(board, color, last_move) == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(
        board: Board, color: Color, last_move: Move | None = None
    ) -> bool:
        return Rules.determine_status(board, color, last_move) == GameStatus.STALEMATE

    @staticmethod
    def is_insufficient_material(board: Board) -> bool:
        """K vs K, K+B vs K, K+N vs K.

        K+B vs K+B with same-coloured bishops is not detected.
        """
        extras: list[PieceType] = [
            p.piece_type for p in board.pieces() if p.piece_type != PieceType.KING
        ]
        if not extras:
            return True
        return len(extras) == 1 and extras[0] in _MINOR_PIECES

    @staticmethod
    def determine_status(
        board: Board, color_to_move: Color, last_move: Move | None = None
    ) -> GameStatus:
        """Classify the position from the point of view of *color_to_move*.

        A side without a king is never in check.
        """
        if find_king(board, color_to_move) is None:
            _LOGGER.warning(
                "No %s king on board; treating as not in check", color_to_move
            )
        has_moves = MoveGenerator(board, last_move).has_legal_moves(color_to_move)
        in_check = is_king_in_check(board, color_to_move)

        if not has_moves:
            return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
        if in_check:
            return GameStatus.CHECK
        if Rules.is_insufficient_material(board):
            return GameStatus.DRAW
        return GameStatus.ACTIVE
