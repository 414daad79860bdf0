"""Core rules layer: pure chess logic with zero external dependencies.

Quick start::

    from gambit.core import Board, Color, MoveGenerator

    board = Board.initial()
    gen = MoveGenerator(board)
    for piece, targets in gen.legal_moves(Color.WHITE).items():
        print(piece.symbol, [str(sq) for sq in targets])
"""

from gambit.core.attacks import (
    filter_legal_moves,
    find_king,
    is_king_in_check,
    is_square_attacked,
    would_move_result_in_check,
)
from gambit.core.board import Board
from gambit.core.enums import CastlingSide, Color, GameStatus, PieceType
from gambit.core.fen import STARTING_PLACEMENT, board_from_fen, board_to_fen
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator, generate_moves, is_valid_move
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.special_moves import (
    can_capture_en_passant,
    can_castle,
    is_promotion_move,
    promotion_options,
)
from gambit.core.types import Square, is_on_board, parse_square, square_name

__all__ = [
    # Enums
    "CastlingSide",
    "Color",
    "GameStatus",
    "PieceType",
    # Types / helpers
    "Square",
    "is_on_board",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Attacks / legality
    "filter_legal_moves",
    "find_king",
    "generate_moves",
    "is_king_in_check",
    "is_square_attacked",
    "is_valid_move",
    "would_move_result_in_check",
    # Special moves
    "can_capture_en_passant",
    "can_castle",
    "is_promotion_move",
    "promotion_options",
    # Placement strings
    "STARTING_PLACEMENT",
    "board_from_fen",
    "board_to_fen",
]
