"""Core domain layer: pure checkers logic with zero external dependencies.

Quick start::

    from checkie.core import Board, Color, MoveGenerator, apply_move

    board = Board.initial()
    for move in MoveGenerator(board).all_moves(Color.RED):
        print(move, apply_move(board, move), sep="\\n")
"""

from checkie.core.board import Board
from checkie.core.enums import Color, GameResult
from checkie.core.executor import apply_move, is_promotion, iter_jump_legs
from checkie.core.move import Move
from checkie.core.move_generator import MoveGenerator, all_moves
from checkie.core.notation import (
    board_from_diagram,
    board_to_diagram,
    find_move,
    move_to_str,
    parse_move_text,
)
from checkie.core.piece import Piece
from checkie.core.rules import Rules
from checkie.core.types import (
    BOARD_SIZE,
    Square,
    is_dark_square,
    is_valid_square,
    require_valid_square,
    square_from_number,
    square_number,
)

__all__ = [
    # Enums
    "Color",
    "GameResult",
    # Types / helpers
    "BOARD_SIZE",
    "Square",
    "is_dark_square",
    "is_valid_square",
    "require_valid_square",
    "square_from_number",
    "square_number",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Operations
    "all_moves",
    "apply_move",
    "is_promotion",
    "iter_jump_legs",
    # Notation
    "board_from_diagram",
    "board_to_diagram",
    "find_move",
    "move_to_str",
    "parse_move_text",
]
