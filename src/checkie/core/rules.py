"""High-level checkers rules: terminal-state detection."""

from __future__ import annotations

from checkie.core.board import Board
from checkie.core.enums import Color, GameResult
from checkie.core.move_generator import MoveGenerator


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    # Product policy:
    # - A side with no legal move (blocked or out of pieces) loses.
    # - No draw by repetition or move limit.

    @staticmethod
    def has_legal_moves(board: Board, color: Color) -> bool:
        return bool(MoveGenerator(board).all_moves(color))

    @staticmethod
    def check_game_over(board: Board) -> Color | None:
        """Winner if either side is out of moves, else ``None``.

        Red is checked first, so a position where neither side can move
        is scored as a Black win.
        """
        gen = MoveGenerator(board)
        if not gen.all_moves(Color.RED):
            return Color.BLACK
        if not gen.all_moves(Color.BLACK):
            return Color.RED
        return None

    @staticmethod
    def game_result(board: Board, side_to_move: Color) -> GameResult:
        """Result with *side_to_move* about to play: stuck means lost."""
        if Rules.has_legal_moves(board, side_to_move):
            return GameResult.IN_PROGRESS
        return GameResult.win_for(side_to_move.opposite)
