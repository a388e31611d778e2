"""Positional evaluation: material, king power and strategic heuristics."""

from __future__ import annotations

from dataclasses import dataclass

from checkie.core.board import Board
from checkie.core.enums import Color
from checkie.core.move_generator import MoveGenerator
from checkie.core.types import BOARD_SIZE, is_valid_square

MAN_VALUE = 10
KING_VALUE = 15

MOBILITY_WEIGHT = 2
ADVANCEMENT_WEIGHT = 1
SUPPORT_WEIGHT = 2
CENTER_WEIGHT = 3
BACK_RANK_WEIGHT = 5

_CENTER_COLS = range(2, 6)


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """Per-player score.  Kings count in both ``material`` and ``power``."""

    material: int = 0
    power: int = 0
    strategy: int = 0
    total: int = 0


def score_board(board: Board, color: Color) -> ScoreBreakdown:
    """Score *board* for *color*, counting only *color*'s pieces."""
    material = 0
    power = 0
    strategy = MoveGenerator(board).mobility(color) * MOBILITY_WEIGHT

    for sq, piece in board.occupied():
        if piece.color != color:
            continue

        if piece.is_king:
            material += KING_VALUE
            power += KING_VALUE
        else:
            material += MAN_VALUE
            advancement = (BOARD_SIZE - 1 - sq.row) if color == Color.RED else sq.row
            strategy += advancement * ADVANCEMENT_WEIGHT
            if sq.row == color.home_row:
                strategy += BACK_RANK_WEIGHT

        if sq.col in _CENTER_COLS:
            strategy += CENTER_WEIGHT

        # Support: friendly pieces diagonally behind, relative to forward.
        behind = sq.row - color.forward
        for col in (sq.col - 1, sq.col + 1):
            if not is_valid_square((behind, col)):
                continue
            neighbour = board[(behind, col)]
            if neighbour is not None and neighbour.color == color:
                strategy += SUPPORT_WEIGHT

    return ScoreBreakdown(
        material=material,
        power=power,
        strategy=strategy,
        total=material + power + strategy,
    )


def score_both(board: Board) -> dict[Color, ScoreBreakdown]:
    return {color: score_board(board, color) for color in Color}


def evaluate(board: Board, color: Color) -> int:
    """Net utility for *color*: own total minus the opponent's."""
    return score_board(board, color).total - score_board(board, color.opposite).total
