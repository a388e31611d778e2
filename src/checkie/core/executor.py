"""Move application: produces a new board, handles capture and promotion."""

from __future__ import annotations

from collections.abc import Iterator

from checkie.core.board import Board
from checkie.core.move import Move
from checkie.core.piece import Piece
from checkie.core.types import midpoint, require_valid_square


def apply_move(board: Board, move: Move) -> Board:
    """Return the board after *move*; *board* itself is left untouched.

    Promotion is decided once, against the final landing square.
    """
    result = board
    for result in iter_jump_legs(board, move):
        pass
    return result


def iter_jump_legs(board: Board, move: Move) -> Iterator[Board]:
    """Yield the board after each leg of *move*.

    A simple move yields a single board.  The last board yielded is the
    complete result, including promotion.
    """
    piece = _moving_piece(board, move)
    current = board

    if move.jump_sequence:
        legs = move.jump_sequence
        here = require_valid_square(move.from_sq)
        for i, landing in enumerate(legs):
            landing = require_valid_square(landing)
            current = current.with_pieces(
                {here: None, midpoint(here, landing): None, landing: piece}
            )
            here = landing
            if i < len(legs) - 1:
                yield current
    else:
        to_sq = require_valid_square(move.to_sq)
        captured = move.jumped if move.is_jump else None
        current = current.moved(move.from_sq, to_sq, captured=captured)

    final = move.landings[-1]
    if _promotes(piece, final[0]):
        current = current.with_pieces({final: piece.crowned()})
    yield current


def is_promotion(board: Board, move: Move) -> bool:
    """Whether applying *move* crowns the moving piece."""
    piece = _moving_piece(board, move)
    return _promotes(piece, move.landings[-1][0])


def _promotes(piece: Piece, final_row: int) -> bool:
    return not piece.is_king and final_row == piece.color.crowning_row


def _moving_piece(board: Board, move: Move) -> Piece:
    piece = board[require_valid_square(move.from_sq)]
    if piece is None:
        raise ValueError(f"No piece to move on {tuple(move.from_sq)!r}")
    return piece
