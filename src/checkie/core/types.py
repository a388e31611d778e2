"""Square type and coordinate helpers.

Board layout (row-major, row 0 at the top, Black's home side)::

    row 0:  .  1  .  2  .  3  .  4
    row 1:  5  .  6  .  7  .  8  .
    ...
    row 7: 29  . 30  . 31  . 32  .

Only dark squares, where ``(row + col) % 2 == 1``, are playable.  They carry
the standard checkers numbers 1–32 shown above.
"""

from __future__ import annotations

from typing import NamedTuple

BOARD_SIZE = 8


class Square(NamedTuple):
    """A ``(row, col)`` coordinate pair."""

    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


def is_valid_square(sq: tuple[int, int]) -> bool:
    """Both coordinates in ``[0, 8)``."""
    row, col = sq
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def require_valid_square(sq: tuple[int, int]) -> Square:
    """Return *sq* as a :class:`Square` or raise ``ValueError`` if off-board."""
    if not is_valid_square(sq):
        raise ValueError(f"Square off the board: {tuple(sq)!r}")
    return Square(*sq)


def is_dark_square(sq: tuple[int, int]) -> bool:
    row, col = sq
    return (row + col) % 2 == 1


def midpoint(a: tuple[int, int], b: tuple[int, int]) -> Square:
    """Square exactly between two squares a jump apart."""
    return Square((a[0] + b[0]) // 2, (a[1] + b[1]) // 2)


def square_number(sq: tuple[int, int]) -> int:
    """Standard checkers number 1–32 of a dark square."""
    sq = require_valid_square(sq)
    if not is_dark_square(sq):
        raise ValueError(f"Light square has no number: {tuple(sq)!r}")
    return sq.row * 4 + sq.col // 2 + 1


def square_from_number(number: int) -> Square:
    """Inverse of :func:`square_number`, e.g. 1 → (0, 1), 32 → (7, 6)."""
    if not 1 <= number <= 32:
        raise ValueError(f"Invalid square number: {number!r}")
    row, idx = divmod(number - 1, 4)
    col = idx * 2 + (1 if row % 2 == 0 else 0)
    return Square(row, col)


DARK_SQUARES: tuple[Square, ...] = tuple(
    Square(r, c)
    for r in range(BOARD_SIZE)
    for c in range(BOARD_SIZE)
    if (r + c) % 2 == 1
)
