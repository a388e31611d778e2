"""Text notation: board diagrams and standard numbered move strings.

Diagram format: eight rows of eight characters, row 0 first.  ``r``/``b``
are men, ``R``/``B`` kings, ``.`` (or any whitespace-free filler such as
``-``) an empty square.  Spaces inside a row are ignored::

    . b . b . b . b
    b . b . b . b .
    ...

Moves use the 1–32 square numbers: ``22-18`` for a step, ``22x15x8`` for a
jump chain.
"""

from __future__ import annotations

import re

from checkie.core.board import Board
from checkie.core.move import Move
from checkie.core.piece import Piece
from checkie.core.types import BOARD_SIZE, Square, square_from_number

_EMPTY_CHARS = frozenset(".-_")
_MOVE_RE = re.compile(r"^\s*(\d{1,2})((?:\s*[-x]\s*\d{1,2})+)\s*$")


def board_from_diagram(text: str) -> Board:
    """Parse a diagram into a :class:`Board`."""
    rows = [line.replace(" ", "") for line in text.strip().splitlines()]
    rows = [r for r in rows if r]
    if len(rows) != BOARD_SIZE:
        raise ValueError(f"Diagram must have {BOARD_SIZE} rows, got {len(rows)}")

    placement: dict[Square, Piece] = {}
    for row, line in enumerate(rows):
        if len(line) != BOARD_SIZE:
            raise ValueError(f"Diagram row {row} must have {BOARD_SIZE} cells: {line!r}")
        for col, char in enumerate(line):
            if char in _EMPTY_CHARS:
                continue
            placement[Square(row, col)] = Piece.from_char(char)
    return Board.from_pieces(placement)


def board_to_diagram(board: Board) -> str:
    """Render *board* in the diagram format accepted by :func:`board_from_diagram`."""
    lines: list[str] = []
    for row in range(BOARD_SIZE):
        cells = []
        for col in range(BOARD_SIZE):
            piece = board[(row, col)]
            cells.append(str(piece) if piece else ".")
        lines.append(" ".join(cells))
    return "\n".join(lines)


def move_to_str(move: Move) -> str:
    """Standard numbered notation, e.g. ``9-14`` or ``22x15x8``."""
    return str(move)


def parse_move_text(text: str) -> tuple[Square, ...]:
    """Parse ``"22-18"`` / ``"22x15x8"`` into the visited squares, origin first."""
    match = _MOVE_RE.match(text)
    if match is None:
        raise ValueError(f"Invalid move text: {text!r}")
    numbers = [int(n) for n in re.findall(r"\d{1,2}", text)]
    return tuple(square_from_number(n) for n in numbers)


def find_move(moves: list[Move], text: str) -> Move | None:
    """Legal move from *moves* matching *text*.

    A bare ``from-to``/``fromxto`` pair also matches a chain with the same
    endpoints.
    """
    squares = parse_move_text(text)
    for move in moves:
        if move.path == squares:
            return move
    if len(squares) == 2:
        for move in moves:
            if move.from_sq == squares[0] and move.to_sq == squares[1]:
                return move
    return None
