"""Board - immutable piece placement on an 8x8 checkerboard."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from checkie.core.enums import Color
from checkie.core.piece import Piece
from checkie.core.types import BOARD_SIZE, DARK_SQUARES, Square, is_dark_square

_CELLS = BOARD_SIZE * BOARD_SIZE
_LIGHT_INDICES: tuple[int, ...] = tuple(
    r * BOARD_SIZE + c
    for r in range(BOARD_SIZE)
    for c in range(BOARD_SIZE)
    if not is_dark_square((r, c))
)


def _index(sq: tuple[int, int]) -> int:
    row, col = sq
    if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
        raise ValueError(f"Square off the board: {(row, col)!r}")
    return row * BOARD_SIZE + col


class Board:
    """Immutable 64-square board.

    Every mutation helper returns a new :class:`Board`; an existing board is
    never edited, so it may be shared freely between threads.
    """

    __slots__ = ("_squares", "_hash")

    def __init__(self, squares: tuple[Piece | None, ...] | None = None) -> None:
        if squares is None:
            squares = (None,) * _CELLS
        if len(squares) != _CELLS:
            raise ValueError(f"Board needs {_CELLS} squares, got {len(squares)}")
        for i in _LIGHT_INDICES:
            if squares[i] is not None:
                raise ValueError(
                    "Pieces may only stand on dark squares: "
                    f"{divmod(i, BOARD_SIZE)!r}"
                )
        self._squares: tuple[Piece | None, ...] = squares
        self._hash: int | None = None

    @classmethod
    def _trusted(cls, squares: tuple[Piece | None, ...]) -> Board:
        """Wrap *squares* that are already known to respect the layout."""
        board = object.__new__(cls)
        board._squares = squares
        board._hash = None
        return board

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: tuple[int, int]) -> Piece | None:
        return self._squares[_index(sq)]

    def is_empty(self, sq: tuple[int, int]) -> bool:
        return self._squares[_index(sq)] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color) -> list[Square]:
        """Squares occupied by *color*, in row-major order."""
        squares = self._squares
        return [
            sq
            for sq in DARK_SQUARES
            if (p := squares[sq.row * BOARD_SIZE + sq.col]) is not None
            and p.color == color
        ]

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """``(square, piece)`` pairs for every occupied square, row-major."""
        squares = self._squares
        for sq in DARK_SQUARES:
            piece = squares[sq.row * BOARD_SIZE + sq.col]
            if piece is not None:
                yield sq, piece

    def count(self, color: Color, *, kings: bool | None = None) -> int:
        """Number of *color*'s pieces; ``kings`` restricts to kings or men."""
        return sum(
            1
            for _, p in self.occupied()
            if p.color == color and (kings is None or p.is_king == kings)
        )

    # -- Derived boards -----------------------------------------------------

    def with_pieces(self, changes: Mapping[tuple[int, int], Piece | None]) -> Board:
        """New board with *changes* applied (``None`` clears a square)."""
        squares = list(self._squares)
        for sq, piece in changes.items():
            if piece is not None and not is_dark_square(sq):
                raise ValueError(f"Pieces may only stand on dark squares: {sq!r}")
            squares[_index(sq)] = piece
        return Board._trusted(tuple(squares))

    def moved(
        self,
        from_sq: tuple[int, int],
        to_sq: tuple[int, int],
        *,
        captured: tuple[int, int] | None = None,
    ) -> Board:
        """New board with the piece on *from_sq* relocated to *to_sq*."""
        piece = self[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {tuple(from_sq)!r}")
        changes: dict[tuple[int, int], Piece | None] = {from_sq: None}
        if captured is not None:
            changes[captured] = None
        changes[to_sq] = piece
        return self.with_pieces(changes)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position: Black on rows 0-2, Red on rows 5-7."""
        placement: dict[tuple[int, int], Piece | None] = {}
        for sq in DARK_SQUARES:
            if sq.row < 3:
                placement[sq] = Piece(Color.BLACK)
            elif sq.row > 4:
                placement[sq] = Piece(Color.RED)
        return cls().with_pieces(placement)

    @classmethod
    def from_pieces(cls, placement: Mapping[tuple[int, int], Piece]) -> Board:
        return cls().with_pieces(placement)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._squares)
        return self._hash

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                p = self._squares[row * BOARD_SIZE + col]
                cells.append(str(p) if p else ".")
            rows.append(f"{row} {' '.join(cells)}")
        rows.append("  0 1 2 3 4 5 6 7")
        return "\n".join(rows)
