"""Legal move generation with mandatory-capture enforcement."""

from __future__ import annotations

from checkie.core.board import Board
from checkie.core.enums import Color
from checkie.core.move import Move
from checkie.core.piece import Piece
from checkie.core.types import Square, is_valid_square

_Chain = tuple[tuple[Square, ...], tuple[Square, ...]]  # (landings, captured)


class MoveGenerator:
    """Generates legal moves for a given :class:`Board`.

    Capture chains are explored on derived board values; the input board is
    never modified.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    @property
    def board(self) -> Board:
        return self._board

    # -- Player-wide enumeration -------------------------------------------

    def all_moves(self, color: Color) -> list[Move]:
        """All legal moves for *color*.

        If any piece can capture, only capturing moves are returned.
        """
        jumps: list[Move] = []
        steps: list[Move] = []
        for sq in self._board.pieces(color):
            for move in self.moves_for_piece(sq):
                (jumps if move.is_jump else steps).append(move)
        return jumps if jumps else steps

    def has_jump(self, color: Color) -> bool:
        """Whether any piece of *color* has a capture available."""
        return any(self.immediate_jumps(sq) for sq in self._board.pieces(color))

    # -- Single-piece enumeration ------------------------------------------

    def moves_for_piece(self, sq: tuple[int, int], full_chains: bool = True) -> list[Move]:
        """Moves for the piece on *sq*; jumps suppress simple steps."""
        jumps = self.maximal_jump_chains(sq) if full_chains else self.immediate_jumps(sq)
        if jumps:
            return jumps
        return self.simple_moves(sq)

    def selectable_moves(self, sq: tuple[int, int], color: Color) -> list[Move]:
        """Shallow moves a player may pick for the piece on *sq*.

        Empty when another of *color*'s pieces must capture instead.
        """
        piece = self._board[sq]
        if piece is None or piece.color != color:
            return []
        moves = self.moves_for_piece(sq, full_chains=False)
        if self.has_jump(color):
            return [m for m in moves if m.is_jump]
        return moves

    def simple_moves(self, sq: tuple[int, int]) -> list[Move]:
        """Non-capturing one-step diagonal moves into empty squares."""
        piece = self._require_piece(sq)
        origin = Square(*sq)
        board = self._board
        moves: list[Move] = []
        for d_row, d_col in piece.directions:
            target = origin.offset(d_row, d_col)
            if is_valid_square(target) and board[target] is None:
                moves.append(Move(origin, target))
        return moves

    def immediate_jumps(self, sq: tuple[int, int]) -> list[Move]:
        """Single-capture options from *sq*, each as a one-step move."""
        piece = self._require_piece(sq)
        origin = Square(*sq)
        moves: list[Move] = []
        for mid, landing in self._jump_targets(self._board, piece, origin):
            moves.append(
                Move(
                    origin,
                    landing,
                    is_jump=True,
                    jumped=mid,
                    jump_sequence=(landing,),
                )
            )
        return moves

    def maximal_jump_chains(self, sq: tuple[int, int]) -> list[Move]:
        """Every maximal capture chain from *sq*, one :class:`Move` each."""
        piece = self._require_piece(sq)
        origin = Square(*sq)
        moves: list[Move] = []
        for landings, captured in self._chains(self._board, piece, origin, frozenset()):
            moves.append(
                Move(
                    origin,
                    landings[-1],
                    is_jump=True,
                    jumped=captured[0],
                    jump_sequence=landings,
                )
            )
        return moves

    # -- Evaluation support -------------------------------------------------

    def mobility(self, color: Color) -> int:
        """Pseudo-legal single steps plus single jumps over all *color* pieces.

        No mandatory-capture filtering is applied.
        """
        board = self._board
        count = 0
        for sq in board.pieces(color):
            piece = board[sq]
            assert piece is not None
            for d_row, d_col in piece.directions:
                step = sq.offset(d_row, d_col)
                if is_valid_square(step) and board[step] is None:
                    count += 1
            count += len(self._jump_targets(board, piece, sq))
        return count

    # -- Internal -----------------------------------------------------------

    def _require_piece(self, sq: tuple[int, int]) -> Piece:
        piece = self._board[sq]
        if piece is None:
            raise ValueError(f"No piece on {tuple(sq)!r}")
        return piece

    @staticmethod
    def _jump_targets(
        board: Board, piece: Piece, origin: Square
    ) -> list[tuple[Square, Square]]:
        """``(captured, landing)`` pairs for every single jump from *origin*."""
        targets: list[tuple[Square, Square]] = []
        for d_row, d_col in piece.directions:
            landing = origin.offset(2 * d_row, 2 * d_col)
            if not is_valid_square(landing) or board[landing] is not None:
                continue
            mid = origin.offset(d_row, d_col)
            victim = board[mid]
            if victim is not None and victim.color != piece.color:
                targets.append((mid, landing))
        return targets

    def _chains(
        self,
        board: Board,
        piece: Piece,
        origin: Square,
        visited: frozenset[Square],
    ) -> list[_Chain]:
        chains: list[_Chain] = []
        for mid, landing in self._jump_targets(board, piece, origin):
            if mid in visited:
                continue
            # Promotion is deferred to the executor, never applied mid-chain.
            after = board.with_pieces({origin: None, mid: None, landing: piece})
            further = self._chains(after, piece, landing, visited | {mid})
            if not further:
                chains.append(((landing,), (mid,)))
                continue
            for landings, captured in further:
                chains.append(((landing, *landings), (mid, *captured)))
        return chains


def all_moves(board: Board, color: Color) -> list[Move]:
    """Shorthand for ``MoveGenerator(board).all_moves(color)``."""
    return MoveGenerator(board).all_moves(color)
