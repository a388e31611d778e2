"""Tests for square numbers, move text and board diagrams."""

import pytest

from checkie.core.board import Board
from checkie.core.enums import Color
from checkie.core.move import Move
from checkie.core.move_generator import all_moves
from checkie.core.notation import (
    board_from_diagram,
    board_to_diagram,
    find_move,
    move_to_str,
    parse_move_text,
)
from checkie.core.piece import Piece
from checkie.core.types import (
    DARK_SQUARES,
    Square,
    square_from_number,
    square_number,
)

INITIAL = """
. b . b . b . b
b . b . b . b .
. b . b . b . b
. . . . . . . .
. . . . . . . .
r . r . r . r .
. r . r . r . r
r . r . r . r .
"""


class TestSquareNumbers:
    def test_corners(self) -> None:
        assert square_number((0, 1)) == 1
        assert square_number((1, 0)) == 5
        assert square_number((7, 6)) == 32

    def test_from_number(self) -> None:
        assert square_from_number(1) == Square(0, 1)
        assert square_from_number(5) == Square(1, 0)
        assert square_from_number(32) == Square(7, 6)

    def test_every_dark_square_numbered_once(self) -> None:
        numbers = [square_number(sq) for sq in DARK_SQUARES]
        assert sorted(numbers) == list(range(1, 33))
        assert all(square_from_number(square_number(sq)) == sq for sq in DARK_SQUARES)

    def test_light_square_rejected(self) -> None:
        with pytest.raises(ValueError):
            square_number((0, 0))

    @pytest.mark.parametrize("number", [0, 33, -1])
    def test_out_of_range(self, number: int) -> None:
        with pytest.raises(ValueError):
            square_from_number(number)


class TestMoveText:
    def test_simple_move(self) -> None:
        move = Move(Square(5, 0), Square(4, 1))
        assert move_to_str(move) == "21-17"

    def test_chain(self) -> None:
        move = Move(
            Square(6, 1),
            Square(2, 5),
            is_jump=True,
            jumped=Square(5, 2),
            jump_sequence=(Square(4, 3), Square(2, 5)),
        )
        assert str(move) == "25x18x11"

    def test_parse(self) -> None:
        assert parse_move_text("25x18x11") == (Square(6, 1), Square(4, 3), Square(2, 5))
        assert parse_move_text(" 21 - 17 ") == (Square(5, 0), Square(4, 1))

    @pytest.mark.parametrize("text", ["", "21", "21-", "a-b", "21--17"])
    def test_parse_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_move_text(text)

    def test_find_move(self) -> None:
        moves = all_moves(Board.initial(), Color.RED)
        found = find_move(moves, "21-17")
        assert found == Move(Square(5, 0), Square(4, 1))

    def test_find_move_missing(self) -> None:
        moves = all_moves(Board.initial(), Color.RED)
        assert find_move(moves, "21-18") is None

    def test_find_chain_by_endpoints(self) -> None:
        board = Board.from_pieces(
            {
                (6, 1): Piece(Color.RED),
                (5, 2): Piece(Color.BLACK),
                (3, 4): Piece(Color.BLACK),
            }
        )
        moves = all_moves(board, Color.RED)
        assert find_move(moves, "25x11") == moves[0]
        assert find_move(moves, "25x18x11") == moves[0]


class TestDiagrams:
    def test_parse_initial(self) -> None:
        assert board_from_diagram(INITIAL) == Board.initial()

    def test_round_trip(self) -> None:
        board = Board.from_pieces(
            {(0, 1): Piece(Color.RED, True), (7, 6): Piece(Color.BLACK, True)}
        )
        assert board_from_diagram(board_to_diagram(board)) == board

    def test_wrong_row_count(self) -> None:
        with pytest.raises(ValueError):
            board_from_diagram(". b . b . b . b")

    def test_light_square_piece_rejected(self) -> None:
        text = INITIAL.replace(". b . b . b . b", "b . b . b . b .", 1)
        with pytest.raises(ValueError):
            board_from_diagram(text)
