"""Tests for the pure turn-state transitions."""

import pytest

from checkie.core.board import Board
from checkie.core.enums import Color, GameResult
from checkie.core.executor import apply_move
from checkie.core.move import Move
from checkie.core.move_generator import all_moves
from checkie.core.piece import Piece
from checkie.core.types import Square
from checkie.game import state as turns
from checkie.game.state import TurnState

RED = Piece(Color.RED)
BLACK = Piece(Color.BLACK)


def _forced_capture_state() -> TurnState:
    board = Board.from_pieces({(5, 4): RED, (5, 0): RED, (4, 3): BLACK, (0, 7): BLACK})
    return turns.new_turn_state(Color.RED, board)


def _chain_state() -> TurnState:
    board = Board.from_pieces(
        {(6, 1): RED, (7, 0): RED, (5, 2): BLACK, (3, 4): BLACK, (0, 7): BLACK}
    )
    return turns.new_turn_state(Color.RED, board)


class TestNewTurnState:
    def test_defaults(self) -> None:
        state = turns.new_turn_state()
        assert state.board == Board.initial()
        assert state.side_to_move == Color.RED
        assert state.result == GameResult.IN_PROGRESS
        assert state.selected is None
        assert state.history == ()

    def test_black_first(self) -> None:
        state = turns.new_turn_state(Color.BLACK)
        assert state.side_to_move == Color.BLACK
        assert state.first_player == Color.BLACK

    def test_terminal_board(self) -> None:
        state = turns.new_turn_state(Color.RED, Board.from_pieces({(0, 7): BLACK}))
        assert state.is_game_over
        assert state.winner == Color.BLACK

    def test_restart(self) -> None:
        state = turns.new_turn_state(Color.BLACK)
        moved = turns.move(state, (2, 1), (3, 0)).state
        fresh = turns.restart(moved).state
        assert fresh.board == Board.initial()
        assert fresh.side_to_move == Color.BLACK


class TestSelect:
    def test_select_own_piece(self) -> None:
        t = turns.select(turns.new_turn_state(), (5, 0))
        assert t.accepted
        assert t.state.selected == Square(5, 0)
        assert [m.to_sq for m in t.state.valid_moves] == [Square(4, 1)]

    def test_select_opponent_deselects(self) -> None:
        state = turns.select(turns.new_turn_state(), (5, 0)).state
        t = turns.select(state, (2, 1))
        assert t.accepted
        assert t.state.selected is None
        assert t.state.valid_moves == ()

    def test_select_empty_deselects(self) -> None:
        state = turns.select(turns.new_turn_state(), (5, 0)).state
        assert turns.select(state, (4, 1)).state.selected is None

    def test_blocked_piece_selectable_without_targets(self) -> None:
        t = turns.select(turns.new_turn_state(), (7, 0))
        assert t.accepted
        assert t.state.valid_moves == ()

    def test_mandatory_jump_refuses_other_piece(self) -> None:
        state = _forced_capture_state()
        t = turns.select(state, (5, 0))
        assert not t.accepted
        assert t.notice == turns.NOTICE_MANDATORY_SELECT
        assert t.state is state

    def test_mandatory_jump_lists_only_capture(self) -> None:
        t = turns.select(_forced_capture_state(), (5, 4))
        assert [m.to_sq for m in t.state.valid_moves] == [Square(3, 2)]

    def test_off_board_raises(self) -> None:
        with pytest.raises(ValueError):
            turns.select(turns.new_turn_state(), (8, 8))


class TestMove:
    def test_step_passes_turn(self) -> None:
        t = turns.move(turns.new_turn_state(), (5, 0), (4, 1))
        assert t.accepted and t.turn_ended
        assert t.state.side_to_move == Color.BLACK
        assert t.state.move_count == 1
        assert t.state.last_move == Move(Square(5, 0), Square(4, 1))
        assert len(t.state.history) == 1

    def test_unlisted_target_refused(self) -> None:
        t = turns.move(turns.new_turn_state(), (5, 0), (3, 2))
        assert not t.accepted
        assert t.notice == turns.NOTICE_ILLEGAL_MOVE

    def test_opponent_piece_refused(self) -> None:
        t = turns.move(turns.new_turn_state(), (2, 1), (3, 0))
        assert not t.accepted

    def test_step_refused_when_capture_available(self) -> None:
        t = turns.move(_forced_capture_state(), (5, 0), (4, 1))
        assert not t.accepted
        assert t.notice == turns.NOTICE_MANDATORY_MOVE

    def test_capture_wins_when_last_piece_taken(self) -> None:
        board = Board.from_pieces({(5, 4): RED, (4, 3): BLACK})
        t = turns.move(turns.new_turn_state(Color.RED, board), (5, 4), (3, 2))
        assert t.turn_ended
        assert t.state.result == GameResult.RED_WINS

    def test_moves_refused_after_game_over(self) -> None:
        state = turns.new_turn_state(Color.RED, Board.from_pieces({(0, 7): BLACK}))
        t = turns.move(state, (0, 7), (1, 6))
        assert not t.accepted
        assert t.notice == turns.NOTICE_GAME_OVER


class TestJumpLock:
    def test_first_leg_keeps_turn(self) -> None:
        t = turns.move(_chain_state(), (6, 1), (4, 3))
        assert t.accepted
        assert not t.turn_ended
        assert t.state.side_to_move == Color.RED
        assert t.state.jump_lock == Square(4, 3)
        assert t.state.selected == Square(4, 3)
        assert [m.to_sq for m in t.state.valid_moves] == [Square(2, 5)]
        assert t.state.board[(5, 2)] is None

    def test_other_piece_refused_while_locked(self) -> None:
        locked = turns.move(_chain_state(), (6, 1), (4, 3)).state
        t = turns.select(locked, (7, 0))
        assert not t.accepted
        assert t.notice == turns.NOTICE_CONTINUE_JUMP

    def test_empty_square_refused_while_locked(self) -> None:
        locked = turns.move(_chain_state(), (6, 1), (4, 3)).state
        t = turns.select(locked, (4, 5))
        assert not t.accepted
        assert t.notice == turns.NOTICE_FINISH_CHAIN

    def test_move_other_piece_refused_while_locked(self) -> None:
        locked = turns.move(_chain_state(), (6, 1), (4, 3)).state
        t = turns.move(locked, (7, 0), (6, 1))
        assert not t.accepted
        assert t.notice == turns.NOTICE_CONTINUE_JUMP

    def test_second_leg_ends_turn(self) -> None:
        locked = turns.move(_chain_state(), (6, 1), (4, 3)).state
        t = turns.move(locked, (4, 3), (2, 5))
        assert t.turn_ended
        assert t.state.side_to_move == Color.BLACK
        assert t.state.jump_lock is None
        assert t.state.board.count(Color.BLACK) == 1
        assert t.state.move_count == 1
        assert len(t.state.history) == 1

    def test_chain_matches_engine_move(self) -> None:
        start = _chain_state()
        locked = turns.move(start, (6, 1), (4, 3)).state
        done = turns.move(locked, (4, 3), (2, 5)).state
        (chain,) = all_moves(start.board, Color.RED)
        assert done.board == apply_move(start.board, chain)

    def test_promotion_ends_chain(self) -> None:
        board = Board.from_pieces({(2, 1): RED, (1, 2): BLACK, (1, 4): BLACK})
        t = turns.move(turns.new_turn_state(Color.RED, board), (2, 1), (0, 3))
        assert t.turn_ended
        assert t.state.board[(0, 3)] == Piece(Color.RED, True)
        assert t.state.side_to_move == Color.BLACK


class TestPlay:
    def test_full_chain_in_one_call(self) -> None:
        start = _chain_state()
        (chain,) = all_moves(start.board, Color.RED)
        t = turns.play(start, chain)
        assert t.turn_ended
        assert t.state.last_move == chain
        assert t.state.board == apply_move(start.board, chain)

    def test_illegal_move_refused(self) -> None:
        t = turns.play(turns.new_turn_state(), Move(Square(5, 0), Square(3, 2)))
        assert not t.accepted

    def test_refused_while_locked(self) -> None:
        locked = turns.move(_chain_state(), (6, 1), (4, 3)).state
        t = turns.play(locked, locked.valid_moves[0])
        assert not t.accepted
        assert t.notice == turns.NOTICE_FINISH_CHAIN


class TestUndo:
    def test_nothing_to_undo(self) -> None:
        t = turns.undo(turns.new_turn_state())
        assert not t.accepted
        assert t.notice == turns.NOTICE_NOTHING_TO_UNDO

    def test_undo_one_turn(self) -> None:
        start = turns.new_turn_state()
        moved = turns.move(start, (5, 0), (4, 1)).state
        t = turns.undo(moved)
        assert t.accepted
        assert t.state.board == start.board
        assert t.state.side_to_move == Color.RED
        assert t.state.move_count == 0
        assert t.state.history == ()

    def test_undo_two_plies(self) -> None:
        start = turns.new_turn_state()
        one = turns.move(start, (5, 0), (4, 1)).state
        two = turns.move(one, (2, 1), (3, 2)).state
        t = turns.undo(two, plies=2)
        assert t.state.board == start.board
        assert t.state.side_to_move == Color.RED

    def test_undo_mid_chain(self) -> None:
        start = _chain_state()
        locked = turns.move(start, (6, 1), (4, 3)).state
        t = turns.undo(locked)
        assert t.state.board == start.board
        assert t.state.jump_lock is None

    def test_too_many_plies(self) -> None:
        moved = turns.move(turns.new_turn_state(), (5, 0), (4, 1)).state
        assert not turns.undo(moved, plies=2).accepted

    def test_non_positive_plies(self) -> None:
        with pytest.raises(ValueError):
            turns.undo(turns.new_turn_state(), plies=0)
