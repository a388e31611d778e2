"""Tests for the Qt worker-thread engine session."""

from __future__ import annotations

import time
from collections.abc import Iterator

import pytest
from PyQt6.QtCore import QEventLoop, QTimer

from checkie.core.board import Board
from checkie.core.enums import Color
from checkie.core.move_generator import all_moves
from checkie.engine.dispatch import SearchDispatcher
from checkie.engine.search import Difficulty, SearchLimits, SearchResult
from checkie.game.controller import GameController
from checkie.game.engine_session import EngineSession
from checkie.game.interfaces import GamePhase, GameSettings


class _FailingEngine:
    def search(self, board: Board, player: Color, limits: SearchLimits) -> SearchResult:
        raise RuntimeError("engine exploded")


class _SlowEngine:
    def search(self, board: Board, player: Color, limits: SearchLimits) -> SearchResult:
        time.sleep(0.5)
        move = all_moves(board, player)[0]
        return SearchResult(best_move=move, score=0.0, depth=1, nodes=1)


def _wait_for_finish(session: EngineSession, timeout_ms: int = 10_000) -> None:
    loop = QEventLoop()
    session.search_finished.connect(loop.quit)
    QTimer.singleShot(timeout_ms, loop.quit)
    loop.exec()
    session.search_finished.disconnect(loop.quit)


@pytest.fixture
def controller(dispatcher: SearchDispatcher) -> GameController:
    return GameController(dispatcher)


@pytest.fixture
def session(qapp: object, controller: GameController) -> Iterator[EngineSession]:
    sess = EngineSession(controller, timeout_s=10.0)
    yield sess
    sess.shutdown()


def _beginner(**kwargs: object) -> GameSettings:
    return GameSettings(difficulty=Difficulty.BEGINNER, allow_undo=True, **kwargs)  # type: ignore[arg-type]


class TestEngineSession:
    def test_worker_reply_applied(
        self, session: EngineSession, controller: GameController
    ) -> None:
        session.setup()
        controller.new_game_from_settings(_beginner())
        controller.attempt_move((5, 0), (4, 1))
        assert controller.is_thinking

        reply = session.play_ai_turn()

        assert reply is not None
        assert controller.state.last_move == reply
        assert controller.state.side_to_move == Color.RED
        assert controller.phase == GamePhase.AWAITING_MOVE

    def test_ai_opening_move(
        self, session: EngineSession, controller: GameController
    ) -> None:
        session.setup()
        controller.new_game_from_settings(_beginner(ai_moves_first=True))
        reply = session.play_ai_turn()
        assert reply in all_moves(Board.initial(), Color.BLACK)

    def test_worker_error_falls_back_to_sync_search(
        self, session: EngineSession, controller: GameController
    ) -> None:
        session._engine_worker._engine = _FailingEngine()  # type: ignore[assignment]
        session.setup()
        controller.new_game_from_settings(_beginner())
        controller.attempt_move((5, 0), (4, 1))

        reply = session.play_ai_turn()

        assert reply is not None
        assert controller.state.side_to_move == Color.RED

    def test_slow_worker_times_out(
        self, qapp: object, controller: GameController
    ) -> None:
        sess = EngineSession(controller, timeout_s=0.05)
        sess._engine_worker._engine = _SlowEngine()  # type: ignore[assignment]
        sess.setup()
        try:
            controller.new_game_from_settings(_beginner())
            controller.attempt_move((5, 0), (4, 1))
            reply = sess.play_ai_turn()
            assert reply is not None
            assert controller.state.side_to_move == Color.RED
            moves_after_reply = controller.state.move_count
        finally:
            sess.shutdown()
        # The late worker answer is dropped.
        assert controller.state.move_count == moves_after_reply

    def test_result_after_undo_is_ignored(
        self, session: EngineSession, controller: GameController
    ) -> None:
        session.setup()
        controller.new_game_from_settings(_beginner())
        controller.attempt_move((5, 0), (4, 1))
        assert controller.undo_move()

        _wait_for_finish(session)

        assert controller.state.board == Board.initial()
        assert controller.state.side_to_move == Color.RED
        assert not controller.is_thinking

    def test_shutdown_hands_back_to_dispatcher(
        self, session: EngineSession, controller: GameController
    ) -> None:
        session.setup()
        session.shutdown()
        assert not session.is_started
        controller.new_game_from_settings(_beginner())
        controller.attempt_move((5, 0), (4, 1))
        assert controller.complete_ai_move() is not None
