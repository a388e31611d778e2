"""Tests for Qt engine bridge worker."""

from __future__ import annotations

from PyQt6.QtTest import QSignalSpy

from checkie.core.board import Board
from checkie.core.enums import Color
from checkie.core.move_generator import all_moves
from checkie.engine.qt_bridge import EngineWorker
from checkie.engine.search import (
    TERMINAL_SCORE,
    Difficulty,
    SearchLimits,
    SearchRequest,
    SearchResult,
)


class _NoMoveEngine:
    def search(self, _board: Board, _player: Color, _limits: SearchLimits) -> SearchResult:
        return SearchResult(best_move=None, score=-TERMINAL_SCORE, depth=0, nodes=0)


class _FailingEngine:
    def search(self, _board: Board, _player: Color, _limits: SearchLimits) -> SearchResult:
        raise RuntimeError("engine exploded")


def _request() -> SearchRequest:
    return SearchRequest.create(Board.initial(), Color.RED, Difficulty.INTERMEDIATE)


class TestEngineWorker:
    def test_emits_best_move(self, qapp: object) -> None:
        worker = EngineWorker()
        best_moves = QSignalSpy(worker.best_move_ready)
        received: list[object] = []
        worker.best_move_ready.connect(lambda _rid, move, _score: received.append(move))

        worker.request_move(_request(), 3)

        assert len(best_moves) == 1
        assert best_moves[0][0] == 3
        assert received[0] in all_moves(Board.initial(), Color.RED)

    def test_emits_no_move_when_search_returns_none(self, qapp: object) -> None:
        worker = EngineWorker()
        worker._engine = _NoMoveEngine()

        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(_request(), 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_emits_error_when_engine_fails(self, qapp: object) -> None:
        worker = EngineWorker()
        worker._engine = _FailingEngine()

        errors = QSignalSpy(worker.search_error)

        worker.request_move(_request(), 5)

        assert len(errors) == 1
        assert errors[0][0] == 5
        assert "exploded" in errors[0][1]

    def test_rejects_invalid_request(self, qapp: object) -> None:
        worker = EngineWorker()
        errors = QSignalSpy(worker.search_error)

        worker.request_move("not a request", 9)

        assert len(errors) == 1
        assert errors[0][0] == 9
