"""Engine search session: runs AI searches on a Qt worker thread."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QEventLoop, QObject, QThread, QTimer, pyqtSignal, pyqtSlot

from checkie.core.move import Move
from checkie.engine.qt_bridge import EngineWorker
from checkie.engine.search import SearchRequest
from checkie.game.controller import GameController

_LOGGER = logging.getLogger(__name__)


class EngineSession(QObject):
    """Owns the worker-thread search lifecycle and the move handoff.

    Once :meth:`setup` has run, the controller's AI requests are emitted to
    an :class:`EngineWorker` living in a dedicated ``QThread``.  Results come
    back through queued signals and go to
    :meth:`GameController.apply_search_result`.  A worker error, or silence
    past the timeout, makes the controller search synchronously instead.

    Args:
        controller: Game whose AI turns this session serves.
        timeout_s: Seconds to wait for the worker; defaults to the
            controller's dispatcher timeout.
    """

    engine_request = pyqtSignal(object, int)
    search_finished = pyqtSignal(int)

    def __init__(
        self,
        controller: GameController,
        timeout_s: float | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        wait = controller.search_timeout_s if timeout_s is None else timeout_s
        self._timeout_ms = max(1, int(wait * 1000))

        self._engine_thread = QThread(self)
        self._engine_worker = EngineWorker()
        self._fallback_timer = QTimer(self)
        self._fallback_timer.setSingleShot(True)
        self._fallback_timer.timeout.connect(self._on_timeout)

        self._active_request: int | None = None
        self._last_move: Move | None = None
        self._is_started = False

    @property
    def is_started(self) -> bool:
        return self._is_started

    def setup(self) -> None:
        """Start the worker thread and take over the controller's searches."""
        if self._is_started:
            return
        self._engine_worker.moveToThread(self._engine_thread)
        self.engine_request.connect(self._engine_worker.request_move)
        self._engine_worker.best_move_ready.connect(self._on_best_move)
        self._engine_worker.search_no_move.connect(self._on_no_move)
        self._engine_worker.search_error.connect(self._on_error)
        self._engine_thread.start()
        self._controller.attach_search_host(self._submit)
        self._is_started = True

    def shutdown(self) -> None:
        """Hand searches back to the dispatcher and stop the worker thread."""
        if not self._is_started:
            return
        self._fallback_timer.stop()
        self._active_request = None
        self._controller.attach_search_host(None)
        self._engine_thread.quit()
        self._engine_thread.wait()
        self._is_started = False

    def play_ai_turn(self) -> Move | None:
        """Request (if needed) an AI move and run the event loop until it lands."""
        ctrl = self._controller
        if ctrl.pending_request_id is None:
            ctrl.request_ai_move()
        request_id = ctrl.pending_request_id
        if request_id is None or request_id != self._active_request:
            return ctrl.complete_ai_move()

        self._last_move = None
        loop = QEventLoop()
        self.search_finished.connect(loop.quit)
        try:
            loop.exec()
        finally:
            self.search_finished.disconnect(loop.quit)
        return self._last_move

    # ── Worker callbacks ─────────────────────────────────────────────────

    def _submit(self, request_id: int, request: SearchRequest) -> None:
        self._active_request = request_id
        self._fallback_timer.start(self._timeout_ms)
        self.engine_request.emit(request, request_id)

    @pyqtSlot(int, object, float)
    def _on_best_move(self, request_id: int, move_obj: object, _score: float) -> None:
        if not self._take(request_id):
            return
        move = move_obj if isinstance(move_obj, Move) else None
        if self._controller.apply_search_result(request_id, move):
            self._last_move = move
        self.search_finished.emit(request_id)

    @pyqtSlot(int)
    def _on_no_move(self, request_id: int) -> None:
        if not self._take(request_id):
            return
        self._controller.apply_search_result(request_id, None)
        self.search_finished.emit(request_id)

    @pyqtSlot(int, str)
    def _on_error(self, request_id: int, message: str) -> None:
        if not self._take(request_id):
            return
        _LOGGER.warning(
            "Worker search %d failed (%s); searching synchronously", request_id, message
        )
        self._fall_back(request_id)

    def _on_timeout(self) -> None:
        request_id = self._active_request
        if request_id is None:
            return
        self._active_request = None
        _LOGGER.warning(
            "Worker search %d timed out after %d ms; searching synchronously",
            request_id,
            self._timeout_ms,
        )
        self._fall_back(request_id)

    def _take(self, request_id: int) -> bool:
        """Claim *request_id* if it is the one in flight."""
        if request_id != self._active_request:
            _LOGGER.debug("Ignoring late worker result %d", request_id)
            return False
        self._active_request = None
        self._fallback_timer.stop()
        return True

    def _fall_back(self, request_id: int) -> None:
        if self._controller.pending_request_id == request_id:
            self._last_move = self._controller.complete_ai_move()
        self.search_finished.emit(request_id)
