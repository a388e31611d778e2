"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from checkie.engine.minimax import MinimaxEngine
from checkie.engine.search import SearchRequest


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Move it to a ``QThread`` and connect a queued signal carrying a
    :class:`SearchRequest` to :meth:`request_move`.
    """

    best_move_ready = pyqtSignal(int, object, float)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_engine",)

    def __init__(self) -> None:
        super().__init__()
        self._engine = MinimaxEngine()

    @pyqtSlot(object, int)
    def request_move(self, request_obj: object, request_id: int) -> None:
        """Search *request_obj* and emit the outcome tagged with *request_id*."""
        if not isinstance(request_obj, SearchRequest):
            self.search_error.emit(request_id, "Engine received invalid request")
            return

        try:
            result = self._engine.search(
                request_obj.board, request_obj.player, request_obj.limits
            )
        except Exception as exc:
            self.search_error.emit(request_id, str(exc))
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id)
            return

        self.best_move_ready.emit(request_id, result.best_move, float(result.score))
