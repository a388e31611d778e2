"""Off-thread search execution with a timeout and synchronous fallback."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor

from checkie.engine.minimax import MinimaxEngine
from checkie.engine.search import IEngine, SearchRequest, SearchResult

_LOGGER = logging.getLogger(__name__)

EngineFactory = Callable[[], IEngine]


class SearchFailedError(RuntimeError):
    """The search could not produce a result, even synchronously."""


class SearchDispatcher:
    """Runs engine searches on a worker pool.

    ``submit`` returns a :class:`~concurrent.futures.Future` immediately;
    ``resolve`` waits for it up to ``timeout_s`` and, if the worker is late
    or failed, recomputes the same request in the calling thread.  An
    in-flight search is never cancelled; a late result is simply ignored.

    Args:
        engine_factory: Creates a fresh engine per search (engines keep
            per-search counters and are not shared between threads).
        executor: Worker pool to use.  A single-thread pool is created
            (and owned) when omitted.
        timeout_s: How long ``resolve`` waits before falling back.
    """

    DEFAULT_TIMEOUT_S = 5.0

    __slots__ = ("_engine_factory", "_executor", "_owns_executor", "_timeout_s")

    def __init__(
        self,
        *,
        engine_factory: EngineFactory = MinimaxEngine,
        executor: Executor | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self._engine_factory = engine_factory
        self._owns_executor = executor is None
        self._executor: Executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="checkie-search"
        )
        self._timeout_s = timeout_s

    @property
    def timeout_s(self) -> float:
        return self._timeout_s

    # ── Public API ───────────────────────────────────────────────────────

    def submit(self, request: SearchRequest) -> Future[SearchResult]:
        """Start *request* on the worker pool."""
        try:
            return self._executor.submit(self._run, request)
        except RuntimeError as exc:
            # Pool shut down or unable to start a thread.
            failed: Future[SearchResult] = Future()
            failed.set_exception(exc)
            return failed

    def resolve(
        self,
        future: Future[SearchResult],
        request: SearchRequest,
        timeout_s: float | None = None,
    ) -> SearchResult:
        """Result of *future*, or a synchronous recomputation of *request*."""
        wait = self._timeout_s if timeout_s is None else timeout_s
        try:
            return future.result(timeout=wait)
        except TimeoutError:
            _LOGGER.warning(
                "Search for %s timed out after %.1fs; searching synchronously",
                request.player,
                wait,
            )
        except Exception as exc:
            _LOGGER.warning(
                "Offloaded search for %s failed (%s); searching synchronously",
                request.player,
                exc,
            )
        return self.search_sync(request)

    def search(self, request: SearchRequest) -> SearchResult:
        """Submit and resolve in one call."""
        return self.resolve(self.submit(request), request)

    def search_sync(self, request: SearchRequest) -> SearchResult:
        """Run *request* in the calling thread."""
        try:
            return self._run(request)
        except Exception as exc:
            raise SearchFailedError(f"Search for {request.player} failed: {exc}") from exc

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> SearchDispatcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    # ── Internal ─────────────────────────────────────────────────────────

    def _run(self, request: SearchRequest) -> SearchResult:
        engine = self._engine_factory()
        return engine.search(request.board, request.player, request.limits)
