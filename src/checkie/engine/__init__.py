"""Checkers engine package: evaluation, minimax search and off-thread dispatch.

The Qt worker lives in :mod:`checkie.engine.qt_bridge`; it is driven by
:class:`checkie.game.engine_session.EngineSession`.
"""

from checkie.engine.dispatch import SearchDispatcher, SearchFailedError
from checkie.engine.evaluation import ScoreBreakdown, evaluate, score_board, score_both
from checkie.engine.minimax import MinimaxEngine, find_best_move, minimax
from checkie.engine.search import (
    MINIMAX_DEPTH,
    TERMINAL_SCORE,
    Difficulty,
    IEngine,
    SearchLimits,
    SearchRequest,
    SearchResult,
)

__all__ = [
    "Difficulty",
    "IEngine",
    "MINIMAX_DEPTH",
    "MinimaxEngine",
    "ScoreBreakdown",
    "SearchDispatcher",
    "SearchFailedError",
    "SearchLimits",
    "SearchRequest",
    "SearchResult",
    "TERMINAL_SCORE",
    "evaluate",
    "find_best_move",
    "minimax",
    "score_board",
    "score_both",
]
