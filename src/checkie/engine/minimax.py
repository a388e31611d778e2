"""Pure-Python checkers search (minimax + alpha-beta)."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Callable
from time import perf_counter

from checkie.core.board import Board
from checkie.core.enums import Color
from checkie.core.executor import apply_move, is_promotion
from checkie.core.move import Move
from checkie.core.move_generator import MoveGenerator
from checkie.engine.evaluation import evaluate
from checkie.engine.search import (
    TERMINAL_SCORE,
    Difficulty,
    IEngine,
    SearchLimits,
    SearchResult,
)

_LOGGER = logging.getLogger(__name__)


class MinimaxEngine(IEngine):
    """Depth-limited minimax with alpha-beta pruning and capture-first ordering.

    An instance keeps per-search counters, so give each thread its own
    engine.  Boards are immutable and never shared mutably.

    Args:
        rng: Source of randomness for the beginner tier.
        clock: Seconds-returning timer used for the per-branch budget.
    """

    __slots__ = ("_nodes", "_rng", "_clock")

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], float] = perf_counter,
    ) -> None:
        self._nodes = 0
        self._rng = rng or random.Random()
        self._clock = clock

    @property
    def nodes(self) -> int:
        return self._nodes

    # ── Public API ───────────────────────────────────────────────────────

    def find_best_move(
        self,
        board: Board,
        player: Color,
        difficulty: Difficulty = Difficulty.INTERMEDIATE,
    ) -> Move | None:
        """Best move for *player*, or ``None`` if it has no legal move."""
        return self.search(board, player, SearchLimits.for_difficulty(difficulty)).best_move

    def search(self, board: Board, player: Color, limits: SearchLimits) -> SearchResult:
        self._nodes = 0
        moves = MoveGenerator(board).all_moves(player)
        if not moves:
            return SearchResult(None, -TERMINAL_SCORE, 0, 0)

        if limits.difficulty == Difficulty.BEGINNER:
            move = self._rng.choice(moves)
            return SearchResult(move, evaluate(apply_move(board, move), player), 1, 0)

        if limits.difficulty == Difficulty.ADVANCED:
            moves = self._order_moves(board, moves, promotions_first=True)

        depth = limits.max_depth
        best_move: Move | None = None
        best_score = -math.inf

        for move in moves:
            start = self._clock()
            score = self.minimax(
                apply_move(board, move), depth, -math.inf, math.inf, False, player
            )
            elapsed_ms = (self._clock() - start) * 1000.0

            if score > best_score:
                best_score = score
                best_move = move

            if (
                limits.branch_budget_ms is not None
                and elapsed_ms > limits.branch_budget_ms
                and depth > limits.min_depth
            ):
                depth -= 1
                _LOGGER.debug(
                    "Branch %s took %.0f ms, reducing depth to %d", move, elapsed_ms, depth
                )

        if best_move is None:
            best_move = moves[0]

        _LOGGER.debug(
            "%s search for %s: best=%s score=%s nodes=%d",
            limits.difficulty,
            player,
            best_move,
            best_score,
            self._nodes,
        )
        return SearchResult(best_move, best_score, depth + 1, self._nodes)

    def minimax(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        root_player: Color,
    ) -> float:
        """Score of *board* for *root_player* searched *depth* plies deep."""
        self._nodes += 1
        if depth == 0:
            return evaluate(board, root_player)

        side = root_player if maximizing else root_player.opposite
        moves = MoveGenerator(board).all_moves(side)
        if not moves:
            return -TERMINAL_SCORE if maximizing else TERMINAL_SCORE

        ordered = self._order_moves(board, moves)

        if maximizing:
            best = -math.inf
            for move in ordered:
                score = self.minimax(
                    apply_move(board, move), depth - 1, alpha, beta, False, root_player
                )
                best = max(best, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
            return best

        best = math.inf
        for move in ordered:
            score = self.minimax(
                apply_move(board, move), depth - 1, alpha, beta, True, root_player
            )
            best = min(best, score)
            beta = min(beta, score)
            if beta <= alpha:
                break
        return best

    # ── Move ordering ────────────────────────────────────────────────────

    def _order_moves(
        self,
        board: Board,
        moves: list[Move],
        promotions_first: bool = False,
    ) -> list[Move]:
        """Captures first, then (optionally) promotions; otherwise stable."""
        if promotions_first:
            return sorted(
                moves,
                key=lambda m: (not m.is_jump, not is_promotion(board, m)),
            )
        return sorted(moves, key=lambda m: not m.is_jump)


def minimax(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    root_player: Color,
) -> float:
    """Functional form of :meth:`MinimaxEngine.minimax`."""
    return MinimaxEngine().minimax(board, depth, alpha, beta, maximizing, root_player)


def find_best_move(
    board: Board,
    player: Color,
    difficulty: Difficulty | str = Difficulty.INTERMEDIATE,
    rng: random.Random | None = None,
) -> Move | None:
    """Functional form of :meth:`MinimaxEngine.find_best_move`."""
    if not isinstance(difficulty, Difficulty):
        difficulty = Difficulty.parse(difficulty)
    return MinimaxEngine(rng=rng).find_best_move(board, player, difficulty)
