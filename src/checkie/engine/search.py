"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from checkie.core.enums import Color

if TYPE_CHECKING:
    from checkie.core.board import Board
    from checkie.core.move import Move

TERMINAL_SCORE = 10_000
MINIMAX_DEPTH = 6


class Difficulty(StrEnum):
    """AI strength tiers."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @classmethod
    def parse(cls, value: str) -> Difficulty:
        """Accept tier names and the settings aliases easy/medium/hard."""
        key = value.strip().lower()
        try:
            return _ALIASES[key]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {value!r}") from None


_ALIASES: dict[str, Difficulty] = {
    "beginner": Difficulty.BEGINNER,
    "easy": Difficulty.BEGINNER,
    "intermediate": Difficulty.INTERMEDIATE,
    "medium": Difficulty.INTERMEDIATE,
    "advanced": Difficulty.ADVANCED,
    "hard": Difficulty.ADVANCED,
}


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation.

    ``max_depth`` is the depth searched below each root move.  At the
    advanced tier, a root branch slower than ``branch_budget_ms`` lowers the
    depth for the remaining branches by one, never below ``min_depth``.
    """

    difficulty: Difficulty = Difficulty.INTERMEDIATE
    max_depth: int = 1
    min_depth: int = 3
    branch_budget_ms: float | None = None

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty) -> SearchLimits:
        if difficulty == Difficulty.BEGINNER:
            return cls(difficulty, max_depth=0)
        if difficulty == Difficulty.INTERMEDIATE:
            return cls(difficulty, max_depth=1)
        return cls(
            difficulty,
            max_depth=MINIMAX_DEPTH - 1,
            min_depth=3,
            branch_budget_ms=200.0,
        )


@dataclass(slots=True, frozen=True)
class SearchRequest:
    """A self-contained search job: safe to hand to any thread."""

    board: Board
    player: Color
    limits: SearchLimits

    @classmethod
    def create(
        cls, board: Board, player: Color, difficulty: Difficulty | str
    ) -> SearchRequest:
        if not isinstance(difficulty, Difficulty):
            difficulty = Difficulty.parse(difficulty)
        return cls(board, player, SearchLimits.for_difficulty(difficulty))


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score: float
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for checkers engines used by the game layer."""

    def search(self, board: Board, player: Color, limits: SearchLimits) -> SearchResult: ...
