"""Abstract interfaces and value types for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these ABCs, not on concrete Player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, StrEnum, auto
from typing import TYPE_CHECKING

from checkie.core.enums import Color
from checkie.engine.search import Difficulty

if TYPE_CHECKING:
    from checkie.core.board import Board
    from checkie.core.move import Move
    from checkie.core.types import Square


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a checkers game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()  # AI is computing
    GAME_OVER = auto()


class GameMode(StrEnum):
    VS_AI = "vs_ai"
    VS_HUMAN = "vs_human"


# ── Settings ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Match settings, fixed for the duration of one game.

    ``allow_undo`` left as ``None`` enables undo at the beginner tier only.
    In ``VS_AI`` mode the human plays Red and the AI plays Black.
    """

    difficulty: Difficulty = Difficulty.INTERMEDIATE
    ai_moves_first: bool = False
    mode: GameMode = GameMode.VS_AI
    allow_undo: bool | None = None

    @property
    def undo_enabled(self) -> bool:
        if self.allow_undo is not None:
            return self.allow_undo
        return self.difficulty == Difficulty.BEGINNER

    @property
    def first_player(self) -> Color:
        if self.mode == GameMode.VS_AI and self.ai_moves_first:
            return Color.BLACK
        return Color.RED


# ── Renderer contract ────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RenderView:
    """Read-only snapshot consumed by a board renderer."""

    board: Board
    side_to_move: Color
    selected: Square | None
    valid_moves: tuple[Move, ...]
    last_move: Move | None
    winner: Color | None
    jump_lock: Square | None


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or AI)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, board: Board) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (they interact via the renderer).
        For AI this kicks off a background search.
        """
