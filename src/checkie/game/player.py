"""Concrete player implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from checkie.core.enums import Color
from checkie.engine.search import Difficulty
from checkie.game.interfaces import IPlayer

if TYPE_CHECKING:
    from checkie.core.board import Board


class HumanPlayer(IPlayer):
    """A human participant whose moves come from the renderer.

    ``request_move`` is a no-op because humans select moves interactively.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, board: Board) -> None:
        pass  # Human moves arrive via controller.select_square()/attempt_move()


class AIPlayer(IPlayer):
    """An AI participant that delegates computation to a callback.

    ``AIPlayer`` only stores its strength and a *bridge* callable invoked on
    ``request_move``.  :meth:`GameController.new_game_from_settings` wires
    that callable to the controller's off-thread search.

    Args:
        color: Side the AI plays.
        difficulty: Search tier.
        name: Display name.
        on_request_move: ``(Board) -> None`` called when the game
            controller asks the AI to start thinking.
    """

    __slots__ = ("_color", "_difficulty", "_name", "_on_request_move")

    def __init__(
        self,
        color: Color,
        difficulty: Difficulty = Difficulty.INTERMEDIATE,
        name: str = "Checkie AI",
        on_request_move: Callable[[Board], None] | None = None,
    ) -> None:
        self._color = color
        self._difficulty = difficulty
        self._name = name
        self._on_request_move = on_request_move

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    def bind(self, on_request_move: Callable[[Board], None] | None) -> None:
        """Replace the request callback."""
        self._on_request_move = on_request_move

    def request_move(self, board: Board) -> None:
        if self._on_request_move is not None:
            self._on_request_move(board)
