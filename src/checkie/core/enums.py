"""Core enumerations for the checkers domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color.  Red moves up the board (decreasing row), Black down."""

    RED = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Row delta of a non-king step."""
        return -1 if self == Color.RED else 1

    @property
    def home_row(self) -> int:
        """Row the side's men start from (their back rank)."""
        return 7 if self == Color.RED else 0

    @property
    def crowning_row(self) -> int:
        """Row on which a man of this color is promoted."""
        return 0 if self == Color.RED else 7

    def __str__(self) -> str:
        return self.name.lower()


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    RED_WINS = 1
    BLACK_WINS = 2

    @property
    def winner(self) -> Color | None:
        if self == GameResult.RED_WINS:
            return Color.RED
        if self == GameResult.BLACK_WINS:
            return Color.BLACK
        return None

    @classmethod
    def win_for(cls, color: Color) -> GameResult:
        return cls.RED_WINS if color == Color.RED else cls.BLACK_WINS
