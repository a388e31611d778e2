"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from checkie.core.enums import Color

# Diagram character ↔ (Color, is_king)
_CHAR_MAP: dict[str, tuple[Color, bool]] = {
    "r": (Color.RED, False),
    "R": (Color.RED, True),
    "b": (Color.BLACK, False),
    "B": (Color.BLACK, True),
}

_CHARS: dict[tuple[Color, bool], str] = {v: k for k, v in _CHAR_MAP.items()}

_UNICODE: dict[tuple[Color, bool], str] = {
    (Color.RED, False): "⛀",
    (Color.RED, True): "⛁",
    (Color.BLACK, False): "⛂",
    (Color.BLACK, True): "⛃",
}

_DIRECTIONS: dict[tuple[Color, bool], tuple[tuple[int, int], ...]] = {
    (Color.RED, False): ((-1, -1), (-1, 1)),
    (Color.BLACK, False): ((1, -1), (1, 1)),
    (Color.RED, True): ((-1, -1), (-1, 1), (1, -1), (1, 1)),
    (Color.BLACK, True): ((-1, -1), (-1, 1), (1, -1), (1, 1)),
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a checker."""

    color: Color
    is_king: bool = False

    def __str__(self) -> str:
        """Diagram character (lowercase = man, uppercase = king)."""
        return _CHARS[(self.color, self.is_king)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from diagram character, e.g. 'R' → red king."""
        try:
            color, is_king = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, is_king)

    @property
    def symbol(self) -> str:
        return _UNICODE[(self.color, self.is_king)]

    @property
    def directions(self) -> tuple[tuple[int, int], ...]:
        """Diagonal (d_row, d_col) vectors this piece may step or jump along."""
        return _DIRECTIONS[(self.color, self.is_king)]

    def crowned(self) -> Piece:
        return self if self.is_king else Piece(self.color, True)
