"""Move value object (simple step or jump chain)."""

from __future__ import annotations

from dataclasses import dataclass

from checkie.core.types import Square, midpoint, square_number


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing one checkers move.

    For a multi-jump, ``jump_sequence`` holds every landing square in order
    and ``to_sq`` equals its last element.  ``jumped`` is the first captured
    square.
    """

    from_sq: Square
    to_sq: Square
    is_jump: bool = False
    jumped: Square | None = None
    jump_sequence: tuple[Square, ...] = ()

    # ── Derived geometry ─────────────────────────────────────────────────

    @property
    def landings(self) -> tuple[Square, ...]:
        """Landing squares in order (just ``to_sq`` for a simple move)."""
        return self.jump_sequence or (self.to_sq,)

    @property
    def path(self) -> tuple[Square, ...]:
        """Origin followed by every landing square."""
        return (self.from_sq, *self.landings)

    @property
    def captured_squares(self) -> tuple[Square, ...]:
        """Squares of every captured piece, in capture order."""
        if not self.is_jump:
            return ()
        if not self.jump_sequence:
            return (self.jumped,) if self.jumped is not None else ()
        path = self.path
        return tuple(midpoint(a, b) for a, b in zip(path, path[1:]))

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Standard notation, e.g. ``22-18`` or ``22x15x8``."""
        sep = "x" if self.is_jump else "-"
        return sep.join(str(square_number(sq)) for sq in self.path)
