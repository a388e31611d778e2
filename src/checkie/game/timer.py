"""Per-player elapsed-time accumulator."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from checkie.core.enums import Color


@dataclass(frozen=True, slots=True)
class TimerSnapshot:
    """Timer state used to restore thinking time after undo."""

    red_elapsed: float
    black_elapsed: float
    active_color: Color | None
    is_running: bool


class TurnTimer:
    """Counts how long each side has spent on its turns.

    Uses monotonic time.  There is no time limit: the totals are purely
    informational.
    """

    __slots__ = ("_elapsed", "_active_color", "_last_tick", "_running", "_now")

    def __init__(self, now: Callable[[], float] = time.monotonic) -> None:
        self._now = now
        self._elapsed: dict[Color, float] = {Color.RED: 0.0, Color.BLACK: 0.0}
        self._active_color: Color | None = None
        self._last_tick: float = 0.0
        self._running: bool = False

    # ── Control ──────────────────────────────────────────────────────────

    def start(self, color: Color) -> None:
        if self._running:
            self._consume_elapsed()
        self._active_color = color
        self._last_tick = self._now()
        self._running = True

    def stop(self) -> None:
        if self._running:
            self._consume_elapsed()
            self._running = False

    def switch(self) -> None:
        """Book the current turn and start timing the other side."""
        if self._active_color is None:
            return
        if self._running:
            self._consume_elapsed()
        self._active_color = self._active_color.opposite
        self._last_tick = self._now()

    def reset(self) -> None:
        self._elapsed = {Color.RED: 0.0, Color.BLACK: 0.0}
        self._active_color = None
        self._running = False

    # ── Queries ──────────────────────────────────────────────────────────

    def elapsed(self, color: Color) -> float:
        """Total seconds *color* has spent, including a running turn."""
        total = self._elapsed[color]
        if self._running and self._active_color == color:
            total += self._now() - self._last_tick
        return total

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def active_color(self) -> Color | None:
        return self._active_color

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            red_elapsed=self.elapsed(Color.RED),
            black_elapsed=self.elapsed(Color.BLACK),
            active_color=self._active_color,
            is_running=self._running,
        )

    def restore(self, snapshot: TimerSnapshot) -> None:
        """Restore state previously captured with :meth:`snapshot`."""
        self._elapsed[Color.RED] = snapshot.red_elapsed
        self._elapsed[Color.BLACK] = snapshot.black_elapsed
        self._active_color = snapshot.active_color
        self._running = snapshot.is_running and snapshot.active_color is not None
        self._last_tick = self._now()

    # ── Internal ─────────────────────────────────────────────────────────

    def _consume_elapsed(self) -> None:
        if self._active_color is None:
            return
        now = self._now()
        self._elapsed[self._active_color] += now - self._last_tick
        self._last_tick = now
