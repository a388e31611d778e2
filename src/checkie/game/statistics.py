"""In-memory session statistics fed by finished games."""

from __future__ import annotations

from dataclasses import dataclass

from checkie.core.enums import Color


@dataclass(slots=True)
class GameStatistics:
    """Running totals for one player across a session.

    Subscribe :meth:`on_game_over` to ``GameController.events.on_game_over``.
    Nothing is persisted.
    """

    player_color: Color = Color.RED
    games_played: int = 0
    games_won: int = 0
    games_lost: int = 0
    current_streak: int = 0
    best_streak: int = 0
    total_moves: int = 0

    @property
    def win_rate(self) -> float:
        """Percentage of games won, ``0.0`` before any game."""
        if self.games_played == 0:
            return 0.0
        return self.games_won / self.games_played * 100.0

    @property
    def average_moves(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.total_moves / self.games_played

    def record(self, won: bool, move_count: int) -> None:
        self.games_played += 1
        self.total_moves += move_count
        if won:
            self.games_won += 1
            self.current_streak += 1
            self.best_streak = max(self.best_streak, self.current_streak)
        else:
            self.games_lost += 1
            self.current_streak = 0

    def on_game_over(self, winner: Color | None, move_count: int) -> None:
        if winner is None:
            return
        self.record(winner == self.player_color, move_count)

    def reset(self) -> None:
        self.games_played = 0
        self.games_won = 0
        self.games_lost = 0
        self.current_streak = 0
        self.best_streak = 0
        self.total_moves = 0
