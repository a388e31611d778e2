"""GameController: the central orchestrator of a checkers game.

Coordinates: Players, TurnTimer, TurnState transitions, SearchDispatcher.
Emits events via simple callbacks so a renderer / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass, field, replace

from checkie.core.board import Board
from checkie.core.enums import Color, GameResult
from checkie.core.executor import iter_jump_legs
from checkie.core.move import Move
from checkie.core.types import require_valid_square
from checkie.engine.dispatch import SearchDispatcher, SearchFailedError
from checkie.engine.evaluation import ScoreBreakdown, score_both
from checkie.engine.search import SearchRequest, SearchResult
from checkie.game import state as turns
from checkie.game.interfaces import (
    GameMode,
    GamePhase,
    GameSettings,
    IPlayer,
    RenderView,
)
from checkie.game.player import AIPlayer, HumanPlayer
from checkie.game.state import Transition, TurnState
from checkie.game.timer import TimerSnapshot, TurnTimer

_LOGGER = logging.getLogger(__name__)

NOTICE_UNDO_DISABLED = "Undo is not available at this difficulty."

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, TurnState], None]  # move or leg, state after
GameOverCallback = Callable[[Color | None, int], None]  # winner, move count
PhaseCallback = Callable[[GamePhase], None]
NoticeCallback = Callable[[str], None]
SearchHost = Callable[[int, SearchRequest], None]  # request id, request


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_notice: list[NoticeCallback] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class _PendingSearch:
    request_id: int
    request: SearchRequest
    future: Future[SearchResult] | None  # None when a search host owns it


def replay_steps(board: Board, move: Move) -> list[Board]:
    """Boards after each landing of *move*, for leg-by-leg animation."""
    return list(iter_jump_legs(board, move))


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Orchestrates a full checkers game: validates input, times turns,
    runs AI searches, switches turns and notifies listeners.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread).  Only the search itself runs on a worker; its
    result is applied back on the calling thread by :meth:`complete_ai_move`
    or :meth:`apply_search_result`.
    """

    __slots__ = (
        "_state",
        "_phase",
        "_players",
        "_settings",
        "_timer",
        "_timer_history",
        "_dispatcher",
        "_owns_dispatcher",
        "_pending",
        "_request_id",
        "_search_host",
        "events",
    )

    def __init__(
        self,
        dispatcher: SearchDispatcher | None = None,
        timer: TurnTimer | None = None,
        search_host: SearchHost | None = None,
    ) -> None:
        self._state: TurnState = turns.new_turn_state()
        self._phase = GamePhase.NOT_STARTED
        self._players: dict[Color, IPlayer] = {}
        self._settings = GameSettings()
        self._timer = timer or TurnTimer()
        self._timer_history: list[TimerSnapshot] = []
        self._owns_dispatcher = dispatcher is None
        self._dispatcher = dispatcher or SearchDispatcher()
        self._pending: _PendingSearch | None = None
        self._request_id = 0
        self._search_host = search_host
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def timer(self) -> TurnTimer:
        return self._timer

    @property
    def search_timeout_s(self) -> float:
        return self._dispatcher.timeout_s

    @property
    def is_thinking(self) -> bool:
        return self._pending is not None

    @property
    def pending_request_id(self) -> int | None:
        return self._pending.request_id if self._pending is not None else None

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(
        self,
        red: IPlayer,
        black: IPlayer,
        settings: GameSettings | None = None,
        board: Board | None = None,
    ) -> None:
        """Start a game between *red* and *black*.

        *board* overrides the initial setup (useful for puzzles and tests).
        """
        self._discard_pending()
        self._players = {Color.RED: red, Color.BLACK: black}
        self._settings = settings or GameSettings()
        self._timer.reset()
        self._timer_history = []
        self._state = turns.new_turn_state(self._settings.first_player, board)
        self._start()

    def new_game_from_settings(
        self, settings: GameSettings, board: Board | None = None
    ) -> None:
        """Create players from *settings* and start a game.

        In ``VS_AI`` mode the human plays Red and an AI bound to this
        controller's dispatcher plays Black.
        """
        red = HumanPlayer(Color.RED)
        black: IPlayer
        if settings.mode == GameMode.VS_AI:
            black = AIPlayer(
                Color.BLACK,
                settings.difficulty,
                on_request_move=self._on_ai_request,
            )
        else:
            black = HumanPlayer(Color.BLACK)
        self.new_game(red, black, settings, board)

    def restart(self) -> None:
        """Start over with the same players and settings."""
        if not self._players:
            self.new_game_from_settings(self._settings)
            return
        self._discard_pending()
        self._timer.reset()
        self._timer_history = []
        self._state = turns.restart(self._state).state
        self._start()

    def resign(self, color: Color) -> None:
        if self._state.is_game_over:
            return
        self._state = replace(
            self._state,
            result=GameResult.win_for(color.opposite),
            selected=None,
            valid_moves=(),
            jump_lock=None,
        )
        self._finish()

    def shutdown(self) -> None:
        """Release the search worker if this controller created it."""
        self._discard_pending()
        if self._owns_dispatcher:
            self._dispatcher.shutdown()

    # ── Renderer intents ─────────────────────────────────────────────────

    def select_square(self, sq: tuple[int, int]) -> bool:
        """Handle a click on *sq*.

        A click on a highlighted target of the current selection plays that
        move; anything else is a (de)selection.
        """
        if not self._human_to_move():
            return False
        square = require_valid_square(sq)
        current = self._state
        if current.selected is not None and any(
            m.to_sq == square for m in current.valid_moves
        ):
            return self.attempt_move(current.selected, square)
        return self._apply_selection(turns.select(current, square))

    def attempt_move(self, from_sq: tuple[int, int], to_sq: tuple[int, int]) -> bool:
        if not self._human_to_move():
            return False
        return self._apply_move(turns.move(self._state, from_sq, to_sq))

    def submit_move(self, move: Move) -> bool:
        """Play a complete move (a whole capture chain) for the side to move."""
        if self._phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False
        self._discard_pending()
        return self._apply_move(turns.play(self._state, move))

    def undo_move(self) -> bool:
        """Take back the last turn.

        Against the AI this returns to the human's previous turn, which
        usually means two plies.
        """
        if not self._settings.undo_enabled:
            self._emit_notice(NOTICE_UNDO_DISABLED)
            return False
        if not self._state.can_undo:
            return False

        plies = self._undo_plies()
        if plies == 0:
            return False

        transition = turns.undo(self._state, plies)
        if not transition.accepted:
            self._emit_notice(transition.notice)
            return False

        self._discard_pending()
        self._state = transition.state
        self._timer.stop()
        snapshot: TimerSnapshot | None = None
        for _ in range(plies):
            if self._timer_history:
                snapshot = self._timer_history.pop()
        if snapshot is not None:
            self._timer.restore(snapshot)
        self._prompt_current_player()
        return True

    # ── AI turns ─────────────────────────────────────────────────────────

    def attach_search_host(self, host: SearchHost | None) -> None:
        """Route AI searches to *host* instead of the dispatcher pool.

        The host reports back through :meth:`apply_search_result`; a request
        it never answers can still be finished by :meth:`complete_ai_move`.
        ``None`` restores the dispatcher.
        """
        self._search_host = host

    def request_ai_move(self) -> Future[SearchResult] | None:
        """Start searching for the AI to move.

        Returns the dispatcher future, or ``None`` when the request went to
        the search host or was not applicable (check :attr:`is_thinking`).
        A second request while one is pending is refused.
        """
        cp = self.current_player
        if self._state.is_game_over or cp is None or cp.is_human:
            return None
        if self._pending is not None:
            _LOGGER.debug("Search %d already pending", self._pending.request_id)
            return None

        difficulty = (
            cp.difficulty if isinstance(cp, AIPlayer) else self._settings.difficulty
        )
        request = SearchRequest.create(self._state.board, cp.color, difficulty)
        self._request_id += 1
        host = self._search_host
        future = None if host is not None else self._dispatcher.submit(request)
        self._pending = _PendingSearch(self._request_id, request, future)
        self._set_phase(GamePhase.THINKING)
        if host is not None:
            host(self._request_id, request)
        return future

    def complete_ai_move(self, timeout_s: float | None = None) -> Move | None:
        """Wait for the pending search and play its move.

        Falls back to a synchronous search after the dispatcher timeout.  A
        request owned by the search host is recomputed synchronously at once.
        If that fails too, the AI side resigns.
        """
        pending = self._pending
        if pending is None:
            return None
        try:
            if pending.future is None:
                result = self._dispatcher.search_sync(pending.request)
            else:
                result = self._dispatcher.resolve(
                    pending.future, pending.request, timeout_s
                )
        except SearchFailedError:
            _LOGGER.exception("AI search failed; %s resigns", pending.request.player)
            self._pending = None
            self.resign(pending.request.player)
            return None

        best = result.best_move
        if not self.apply_search_result(pending.request_id, best):
            return None
        return best

    def apply_search_result(self, request_id: int, best_move: Move | None) -> bool:
        """Play the result of search *request_id* if it is still wanted.

        Results from requests discarded by undo/restart are ignored.
        """
        pending = self._pending
        if pending is None or pending.request_id != request_id:
            _LOGGER.debug("Discarding stale search result %d", request_id)
            return False
        self._pending = None

        if best_move is None:
            _LOGGER.error("Search %d returned no move", request_id)
            self.resign(pending.request.player)
            return False
        if not self._apply_move(turns.play(self._state, best_move)):
            _LOGGER.error(
                "Search %d returned illegal move %s; %s resigns",
                request_id,
                best_move,
                pending.request.player,
            )
            self.resign(pending.request.player)
            return False
        return True

    def play_ai_turn(self, timeout_s: float | None = None) -> Move | None:
        """Request (if needed) and complete an AI move in one call."""
        if self._pending is None:
            self.request_ai_move()
            if self._pending is None:
                return None
        return self.complete_ai_move(timeout_s)

    # ── Views ────────────────────────────────────────────────────────────

    def view(self) -> RenderView:
        s = self._state
        return RenderView(
            board=s.board,
            side_to_move=s.side_to_move,
            selected=s.selected,
            valid_moves=s.valid_moves,
            last_move=s.last_move,
            winner=s.winner,
            jump_lock=s.jump_lock,
        )

    def scores(self) -> dict[Color, ScoreBreakdown]:
        return score_both(self._state.board)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _start(self) -> None:
        if self._state.is_game_over:
            self._finish()
            return
        self._prompt_current_player()

    def _human_to_move(self) -> bool:
        cp = self.current_player
        return (
            self._phase == GamePhase.AWAITING_MOVE
            and cp is not None
            and cp.is_human
        )

    def _undo_plies(self) -> int:
        history = self._state.history
        if self._settings.mode == GameMode.VS_HUMAN:
            return 1
        for plies in range(1, len(history) + 1):
            player = self._players.get(history[-plies].side_to_move)
            if player is not None and player.is_human:
                return plies
        return 0

    def _apply_selection(self, transition: Transition) -> bool:
        if not transition.accepted:
            self._emit_notice(transition.notice)
            return False
        self._state = transition.state
        return True

    def _apply_move(self, transition: Transition) -> bool:
        if not transition.accepted:
            self._emit_notice(transition.notice)
            return False

        if self._state.jump_lock is None:
            self._timer_history.append(self._timer.snapshot())
        self._state = transition.state

        last = self._state.last_move
        if last is not None:
            self._emit_move(last)

        if not transition.turn_ended:
            return True
        if self._state.is_game_over:
            self._finish()
            return True

        self._timer.switch()
        self._prompt_current_player()
        return True

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if not self._timer.is_running:
            self._timer.start(cp.color)
        if cp.is_human:
            self._set_phase(GamePhase.AWAITING_MOVE)
        else:
            self._set_phase(GamePhase.THINKING)
            cp.request_move(self._state.board)

    def _on_ai_request(self, board: Board) -> None:
        self.request_ai_move()

    def _discard_pending(self) -> None:
        if self._pending is not None:
            _LOGGER.debug("Abandoning search %d", self._pending.request_id)
            self._pending = None

    def _finish(self) -> None:
        self._discard_pending()
        self._timer.stop()
        self._set_phase(GamePhase.GAME_OVER)
        _LOGGER.info(
            "Game over after %d moves: %s",
            self._state.move_count,
            "no winner" if self._state.winner is None else self._state.winner,
        )
        for cb in self.events.on_game_over:
            cb(self._state.winner, self._state.move_count)

    def _set_phase(self, phase: GamePhase) -> None:
        if phase == self._phase:
            return
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)

    def _emit_notice(self, notice: str | None) -> None:
        if not notice:
            return
        _LOGGER.debug("Notice: %s", notice)
        for cb in self.events.on_notice:
            cb(notice)
