"""Turn state machine: selection, jump lock, turn passing and undo history.

Every transition is a pure function from one :class:`TurnState` to a
:class:`Transition`; nothing here touches threads, clocks or the UI.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from checkie.core.board import Board
from checkie.core.enums import Color, GameResult
from checkie.core.executor import apply_move, is_promotion
from checkie.core.move import Move
from checkie.core.move_generator import MoveGenerator
from checkie.core.rules import Rules
from checkie.core.types import Square, require_valid_square

# ── Notices shown for refused input ─────────────────────────────────────────

NOTICE_MANDATORY_SELECT = "Jump is mandatory! Choose a piece that can jump."
NOTICE_MANDATORY_MOVE = "Jump is mandatory! You must take the jump."
NOTICE_CONTINUE_JUMP = "You must continue jumping with the active piece!"
NOTICE_FINISH_CHAIN = "You must finish your multi-jump sequence!"
NOTICE_ILLEGAL_MOVE = "That move is not allowed."
NOTICE_GAME_OVER = "The game is over."
NOTICE_NOTHING_TO_UNDO = "There is no move to undo."


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Snapshot taken at the start of a turn."""

    board: Board
    side_to_move: Color
    move_count: int
    last_move: Move | None


@dataclass(frozen=True, slots=True)
class TurnState:
    """Everything the turn logic needs to know about a game in progress.

    ``jump_lock`` is the square of the piece that has captured and must keep
    capturing; while it is set the turn has not passed yet.
    """

    board: Board
    side_to_move: Color = Color.RED
    selected: Square | None = None
    valid_moves: tuple[Move, ...] = ()
    jump_lock: Square | None = None
    result: GameResult = GameResult.IN_PROGRESS
    move_count: int = 0
    last_move: Move | None = None
    history: tuple[HistoryEntry, ...] = ()
    first_player: Color = Color.RED

    @property
    def winner(self) -> Color | None:
        return self.result.winner

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    @property
    def can_undo(self) -> bool:
        return bool(self.history) and not self.is_game_over


@dataclass(frozen=True, slots=True)
class Transition:
    """Outcome of a transition.

    A refused transition carries the unchanged state and, usually, a
    ``notice`` explaining why.
    """

    state: TurnState
    accepted: bool
    notice: str | None = None
    turn_ended: bool = False


# ── Construction ─────────────────────────────────────────────────────────────


def new_turn_state(first_player: Color = Color.RED, board: Board | None = None) -> TurnState:
    """A fresh game; *board* defaults to the initial setup."""
    start = board if board is not None else Board.initial()
    return TurnState(
        board=start,
        side_to_move=first_player,
        result=Rules.game_result(start, first_player),
        first_player=first_player,
    )


def restart(state: TurnState) -> Transition:
    return Transition(new_turn_state(state.first_player), accepted=True)


# ── Human input ──────────────────────────────────────────────────────────────


def select(state: TurnState, sq: tuple[int, int]) -> Transition:
    """Select the piece on *sq*, or clear the selection.

    Selecting an own piece lists its shallow moves.  Any other square
    deselects, except while a capture chain is locked to one piece.
    """
    if state.is_game_over:
        return _refuse(state, NOTICE_GAME_OVER)

    square = require_valid_square(sq)
    piece = state.board[square]

    if piece is None or piece.color != state.side_to_move:
        if state.jump_lock is not None:
            return _refuse(state, NOTICE_FINISH_CHAIN)
        return Transition(replace(state, selected=None, valid_moves=()), accepted=True)

    if state.jump_lock is not None:
        if square != state.jump_lock:
            return _refuse(state, NOTICE_CONTINUE_JUMP)
        return Transition(replace(state, selected=square), accepted=True)

    moves = MoveGenerator(state.board).selectable_moves(square, state.side_to_move)
    if not moves:
        if MoveGenerator(state.board).has_jump(state.side_to_move):
            return _refuse(state, NOTICE_MANDATORY_SELECT)
        # A blocked piece may still be selected; it simply has no targets.
    return Transition(
        replace(state, selected=square, valid_moves=tuple(moves)), accepted=True
    )


def move(state: TurnState, from_sq: tuple[int, int], to_sq: tuple[int, int]) -> Transition:
    """Play one step (or one capture leg) from *from_sq* to *to_sq*."""
    if state.is_game_over:
        return _refuse(state, NOTICE_GAME_OVER)

    origin = require_valid_square(from_sq)
    target = require_valid_square(to_sq)

    if state.jump_lock is not None:
        if origin != state.jump_lock:
            return _refuse(state, NOTICE_CONTINUE_JUMP)
        candidates = state.valid_moves
    else:
        gen = MoveGenerator(state.board)
        candidates = tuple(gen.selectable_moves(origin, state.side_to_move))
        if not candidates:
            piece = state.board[origin]
            if (
                piece is not None
                and piece.color == state.side_to_move
                and gen.has_jump(state.side_to_move)
            ):
                return _refuse(state, NOTICE_MANDATORY_MOVE)
            return _refuse(state, NOTICE_ILLEGAL_MOVE)

    chosen = next((m for m in candidates if m.to_sq == target), None)
    if chosen is None:
        if state.jump_lock is not None:
            return _refuse(state, NOTICE_FINISH_CHAIN)
        if any(m.is_jump for m in candidates):
            return _refuse(state, NOTICE_MANDATORY_MOVE)
        return _refuse(state, NOTICE_ILLEGAL_MOVE)

    return _step(state, chosen)


# ── Engine input ─────────────────────────────────────────────────────────────


def play(state: TurnState, full_move: Move) -> Transition:
    """Apply a complete move (a whole capture chain at once) and pass the turn."""
    if state.is_game_over:
        return _refuse(state, NOTICE_GAME_OVER)
    if state.jump_lock is not None:
        return _refuse(state, NOTICE_FINISH_CHAIN)
    if full_move not in MoveGenerator(state.board).all_moves(state.side_to_move):
        return _refuse(state, NOTICE_ILLEGAL_MOVE)

    history = state.history + (_history_entry(state),)
    return _end_turn(state, apply_move(state.board, full_move), full_move, history)


# ── Undo ─────────────────────────────────────────────────────────────────────


def undo(state: TurnState, plies: int = 1) -> Transition:
    """Go back to the start of the turn *plies* turns ago.

    A capture chain still in progress counts as the most recent turn.
    """
    if plies < 1:
        raise ValueError(f"plies must be positive, got {plies}")
    if len(state.history) < plies:
        return _refuse(state, NOTICE_NOTHING_TO_UNDO)

    entry = state.history[-plies]
    restored = TurnState(
        board=entry.board,
        side_to_move=entry.side_to_move,
        move_count=entry.move_count,
        last_move=entry.last_move,
        history=state.history[:-plies],
        first_player=state.first_player,
    )
    return Transition(restored, accepted=True)


# ── Internal ─────────────────────────────────────────────────────────────────


def _refuse(state: TurnState, notice: str) -> Transition:
    return Transition(state, accepted=False, notice=notice)


def _history_entry(state: TurnState) -> HistoryEntry:
    return HistoryEntry(
        board=state.board,
        side_to_move=state.side_to_move,
        move_count=state.move_count,
        last_move=state.last_move,
    )


def _step(state: TurnState, leg: Move) -> Transition:
    # Only the first leg of a turn opens a history entry.
    history = state.history
    if state.jump_lock is None:
        history = history + (_history_entry(state),)

    board = apply_move(state.board, leg)
    if leg.is_jump and not is_promotion(state.board, leg):
        follow_ups = MoveGenerator(board).immediate_jumps(leg.to_sq)
        if follow_ups:
            locked = Square(*leg.to_sq)
            return Transition(
                replace(
                    state,
                    board=board,
                    selected=locked,
                    valid_moves=tuple(follow_ups),
                    jump_lock=locked,
                    last_move=leg,
                    history=history,
                ),
                accepted=True,
            )

    return _end_turn(state, board, leg, history)


def _end_turn(
    state: TurnState,
    board: Board,
    last: Move,
    history: tuple[HistoryEntry, ...],
) -> Transition:
    next_side = state.side_to_move.opposite
    finished = replace(
        state,
        board=board,
        side_to_move=next_side,
        selected=None,
        valid_moves=(),
        jump_lock=None,
        result=Rules.game_result(board, next_side),
        move_count=state.move_count + 1,
        last_move=last,
        history=history,
    )
    return Transition(finished, accepted=True, turn_ended=True)
