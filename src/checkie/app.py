"""Application entry point: play checkers against the AI in a terminal."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from itertools import pairwise

from PyQt6.QtCore import QCoreApplication

from checkie.core.board import Board
from checkie.core.enums import Color
from checkie.core.move import Move
from checkie.core.move_generator import all_moves
from checkie.core.notation import board_to_diagram, find_move, parse_move_text
from checkie.engine.dispatch import SearchDispatcher
from checkie.engine.search import Difficulty
from checkie.game.controller import GameController, replay_steps
from checkie.game.engine_session import EngineSession
from checkie.game.interfaces import GameMode, GameSettings
from checkie.game.statistics import GameStatistics

_LOGGER = logging.getLogger(__name__)

_HELP = """\
Commands:
  22-18, 22x15x8   play a move by square numbers (1-32)
  moves            list legal moves
  score            show both evaluation breakdowns
  undo             take back your last turn (beginner level)
  quit             leave the game
"""

Reader = Callable[[str], str]
Writer = Callable[[str], None]
AITurn = Callable[[], Move | None]


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="checkie",
        description="Play checkers against a minimax AI",
    )
    parser.add_argument(
        "-d", "--difficulty",
        default="intermediate",
        help="beginner/intermediate/advanced (or easy/medium/hard)",
    )
    parser.add_argument(
        "--ai-first",
        action="store_true",
        help="Let the AI (Black) open the game",
    )
    parser.add_argument(
        "--two-player",
        action="store_true",
        help="Two humans share the terminal",
    )
    parser.add_argument(
        "--qt-worker",
        action="store_true",
        help="Run AI searches on a Qt worker thread instead of the thread pool",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=SearchDispatcher.DEFAULT_TIMEOUT_S,
        help="Seconds to wait for the background search before searching inline",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args(argv)
    try:
        args.difficulty = Difficulty.parse(args.difficulty)
    except ValueError as exc:
        parser.error(str(exc))
    return args


def _show_board(board: Board, write: Writer) -> None:
    write(board_to_diagram(board))


def _show_ai_move(before: Board, move: Move, write: Writer) -> None:
    write(f"AI plays {move}")
    if move.is_jump and len(move.landings) > 1:
        for step, board in enumerate(replay_steps(before, move), start=1):
            write(f"-- jump {step} --")
            _show_board(board, write)


def _play_text(controller: GameController, text: str, write: Writer) -> None:
    state = controller.state
    legal = (
        list(state.valid_moves)
        if state.jump_lock is not None
        else all_moves(state.board, state.side_to_move)
    )
    try:
        squares = parse_move_text(text)
    except ValueError as exc:
        write(f"! {exc}")
        return
    chosen = find_move(legal, text)
    path = chosen.path if chosen is not None else squares
    for from_sq, to_sq in pairwise(path):
        if not controller.attempt_move(from_sq, to_sq):
            break


def play_game(
    controller: GameController,
    read: Reader,
    write: Writer,
    ai_turn: AITurn | None = None,
) -> bool:
    """Drive one game to its end.  Returns ``False`` if the user quit.

    *ai_turn* plays the AI side; it defaults to the controller's own
    :meth:`~GameController.play_ai_turn`.
    """
    think = ai_turn or controller.play_ai_turn
    while not controller.state.is_game_over:
        state = controller.state
        player = controller.current_player
        if player is not None and not player.is_human:
            before = state.board
            move = think()
            if move is not None:
                _show_ai_move(before, move, write)
            elif not controller.state.is_game_over:
                write("! The AI could not move and resigns.")
                controller.resign(player.color)
            continue

        _show_board(state.board, write)
        prompt = f"{state.side_to_move} to move"
        if state.jump_lock is not None:
            prompt += " (keep jumping)"
        command = read(f"{prompt}> ").strip().lower()

        if command in ("q", "quit", "exit"):
            return False
        if command in ("?", "h", "help"):
            write(_HELP)
        elif command == "moves":
            moves = state.valid_moves or tuple(all_moves(state.board, state.side_to_move))
            write(" ".join(str(m) for m in moves))
        elif command == "score":
            for color, breakdown in controller.scores().items():
                write(
                    f"{color}: {breakdown.total} (material {breakdown.material}, "
                    f"power {breakdown.power}, strategy {breakdown.strategy})"
                )
        elif command == "undo":
            controller.undo_move()
        elif command:
            _play_text(controller, command, write)

    _show_board(controller.state.board, write)
    winner = controller.state.winner
    if winner is not None:
        write(f"{winner} wins in {controller.state.move_count} moves!")
    else:
        write("Game over.")
    return True


def main(
    argv: list[str] | None = None,
    read: Reader = input,
    write: Writer = print,
) -> int:
    """Launch the console game."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = GameSettings(
        difficulty=args.difficulty,
        ai_moves_first=args.ai_first,
        mode=GameMode.VS_HUMAN if args.two_player else GameMode.VS_AI,
    )
    stats = GameStatistics(Color.RED)
    dispatcher = SearchDispatcher(timeout_s=args.timeout)
    controller = GameController(dispatcher)
    session: EngineSession | None = None
    if args.qt_worker:
        qt_app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
        session = EngineSession(controller)
        session.setup()
    controller.events.on_game_over.append(stats.on_game_over)
    controller.events.on_notice.append(lambda text: write(f"! {text}"))
    _LOGGER.info("Starting %s game at %s", settings.mode, settings.difficulty)

    try:
        while True:
            controller.new_game_from_settings(settings)
            ai_turn = session.play_ai_turn if session is not None else None
            if not play_game(controller, read, write, ai_turn):
                break
            if settings.mode == GameMode.VS_AI:
                write(
                    f"Played {stats.games_played}, won {stats.games_won} "
                    f"({stats.win_rate:.0f}%), best streak {stats.best_streak}"
                )
            if read("Play again? [y/N] ").strip().lower() not in ("y", "yes"):
                break
    except (EOFError, KeyboardInterrupt):
        write("")
    finally:
        if session is not None:
            session.shutdown()
        controller.shutdown()
        dispatcher.shutdown(wait=False)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
