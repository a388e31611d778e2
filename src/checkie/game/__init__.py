"""Game management layer: controller, players, timer, turn state machine.

Quick start::

    from checkie.engine import Difficulty
    from checkie.game import GameController, GameSettings

    ctrl = GameController()
    ctrl.new_game_from_settings(GameSettings(difficulty=Difficulty.BEGINNER))
    ctrl.attempt_move((5, 0), (4, 1))
    ctrl.complete_ai_move()
"""

from checkie.game.controller import GameController, GameEvents, SearchHost, replay_steps
from checkie.game.engine_session import EngineSession
from checkie.game.interfaces import (
    GameMode,
    GamePhase,
    GameSettings,
    IPlayer,
    RenderView,
)
from checkie.game.player import AIPlayer, HumanPlayer
from checkie.game.state import (
    HistoryEntry,
    Transition,
    TurnState,
    move,
    new_turn_state,
    play,
    restart,
    select,
    undo,
)
from checkie.game.statistics import GameStatistics
from checkie.game.timer import TimerSnapshot, TurnTimer

__all__ = [
    # Interfaces / settings
    "GameMode",
    "GamePhase",
    "GameSettings",
    "IPlayer",
    "RenderView",
    # Turn state machine
    "HistoryEntry",
    "Transition",
    "TurnState",
    "move",
    "new_turn_state",
    "play",
    "restart",
    "select",
    "undo",
    # Concrete
    "AIPlayer",
    "EngineSession",
    "GameController",
    "GameEvents",
    "GameStatistics",
    "HumanPlayer",
    "SearchHost",
    "TimerSnapshot",
    "TurnTimer",
    "replay_steps",
]
