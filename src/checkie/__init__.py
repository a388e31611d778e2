"""Checkie: an 8x8 checkers engine with a minimax opponent.

Sub-packages:

* :mod:`checkie.core` for board, move generation and rules.
* :mod:`checkie.engine` for evaluation, search and the Qt worker.
* :mod:`checkie.game` for the controller, players and turn state.
"""

__version__ = "0.1.0"
