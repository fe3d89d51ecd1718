"""tictacbot package.

Board evaluation, the minimax move selector, a game session state machine,
a move-table export, and a simple CLI.

Convenience imports are exposed for common workflows.
"""

from .board import EMPTY, O, SYMBOLS, TIE, X, evaluate
from .session import GameSession, GameState
from .solver import InvalidStateError, SearchResult, best_move

__all__ = [
    "EMPTY",
    "X",
    "O",
    "SYMBOLS",
    "TIE",
    "evaluate",
    "best_move",
    "SearchResult",
    "InvalidStateError",
    "GameSession",
    "GameState",
]
