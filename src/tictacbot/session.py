"""
Game session: one human against the minimax computer.

The session is a small state machine:

    AWAITING_SETUP --start()--> PLAYER_TURN | COMPUTER_TURN
    PLAYER_TURN    --play()---> COMPUTER_TURN | FINISHED
    COMPUTER_TURN  --computer_move()--> PLAYER_TURN | FINISHED
    any state      --restart()--> AWAITING_SETUP

X always moves first, so a human playing O starts in COMPUTER_TURN.
The move selector is only ever called from COMPUTER_TURN, once per turn.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Tuple

from . import config
from .board import EMPTY, SYMBOLS, TIE, X, evaluate, new_board, place
from .solver import best_move

logger = logging.getLogger(__name__)


class GameState(Enum):
    AWAITING_SETUP = "awaiting_setup"
    PLAYER_TURN = "player_turn"
    COMPUTER_TURN = "computer_turn"
    FINISHED = "finished"


class SessionStateError(RuntimeError):
    """An operation was requested in a state that does not allow it."""


class IllegalMoveError(ValueError):
    """The human picked a cell that is out of range or already taken."""


class GameSession:
    def __init__(self, player_name: Optional[str] = None, bot_name: Optional[str] = None):
        self.player_name = player_name or config.player_name()
        self.bot_name = bot_name or config.bot_name()
        self.human_symbol: Optional[str] = None
        self.bot_symbol: Optional[str] = None
        self.board: Tuple[str, ...] = new_board()
        self.state = GameState.AWAITING_SETUP
        self.outcome: Optional[str] = None
        self.moves: List[Tuple[str, int]] = []

    def _require(self, *states: GameState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.name for s in states)
            raise SessionStateError(f"Not allowed in state {self.state.name} (needs {allowed})")

    # setup

    def set_player_name(self, name: str) -> None:
        self._require(GameState.AWAITING_SETUP)
        self.player_name = name.strip() or config.player_name()

    def choose_symbol(self, symbol: str) -> None:
        self._require(GameState.AWAITING_SETUP)
        symbol = symbol.upper()
        if symbol not in SYMBOLS:
            raise ValueError(f"Symbol must be one of {SYMBOLS}, got {symbol!r}")
        self.human_symbol = symbol
        self.bot_symbol = SYMBOLS[1] if symbol == SYMBOLS[0] else SYMBOLS[0]

    def start(self) -> GameState:
        self._require(GameState.AWAITING_SETUP)
        if self.human_symbol is None:
            raise SessionStateError("Choose a symbol before starting")
        self.state = GameState.PLAYER_TURN if self.human_symbol == X else GameState.COMPUTER_TURN
        logger.debug("start human=%s bot=%s first=%s", self.human_symbol, self.bot_symbol, self.state.name)
        return self.state

    # turns

    def _apply(self, index: int, symbol: str, next_state: GameState) -> None:
        self.board = place(self.board, index, symbol)
        self.moves.append((symbol, index))
        logger.debug("move %d: %s -> %d", len(self.moves), symbol, index)
        self.outcome = evaluate(self.board)
        if self.outcome is not None:
            self.state = GameState.FINISHED
            logger.debug("finished outcome=%s", self.outcome)
        else:
            self.state = next_state

    def play(self, index: int) -> GameState:
        self._require(GameState.PLAYER_TURN)
        if not 0 <= index <= 8:
            raise IllegalMoveError(f"Cell {index} is off the board")
        if self.board[index] != EMPTY:
            raise IllegalMoveError(f"Cell {index} is already taken by {self.board[index]}")
        self._apply(index, self.human_symbol, GameState.COMPUTER_TURN)
        return self.state

    def computer_move(self) -> int:
        self._require(GameState.COMPUTER_TURN)
        result = best_move(self.board, self.bot_symbol, self.human_symbol, True)
        self._apply(result.index, self.bot_symbol, GameState.PLAYER_TURN)
        return result.index

    def restart(self) -> None:
        self.board = new_board()
        self.human_symbol = None
        self.bot_symbol = None
        self.outcome = None
        self.moves = []
        self.state = GameState.AWAITING_SETUP

    # presentation helpers

    @property
    def winner_name(self) -> Optional[str]:
        if self.outcome is None or self.outcome == TIE:
            return None
        return self.player_name if self.outcome == self.human_symbol else self.bot_name

    @property
    def turn_name(self) -> Optional[str]:
        if self.state == GameState.PLAYER_TURN:
            return self.player_name
        if self.state == GameState.COMPUTER_TURN:
            return self.bot_name
        return None

    def status_text(self) -> str:
        if self.state == GameState.FINISHED:
            if self.outcome == TIE:
                return "It's a tie!"
            return f"Winner: {self.winner_name}"
        if self.state == GameState.AWAITING_SETUP:
            return "Choose your symbol"
        return f"Turn: {self.turn_name}"
