"""
Move selector: exhaustive minimax from the computer's perspective.
Scoring:
- +1 when the maximizing symbol has won, -1 when the minimizing symbol has
  won, 0 for a tie. Scores are never discounted by depth.
- Empty cells are tried in ascending order and only a strictly better child
  replaces the running best, so the lowest index wins ties.
- Results are memoized on the immutable board tuple; every branch works on
  its own copy, the caller's board is never touched.
- A full board is always terminal (a win or a tie), so every non-terminal
  board has a legal move and the search never falls through without one.
"""
import logging
from collections import deque
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from .board import (
    EMPTY,
    TIE,
    empty_cells,
    evaluate,
    new_board,
    place,
    serialize_board,
    side_to_move,
)


class InvalidStateError(ValueError):
    """The selector was called on a board it cannot search (a caller bug)."""


@dataclass(frozen=True)
class SearchResult:
    index: Optional[int]
    score: int


def _check_args(board: Tuple[str, ...], maximizing_symbol: str, minimizing_symbol: str) -> None:
    if len(board) != 9:
        raise InvalidStateError(f"Board must have 9 cells, got {len(board)}")
    if len(maximizing_symbol) != 1 or len(minimizing_symbol) != 1:
        raise InvalidStateError(
            f"Symbols must be single characters: {maximizing_symbol!r}, {minimizing_symbol!r}"
        )
    if maximizing_symbol == minimizing_symbol:
        raise InvalidStateError(f"Both players use the same symbol {maximizing_symbol!r}")
    allowed = (EMPTY, maximizing_symbol, minimizing_symbol)
    strays = sorted({cell for cell in board if cell not in allowed})
    if strays:
        raise InvalidStateError(f"Board holds symbols outside the game: {strays}")


# one symbol pair needs at most 2 * 3**9 entries
SEARCH_CACHE_SIZE = 1 << 16


@lru_cache(maxsize=SEARCH_CACHE_SIZE)
def _search(board_t: Tuple[str, ...], maximizing_symbol: str, minimizing_symbol: str,
            is_maximizing_turn: bool) -> SearchResult:
    outcome = evaluate(board_t)
    if outcome == maximizing_symbol:
        return SearchResult(None, 1)
    if outcome == minimizing_symbol:
        return SearchResult(None, -1)
    if outcome == TIE:
        return SearchResult(None, 0)

    mover = maximizing_symbol if is_maximizing_turn else minimizing_symbol
    best_index: Optional[int] = None
    best_score = float('-inf') if is_maximizing_turn else float('inf')
    for index in empty_cells(board_t):
        child = place(board_t, index, mover)
        score = _search(child, maximizing_symbol, minimizing_symbol, not is_maximizing_turn).score
        if is_maximizing_turn:
            if score > best_score:
                best_index, best_score = index, score
        elif score < best_score:
            best_index, best_score = index, score
    return SearchResult(best_index, int(best_score))


def best_move(board: Sequence[str], maximizing_symbol: str, minimizing_symbol: str,
              is_maximizing_turn: bool = True) -> SearchResult:
    """Full-depth minimax choice for the side to move.

    Returns the chosen cell and its score from the maximizer's point of view.
    On a terminal board the index is None and the score is the outcome.
    Raises InvalidStateError when the board or symbols break the game's
    preconditions.
    """
    board_t = tuple(board)
    _check_args(board_t, maximizing_symbol, minimizing_symbol)
    result = _search(board_t, maximizing_symbol, minimizing_symbol, bool(is_maximizing_turn))
    logging.debug(
        "best_move board=%s maximizer=%s turn=%s -> index=%s score=%s",
        serialize_board(board_t),
        maximizing_symbol,
        "max" if is_maximizing_turn else "min",
        result.index,
        result.score,
    )
    return result


def move_scores(board: Sequence[str], maximizing_symbol: str, minimizing_symbol: str,
                is_maximizing_turn: bool = True) -> List[Optional[int]]:
    """Minimax score of every legal move; None for occupied cells."""
    board_t = tuple(board)
    _check_args(board_t, maximizing_symbol, minimizing_symbol)
    scores: List[Optional[int]] = [None] * 9
    if evaluate(board_t) is not None:
        return scores
    mover = maximizing_symbol if is_maximizing_turn else minimizing_symbol
    for index in empty_cells(board_t):
        child = place(board_t, index, mover)
        scores[index] = _search(child, maximizing_symbol, minimizing_symbol,
                                not is_maximizing_turn).score
    return scores


def solve_all_reachable(first: str, second: str) -> Dict[str, Tuple[str, ...]]:
    """Enumerate every board reachable from the empty board, keyed by text form."""
    start = new_board()
    seen = {start}
    order = []
    q = deque([start])
    while q:
        s = q.popleft()
        order.append(s)
        if evaluate(s) is not None:
            continue
        mover = side_to_move(s, first, second)
        for index in empty_cells(s):
            child = place(s, index, mover)
            if child not in seen:
                seen.add(child)
                q.append(child)
    return {serialize_board(s): s for s in order}


def clear_cache() -> None:
    _search.cache_clear()
