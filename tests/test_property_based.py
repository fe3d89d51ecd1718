from typing import List

import pytest
try:
    from hypothesis import given, settings, strategies as st  # type: ignore
    HAS_HYP = True
except ModuleNotFoundError:  # pragma: no cover - test infra
    HAS_HYP = False
    import pytest as _pytest  # type: ignore
    _pytest.skip("Hypothesis not installed", allow_module_level=True)

from tictacbot.board import TIE, WIN_LINES, evaluate, get_winner, is_full, place
from tictacbot.solver import best_move
from tictacbot.symmetry import ALL_SYMS, apply_action_transform, transform_board

cells = st.sampled_from(["", "X", "O"])
boards = st.lists(cells, min_size=9, max_size=9)


@st.composite
def played_boards(draw):
    """Boards reached by alternating legal play from the empty board."""
    board = [""] * 9
    mover = "X"
    order = draw(st.permutations(range(9)))
    n = draw(st.integers(min_value=0, max_value=9))
    for i in order[:n]:
        if evaluate(board) is not None:
            break
        board[i] = mover
        mover = "O" if mover == "X" else "X"
    return board


@given(boards)
def test_full_board_is_never_open(board: List[str]):
    outcome = evaluate(board)
    if is_full(board):
        assert outcome is not None
    if outcome is None:
        assert not is_full(board)


@given(boards)
def test_open_board_without_line_continues(board: List[str]):
    has_line = any(board[a] != "" and board[a] == board[b] == board[c] for a, b, c in WIN_LINES)
    if not has_line and not is_full(board):
        assert evaluate(board) is None
    if not has_line and is_full(board):
        assert evaluate(board) == TIE


@given(boards, st.sampled_from(range(len(WIN_LINES))), st.sampled_from(["X", "O"]))
def test_filled_line_always_wins(board: List[str], line_idx: int, symbol: str):
    other = "O" if symbol == "X" else "X"
    for i in WIN_LINES[line_idx]:
        board[i] = symbol
    # keep the other symbol from completing a line of its own
    for a, b, c in WIN_LINES:
        if board[a] == board[b] == board[c] == other:
            board[a] = ""
    assert evaluate(board) == symbol


@settings(max_examples=50, deadline=None)
@given(played_boards(), st.sampled_from(ALL_SYMS))
def test_scores_invariant_under_symmetry(board: List[str], op: str):
    if evaluate(board) is not None:
        return
    mover = "X" if board.count("X") == board.count("O") else "O"
    other = "O" if mover == "X" else "X"
    res = best_move(board, mover, other, True)
    image = transform_board(board, op)
    res_image = best_move(image, mover, other, True)
    assert res_image.score == res.score
    # the chosen move maps to a move of equal value in the image
    moved = place(image, apply_action_transform(res.index, op), mover)
    assert best_move(moved, mover, other, False).score == res.score


@settings(max_examples=50, deadline=None)
@given(played_boards())
def test_never_misses_an_immediate_win(board: List[str]):
    if evaluate(board) is not None:
        return
    mover = "X" if board.count("X") == board.count("O") else "O"
    other = "O" if mover == "X" else "X"
    res = best_move(board, mover, other, True)
    wins = [i for i, v in enumerate(board) if v == "" and get_winner(place(board, i, mover)) == mover]
    if wins:
        assert res.score == 1
