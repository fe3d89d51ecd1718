from tictacbot.board import parse_board
from tictacbot.solver import best_move
from tictacbot.tactics import (
    blocking_moves,
    fork_moves,
    gives_opponent_immediate_win,
    immediate_winning_moves,
)


def test_immediate_wins():
    b = parse_board("XX..OO...")
    assert immediate_winning_moves(b, "X") == [2]
    assert immediate_winning_moves(b, "O") == [3]


def test_blocks():
    b = parse_board("OO..X....")
    assert blocking_moves(b, "O") == [2]


def test_forks():
    # X in opposite corners with O in the center: the free corners fork
    b = parse_board("X...O...X")
    assert fork_moves(b, "X") == [2, 6]
    assert fork_moves(b, "O") == []


def test_gives_opponent_immediate_win():
    b = parse_board("OO..X....")
    assert gives_opponent_immediate_win(b, "X", "O", 3) is True
    assert gives_opponent_immediate_win(b, "X", "O", 2) is False
    assert gives_opponent_immediate_win(b, "X", "O", 0) is False  # occupied


def test_computer_blocks_single_threat():
    # O threatens the left column; X has no win of its own
    b = parse_board("OX.O.X...")
    assert blocking_moves(b, "O") == [6]
    assert immediate_winning_moves(b, "X") == []
    assert best_move(b, "X", "O", True).index == 6
