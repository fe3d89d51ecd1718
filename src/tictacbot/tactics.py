"""
Tactics and simple motifs: immediate wins, blocks, forks.
"""
from typing import List, Sequence

from .board import EMPTY, empty_cells, get_winner, place


def immediate_winning_moves(board: Sequence[str], symbol: str) -> List[int]:
    wins: List[int] = []
    for i in empty_cells(board):
        if get_winner(place(board, i, symbol)) == symbol:
            wins.append(i)
    return wins


def blocking_moves(board: Sequence[str], opponent: str) -> List[int]:
    # cells the side to move must take to stop `opponent` winning next turn
    return immediate_winning_moves(board, opponent)


def fork_moves(board: Sequence[str], symbol: str) -> List[int]:
    forks: List[int] = []
    for i in empty_cells(board):
        if len(immediate_winning_moves(place(board, i, symbol), symbol)) >= 2:
            forks.append(i)
    return forks


def gives_opponent_immediate_win(board: Sequence[str], symbol: str, opponent: str, move: int) -> bool:
    if board[move] != EMPTY:
        return False
    return len(immediate_winning_moves(place(board, move, symbol), opponent)) > 0
