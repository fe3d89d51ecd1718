"""
Board basics: cells, symbols, winning lines, outcome evaluation, text form.
Notes:
- A board is any sequence of 9 cells, row-major (0,1,2 top; 6,7,8 bottom).
- A cell is EMPTY ("") or a one-character symbol. X always moves first.
- Helpers never mutate their argument; place() returns a new tuple.
"""
from typing import List, Optional, Sequence, Tuple

EMPTY = ""
X = "X"
O = "O"
SYMBOLS = (X, O)
TIE = "Tie"

EMPTY_CHARS = ".-_ "

WIN_LINES = [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
]


def get_winner(board: Sequence[str]) -> Optional[str]:
    for a, b, c in WIN_LINES:
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return v
    return None


def is_full(board: Sequence[str]) -> bool:
    return all(cell != EMPTY for cell in board)


def empty_cells(board: Sequence[str]) -> List[int]:
    return [i for i, cell in enumerate(board) if cell == EMPTY]


def evaluate(board: Sequence[str]) -> Optional[str]:
    """Outcome of a board: the winning symbol, TIE, or None while play continues.

    Lines are checked in WIN_LINES order and the first complete line wins.
    """
    winner = get_winner(board)
    if winner is not None:
        return winner
    if is_full(board):
        return TIE
    return None


def place(board: Sequence[str], index: int, symbol: str) -> Tuple[str, ...]:
    cells = list(board)
    cells[index] = symbol
    return tuple(cells)


def new_board() -> Tuple[str, ...]:
    return tuple([EMPTY] * 9)


def serialize_board(board: Sequence[str]) -> str:
    return ''.join(cell if cell != EMPTY else '.' for cell in board)


def parse_board(text: str) -> Tuple[str, ...]:
    if len(text) != 9:
        raise ValueError(f"Board must have 9 cells, got {len(text)}: {text!r}")
    return tuple(EMPTY if ch in EMPTY_CHARS else ch for ch in text)


def count_lines(board: Sequence[str], symbol: str) -> int:
    return sum(1 for line in WIN_LINES if all(board[i] == symbol for i in line))


def side_to_move(board: Sequence[str], first: str = X, second: str = O) -> str:
    return first if board.count(first) == board.count(second) else second


def is_valid_state(board: Sequence[str], first: str = X, second: str = O) -> bool:
    if len(board) != 9:
        return False
    if any(cell not in (EMPTY, first, second) for cell in board):
        return False
    n_first, n_second = board.count(first), board.count(second)
    if not (n_first == n_second or n_first == n_second + 1):
        return False
    first_wins = count_lines(board, first) > 0
    second_wins = count_lines(board, second) > 0
    if first_wins and second_wins:
        return False
    # the winner made the last move
    if first_wins and n_first != n_second + 1:
        return False
    if second_wins and n_first != n_second:
        return False
    return True
