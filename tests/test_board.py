import pytest

from tictacbot.board import (
    EMPTY,
    TIE,
    WIN_LINES,
    empty_cells,
    evaluate,
    get_winner,
    is_full,
    is_valid_state,
    parse_board,
    place,
    serialize_board,
    side_to_move,
)


@pytest.mark.parametrize("line", WIN_LINES)
@pytest.mark.parametrize("symbol", ["X", "O"])
def test_every_line_wins(line, symbol):
    board = [EMPTY] * 9
    for i in line:
        board[i] = symbol
    assert evaluate(board) == symbol


def test_line_win_ignores_other_cells():
    # middle column for O, with other cells filled arbitrarily
    board = list(parse_board("XOX.O.XOX"))
    assert evaluate(board) == "O"


def test_full_board_without_line_is_tie():
    assert evaluate(["X", "O", "X", "O", "X", "O", "O", "X", "O"]) == TIE


def test_top_row_checked_first():
    board = ["X", "X", "X", "O", "O", "", "", "", ""]
    assert get_winner(board) == "X"
    assert evaluate(board) == "X"


def test_first_line_in_enumeration_order_wins():
    # not reachable, but the result must still be deterministic
    board = parse_board("XXXOOO...")
    assert evaluate(board) == "X"


def test_empty_and_partial_boards_continue():
    assert evaluate([EMPTY] * 9) is None
    assert evaluate(parse_board("XO.......")) is None
    assert evaluate(parse_board("XOXOXO.X.")) is None


def test_full_board_with_winner_is_not_tie():
    board = parse_board("XOXOXOOXX")
    assert is_full(board)
    assert evaluate(board) == "X"


def test_empty_cells_ascending():
    assert empty_cells(parse_board("X.O..X.O.")) == [1, 3, 4, 6, 8]
    assert empty_cells(parse_board("XOXOXOOXO")) == []


def test_place_does_not_mutate():
    board = [EMPTY] * 9
    out = place(board, 4, "X")
    assert board == [EMPTY] * 9
    assert out[4] == "X"
    assert isinstance(out, tuple)


def test_parse_and_serialize():
    b = parse_board("X-O_ .X..")
    assert b == ("X", "", "O", "", "", "", "X", "", "")
    assert serialize_board(b) == "X.O...X.."
    with pytest.raises(ValueError):
        parse_board("XO")


def test_side_to_move():
    assert side_to_move(parse_board(".........")) == "X"
    assert side_to_move(parse_board("X........")) == "O"
    assert side_to_move(parse_board("XO.......")) == "X"


@pytest.mark.parametrize(
    "text, valid",
    [
        (".........", True),
        ("X........", True),
        ("O........", False),  # O never moves first
        ("XX.......", False),
        ("XXXOO....", True),
        ("XXXOOO...", False),  # both win
        ("XXXOOOO..", False),
        ("OOOXX.X..", True),
        ("OOOXXX...", False),
        ("Z........", False),
    ],
)
def test_is_valid_state(text, valid):
    assert is_valid_state(parse_board(text)) is valid
