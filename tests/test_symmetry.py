import pytest

from tictacbot.board import parse_board, serialize_board
from tictacbot.symmetry import (
    ALL_SYMS,
    apply_action_transform,
    canonical_form,
    cell_class,
    orbit_size,
    transform_board,
)


def test_action_transform_roundtrip():
    # In dihedral group, each element is its own inverse except 90/270 rotations.
    inverse = {
        'id': 'id',
        'rot90': 'rot270',
        'rot180': 'rot180',
        'rot270': 'rot90',
        'hflip': 'hflip',
        'vflip': 'vflip',
        'd1': 'd1',
        'd2': 'd2',
    }
    for k, inv in inverse.items():
        for i in range(9):
            j = apply_action_transform(i, k)
            assert apply_action_transform(j, inv) == i


def test_action_map_follows_board():
    board = parse_board("X........")
    for k in ALL_SYMS:
        image = transform_board(board, k)
        assert image[apply_action_transform(0, k)] == "X"


def test_canonical_is_lexicographically_minimum():
    board = parse_board("X.O.X.O..")
    images = [serialize_board(transform_board(board, k)) for k in ALL_SYMS]
    assert canonical_form(board) == min(images)


def test_orbit_sizes():
    assert orbit_size(parse_board(".........")) == 1
    assert orbit_size(parse_board("....X....")) == 1
    assert orbit_size(parse_board("X........")) == 4
    assert orbit_size(parse_board("XO.......")) == 8


def test_cell_classes():
    assert [cell_class(i) for i in range(9)] == [
        'corner', 'edge', 'corner',
        'edge', 'center', 'edge',
        'corner', 'edge', 'corner',
    ]
    with pytest.raises(ValueError):
        cell_class(9)


def test_unknown_transformation():
    with pytest.raises(ValueError):
        transform_board(parse_board("........."), "spin")
    with pytest.raises(ValueError):
        apply_action_transform(0, "spin")
