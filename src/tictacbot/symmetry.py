"""
Board symmetries (the dihedral group of the square) and cell classes.
Notes:
- Transforms only permute cells, so they work for any cell values.
- Minimax scores are invariant under all 8 operations; cell indices move
  with the board through precomputed index maps.
- The canonical form is the lexicographically smallest serialized image.
"""
from typing import List, Sequence, Tuple

from .board import serialize_board

ALL_SYMS = ['id', 'rot90', 'rot180', 'rot270', 'hflip', 'vflip', 'd1', 'd2']

_PERMUTATIONS = {
    'id': (0, 1, 2, 3, 4, 5, 6, 7, 8),
    'rot90': (6, 3, 0, 7, 4, 1, 8, 5, 2),
    'rot180': (8, 7, 6, 5, 4, 3, 2, 1, 0),
    'rot270': (2, 5, 8, 1, 4, 7, 0, 3, 6),
    'hflip': (2, 1, 0, 5, 4, 3, 8, 7, 6),
    'vflip': (6, 7, 8, 3, 4, 5, 0, 1, 2),
    'd1': (0, 3, 6, 1, 4, 7, 2, 5, 8),
    'd2': (8, 5, 2, 7, 4, 1, 6, 3, 0),
}

CORNERS = (0, 2, 6, 8)
EDGES = (1, 3, 5, 7)
CENTER = 4


def transform_board(board: Sequence[str], kind: str) -> Tuple[str, ...]:
    if kind not in _PERMUTATIONS:
        raise ValueError(f"Unknown transformation: {kind}")
    return tuple(board[src] for src in _PERMUTATIONS[kind])


def sym_index_map(kind: str) -> List[int]:
    # cell i of the source lands where its marker shows up in the image
    mapping = []
    for i in range(9):
        marker = ['.'] * 9
        marker[i] = '*'
        mapping.append(transform_board(marker, kind).index('*'))
    return mapping


SYMM_INDEX_MAPS = {k: sym_index_map(k) for k in ALL_SYMS}


def apply_action_transform(action: int, kind: str) -> int:
    if kind not in SYMM_INDEX_MAPS:
        raise ValueError(f"Unknown transformation: {kind}")
    return SYMM_INDEX_MAPS[kind][action]


def canonical_form(board: Sequence[str]) -> str:
    return min(serialize_board(transform_board(board, k)) for k in ALL_SYMS)


def orbit_size(board: Sequence[str]) -> int:
    return len({serialize_board(transform_board(board, k)) for k in ALL_SYMS})


def cell_class(index: int) -> str:
    if index == CENTER:
        return 'center'
    if index in CORNERS:
        return 'corner'
    if index in EDGES:
        return 'edge'
    raise ValueError(f"Cell index out of range: {index}")
