"""
Rotational symmetry and canonicalization for Tic-Tac-Toe.
Teaching notes:
- Only the 4 rotations of the square are folded together; reflections are not.
- A board packs into an integer key: cell i uses bits 2*i..2*i+1 (0=empty, 1=X, 2=O).
- The canonical form is the rotation with the smallest key; ties go to the
  smallest rotation count.
"""
from functools import lru_cache
from typing import List, Tuple

from .game_basics import Board, Coord

CELL_MASK = 3


def rotate_coordinate(coord: Tuple[int, int], times: int) -> Coord:
    """Rotate a cell clockwise by 90 degrees, `times` times (mod 4)."""
    row, col = coord
    for _ in range(times % 4):
        row, col = col, 2 - row
    return Coord(row, col)


def _rotation_index_map(times: int) -> List[int]:
    return [rotate_coordinate(Coord.from_flat_index(i), times).flat_index for i in range(9)]


# ROTATION_INDEX_MAPS[k][i] is where cell i lands after k rotations.
ROTATION_INDEX_MAPS = [_rotation_index_map(k) for k in range(4)]


def _encode_cells(cells: Tuple[int, ...]) -> int:
    key = 0
    for i, v in enumerate(cells):
        key |= int(v) << (2 * i)
    return key


def _rotate_cells(cells: Tuple[int, ...], times: int) -> Tuple[int, ...]:
    mapping = ROTATION_INDEX_MAPS[times % 4]
    out = [0] * 9
    for i, v in enumerate(cells):
        out[mapping[i]] = v
    return tuple(out)


def encode(board: Board) -> int:
    return _encode_cells(board.cells)


def rotate_board(board: Board, times: int) -> Board:
    return Board(_rotate_cells(board.cells, times))


def rotate_encoded(key: int, times: int) -> int:
    """Rotate a packed key directly; agrees with encode(rotate_board(...))."""
    mapping = ROTATION_INDEX_MAPS[times % 4]
    out = 0
    for i in range(9):
        out |= ((key >> (2 * i)) & CELL_MASK) << (2 * mapping[i])
    return out


@lru_cache(maxsize=None)
def _canonicalize_cells(cells: Tuple[int, ...]) -> Tuple[int, int]:
    key = _encode_cells(cells)
    best = (0, key)
    for k in range(1, 4):
        rotated = rotate_encoded(key, k)
        if rotated < best[1]:
            best = (k, rotated)
    return best


def canonicalize(board: Board) -> Tuple[int, int]:
    """Return (rotation_count, canonical_key) for the minimal rotation."""
    return _canonicalize_cells(tuple(int(v) for v in board.cells))
