"""
Game basics: pieces, outcomes, coordinates and the mutable board.
Teaching notes:
- A board is 9 cells in row-major order: 0=empty, 1=X, 2=O. X always starts.
- A "ply" is a half-move (one piece placement).
- The board is mutated only through place/clear; the search engine relies on
  that pair to backtrack.
"""
from __future__ import annotations

import operator
from enum import IntEnum
from typing import Iterable, List, NamedTuple, Optional, Tuple

WIN_PATTERNS = [
    [0, 1, 2], [3, 4, 5], [6, 7, 8],
    [0, 3, 6], [1, 4, 7], [2, 5, 8],
    [0, 4, 8], [2, 4, 6]
]


class BoardError(ValueError):
    """Base class for recoverable board misuse."""


class OutOfBounds(BoardError):
    pass


class CellOccupied(BoardError):
    pass


class Piece(IntEnum):
    EMPTY = 0
    X = 1
    O = 2

    def opposite(self) -> "Piece":
        if self is Piece.X:
            return Piece.O
        if self is Piece.O:
            return Piece.X
        return Piece.EMPTY

    @property
    def symbol(self) -> str:
        return ' XO'[self]


class Outcome(IntEnum):
    """Result of optimal play for the side to move. Lower is better."""
    WIN = 0
    TIE = 1
    LOSS = 2

    def opposite(self) -> "Outcome":
        return Outcome(2 - self)


class Coord(NamedTuple):
    row: int
    col: int

    @property
    def flat_index(self) -> int:
        return self.row * 3 + self.col

    @classmethod
    def from_flat_index(cls, index: int) -> "Coord":
        return cls(index // 3, index % 3)


CELLS: Tuple[Coord, ...] = tuple(Coord.from_flat_index(i) for i in range(9))


def _flat_index(coord: Tuple[int, int]) -> int:
    try:
        row, col = (operator.index(v) for v in coord)
    except (TypeError, ValueError):
        raise OutOfBounds(f"Not a coordinate: {coord!r}") from None
    if not (0 <= row <= 2 and 0 <= col <= 2):
        raise OutOfBounds(f"The following coordinates are out of bounds: {row} {col}")
    return row * 3 + col


class Board:
    """A 3x3 grid. Two boards with the same cells compare equal."""

    def __init__(self, cells: Optional[Iterable[int]] = None):
        if cells is None:
            self._cells: List[Piece] = [Piece.EMPTY] * 9
        else:
            self._cells = [Piece(v) for v in cells]
            if len(self._cells) != 9:
                raise BoardError(f"A board has 9 cells, got {len(self._cells)}")

    @classmethod
    def from_string(cls, raw: str) -> "Board":
        raw = raw.strip()
        if len(raw) != 9 or any(c not in "012" for c in raw):
            raise BoardError("Invalid board string. Must be 9 chars of 0/1/2.")
        return cls(int(c) for c in raw)

    @property
    def cells(self) -> Tuple[Piece, ...]:
        return tuple(self._cells)

    def get(self, coord: Tuple[int, int]) -> Piece:
        return self._cells[_flat_index(coord)]

    def place(self, coord: Tuple[int, int], piece: Piece) -> None:
        idx = _flat_index(coord)
        if piece == Piece.EMPTY:
            raise ValueError("Cannot place an empty piece; use clear()")
        if self._cells[idx] != Piece.EMPTY:
            raise CellOccupied(f"Piece already present at {tuple(coord)}")
        self._cells[idx] = Piece(piece)

    def clear(self, coord: Tuple[int, int]) -> None:
        self._cells[_flat_index(coord)] = Piece.EMPTY

    def count_occupied(self) -> int:
        return sum(1 for v in self._cells if v != Piece.EMPTY)

    def empty_cells(self) -> List[Coord]:
        return [c for c in CELLS if self._cells[c.flat_index] == Piece.EMPTY]

    def is_full(self) -> bool:
        return Piece.EMPTY not in self._cells

    def has_won(self, piece: Piece) -> bool:
        cells = self._cells
        return any(cells[a] == piece and cells[b] == piece and cells[c] == piece
                   for a, b, c in WIN_PATTERNS)

    def winner(self) -> Piece:
        for a, b, c in WIN_PATTERNS:
            v = self._cells[a]
            if v != Piece.EMPTY and v == self._cells[b] and v == self._cells[c]:
                return v
        return Piece.EMPTY

    def copy(self) -> "Board":
        return Board(self._cells)

    def serialize(self) -> str:
        return ''.join(str(int(v)) for v in self._cells)

    def render(self) -> str:
        rows = [self._cells[i:i + 3] for i in range(0, 9, 3)]
        return "\n".join("|".join(p.symbol for p in row) for row in rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board({self.serialize()!r})"


def get_piece_counts(board: Board) -> Tuple[int, int]:
    cells = board.cells
    return cells.count(Piece.X), cells.count(Piece.O)


def current_player(board: Board) -> Piece:
    x, o = get_piece_counts(board)
    return Piece.X if x == o else Piece.O


def is_valid_state(board: Board) -> bool:
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False
    x_won = board.has_won(Piece.X)
    o_won = board.has_won(Piece.O)
    # no double winners
    if x_won and o_won:
        return False
    if x_won and x_count != o_count + 1:
        return False
    if o_won and x_count != o_count:
        return False
    return True
