"""
Transposition cache keyed on boards modulo rotation.

Entries hold (best coordinate, outcome) with the coordinate expressed in the
canonical orientation, so any rotation of a stored board can reuse it.
The outcome belongs to the piece that moved last, so that piece is part of
the key: bits 0..17 hold the canonical board, bits 18..19 the mover.
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from .game_basics import Board, Coord, Outcome, Piece
from .symmetry import canonicalize, rotate_coordinate

Entry = Tuple[Coord, Outcome]

MOVER_SHIFT = 18


def cache_key(board: Board, mover: Piece = Piece.EMPTY) -> Tuple[int, int]:
    """Return (rotation_count, key) for `board` as left by `mover`."""
    rotations, key = canonicalize(board)
    return rotations, key | (int(mover) << MOVER_SHIFT)


class TranspositionCache:
    def __init__(self) -> None:
        self._entries: Dict[int, Entry] = {}
        self.hits = 0
        self.misses = 0

    def check(self, board: Board, mover: Piece = Piece.EMPTY) -> Optional[Entry]:
        rotations, key = cache_key(board, mover)
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None
        self.hits += 1
        coord, outcome = entry
        return rotate_coordinate(coord, (4 - rotations) % 4), outcome

    def add(self, board: Board, res: Entry, mover: Piece = Piece.EMPTY) -> None:
        rotations, key = cache_key(board, mover)
        coord, outcome = res
        self._entries[key] = (rotate_coordinate(coord, rotations), Outcome(outcome))

    def __contains__(self, board: Board) -> bool:
        # true if the board is stored for any mover
        key = cache_key(board)[1]
        return any(key | (int(p) << MOVER_SHIFT) in self._entries for p in Piece)

    def __len__(self) -> int:
        return len(self._entries)
