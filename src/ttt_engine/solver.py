"""
Exact game-theoretic search (backward induction with a transposition cache),
from the side-to-move perspective.
Tie-break policy:
- Prefer win over tie over loss.
- An immediate win ends the scan of the current position.
- Among equally good moves the injected `choose` callable decides; the default
  keeps the first one in row-major order.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .cache import TranspositionCache
from .game_basics import CELLS, Board, Coord, Outcome, Piece

Move = Tuple[Coord, Outcome]
Chooser = Callable[[Sequence[Coord]], Coord]


def first_choice(coords: Sequence[Coord]) -> Coord:
    return coords[0]


class RandomChoice:
    """Uniform choice among tied moves from a seeded numpy Generator."""

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)

    def __call__(self, coords: Sequence[Coord]) -> Coord:
        return coords[int(self.rng.integers(len(coords)))]


@contextmanager
def trial_move(board: Board, coord: Coord, piece: Piece) -> Iterator[Board]:
    """Place `piece` at `coord` for the duration of the block."""
    board.place(coord, piece)
    try:
        yield board
    finally:
        board.clear(coord)


class SearchEngine:
    def __init__(self, cache: Optional[TranspositionCache] = None, choose: Optional[Chooser] = None):
        self.cache = cache if cache is not None else TranspositionCache()
        self.choose = choose if choose is not None else first_choice

    def best_move(self, board: Board, piece: Piece) -> Optional[Move]:
        """Best move for `piece` on `board`, or None when no cell is empty.

        The board is left exactly as it was given.
        """
        piece = Piece(piece)
        if piece == Piece.EMPTY:
            raise ValueError("The piece to move cannot be empty")
        res = self._search(board, piece)
        logging.debug("best_move piece=%s board=%s -> %s (cache=%d)",
                      piece.name, board.serialize(), res, len(self.cache))
        return res

    def _search(self, board: Board, piece: Piece) -> Optional[Move]:
        outcomes: List[Move] = []
        for coord in CELLS:
            if board.get(coord) != Piece.EMPTY:
                continue
            with trial_move(board, coord, piece):
                outcome = self._evaluate(board, coord, piece)
                if outcome == Outcome.WIN:
                    return coord, outcome
            outcomes.append((coord, outcome))
        if not outcomes:
            return None
        best = min(o for _, o in outcomes)
        tied = [c for c, o in outcomes if o == best]
        return self.choose(tied), best

    def _evaluate(self, board: Board, coord: Coord, piece: Piece) -> Outcome:
        # `board` already holds `piece` at `coord`.
        cached = self.cache.check(board, piece)
        if cached is not None:
            return cached[1]
        if board.has_won(piece):
            outcome = Outcome.WIN
        else:
            reply = self._search(board, piece.opposite())
            outcome = Outcome.TIE if reply is None else reply[1].opposite()
        self.cache.add(board, (coord, outcome), piece)
        return outcome


def best_move(board: Board, piece: Piece, engine: Optional[SearchEngine] = None) -> Optional[Move]:
    if engine is None:
        engine = SearchEngine()
    return engine.best_move(board, piece)
