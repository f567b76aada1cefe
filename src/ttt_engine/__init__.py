"""ttt_engine package.

Perfect-play tic-tac-toe: a rotation-aware transposition cache over an
exhaustive backward-induction search, plus a small CLI and turn driver.

Convenience imports are exposed for common workflows.
"""

from .cache import TranspositionCache
from .config import SearchConfig
from .game_basics import Board, Coord, Outcome, Piece
from .solver import SearchEngine, best_move
from .symmetry import canonicalize

__all__ = [
    "Board",
    "Coord",
    "Outcome",
    "Piece",
    "SearchConfig",
    "SearchEngine",
    "TranspositionCache",
    "best_move",
    "canonicalize",
]
