from collections import deque
from functools import lru_cache

from ttt_engine.game_basics import WIN_PATTERNS, Board, Outcome, Piece, current_player
from ttt_engine.solver import RandomChoice, SearchEngine

VALUE_TO_OUTCOME = {+1: Outcome.WIN, 0: Outcome.TIE, -1: Outcome.LOSS}


def _winner(b: tuple) -> int:
    for a, c, d in WIN_PATTERNS:
        if b[a] != 0 and b[a] == b[c] == b[d]:
            return b[a]
    return 0


@lru_cache(maxsize=None)
def reference_q(board_t: tuple, idx: int, player: int) -> int:
    """Plain minimax value of playing `idx`, from `player`'s side."""
    child = list(board_t)
    child[idx] = player
    child_t = tuple(child)
    if _winner(child_t) == player:
        return +1
    replies = [i for i, v in enumerate(child_t) if v == 0]
    if not replies:
        return 0
    opp = 2 if player == 1 else 1
    return -max(reference_q(child_t, i, opp) for i in replies)


def reachable_nonterminal():
    start = tuple([0] * 9)
    q = deque([start])
    seen = {start}
    while q:
        s = q.popleft()
        if _winner(s) != 0 or 0 not in s:
            continue
        yield s
        p = 1 if s.count(1) == s.count(2) else 2
        for i, v in enumerate(s):
            if v == 0:
                child = list(s)
                child[i] = p
                child_t = tuple(child)
                if child_t not in seen:
                    seen.add(child_t)
                    q.append(child_t)


def _check_engine(engine: SearchEngine) -> int:
    checked = 0
    for s in reachable_nonterminal():
        board = Board(s)
        piece = current_player(board)
        coord, outcome = engine.best_move(board, piece)
        qs = {i: reference_q(s, i, int(piece)) for i, v in enumerate(s) if v == 0}
        best = max(qs.values())
        assert outcome == VALUE_TO_OUTCOME[best], s
        assert qs[coord.flat_index] == best, s
        checked += 1
    return checked


def test_engine_matches_plain_minimax_on_every_reachable_position():
    assert _check_engine(SearchEngine()) == 4520


def test_random_tie_break_still_optimal_everywhere():
    assert _check_engine(SearchEngine(choose=RandomChoice(seed=3))) == 4520


def test_takes_column_win_instead_of_side_cell():
    # X|O| /  |O| / X| |X : O must not play (1,2); it wins at (2,1)
    b = Board.from_string("120020101")
    assert SearchEngine().best_move(b, Piece.O)[0] == (2, 1)


def test_shared_engine_stays_optimal_when_sides_are_mixed():
    # one engine, every position searched for both pieces in turn
    engine = SearchEngine()
    checked = 0
    for s in reachable_nonterminal():
        board = Board(s)
        for piece in (Piece.O, Piece.X):
            coord, outcome = engine.best_move(board, piece)
            qs = {i: reference_q(s, i, int(piece)) for i, v in enumerate(s) if v == 0}
            best = max(qs.values())
            assert outcome == VALUE_TO_OUTCOME[best], (s, piece)
            assert qs[coord.flat_index] == best, (s, piece)
            checked += 1
    assert checked == 2 * 4520
