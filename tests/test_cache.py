from ttt_engine.cache import TranspositionCache
from ttt_engine.game_basics import CELLS, Board, Coord, Outcome, Piece
from ttt_engine.symmetry import rotate_board, rotate_coordinate


def test_cached_result_is_rotated_back():
    # no rotational symmetry, so each rotation maps the move uniquely
    board = Board.from_string("120000000")
    cache = TranspositionCache()
    cache.add(board, (Coord(1, 2), Outcome.WIN))
    for r in range(4):
        rotated = rotate_board(board, r)
        assert cache.check(rotated) == (rotate_coordinate((1, 2), r), Outcome.WIN)
    assert len(cache) == 1


def test_rotations_share_one_entry():
    cache = TranspositionCache()
    for coord in CELLS:
        board = Board()
        board.place(coord, Piece.X)
        cache.add(board, (coord, Outcome.WIN))
    # corner, edge, centre
    assert len(cache) == 3


def test_symmetric_board_returns_an_equivalent_move():
    board = Board.from_string("000010000")
    cache = TranspositionCache()
    cache.add(board, (Coord(0, 0), Outcome.TIE))
    coord, outcome = cache.check(rotate_board(board, 1))
    assert outcome == Outcome.TIE
    assert coord in {rotate_coordinate((0, 0), s) for s in range(4)}


def test_miss_and_hit_counters():
    cache = TranspositionCache()
    board = Board.from_string("100000000")
    assert cache.check(board) is None
    assert board not in cache
    cache.add(board, (Coord(0, 0), Outcome.LOSS))
    assert board in cache
    assert cache.check(rotate_board(board, 3)) is not None
    assert (cache.hits, cache.misses) == (1, 1)


def test_last_writer_wins():
    cache = TranspositionCache()
    board = Board.from_string("100000000")
    cache.add(board, (Coord(0, 0), Outcome.LOSS))
    cache.add(rotate_board(board, 2), (Coord(2, 2), Outcome.TIE))
    assert len(cache) == 1
    assert cache.check(board) == (Coord(0, 0), Outcome.TIE)


def test_entries_are_separate_per_mover():
    cache = TranspositionCache()
    board = Board.from_string("120000000")
    cache.add(board, (Coord(0, 1), Outcome.LOSS), Piece.O)
    assert cache.check(board, Piece.X) is None
    cache.add(board, (Coord(0, 0), Outcome.WIN), Piece.X)
    assert cache.check(board, Piece.O) == (Coord(0, 1), Outcome.LOSS)
    assert cache.check(rotate_board(board, 1), Piece.X) == (rotate_coordinate((0, 0), 1), Outcome.WIN)
    assert len(cache) == 2
    assert board in cache
