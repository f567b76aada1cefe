from __future__ import annotations

import argparse
import logging
from typing import Optional

from .config import TIE_BREAKS, SearchConfig
from .game import Game
from .game_basics import Board, BoardError, Piece, current_player, is_valid_state
from .symmetry import canonicalize

PIECES = {"x": Piece.X, "o": Piece.O}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe perfect-play engine")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--seed", type=int, default=None, help="Seed for random tie-breaking and side assignment")
    p.add_argument(
        "--tie-break",
        choices=list(TIE_BREAKS),
        default=None,
        help="How to pick among equally good moves (default: TTT_TIE_BREAK or first)",
    )

    # best move
    p_move = sub.add_parser("move", help="Best move for the side to move (9 digits, 0=empty,1=X,2=O)")
    p_move.add_argument("--board", help="Board string, e.g., 100020000 (omit with --stdin)")
    p_move.add_argument(
        "--piece",
        choices=sorted(PIECES),
        default=None,
        help="Piece to move (default: inferred from piece counts)",
    )
    p_move.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )

    # demo: symmetry
    p_sym = sub.add_parser("symmetry", help="Show the canonical rotation and key for a board")
    p_sym.add_argument("--board", required=True, help="Board string, e.g., 100020000")

    # interactive play
    p_play = sub.add_parser("play", help="Play against the engine in the terminal")
    p_play.add_argument(
        "--human",
        choices=sorted(PIECES),
        default=None,
        help="Your piece (default: random)",
    )

    return p


def _parse_board(raw: Optional[str]) -> Optional[Board]:
    try:
        board = Board.from_string(raw or "")
    except BoardError as e:
        logging.error("%s", e)
        return None
    if not is_valid_state(board):
        logging.error("Board is not a valid reachable state.")
        return None
    return board


def _config_from_args(ns: argparse.Namespace) -> SearchConfig:
    cfg = SearchConfig.from_env()
    if ns.tie_break is not None:
        cfg.tie_break = ns.tie_break
    if ns.seed is not None:
        cfg.seed = ns.seed
    return cfg


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("ttt-engine"))
        except Exception:
            print("unknown")
        return 0

    try:
        cfg = _config_from_args(ns)
    except ValueError as e:
        logging.error("%s", e)
        return 2

    if ns.cmd == "move":
        engine = cfg.make_engine()
        if ns.stdin:
            import csv as _csv
            import sys as _sys

            w = _csv.writer(_sys.stdout)
            w.writerow(["board", "row", "col", "outcome"])
            for line in _sys.stdin:
                raw = line.strip()
                if not raw:
                    continue
                try:
                    board = Board.from_string(raw)
                except BoardError:
                    continue
                if not is_valid_state(board) or board.winner() != Piece.EMPTY:
                    continue
                piece = PIECES[ns.piece] if ns.piece else current_player(board)
                res = engine.best_move(board, piece)
                if res is None:
                    w.writerow([raw, "", "", ""])
                else:
                    w.writerow([raw, res[0].row, res[0].col, res[1].name])
            return 0
        board = _parse_board(ns.board)
        if board is None:
            return 2
        if board.winner() != Piece.EMPTY:
            logging.error("Game is already over: %s has won.", board.winner().symbol)
            return 2
        piece = PIECES[ns.piece] if ns.piece else current_player(board)
        res = engine.best_move(board, piece)
        if res is None:
            logging.info("to_move=%s no legal move (board is full)", piece.symbol)
            return 0
        coord, outcome = res
        logging.info("to_move=%s move=(%d, %d) outcome=%s", piece.symbol, coord.row, coord.col, outcome.name)
        return 0

    if ns.cmd == "symmetry":
        board = _parse_board(ns.board)
        if board is None:
            return 2
        rotation, key = canonicalize(board)
        logging.info("rotation=%d key=%d", rotation, key)
        return 0

    if ns.cmd == "play":
        import numpy as np

        game = Game.new(
            human_piece=PIECES[ns.human] if ns.human else None,
            engine=cfg.make_engine(),
            rng=np.random.default_rng(cfg.seed),
        )
        try:
            game.run()
        except (EOFError, KeyboardInterrupt):
            logging.info("Game aborted.")
            return 1
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
