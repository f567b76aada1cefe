"""
Turn driver for a human-vs-computer game.

I/O is injected (`read_line`, `write`) so the loop can run headless in tests.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

import numpy as np

from .game_basics import Board, BoardError, Coord, Piece, current_player
from .solver import SearchEngine

ReadLine = Callable[[], str]
Write = Callable[[str], None]


class Opponent(Enum):
    HUMAN = "Human"
    COMPUTER = "Computer"


@dataclass(frozen=True)
class Player:
    opponent: Opponent
    piece: Piece

    def __post_init__(self) -> None:
        if self.piece == Piece.EMPTY:
            raise ValueError("Can't create a player with a blank piece")

    def __str__(self) -> str:
        return f"({self.opponent.value}, {self.piece.symbol})"


class Game:
    def __init__(self, players: Sequence[Player], engine: Optional[SearchEngine] = None,
                 board: Optional[Board] = None):
        if len(players) != 2 or players[0].piece == players[1].piece:
            raise ValueError("A game needs two players with different pieces")
        self.players = tuple(players)
        self.engine = engine if engine is not None else SearchEngine()
        self.board = board if board is not None else Board()

    @classmethod
    def new(cls, human_piece: Optional[Piece] = None, engine: Optional[SearchEngine] = None,
            rng: Optional[np.random.Generator] = None) -> "Game":
        if human_piece is None:
            rng = rng if rng is not None else np.random.default_rng()
            human_piece = Piece.X if rng.random() < 0.5 else Piece.O
        human_piece = Piece(human_piece)
        return cls(
            [Player(Opponent.HUMAN, human_piece), Player(Opponent.COMPUTER, human_piece.opposite())],
            engine=engine,
        )

    def player_by_piece(self, piece: Piece) -> Player:
        if self.players[0].piece == piece:
            return self.players[0]
        return self.players[1]

    def current_player(self) -> Player:
        return self.player_by_piece(current_player(self.board))

    def winner(self) -> Optional[Player]:
        w = self.board.winner()
        return None if w == Piece.EMPTY else self.player_by_piece(w)

    def computer_move(self) -> Coord:
        res = self.engine.best_move(self.board, self.current_player().piece)
        if res is None:
            raise RuntimeError("No moves left to make")
        return res[0]

    def human_move(self, read_line: ReadLine, write: Write) -> Coord:
        while True:
            write("Please enter two numbers between 0 and 2, separated by a space:")
            parts = read_line().split()
            try:
                row, col = (int(p) for p in parts)
            except ValueError:
                write("Input is invalid")
                continue
            try:
                occupied = self.board.get((row, col)) != Piece.EMPTY
            except BoardError as e:
                write(str(e))
                continue
            if occupied:
                write("There's already a piece...")
                continue
            return Coord(row, col)

    def play_turn(self, read_line: ReadLine, write: Write) -> Coord:
        player = self.current_player()
        if player.opponent is Opponent.HUMAN:
            coord = self.human_move(read_line, write)
        else:
            write("Computer calculating move...")
            coord = self.computer_move()
        self.board.place(coord, player.piece)
        logging.debug("%s played %s", player, tuple(coord))
        return coord

    def run(self, read_line: ReadLine = input, write: Write = print) -> Optional[Player]:
        while not self.board.is_full():
            write(f"State of the board:\n{self.board.render()}")
            self.play_turn(read_line, write)
            player = self.winner()
            if player is not None:
                write(f"{player} won!\n{self.board.render()}")
                return player
        write(f"The game ended in a tie!\n{self.board.render()}")
        return None
