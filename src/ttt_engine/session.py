"""
Headless game session: the caller-side bookkeeping around the engine.

Holds the authoritative board plus both occupancy masks, applies human and
computer moves, and re-checks the terminal state after every move. The
human plays MAX (X) and the computer plays MIN (O) unless told otherwise.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import EMPTY, BoardError, Outcome, Player, apply_move, format_board
from .board import validate_player, validate_position
from .evaluator import GameStatus, game_status, winning_line
from .patterns import BOARD_SIZE, pattern_cells
from .search import SearchResult, choose_move

DRAW_MESSAGE = "It's a draw!"
HUMAN_WIN_MESSAGE = "You win!"
COMPUTER_WIN_MESSAGE = "Computer wins!"


class IllegalMoveError(ValueError):
    pass


@dataclass
class Game:
    board: List[int] = field(default_factory=lambda: [EMPTY] * BOARD_SIZE)
    max_mask: int = 0
    min_mask: int = 0
    to_move: Player = Player.MAX
    computer: Player = Player.MIN
    history: List[Tuple[Player, int]] = field(default_factory=list)
    status: Optional[GameStatus] = None

    def __post_init__(self):
        self.board, self.max_mask, self.min_mask = validate_position(
            self.board, self.max_mask, self.min_mask)
        self.to_move = validate_player(self.to_move)
        self.computer = validate_player(self.computer)
        actual = game_status(self.board, self.max_mask, self.min_mask)
        if self.status is not None and tuple(self.status) != tuple(actual):
            raise BoardError(f"Status {tuple(self.status)} disagrees with board, expected {tuple(actual)}")
        self.status = actual

    @classmethod
    def new(cls, first: Optional[int] = None, rng: Optional[random.Random] = None,
            computer: int = Player.MIN) -> "Game":
        if first is None:
            players = [Player.MIN, Player.MAX]
            (rng or random.Random()).shuffle(players)
            first = players[0]
        game = cls(to_move=validate_player(first), computer=validate_player(computer))
        logging.debug("new game: %s moves first", game.to_move.name)
        return game

    @property
    def is_over(self) -> bool:
        return self.status.ended

    @property
    def computer_to_move(self) -> bool:
        return not self.is_over and self.to_move is self.computer

    def play(self, index: int) -> GameStatus:
        if self.status.ended:
            raise IllegalMoveError("Game is already over")
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < BOARD_SIZE:
            raise IllegalMoveError(f"Cell {index!r} is out of range 0..{BOARD_SIZE - 1}")
        if self.board[index] != EMPTY:
            raise IllegalMoveError(f"Cell {index} is already occupied")
        self.board, self.max_mask, self.min_mask = apply_move(
            self.board, index, self.max_mask, self.min_mask, self.to_move)
        self.history.append((self.to_move, index))
        self.status = game_status(self.board, self.max_mask, self.min_mask)
        logging.debug("%s -> %d: %s", self.to_move.symbol, index, format_board(self.board))
        self.to_move = self.to_move.opponent
        return self.status

    def computer_move(self, rng: Optional[random.Random] = None) -> SearchResult:
        """Let the engine pick and play a move for the side to move."""
        result = choose_move(self.board, self.max_mask, self.min_mask, self.to_move, rng=rng)
        if result.move is not None:
            self.play(result.move)
        return result

    def winning_cells(self) -> List[int]:
        line = winning_line(self.max_mask, self.min_mask)
        return pattern_cells(line) if line is not None else []

    def message(self) -> Optional[str]:
        if not self.status.ended:
            return None
        if self.status.outcome is Outcome.DRAW:
            return DRAW_MESSAGE
        if self.status.outcome == self.computer:
            return COMPUTER_WIN_MESSAGE
        return HUMAN_WIN_MESSAGE

    def render(self) -> str:
        text = format_board(self.board)
        return "\n".join(text[r:r + 3] for r in range(0, BOARD_SIZE, 3))
