"""
Terminal-state detection from occupancy masks.
"""
from typing import NamedTuple, Optional, Sequence

from .board import EMPTY, Mask, Outcome, validate_position
from .patterns import WIN_PATTERNS

# Three in a row needs at least 3 marks from one side and 2 from the other.
MIN_MOVES_FOR_WIN = 5


class GameStatus(NamedTuple):
    ended: bool
    outcome: Outcome


def evaluate_winner(max_mask: int, min_mask: int) -> Outcome:
    for pattern in WIN_PATTERNS:
        if pattern & max_mask == pattern:
            return Outcome.MAX_WINS
        if pattern & min_mask == pattern:
            return Outcome.MIN_WINS
    return Outcome.DRAW


def winning_line(max_mask: int, min_mask: int) -> Optional[int]:
    """First completed pattern in catalog order, or None."""
    for pattern in WIN_PATTERNS:
        if pattern & max_mask == pattern or pattern & min_mask == pattern:
            return pattern
    return None


def game_status(board: Sequence[int], max_mask: int, min_mask: int) -> GameStatus:
    move_count = sum(1 for v in board if v != EMPTY)
    if move_count < MIN_MOVES_FOR_WIN:
        return GameStatus(False, Outcome.DRAW)
    winner = evaluate_winner(max_mask, min_mask)
    if winner is not Outcome.DRAW:
        return GameStatus(True, winner)
    if move_count < len(board):
        return GameStatus(False, Outcome.DRAW)
    return GameStatus(True, Outcome.DRAW)


def has_game_ended(board: Sequence[int], max_mask: Mask, min_mask: Mask) -> GameStatus:
    """Validate the position, then report (ended, outcome).

    An outcome of DRAW with ended=False means the game is still going.
    """
    b, mx, mn = validate_position(board, max_mask, min_mask)
    return game_status(b, mx, mn)
