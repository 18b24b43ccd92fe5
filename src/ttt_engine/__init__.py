"""ttt_engine package.

Optimal tic-tac-toe by exhaustive minimax: win patterns, terminal-state
detection, move application and the search itself, plus a headless game
session and a small CLI.

Convenience imports are exposed for common workflows.
"""

from .board import (
    EMPTY,
    MAX,
    MIN,
    BoardError,
    Outcome,
    Player,
    apply_move,
    checked_apply_move,
    masks_from_board,
    parse_board,
)
from .evaluator import GameStatus, evaluate_winner, has_game_ended
from .patterns import WIN_PATTERNS
from .search import SearchResult, choose_move
from .session import Game, IllegalMoveError

__all__ = [
    "EMPTY",
    "MAX",
    "MIN",
    "BoardError",
    "Outcome",
    "Player",
    "apply_move",
    "checked_apply_move",
    "masks_from_board",
    "parse_board",
    "GameStatus",
    "evaluate_winner",
    "has_game_ended",
    "WIN_PATTERNS",
    "SearchResult",
    "choose_move",
    "Game",
    "IllegalMoveError",
]
