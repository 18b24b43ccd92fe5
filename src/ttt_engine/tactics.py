"""
Tactical motifs: immediate wins and the blocks they force.
Teaching notes:
- These are one-ply checks; the search does not use them, but they make a
  handy oracle for what the search should find.
"""
from typing import List, Sequence

from .board import EMPTY, apply_move, masks_from_board
from .evaluator import evaluate_winner


def winning_moves(board: Sequence[int], player: int) -> List[int]:
    max_mask, min_mask = masks_from_board(board)
    wins: List[int] = []
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        _, mx, mn = apply_move(board, i, max_mask, min_mask, player)
        if evaluate_winner(mx, mn) == player:
            wins.append(i)
    return wins


def blocking_moves(board: Sequence[int], player: int) -> List[int]:
    return winning_moves(board, -player)


def gives_opponent_immediate_win(board: Sequence[int], player: int, move: int) -> bool:
    if board[move] != EMPTY:
        return False
    b = list(board)
    b[move] = player
    return len(blocking_moves(b, player)) > 0
