"""
Exhaustive minimax search from the perspective of a MAX and a MIN player.
Policy:
- Empty board, or one mark off-center: take the center.
- One mark in the center: any reply is equally sound, pick uniformly at random.
- Otherwise search every continuation. Values are undifferentiated outcomes
  (no depth scoring); ties keep the lowest cell index.
"""
from __future__ import annotations

import logging
import random
from typing import Dict, List, NamedTuple, Optional, Sequence

from .board import EMPTY, Mask, Outcome, Player, apply_move, empty_cells, occupied_count
from .board import validate_player, validate_position
from .evaluator import game_status

CENTER = 4


class SearchResult(NamedTuple):
    move: Optional[int]
    value: Outcome


def _minimax(board: List[int], max_mask: int, min_mask: int, player: Player,
             stats: Dict[str, int]) -> SearchResult:
    stats['nodes'] += 1
    ended, outcome = game_status(board, max_mask, min_mask)
    if ended:
        return SearchResult(None, outcome)
    best_move: Optional[int] = None
    best_value: Optional[Outcome] = None
    for idx in empty_cells(board):
        child, child_max, child_min = apply_move(board, idx, max_mask, min_mask, player)
        value = _minimax(child, child_max, child_min, player.opponent, stats).value
        if best_value is None:
            better = True
        elif player is Player.MAX:
            better = value > best_value
        else:
            better = value < best_value
        if better:
            best_move = idx
            best_value = value
    return SearchResult(best_move, best_value)


def choose_move(board: Sequence[int], max_mask: Mask, min_mask: Mask, player: int,
                rng: Optional[random.Random] = None) -> SearchResult:
    """Pick a cell for `player` and the game value it leads to.

    Returns SearchResult(None, outcome) when the position is already terminal.
    Raises BoardError for malformed boards or masks.
    """
    b, mx, mn = validate_position(board, max_mask, min_mask)
    p = validate_player(player)
    used = occupied_count(b)

    if b[CENTER] == EMPTY and used < 2:
        logging.debug("opening heuristic: center")
        return SearchResult(CENTER, Outcome.DRAW)
    if used == 1:
        rng = rng if rng is not None else random.Random()
        move = rng.choice(empty_cells(b))
        logging.debug("second-move heuristic: random reply %d", move)
        return SearchResult(move, Outcome(int(p)))

    stats = {'nodes': 0}
    result = _minimax(b, mx, mn, p, stats)
    logging.debug("minimax visited %d nodes: move=%s value=%s",
                  stats['nodes'], result.move, result.value.name)
    return result
