from typing import List

import pytest
try:
    from hypothesis import HealthCheck, assume, given, settings, strategies as st  # type: ignore
except ModuleNotFoundError:  # pragma: no cover - test infra
    pytest.skip("Hypothesis not installed", allow_module_level=True)

from ttt_engine.board import EMPTY, Outcome, Player, apply_move, masks_from_board
from ttt_engine.evaluator import game_status
from ttt_engine.search import choose_move
from ttt_engine.tactics import blocking_moves, winning_moves


def _play_out(order: List[int], plies: int, first: Player):
    """Replay `plies` moves from `order`, alternating from `first`."""
    board = [EMPTY] * 9
    mx = mn = 0
    player = first
    for idx in order[:plies]:
        board, mx, mn = apply_move(board, idx, mx, mn, player)
        player = player.opponent
        if game_status(board, mx, mn).ended:
            break
    return board, mx, mn, player


positions = st.tuples(
    st.permutations(list(range(9))),
    st.integers(min_value=2, max_value=8),
    st.sampled_from([Player.MAX, Player.MIN]),
)


@settings(max_examples=60, deadline=None, suppress_health_check=[HealthCheck.filter_too_much])
@given(positions)
def test_chosen_move_is_legal_and_consistent(pos):
    board, mx, mn, player = _play_out(*pos)
    assume(not game_status(board, mx, mn).ended)
    res = choose_move(board, mx, mn, player)
    assert res.move is not None and board[res.move] == EMPTY
    # the reported value is the value of the position the move leads to
    child, cmx, cmn = apply_move(board, res.move, mx, mn, player)
    assert choose_move(child, cmx, cmn, player.opponent).value == res.value


@settings(max_examples=60, deadline=None, suppress_health_check=[HealthCheck.filter_too_much])
@given(positions)
def test_immediate_win_is_never_missed(pos):
    board, mx, mn, player = _play_out(*pos)
    assume(not game_status(board, mx, mn).ended)
    wins = winning_moves(board, player)
    assume(wins)
    res = choose_move(board, mx, mn, player)
    assert res.value == Outcome(int(player))
    if len(wins) == 1 and not _has_slower_win(board, mx, mn, player, wins[0]):
        assert res.move == wins[0]


def _has_slower_win(board, mx, mn, player, win):
    for idx in range(9):
        if idx == win or board[idx] != EMPTY:
            continue
        child, cmx, cmn = apply_move(board, idx, mx, mn, player)
        if choose_move(child, cmx, cmn, player.opponent).value == Outcome(int(player)):
            return True
    return False


@settings(max_examples=60, deadline=None, suppress_health_check=[HealthCheck.filter_too_much])
@given(positions)
def test_single_threat_is_blocked_unless_lost(pos):
    board, mx, mn, player = _play_out(*pos)
    assume(not game_status(board, mx, mn).ended)
    assume(not winning_moves(board, player))
    blocks = blocking_moves(board, player)
    assume(len(blocks) == 1)
    res = choose_move(board, mx, mn, player)
    if res.value != Outcome(int(player.opponent)):
        assert res.move == blocks[0]


@settings(max_examples=100, deadline=None)
@given(st.lists(st.sampled_from([0, 1, -1]), min_size=9, max_size=9))
def test_masks_stay_in_sync_with_board(board: List[int]):
    mx, mn = masks_from_board(board)
    assert mx & mn == 0
    for i, v in enumerate(board):
        assert bool(mx >> i & 1) == (v == 1)
        assert bool(mn >> i & 1) == (v == -1)
