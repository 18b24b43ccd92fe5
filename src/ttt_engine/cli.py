from __future__ import annotations

import argparse
import logging
import random
from collections import Counter
from pathlib import Path
from typing import Optional

from .board import EMPTY, BoardError, Player, format_board, masks_from_board, parse_board
from .config import load_config
from .evaluator import game_status
from .search import choose_move
from .session import Game
from .tactics import blocking_moves, gives_opponent_immediate_win, winning_moves
from .tracking import log_metrics, log_params, maybe_mlflow_run

_PLAYERS = {"max": Player.MAX, "x": Player.MAX, "min": Player.MIN, "o": Player.MIN}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe minimax engine CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--seed", type=int, default=None,
                   help="Seed for the random second-move reply (default: $TTT_SEED)")

    board_help = "Board string of X, O and . in row-major order, e.g. X.O.XO..."
    to_move_help = "Side to move: max/x or min/o (default: inferred from mark counts)"

    p_move = sub.add_parser("move", help="Choose a move for the side to move")
    p_move.add_argument("--board", help=board_help + " (omit with --stdin)")
    p_move.add_argument("--to-move", choices=sorted(_PLAYERS), help=to_move_help)
    p_move.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )

    p_status = sub.add_parser("status", help="Report whether the game has ended and its outcome")
    p_status.add_argument("--board", required=True, help=board_help)

    p_tac = sub.add_parser("tactics", help="List immediate wins and forced blocks")
    p_tac.add_argument("--board", required=True, help=board_help)
    p_tac.add_argument("--to-move", choices=sorted(_PLAYERS), help=to_move_help)

    p_self = sub.add_parser("selfplay", help="Play engine-vs-engine games and report outcomes")
    p_self.add_argument("--games", type=int, default=10, help="Number of games (default: 10)")
    p_self.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_self.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for tracking logs (default: $TTT_LOG_DIR or runs)",
    )
    return p


def infer_to_move(board: list[int]) -> Player:
    x = board.count(Player.MAX)
    o = board.count(Player.MIN)
    return Player.MIN if x > o else Player.MAX


def _resolve_to_move(board: list[int], raw: Optional[str]) -> Player:
    return _PLAYERS[raw] if raw else infer_to_move(board)


def _read_board(raw: Optional[str]) -> Optional[list[int]]:
    try:
        return parse_board(raw or "")
    except BoardError as e:
        logging.error("%s", e)
        return None


def _cmd_move(ns: argparse.Namespace, rng: random.Random) -> int:
    import sys as _sys

    if ns.stdin:
        import csv as _csv
        w = _csv.writer(_sys.stdout)
        w.writerow(["board", "to_move", "move", "value"])
        for line in _sys.stdin:
            raw = line.strip()
            if not raw:
                continue
            try:
                board = parse_board(raw)
            except BoardError:
                continue
            player = _resolve_to_move(board, ns.to_move)
            mx, mn = masks_from_board(board)
            res = choose_move(board, mx, mn, player, rng=rng)
            w.writerow([
                format_board(board),
                player.name,
                "" if res.move is None else res.move,
                res.value.name,
            ])
        return 0

    board = _read_board(ns.board)
    if board is None:
        return 2
    player = _resolve_to_move(board, ns.to_move)
    mx, mn = masks_from_board(board)
    res = choose_move(board, mx, mn, player, rng=rng)
    logging.info("to_move=%s move=%s value=%s", player.name, res.move, res.value.name)
    return 0


def _cmd_status(ns: argparse.Namespace) -> int:
    board = _read_board(ns.board)
    if board is None:
        return 2
    mx, mn = masks_from_board(board)
    ended, outcome = game_status(board, mx, mn)
    logging.info("ended=%s outcome=%s", ended, outcome.name)
    return 0


def _cmd_tactics(ns: argparse.Namespace) -> int:
    board = _read_board(ns.board)
    if board is None:
        return 2
    player = _resolve_to_move(board, ns.to_move)
    unsafe = [i for i, v in enumerate(board) if v == EMPTY
              and gives_opponent_immediate_win(board, player, i)]
    logging.info(
        "to_move=%s wins=%s blocks=%s unsafe=%s",
        player.name,
        winning_moves(board, player),
        blocking_moves(board, player),
        unsafe,
    )
    return 0


def _cmd_selfplay(ns: argparse.Namespace, rng: random.Random, log_dir: Path) -> int:
    if ns.games < 1:
        logging.error("--games must be at least 1, got %d", ns.games)
        return 2
    counts: Counter = Counter()
    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="selfplay", log_dir=log_dir) as tracked:
        if tracked:
            log_params({"games": ns.games, "seed": ns.seed})
        for n in range(ns.games):
            game = Game.new(rng=rng)
            while not game.is_over:
                game.computer_move(rng=rng)
            counts[game.status.outcome.name] += 1
            logging.debug("game %d: %s in %d moves\n%s",
                          n, game.status.outcome.name, len(game.history), game.render())
        logging.info(
            "games=%d max_wins=%d min_wins=%d draws=%d",
            ns.games, counts["MAX_WINS"], counts["MIN_WINS"], counts["DRAW"],
        )
        if tracked:
            log_metrics({
                "max_win_rate": counts["MAX_WINS"] / ns.games,
                "min_win_rate": counts["MIN_WINS"] / ns.games,
                "draw_rate": counts["DRAW"] / ns.games,
            })
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    try:
        cfg = load_config()
    except ValueError as e:
        logging.basicConfig(format="[%(levelname)s] %(message)s")
        logging.error("%s", e)
        return 2
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else cfg.log_level,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("ttt-engine"))
        except Exception:
            print("unknown")
        return 0

    if ns.seed is None:
        ns.seed = cfg.seed
    rng = random.Random(ns.seed)

    if ns.cmd == "move":
        if not ns.stdin and ns.board is None:
            logging.error("move needs --board or --stdin")
            return 2
        return _cmd_move(ns, rng)
    if ns.cmd == "status":
        return _cmd_status(ns)
    if ns.cmd == "tactics":
        return _cmd_tactics(ns)
    if ns.cmd == "selfplay":
        return _cmd_selfplay(ns, rng, ns.log_dir or cfg.log_dir)

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
