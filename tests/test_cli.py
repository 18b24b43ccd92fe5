from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

from ttt_engine.cli import infer_to_move, main
from ttt_engine.board import Player, parse_board

SRC = Path(__file__).resolve().parents[1] / "src"


def _run_cli(args: list[str], cwd: Path, stdin: str | None = None) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    env.pop("TTT_SEED", None)
    env.pop("TTT_LOG_LEVEL", None)
    exe = [sys.executable, "-m", "ttt_engine.cli"]
    return subprocess.run(exe + args, cwd=cwd, capture_output=True, text=True, input=stdin, env=env)


def test_cli_move_status_and_tactics(tmp_path: Path):
    r = _run_cli(["move", "--board", "X.O.XO...", "--to-move", "min"], cwd=tmp_path)
    assert r.returncode == 0
    s = r.stdout + r.stderr
    assert "move=8" in s and "value=MIN_WINS" in s

    r = _run_cli(["move", "--board", "........."], cwd=tmp_path)
    assert r.returncode == 0
    assert "move=4" in r.stdout + r.stderr

    r = _run_cli(["status", "--board", "XXXOO...."], cwd=tmp_path)
    assert r.returncode == 0
    assert "ended=True outcome=MAX_WINS" in r.stdout + r.stderr

    r = _run_cli(["tactics", "--board", "X.O.XO...", "--to-move", "o"], cwd=tmp_path)
    assert r.returncode == 0
    s = r.stdout + r.stderr
    assert "wins=[8]" in s and "blocks=[8]" in s


def test_cli_move_stdin_streams_csv(tmp_path: Path):
    boards = "X.O.XO...\n\nnot-a-board\nXXXOO....\n"
    r = _run_cli(["move", "--stdin", "--to-move", "min"], cwd=tmp_path, stdin=boards)
    assert r.returncode == 0
    lines = r.stdout.strip().splitlines()
    assert lines[0] == "board,to_move,move,value"
    assert lines[1] == "X.O.XO...,MIN,8,MIN_WINS"
    assert lines[2] == "XXXOO....,MIN,,MAX_WINS"
    assert len(lines) == 3


def test_cli_selfplay(tmp_path: Path):
    r = _run_cli(["--seed", "3", "selfplay", "--games", "2"], cwd=tmp_path)
    assert r.returncode == 0
    assert "games=2" in r.stdout + r.stderr


@pytest.mark.parametrize("bad", ["abc", "XO", "X.O.XO..Z", "X.O.XO...."])
def test_cli_error_invalid_boards(tmp_path: Path, bad: str):
    r = _run_cli(["move", "--board", bad], cwd=tmp_path)
    assert r.returncode == 2
    r = _run_cli(["status", "--board", bad], cwd=tmp_path)
    assert r.returncode == 2


def test_main_without_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage:" in capsys.readouterr().out


def test_main_rejects_bad_game_count():
    assert main(["selfplay", "--games", "0"]) == 2


def test_main_rejects_bad_seed_env(monkeypatch):
    monkeypatch.setenv("TTT_SEED", "soon")
    assert main(["move", "--board", "........."]) == 2


def test_infer_to_move():
    assert infer_to_move(parse_board(".........")) is Player.MAX
    assert infer_to_move(parse_board("X........")) is Player.MIN
    assert infer_to_move(parse_board("O........")) is Player.MAX
