"""Environment-driven defaults for the CLI and self-play runs.

Environment-first: TTT_SEED, TTT_LOG_LEVEL and TTT_LOG_DIR are read when the
config is loaded; command-line flags override them.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class EngineConfig:
    seed: int | None = None
    log_level: int = logging.INFO
    log_dir: Path = Path("runs")


def _parse_seed(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"TTT_SEED must be an integer, got {raw!r}") from None


def _parse_level(raw: str | None) -> int:
    if not raw:
        return logging.INFO
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown TTT_LOG_LEVEL {raw!r}")
    return level


def load_config() -> EngineConfig:
    log_dir = os.getenv("TTT_LOG_DIR")
    return EngineConfig(
        seed=_parse_seed(os.getenv("TTT_SEED")),
        log_level=_parse_level(os.getenv("TTT_LOG_LEVEL")),
        log_dir=Path(log_dir) if log_dir else Path("runs"),
    )
