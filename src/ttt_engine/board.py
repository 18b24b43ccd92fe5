"""
Board representation, occupancy masks and move application.
Teaching notes:
- The board is a list of 9 ints: 0 empty, 1 MAX (X), -1 MIN (O).
- Each player also gets a 9-bit occupancy mask; masks are a cached view of
  the board and must always agree with it.
- apply_move never mutates its inputs, so sibling branches of a search never
  see each other's moves.
"""
from __future__ import annotations

from enum import IntEnum
from typing import List, Sequence, Tuple, Union

from .patterns import BOARD_SIZE, FULL_MASK

EMPTY = 0
MAX = 1
MIN = -1

CELL_VALUES = (EMPTY, MAX, MIN)

Mask = Union[int, str]


class BoardError(ValueError):
    """Malformed board, mask or player passed across the public boundary."""


class Player(IntEnum):
    MAX = MAX
    MIN = MIN

    @property
    def opponent(self) -> "Player":
        return Player.MIN if self is Player.MAX else Player.MAX

    @property
    def symbol(self) -> str:
        return "X" if self is Player.MAX else "O"


class Outcome(IntEnum):
    """Game value. DRAW also stands for "no winner yet"; pair it with an
    explicit ended flag to tell the two apart."""

    MAX_WINS = MAX
    DRAW = EMPTY
    MIN_WINS = MIN


def validate_board(board: Sequence[int]) -> List[int]:
    if len(board) != BOARD_SIZE:
        raise BoardError(f"Board must have {BOARD_SIZE} cells, got {len(board)}")
    for i, v in enumerate(board):
        if v not in CELL_VALUES or isinstance(v, bool):
            raise BoardError(f"Invalid value {v!r} at cell {i}; expected one of -1, 0, 1")
    return [int(v) for v in board]


def validate_player(player) -> Player:
    try:
        return Player(player)
    except ValueError:
        raise BoardError(f"Invalid player {player!r}; expected 1 (MAX) or -1 (MIN)") from None


def parse_mask(text: str) -> int:
    """Parse a 9-char string of 0/1 where character i is cell i."""
    if len(text) != BOARD_SIZE or any(c not in "01" for c in text):
        raise BoardError(f"Invalid mask string {text!r}; must be {BOARD_SIZE} chars of 0/1")
    return sum(1 << i for i, c in enumerate(text) if c == "1")


def format_mask(mask: int) -> str:
    return "".join("1" if mask & (1 << i) else "0" for i in range(BOARD_SIZE))


def coerce_mask(mask: Mask) -> int:
    if isinstance(mask, str):
        return parse_mask(mask)
    if isinstance(mask, bool) or not isinstance(mask, int):
        raise BoardError(f"Mask must be an int or a 0/1 string, got {type(mask).__name__}")
    if mask < 0 or mask > FULL_MASK:
        raise BoardError(f"Mask {mask} is outside the 9-bit range")
    return mask


def masks_from_board(board: Sequence[int]) -> Tuple[int, int]:
    max_mask = 0
    min_mask = 0
    for i, v in enumerate(board):
        if v == MAX:
            max_mask |= 1 << i
        elif v == MIN:
            min_mask |= 1 << i
    return max_mask, min_mask


def validate_position(board: Sequence[int], max_mask: Mask, min_mask: Mask) -> Tuple[List[int], int, int]:
    """Check a board and its masks at the boundary; returns normalized copies."""
    b = validate_board(board)
    mx = coerce_mask(max_mask)
    mn = coerce_mask(min_mask)
    if mx & mn:
        raise BoardError(f"Masks overlap on cells {format_mask(mx & mn)}")
    if (mx, mn) != masks_from_board(b):
        raise BoardError(
            f"Masks {format_mask(mx)}/{format_mask(mn)} disagree with board {format_board(b)}"
        )
    return b, mx, mn


def occupied_count(board: Sequence[int]) -> int:
    return sum(1 for v in board if v != EMPTY)


def empty_cells(board: Sequence[int]) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def apply_move(board: Sequence[int], index: int, max_mask: int, min_mask: int,
               player: int) -> Tuple[List[int], int, int]:
    new_board = list(board)
    new_board[index] = int(player)
    if player == MAX:
        return new_board, max_mask | (1 << index), min_mask
    return new_board, max_mask, min_mask | (1 << index)


def checked_apply_move(board: Sequence[int], index: int, max_mask: Mask, min_mask: Mask,
                       player: int) -> Tuple[List[int], int, int]:
    b, mx, mn = validate_position(board, max_mask, min_mask)
    p = validate_player(player)
    if not isinstance(index, int) or not 0 <= index < BOARD_SIZE:
        raise BoardError(f"Move index {index!r} out of range 0..{BOARD_SIZE - 1}")
    if b[index] != EMPTY:
        raise BoardError(f"Cell {index} is already occupied")
    return apply_move(b, index, mx, mn, p)


_SYMBOLS = {"X": MAX, "O": MIN, ".": EMPTY, "-": EMPTY, "0": EMPTY}


def parse_board(text: str) -> List[int]:
    """Parse a 9-char board string of X, O and . (also - or 0 for empty)."""
    raw = text.strip().upper()
    if len(raw) != BOARD_SIZE or any(c not in _SYMBOLS for c in raw):
        raise BoardError(f"Invalid board string {text!r}; must be {BOARD_SIZE} chars of X/O/.")
    return [_SYMBOLS[c] for c in raw]


def format_board(board: Sequence[int]) -> str:
    return "".join("X" if v == MAX else "O" if v == MIN else "." for v in board)
