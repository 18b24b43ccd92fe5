"""
Win pattern catalog for the 3x3 board.
Teaching notes:
- Cell i maps to bit i, so a player's cells fit in a 9-bit int.
- A line is complete when (pattern & mask) == pattern.
- Order matters for determinism: rows, then columns, then the two diagonals.
"""
from typing import List, Tuple

BOARD_SIZE = 9

WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)


def cells_to_mask(cells) -> int:
    mask = 0
    for i in cells:
        mask |= 1 << i
    return mask


def pattern_cells(mask: int) -> List[int]:
    return [i for i in range(BOARD_SIZE) if mask & (1 << i)]


WIN_PATTERNS: Tuple[int, ...] = tuple(cells_to_mask(line) for line in WIN_LINES)

FULL_MASK = (1 << BOARD_SIZE) - 1
