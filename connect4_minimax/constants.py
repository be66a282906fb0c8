"""Fixed geometry, scores and the cell marker shared by the engine and evaluator."""

from __future__ import annotations

import enum

# --- Board Dimensions ---
DIMX = 7  # columns, also the maximum number of successors
DIMY = 6  # pieces that fit in a column
CELLS = DIMX * DIMY
CONNECT = 4

# --- Scoring ---
# Utility of a decided position: +WINNER when Max has four in a row, -WINNER for Min.
# No sum of window counts reaches it, so |u| == WINNER always means "already won".
WINNER = 1000


class Cell(enum.IntEnum):
    EMPTY = 0
    MAX = 1
    MIN = -1

    def opponent(self) -> "Cell":
        if self is Cell.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return Cell(-int(self))


def cell_index(col: int, row: int) -> int:
    """Flat, column-major index of (col, row). Row 0 is the bottom."""
    return col * DIMY + row
