"""
Static utility of a Connect-4 grid.

The score counts the length-4 "windows" each side can still complete:

    U = #windows without a Min piece - #windows without a Max piece

On an empty board both sides can still make all 69 windows, so U = 69 - 69 = 0.
A window that is already full of one side's pieces decides the game and the
utility collapses to +WINNER (Max) or -WINNER (Min).

Orientations are scanned in a fixed order (horizontal, vertical, diagonal
left, diagonal right). Within each orientation the windows are visited
column-outer, row-inner, and the first completed window decides that
orientation. The first orientation that is decided decides the whole board.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import numpy as np

from connect4_minimax.constants import CELLS, CONNECT, DIMX, DIMY, WINNER, Cell, cell_index

Coord = Tuple[int, int]  # (col, row)


def _window_table(x_range: range, y_range: range, dx: int, dy: int) -> np.ndarray:
    rows: List[List[int]] = []
    for x in x_range:
        for y in y_range:
            rows.append([cell_index(x + dx * i, y + dy * i) for i in range(CONNECT)])
    return np.array(rows, dtype=np.intp)


# name -> (n_windows, CONNECT) table of flat grid indices, in scan order.
ORIENTATIONS: Dict[str, np.ndarray] = {
    "horizontal": _window_table(range(0, DIMX - CONNECT + 1), range(0, DIMY), 1, 0),
    "vertical": _window_table(range(0, DIMX), range(0, DIMY - CONNECT + 1), 0, 1),
    "diagonal_left": _window_table(range(CONNECT - 1, DIMX), range(0, DIMY - CONNECT + 1), -1, 1),
    "diagonal_right": _window_table(range(0, DIMX - CONNECT + 1), range(0, DIMY - CONNECT + 1), 1, 1),
}

WINDOW_COUNT = sum(len(t) for t in ORIENTATIONS.values())

ALL_WINDOWS = np.concatenate(list(ORIENTATIONS.values()))

# flat cell index -> every window (any orientation) that covers the cell
WINDOWS_THROUGH: Tuple[np.ndarray, ...] = tuple(
    ALL_WINDOWS[(ALL_WINDOWS == i).any(axis=1)] for i in range(CELLS)
)


def _first_complete(windows: np.ndarray) -> Tuple[int, Optional[Cell]]:
    """Index and owner of the first window filled by a single side, or (-1, None)."""
    has_max = (windows == Cell.MAX).any(axis=1)
    has_min = (windows == Cell.MIN).any(axis=1)
    full = (windows != Cell.EMPTY).all(axis=1)

    min_wins = full & ~has_max
    max_wins = full & ~has_min
    decided = np.flatnonzero(min_wins | max_wins)
    if decided.size == 0:
        return -1, None
    i = int(decided[0])
    return i, (Cell.MIN if min_wins[i] else Cell.MAX)


def score_orientation(grid: np.ndarray, table: np.ndarray) -> int:
    """Net open-window count for one orientation, or +/-WINNER if it is decided."""
    windows = grid[table]
    _, owner = _first_complete(windows)
    if owner is Cell.MIN:
        return -WINNER
    if owner is Cell.MAX:
        return WINNER

    # A window with no pieces at all is open for both sides and counts twice.
    open_for_max = int(np.count_nonzero(~(windows == Cell.MIN).any(axis=1)))
    open_for_min = int(np.count_nonzero(~(windows == Cell.MAX).any(axis=1)))
    return open_for_max - open_for_min


def orientation_scores(grid: np.ndarray) -> Dict[str, int]:
    grid = np.asarray(grid).reshape(-1)
    return {name: score_orientation(grid, table) for name, table in ORIENTATIONS.items()}


def evaluate_grid(grid: np.ndarray) -> int:
    scores = orientation_scores(grid)
    for value in scores.values():
        if abs(value) == WINNER:
            return value
    return sum(scores.values())


def drop_utility(grid: np.ndarray, index: int, mover: Cell, utility: int) -> int:
    """
    Utility after `mover` fills the empty cell `index` of `grid`.

    `utility` must be the undecided score of `grid` (|utility| < WINNER), so
    no window is complete yet. Only windows through the new piece change:
    those without a `mover` piece stop being open for the other side, and
    any of them already holding three `mover` pieces is now a win. A single
    drop can only complete windows for the mover, so the orientation order
    cannot change the sign.
    """
    windows = grid[WINDOWS_THROUGH[index]]
    own = np.count_nonzero(windows == mover, axis=1)
    if (own == CONNECT - 1).any():
        return WINNER * int(mover)

    closed = int(np.count_nonzero(own == 0))
    return utility + closed * int(mover)


def winning_window(grid: np.ndarray) -> Optional[Tuple[Cell, List[Coord]]]:
    """
    Side and cells of the window that decides the board, following the same
    precedence as evaluate_grid. None if nobody has four in a row.
    """
    grid = np.asarray(grid).reshape(-1)
    for table in ORIENTATIONS.values():
        i, owner = _first_complete(grid[table])
        if owner is not None:
            cells = [(int(idx) // DIMY, int(idx) % DIMY) for idx in table[i]]
            return owner, cells
    return None
