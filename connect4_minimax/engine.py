"""Board model for 7x6 Connect-4: cells, the flat grid and immutable states."""

from __future__ import annotations

import abc
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from connect4_minimax.constants import CELLS, DIMX, DIMY, WINNER, Cell, cell_index
from connect4_minimax.evaluation import drop_utility, evaluate_grid


def _check_column(col: int) -> None:
    if col < 0 or col >= DIMX:
        raise IndexError(f"column out of range: {col}")


def _check_row(row: int) -> None:
    if row < 0 or row >= DIMY:
        raise IndexError(f"row out of range: {row}")


def _checked_heights(grid: np.ndarray) -> Tuple[int, ...]:
    """Column heights of a flat grid; ValueError for unknown cells or floating pieces."""
    if not np.isin(grid, (Cell.EMPTY, Cell.MAX, Cell.MIN)).all():
        raise ValueError("grid holds values other than Cell members")
    occupied = grid.reshape(DIMX, DIMY) != Cell.EMPTY
    if (occupied[:, 1:] & ~occupied[:, :-1]).any():
        raise ValueError("piece above an empty cell")
    return tuple(int(h) for h in occupied.sum(axis=1))


class State(abc.ABC):
    """
    Query/successor contract shared by every position the search sees.

    The core search, the match driver and every agent only talk to positions
    through these methods, so an opponent engine may hand back any
    implementation it likes.
    """

    @abc.abstractmethod
    def piece_at(self, col: int, row: int) -> Cell:
        raise NotImplementedError

    @abc.abstractmethod
    def column_height(self, col: int) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    def utility(self) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    def successor(self, col: int, is_max: bool) -> Optional["State"]:
        raise NotImplementedError

    def is_full(self) -> bool:
        return all(self.column_height(c) == DIMY for c in range(DIMX))

    def is_terminal(self) -> bool:
        u = self.utility()
        return u >= WINNER or u <= -WINNER or self.is_full()

    def legal_columns(self) -> List[int]:
        return [c for c in range(DIMX) if self.column_height(c) < DIMY]


class BoardState(State):
    """
    Concrete Connect-4 position.

    grid: read-only int8 array of length CELLS, column-major, holding
          Cell values. Each state owns its array; successors copy it.
    utility: evaluated once when the state is built. Successors of an
             undecided position update the parent's score from the windows
             through the new piece instead of rescanning the board.
    """

    def __init__(self, grid: Optional[np.ndarray] = None) -> None:
        if grid is None:
            grid = np.zeros((CELLS,), dtype=np.int8)
        else:
            grid = np.array(grid, dtype=np.int8).reshape(CELLS)
        heights = _checked_heights(grid)
        self._init(grid, heights, evaluate_grid(grid))

    def _init(self, grid: np.ndarray, heights: Tuple[int, ...], utility: int) -> None:
        grid.flags.writeable = False
        self._grid = grid
        self._heights = heights
        self._utility = utility

    @classmethod
    def _make(cls, grid: np.ndarray, heights: Tuple[int, ...], utility: int) -> "BoardState":
        s = cls.__new__(cls)
        s._init(grid, heights, utility)
        return s

    @classmethod
    def empty(cls) -> "BoardState":
        return cls()

    @classmethod
    def from_state(cls, other: State) -> "BoardState":
        """Copy any State verbatim (pieces and cached utility)."""
        grid = np.zeros((CELLS,), dtype=np.int8)
        for x in range(DIMX):
            for y in range(DIMY):
                grid[cell_index(x, y)] = int(other.piece_at(x, y))
        return cls._make(grid, _checked_heights(grid), int(other.utility()))

    @classmethod
    def from_columns(cls, columns: Sequence[Iterable[Cell]]) -> "BoardState":
        """
        Build a position from bottom-up column contents.

        Missing columns are empty. Trailing EMPTY cells are allowed, a gap
        below a piece is not.
        """
        if len(columns) > DIMX:
            raise ValueError(f"at most {DIMX} columns, got {len(columns)}")

        grid = np.zeros((CELLS,), dtype=np.int8)
        for x, column in enumerate(columns):
            cells = [Cell(c) for c in column]
            if len(cells) > DIMY:
                raise ValueError(f"column {x} holds more than {DIMY} cells")
            for y, cell in enumerate(cells):
                grid[cell_index(x, y)] = int(cell)
        return cls(grid)

    @classmethod
    def from_moves(cls, columns: Iterable[int], first: Cell = Cell.MAX) -> "BoardState":
        """Drop pieces into the given columns, alternating sides from `first`."""
        s = cls()
        mover = first
        for col in columns:
            nxt = s.successor(col, mover is Cell.MAX)
            if nxt is None:
                raise ValueError(f"illegal move: column {col} is full")
            s = nxt
            mover = mover.opponent()
        return s

    @property
    def grid(self) -> np.ndarray:
        return self._grid

    def piece_at(self, col: int, row: int) -> Cell:
        _check_column(col)
        _check_row(row)
        return Cell(int(self._grid[cell_index(col, row)]))

    def column_height(self, col: int) -> int:
        _check_column(col)
        return self._heights[col]

    def is_full(self) -> bool:
        return all(h == DIMY for h in self._heights)

    def utility(self) -> int:
        return self._utility

    def successor(self, col: int, is_max: bool) -> Optional["BoardState"]:
        row = self.column_height(col)
        if row >= DIMY:
            return None
        mover = Cell.MAX if is_max else Cell.MIN
        index = cell_index(col, row)
        grid = self._grid.copy()
        grid[index] = mover
        heights = self._heights[:col] + (row + 1,) + self._heights[col + 1 :]

        if abs(self._utility) < WINNER:
            utility = drop_utility(self._grid, index, mover, self._utility)
        else:
            utility = evaluate_grid(grid)
        return BoardState._make(grid, heights, utility)

    def to_array(self) -> np.ndarray:
        """(DIMY, DIMX) copy indexed [row, col], row 0 at the bottom."""
        return self._grid.reshape(DIMX, DIMY).T.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return bool(np.array_equal(self._grid, other._grid))

    def __hash__(self) -> int:
        return hash(self._grid.tobytes())

    def __repr__(self) -> str:
        return f"BoardState(heights={list(self._heights)}, utility={self._utility})"

    def __str__(self) -> str:
        return render_state(self)


_SYMBOLS = {Cell.EMPTY: "   ", Cell.MAX: f"{'X':>3}", Cell.MIN: f"{'O':>3}"}


def render_state(s: State) -> str:
    """Rows top to bottom, three characters per cell, newline after each row."""
    lines: List[str] = []
    for y in range(DIMY - 1, -1, -1):
        lines.append("".join(_SYMBOLS[s.piece_at(x, y)] for x in range(DIMX)) + "\n")
    return "".join(lines)
