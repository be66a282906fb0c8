"""Alpha-beta opponent with its own weighted-window evaluation."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional

import numpy as np

from connect4_minimax.agents.base import Agent, check_side
from connect4_minimax.constants import CELLS, DIMX, DIMY, WINNER, Cell, cell_index
from connect4_minimax.engine import State
from connect4_minimax.evaluation import ALL_WINDOWS


class AlphaBetaAgent(Agent):
    """
    Opponent engine used against the core minimax player.

    It shares nothing with the core search but the State contract:
      - maximize for its own side, minimize for the other
      - prune with alpha/beta when a branch cannot change the final decision
      - stop at a depth/node budget and fall back to a heuristic evaluation
    Wins are read from the position's own utility (+/-WINNER).
    """

    def __init__(
        self,
        name: str,
        side: Cell = Cell.MAX,
        *,
        max_depth: int = 4,
        max_nodes: Optional[int] = None,
    ) -> None:
        if max_depth < 1:
            raise ValueError("alpha-beta depth must be >= 1")
        self.name = name
        self.side = check_side(side)
        self.max_depth = max_depth
        self.max_nodes = max_nodes
        self._nodes = 0

    def select_successor(self, s: State) -> State:
        legal = s.legal_columns()
        if not legal or s.is_terminal():
            raise ValueError("no legal moves available")

        best_score = -math.inf
        best_child: Optional[State] = None
        self._nodes = 0

        # Centre columns first: better cut-offs, and centre wins ties.
        for col in _ordered_moves(legal):
            child = s.successor(col, self.is_max)
            assert child is not None
            score = self._search(child, depth=1, alpha=-math.inf, beta=math.inf)
            if best_child is None or score > best_score:
                best_score = score
                best_child = child

            if self._budget_exhausted():
                break

        assert best_child is not None
        return best_child

    def _search(self, s: State, *, depth: int, alpha: float, beta: float) -> float:
        self._nodes += 1

        if self._budget_exhausted():
            return _evaluate(s, self.side)

        u = s.utility()
        if abs(u) >= WINNER:
            # Prefer quick wins and slow losses.
            won = (u > 0) == self.is_max
            return (1_000_000.0 - depth) if won else (-1_000_000.0 + depth)
        if s.is_full():
            return 0.0

        if depth >= self.max_depth:
            return _evaluate(s, self.side)

        legal = s.legal_columns()
        # Even depths below the root are our turn again.
        maximizing = depth % 2 == 0
        mover_is_max = self.is_max if maximizing else not self.is_max

        if maximizing:
            value = -math.inf
            for col in _ordered_moves(legal):
                child = s.successor(col, mover_is_max)
                assert child is not None
                value = max(value, self._search(child, depth=depth + 1, alpha=alpha, beta=beta))
                alpha = max(alpha, value)
                if alpha >= beta:
                    break  # beta cut-off
            return value

        value = math.inf
        for col in _ordered_moves(legal):
            child = s.successor(col, mover_is_max)
            assert child is not None
            value = min(value, self._search(child, depth=depth + 1, alpha=alpha, beta=beta))
            beta = min(beta, value)
            if alpha >= beta:
                break  # alpha cut-off
        return value

    def _budget_exhausted(self) -> bool:
        return self.max_nodes is not None and self._nodes >= self.max_nodes


def _ordered_moves(legal: List[int]) -> Iterable[int]:
    center = (DIMX - 1) / 2.0
    return sorted(legal, key=lambda c: abs(c - center))


def board_cells(s: State) -> np.ndarray:
    """Flat column-major int8 grid of Cell values read through the State contract."""
    cells = np.zeros((CELLS,), dtype=np.int8)
    for c in range(DIMX):
        for r in range(s.column_height(c)):
            cells[cell_index(c, r)] = int(s.piece_at(c, r))
    return cells


# Window weight by piece count; a full window is a win and never reaches here.
_WEIGHTS = np.array([0, 1, 5, 25, 0], dtype=np.int64)
_CENTER = slice(cell_index(DIMX // 2, 0), cell_index(DIMX // 2, 0) + DIMY)


def _evaluate(s: State, side: Cell) -> float:
    """
    Heuristic score from `side`'s point of view.

    - Windows containing both sides are neutral (blocked).
    - Windows with only `side`'s pieces are positive, weighted by count.
    - Windows with only opponent pieces are negative.
    """
    cells = board_cells(s)
    root = int(side)

    # Small center-column bias: strong lines tend to go through the middle.
    center = cells[_CENTER]
    score = 2.0 * (int(np.sum(center == root)) - int(np.sum(center == -root)))

    windows = cells[ALL_WINDOWS]
    ours = np.count_nonzero(windows == root, axis=1)
    theirs = np.count_nonzero(windows == -root, axis=1)
    score += int(_WEIGHTS[ours][theirs == 0].sum())
    score -= int(_WEIGHTS[theirs][ours == 0].sum())
    return score
