"""Match driver: Max and Min agents alternate until the position is terminal."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from connect4_minimax.agents.base import Agent
from connect4_minimax.constants import DIMX, DIMY, WINNER, Cell
from connect4_minimax.engine import BoardState, State

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 9


class IllegalMoveError(ValueError):
    """An agent returned a position that is not one legal move after the previous one."""


@dataclass(frozen=True)
class MatchConfig:
    limit_min: int = DEFAULT_LIMIT
    limit_max: int = DEFAULT_LIMIT

    def validate(self) -> None:
        if self.limit_min < 1 or self.limit_max < 1:
            raise ValueError("search depth limits must be >= 1")


@dataclass(frozen=True)
class MatchResult:
    state: BoardState
    moves: Tuple[int, ...]

    @property
    def plies(self) -> int:
        return len(self.moves)

    @property
    def winner(self) -> Optional[Cell]:
        u = self.state.utility()
        if u >= WINNER:
            return Cell.MAX
        if u <= -WINNER:
            return Cell.MIN
        return None


StateHook = Callable[[Agent, BoardState], None]


def played_column(before: State, after: State, side: Cell) -> int:
    """
    Column in which `side` dropped a piece to get from `before` to `after`.

    Every cell of the board is compared, so a piece added anywhere but the
    top of a column is caught. Raises IllegalMoveError unless exactly one
    cell changed, from empty to `side`, on top of its column, and the
    reported heights agree.
    """
    changed: List[Tuple[int, int]] = [
        (x, y)
        for x in range(DIMX)
        for y in range(DIMY)
        if before.piece_at(x, y) != after.piece_at(x, y)
    ]
    if len(changed) != 1:
        raise IllegalMoveError(f"expected one new piece, found {len(changed)} changed cells")

    x, y = changed[0]
    if before.piece_at(x, y) != Cell.EMPTY:
        raise IllegalMoveError(f"cell ({x}, {y}) was overwritten")
    if after.piece_at(x, y) != side:
        raise IllegalMoveError(f"column {x} received the wrong piece")
    if y != before.column_height(x):
        raise IllegalMoveError(f"piece at ({x}, {y}) is not on top of column {x}")
    for c in range(DIMX):
        expected = before.column_height(c) + (1 if c == x else 0)
        if after.column_height(c) != expected:
            raise IllegalMoveError(f"column {c} reports height {after.column_height(c)}, expected {expected}")
    return x


def _turn(agent: Agent, s: BoardState, moves: List[int], on_state: Optional[StateHook]) -> BoardState:
    nxt = agent.select_successor(s)
    col = played_column(s, nxt, agent.side)
    # Rebase whatever the agent handed back into a plain board.
    s = BoardState.from_state(nxt)
    moves.append(col)
    logger.debug("%s played column %d, utility=%d", agent.name, col, s.utility())
    if on_state is not None:
        on_state(agent, s)
    return s


def play_match(
    max_agent: Agent,
    min_agent: Agent,
    *,
    start: Optional[BoardState] = None,
    on_state: Optional[StateHook] = None,
) -> MatchResult:
    """Max moves first; play stops as soon as a position is terminal."""
    if max_agent.side is not Cell.MAX or min_agent.side is not Cell.MIN:
        raise ValueError("max_agent must play Cell.MAX and min_agent Cell.MIN")

    s = start if start is not None else BoardState.empty()
    moves: List[int] = []

    while not s.is_terminal():
        s = _turn(max_agent, s, moves, on_state)
        if not s.is_terminal():
            s = _turn(min_agent, s, moves, on_state)

    result = MatchResult(state=s, moves=tuple(moves))
    logger.info("match over after %d plies, utility=%d", result.plies, s.utility())
    return result
