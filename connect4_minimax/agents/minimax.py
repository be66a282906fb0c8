"""Agent backed by the plain minimax search with the window-count utility."""

from __future__ import annotations

from typing import Optional

from connect4_minimax.agents.base import Agent, check_side
from connect4_minimax.constants import Cell
from connect4_minimax.engine import State
from connect4_minimax.search import MinimaxSearch, NodeCounter


class MinimaxAgent(Agent):
    def __init__(
        self,
        name: str,
        side: Cell = Cell.MIN,
        *,
        depth: int = 9,
        counter: Optional[NodeCounter] = None,
    ) -> None:
        if depth < 1:
            raise ValueError("minimax depth must be >= 1")
        self.name = name
        self.side = check_side(side)
        self.search = MinimaxSearch(depth, counter)
        self.last_value: Optional[int] = None

    @property
    def nodes(self) -> int:
        return self.search.counter.count

    def select_successor(self, s: State) -> State:
        result = self.search.best_successor(s, self.is_max)
        if result is None:
            raise ValueError("no legal moves available")
        self.last_value = result.value
        return result.state
