"""Random baseline agent."""

from __future__ import annotations

import random
from typing import Optional

from connect4_minimax.agents.base import Agent, check_side
from connect4_minimax.constants import Cell
from connect4_minimax.engine import State


class RandomAgent(Agent):
    def __init__(self, name: str, side: Cell = Cell.MAX, seed: Optional[int] = None) -> None:
        self.name = name
        self.side = check_side(side)
        self.rng = random.Random(seed)

    def select_successor(self, s: State) -> State:
        legal = s.legal_columns()
        if not legal:
            raise ValueError("no legal moves available")
        col = self.rng.choice(legal)
        nxt = s.successor(col, self.is_max)
        assert nxt is not None
        return nxt
