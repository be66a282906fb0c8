"""Human-in-the-loop agent that defers input handling to a CLI prompt function."""

from __future__ import annotations

from typing import Callable

from connect4_minimax.agents.base import Agent, check_side
from connect4_minimax.constants import Cell
from connect4_minimax.engine import State

PromptFn = Callable[[State, str], int]


class HumanAgent(Agent):
    def __init__(self, name: str, prompt_fn: PromptFn, side: Cell = Cell.MAX) -> None:
        self.name = name
        self.side = check_side(side)
        self.prompt_fn = prompt_fn

    def select_successor(self, s: State) -> State:
        col = self.prompt_fn(s, self.name)
        nxt = s.successor(col, self.is_max)
        if nxt is None:
            raise ValueError(f"illegal move: column {col} is full")
        return nxt
