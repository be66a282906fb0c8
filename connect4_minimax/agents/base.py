"""Abstract base class for Connect-4 agents."""

from __future__ import annotations

import abc

from connect4_minimax.constants import Cell
from connect4_minimax.engine import State


class Agent(abc.ABC):
    """A player: given the position before its turn, returns the position after it."""

    name: str
    side: Cell

    @abc.abstractmethod
    def select_successor(self, s: State) -> State:
        raise NotImplementedError

    @property
    def is_max(self) -> bool:
        return self.side is Cell.MAX


def check_side(side: Cell) -> Cell:
    side = Cell(side)
    if side is Cell.EMPTY:
        raise ValueError("agent side must be Cell.MAX or Cell.MIN")
    return side
