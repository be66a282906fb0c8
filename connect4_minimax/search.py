"""Depth-limited minimax over State successors."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from connect4_minimax.constants import DIMX
from connect4_minimax.engine import State

logger = logging.getLogger(__name__)


@dataclass
class NodeCounter:
    """Number of layer calls (search nodes) made with this counter."""

    count: int = 0

    def tick(self) -> None:
        self.count += 1

    def reset(self) -> None:
        self.count = 0


@dataclass(frozen=True)
class SearchResult:
    """
    A position paired with its backed-up minimax value.

    At the frontier `state` is the evaluated node itself; above it, `state`
    is the immediate successor chosen by the layer.
    """

    state: State
    value: int


def max_layer(state: State, depth: int, counter: NodeCounter) -> Optional[SearchResult]:
    """
    Pick the successor with the highest minimax value for Max.

    Columns are tried left to right and only a strictly better value replaces
    the current best, so the leftmost column wins ties. Returns None only if
    no column accepts a piece.
    """
    counter.tick()

    if depth == 0 or state.is_terminal():
        return SearchResult(state, state.utility())

    best: Optional[SearchResult] = None
    for x in range(DIMX):
        s = state.successor(x, True)
        if s is None:
            continue
        reply = min_layer(s, depth - 1, counter)
        if reply is None:
            continue
        if best is None or reply.value > best.value:
            best = SearchResult(s, reply.value)
    return best


def min_layer(state: State, depth: int, counter: NodeCounter) -> Optional[SearchResult]:
    """Mirror of max_layer: lowest value for Min, leftmost column on ties."""
    counter.tick()

    if depth == 0 or state.is_terminal():
        return SearchResult(state, state.utility())

    best: Optional[SearchResult] = None
    for x in range(DIMX):
        s = state.successor(x, False)
        if s is None:
            continue
        reply = max_layer(s, depth - 1, counter)
        if reply is None:
            continue
        if best is None or reply.value < best.value:
            best = SearchResult(s, reply.value)
    return best


class MinimaxSearch:
    """
    Entry point for choosing a move with plain minimax.

    `counter` accumulates across calls until the caller resets it, so a single
    counter shared by every turn of a game reports the whole game's effort.
    """

    def __init__(self, depth: int, counter: Optional[NodeCounter] = None) -> None:
        if depth < 0:
            raise ValueError("minimax depth must be >= 0")
        self.depth = depth
        self.counter = counter if counter is not None else NodeCounter()

    def best_successor(self, state: State, maximizing: bool) -> Optional[SearchResult]:
        """
        The successor to play and its backed-up value.

        Returns None when `state` is terminal: there is no move to make and
        the layers would only hand back the position itself.
        """
        if state.is_terminal():
            return None

        before = self.counter.count
        layer = max_layer if maximizing else min_layer
        result = layer(state, self.depth, self.counter)
        if result is not None and result.state is state:
            # depth == 0: the layer valued the root instead of choosing a move.
            return None

        logger.debug(
            "minimax side=%s depth=%d value=%s nodes=%d",
            "max" if maximizing else "min",
            self.depth,
            None if result is None else result.value,
            self.counter.count - before,
        )
        return result

    def column_values(self, state: State, maximizing: bool) -> Dict[int, int]:
        """Backed-up value of every legal column; does not touch `self.counter`."""
        if self.depth < 1:
            raise ValueError("column values need depth >= 1")

        scratch = NodeCounter()
        reply_layer = min_layer if maximizing else max_layer
        values: Dict[int, int] = {}
        for x in range(DIMX):
            s = state.successor(x, maximizing)
            if s is None:
                continue
            reply = reply_layer(s, self.depth - 1, scratch)
            if reply is not None:
                values[x] = reply.value
        return values
