"""Connect-4 minimax package (board model + utility + search + CLI)."""

from connect4_minimax.constants import DIMX, DIMY, WINNER, Cell
from connect4_minimax.engine import BoardState, State
from connect4_minimax.search import MinimaxSearch, NodeCounter, SearchResult, max_layer, min_layer

__all__ = [
    "DIMX",
    "DIMY",
    "WINNER",
    "Cell",
    "State",
    "BoardState",
    "MinimaxSearch",
    "NodeCounter",
    "SearchResult",
    "max_layer",
    "min_layer",
]
