"""Agent implementations for Connect-4."""

from connect4_minimax.agents.alphabeta import AlphaBetaAgent
from connect4_minimax.agents.base import Agent
from connect4_minimax.agents.human import HumanAgent
from connect4_minimax.agents.minimax import MinimaxAgent
from connect4_minimax.agents.random_agent import RandomAgent

__all__ = ["Agent", "HumanAgent", "RandomAgent", "AlphaBetaAgent", "MinimaxAgent"]
