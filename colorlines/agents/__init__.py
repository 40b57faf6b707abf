"""
Agent implementations for Color Lines.

This module provides the heuristic and Monte Carlo move evaluators together
with simple benchmark bots for evaluation and comparison purposes.
"""

from .benchmark_bot_base import BenchmarkBotBase, resolve_agent
from .bot_utils import Move

# Evaluators
from .heuristic_bot import HeuristicBot, ScoredMove
from .line_extension_bot import LineExtensionBot
from .monte_carlo_bot import MonteCarloBot

# Baseline bots
from .first_move_bot import FirstMoveBot
from .random_bot import RandomBot

__all__ = [
    'BenchmarkBotBase',
    'resolve_agent',
    'Move',
    'HeuristicBot',
    'ScoredMove',
    'LineExtensionBot',
    'MonteCarloBot',
    'FirstMoveBot',
    'RandomBot',
]
