"""
RandomBot implementation for Color Lines benchmarking.

Selects random legal moves, providing a baseline for evaluating other agents'
performance.
"""

from typing import Any

from colorlines.agents.benchmark_bot_base import BenchmarkBotBase
from colorlines.agents.bot_utils import board_digest, find_all_moves
from colorlines.game.board import Board
from colorlines.game.rng import SeededRng


class RandomBot(BenchmarkBotBase):
    """
    Bot that picks uniformly among all legal moves.

    The stream is re-seeded from the board contents on every call, so the
    same board always yields the same move for a given bot seed.
    """

    name = "RandomBot"

    def __init__(self, seed: str | int = 42):
        """
        Initialize RandomBot with a seed.

        Args:
            seed: Seed mixed with the board digest for reproducible behavior
        """
        self.seed = seed

    def select_action(self, snapshot: dict[str, Any]) -> dict[str, list[int]] | None:
        board = Board.from_snapshot(snapshot)
        moves = find_all_moves(board)

        if not moves:
            return None

        rng = SeededRng(f"{self.seed}-{board_digest(board.cells)}")
        return rng.choice(moves).to_dict()
