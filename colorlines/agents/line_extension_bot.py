"""
LineExtensionBot implementation for Color Lines.

A cheap scorer that only looks at the runs through the destination of a move,
with no board-wide terms. Used on its own as a fast benchmark bot and as the
first pass of MonteCarloBot.
"""

from typing import Any

from colorlines.agents.benchmark_bot_base import BenchmarkBotBase
from colorlines.agents.bot_utils import AXES, Move, completes_line, find_all_moves, run_length
from colorlines.agents.heuristic_bot import ScoredMove
from colorlines.game.board import Board
from colorlines.game.game_config import HeuristicWeights
from colorlines.game.rules import apply_move, find_clearable_lines


class LineExtensionBot(BenchmarkBotBase):
    """Bot that plays the move extending the longest same-coloured runs."""

    name = "LineExtensionBot"

    RUN_EXPONENT = 2
    RUN_WEIGHT = 20.0

    def __init__(self, weights: HeuristicWeights | None = None, line_length: int = 5):
        self.weights = weights if weights is not None else HeuristicWeights()
        self.line_length = line_length

    def select_action(self, snapshot: dict[str, Any]) -> dict[str, list[int]] | None:
        scored = self.evaluate_moves(Board.from_snapshot(snapshot))
        if not scored:
            return None

        best = scored[0]
        for candidate in scored[1:]:
            if candidate.score > best.score:
                best = candidate
        return best.move.to_dict()

    def evaluate_moves(self, board: Board) -> list[ScoredMove]:
        """Score every legal move on board in canonical order. board is left untouched."""
        work = board.copy()
        results = []
        for move in find_all_moves(board):
            apply_move(work, move.from_cell, move.to_cell)
            score, cleared = self.score_move(work, move)
            apply_move(work, move.to_cell, move.from_cell)
            results.append(ScoredMove(move, score, cleared))
        return results

    def score_move(self, work: Board, move: Move) -> tuple[float, int]:
        """Score work, the evaluated board with move already applied."""
        w = self.weights
        if completes_line(work, move.to_cell, self.line_length):
            cleared = len(find_clearable_lines(work, self.line_length))
            return w.clear_base + cleared * w.clear_per_ball, cleared

        score = 0.0
        max_len = 0
        for axis in AXES:
            length = run_length(work, move.to_cell, axis, move.color)
            max_len = max(max_len, length)
            if length >= 3:
                score += (length - 1) ** self.RUN_EXPONENT * self.RUN_WEIGHT

        if max_len >= 4:
            score += w.four_run_bonus
        elif max_len == 3:
            score += w.three_run_bonus

        return score, 0
