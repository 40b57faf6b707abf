"""
HeuristicBot implementation for Color Lines.

Scores every legal move by simulating it on a private working copy and
measuring line potential, openness, mobility and centrality around the
destination. Any move that clears a line outranks every move that does not.
"""

from dataclasses import dataclass
from typing import Any

from colorlines.agents.benchmark_bot_base import BenchmarkBotBase
from colorlines.agents.bot_utils import (
    AXES,
    Move,
    PotentialTracker,
    completes_line,
    count_neighbours,
    find_all_moves,
    run_with_ends,
)
from colorlines.game.board import EMPTY, Board
from colorlines.game.game_config import HeuristicWeights
from colorlines.game.rules import apply_move, find_clearable_lines


@dataclass
class ScoredMove:
    move: Move
    score: float
    cleared: int


class HeuristicBot(BenchmarkBotBase):
    """
    Bot that greedily plays the highest-scoring move of a single-ply heuristic.

    Ties go to the move that clears more balls, then to the earliest move in
    canonical enumeration order.
    """

    name = "HeuristicBot"

    def __init__(self, weights: HeuristicWeights | None = None, line_length: int = 5):
        self.weights = weights if weights is not None else HeuristicWeights()
        self.line_length = line_length

    def select_action(self, snapshot: dict[str, Any]) -> dict[str, list[int]] | None:
        board = Board.from_snapshot(snapshot)
        best = self.best_move(board)
        if best is None:
            return None
        return best.move.to_dict()

    def best_move(self, board: Board) -> ScoredMove | None:
        best = None
        for scored in self.evaluate_moves(board):
            if (best is None or scored.score > best.score
                    or (scored.score == best.score and scored.cleared > best.cleared)):
                best = scored
        return best

    def evaluate_moves(self, board: Board) -> list[ScoredMove]:
        """Score every legal move on board in canonical order. board is left untouched."""
        moves = find_all_moves(board)
        if not moves:
            return []

        w = self.weights
        color_counts = board.color_counts()
        empties = board.empty_count()
        endgame = empties < w.endgame_empty_threshold
        lategame = empties < w.lategame_empty_threshold

        work = board.copy()
        potential = PotentialTracker(board, w)
        results = []

        for move in moves:
            supply = color_counts.get(move.color, 0)
            apply_move(work, move.from_cell, move.to_cell)
            score, cleared = self._score_move(work, move, supply, potential)
            apply_move(work, move.to_cell, move.from_cell)

            if endgame and supply >= w.endgame_color_threshold:
                score *= w.endgame_multiplier
            if lategame:
                score *= w.lategame_multiplier
            results.append(ScoredMove(move, score, cleared))

        return results

    def _score_move(
        self, work: Board, move: Move, supply: int, potential: PotentialTracker
    ) -> tuple[float, int]:
        """Score work, the evaluated board with move already applied."""
        w = self.weights
        # only the moved ball can have completed a line
        if completes_line(work, move.to_cell, self.line_length):
            cleared = len(find_clearable_lines(work, self.line_length))
            return w.clear_base + cleared * w.clear_per_ball, cleared

        tx, ty = move.to_cell
        color = move.color
        score = 0.0
        max_len = 0

        for axis in AXES:
            length, open_a, open_b = run_with_ends(work, move.to_cell, axis, color)
            if length >= 2:
                score += (length - 1) ** w.run_exponent * w.run_weight
                max_len = max(max_len, length)
            if length >= 4:
                score += (length - 3) * w.long_run_bonus
            if length >= 3 and open_a and open_b:
                score += w.open_ends_bonus

        if max_len >= 4:
            score += w.four_run_bonus
        elif max_len == 3:
            score += w.three_run_bonus

        cx, cy = work.width / 2, work.height / 2
        dist_sq = (tx - cx) ** 2 + (ty - cy) ** 2
        score += (w.center_zone - dist_sq) * w.center_weight

        score += count_neighbours(work, move.to_cell, color) * w.adjacency_weight
        score += count_neighbours(work, move.to_cell, EMPTY) * w.mobility_weight
        score += supply * w.supply_weight
        score += potential.after_move(work, move) * w.potential_scale

        return score, 0
