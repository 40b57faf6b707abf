"""
MonteCarloBot implementation for Color Lines.

Refines the cheap line-extension scores of the strongest candidate moves with
randomized playouts: each candidate is played out several times under random
play and its average number of cleared balls is added to its score.
"""

from typing import Any

from colorlines.agents.benchmark_bot_base import BenchmarkBotBase
from colorlines.agents.bot_utils import Move, board_digest, find_all_moves
from colorlines.agents.heuristic_bot import ScoredMove
from colorlines.agents.line_extension_bot import LineExtensionBot
from colorlines.game.board import Board
from colorlines.game.game_config import MonteCarloConfig, RulesConfig
from colorlines.game.rng import SeededRng
from colorlines.game.rules import apply_move, resolve_turn


class MonteCarloBot(BenchmarkBotBase):
    """
    Bot combining a single-ply heuristic with short random rollouts.

    All randomness comes from a SeededRng derived from the bot seed and the
    board contents, so the same board always yields the same decision and
    seeded evaluation runs stay reproducible.
    """

    name = "MonteCarloBot"

    def __init__(
        self,
        config: MonteCarloConfig | None = None,
        rules: RulesConfig | None = None,
        seed: str | int = "mc",
    ):
        self.config = config if config is not None else MonteCarloConfig()
        self.rules = rules if rules is not None else RulesConfig()
        self.config.validate()
        self.rules.validate()
        self.seed = seed
        self.first_pass = LineExtensionBot(line_length=self.rules.line_length)

    def select_action(
        self, snapshot: dict[str, Any], rng: SeededRng | None = None
    ) -> dict[str, list[int]] | None:
        board = Board.from_snapshot(snapshot)
        if rng is None:
            rng = SeededRng(f"{self.seed}-{board_digest(board.cells)}")

        ranked = self.rank_moves(board, rng)
        if not ranked:
            return None
        return ranked[0].move.to_dict()

    def rank_moves(self, board: Board, rng: SeededRng) -> list[ScoredMove]:
        """Return the top-K candidates re-ranked by heuristic plus rollout value."""
        scored = self.first_pass.evaluate_moves(board)
        if not scored:
            return []

        candidates = sorted(scored, key=lambda s: s.score, reverse=True)[: self.config.top_k]

        refined = []
        for candidate in candidates:
            total = sum(
                self.rollout(board, candidate.move, rng) for _ in range(self.config.rollouts)
            )
            value = total / self.config.rollouts * self.config.weight
            refined.append(ScoredMove(candidate.move, candidate.score + value, candidate.cleared))

        # sorted is stable: equal combined scores keep the heuristic order
        return sorted(refined, key=lambda s: s.score, reverse=True)

    def rollout(self, board: Board, move: Move, rng: SeededRng) -> int:
        """Play move then up to depth random turns on a private copy; return balls cleared."""
        sim = board.copy()
        apply_move(sim, move.from_cell, move.to_cell)
        cleared = resolve_turn(sim, rng, self.rules, spawn=True)

        for _ in range(self.config.depth):
            if sim.is_full():
                break
            moves = find_all_moves(sim)
            if not moves:
                break
            chosen = rng.choice(moves)
            apply_move(sim, chosen.from_cell, chosen.to_cell)
            cleared += resolve_turn(sim, rng, self.rules, spawn=True)

        return cleared
