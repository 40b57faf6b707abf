"""Benchmark system for comparing agents across reproducible seeded games."""

import logging

import numpy as np

from colorlines.agents.benchmark_bot_base import AgentFn, BenchmarkBotBase, agent_name
from colorlines.agents.first_move_bot import FirstMoveBot
from colorlines.agents.heuristic_bot import HeuristicBot
from colorlines.agents.line_extension_bot import LineExtensionBot
from colorlines.agents.monte_carlo_bot import MonteCarloBot
from colorlines.agents.random_bot import RandomBot
from colorlines.game.game_config import GameConfig, RulesConfig
from colorlines.evaluation.benchmark_data import REJECTION_REASONS, EvaluationSummary, GameResult
from colorlines.evaluation.benchmark_execution_strategies import ExecutionStrategyFactory
from colorlines.evaluation.game_runner import GameRunner

logger = logging.getLogger(__name__)

# Share of timed-out turns above which a summary is flagged
TIMEOUT_WARNING_SHARE = 0.5


def game_seed(base_seed: str | int, game_index: int) -> str:
    """Derive the seed of one game in a batch."""
    return f"{base_seed}-{game_index}"


def summarize(
    results: list[GameResult],
    config: GameConfig,
    base_seed: str | int,
    bot_name: str = "agent",
) -> EvaluationSummary:
    """
    Reduce per-game results to batch statistics.

    The standard deviation is the population one (divides by the number of
    games) and the median is the lower-middle element of the sorted scores.
    """
    if not results:
        raise ValueError("Cannot summarize an empty batch of games")

    scores = [r.score for r in results]
    ordered = sorted(scores)

    return EvaluationSummary(
        bot_name=bot_name,
        avg_score=float(np.mean(scores)),
        std_dev=float(np.std(scores)),
        median=ordered[(len(ordered) - 1) // 2],
        best=ordered[-1],
        worst=ordered[0],
        games=len(results),
        width=config.width,
        height=config.height,
        colors_count=config.num_colors,
        moves_accepted=sum(r.moves_accepted for r in results),
        moves_invalid_or_timeout=sum(r.moves_invalid_or_timeout for r in results),
        seed_used=str(base_seed),
        last_board=results[-1].final_board,
        scores=scores,
        rejections={
            reason: sum(r.rejections.get(reason, 0) for r in results)
            for reason in REJECTION_REASONS
        },
    )


class Benchmark:
    """Evaluates agents on a fixed batch of seeded games.

    Main Interface:
    - evaluate(): Run one agent over every game and summarize it
    - run_bots(): Evaluate several agents, built-in bots by default
    - built_in_bots(): Access to standard benchmark bots
    """

    def __init__(
        self,
        config: GameConfig,
        rules: RulesConfig | None = None,
        num_games: int = 50,
        base_seed: str | int = "fixed-seed",
        use_ray: bool = False,
        ray_num_cpus: int | None = None,
        show_progress: bool = True,
    ):
        if num_games <= 0:
            raise ValueError(f"Number of games must be positive, got {num_games}")

        self.config = config
        self.rules = rules if rules is not None else RulesConfig()
        self.num_games = num_games
        self.base_seed = base_seed
        self.show_progress = show_progress

        # Validates config and rules before any game starts
        self.runner = GameRunner(self.config, self.rules)
        self.execution_strategy = ExecutionStrategyFactory.create_strategy(
            use_ray, ray_num_cpus, show_progress
        )

        self.results: dict[str, list[GameResult]] = {}
        self.summaries: dict[str, EvaluationSummary] = {}

    @property
    def seeds(self) -> list[str]:
        return [game_seed(self.base_seed, i) for i in range(self.num_games)]

    def evaluate(
        self, agent: BenchmarkBotBase | AgentFn, bot_name: str | None = None
    ) -> EvaluationSummary:
        """Play every game of the batch with agent and return its summary."""
        if bot_name is None:
            bot_name = agent_name(agent)

        if self.show_progress:
            print(
                f"Evaluating {bot_name} on {self.num_games} games "
                f"({self.config.width}x{self.config.height}, {self.config.num_colors} colors, "
                f"seed: {self.base_seed})"
            )

        results = self.execution_strategy.run_games(self.runner, agent, self.seeds, bot_name)
        summary = summarize(results, self.config, self.base_seed, bot_name)

        self.results[bot_name] = results
        self.summaries[bot_name] = summary
        logger.info(
            "%s: avg %.1f ± %.1f over %d games (%d accepted, %d invalid/timeout)",
            bot_name, summary.avg_score, summary.std_dev, summary.games,
            summary.moves_accepted, summary.moves_invalid_or_timeout,
        )

        turns = summary.moves_accepted + summary.moves_invalid_or_timeout
        timeouts = summary.rejections["timeout"]
        if turns and timeouts > turns * TIMEOUT_WARNING_SHARE:
            logger.warning(
                "%s exceeded the %sms move budget on %d of %d turns; "
                "its scores mostly reflect skipped turns",
                bot_name, self.rules.move_time_budget_ms, timeouts, turns,
            )
        return summary

    def run_bots(
        self, bots: dict[str, BenchmarkBotBase | AgentFn] | None = None
    ) -> dict[str, EvaluationSummary]:
        """Evaluate multiple agents.

        Args:
            bots: Dict of bot_name -> agent. Uses built-in bots if None.

        Returns:
            Dict of bot_name -> evaluation summary
        """
        if bots is None:
            bots = self.built_in_bots()

        return {name: self.evaluate(agent, name) for name, agent in bots.items()}

    def built_in_bots(self) -> dict[str, BenchmarkBotBase]:
        line_length = self.rules.line_length
        return {
            "FirstMoveBot": FirstMoveBot(),
            "RandomBot": RandomBot(),
            "LineExtensionBot": LineExtensionBot(line_length=line_length),
            "HeuristicBot": HeuristicBot(line_length=line_length),
            "MonteCarloBot": MonteCarloBot(rules=self.rules),
        }

    def __len__(self) -> int:
        return self.num_games


def evaluate(
    agent: BenchmarkBotBase | AgentFn,
    games: int = 50,
    width: int = 9,
    height: int = 9,
    colors_count: int = 7,
    base_seed: str | int = "fixed-seed",
    move_time_budget_ms: float | None = 20.0,
    show_progress: bool = False,
) -> EvaluationSummary:
    """Evaluate one agent with the standard rules and return its summary."""
    config = GameConfig(width=width, height=height, num_colors=colors_count)
    rules = RulesConfig(move_time_budget_ms=move_time_budget_ms)
    benchmark = Benchmark(
        config, rules, num_games=games, base_seed=base_seed, show_progress=show_progress
    )
    return benchmark.evaluate(agent)
