"""
Benchmarking script to measure per-move decision time of the built-in bots.

The harness rejects any move that exceeds the per-move time budget, so this
script reports how each bot's select_action time scales with board fill and
how it compares to the default budget, then plays a short seeded comparison.
"""

import statistics
import time

from colorlines.agents.first_move_bot import FirstMoveBot
from colorlines.agents.heuristic_bot import HeuristicBot
from colorlines.agents.line_extension_bot import LineExtensionBot
from colorlines.agents.monte_carlo_bot import MonteCarloBot
from colorlines.agents.random_bot import RandomBot
from colorlines.game.board import Board
from colorlines.game.game_config import GameConfig, GameFactory, RulesConfig
from colorlines.game.rng import SeededRng
from colorlines.game.rules import clear_cells, find_clearable_lines, spawn_balls
from colorlines.evaluation.benchmark import Benchmark
from colorlines.evaluation.benchmark_analysis import generate_report


def create_test_board(config: GameConfig, fill_percentage: float, seed: str = "timing") -> Board:
    """Create a board with roughly the given share of cells occupied and no clearable lines."""
    board = Board.from_config(config)
    spawn_balls(SeededRng(seed), board, int(config.total_cells * fill_percentage))
    clear_cells(board, find_clearable_lines(board))
    return board


def benchmark_function(func, *args, iterations: int = 20) -> dict[str, float]:
    """Benchmark a function and return timing statistics in milliseconds."""
    times = []

    for _ in range(iterations):
        start_time = time.perf_counter()
        func(*args)
        times.append((time.perf_counter() - start_time) * 1000)

    return {
        'mean': statistics.mean(times),
        'median': statistics.median(times),
        'max': max(times),
    }


def analyze_decision_times(config: GameConfig, budget_ms: float) -> None:
    """Print select_action timings per bot for increasingly full boards."""
    bots = [FirstMoveBot(), RandomBot(), LineExtensionBot(), HeuristicBot(), MonteCarloBot()]

    print(f"\n=== Decision time on {config.width}x{config.height} ({budget_ms:.0f}ms budget) ===")
    print("Fill\t| " + " | ".join(f"{bot.name:>16s}" for bot in bots))
    print("-" * (10 + 19 * len(bots)))

    for fill in (0.1, 0.4, 0.7, 0.9):
        snapshot = create_test_board(config, fill).snapshot()
        cells = []
        for bot in bots:
            iterations = 3 if isinstance(bot, MonteCarloBot) else 20
            stats = benchmark_function(bot.select_action, snapshot, iterations=iterations)
            marker = "*" if stats['median'] > budget_ms else " "
            cells.append(f"{stats['median']:14.2f}ms{marker}")
        print(f"{fill:.0%}\t| " + " | ".join(cells))

    print("(* median exceeds the per-move budget)")


def compare_bots(config: GameConfig, num_games: int = 10) -> None:
    """Play a short seeded comparison with the time budget disabled."""
    rules = RulesConfig(move_time_budget_ms=None)
    benchmark = Benchmark(config, rules, num_games=num_games, base_seed="timing")
    bots = {
        "FirstMoveBot": FirstMoveBot(),
        "RandomBot": RandomBot(),
        "LineExtensionBot": LineExtensionBot(),
        "HeuristicBot": HeuristicBot(),
    }
    print(generate_report(benchmark.run_bots(bots)))


def main():
    print("=== Color Lines Bot Timing Benchmark ===")
    budget_ms = RulesConfig().move_time_budget_ms

    for config in (GameFactory.small(), GameFactory.default()):
        analyze_decision_times(config, budget_ms)

    compare_bots(GameFactory.small())


if __name__ == "__main__":
    main()
