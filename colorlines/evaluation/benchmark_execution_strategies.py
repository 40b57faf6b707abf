"""Execution strategies for running an agent over a batch of seeded games."""

import logging
from abc import ABC, abstractmethod

from tqdm import tqdm

# Optional Ray import for parallelization
try:
    import ray

    RAY_AVAILABLE = True
except ImportError:
    RAY_AVAILABLE = False

from colorlines.agents.benchmark_bot_base import AgentFn, BenchmarkBotBase
from colorlines.evaluation.benchmark_data import GameResult
from colorlines.evaluation.game_runner import GameRunner

logger = logging.getLogger(__name__)


class ExecutionStrategy(ABC):
    """Abstract base class for game execution strategies."""

    @abstractmethod
    def run_games(
        self,
        runner: GameRunner,
        agent: BenchmarkBotBase | AgentFn,
        seeds: list[str],
        bot_name: str,
    ) -> list[GameResult]:
        """Play one game per seed and return results in seed order."""
        pass


class SequentialExecutionStrategy(ExecutionStrategy):
    """Execute games one after another with progress tracking."""

    def __init__(self, show_progress: bool = True):
        self.show_progress = show_progress

    def run_games(
        self,
        runner: GameRunner,
        agent: BenchmarkBotBase | AgentFn,
        seeds: list[str],
        bot_name: str,
    ) -> list[GameResult]:
        results = []
        for seed in tqdm(seeds, desc=f"Running {bot_name}", disable=not self.show_progress):
            results.append(runner.play(agent, seed))
        return results


class ParallelExecutionStrategy(ExecutionStrategy):
    """Execute games in parallel using Ray. Games share nothing but the agent definition."""

    def __init__(self, ray_num_cpus: int | None = None, show_progress: bool = True):
        self.ray_num_cpus = ray_num_cpus
        self.show_progress = show_progress
        self._ray_initialized = False

    def run_games(
        self,
        runner: GameRunner,
        agent: BenchmarkBotBase | AgentFn,
        seeds: list[str],
        bot_name: str,
    ) -> list[GameResult]:
        sequential_strategy = SequentialExecutionStrategy(self.show_progress)
        if not RAY_AVAILABLE:
            return sequential_strategy.run_games(runner, agent, seeds, bot_name)

        self._initialize_ray()

        if not ray.is_initialized():
            return sequential_strategy.run_games(runner, agent, seeds, bot_name)

        try:
            return self._run_games_parallel(runner, agent, seeds, bot_name)
        finally:
            self._cleanup_ray()

    def _run_games_parallel(
        self,
        runner: GameRunner,
        agent: BenchmarkBotBase | AgentFn,
        seeds: list[str],
        bot_name: str,
    ) -> list[GameResult]:
        logger.info("Using Ray parallel execution with %d tasks", len(seeds))

        runner_ref = ray.put(runner)
        agent_ref = ray.put(agent)
        futures = [_play_game_parallel.remote(runner_ref, agent_ref, seed) for seed in seeds]

        results: list[GameResult | None] = [None] * len(seeds)
        index_of = {future: i for i, future in enumerate(futures)}
        remaining = futures.copy()

        with tqdm(
            total=len(futures),
            desc=f"Running {bot_name} (parallel)",
            disable=not self.show_progress,
        ) as pbar:
            while remaining:
                ready, remaining = ray.wait(remaining, num_returns=1)
                for future in ready:
                    results[index_of[future]] = ray.get(future)
                pbar.update(len(ready))

        return [r for r in results if r is not None]

    def _initialize_ray(self) -> bool:
        if self._ray_initialized:
            return True

        try:
            if ray.is_initialized():
                self._ray_initialized = True
                return True

            init_kwargs = {"ignore_reinit_error": True}
            if self.ray_num_cpus is not None:
                init_kwargs["num_cpus"] = self.ray_num_cpus

            ray.init(**init_kwargs)
            self._ray_initialized = True
            return True

        except Exception as e:
            logger.warning("Failed to initialize Ray (%s), falling back to sequential execution", e)
            return False

    def _cleanup_ray(self) -> None:
        if self._ray_initialized and ray.is_initialized():
            try:
                ray.shutdown()
                self._ray_initialized = False
            except Exception as e:
                logger.warning("Error during Ray cleanup: %s", e)


class ExecutionStrategyFactory:
    """Factory for creating execution strategies."""

    @staticmethod
    def create_strategy(
        use_ray: bool, ray_num_cpus: int | None = None, show_progress: bool = True
    ) -> ExecutionStrategy:
        if use_ray and RAY_AVAILABLE:
            return ParallelExecutionStrategy(ray_num_cpus, show_progress)
        else:
            return SequentialExecutionStrategy(show_progress)


if RAY_AVAILABLE:

    @ray.remote
    def _play_game_parallel(
        runner: GameRunner, agent: BenchmarkBotBase | AgentFn, seed: str
    ) -> GameResult:
        """Ray remote function for parallel game execution."""
        return runner.play(agent, seed)
