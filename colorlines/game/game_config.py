"""Game configuration system for Color Lines simulations and evaluations."""

from dataclasses import dataclass


@dataclass
class GameConfig:
    """Board dimensions and colour count. Colours are numbered 0 to num_colors - 1."""

    width: int = 9
    height: int = 9
    num_colors: int = 7

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    def validate(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Board dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.num_colors <= 0:
            raise ValueError(f"Must have at least 1 color, got {self.num_colors}")


@dataclass
class RulesConfig:
    """Tunable game rules. move_time_budget_ms=None disables the per-move budget."""

    initial_spawn_count: int = 5
    spawn_per_turn: int = 3
    line_length: int = 5
    max_turns: int = 10000
    move_time_budget_ms: float | None = 20.0

    def validate(self):
        if self.line_length < 2:
            raise ValueError(f"Line length must be at least 2, got {self.line_length}")
        if self.initial_spawn_count < 0 or self.spawn_per_turn < 0:
            raise ValueError("Spawn counts must not be negative")
        if self.max_turns <= 0:
            raise ValueError(f"Turn cap must be positive, got {self.max_turns}")
        if self.move_time_budget_ms is not None and self.move_time_budget_ms < 0:
            raise ValueError("Move time budget must not be negative")


@dataclass
class MonteCarloConfig:
    """Rollout refinement: top_k candidates, rollouts per candidate, turns per rollout."""

    top_k: int = 5
    rollouts: int = 5
    depth: int = 8
    weight: float = 50.0

    def validate(self):
        if self.top_k <= 0:
            raise ValueError(f"top_k must be positive, got {self.top_k}")
        if self.rollouts <= 0:
            raise ValueError(f"rollouts must be positive, got {self.rollouts}")
        if self.depth < 0:
            raise ValueError(f"depth must not be negative, got {self.depth}")


@dataclass
class HeuristicWeights:
    """Empirically tuned weights of the heuristic move evaluator."""

    clear_base: float = 10000.0
    clear_per_ball: float = 100.0
    run_exponent: float = 2.5
    run_weight: float = 50.0
    four_run_bonus: float = 800.0
    three_run_bonus: float = 150.0
    long_run_bonus: float = 60.0
    open_ends_bonus: float = 100.0
    center_zone: float = 16.0
    center_weight: float = 2.0
    adjacency_weight: float = 15.0
    mobility_weight: float = 8.0
    supply_weight: float = 10.0
    potential_exponent: float = 1.5
    potential_weight: float = 15.0
    potential_scale: float = 1.2
    endgame_empty_threshold: int = 15
    endgame_color_threshold: int = 4
    endgame_multiplier: float = 1.5
    lategame_empty_threshold: int = 10
    lategame_multiplier: float = 2.0


class GameFactory:

    @staticmethod
    def small() -> GameConfig:
        config = GameConfig(width=7, height=7, num_colors=5)
        config.validate()
        return config

    @staticmethod
    def medium() -> GameConfig:
        config = GameConfig(width=9, height=9, num_colors=7)
        config.validate()
        return config

    @staticmethod
    def large() -> GameConfig:
        config = GameConfig(width=12, height=12, num_colors=8)
        config.validate()
        return config

    @staticmethod
    def default() -> GameConfig:
        return GameFactory.medium()

    @staticmethod
    def custom(width: int, height: int, num_colors: int) -> GameConfig:
        config = GameConfig(width=width, height=height, num_colors=num_colors)
        config.validate()
        return config
