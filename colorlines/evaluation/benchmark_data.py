"""Data classes for the evaluation harness."""

from dataclasses import dataclass, field
from typing import Any

# Reasons a turn's move can be rejected
REJECTION_REASONS = ("no_move", "malformed", "illegal", "timeout", "error")


@dataclass
class GameResult:
    """Outcome of a single game played by one agent"""

    seed: str
    score: int
    turns: int
    moves_accepted: int
    moves_invalid_or_timeout: int
    final_board: list[list[int]]
    rejections: dict[str, int] = field(
        default_factory=lambda: {reason: 0 for reason in REJECTION_REASONS}
    )


@dataclass
class EvaluationSummary:
    """Aggregate statistics of one agent across a batch of seeded games"""

    bot_name: str
    avg_score: float
    std_dev: float
    median: int
    best: int
    worst: int
    games: int
    width: int
    height: int
    colors_count: int
    moves_accepted: int
    moves_invalid_or_timeout: int
    seed_used: str
    last_board: list[list[int]] | None
    scores: list[int] = field(default_factory=list)
    rejections: dict[str, int] = field(default_factory=dict)

    def to_report(self) -> dict[str, Any]:
        """Evaluation report in the external camelCase format."""
        return {
            "avgScore": self.avg_score,
            "stdDev": self.std_dev,
            "best": self.best,
            "median": self.median,
            "worst": self.worst,
            "games": self.games,
            "width": self.width,
            "height": self.height,
            "colorsCount": self.colors_count,
            "movesAccepted": self.moves_accepted,
            "movesInvalidOrTimeout": self.moves_invalid_or_timeout,
            "seedUsed": self.seed_used,
            "lastBoard": self.last_board,
        }
