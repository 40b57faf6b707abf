"""
Base interface for benchmark bots.

The evaluation harness only needs a callable that maps a board snapshot to a
move dict or None. Bots built on this base satisfy that contract by being
callable, and keep their decision logic in select_action.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

AgentFn = Callable[[dict[str, Any]], Any]


class BenchmarkBotBase(ABC):
    """
    Abstract base class for bots that play Color Lines.

    Bots receive a detached snapshot ``{width, height, colorsCount, cells}``
    and may scribble on it freely; the harness never hands out its own board.
    """

    name = "BenchmarkBot"

    @abstractmethod
    def select_action(self, snapshot: dict[str, Any]) -> dict[str, list[int]] | None:
        """
        Select the next move given the current board snapshot.

        Args:
            snapshot: Board snapshot, ``cells[y][x]`` with -1 for empty cells

        Returns:
            ``{"from": [x, y], "to": [x, y]}``, or None if no move is available
        """
        pass

    def __call__(self, snapshot: dict[str, Any]) -> dict[str, list[int]] | None:
        return self.select_action(snapshot)


def resolve_agent(agent: BenchmarkBotBase | AgentFn) -> AgentFn:
    """Return the move-proposing callable behind a bot or plain function."""
    if isinstance(agent, BenchmarkBotBase):
        return agent.select_action
    if callable(agent):
        return agent
    raise TypeError(f"Agent must be a BenchmarkBotBase or callable, got {type(agent).__name__}")


def agent_name(agent: BenchmarkBotBase | AgentFn) -> str:
    name = getattr(agent, "name", None)
    if isinstance(name, str):
        return name
    return getattr(agent, "__name__", agent.__class__.__name__)
