"""
Single-game harness.

Drives one seeded game turn by turn against a pluggable agent. The agent only
ever sees a detached snapshot of the board; every move it returns is checked
against the rules engine before the authoritative board is touched. Agent
failures, malformed moves and budget overruns are counted as rejected moves
and never abort the game.
"""

import logging
import numbers
import time
from dataclasses import dataclass
from typing import Any

from colorlines.agents.benchmark_bot_base import AgentFn, BenchmarkBotBase, resolve_agent
from colorlines.game.board import Board, Cell
from colorlines.game.game_config import GameConfig, RulesConfig
from colorlines.game.rng import SeededRng
from colorlines.game.rules import apply_move, is_legal_move, resolve_turn, spawn_balls
from colorlines.evaluation.benchmark_data import GameResult

logger = logging.getLogger(__name__)


@dataclass
class AgentCall:
    """Outcome of one time-bounded agent invocation"""

    result: Any = None
    error: str | None = None
    elapsed_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.error is None


def call_agent(agent_fn: AgentFn, board: Board, budget_ms: float | None) -> AgentCall:
    """
    Invoke agent_fn on a defensive snapshot of board, measuring wall-clock time.

    Any exception raised by the agent, SystemExit included, is caught and
    reported as "error"; a call that outlasts budget_ms is reported as
    "timeout" and its result discarded.
    """
    snapshot = board.snapshot()
    start = time.perf_counter()
    try:
        result = agent_fn(snapshot)
    except (Exception, SystemExit) as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug("Agent raised %s: %s", type(e).__name__, e)
        return AgentCall(error="error", elapsed_ms=elapsed_ms)

    elapsed_ms = (time.perf_counter() - start) * 1000
    if budget_ms is not None and elapsed_ms > budget_ms:
        logger.debug("Agent exceeded budget: %.2fms > %.2fms", elapsed_ms, budget_ms)
        return AgentCall(error="timeout", elapsed_ms=elapsed_ms)

    return AgentCall(result=result, elapsed_ms=elapsed_ms)


def _parse_cell(value: Any) -> Cell | None:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    if not all(isinstance(v, numbers.Integral) and not isinstance(v, bool) for v in value):
        return None
    return int(value[0]), int(value[1])


def is_no_move(result: Any) -> bool:
    """True when the agent passed: None or any other falsy value (False, 0, "", {}, [])."""
    try:
        return not result
    except Exception:
        return False


def parse_move(result: Any) -> tuple[Cell, Cell] | None:
    """
    Extract (from, to) coordinates from an agent's return value.

    Accepts a ``{"from": [x, y], "to": [x, y]}`` dict, an object with
    ``from_cell``/``to_cell`` attributes, or a ``(from, to)`` pair. Returns
    None when the value is structurally malformed or raises while being
    inspected. Falsy returns never reach here: the harness treats them as
    "no move", see is_no_move.
    """
    try:
        return _parse_move(result)
    except Exception as e:
        logger.debug("Agent result could not be read: %s: %s", type(e).__name__, e)
        return None


def _parse_move(result: Any) -> tuple[Cell, Cell] | None:
    if isinstance(result, dict):
        raw_from, raw_to = result.get("from"), result.get("to")
    elif hasattr(result, "from_cell") and hasattr(result, "to_cell"):
        raw_from, raw_to = result.from_cell, result.to_cell
    elif isinstance(result, (list, tuple)) and len(result) == 2:
        raw_from, raw_to = result
    else:
        return None

    from_cell, to_cell = _parse_cell(raw_from), _parse_cell(raw_to)
    if from_cell is None or to_cell is None:
        return None
    return from_cell, to_cell


class GameRunner:
    """Plays seeded games of a fixed configuration against any agent."""

    def __init__(self, config: GameConfig, rules: RulesConfig | None = None):
        self.config = config
        self.rules = rules if rules is not None else RulesConfig()
        self.config.validate()
        self.rules.validate()

    def play(self, agent: BenchmarkBotBase | AgentFn, seed: str) -> GameResult:
        agent_fn = resolve_agent(agent)
        rules = self.rules
        rng = SeededRng(seed)
        board = Board.from_config(self.config)
        result = GameResult(
            seed=seed,
            score=0,
            turns=0,
            moves_accepted=0,
            moves_invalid_or_timeout=0,
            final_board=[],
        )

        spawn_balls(rng, board, rules.initial_spawn_count)

        while result.turns < rules.max_turns and not board.is_full():
            result.turns += 1

            call = call_agent(agent_fn, board, rules.move_time_budget_ms)
            move_made = False
            rejection = None

            if not call.success:
                rejection = call.error
            elif is_no_move(call.result):
                rejection = "no_move"
            else:
                move = parse_move(call.result)
                if move is None:
                    rejection = "malformed"
                elif not is_legal_move(board, *move):
                    rejection = "illegal"
                else:
                    apply_move(board, *move)
                    move_made = True

            if move_made:
                result.moves_accepted += 1
            else:
                result.moves_invalid_or_timeout += 1
                result.rejections[rejection] += 1
                logger.debug("Turn %d: move rejected (%s)", result.turns, rejection)

            spawn = move_made or rejection in ("no_move", "timeout", "error")
            result.score += resolve_turn(board, rng, rules, spawn)

        result.final_board = board.snapshot()["cells"]
        logger.debug(
            "Game %s finished: score=%d turns=%d accepted=%d rejected=%d",
            seed, result.score, result.turns, result.moves_accepted,
            result.moves_invalid_or_timeout,
        )
        return result


def run_game(
    agent: BenchmarkBotBase | AgentFn,
    config: GameConfig,
    rules: RulesConfig | None = None,
    seed: str = "fixed-seed",
) -> GameResult:
    """Play a single seeded game and return its result."""
    return GameRunner(config, rules).play(agent, seed)
