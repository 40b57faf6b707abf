"""
FirstMoveBot implementation for Color Lines benchmarking.

Plays the first legal move found by scanning balls in row-major order and,
for each ball, destinations in row-major order. This is the reference
baseline agent and gives a deterministic floor that any real strategy
should beat.
"""

from typing import Any

from colorlines.agents.benchmark_bot_base import BenchmarkBotBase
from colorlines.game.board import Board
from colorlines.game.rules import reachable_cells


class FirstMoveBot(BenchmarkBotBase):

    name = "FirstMoveBot"

    def select_action(self, snapshot: dict[str, Any]) -> dict[str, list[int]] | None:
        board = Board.from_snapshot(snapshot)
        balls, empties = board.ball_cells(), board.empty_cells()
        if not balls or not empties:
            return None

        for ball in balls:
            # one flood fill per ball instead of one per (ball, cell) pair
            reachable = set(reachable_cells(board, ball))
            for cell in empties:
                if cell in reachable:
                    return {"from": list(ball), "to": list(cell)}
        return None
