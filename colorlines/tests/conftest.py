"""
Shared test utilities for Color Lines tests.

Boards are written as lists of row strings: '.' is an empty cell and a digit
is a ball of that colour, so ``"0..1"`` is a row with two balls.
"""

import pytest

from colorlines.game.board import EMPTY, Board
from colorlines.game.game_config import RulesConfig

TEST_BOARD_CONFIGS = {
    "empty_3x3": ["...", "...", "..."],
    "full_3x3": ["012", "120", "201"],
    "boxed_corner": ["01.", "1..", "..."],
    "walled_off": ["0.1..", "111..", "....."],
    "single_ball_5x5": ["0....", ".....", ".....", ".....", "....."],
}


def make_board(rows: list[str], num_colors: int = 7) -> Board:
    cells = [[EMPTY if ch == "." else int(ch) for ch in row] for row in rows]
    return Board(len(rows[0]), len(rows), num_colors, cells)


def empty_board(width: int = 9, height: int = 9, num_colors: int = 7) -> Board:
    return Board(width, height, num_colors)


def count_balls(cells: list[list[int]]) -> int:
    return sum(1 for row in cells for val in row if val != EMPTY)


@pytest.fixture
def fast_rules():
    """Rules without a time budget and with a short turn cap, for deterministic fast games"""
    return RulesConfig(max_turns=150, move_time_budget_ms=None)
