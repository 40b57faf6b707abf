"""
Tests for the rules engine.

Every legality check runs against a frozen board: moving a ball empties its
source cell, so reachability is only meaningful for a single snapshot.
"""

import pytest

from colorlines.game.board import EMPTY
from colorlines.game.game_config import RulesConfig
from colorlines.game.rng import SeededRng
from colorlines.game.rules import (
    apply_move,
    clear_cells,
    find_clearable_lines,
    is_legal_move,
    reachable_cells,
    resolve_turn,
    spawn_balls,
)
from .conftest import TEST_BOARD_CONFIGS, empty_board, make_board


class TestReachability:

    def test_reachable_cells_in_discovery_order(self):
        board = make_board(["0.."])
        assert reachable_cells(board, (0, 0)) == [(1, 0), (2, 0)]

    def test_origin_never_included(self):
        board = make_board(["...", ".0.", "..."])
        reached = reachable_cells(board, (1, 1))
        assert (1, 1) not in reached
        assert len(reached) == 8

    def test_walled_off_region(self):
        board = make_board(TEST_BOARD_CONFIGS["walled_off"])
        assert reachable_cells(board, (0, 0)) == [(1, 0)]

    def test_no_diagonal_steps(self):
        board = make_board(TEST_BOARD_CONFIGS["boxed_corner"])
        assert reachable_cells(board, (0, 0)) == []


class TestIsLegalMove:

    def test_reachable_destination(self):
        board = make_board(["0....", ".....", "....."])
        assert is_legal_move(board, (0, 0), (4, 2))

    def test_same_cell_is_illegal(self):
        board = make_board(["0.."])
        assert not is_legal_move(board, (0, 0), (0, 0))

    def test_occupied_destination_is_illegal(self):
        board = make_board(["0.1"])
        assert not is_legal_move(board, (0, 0), (2, 0))

    def test_empty_source_is_illegal(self):
        board = make_board(["...", ".0."])
        assert not is_legal_move(board, (0, 0), (2, 0))

    def test_out_of_bounds_is_illegal(self):
        board = make_board(["0.."])
        assert not is_legal_move(board, (0, 0), (3, 0))
        assert not is_legal_move(board, (-1, 0), (1, 0))

    def test_unreachable_destination(self):
        board = make_board(TEST_BOARD_CONFIGS["walled_off"])
        assert is_legal_move(board, (0, 0), (1, 0))
        assert not is_legal_move(board, (0, 0), (3, 0))
        assert not is_legal_move(board, (0, 0), (4, 2))

    def test_diagonal_only_path_is_illegal(self):
        board = make_board(TEST_BOARD_CONFIGS["boxed_corner"])
        assert not is_legal_move(board, (0, 0), (1, 1))

    def test_full_board_has_no_legal_move(self):
        board = make_board(TEST_BOARD_CONFIGS["full_3x3"])
        assert not is_legal_move(board, (0, 0), (1, 1))

    def test_reachability_symmetric_on_frozen_board(self):
        board = make_board(["0...1", ".111.", "....."])
        assert is_legal_move(board, (0, 0), (4, 1))
        assert is_legal_move(board, (4, 0), (0, 1))

    @pytest.mark.parametrize("from_cell,to_cell", [
        ("ab", (1, 0)),
        ((0, 0), None),
        ((0,), (1, 0)),
        ((0.0, 0), (1, 0)),
        ((True, 0), (1, 0)),
    ])
    def test_malformed_coordinates_are_illegal(self, from_cell, to_cell):
        board = make_board(["0.."])
        assert not is_legal_move(board, from_cell, to_cell)

    def test_legality_check_does_not_mutate(self):
        board = make_board(["0...1", ".111.", "....."])
        before = board.copy()
        is_legal_move(board, (0, 0), (4, 2))
        assert board == before


class TestApplyMove:

    def test_ball_moves_to_destination(self):
        board = make_board(["2.."])
        result = apply_move(board, (0, 0), (2, 0))
        assert result is board
        assert board.cells == [[EMPTY, EMPTY, 2]]


class TestFindClearableLines:

    def test_single_horizontal_run(self):
        board = make_board([
            ".......",
            "1000002",
            ".......",
        ])
        assert find_clearable_lines(board) == {(1, 1), (2, 1), (3, 1), (4, 1), (5, 1)}

    def test_run_at_board_edges(self):
        board = make_board(["33333"])
        assert find_clearable_lines(board) == {(x, 0) for x in range(5)}

    def test_vertical_run(self):
        board = make_board(["4.", "4.", "4.", "4.", "4.", ".."])
        assert find_clearable_lines(board) == {(0, y) for y in range(5)}

    def test_diagonal_runs(self):
        down_right = make_board([
            "1....",
            ".1...",
            "..1..",
            "...1.",
            "....1",
        ])
        assert find_clearable_lines(down_right) == {(i, i) for i in range(5)}

        down_left = make_board([
            "....2",
            "...2.",
            "..2..",
            ".2...",
            "2....",
        ])
        assert find_clearable_lines(down_left) == {(4 - i, i) for i in range(5)}

    def test_crossing_runs_share_one_cell(self):
        board = make_board([
            ".......",
            "...0...",
            "...0...",
            ".00000.",
            "...0...",
            "...0...",
            ".......",
        ])
        cleared = find_clearable_lines(board)
        assert len(cleared) == 9
        assert (3, 3) in cleared

    def test_run_of_four_is_not_clearable(self):
        board = make_board(["0000.", "....."])
        assert find_clearable_lines(board) == set()

    def test_long_run_clears_every_cell(self):
        board = make_board(["5555555."])
        assert len(find_clearable_lines(board)) == 7

    def test_different_colors_do_not_join(self):
        board = make_board(["0001100000"])
        assert find_clearable_lines(board) == {(x, 0) for x in range(5, 10)}

    def test_custom_line_length(self):
        board = make_board(["111.", "...."])
        assert find_clearable_lines(board, line_length=3) == {(0, 0), (1, 0), (2, 0)}

    def test_empty_board(self):
        assert find_clearable_lines(empty_board()) == set()


class TestClearCells:

    def test_clear_returns_count(self):
        board = make_board(["000", "..."])
        assert clear_cells(board, {(0, 0), (1, 0)}) == 2
        assert board.cells[0] == [EMPTY, EMPTY, 0]

    def test_clear_empty_set_is_noop(self):
        board = make_board(["012", "..."])
        before = board.copy()
        assert clear_cells(board, set()) == 0
        assert board == before

    def test_duplicates_count_once(self):
        board = make_board(["00"])
        assert clear_cells(board, [(0, 0), (0, 0), (1, 0)]) == 2


class TestSpawnBalls:

    def test_spawn_is_deterministic(self):
        board1 = make_board(["0....", ".....", "..1.."])
        board2 = board1.copy()

        spawned1 = spawn_balls(SeededRng("spawn-seed"), board1, 3)
        spawned2 = spawn_balls(SeededRng("spawn-seed"), board2, 3)

        assert spawned1 == spawned2
        assert board1 == board2

    def test_spawned_cells_were_empty_and_distinct(self):
        board = make_board(["0....", ".....", "..1.."])
        spawned = spawn_balls(SeededRng("distinct"), board, 5)
        assert len(spawned) == 5
        assert len(set(spawned)) == 5
        assert (0, 0) not in spawned and (2, 2) not in spawned
        for cell in spawned:
            assert 0 <= board.get(cell) < board.num_colors

    def test_spawn_capped_by_empty_cells(self):
        board = make_board(["01.", "2.1"])
        spawned = spawn_balls(SeededRng("cap"), board, 3)
        assert sorted(spawned) == [(1, 1), (2, 0)]
        assert board.is_full()

    def test_spawn_consumes_two_draws_per_ball(self):
        rng = SeededRng("draws")
        spawn_balls(rng, empty_board(), 3)
        assert rng.draws == 6

    def test_colors_respect_color_count(self):
        board = empty_board(num_colors=2)
        spawn_balls(SeededRng("colors"), board, 40)
        assert set(board.color_counts()) <= {0, 1}


class TestResolveTurn:

    def test_line_is_cleared_without_spawning(self):
        board = make_board(["00000..", "......."])
        cleared = resolve_turn(board, SeededRng("turn"), RulesConfig(), spawn=True)
        assert cleared == 5
        assert board.empty_count() == 14

    def test_no_spawn_when_not_requested(self):
        board = make_board(["0.1..", "....."])
        before = board.copy()
        assert resolve_turn(board, SeededRng("turn"), RulesConfig(), spawn=False) == 0
        assert board == before

    def test_spawn_when_nothing_cleared(self):
        board = empty_board()
        cleared = resolve_turn(board, SeededRng("turn"), RulesConfig(spawn_per_turn=3), spawn=True)
        assert cleared == 0
        assert len(board.ball_cells()) == 3

    def test_lines_formed_by_spawn_are_cleared(self):
        """A spawned ball that completes a run is cleared and scored in the same turn"""
        # one colour and one empty cell: the single spawn must finish the row
        board = make_board(["0000."], num_colors=1)
        cleared = resolve_turn(board, SeededRng("spawn-line"), RulesConfig(), spawn=True)

        assert cleared == 5
        assert board.empty_count() == 5
        assert board.ball_cells() == []
