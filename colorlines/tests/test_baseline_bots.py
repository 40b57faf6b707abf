"""
Tests for the baseline bots.

FirstMoveBot and RandomBot carry no scoring logic, so these tests only check
legality, determinism and the no-move case.
"""

from colorlines.agents.bot_utils import find_all_moves
from colorlines.agents.first_move_bot import FirstMoveBot
from colorlines.agents.random_bot import RandomBot
from colorlines.game.rules import is_legal_move
from .conftest import TEST_BOARD_CONFIGS, empty_board, make_board


class TestFirstMoveBot:

    def test_plays_first_legal_move(self):
        board = make_board(["0.1", "..."])
        assert FirstMoveBot().select_action(board.snapshot()) == {"from": [0, 0], "to": [1, 0]}

    def test_destinations_scanned_row_major(self):
        """The first empty cell in row-major order wins, not the nearest one"""
        board = make_board(["...", ".0.", "..."])
        assert FirstMoveBot().select_action(board.snapshot()) == {"from": [1, 1], "to": [0, 0]}

    def test_boxed_ball_is_skipped(self):
        board = make_board(TEST_BOARD_CONFIGS["boxed_corner"])
        assert FirstMoveBot().select_action(board.snapshot()) == {"from": [1, 0], "to": [2, 0]}

    def test_unreachable_first_empty_is_skipped(self):
        board = make_board(["01..", ".1..", "11.."])
        # (0, 1) is the only cell the ball at (0, 0) can reach
        assert FirstMoveBot().select_action(board.snapshot()) == {"from": [0, 0], "to": [0, 1]}

    def test_no_moves(self):
        bot = FirstMoveBot()
        assert bot.select_action(empty_board().snapshot()) is None
        assert bot.select_action(make_board(TEST_BOARD_CONFIGS["full_3x3"]).snapshot()) is None

    def test_bot_is_callable(self):
        board = make_board(["0.1", "..."])
        bot = FirstMoveBot()
        assert bot(board.snapshot()) == bot.select_action(board.snapshot())


class TestRandomBot:

    def test_returns_legal_move(self):
        board = make_board(TEST_BOARD_CONFIGS["walled_off"])
        action = RandomBot().select_action(board.snapshot())
        assert is_legal_move(board, tuple(action["from"]), tuple(action["to"]))

    def test_same_board_same_move(self):
        """Same seed and same board always give the same move"""
        snapshot = make_board(["0.1..", ".2...", "....3"]).snapshot()
        assert RandomBot(seed=7).select_action(snapshot) == RandomBot(seed=7).select_action(snapshot)

    def test_seeds_spread_over_moves(self):
        board = make_board(["0.1..", ".2...", "....3"])
        actions = {
            tuple(map(tuple, RandomBot(seed=s).select_action(board.snapshot()).values()))
            for s in range(20)
        }
        assert len(actions) > 1
        assert len(actions) <= len(find_all_moves(board))

    def test_no_moves(self):
        assert RandomBot().select_action(empty_board().snapshot()) is None
