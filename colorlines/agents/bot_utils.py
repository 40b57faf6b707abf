"""
Board analysis utility functions for Color Lines bots.

Pure functions shared by the heuristic, rollout and baseline bots. None of
them mutate the board they are given.
"""

import hashlib
from dataclasses import dataclass

from colorlines.game.board import EMPTY, Board, Cell
from colorlines.game.game_config import HeuristicWeights
from colorlines.game.rules import LINE_DIRECTIONS, reachable_cells

# One direction per axis: horizontal, vertical and the two diagonals
AXES = [(1, 0), (0, 1), (1, 1), (1, -1)]

NEIGHBOUR_STEPS = [(1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (1, -1), (-1, 1), (-1, -1)]


@dataclass(frozen=True)
class Move:
    from_cell: Cell
    to_cell: Cell
    color: int

    def to_dict(self) -> dict[str, list[int]]:
        return {"from": list(self.from_cell), "to": list(self.to_cell)}


def find_all_moves(board: Board) -> list[Move]:
    """
    Enumerate every legal move in canonical order.

    Balls are visited in row-major order; for each ball the destinations come
    in breadth-first discovery order of its flood fill.
    """
    balls = board.ball_cells()
    if not balls or len(balls) == board.width * board.height:
        return []

    moves = []
    for ball in balls:
        color = board.get(ball)
        for dest in reachable_cells(board, ball):
            moves.append(Move(ball, dest, color))
    return moves


def run_length(board: Board, cell: Cell, direction: tuple[int, int], color: int) -> int:
    """Length of the same-coloured run through cell along one axis, cell included."""
    return run_with_ends(board, cell, direction, color)[0]


def run_with_ends(
    board: Board, cell: Cell, direction: tuple[int, int], color: int
) -> tuple[int, bool, bool]:
    """
    Measure the run through cell along an axis and whether each end is open.

    An end is open when the first cell past the run is empty; the board edge
    and a ball of another colour both close it.
    """
    width, height, cells = board.width, board.height, board.cells
    dx, dy = direction
    length = 1
    ends = []

    for sx, sy in ((dx, dy), (-dx, -dy)):
        x, y = cell[0] + sx, cell[1] + sy
        open_end = False
        while 0 <= x < width and 0 <= y < height:
            if cells[y][x] == EMPTY:
                open_end = True
                break
            if cells[y][x] != color:
                break
            length += 1
            x += sx
            y += sy
        ends.append(open_end)

    return length, ends[0], ends[1]


def board_potential(board: Board, weights: HeuristicWeights | None = None) -> float:
    """
    Score near-complete runs of every colour across the whole board.

    Each ball contributes (len - 1) ** 1.5 * 15 for every axis in which it sits
    on a run of length 3 or more, so a run of length L counts L times.
    """
    if weights is None:
        weights = HeuristicWeights()

    width, height, cells = board.width, board.height, board.cells
    potential = 0.0

    for y in range(height):
        for x in range(width):
            color = cells[y][x]
            if color == EMPTY:
                continue
            for dx, dy in LINE_DIRECTIONS:
                px, py = x - dx, y - dy
                if 0 <= px < width and 0 <= py < height and cells[py][px] == color:
                    continue
                length = 1
                nx, ny = x + dx, y + dy
                while 0 <= nx < width and 0 <= ny < height and cells[ny][nx] == color:
                    length += 1
                    nx += dx
                    ny += dy
                potential += run_potential(length, weights)

    return potential


def run_potential(length: int, weights: HeuristicWeights) -> float:
    """Potential of one maximal run: every ball scores (len - 1) ** 1.5 * 15 once it reaches 3."""
    if length < 3:
        return 0.0
    return length * (length - 1) ** weights.potential_exponent * weights.potential_weight


def line_start(board: Board, cell: Cell, direction: tuple[int, int]) -> Cell:
    """First in-bounds cell of the board line through cell along direction."""
    dx, dy = direction
    x, y = cell
    while board.in_bounds((x - dx, y - dy)):
        x -= dx
        y -= dy
    return x, y


def line_potential(
    board: Board, start: Cell, direction: tuple[int, int], weights: HeuristicWeights
) -> float:
    """Sum of run potentials along one whole board line beginning at start."""
    width, height, cells = board.width, board.height, board.cells
    dx, dy = direction
    x, y = start
    potential = 0.0
    color, length = EMPTY, 0

    while 0 <= x < width and 0 <= y < height:
        value = cells[y][x]
        if value != EMPTY and value == color:
            length += 1
        else:
            potential += run_potential(length, weights)
            color, length = value, (0 if value == EMPTY else 1)
        x += dx
        y += dy

    return potential + run_potential(length, weights)


class PotentialTracker:
    """
    Board potential of a fixed board, re-scored only along the lines a move touches.

    Runs never leave their line, so a move changes the potential of at most the
    lines through its two cells. Line scores of the unmodified board are cached
    on first use.
    """

    def __init__(self, board: Board, weights: HeuristicWeights):
        self.board = board
        self.weights = weights
        self.total = board_potential(board, weights)
        self._base: dict[tuple[tuple[int, int], Cell], float] = {}

    def after_move(self, moved: Board, move: Move) -> float:
        """Potential of moved, which must be self.board with move applied."""
        lines = {
            (direction, line_start(self.board, cell, direction))
            for direction in LINE_DIRECTIONS
            for cell in (move.from_cell, move.to_cell)
        }

        delta = 0.0
        for direction, start in lines:
            key = (direction, start)
            if key not in self._base:
                self._base[key] = line_potential(self.board, start, direction, self.weights)
            delta += line_potential(moved, start, direction, self.weights) - self._base[key]
        return self.total + delta


def completes_line(board: Board, cell: Cell, line_length: int) -> bool:
    """True when the ball at cell sits on a run of at least line_length along any axis."""
    color = board.get(cell)
    return any(run_length(board, cell, axis, color) >= line_length for axis in AXES)


def count_neighbours(board: Board, cell: Cell, value: int) -> int:
    """Count 8-directional neighbours of cell holding value."""
    x, y = cell
    count = 0
    for dx, dy in NEIGHBOUR_STEPS:
        nx, ny = x + dx, y + dy
        if 0 <= nx < board.width and 0 <= ny < board.height and board.cells[ny][nx] == value:
            count += 1
    return count


def board_digest(cells: list[list[int]]) -> str:
    """Stable hex digest of a cell grid, used to seed per-board randomness."""
    return hashlib.md5(str(cells).encode("utf-8")).hexdigest()
