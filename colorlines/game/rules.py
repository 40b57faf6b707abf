"""
Rules engine for Color Lines.

Pure functions over a Board: move legality by flood fill, line detection,
clearing and spawning. Functions that change a board mutate the board they are
given; callers that need to roll back take a copy first.
"""

from collections import deque
from collections.abc import Iterable

from colorlines.game.board import EMPTY, Board, Cell
from colorlines.game.game_config import RulesConfig
from colorlines.game.rng import SeededRng

ORTHOGONAL_STEPS = [(1, 0), (-1, 0), (0, 1), (0, -1)]

# right, down, down-right, down-left
LINE_DIRECTIONS = [(1, 0), (0, 1), (1, 1), (-1, 1)]


def reachable_cells(board: Board, origin: Cell) -> list[Cell]:
    """
    Find every empty cell a ball at origin can travel to.

    Breadth-first flood fill over 4-connected empty cells, seeded with the
    empty neighbours of origin. Cells are returned in discovery order and the
    origin itself is never part of the result.
    """
    width, height, cells = board.width, board.height, board.cells
    ox, oy = origin
    seen = [[False] * width for _ in range(height)]
    seen[oy][ox] = True
    queue = deque([origin])
    found = []

    while queue:
        x, y = queue.popleft()
        for dx, dy in ORTHOGONAL_STEPS:
            nx, ny = x + dx, y + dy
            if (0 <= nx < width and 0 <= ny < height
                and not seen[ny][nx]
                and cells[ny][nx] == EMPTY):
                seen[ny][nx] = True
                found.append((nx, ny))
                queue.append((nx, ny))

    return found


def _is_coordinate(cell) -> bool:
    if not isinstance(cell, (tuple, list)) or len(cell) != 2:
        return False
    return all(isinstance(v, int) and not isinstance(v, bool) for v in cell)


def is_legal_move(board: Board, from_cell: Cell, to_cell: Cell) -> bool:
    """Return True when the ball at from_cell can travel to the empty to_cell."""
    if not _is_coordinate(from_cell) or not _is_coordinate(to_cell):
        return False
    from_cell, to_cell = tuple(from_cell), tuple(to_cell)
    if not board.in_bounds(from_cell) or not board.in_bounds(to_cell):
        return False
    if from_cell == to_cell:
        return False
    if board.is_empty(from_cell) or not board.is_empty(to_cell):
        return False

    # Early exit on a locally boxed-in source before running the full fill
    fx, fy = from_cell
    if not any(
        board.in_bounds((fx + dx, fy + dy)) and board.is_empty((fx + dx, fy + dy))
        for dx, dy in ORTHOGONAL_STEPS
    ):
        return False

    return to_cell in reachable_cells(board, from_cell)


def apply_move(board: Board, from_cell: Cell, to_cell: Cell) -> Board:
    """Move the ball at from_cell to to_cell. Legality is not checked here."""
    color = board.get(from_cell)
    board.set(from_cell, EMPTY)
    board.set(to_cell, color)
    return board


def _scan_run(board: Board, x: int, y: int, dx: int, dy: int) -> list[Cell]:
    color = board.cells[y][x]
    run = [(x, y)]
    nx, ny = x + dx, y + dy
    while 0 <= nx < board.width and 0 <= ny < board.height and board.cells[ny][nx] == color:
        run.append((nx, ny))
        nx += dx
        ny += dy
    return run


def find_clearable_lines(board: Board, line_length: int = 5) -> set[Cell]:
    """
    Find all cells belonging to a same-coloured run of at least line_length.

    Each direction is scanned from the first cell of every run only (a cell
    whose predecessor is off-board, empty or a different colour). Overlapping
    lines share cells, so the result is the union of all qualifying runs.
    """
    width, height, cells = board.width, board.height, board.cells
    to_clear: set[Cell] = set()

    for y in range(height):
        for x in range(width):
            color = cells[y][x]
            if color == EMPTY:
                continue
            for dx, dy in LINE_DIRECTIONS:
                px, py = x - dx, y - dy
                if 0 <= px < width and 0 <= py < height and cells[py][px] == color:
                    continue
                run = _scan_run(board, x, y, dx, dy)
                if len(run) >= line_length:
                    to_clear.update(run)

    return to_clear


def clear_cells(board: Board, cells: Iterable[Cell]) -> int:
    """Empty every given cell and return how many were cleared."""
    unique = set(cells)
    for cell in unique:
        board.set(cell, EMPTY)
    return len(unique)


def spawn_balls(
    rng: SeededRng, board: Board, count: int, num_colors: int | None = None
) -> list[Cell]:
    """
    Place up to count new balls on distinct random empty cells.

    Every ball consumes two draws in a fixed order: an index into the shrinking
    row-major list of remaining empty cells, then its colour.
    """
    if num_colors is None:
        num_colors = board.num_colors

    empties = board.empty_cells()
    spawned = []
    for _ in range(min(count, len(empties))):
        idx = rng.next_int(0, len(empties) - 1)
        cell = empties.pop(idx)
        board.set(cell, rng.next_int(0, num_colors - 1))
        spawned.append(cell)

    return spawned


def resolve_turn(board: Board, rng: SeededRng, rules: RulesConfig, spawn: bool) -> int:
    """
    Finish a turn after the move step and return the number of balls cleared.

    Lines on the board are cleared first. Only when nothing was cleared and
    spawn is set do new balls appear, and lines the spawn completes are
    cleared too.
    """
    lines = find_clearable_lines(board, rules.line_length)
    if lines:
        return clear_cells(board, lines)

    if not spawn:
        return 0

    spawn_balls(rng, board, rules.spawn_per_turn)
    lines = find_clearable_lines(board, rules.line_length)
    return clear_cells(board, lines)
