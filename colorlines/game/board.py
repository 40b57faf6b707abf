"""Grid model for Color Lines. Cells are addressed as (x, y) and stored as cells[y][x]."""

from typing import Any

from colorlines.game.game_config import GameConfig

EMPTY = -1

Cell = tuple[int, int]


class Board:

    def __init__(
        self,
        width: int,
        height: int,
        num_colors: int,
        cells: list[list[int]] | None = None,
    ):
        self.width = width
        self.height = height
        self.num_colors = num_colors
        if cells is None:
            cells = [[EMPTY] * width for _ in range(height)]
        self.cells = cells

    @classmethod
    def from_config(cls, config: GameConfig) -> "Board":
        return cls(config.width, config.height, config.num_colors)

    @classmethod
    def from_snapshot(cls, snapshot: dict[str, Any]) -> "Board":
        """Build a board from a snapshot dict, copying its cells.

        Raises ValueError when the cells do not match the declared dimensions
        or hold values outside EMPTY and 0..colorsCount-1.
        """
        try:
            width = snapshot["width"]
            height = snapshot["height"]
            num_colors = snapshot["colorsCount"]
            cells = snapshot["cells"]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed board snapshot: {e}") from e

        if len(cells) != height:
            raise ValueError(
                f"Board row count {len(cells)} does not match expected {height}"
            )
        if any(len(row) != width for row in cells):
            raise ValueError("All board rows must match expected number of columns.")
        for row in cells:
            for val in row:
                if val != EMPTY and not (0 <= val < num_colors):
                    raise ValueError(
                        f"Invalid cell value {val}, must be {EMPTY} or in range 0 to {num_colors - 1}"
                    )

        return cls(width, height, num_colors, [list(row) for row in cells])

    def snapshot(self) -> dict[str, Any]:
        """Return a detached copy in the snapshot format handed to agents."""
        return {
            "width": self.width,
            "height": self.height,
            "colorsCount": self.num_colors,
            "cells": [row.copy() for row in self.cells],
        }

    def copy(self) -> "Board":
        return Board(
            self.width, self.height, self.num_colors, [row.copy() for row in self.cells]
        )

    def restore(self, saved: "Board"):
        """Roll this board back in place to the contents of a saved copy."""
        for y, row in enumerate(saved.cells):
            self.cells[y][:] = row

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, cell: Cell) -> int:
        x, y = cell
        return self.cells[y][x]

    def set(self, cell: Cell, value: int):
        x, y = cell
        self.cells[y][x] = value

    def is_empty(self, cell: Cell) -> bool:
        return self.get(cell) == EMPTY

    def empty_cells(self) -> list[Cell]:
        return [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if self.cells[y][x] == EMPTY
        ]

    def ball_cells(self) -> list[Cell]:
        return [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if self.cells[y][x] != EMPTY
        ]

    def empty_count(self) -> int:
        return sum(row.count(EMPTY) for row in self.cells)

    def is_full(self) -> bool:
        return all(EMPTY not in row for row in self.cells)

    def color_counts(self) -> dict[int, int]:
        counts: dict[int, int] = {}
        for row in self.cells:
            for val in row:
                if val != EMPTY:
                    counts[val] = counts.get(val, 0) + 1
        return counts

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.num_colors == other.num_colors
            and self.cells == other.cells
        )

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, colors={self.num_colors}, balls={len(self.ball_cells())})"
