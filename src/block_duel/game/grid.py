from __future__ import annotations

import random
from typing import Iterable, Tuple

import numpy as np

from .pieces import Cell


Coordinate = Tuple[int, int]
TaggedCoordinate = Tuple[int, int, Cell]


class GameGrid:
    """Fixed-size board for one contestant.

    Row 0 is the top. Cells hold ``Cell`` values in an ``int8`` array; the
    array keeps its shape for the lifetime of the grid, only contents and row
    order change.
    """

    def __init__(self, rows: int = 20, cols: int = 10) -> None:
        self.rows = int(rows)
        self.cols = int(cols)
        self.grid = np.zeros((self.rows, self.cols), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(Cell.EMPTY)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_occupied(self, row: int, col: int) -> bool:
        if not self.is_inside(row, col):
            return False
        return self.grid[row, col] != Cell.EMPTY

    def collides(self, cells: Iterable[Coordinate]) -> bool:
        """Collision test for projected piece cells.

        Side walls and the floor collide, as do occupied cells. Rows above the
        top of the board never collide.
        """
        for row, col in cells:
            if col < 0 or col >= self.cols or row >= self.rows:
                return True
            if row >= 0 and self.is_occupied(row, col):
                return True
        return False

    def lock(self, cells: Iterable[TaggedCoordinate]) -> None:
        for row, col, tag in cells:
            if self.is_inside(row, col):
                self.grid[row, col] = int(tag)

    def clear_full_rows(self) -> int:
        cleared = 0
        row = self.rows - 1
        while row >= 0:
            if np.all(self.grid[row] != Cell.EMPTY):
                # Rows above slide down into this index, so it is checked again.
                self.grid = np.vstack(
                    (np.zeros((1, self.cols), dtype=np.int8), np.delete(self.grid, row, axis=0))
                )
                cleared += 1
            else:
                row -= 1
        return cleared

    def insert_garbage(self, count: int, rng: random.Random) -> None:
        for _ in range(max(0, int(count))):
            hole = rng.randrange(self.cols)
            line = np.full((1, self.cols), Cell.GARBAGE, dtype=np.int8)
            line[0, hole] = Cell.EMPTY
            # Board is always at capacity: the top row is dropped.
            self.grid = np.vstack((self.grid[1:], line))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def rows_snapshot(self) -> Tuple[Tuple[Cell, ...], ...]:
        return tuple(tuple(Cell(int(v)) for v in row) for row in self.grid)

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))
