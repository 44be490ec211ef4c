import random

import numpy as np

from block_duel.game import Cell


class ScriptedRandom(random.Random):
    """Random source that hands out queued piece kinds and hole columns first."""

    def __init__(self, kinds=(), holes=(), seed=0):
        super().__init__(seed)
        self.kinds = list(kinds)
        self.holes = list(holes)

    def choice(self, seq):
        if self.kinds:
            return self.kinds.pop(0)
        return super().choice(seq)

    def randrange(self, *args, **kwargs):
        if self.holes:
            return self.holes.pop(0)
        return super().randrange(*args, **kwargs)


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def fill_rows(grid, rows, gaps=(), value=Cell.GARBAGE):
    """Fill whole rows of a GameGrid, leaving the given columns empty."""
    for row in rows:
        grid.grid[row, :] = value
        for col in gaps:
            grid.grid[row, col] = Cell.EMPTY


def garbage_row_ok(row):
    return int(np.count_nonzero(row == Cell.EMPTY)) == 1 and int(np.count_nonzero(row == Cell.GARBAGE)) == len(row) - 1
