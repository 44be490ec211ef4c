import random
import unittest
from unittest import mock

import numpy as np

from block_duel.game import Cell, GameGrid

from helpers import ScriptedRandom, fill_rows, garbage_row_ok


class TestGameGrid(unittest.TestCase):

    def setUp(self):
        self.grid = GameGrid(rows=20, cols=10)

    def test_initialization(self):
        self.assertEqual(self.grid.grid.shape, (20, 10))
        self.assertTrue(np.all(self.grid.grid == Cell.EMPTY))

    def test_is_occupied(self):
        self.grid.grid[19, 3] = Cell.T
        self.assertTrue(self.grid.is_occupied(19, 3))
        self.assertFalse(self.grid.is_occupied(19, 4))
        # Out of range queries are simply empty
        self.assertFalse(self.grid.is_occupied(-1, 3))
        self.assertFalse(self.grid.is_occupied(20, 3))
        self.assertFalse(self.grid.is_occupied(5, 10))

    def test_collides_walls_floor_and_blocks(self):
        self.assertTrue(self.grid.collides([(5, -1)]))
        self.assertTrue(self.grid.collides([(5, 10)]))
        self.assertTrue(self.grid.collides([(20, 4)]))
        self.assertFalse(self.grid.collides([(-3, 4), (0, 4), (19, 9)]))
        self.grid.grid[10, 2] = Cell.GARBAGE
        self.assertTrue(self.grid.collides([(9, 2), (10, 2)]))

    def test_rows_above_the_board_never_collide(self):
        self.assertFalse(self.grid.collides([(-1, 0), (-2, 9)]))
        # ... but walls still apply above the board
        self.assertTrue(self.grid.collides([(-1, -1)]))

    def test_collides_consults_occupancy(self):
        with mock.patch.object(GameGrid, "is_occupied", return_value=True) as occupied:
            self.assertTrue(self.grid.collides([(-1, 4), (3, 4)]))
        occupied.assert_called_once_with(3, 4)

    def test_lock_writes_tags_and_skips_out_of_bounds(self):
        self.grid.lock([(19, 0, Cell.I), (18, 0, Cell.I), (-1, 0, Cell.I), (5, 12, Cell.I)])
        self.assertEqual(self.grid.grid[19, 0], Cell.I)
        self.assertEqual(self.grid.grid[18, 0], Cell.I)
        self.assertEqual(self.grid.filled_count(), 2)

    def test_clear_on_empty_board(self):
        before = self.grid.clone_state()
        self.assertEqual(self.grid.clear_full_rows(), 0)
        self.assertTrue(np.array_equal(before, self.grid.grid))

    def test_clear_single_row_shifts_rows_down(self):
        fill_rows(self.grid, [19])
        self.grid.grid[18, 0] = Cell.S
        self.assertEqual(self.grid.clear_full_rows(), 1)
        self.assertEqual(self.grid.grid[19, 0], Cell.S)
        self.assertEqual(self.grid.filled_count(), 1)
        self.assertEqual(self.grid.grid.shape, (20, 10))

    def test_clear_non_adjacent_rows(self):
        fill_rows(self.grid, [17, 19])
        self.grid.grid[18, 0] = Cell.Z
        self.grid.grid[16, 9] = Cell.L
        self.assertEqual(self.grid.clear_full_rows(), 2)
        self.assertEqual(self.grid.grid[19, 0], Cell.Z)
        self.assertEqual(self.grid.grid[18, 9], Cell.L)
        self.assertEqual(self.grid.filled_count(), 2)

    def test_clear_consecutive_rows(self):
        fill_rows(self.grid, [16, 17, 18, 19])
        self.grid.grid[15, 4] = Cell.J
        self.assertEqual(self.grid.clear_full_rows(), 4)
        self.assertEqual(self.grid.grid[19, 4], Cell.J)
        self.assertEqual(self.grid.filled_count(), 1)

    def test_clear_has_no_upper_bound(self):
        fill_rows(self.grid, range(10, 20))
        self.assertEqual(self.grid.clear_full_rows(), 10)
        self.assertEqual(self.grid.filled_count(), 0)

    def test_insert_garbage_rows(self):
        self.grid.grid[19, 0] = Cell.O
        self.grid.grid[18, 2] = Cell.T
        self.grid.insert_garbage(3, ScriptedRandom(holes=[1, 5, 9]))

        self.assertEqual(self.grid.grid.shape, (20, 10))
        for row in (17, 18, 19):
            self.assertTrue(garbage_row_ok(self.grid.grid[row]))
        self.assertEqual(self.grid.grid[17, 1], Cell.EMPTY)
        self.assertEqual(self.grid.grid[18, 5], Cell.EMPTY)
        self.assertEqual(self.grid.grid[19, 9], Cell.EMPTY)
        # Previous contents moved up by three rows
        self.assertEqual(self.grid.grid[16, 0], Cell.O)
        self.assertEqual(self.grid.grid[15, 2], Cell.T)

    def test_insert_garbage_discards_top_rows(self):
        self.grid.grid[0, 3] = Cell.I
        self.grid.grid[1, 4] = Cell.I
        self.grid.insert_garbage(1, random.Random(3))
        self.assertEqual(self.grid.grid[0, 4], Cell.I)
        self.assertEqual(int(np.count_nonzero(self.grid.grid == Cell.I)), 1)

    def test_insert_full_board_of_garbage(self):
        self.grid.insert_garbage(20, random.Random(7))
        self.assertEqual(self.grid.grid.shape, (20, 10))
        for row in self.grid.grid:
            self.assertTrue(garbage_row_ok(row))

    def test_insert_zero_garbage_is_noop(self):
        self.grid.grid[19, 0] = Cell.O
        before = self.grid.clone_state()
        self.grid.insert_garbage(0, random.Random(0))
        self.assertTrue(np.array_equal(before, self.grid.grid))

    def test_rows_snapshot_uses_cells(self):
        self.grid.grid[19, 0] = Cell.GARBAGE
        rows = self.grid.rows_snapshot()
        self.assertEqual(len(rows), 20)
        self.assertIs(rows[19][0], Cell.GARBAGE)
        self.assertIs(rows[0][0], Cell.EMPTY)

    def test_reset(self):
        fill_rows(self.grid, [19])
        self.grid.reset()
        self.assertEqual(self.grid.filled_count(), 0)


if __name__ == '__main__':
    unittest.main()
