import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_sketch.core.grid import Grid
from maze_sketch.algo.dfs import RecursiveBacktracker, CARVE, BACKTRACK

class TestRecursiveBacktracker(unittest.TestCase):
    def assert_reciprocal(self, grid):
        for y in range(grid.height):
            for x in range(grid.width):
                for nx, ny, dir_bit in grid.get_neighbors(x, y):
                    self.assertEqual(
                        grid.is_connected(x, y, dir_bit),
                        grid.is_connected(nx, ny, Grid.OPPOSITE[dir_bit]),
                        f"Passage between ({x}, {y}) and ({nx}, {ny}) is one-sided",
                    )

    def test_initial_state(self):
        gen = RecursiveBacktracker(4, 3, seed=7)
        self.assertEqual(len(gen.path), 1)
        self.assertEqual(gen.visited, {gen.head})
        self.assertTrue(gen.grid.in_bounds(*gen.head))
        self.assertFalse(gen.generated)
        self.assertEqual(gen.grid.connection_count(), 0)

    def test_explicit_start(self):
        gen = RecursiveBacktracker(4, 3, start=(3, 2))
        self.assertEqual(gen.path, [(3, 2)])

        with self.assertRaises(IndexError):
            RecursiveBacktracker(4, 3, start=(4, 0))

    def test_single_cell(self):
        gen = RecursiveBacktracker(1, 1)
        self.assertEqual(gen.step(), BACKTRACK)
        self.assertTrue(gen.generated)
        self.assertEqual(gen.path, [])
        self.assertEqual(gen.visited, {(0, 0)})
        self.assertEqual(gen.grid.connection_count(), 0)

    def test_two_cells(self):
        gen = RecursiveBacktracker(2, 1, start=(0, 0))

        self.assertEqual(gen.step(), CARVE)
        self.assertEqual(gen.path, [(0, 0), (1, 0)])
        self.assertEqual(gen.grid.connections(), [((0, 0), (1, 0))])
        self.assertTrue(gen.grid.cell(0, 0).right)
        self.assertTrue(gen.grid.cell(1, 0).left)

        # Dead end at (1,0), then back to the start and done
        self.assertEqual(gen.step(), BACKTRACK)
        self.assertFalse(gen.generated)
        self.assertEqual(gen.step(), BACKTRACK)
        self.assertTrue(gen.generated)
        self.assertEqual(gen.grid.connection_count(), 1)

    def test_termination_and_coverage(self):
        for w, h in [(1, 1), (1, 5), (5, 1), (2, 2), (7, 4), (15, 15), (20, 20)]:
            for seed in range(3):
                gen = RecursiveBacktracker(w, h, seed=seed)
                steps = 0
                while not gen.generated:
                    gen.step()
                    steps += 1
                    self.assertLessEqual(steps, 2 * w * h)

                # Every cell is carved into once and popped once
                self.assertEqual(steps, 2 * w * h - 1)
                self.assertEqual(gen.path, [])
                self.assertEqual(len(gen.visited), w * h)
                # A perfect maze is a spanning tree
                self.assertEqual(gen.grid.connection_count(), w * h - 1)
                self.assert_reciprocal(gen.grid)

    def test_state_invariants_per_step(self):
        w, h = 8, 6
        gen = RecursiveBacktracker(w, h, seed=3)
        last_visited = len(gen.visited)
        while not gen.generated:
            before = set(gen.visited)
            gen.step()
            self.assertTrue(before <= gen.visited, "Visited set must only grow")
            self.assertGreaterEqual(len(gen.visited), last_visited)
            self.assertLessEqual(len(gen.visited), w * h)
            self.assertTrue(set(gen.path) <= gen.visited)
            last_visited = len(gen.visited)

    def test_step_after_generated_is_noop(self):
        gen = RecursiveBacktracker(5, 5, seed=11)
        gen.run_all()
        self.assertTrue(gen.generated)

        cells = gen.grid.cells.tobytes()
        visited = set(gen.visited)
        count = gen.step_count

        self.assertIsNone(gen.step())
        self.assertEqual(gen.grid.cells.tobytes(), cells)
        self.assertEqual(gen.visited, visited)
        self.assertEqual(gen.path, [])
        self.assertEqual(gen.step_count, count)
        self.assertFalse(gen.at_dead_end)

    def test_run_yields_until_done(self):
        gen = RecursiveBacktracker(3, 3, seed=5)
        statuses = list(gen.run())
        self.assertEqual(statuses[-1], "Done")
        self.assertEqual(len(statuses), 2 * 9 - 1 + 1)
        self.assertTrue(gen.generated)

    def test_reset(self):
        gen = RecursiveBacktracker(6, 6, seed=2)
        gen.run_all()
        gen.reset(start=(1, 1))
        self.assertFalse(gen.generated)
        self.assertEqual(gen.path, [(1, 1)])
        self.assertEqual(gen.visited, {(1, 1)})
        self.assertEqual(gen.step_count, 0)
        self.assertEqual(gen.grid.connection_count(), 0)

    def test_determinism(self):
        w, h = 10, 10
        gen1 = RecursiveBacktracker(w, h, seed=12345)
        gen1.run_all()

        gen2 = RecursiveBacktracker(w, h, seed=12345)
        for _ in gen2.run(): pass

        self.assertEqual(gen1.grid.cells.tobytes(), gen2.grid.cells.tobytes())

if __name__ == '__main__':
    unittest.main()
