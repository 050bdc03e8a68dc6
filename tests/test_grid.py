import unittest
import sys
import os

# Add project root to path so we can import gridtrace
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridtrace.core.grid import Grid, Position


class TestGrid(unittest.TestCase):
    def test_initialization(self):
        grid = Grid(10, walls=[(3, 3), (4, 4)])
        self.assertEqual(grid.size, 10)
        self.assertEqual(grid.walls, {(3, 3), (4, 4)})
        self.assertEqual(grid.start, (1, 1))
        self.assertEqual(grid.target, (8, 8))
        self.assertIsInstance(grid.start, Position)

        with self.assertRaises(ValueError):
            Grid(0)

    def test_bounds_and_blocked(self):
        grid = Grid(5, walls=[(2, 2)])
        self.assertTrue(grid.in_bounds((0, 0)))
        self.assertTrue(grid.in_bounds((4, 4)))
        self.assertFalse(grid.in_bounds((-1, 0)))
        self.assertFalse(grid.in_bounds((0, 5)))
        self.assertTrue(grid.is_blocked((2, 2)))
        self.assertTrue(grid.is_blocked(Position(2, 2)))
        self.assertFalse(grid.is_blocked((2, 3)))

    def test_neighbors_order(self):
        grid = Grid(5)
        # Center cell (2,2) has 4 neighbors in the requested order
        self.assertEqual(list(grid.neighbors((2, 2), Grid.BFS_ORDER)),
                         [(1, 2), (2, 3), (3, 2), (2, 1)])
        self.assertEqual(list(grid.neighbors((2, 2), Grid.DFS_ORDER)),
                         [(3, 2), (2, 3), (2, 1), (1, 2)])
        self.assertEqual(list(grid.neighbors((2, 2), Grid.TOP_DOWN_ORDER)),
                         [(3, 2), (1, 2), (2, 3), (2, 1)])

        # Corner cell (0,0) only has right and down
        self.assertEqual(list(grid.neighbors((0, 0))), [(0, 1), (1, 0)])

    def test_neighbors_ignore_walls(self):
        grid = Grid(3, walls=[(0, 1), (1, 0)])
        self.assertEqual(list(grid.neighbors((0, 0))), [(0, 1), (1, 0)])

    def test_lattice_neighbors(self):
        grid = Grid(5)
        self.assertEqual(list(grid.neighbors((1, 1), Grid.LATTICE_ORDER, step=2)), [(3, 1), (1, 3)])

    def test_border_walls(self):
        border = Grid.border_walls(5)
        self.assertEqual(len(border), 16)
        self.assertNotIn((2, 2), border)
        self.assertEqual(Grid.border_walls(2), {(0, 0), (0, 1), (1, 0), (1, 1)})

    def test_endpoint_error(self):
        self.assertIsNone(Grid(5).endpoint_error())
        self.assertIn("blocked", Grid(5, walls=[(1, 1)]).endpoint_error())
        self.assertIn("target", Grid(5, walls=[(3, 3)]).endpoint_error())
        self.assertIn("out of bounds", Grid(5, start=(5, 0)).endpoint_error())

    def test_toggle_wall(self):
        grid = Grid(5)
        self.assertTrue(grid.toggle_wall((2, 2)))
        self.assertIn((2, 2), grid.walls)
        self.assertTrue(grid.toggle_wall((2, 2)))
        self.assertNotIn((2, 2), grid.walls)

        # Endpoints and out-of-bounds cells are left alone
        self.assertFalse(grid.toggle_wall(grid.start))
        self.assertFalse(grid.toggle_wall((7, 7)))
        self.assertEqual(grid.walls, set())

    def test_set_and_clear_walls(self):
        grid = Grid(5)
        grid.set_walls([(0, 0), (1, 1), (3, 3), (9, 9)])
        self.assertEqual(grid.walls, {(0, 0)})
        grid.clear_walls()
        self.assertEqual(grid.walls, set())

    def test_move_endpoints(self):
        grid = Grid(5, walls=[(2, 2)])
        grid.move_start((0, 0))
        self.assertEqual(grid.start, (0, 0))

        with self.assertRaises(ValueError):
            grid.move_start((2, 2))
        with self.assertRaises(ValueError):
            grid.move_target((0, 0))
        with self.assertRaises(ValueError):
            grid.move_target((5, 5))

    def test_copy_is_independent(self):
        grid = Grid(5, walls=[(2, 2)])
        clone = grid.copy()
        clone.toggle_wall((2, 3))
        self.assertNotIn((2, 3), grid.walls)
        self.assertEqual(clone.start, grid.start)

    def test_to_array(self):
        grid = Grid(4, walls=[(0, 3), (2, 1)])
        arr = grid.to_array()
        self.assertEqual(arr.shape, (4, 4))
        self.assertTrue(arr[0, 3])
        self.assertTrue(arr[2, 1])
        self.assertEqual(int(arr.sum()), 2)


if __name__ == '__main__':
    unittest.main()
