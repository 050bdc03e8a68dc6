import unittest
import io
import sys
import os
from contextlib import redirect_stdout

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridtrace.core.grid import Grid
from gridtrace.main import format_grid, main


class TestCLI(unittest.TestCase):
    def run_main(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(list(argv))
        return code, out.getvalue()

    def test_solve_prints_path(self):
        code, out = self.run_main("solve", "--size", "7", "--algo", "breadth-first", "--pace", "0", "--print")
        self.assertEqual(code, 0)
        self.assertIn("S", out)
        self.assertIn("T", out)
        self.assertEqual(out.count("*"), 7)

    def test_solve_with_only_start(self):
        # Missing target follows the board size, not the default board
        code, out = self.run_main("solve", "--size", "7", "--start", "1", "1", "--pace", "0", "--print")
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines()[-2][5], "T")

        code, _ = self.run_main("solve", "--size", "7", "--target", "3", "3", "--pace", "0")
        self.assertEqual(code, 0)

    def test_solve_without_path(self):
        code, _ = self.run_main("solve", "--size", "7", "--start", "0", "0", "--target", "9", "9", "--pace", "0")
        self.assertEqual(code, 2)

    def test_generate(self):
        code, out = self.run_main("generate", "--size", "11", "--algo", "recursive-division",
                                  "--seed", "4", "--pace", "0", "--print")
        self.assertEqual(code, 0)
        rows = [line for line in out.splitlines() if line and set(line) <= set("#.ST*")]
        self.assertEqual(len(rows), 11)
        self.assertEqual(rows[0], "#" * 11)

    def test_benchmark(self):
        code, out = self.run_main("benchmark", "--size", "11", "--maze", "randomized-frontier", "--seed", "2")
        self.assertEqual(code, 0)
        for name in ("breadth-first", "depth-first", "depth-first-top-down", "uniform-cost"):
            self.assertIn(name, out)

    def test_format_grid(self):
        grid = Grid(3, walls=[(0, 2)], start=(0, 0), target=(2, 2))
        text = format_grid(grid, path=[(1, 0), (2, 0), (2, 1), (2, 2)])
        self.assertEqual(text, "S.#\n*..\n**T")


if __name__ == '__main__':
    unittest.main()
