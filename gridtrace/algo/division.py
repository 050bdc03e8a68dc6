from typing import Iterator, List, Set, Tuple

from gridtrace.algo.base import Generator
from gridtrace.core.grid import Grid, Position

# (row, col, height, width, horizontal)
Region = Tuple[int, int, int, int, bool]


class RecursiveDivision(Generator):
    """
    Recursive division inside a solid one-cell border.

    Wall lines go on even rows/columns and passages on odd ones, so a later
    line can never cover the cell next to an earlier passage. Every region
    stays connected to its sibling through exactly one gap.
    """
    MIN_SIZE = 5

    def __init__(self, size: int, *args, **kwargs):
        super().__init__(size, *args, **kwargs)
        self.walls: Set[Position] = set()

    def partial_walls(self):
        return set(self.walls)

    def split(self, region: Region) -> Tuple[Set[Position], List[Region]]:
        row, col, height, width, horizontal = region

        if width < 2 or height < 2:
            return set(), []

        if horizontal:
            if height < 3:
                return set(), []
            wall_row = self.rng.choice(range(row + 1, row + height - 1, 2))
            passage_col = self.rng.choice(range(col, col + width, 2))
            line = {Position(wall_row, c) for c in range(col, col + width) if c != passage_col}
            top = (row, col, wall_row - row, width, False)
            bottom = (wall_row + 1, col, row + height - wall_row - 1, width, False)
            return line, [top, bottom]

        if width < 3:
            return set(), []
        wall_col = self.rng.choice(range(col + 1, col + width - 1, 2))
        passage_row = self.rng.choice(range(row, row + height, 2))
        line = {Position(r, wall_col) for r in range(row, row + height) if r != passage_row}
        left = (row, col, height, wall_col - col, True)
        right = (row, wall_col + 1, height, col + width - wall_col - 1, True)
        return line, [left, right]

    def build(self) -> Iterator[str]:
        self.walls = Grid.border_walls(self.size)
        self.sink.on_walls_changed(frozenset(self.walls))
        self.sink.on_working_cells_changed(frozenset())
        yield "Border"

        interior = self.size - 2
        # Depth-first: first sub-region is fully divided before its sibling
        pending: List[Region] = [(1, 1, interior, interior, True)]

        while pending:
            if self.is_cancelled():
                return None

            line, children = self.split(pending.pop())
            pending.extend(reversed(children))
            if not line:
                continue

            self.walls |= line
            self.step_count += 1
            self.sink.on_walls_changed(frozenset(self.walls))
            self.sink.on_working_cells_changed(frozenset(line))
            yield f"Regions: {len(pending)}"

        return self.walls
