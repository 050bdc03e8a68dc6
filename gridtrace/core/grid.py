from typing import Iterable, Iterator, NamedTuple, Optional, Set, Tuple

import numpy as np


class Position(NamedTuple):
    row: int
    col: int


class Grid:
    # Direction offsets (d_row, d_col)
    UP = (-1, 0)
    RIGHT = (0, 1)
    DOWN = (1, 0)
    LEFT = (0, -1)

    # Canonical neighbor orders per algorithm
    BFS_ORDER = (UP, RIGHT, DOWN, LEFT)
    DFS_ORDER = (DOWN, RIGHT, LEFT, UP)
    TOP_DOWN_ORDER = (DOWN, UP, RIGHT, LEFT)
    LATTICE_ORDER = (UP, DOWN, LEFT, RIGHT)

    __slots__ = ('size', 'walls', 'start', 'target')

    def __init__(self, size: int, walls: Iterable[Tuple[int, int]] = (),
                 start: Tuple[int, int] = (1, 1), target: Tuple[int, int] = None):
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        self.walls: Set[Position] = {Position(*w) for w in walls}
        self.start = Position(*start)
        if target is None:
            target = (size - 2, size - 2)
        self.target = Position(*target)

    @staticmethod
    def border_walls(size: int) -> Set[Position]:
        """All cells on the outer ring of a size x size grid."""
        return {
            Position(r, c)
            for r in range(size)
            for c in range(size)
            if r == 0 or r == size - 1 or c == 0 or c == size - 1
        }

    def in_bounds(self, pos: Tuple[int, int]) -> bool:
        return 0 <= pos[0] < self.size and 0 <= pos[1] < self.size

    def is_blocked(self, pos: Tuple[int, int]) -> bool:
        return pos in self.walls

    def neighbors(self, pos: Tuple[int, int], order=BFS_ORDER, step: int = 1) -> Iterator[Position]:
        """
        Yields in-bounds neighbors of pos in the given direction order.
        Does NOT check walls (callers filter).
        """
        row, col = pos
        for d_row, d_col in order:
            n_row, n_col = row + d_row * step, col + d_col * step
            if 0 <= n_row < self.size and 0 <= n_col < self.size:
                yield Position(n_row, n_col)

    def endpoint_error(self) -> Optional[str]:
        for name, pos in (("start", self.start), ("target", self.target)):
            if not self.in_bounds(pos):
                return f"{name} {tuple(pos)} is out of bounds for size {self.size}"
            if self.is_blocked(pos):
                return f"{name} {tuple(pos)} is blocked"
        return None

    # Editing (between runs only)

    def toggle_wall(self, pos: Tuple[int, int]) -> bool:
        """Flips a wall cell. Endpoints and out-of-bounds cells are ignored."""
        pos = Position(*pos)
        if not self.in_bounds(pos) or pos == self.start or pos == self.target:
            return False
        if pos in self.walls:
            self.walls.remove(pos)
        else:
            self.walls.add(pos)
        return True

    def set_walls(self, walls: Iterable[Tuple[int, int]]):
        self.walls = {
            p for p in (Position(*w) for w in walls)
            if self.in_bounds(p) and p != self.start and p != self.target
        }

    def clear_walls(self):
        self.walls = set()

    def _check_endpoint_move(self, pos: Position, other: Position):
        if not self.in_bounds(pos):
            raise ValueError(f"Position {tuple(pos)} out of bounds")
        if self.is_blocked(pos):
            raise ValueError(f"Position {tuple(pos)} is a wall")
        if pos == other:
            raise ValueError("Start and target must be distinct cells")

    def move_start(self, pos: Tuple[int, int]):
        pos = Position(*pos)
        self._check_endpoint_move(pos, self.target)
        self.start = pos

    def move_target(self, pos: Tuple[int, int]):
        pos = Position(*pos)
        self._check_endpoint_move(pos, self.start)
        self.target = pos

    def copy(self) -> "Grid":
        return Grid(self.size, self.walls, self.start, self.target)

    def to_array(self) -> np.ndarray:
        """Boolean (size, size) matrix, True where a wall is."""
        arr = np.zeros((self.size, self.size), dtype=bool)
        cells = [w for w in self.walls if self.in_bounds(w)]
        if cells:
            rows, cols = zip(*cells)
            arr[list(rows), list(cols)] = True
        return arr
