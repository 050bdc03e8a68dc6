from typing import Iterator, List, Set

from gridtrace.algo.base import Generator
from gridtrace.core.grid import Grid, Position


class PrimsAlgorithm(Generator):
    """
    Randomized-frontier (Prim's) generation on the odd-coordinate lattice.
    Junctions sit two cells apart starting at (1, 1); carving a junction also
    carves the single cell between it and one carved neighbor, so the
    passages form a spanning tree.
    """
    SEED_CELL = Position(1, 1)
    # Carve steps between wall snapshots
    SNAPSHOT_EVERY = 3

    def __init__(self, size: int, *args, **kwargs):
        super().__init__(size, *args, **kwargs)
        self.lattice = Grid(size)
        self.carved: Set[Position] = set()
        # Complement of carved, updated as cells are carved
        self.walls: Set[Position] = set()

    def is_junction_slot(self, pos: Position) -> bool:
        return 0 < pos[0] < self.size - 1 and 0 < pos[1] < self.size - 1

    def walls_snapshot(self) -> frozenset:
        return frozenset(self.walls)

    def partial_walls(self):
        return self.walls_snapshot()

    def build(self) -> Iterator[str]:
        self.carved = {self.SEED_CELL}
        self.walls = {
            Position(r, c) for r in range(self.size) for c in range(self.size)
        }
        self.walls.discard(self.SEED_CELL)
        working = {self.SEED_CELL}

        # Frontier: list for random choice, set for membership
        frontier_list: List[Position] = []
        frontier_set: Set[Position] = set()

        def add_frontier(cell: Position):
            for n in self.lattice.neighbors(cell, Grid.LATTICE_ORDER, step=2):
                if self.is_junction_slot(n) and n not in self.carved and n not in frontier_set:
                    frontier_set.add(n)
                    frontier_list.append(n)

        add_frontier(self.SEED_CELL)
        self.sink.on_walls_changed(self.walls_snapshot())
        self.sink.on_working_cells_changed(frozenset(working))
        yield "Seeded"

        while frontier_list:
            if self.is_cancelled():
                return None

            # Pick random cell from frontier, swap remove
            idx = self.rng.randrange(len(frontier_list))
            cell = frontier_list[idx]
            frontier_list[idx] = frontier_list[-1]
            frontier_list.pop()
            frontier_set.discard(cell)

            carved_neighbors = [
                n for n in self.lattice.neighbors(cell, Grid.LATTICE_ORDER, step=2)
                if n in self.carved
            ]
            if not carved_neighbors:
                continue

            n_row, n_col = self.rng.choice(carved_neighbors)
            between = Position((cell.row + n_row) // 2, (cell.col + n_col) // 2)
            self.carved.add(cell)
            self.carved.add(between)
            self.walls.discard(cell)
            self.walls.discard(between)
            working.update((cell, between))
            add_frontier(cell)
            self.step_count += 1

            if self.step_count % self.SNAPSHOT_EVERY == 0:
                self.sink.on_walls_changed(self.walls_snapshot())
                self.sink.on_working_cells_changed(frozenset(working))
                working = set()
            yield f"Frontier: {len(frontier_list)}"

        return self.walls_snapshot()
