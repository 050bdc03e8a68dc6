import logging
import random
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Optional

from gridtrace.core.events import EventSink
from gridtrace.core.grid import Grid, Position

logger = logging.getLogger(__name__)

ParentMap = Dict[Position, Position]


class RunStatus(Enum):
    FOUND = "found"
    NO_PATH = "no-path"
    INVALID_ENDPOINT = "invalid-endpoint"
    COMPLETE = "complete"
    DEGENERATE = "degenerate"
    CANCELLED = "cancelled"


@dataclass
class SearchResult:
    found: bool
    path: List[Position] = field(default_factory=list)
    visited_count: int = 0
    status: RunStatus = RunStatus.NO_PATH
    elapsed_ms: float = 0.0

    @property
    def path_length(self) -> int:
        return len(self.path)

    @property
    def cancelled(self) -> bool:
        return self.status is RunStatus.CANCELLED

    def to_dict(self):
        return {
            "found": self.found,
            "path": [tuple(p) for p in self.path],
            "visitedCount": self.visited_count,
            "pathLength": self.path_length,
            "status": self.status.value,
            "elapsedMs": self.elapsed_ms,
        }


@dataclass
class GenerationResult:
    walls: FrozenSet[Position]
    steps: int = 0
    passage_count: int = 0
    status: RunStatus = RunStatus.COMPLETE
    elapsed_ms: float = 0.0

    @property
    def cancelled(self) -> bool:
        return self.status is RunStatus.CANCELLED


def _never() -> bool:
    return False


class Solver(ABC):
    # Neighbor order used for expansion
    ORDER = Grid.BFS_ORDER

    def __init__(self, grid: Grid, sink: EventSink = None, is_cancelled=None):
        self.grid = grid
        self.sink = sink or EventSink()
        self.is_cancelled = is_cancelled or _never
        self.path: List[Position] = []
        self.parents: ParentMap = {}
        self.visited_count = 0
        self.result: Optional[SearchResult] = None
        self._t0 = 0.0

    def run(self) -> Iterator[str]:
        """
        Yields a status string after every expansion and every path step.
        The outcome is left in self.result.
        """
        self._t0 = time.perf_counter()
        start, target = self.grid.start, self.grid.target

        error = self.grid.endpoint_error()
        if error:
            logger.debug("Refusing to search: %s", error)
            self._finish(False, RunStatus.INVALID_ENDPOINT)
            yield "Invalid endpoint"
            return

        if start == target:
            self.visited_count = 1
            self.path = [start]
            self.sink.on_path_step(start)
            self._finish(True, RunStatus.FOUND)
            yield "Solved"
            return

        found = yield from self.explore(start, target)

        if found is None:
            self._finish(False, RunStatus.CANCELLED)
            yield "Cancelled"
        elif found:
            completed = yield from self.emit_path(start, target)
            if completed:
                self._finish(True, RunStatus.FOUND)
                yield "Solved"
            else:
                self._finish(False, RunStatus.CANCELLED)
                yield "Cancelled"
        else:
            self._finish(False, RunStatus.NO_PATH)
            yield "No Path"

    @abstractmethod
    def explore(self, start: Position, target: Position) -> Iterator[str]:
        """
        Expands cells until the target is expanded or the frontier is empty.
        Returns True / False for found / not found, None when cancelled.
        Must fill self.parents and self.visited_count.
        """

    def expanded(self, pos: Position, start: Position):
        self.visited_count += 1
        if pos != start:
            self.sink.on_visit(pos)

    def open_neighbors(self, pos: Position) -> Iterator[Position]:
        for n in self.grid.neighbors(pos, self.ORDER):
            if not self.grid.is_blocked(n):
                yield n

    def reconstruct_path(self, start: Position, target: Position) -> List[Position]:
        path = []
        curr = target
        while curr != start:
            path.append(curr)
            curr = self.parents[curr]
        path.reverse()
        return path

    def emit_path(self, start: Position, target: Position) -> Iterator[str]:
        self.path = self.reconstruct_path(start, target)
        for i, pos in enumerate(self.path, 1):
            if self.is_cancelled():
                return False
            self.sink.on_path_step(pos)
            yield f"Path: {i}/{len(self.path)}"
        return True

    def _finish(self, found: bool, status: RunStatus):
        if not found:
            self.path = []
        self.result = SearchResult(
            found=found,
            path=list(self.path),
            visited_count=self.visited_count,
            status=status,
            elapsed_ms=(time.perf_counter() - self._t0) * 1000.0,
        )

    def search(self) -> SearchResult:
        """Runs to completion without pacing."""
        for _ in self.run():
            pass
        return self.result


class Generator(ABC):
    # Below this size there is no room for any interior structure
    MIN_SIZE = 3

    def __init__(self, size: int, sink: EventSink = None, seed: int = None, is_cancelled=None):
        self.size = size
        self.sink = sink or EventSink()
        self.seed = seed
        self.is_cancelled = is_cancelled or _never
        self.rng = random.Random(seed)
        self.step_count = 0
        self.result: Optional[GenerationResult] = None
        self._t0 = 0.0

    @abstractmethod
    def build(self) -> Iterator[str]:
        """
        Produces the layout, yielding after every carve or wall line.
        Returns the final wall set, or None when cancelled.
        """

    def run(self) -> Iterator[str]:
        self._t0 = time.perf_counter()
        if self.size < self.MIN_SIZE:
            logger.debug("Grid size %d too small for %s", self.size, type(self).__name__)
            walls = frozenset(Grid.border_walls(self.size))
            self._emit_final(walls)
            self._finish(walls, RunStatus.DEGENERATE)
            yield "Degenerate"
            return

        walls = yield from self.build()
        if walls is None:
            self.sink.on_working_cells_changed(frozenset())
            self._finish(frozenset(self.partial_walls()), RunStatus.CANCELLED)
            yield "Cancelled"
            return

        walls = frozenset(walls)
        self._emit_final(walls)
        self._finish(walls, RunStatus.COMPLETE)
        yield "Done"

    def partial_walls(self):
        return Grid.border_walls(self.size)

    def _emit_final(self, walls: FrozenSet[Position]):
        self.sink.on_walls_changed(walls)
        self.sink.on_working_cells_changed(frozenset())

    def _finish(self, walls: FrozenSet[Position], status: RunStatus):
        self.result = GenerationResult(
            walls=walls,
            steps=self.step_count,
            passage_count=self.size * self.size - len(walls),
            status=status,
            elapsed_ms=(time.perf_counter() - self._t0) * 1000.0,
        )

    def generate(self) -> GenerationResult:
        """Runs to completion without pacing."""
        for _ in self.run():
            pass
        return self.result
