import heapq
import itertools
import math
from collections import deque
from typing import Iterator

from gridtrace.algo.base import Solver
from gridtrace.core.grid import Grid, Position


class BFS(Solver):
    """
    Breadth-first search. Cells are marked seen when enqueued, so each one
    enters the queue at most once. Shortest path in cell count.
    """
    ORDER = Grid.BFS_ORDER

    def explore(self, start: Position, target: Position) -> Iterator[str]:
        queue = deque([start])
        seen = {start}

        while queue:
            if self.is_cancelled():
                return None

            current = queue.popleft()
            self.expanded(current, start)
            if current == target:
                return True

            for n in self.open_neighbors(current):
                if n not in seen:
                    seen.add(n)
                    self.parents[n] = current
                    queue.append(n)

            yield f"Visited: {self.visited_count}"

        return False


class DFS(Solver):
    """
    Iterative depth-first search with a fixed direction priority.
    Cells may be pushed several times; they are deduplicated when popped.
    """
    ORDER = Grid.DFS_ORDER

    def explore(self, start: Position, target: Position) -> Iterator[str]:
        stack = [start]
        visited = set()

        while stack:
            if self.is_cancelled():
                return None

            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            self.expanded(current, start)
            if current == target:
                return True

            # Push lowest priority first so the first direction is popped next
            for n in reversed(list(self.open_neighbors(current))):
                if n not in visited:
                    stack.append(n)
                    # First discovery wins
                    if n not in self.parents:
                        self.parents[n] = current

            yield f"Stack: {len(stack)}"

        return False


class TopDownDFS(DFS):
    """DFS that prefers vertical moves: down, up, then right, left."""
    ORDER = Grid.TOP_DOWN_ORDER


class Dijkstra(Solver):
    """
    Uniform-cost search over unit-weight edges. Neighbors are re-inserted
    whenever a strictly shorter distance is found; stale entries are
    discarded on pop. Equal distances pop in insertion order.
    """
    ORDER = Grid.BFS_ORDER

    def edge_weight(self, a: Position, b: Position) -> int:
        return 1

    def explore(self, start: Position, target: Position) -> Iterator[str]:
        dist = {start: 0}
        counter = itertools.count()
        frontier = [(0, next(counter), start)]
        visited = set()

        while frontier:
            if self.is_cancelled():
                return None

            _, _, current = heapq.heappop(frontier)
            if current in visited:
                continue
            visited.add(current)
            self.expanded(current, start)
            if current == target:
                return True

            for n in self.open_neighbors(current):
                if n in visited:
                    continue
                new_dist = dist[current] + self.edge_weight(current, n)
                if new_dist < dist.get(n, math.inf):
                    dist[n] = new_dist
                    self.parents[n] = current
                    heapq.heappush(frontier, (new_dist, next(counter), n))

            yield f"Frontier: {len(frontier)}"

        return False
