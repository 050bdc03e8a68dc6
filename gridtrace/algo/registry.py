from enum import Enum
from typing import Dict, Type

from gridtrace.algo.base import Generator, Solver
from gridtrace.algo.division import RecursiveDivision
from gridtrace.algo.prim import PrimsAlgorithm
from gridtrace.algo.solvers import BFS, DFS, Dijkstra, TopDownDFS


class SearchKind(Enum):
    BREADTH_FIRST = "breadth-first"
    DEPTH_FIRST = "depth-first"
    DEPTH_FIRST_TOP_DOWN = "depth-first-top-down"
    UNIFORM_COST = "uniform-cost"


class GeneratorKind(Enum):
    RANDOMIZED_FRONTIER = "randomized-frontier"
    RECURSIVE_DIVISION = "recursive-division"


SOLVERS: Dict[SearchKind, Type[Solver]] = {
    SearchKind.BREADTH_FIRST: BFS,
    SearchKind.DEPTH_FIRST: DFS,
    SearchKind.DEPTH_FIRST_TOP_DOWN: TopDownDFS,
    SearchKind.UNIFORM_COST: Dijkstra,
}

GENERATORS: Dict[GeneratorKind, Type[Generator]] = {
    GeneratorKind.RANDOMIZED_FRONTIER: PrimsAlgorithm,
    GeneratorKind.RECURSIVE_DIVISION: RecursiveDivision,
}


def get_solver(kind) -> Type[Solver]:
    """Accepts a SearchKind or its string value; unknown names raise ValueError."""
    return SOLVERS[SearchKind(kind)]


def get_generator(kind) -> Type[Generator]:
    return GENERATORS[GeneratorKind(kind)]
