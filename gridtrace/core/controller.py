import logging
from typing import Callable, Iterator, Optional, Union

from gridtrace.algo.base import GenerationResult, Generator, SearchResult, Solver
from gridtrace.algo.registry import GeneratorKind, SearchKind, get_generator, get_solver
from gridtrace.core.events import CancelToken, EventSink, Pacer
from gridtrace.core.grid import Grid

logger = logging.getLogger(__name__)


class RunInProgressError(RuntimeError):
    pass


class Run:
    """
    One search or generation in flight. Iterating it advances the algorithm
    one step per item and applies pacing between steps.
    """

    def __init__(self, controller: "RunController", algorithm: Union[Solver, Generator],
                 token: CancelToken, pacer: Pacer, label: str):
        self.controller = controller
        self.algorithm = algorithm
        self.token = token
        self.pacer = pacer
        self.label = label
        self.done = False
        self._steps = self._drive()

    def _drive(self) -> Iterator[str]:
        try:
            for status in self.algorithm.run():
                yield status
                self.pacer.tick()
        finally:
            self.done = True
            self.controller._release(self)

    def __iter__(self):
        return self._steps

    def step(self) -> bool:
        """Advances one step. Returns False once the run has finished."""
        try:
            next(self._steps)
            return True
        except StopIteration:
            return False

    def run_to_completion(self):
        for _ in self._steps:
            pass
        return self.result

    def cancel(self):
        self.token.cancel()

    def close(self):
        """Abandons the run, releasing the controller even if it never started."""
        self._steps.close()
        if not self.done:
            self.done = True
            self.controller._release(self)

    @property
    def result(self) -> Optional[Union[SearchResult, GenerationResult]]:
        return self.algorithm.result


class RunController:
    """
    Owns the lifecycle of runs against one grid. Only one run may be in
    flight; a second start request raises RunInProgressError.
    """

    def __init__(self, grid: Grid, sink: EventSink = None, pace_ms: float = 0, pace_every: int = 1):
        self.grid = grid
        self.sink = sink
        self.pace_ms = pace_ms
        self.pace_every = pace_every
        self.active: Optional[Run] = None

    @property
    def busy(self) -> bool:
        return self.active is not None and not self.active.done

    def _claim(self, label: str):
        if self.busy:
            logger.warning("Rejected %s: %s still running", label, self.active.label)
            raise RunInProgressError(f"Cannot start {label}: {self.active.label} is in flight")

    def _release(self, run: Run):
        if self.active is run:
            self.active = None
        result = run.result
        if result is not None:
            logger.info("%s finished: %s (%.1f ms)", run.label, result.status.value, result.elapsed_ms)
        else:
            logger.info("%s closed before finishing", run.label)

    def _make_run(self, algorithm, token, pace_ms, label) -> Run:
        pacer = Pacer(self.pace_ms if pace_ms is None else pace_ms, self.pace_every)
        run = Run(self, algorithm, token, pacer, label)
        self.active = run
        logger.info("Starting %s on %dx%d grid", label, self.grid.size, self.grid.size)
        return run

    def start_search(self, kind: Union[SearchKind, str], sink: EventSink = None,
                     is_cancelled: Callable[[], bool] = None, pace_ms: float = None) -> Run:
        kind = SearchKind(kind)
        label = kind.value
        self._claim(label)
        token = CancelToken(is_cancelled)
        solver = get_solver(kind)(self.grid, sink or self.sink, is_cancelled=token)
        return self._make_run(solver, token, pace_ms, label)

    def start_generation(self, kind: Union[GeneratorKind, str], sink: EventSink = None, seed: int = None,
                         is_cancelled: Callable[[], bool] = None, pace_ms: float = None) -> Run:
        kind = GeneratorKind(kind)
        label = kind.value
        self._claim(label)
        token = CancelToken(is_cancelled)
        generator = get_generator(kind)(self.grid.size, sink or self.sink, seed=seed, is_cancelled=token)
        return self._make_run(generator, token, pace_ms, label)

    def search(self, kind, **kwargs) -> SearchResult:
        return self.start_search(kind, **kwargs).run_to_completion()

    def generate(self, kind, **kwargs) -> GenerationResult:
        """Runs a generator and, unless cancelled, installs its walls on the grid."""
        result = self.start_generation(kind, **kwargs).run_to_completion()
        self.apply(result)
        return result

    def apply(self, result: GenerationResult):
        if result.cancelled:
            logger.info("Generation cancelled, grid left unchanged")
            return
        self.grid.set_walls(result.walls)

    def cancel(self):
        if self.busy:
            logger.info("Cancelling %s", self.active.label)
            self.active.cancel()

    def clear_walls(self):
        if self.busy:
            raise RunInProgressError("Cannot edit walls while a run is in flight")
        self.grid.clear_walls()
