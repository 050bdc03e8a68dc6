import time
from typing import Callable, FrozenSet, Iterator, List, Optional, Tuple

from gridtrace.core.grid import Position

# Event Types
EVT_VISIT = 0x02
EVT_PATH_ADD = 0x04
EVT_WALLS = 0x08
EVT_WORKING = 0x09


class EventSink:
    """
    Progress channel between an algorithm and whoever is watching it.
    The base class ignores everything, so it doubles as the headless sink.
    Callbacks run synchronously inside the algorithm step and must be cheap.
    """

    def on_visit(self, pos: Position):
        pass

    def on_path_step(self, pos: Position):
        pass

    def on_walls_changed(self, walls: FrozenSet[Position]):
        pass

    def on_working_cells_changed(self, cells: FrozenSet[Position]):
        pass


class CallbackSink(EventSink):
    """Adapts plain functions: on_visit(row, col), on_path_step(row, col), on_walls_changed(walls), ..."""

    def __init__(self, on_visit=None, on_path_step=None,
                 on_walls_changed=None, on_working_cells_changed=None):
        self._on_visit = on_visit
        self._on_path_step = on_path_step
        self._on_walls_changed = on_walls_changed
        self._on_working_cells_changed = on_working_cells_changed

    def on_visit(self, pos):
        if self._on_visit:
            self._on_visit(pos.row, pos.col)

    def on_path_step(self, pos):
        if self._on_path_step:
            self._on_path_step(pos.row, pos.col)

    def on_walls_changed(self, walls):
        if self._on_walls_changed:
            self._on_walls_changed(walls)

    def on_working_cells_changed(self, cells):
        if self._on_working_cells_changed:
            self._on_working_cells_changed(cells)


class EventRecorder(EventSink):
    """Keeps every event in memory, in emission order."""

    def __init__(self):
        self.events: List[Tuple[int, object]] = []

    def on_visit(self, pos):
        self.events.append((EVT_VISIT, pos))

    def on_path_step(self, pos):
        self.events.append((EVT_PATH_ADD, pos))

    def on_walls_changed(self, walls):
        self.events.append((EVT_WALLS, walls))

    def on_working_cells_changed(self, cells):
        self.events.append((EVT_WORKING, cells))

    def stream_events(self, type_code: int = None) -> Iterator[Tuple[int, object]]:
        for event in self.events:
            if type_code is None or event[0] == type_code:
                yield event

    @property
    def visits(self) -> List[Position]:
        return [pos for _, pos in self.stream_events(EVT_VISIT)]

    @property
    def path_steps(self) -> List[Position]:
        return [pos for _, pos in self.stream_events(EVT_PATH_ADD)]

    def replay(self, sink: EventSink):
        """Re-emits the recorded stream into another sink."""
        for type_code, data in self.events:
            if type_code == EVT_VISIT:
                sink.on_visit(data)
            elif type_code == EVT_PATH_ADD:
                sink.on_path_step(data)
            elif type_code == EVT_WALLS:
                sink.on_walls_changed(data)
            elif type_code == EVT_WORKING:
                sink.on_working_cells_changed(data)

    def clear(self):
        self.events = []


class CancelToken:
    """
    Cooperative cancellation flag, optionally OR-ed with an external predicate.
    Instances are callable so they can be passed wherever is_cancelled is expected.
    """

    def __init__(self, predicate: Optional[Callable[[], bool]] = None):
        self.predicate = predicate
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def is_cancelled(self) -> bool:
        if not self.cancelled and self.predicate is not None and self.predicate():
            self.cancelled = True
        return self.cancelled

    __call__ = is_cancelled


class Pacer:
    """
    Rate limiter applied at yield points.
    interval_ms == 0 means fully synchronous (no sleeping at all).
    """

    def __init__(self, interval_ms: float = 0, every: int = 1, sleep=None):
        if interval_ms < 0:
            raise ValueError(f"Pacing interval must be >= 0, got {interval_ms}")
        self.interval_ms = interval_ms
        self.every = max(1, every)
        self.sleep = sleep or time.sleep
        self.ticks = 0

    def tick(self):
        self.ticks += 1
        if self.interval_ms and self.ticks % self.every == 0:
            self.sleep(self.interval_ms / 1000.0)
