import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridtrace.core.events import (
    CallbackSink, CancelToken, EventRecorder, EventSink, Pacer,
    EVT_PATH_ADD, EVT_VISIT, EVT_WALLS,
)
from gridtrace.core.grid import Position


class TestSinks(unittest.TestCase):
    def test_null_sink_accepts_everything(self):
        sink = EventSink()
        sink.on_visit(Position(0, 0))
        sink.on_path_step(Position(0, 1))
        sink.on_walls_changed(frozenset())
        sink.on_working_cells_changed(frozenset())

    def test_callback_sink_unpacks_rows_and_cols(self):
        calls = []
        sink = CallbackSink(on_visit=lambda r, c: calls.append(("visit", r, c)),
                            on_path_step=lambda r, c: calls.append(("path", r, c)))
        sink.on_visit(Position(2, 3))
        sink.on_path_step(Position(4, 5))
        # Missing callbacks are simply skipped
        sink.on_walls_changed(frozenset({Position(0, 0)}))
        self.assertEqual(calls, [("visit", 2, 3), ("path", 4, 5)])

    def test_recorder_and_replay(self):
        rec = EventRecorder()
        rec.on_visit(Position(1, 1))
        rec.on_visit(Position(1, 2))
        rec.on_walls_changed(frozenset({Position(0, 0)}))
        rec.on_path_step(Position(1, 2))

        self.assertEqual(rec.visits, [(1, 1), (1, 2)])
        self.assertEqual(rec.path_steps, [(1, 2)])
        self.assertEqual([t for t, _ in rec.stream_events()], [EVT_VISIT, EVT_VISIT, EVT_WALLS, EVT_PATH_ADD])

        copy = EventRecorder()
        rec.replay(copy)
        self.assertEqual(copy.events, rec.events)

        rec.clear()
        self.assertEqual(rec.events, [])


class TestCancelToken(unittest.TestCase):
    def test_manual_cancel(self):
        token = CancelToken()
        self.assertFalse(token())
        token.cancel()
        self.assertTrue(token())
        self.assertTrue(token.is_cancelled())

    def test_predicate_latches(self):
        flag = {"stop": False}
        token = CancelToken(lambda: flag["stop"])
        self.assertFalse(token())
        flag["stop"] = True
        self.assertTrue(token())
        flag["stop"] = False
        self.assertTrue(token(), "Once cancelled, a token stays cancelled")


class TestPacer(unittest.TestCase):
    def test_zero_interval_never_sleeps(self):
        sleeps = []
        pacer = Pacer(0, sleep=sleeps.append)
        for _ in range(10):
            pacer.tick()
        self.assertEqual(sleeps, [])
        self.assertEqual(pacer.ticks, 10)

    def test_every_kth_step(self):
        sleeps = []
        pacer = Pacer(10, every=3, sleep=sleeps.append)
        for _ in range(7):
            pacer.tick()
        self.assertEqual(sleeps, [0.01, 0.01])

    def test_negative_interval(self):
        with self.assertRaises(ValueError):
            Pacer(-1)


if __name__ == '__main__':
    unittest.main()
