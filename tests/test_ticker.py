import threading
import time

import pytest

from derbysim.config import RaceConfig
from derbysim.simulation import (
    EngineStatus,
    ManualTicker,
    RaceEngine,
    SimulatedClock,
    ThreadedTicker,
    monotonic_ms,
)


def _wait_for(predicate, timeout=10.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return False


class TestSimulatedClock:
    def test_advance_and_set(self):
        clock = SimulatedClock(start_ms=100)

        assert clock() == 100
        assert clock.advance(50) == 150
        clock.set(400)
        assert clock.now() == 400

    def test_cannot_go_backwards(self):
        clock = SimulatedClock(start_ms=100)

        with pytest.raises(ValueError):
            clock.advance(-1)
        with pytest.raises(ValueError):
            clock.set(50)


def test_monotonic_ms_increases():
    first = monotonic_ms()
    time.sleep(0.01)

    assert monotonic_ms() > first


class TestManualTicker:
    def test_fire_only_while_started(self):
        calls = []
        ticker = ManualTicker()

        assert ticker.fire() == 0

        ticker.start(lambda: calls.append(1), 100)
        assert ticker.active
        assert ticker.fire(3) == 3

        ticker.stop()
        assert not ticker.active
        assert ticker.fire() == 0
        assert len(calls) == 3
        assert ticker.fired == 3

    def test_fire_advances_clock(self):
        clock = SimulatedClock()
        seen = []
        ticker = ManualTicker(clock=clock)
        ticker.start(lambda: seen.append(clock.now()), 100)

        ticker.fire(3)

        assert seen == [100, 200, 300]

    def test_stop_from_callback_ends_fire_early(self):
        ticker = ManualTicker()
        calls = []

        def callback():
            calls.append(1)
            if len(calls) == 2:
                ticker.stop()

        ticker.start(callback, 100)

        assert ticker.fire(5) == 2
        assert ticker.run_until_stopped() == 0

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            ManualTicker().start(lambda: None, 0)


class TestThreadedTicker:
    def test_calls_repeatedly_until_stopped(self):
        calls = []
        ticker = ThreadedTicker()
        ticker.start(lambda: calls.append(1), 1)

        assert _wait_for(lambda: len(calls) >= 5)
        ticker.stop()
        assert not ticker.active

        time.sleep(0.05)
        settled = len(calls)
        time.sleep(0.05)
        assert len(calls) == settled

    def test_restart_from_inside_callback(self):
        fired = threading.Event()
        ticker = ThreadedTicker()
        restarts = []

        def first():
            if not restarts:
                restarts.append(1)
                ticker.start(fired.set, 1)

        ticker.start(first, 1)

        assert fired.wait(5.0)
        ticker.stop()

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            ThreadedTicker().start(lambda: None, -5)


class TestEngineOnThreadedTicker:
    @pytest.fixture
    def config(self):
        return RaceConfig(
            pool_size=6,
            competitors_per_round=3,
            round_count=2,
            distances=[1200, 1400],
            tick_interval_ms=1,
        )

    def test_runs_to_completion(self, config):
        engine = RaceEngine(config=config, ticker=ThreadedTicker())
        engine.start()

        assert _wait_for(lambda: engine.status == EngineStatus.FINISHED)
        assert len(engine.results) == 2
        assert engine.paused is True
        assert not engine.ticker.active

    def test_pause_stops_progress(self, config):
        engine = RaceEngine(config=config, ticker=ThreadedTicker())
        engine.start()
        assert _wait_for(
            lambda: any(e.distance > 0 for e in engine.snapshot().progress)
        )

        engine.pause()
        frozen = [e.distance for e in engine.snapshot().progress]
        time.sleep(0.05)

        assert [e.distance for e in engine.snapshot().progress] == frozen
        engine.reset()
