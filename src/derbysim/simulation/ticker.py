"""Cancellable tick cadences and clock sources."""

import logging
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    """Monotonic time in milliseconds."""
    return time.perf_counter() * 1000.0


class SimulatedClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)

    def __call__(self) -> float:
        return self._now

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        if ms < 0:
            raise ValueError("cannot move a clock backwards")
        self._now += ms
        return self._now

    def set(self, ms: float) -> None:
        if ms < self._now:
            raise ValueError("cannot move a clock backwards")
        self._now = float(ms)


class Ticker(ABC):
    """A periodic callback that can be started and cancelled."""

    @abstractmethod
    def start(self, callback: Callable[[], None], interval_ms: int) -> None:
        """Begin invoking callback every interval_ms, replacing any previous cadence."""

    @abstractmethod
    def stop(self) -> None:
        """Cancel the cadence. Safe to call when not running."""

    @property
    @abstractmethod
    def active(self) -> bool:
        """Whether a cadence is currently scheduled."""


class ThreadedTicker(Ticker):
    """Runs the callback on a daemon thread between Event waits.

    stop() never joins: a callback already in flight runs to completion and
    the thread exits at its next wait. Owners must discard such stale calls.
    """

    def __init__(self, name: str = "race-ticker"):
        self.name = name
        self._stop_event: threading.Event | None = None
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        with self._lock:
            return self._stop_event is not None and not self._stop_event.is_set()

    def start(self, callback: Callable[[], None], interval_ms: int) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.stop()

        stop_event = threading.Event()
        thread = threading.Thread(
            target=self._run,
            args=(callback, interval_ms / 1000.0, stop_event),
            name=self.name,
            daemon=True,
        )
        with self._lock:
            self._stop_event = stop_event
        thread.start()

    def stop(self) -> None:
        with self._lock:
            stop_event = self._stop_event
            self._stop_event = None

        if stop_event is not None:
            stop_event.set()

    @staticmethod
    def _run(callback: Callable[[], None], interval: float, stop_event: threading.Event) -> None:
        while not stop_event.wait(interval):
            try:
                callback()
            except Exception:
                stop_event.set()
                logger.error("Tick callback failed, cadence stopped")
                raise


class ManualTicker(Ticker):
    """Ticker driven explicitly through fire().

    When given a SimulatedClock, each fire advances it by the interval first,
    so ticks land exactly where a real cadence would put them.
    """

    def __init__(self, clock: SimulatedClock | None = None):
        self.clock = clock
        self.interval_ms: int | None = None
        self.fired = 0
        self._callback: Callable[[], None] | None = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, callback: Callable[[], None], interval_ms: int) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self._callback = callback
        self.interval_ms = interval_ms

    def stop(self) -> None:
        self._callback = None

    def fire(self, times: int = 1) -> int:
        """Invoke the callback up to `times` times.

        Returns:
            Number of ticks actually delivered (stops early once cancelled)
        """
        delivered = 0
        for _ in range(times):
            callback = self._callback
            if callback is None:
                break
            if self.clock is not None:
                self.clock.advance(self.interval_ms)
            callback()
            delivered += 1
            self.fired += 1
        return delivered

    def run_until_stopped(self, max_ticks: int = 1_000_000) -> int:
        """Fire until the cadence is cancelled (e.g., by pause or race end)."""
        delivered = 0
        while self._callback is not None and delivered < max_ticks:
            delivered += self.fire()
        return delivered
