"""Simulation engine components."""

from .engine import EngineSnapshot, EngineStatus, RaceEngine
from .roster import RosterGenerator
from .schedule import ScheduleGenerator
from .selector import RoundSelector
from .ticker import ManualTicker, SimulatedClock, ThreadedTicker, Ticker, monotonic_ms

__all__ = [
    "EngineSnapshot",
    "EngineStatus",
    "ManualTicker",
    "RaceEngine",
    "RosterGenerator",
    "RoundSelector",
    "ScheduleGenerator",
    "SimulatedClock",
    "ThreadedTicker",
    "Ticker",
    "monotonic_ms",
]
