"""
Pytest configuration and shared fixtures for the derbysim test suite.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import numpy as np
import pytest

# Ensure src/ is importable without installing the package
SRC_ROOT = Path(__file__).resolve().parent.parent / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from derbysim.config import RaceConfig  # noqa: E402
from derbysim.simulation import ManualTicker, RaceEngine, SimulatedClock  # noqa: E402

RACE_DAY = datetime(2024, 5, 4, 18, 0, tzinfo=timezone.utc)


class MidpointRng:
    """Stand-in generator with predictable draws.

    uniform() returns the midpoint (random factor 1.0), integers() returns a
    fixed fitness and choice() takes the first ids in roster order.
    """

    def __init__(self, fitness: int = 50):
        self.fitness = fitness

    def uniform(self, low, high):
        return (low + high) / 2

    def integers(self, low, high):
        return self.fitness

    def choice(self, a, size, replace=True):
        return np.asarray(a)[:size]


@pytest.fixture
def race_day():
    return RACE_DAY


@pytest.fixture
def clock():
    return SimulatedClock()


@pytest.fixture
def manual_ticker():
    """Ticker that does not move the clock; tests set time explicitly."""
    return ManualTicker()


@pytest.fixture
def make_engine(clock, manual_ticker):
    """Factory for engines on the shared clock and manual ticker."""

    def _make(config=None, rng=None, ticker=None):
        return RaceEngine(
            config=config if config is not None else RaceConfig(),
            rng=rng if rng is not None else np.random.default_rng(1234),
            ticker=ticker if ticker is not None else manual_ticker,
            clock=clock,
            wall_clock=lambda: RACE_DAY,
        )

    return _make


@pytest.fixture
def predictable_engine(make_engine):
    """Engine where every horse has fitness 50 and random factor 1.0."""
    return make_engine(rng=MidpointRng())
