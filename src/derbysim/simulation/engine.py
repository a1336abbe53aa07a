"""Race engine: tick-driven state machine running successive rounds."""

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType

import numpy as np

from derbysim.config import RaceConfig
from derbysim.exceptions import RosterIntegrityError
from derbysim.models import Competitor, CompetitorRanking, RacingCompetitor, RoundResult
from derbysim.output.formatting import format_elapsed
from derbysim.simulation.roster import RosterGenerator
from derbysim.simulation.schedule import ScheduleGenerator
from derbysim.simulation.selector import RoundSelector
from derbysim.simulation.ticker import ThreadedTicker, Ticker, monotonic_ms

logger = logging.getLogger(__name__)

NOT_STARTED = -1

FINISH_LINE = 100.0

# Speed model constants. The distance factor is anchored on the first
# round's distance for every round.
DISTANCE_FACTOR_REFERENCE = 1200
DISTANCE_FACTOR_SCALE = 10000
RANDOM_FACTOR_MIN = 0.7
RANDOM_FACTOR_MAX = 1.3


class EngineStatus(str, Enum):
    """Lifecycle state of a race engine."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


@dataclass(frozen=True)
class EngineSnapshot:
    """Point-in-time copy of the engine's published state."""

    status: EngineStatus
    current_round_index: int
    round_count: int
    paused: bool
    round_distance: int
    progress: tuple[RacingCompetitor, ...]
    results: tuple[RoundResult, ...]
    elapsed_ms: float


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RaceEngine:
    """Runs a race of several rounds, one tick at a time.

    Lifecycle: construct -> start() -> tick()/pause()/resume() -> reset().
    A round ends when every competitor in it has crossed the finish line;
    the engine then records the round result and moves on to the next
    round, or stops for good after the last one.

    Every command and tick runs under one re-entrant lock, so a tick never
    interleaves with another tick or with a command.
    """

    def __init__(
        self,
        config: RaceConfig | None = None,
        rng: np.random.Generator | None = None,
        ticker: Ticker | None = None,
        clock: Callable[[], float] | None = None,
        wall_clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the race engine.

        Args:
            config: Race settings (defaults to RaceConfig())
            rng: Random number generator shared by all random draws
            ticker: Tick cadence (defaults to a ThreadedTicker)
            clock: Monotonic millisecond clock used for elapsed times
            wall_clock: Clock used for round timestamps
        """
        self.config = config if config is not None else RaceConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.ticker = ticker if ticker is not None else ThreadedTicker()
        self._clock = clock if clock is not None else monotonic_ms
        self._wall_clock = wall_clock if wall_clock is not None else _utc_now

        self.roster_generator = RosterGenerator(rng=self.rng)
        self.schedule_generator = ScheduleGenerator(self.config.distances)
        self.selector = RoundSelector(rng=self.rng)

        self._lock = threading.RLock()
        self._cadence_generation = 0

        self._roster: dict[int, Competitor] = {}
        self._distances: list[int] = []
        self._round_state: dict[int, RacingCompetitor] = {}
        self._results: list[RoundResult] = []

        self._round_index = NOT_STARTED
        self._paused = True
        self._finished_count = 0
        self._round_start_ref = 0.0
        self._round_started_at: datetime | None = None
        self._paused_ms = 0.0
        self._pause_start_ref: float | None = None

    # -- published state --

    @property
    def roster(self) -> dict[int, Competitor]:
        return dict(self._roster)

    @property
    def round_progress(self) -> Mapping[int, RacingCompetitor]:
        """Live per-competitor state of the active round, keyed by id."""
        return MappingProxyType(self._round_state)

    @property
    def results(self) -> tuple[RoundResult, ...]:
        return tuple(self._results)

    @property
    def distances(self) -> list[int]:
        return list(self._distances)

    @property
    def current_round_index(self) -> int:
        return self._round_index

    @property
    def round_count(self) -> int:
        return self.config.round_count

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def finished_count(self) -> int:
        return self._finished_count

    @property
    def accumulated_paused_ms(self) -> float:
        return self._paused_ms

    @property
    def is_round_active(self) -> bool:
        return 0 <= self._round_index < self.round_count

    @property
    def status(self) -> EngineStatus:
        if self._round_index == NOT_STARTED:
            return EngineStatus.NOT_STARTED
        if self._round_index >= self.round_count:
            return EngineStatus.FINISHED
        return EngineStatus.PAUSED if self._paused else EngineStatus.RUNNING

    @property
    def racing_ids(self) -> list[int]:
        return sorted(self._round_state)

    @property
    def current_round_distance(self) -> int:
        if not self.is_round_active:
            return 0
        return self._distances[self._round_index]

    def elapsed_ms(self) -> float:
        """Time the active round has been running, paused intervals excluded."""
        with self._lock:
            if not self.is_round_active:
                return 0.0
            now = self._pause_start_ref if self._pause_start_ref is not None else self._clock()
            return max(0.0, now - self._round_start_ref - self._paused_ms)

    def snapshot(self) -> EngineSnapshot:
        """Copy of the published state, safe to hand to observers."""
        with self._lock:
            return EngineSnapshot(
                status=self.status,
                current_round_index=self._round_index,
                round_count=self.round_count,
                paused=self._paused,
                round_distance=self.current_round_distance,
                progress=tuple(replace(self._round_state[i]) for i in sorted(self._round_state)),
                results=tuple(self._results),
                elapsed_ms=self.elapsed_ms(),
            )

    # -- commands --

    def start(self) -> None:
        """Generate a fresh roster and schedule and run the first round.

        Ignored unless the engine is not started (or has been reset).
        """
        with self._lock:
            if self._round_index != NOT_STARTED:
                logger.debug("start() ignored, race is %s", self.status.value)
                return

            self._stop_cadence()
            self._roster = self.roster_generator.generate(self.config.pool_size)
            self._distances = self.schedule_generator.generate()
            self._results = []

            logger.info(
                "Race started: %d competitors, %d rounds (%s)",
                len(self._roster),
                self.round_count,
                ", ".join(f"{d}m" for d in self._distances),
            )
            self._begin_round(0)

    def pause(self) -> None:
        """Stop ticking until resume(). Ignored unless a round is running."""
        with self._lock:
            if not self.is_round_active or self._paused:
                logger.debug("pause() ignored, race is %s", self.status.value)
                return

            self._pause_start_ref = self._clock()
            self._paused = True
            self._stop_cadence()
            logger.debug("Round %d paused", self._round_index + 1)

    def resume(self) -> None:
        """Continue a paused round. Ignored unless a pause is pending."""
        with self._lock:
            if not self._paused or self._pause_start_ref is None:
                logger.debug("resume() ignored, race is %s", self.status.value)
                return

            pause_duration = self._clock() - self._pause_start_ref
            self._paused_ms += pause_duration
            self._pause_start_ref = None
            self._paused = False
            self._start_cadence()
            logger.debug(
                "Round %d resumed after %.0fms paused", self._round_index + 1, pause_duration
            )

    def reset(self) -> None:
        """Drop all round state and results. The roster is kept until the next start()."""
        with self._lock:
            self._stop_cadence()
            self._round_state = {}
            self._results = []
            self._finished_count = 0
            self._paused_ms = 0.0
            self._pause_start_ref = None
            self._round_started_at = None
            self._round_index = NOT_STARTED
            self._paused = True
            logger.info("Race reset")

    # -- simulation --

    def tick(self) -> None:
        """Advance every unfinished competitor of the active round by one step.

        Competitors crossing the line in the same tick are ranked by distance
        covered (furthest first), then by id.
        """
        with self._lock:
            if not self.is_round_active or self._paused:
                return

            now = self._clock()
            crossed: list[RacingCompetitor] = []

            for competitor_id in sorted(self._round_state):
                entry = self._round_state[competitor_id]
                if entry.finished:
                    continue

                competitor = self._roster.get(competitor_id)
                if competitor is None:
                    self._stop_cadence()
                    raise RosterIntegrityError(
                        competitor_id,
                        details={"round_index": self._round_index},
                    )

                entry.distance += self._calculate_speed(competitor, entry.distance)
                if entry.distance > FINISH_LINE:
                    crossed.append(entry)

            crossed.sort(key=lambda e: (-e.distance, e.competitor_id))
            for entry in crossed:
                self._record_finish(entry, now)

            if self._finished_count == len(self._round_state):
                self._complete_round()

    def _calculate_speed(self, competitor: Competitor, distance: float) -> float:
        random_factor = float(self.rng.uniform(RANDOM_FACTOR_MIN, RANDOM_FACTOR_MAX))
        distance_factor = 1 - (distance - DISTANCE_FACTOR_REFERENCE) / DISTANCE_FACTOR_SCALE
        base = self.config.base_speed + competitor.base_speed_bonus()
        return base * random_factor * distance_factor

    def _record_finish(self, entry: RacingCompetitor, now: float) -> None:
        self._finished_count += 1
        entry.finished = True
        entry.rank = self._finished_count
        entry.finish_elapsed = max(0.0, now - self._round_start_ref - self._paused_ms)
        logger.debug(
            "Competitor %d finished round %d in position %d (%s)",
            entry.competitor_id,
            self._round_index + 1,
            entry.rank,
            format_elapsed(entry.finish_elapsed),
        )

    def _complete_round(self) -> None:
        self._stop_cadence()

        rankings = tuple(
            CompetitorRanking(
                competitor_id=entry.competitor_id,
                rank=entry.rank,
                finish_elapsed_ms=entry.finish_elapsed,
                finish_time=format_elapsed(entry.finish_elapsed),
            )
            for entry in sorted(self._round_state.values(), key=lambda e: e.rank)
        )
        result = RoundResult(
            round_index=self._round_index,
            rankings=rankings,
            distance=self.current_round_distance,
            timestamp=self._round_started_at,
        )
        self._results.append(result)

        winner = rankings[0]
        logger.info(
            "Round %d complete: %s won the %dm in %s",
            self._round_index + 1,
            self._roster[winner.competitor_id].name,
            result.distance,
            winner.finish_time,
        )
        self._advance_round()

    def _advance_round(self) -> None:
        next_index = self._round_index + 1
        if next_index >= self.round_count:
            self._finish_race(next_index)
        else:
            self._begin_round(next_index)

    def _begin_round(self, index: int) -> None:
        self._round_index = index
        selected = self.selector.select(self._roster, self.config.competitors_per_round)
        self._round_state = {cid: RacingCompetitor(competitor_id=cid) for cid in selected}
        self._finished_count = 0
        self._paused_ms = 0.0
        self._pause_start_ref = None
        self._round_started_at = self._wall_clock()
        self._round_start_ref = self._clock()
        self._paused = False

        logger.info(
            "Round %d/%d started: %dm, competitors %s",
            index + 1,
            self.round_count,
            self.current_round_distance,
            sorted(selected),
        )
        self._start_cadence()

    def _finish_race(self, final_index: int) -> None:
        self._stop_cadence()
        self._round_index = final_index
        self._round_state = {}
        self._finished_count = 0
        self._pause_start_ref = None
        self._paused = True
        logger.info("Race finished after %d rounds", len(self._results))

    # -- cadence --

    def _start_cadence(self) -> None:
        self._cadence_generation += 1
        generation = self._cadence_generation
        self.ticker.start(lambda: self._on_cadence(generation), self.config.tick_interval_ms)

    def _stop_cadence(self) -> None:
        self._cadence_generation += 1
        self.ticker.stop()

    def _on_cadence(self, generation: int) -> None:
        with self._lock:
            # A stopped cadence may still deliver one call already in flight.
            if generation != self._cadence_generation:
                return
            self.tick()
