"""Console output formatting."""

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from derbysim.analysis.standings import CompetitorStatistics
from derbysim.models import Competitor, RoundResult
from derbysim.output.formatting import format_elapsed

if TYPE_CHECKING:
    from derbysim.simulation.engine import RaceEngine


class ConsoleOutput:
    """Formats race state and results for console display."""

    @staticmethod
    def print_round_result(result: RoundResult, roster: Mapping[int, Competitor]) -> None:
        """Print the placings of one completed round.

        Args:
            result: Completed round
            roster: Competitor pool used to resolve names
        """
        print("\n" + "=" * 50)
        print(f"ROUND {result.round_index + 1} - {result.distance}m")
        print(f"Started {result.timestamp:%Y-%m-%d %H:%M:%S}")
        print("=" * 50)
        print(f"{'Pos':<4} {'Horse':<20} {'Time':<12} {'Gap':<10}")
        print("-" * 50)

        winner_ms = result.rankings[0].finish_elapsed_ms if result.rankings else 0

        for ranking in result.rankings:
            competitor = roster.get(ranking.competitor_id)
            name = competitor.name if competitor is not None else f"#{ranking.competitor_id}"

            gap = ""
            if ranking.rank > 1:
                gap = f"+{format_elapsed(ranking.finish_elapsed_ms - winner_ms)}"

            print(
                f"{ranking.rank:<4} "
                f"{name:<20} "
                f"{ranking.finish_time:<12} "
                f"{gap:<10}"
            )

        print("=" * 50)

    @staticmethod
    def print_progress(engine: "RaceEngine", width: int = 30) -> None:
        """Print a one-line-per-horse progress view of the active round."""
        snapshot = engine.snapshot()
        roster = engine.roster

        if snapshot.current_round_index < 0:
            print("Race not started")
            return
        if snapshot.current_round_index >= snapshot.round_count:
            print("Race finished")
            return

        state = "PAUSED" if snapshot.paused else "RUNNING"
        print(
            f"\nRound {snapshot.current_round_index + 1}/{snapshot.round_count} "
            f"({snapshot.round_distance}m) {state} {format_elapsed(snapshot.elapsed_ms)}"
        )
        for entry in snapshot.progress:
            filled = int(min(entry.distance, 100.0) / 100.0 * width)
            bar = "#" * filled + "." * (width - filled)
            place = f"P{entry.rank}" if entry.finished else ""
            print(f"{roster[entry.competitor_id].name:<12} |{bar}| {place}")

    @staticmethod
    def print_race_summary(
        results: Sequence[RoundResult],
        roster: Mapping[int, Competitor],
    ) -> None:
        """Print the winner of every completed round."""
        print("\n" + "=" * 60)
        print("RACE SUMMARY")
        print("=" * 60)
        print(f"{'Round':<7} {'Distance':<10} {'Winner':<20} {'Time':<12}")
        print("-" * 60)

        for result in results:
            winner = result.rankings[0]
            print(
                f"{result.round_index + 1:<7} "
                f"{str(result.distance) + 'm':<10} "
                f"{roster[winner.competitor_id].name:<20} "
                f"{winner.finish_time:<12}"
            )

        print("=" * 60)

    @staticmethod
    def print_standings(stats: Mapping[int, CompetitorStatistics]) -> None:
        """Print aggregated per-horse statistics.

        Args:
            stats: Output of compute_standings, already ordered
        """
        print("\n" + "=" * 70)
        print("STANDINGS")
        print("=" * 70)
        print(
            f"{'Horse':<20} {'Runs':<5} {'Wins':<5} {'Podiums':<8} "
            f"{'Avg pos':<8} {'Best':<5} {'Avg time':<12}"
        )
        print("-" * 70)

        for entry in stats.values():
            print(
                f"{entry.name:<20} "
                f"{entry.rounds_run:<5} "
                f"{entry.wins:<5} "
                f"{entry.podiums:<8} "
                f"{entry.avg_rank:<8.2f} "
                f"{entry.best_rank:<5} "
                f"{format_elapsed(entry.avg_finish_ms):<12}"
            )

        print("=" * 70)
