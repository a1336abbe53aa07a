"""Per-competitor statistics aggregated over completed rounds."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from derbysim.models import Competitor, RoundResult

PODIUM_RANK = 3


@dataclass
class CompetitorStatistics:
    """Aggregated statistics for a competitor across rounds."""

    competitor_id: int
    name: str
    rounds_run: int = 0
    wins: int = 0
    podiums: int = 0
    avg_rank: float = 0.0
    best_rank: int | None = None
    worst_rank: int | None = None
    avg_finish_ms: float = 0.0
    ranks: list[int] = field(default_factory=list)
    finish_times_ms: list[float] = field(default_factory=list)

    @property
    def win_rate(self) -> float:
        """Win percentage."""
        return self.wins / self.rounds_run * 100 if self.rounds_run else 0

    @property
    def podium_rate(self) -> float:
        """Podium percentage."""
        return self.podiums / self.rounds_run * 100 if self.rounds_run else 0


def compute_standings(
    results: Iterable[RoundResult],
    roster: Mapping[int, Competitor],
) -> dict[int, CompetitorStatistics]:
    """Aggregate round results into per-competitor statistics.

    Competitors that never raced are left out. The returned dict is ordered
    by wins (descending), then average rank, then id.
    """
    stats: dict[int, CompetitorStatistics] = {}

    for result in results:
        for ranking in result.rankings:
            competitor = roster.get(ranking.competitor_id)
            name = competitor.name if competitor is not None else f"#{ranking.competitor_id}"
            entry = stats.setdefault(
                ranking.competitor_id,
                CompetitorStatistics(competitor_id=ranking.competitor_id, name=name),
            )
            entry.rounds_run += 1
            entry.ranks.append(ranking.rank)
            entry.finish_times_ms.append(ranking.finish_elapsed_ms)
            if ranking.rank == 1:
                entry.wins += 1
            if ranking.rank <= PODIUM_RANK:
                entry.podiums += 1

    for entry in stats.values():
        entry.avg_rank = sum(entry.ranks) / len(entry.ranks)
        entry.best_rank = min(entry.ranks)
        entry.worst_rank = max(entry.ranks)
        entry.avg_finish_ms = sum(entry.finish_times_ms) / len(entry.finish_times_ms)

    ordered = sorted(stats.values(), key=lambda s: (-s.wins, s.avg_rank, s.competitor_id))
    return {s.competitor_id: s for s in ordered}
