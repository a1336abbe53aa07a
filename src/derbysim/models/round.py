"""Per-round state and results."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class RacingCompetitor:
    """Tracks a competitor's progress during the active round."""

    competitor_id: int
    distance: float = 0.0
    rank: int = 0  # 0 = not finished
    finished: bool = False
    finish_elapsed: float = 0.0  # ms, 0 = not finished


@dataclass(frozen=True)
class CompetitorRanking:
    """Final placing of a competitor in a completed round."""

    competitor_id: int
    rank: int
    finish_elapsed_ms: float
    finish_time: str


@dataclass(frozen=True)
class RoundResult:
    """Result of a completed round."""

    round_index: int
    rankings: tuple[CompetitorRanking, ...]
    distance: int
    timestamp: datetime

    @property
    def winner_id(self) -> int | None:
        """Id of the first-placed competitor."""
        return self.rankings[0].competitor_id if self.rankings else None

    def rank_of(self, competitor_id: int) -> int | None:
        """Rank of a competitor in this round, None if it did not race."""
        for ranking in self.rankings:
            if ranking.competitor_id == competitor_id:
                return ranking.rank
        return None
