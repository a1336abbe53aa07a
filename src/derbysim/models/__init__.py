"""Data models for race simulation."""

from .competitor import Competitor
from .round import CompetitorRanking, RacingCompetitor, RoundResult

__all__ = [
    "Competitor",
    "CompetitorRanking",
    "RacingCompetitor",
    "RoundResult",
]
