"""Result aggregation."""

from .standings import CompetitorStatistics, compute_standings

__all__ = ["CompetitorStatistics", "compute_standings"]
