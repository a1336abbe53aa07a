"""Export race results to CSV and JSON."""

import csv
import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from derbysim.analysis.standings import compute_standings
from derbysim.models import Competitor, RoundResult

logger = logging.getLogger(__name__)


class Exporter:
    """Exports race results to various formats."""

    def __init__(self, output_dir: str | Path = "output"):
        """Initialize exporter.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_results_csv(
        self,
        results: Sequence[RoundResult],
        roster: Mapping[int, Competitor],
        filename: str = "round_results.csv",
    ) -> Path:
        """Export every placing of every round to CSV.

        Args:
            results: Completed rounds
            roster: Competitor pool used to resolve names
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow([
                "round", "distance", "started_at", "rank", "competitor_id",
                "name", "fitness", "finish_ms", "finish_time",
            ])

            for result in results:
                for ranking in result.rankings:
                    competitor = roster.get(ranking.competitor_id)
                    writer.writerow([
                        result.round_index + 1,
                        result.distance,
                        result.timestamp.isoformat(),
                        ranking.rank,
                        ranking.competitor_id,
                        competitor.name if competitor else "",
                        competitor.fitness if competitor else "",
                        f"{ranking.finish_elapsed_ms:.3f}",
                        ranking.finish_time,
                    ])

        logger.debug("Wrote %d rounds to %s", len(results), filepath)
        return filepath

    def export_results_json(
        self,
        results: Sequence[RoundResult],
        roster: Mapping[int, Competitor],
        filename: str = "race.json",
    ) -> Path:
        """Export roster, round results and standings to JSON.

        Args:
            results: Completed rounds
            roster: Competitor pool
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        standings = compute_standings(results, roster)
        data: dict[str, Any] = {
            "roster": [competitor.model_dump() for competitor in roster.values()],
            "rounds": [
                {
                    "round": result.round_index + 1,
                    "distance": result.distance,
                    "started_at": result.timestamp.isoformat(),
                    "rankings": [
                        {
                            "rank": ranking.rank,
                            "competitor_id": ranking.competitor_id,
                            "finish_ms": ranking.finish_elapsed_ms,
                            "finish_time": ranking.finish_time,
                        }
                        for ranking in result.rankings
                    ],
                }
                for result in results
            ],
            "standings": {
                str(competitor_id): {
                    "name": stats.name,
                    "rounds_run": stats.rounds_run,
                    "wins": stats.wins,
                    "win_rate": stats.win_rate,
                    "podiums": stats.podiums,
                    "podium_rate": stats.podium_rate,
                    "avg_rank": stats.avg_rank,
                    "best_rank": stats.best_rank,
                    "worst_rank": stats.worst_rank,
                    "avg_finish_ms": stats.avg_finish_ms,
                }
                for competitor_id, stats in standings.items()
            },
        }

        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)

        logger.debug("Wrote race summary to %s", filepath)
        return filepath

    def export_all(
        self,
        results: Sequence[RoundResult],
        roster: Mapping[int, Competitor],
        prefix: str = "",
    ) -> dict[str, Path]:
        """Export all result formats.

        Args:
            results: Completed rounds
            roster: Competitor pool
            prefix: Optional prefix for filenames

        Returns:
            Dictionary of format -> filepath
        """
        prefix = f"{prefix}_" if prefix else ""

        return {
            "rounds_csv": self.export_results_csv(
                results, roster, f"{prefix}round_results.csv"
            ),
            "race_json": self.export_results_json(
                results, roster, f"{prefix}race.json"
            ),
        }
