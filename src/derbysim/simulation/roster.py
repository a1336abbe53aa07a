"""Competitor pool generation."""

import numpy as np

from derbysim.models import Competitor

HORSE_NAMES = [
    "Thunder", "Lightning", "Storm", "Blaze", "Shadow",
    "Spirit", "Maverick", "Phoenix", "Apollo", "Zeus",
    "Atlas", "Comet", "Flash", "Rocket", "Tornado",
    "Cyclone", "Tempest", "Fury", "Champion", "Victory",
]

HORSE_COLORS = [
    "#FF6B6B",  # Red
    "#4ECDC4",  # Teal
    "#45B7D1",  # Blue
    "#FFA07A",  # Light Salmon
    "#98D8C8",  # Mint
    "#F7DC6F",  # Yellow
    "#BB8FCE",  # Purple
    "#85C1E2",  # Sky Blue
    "#F8B739",  # Orange
    "#52B788",  # Green
    "#FF8FA3",  # Pink
    "#6C5CE7",  # Indigo
    "#FFB6B9",  # Light Pink
    "#A8E6CF",  # Light Green
    "#FFD93D",  # Gold
    "#95E1D3",  # Aqua
    "#F38181",  # Coral
    "#AA96DA",  # Lavender
    "#FCBAD3",  # Light Rose
    "#74B9FF",  # Light Blue
]

FALLBACK_COLOR = "#000000"

MIN_FITNESS = 1
MAX_FITNESS = 100


class RosterGenerator:
    """Builds the competitor pool for a race."""

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        names: list[str] | None = None,
        colors: list[str] | None = None,
    ):
        """Initialize roster generator.

        Args:
            rng: Random number generator
            names: Ordered name table (defaults to HORSE_NAMES)
            colors: Ordered color table (defaults to HORSE_COLORS)
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.names = names if names is not None else HORSE_NAMES
        self.colors = colors if colors is not None else HORSE_COLORS

    def generate(self, pool_size: int) -> dict[int, Competitor]:
        """Generate competitors with ids 1..pool_size.

        Identity comes from the name/color tables by position; positions past
        the end of a table get a synthesized identity. Fitness is drawn
        independently for each competitor.
        """
        if pool_size < 1:
            raise ValueError(f"pool_size must be >= 1, got {pool_size}")

        roster: dict[int, Competitor] = {}
        for index in range(pool_size):
            competitor_id = index + 1
            roster[competitor_id] = Competitor(
                id=competitor_id,
                name=self.names[index] if index < len(self.names) else f"Horse {competitor_id}",
                color=self.colors[index] if index < len(self.colors) else FALLBACK_COLOR,
                fitness=int(self.rng.integers(MIN_FITNESS, MAX_FITNESS + 1)),
            )

        return roster
