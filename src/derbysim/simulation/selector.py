"""Random selection of the competitors running a round."""

from collections.abc import Mapping

import numpy as np

from derbysim.models import Competitor


class RoundSelector:
    """Draws a duplicate-free subset of the roster for each round."""

    def __init__(self, rng: np.random.Generator | None = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def select(self, roster: Mapping[int, Competitor], k: int) -> list[int]:
        """Pick k distinct competitor ids uniformly without replacement.

        The order of the returned ids carries no meaning.

        Args:
            roster: Competitor pool keyed by id
            k: Number of competitors to draw

        Returns:
            List of k distinct ids from the roster
        """
        if k < 0 or k > len(roster):
            raise ValueError(f"cannot select {k} competitors from a pool of {len(roster)}")

        ids = np.fromiter(roster.keys(), dtype=np.int64, count=len(roster))
        chosen = self.rng.choice(ids, size=k, replace=False)
        return [int(competitor_id) for competitor_id in chosen]
