"""Round distance schedule."""

from derbysim.config import DEFAULT_DISTANCES


class ScheduleGenerator:
    """Supplies the fixed, ascending distance of every round."""

    def __init__(self, distances: list[int] | None = None):
        self.distances = list(distances) if distances is not None else list(DEFAULT_DISTANCES)
        if any(b <= a for a, b in zip(self.distances, self.distances[1:])):
            raise ValueError("round distances must be strictly ascending")

    def generate(self) -> list[int]:
        """Return a fresh copy of the schedule."""
        return list(self.distances)
