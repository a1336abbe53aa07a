"""Race configuration."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

from derbysim.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DISTANCES = [1200, 1400, 1600, 1800, 2000, 2200]


class RaceConfig(BaseModel):
    """Construction-time settings for a race engine."""

    pool_size: int = Field(
        default=20,
        ge=1,
        description="Number of competitors generated on start",
    )
    competitors_per_round: int = Field(
        default=10,
        ge=1,
        description="Competitors drawn from the pool for each round",
    )
    round_count: int = Field(
        default=6,
        ge=1,
        description="Number of rounds in a race",
    )
    base_speed: float = Field(
        default=2.0,
        gt=0.0,
        description="Speed every competitor has before fitness is applied",
    )
    tick_interval_ms: int = Field(
        default=100,
        ge=1,
        description="Wall-clock milliseconds between simulation ticks",
    )
    distances: list[int] = Field(
        default_factory=lambda: list(DEFAULT_DISTANCES),
        description="Configured distance of each round in meters, ascending",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the default random generator (None = entropy)",
    )

    @model_validator(mode="after")
    def _check_consistency(self) -> "RaceConfig":
        if self.competitors_per_round > self.pool_size:
            raise ValueError(
                f"competitors_per_round ({self.competitors_per_round}) "
                f"exceeds pool_size ({self.pool_size})"
            )
        if len(self.distances) != self.round_count:
            raise ValueError(
                f"expected {self.round_count} distances, got {len(self.distances)}"
            )
        if any(b <= a for a, b in zip(self.distances, self.distances[1:])):
            raise ValueError("distances must be strictly ascending")
        return self


def load_config(path: str | Path) -> RaceConfig:
    """Load a race configuration from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        Validated RaceConfig

    Raises:
        ConfigurationError: If the file is missing or fails validation
    """
    path = Path(path)
    try:
        raw = path.read_text()
    except OSError as e:
        raise ConfigurationError(str(path), f"cannot read file: {e}") from e

    try:
        config = RaceConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigurationError(
            str(path),
            "validation failed",
            details={"errors": e.errors(include_url=False)},
        ) from e

    logger.debug("Loaded race config from %s", path)
    return config
