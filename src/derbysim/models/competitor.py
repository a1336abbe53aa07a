"""Competitor model with fixed identity and fitness."""

from pydantic import BaseModel, ConfigDict, Field


class Competitor(BaseModel):
    """Represents a horse in the pool."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, description="Unique, stable competitor identifier")
    name: str = Field(..., description="Display name")
    color: str = Field(..., description="Display color as a hex string (e.g., '#FF6B6B')")
    fitness: int = Field(
        ...,
        ge=1,
        le=100,
        description="Condition on race day; higher = faster",
    )

    def base_speed_bonus(self) -> float:
        """Speed added on top of the configured base speed."""
        return self.fitness / 100
