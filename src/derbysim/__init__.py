"""Horse race simulation engine."""

from .config import RaceConfig, load_config
from .simulation import EngineStatus, RaceEngine

__all__ = ["EngineStatus", "RaceConfig", "RaceEngine", "load_config"]
