"""
Configuration settings using dataclasses.
"""
import os
from dataclasses import dataclass, field
from typing import Optional
from . import defaults


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    return int(value)


@dataclass
class PlannerSettings:
    """Central configuration for plate_planner."""

    # Layout settings
    default_plate_format: int = field(default=defaults.DEFAULT_PLATE_FORMAT)
    random_seed: Optional[int] = field(default=defaults.DEFAULT_RANDOM_SEED)

    # Calculator settings
    default_well_volume_ul: float = field(default=defaults.DEFAULT_WELL_VOLUME_UL)

    # Logging
    log_level: str = field(default=defaults.DEFAULT_LOG_LEVEL)

    @classmethod
    def load_from_env(cls) -> 'PlannerSettings':
        """Load settings from environment variables."""
        return cls(
            default_plate_format=int(os.getenv("PLATE_PLANNER_DEFAULT_PLATE_FORMAT", defaults.DEFAULT_PLATE_FORMAT)),
            random_seed=_optional_int(os.getenv("PLATE_PLANNER_RANDOM_SEED")),
            default_well_volume_ul=float(os.getenv("PLATE_PLANNER_DEFAULT_WELL_VOLUME_UL", defaults.DEFAULT_WELL_VOLUME_UL)),
            log_level=os.getenv("PLATE_PLANNER_LOG_LEVEL", defaults.DEFAULT_LOG_LEVEL).upper(),
        )

# Global settings instance
settings = PlannerSettings.load_from_env()
