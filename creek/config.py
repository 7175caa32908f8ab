"""
Engine configuration.

Rule constants live here so the reducer, the executor and the bots agree
on them. Deployment settings are read from CREEK_* environment variables.
"""

from __future__ import annotations
from dataclasses import dataclass
import os


@dataclass(frozen=True)
class EngineConfig:
    """Tunable rule and runtime settings."""
    finish_paddles: int = 2  # Paddles required to win on FINISH
    starting_paddles: int = 1
    dice_sides: int = 6
    max_chained_draws: int = 3  # Cap on "draw again" chains within one landing
    bot_delay_seconds: float = 1.0  # Cosmetic; callers schedule, engine never sleeps

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Build a config, letting CREEK_* variables override defaults."""
        return cls(
            finish_paddles=int(os.getenv("CREEK_FINISH_PADDLES", cls.finish_paddles)),
            starting_paddles=int(os.getenv("CREEK_STARTING_PADDLES", cls.starting_paddles)),
            dice_sides=int(os.getenv("CREEK_DICE_SIDES", cls.dice_sides)),
            max_chained_draws=int(os.getenv("CREEK_MAX_CHAINED_DRAWS", cls.max_chained_draws)),
            bot_delay_seconds=float(os.getenv("CREEK_BOT_DELAY_SECONDS", cls.bot_delay_seconds)),
        )


DEFAULT_CONFIG = EngineConfig()

# Environment configuration
CREEK_ENV = os.getenv("CREEK_ENV", "development")
CREEK_LOG_LEVEL = os.getenv("CREEK_LOG_LEVEL", "INFO")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
