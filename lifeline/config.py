"""Engine configuration from environment variables and scenario overrides."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Simulation settings.

    Every field can be set through a ``LIFELINE_``-prefixed environment
    variable (``LIFELINE_TICK_PERIOD=0.25``) or overridden by a scenario's
    ``settings:`` block.
    """

    model_config = SettingsConfigDict(env_prefix="LIFELINE_")

    # Seconds between clock ticks
    tick_period: float = Field(default=0.5, gt=0)

    # Units each SOURCE injects per tick
    source_output: float = Field(default=40.0, ge=0)

    # Link capacity when none is given
    default_max_flow: float = Field(default=50.0, gt=0)

    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    return Settings()
