# npcaffect/config.py
"""
Configuration for the npcaffect appraisal engine.

Values are loaded from environment variables (or a project-level .env file)
and validated with Pydantic. An engine built without an explicit config
reads these defaults, so a game can tune decay and gain without code changes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Resolve .env relative to the project root (one level above npcaffect/),
# so the config works regardless of the caller's working directory.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

MAX_GAIN = 20.0


class DecayConfig(BaseSettings):
    """How fast emotions fade when nothing new is appraised."""

    # Per-second factor: subtracted (linear) or multiplied in (exponential).
    factor: float = Field(0.8, alias="NPCAFFECT_DECAY_FACTOR")
    function: Literal["linear", "exponential"] = Field(
        "exponential", alias="NPCAFFECT_DECAY_FUNCTION"
    )
    # Cadence for DecayTicker; does not change the rate, only the step size.
    interval_seconds: float = Field(1.0, alias="NPCAFFECT_DECAY_INTERVAL")

    model_config = {"env_file": _ENV_FILE, "extra": "ignore", "populate_by_name": True}

    @field_validator("interval_seconds")
    @classmethod
    def _positive_interval(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("decay interval must be positive")
        return value


class AppraisalConfig(BaseSettings):
    """Top-level engine configuration."""

    default_gain: float = Field(1.0, alias="NPCAFFECT_GAIN")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "WARNING", alias="NPCAFFECT_LOG_LEVEL"
    )
    decay: DecayConfig = Field(default_factory=DecayConfig)

    model_config = {"env_file": _ENV_FILE, "extra": "ignore", "populate_by_name": True}

    @field_validator("default_gain")
    @classmethod
    def _gain_in_range(cls, value: float) -> float:
        if value <= 0 or value > MAX_GAIN:
            raise ValueError(f"gain must be in (0, {MAX_GAIN:g}]")
        return value

    def __repr__(self) -> str:
        return (
            f"AppraisalConfig(gain={self.default_gain}, "
            f"decay={self.decay.function}:{self.decay.factor}, "
            f"interval={self.decay.interval_seconds}s)"
        )
