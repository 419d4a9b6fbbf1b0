"""Centralized simulation settings for the card collection calculator.

This module provides environment variable-based configuration for the
simulation engine. Values can also be supplied through a ``.env`` file.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


# Defaults observed in the original calculator window
DEFAULT_WORKER_COUNT = 10
DEFAULT_MIN_TRIALS = 1
DEFAULT_MAX_TRIALS = 100_000
DEFAULT_TRIALS = 10_000
DEFAULT_EXECUTOR = "thread"
DEFAULT_LOG_LEVEL = "INFO"

EXECUTOR_KINDS = ("thread", "serial")


@dataclass(frozen=True)
class SimulationSettings:
    """Configuration for simulation runs.

    Attributes:
        worker_count: Number of parallel workers per run (W).
        min_trials: Smallest accepted trial count.
        max_trials: Largest accepted trial count.
        default_trials: Trial count used when a caller does not pass one.
        executor: Parallel backend, "thread" or "serial".
        log_level: Root logging level.
    """

    worker_count: int = DEFAULT_WORKER_COUNT
    min_trials: int = DEFAULT_MIN_TRIALS
    max_trials: int = DEFAULT_MAX_TRIALS
    default_trials: int = DEFAULT_TRIALS
    executor: str = DEFAULT_EXECUTOR
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if self.worker_count < 1:
            raise ValueError("SIM_WORKER_COUNT must be at least 1")
        if self.min_trials < 0 or self.max_trials < self.min_trials:
            raise ValueError("SIM_MIN_TRIALS/SIM_MAX_TRIALS do not form a valid range")
        if not self.min_trials <= self.default_trials <= self.max_trials:
            raise ValueError("SIM_DEFAULT_TRIALS must lie within the trial bounds")
        if self.executor not in EXECUTOR_KINDS:
            raise ValueError(
                f"SIM_EXECUTOR must be one of {', '.join(EXECUTOR_KINDS)}, got {self.executor!r}"
            )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@lru_cache(maxsize=1)
def get_settings() -> SimulationSettings:
    """Load simulation settings from environment variables.

    Environment variables (all optional with defaults):
        SIM_WORKER_COUNT: Workers per run (default: 10)
        SIM_MIN_TRIALS: Minimum trial count (default: 1)
        SIM_MAX_TRIALS: Maximum trial count (default: 100000)
        SIM_DEFAULT_TRIALS: Default trial count (default: 10000)
        SIM_EXECUTOR: "thread" or "serial" (default: thread)
        LOG_LEVEL: Logging level (default: INFO)

    Returns:
        SimulationSettings with values from environment.

    Raises:
        ValueError: If a variable holds an invalid value.
    """
    return SimulationSettings(
        worker_count=_int_env("SIM_WORKER_COUNT", DEFAULT_WORKER_COUNT),
        min_trials=_int_env("SIM_MIN_TRIALS", DEFAULT_MIN_TRIALS),
        max_trials=_int_env("SIM_MAX_TRIALS", DEFAULT_MAX_TRIALS),
        default_trials=_int_env("SIM_DEFAULT_TRIALS", DEFAULT_TRIALS),
        executor=os.getenv("SIM_EXECUTOR", DEFAULT_EXECUTOR).strip().lower(),
        log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper(),
    )


def clear_settings_cache() -> None:
    """Clear the cached settings.

    Useful for testing when environment variables change.
    """
    get_settings.cache_clear()
