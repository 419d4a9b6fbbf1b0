"""Monte Carlo collection simulation engine.

Splits a run's trials across a fixed number of workers, gives every
worker its own seeded generator, and merges their draw counts into a
single SimulationRun.
"""

import random

from collector.core.logging_config import get_logger
from collector.core.settings import get_settings
from collector.models.simulation_models import RunConfig, SimulationRun
from collector.services.executors import PartitionExecutor, get_executor
from collector.services.sampler import Sampler
from collector.services.trial_runner import TrialRunner

logger = get_logger(__name__)

_SEED_BITS = 64


def partition_trials(n_trials: int, n_workers: int) -> list[int]:
    """Split ``n_trials`` over ``n_workers``.

    The first W-1 workers get N // W trials each and the last worker gets
    the remainder, so the sizes always sum to N.

    Raises:
        ValueError: If n_workers < 1 or n_trials < 0.
    """
    if n_workers < 1:
        raise ValueError(f"n_workers must be at least 1, got {n_workers}")
    if n_trials < 0:
        raise ValueError(f"n_trials must be non-negative, got {n_trials}")

    share = n_trials // n_workers
    return [share] * (n_workers - 1) + [n_trials - share * (n_workers - 1)]


def derive_worker_seeds(seed: int | None, n_workers: int) -> list[int]:
    """Derive one independent seed per worker.

    A fixed ``seed`` gives the same worker seeds every time. ``None``
    draws the base generator from OS entropy.
    """
    base = random.Random(seed)
    return [base.getrandbits(_SEED_BITS) for _ in range(n_workers)]


def run_simulation(
    config: RunConfig,
    executor: PartitionExecutor | None = None,
) -> SimulationRun:
    """Run every trial in ``config`` and collect the draw counts.

    Args:
        config: Immutable run configuration (item set, N, W, seed).
        executor: Parallel backend; defaults to the SIM_EXECUTOR setting.

    Returns:
        SimulationRun with exactly ``config.n_trials`` results and the
        wall-clock duration from worker spawn to join.

    Raises:
        WorkerFailedError: If any worker fails. No partial run is returned.
    """
    if executor is None:
        executor = get_executor(get_settings().executor)

    partitions = partition_trials(config.n_trials, config.n_workers)
    seeds = derive_worker_seeds(config.seed, config.n_workers)
    item_set = config.item_set

    def run_partition(worker_index: int, count: int) -> list[int]:
        runner = TrialRunner(Sampler(random.Random(seeds[worker_index])))
        return runner.run_trials(item_set, count)

    logger.info(
        f"Starting simulation: {config.n_trials} trials on {config.n_workers} workers",
        extra={
            "extra_data": {
                "n_trials": config.n_trials,
                "n_workers": config.n_workers,
                "executor": executor.name,
                "item_count": len(item_set.items),
                "target_count": item_set.target_count,
                "seed": config.seed,
            }
        },
    )

    results, duration_ms = executor.map_partitions(run_partition, partitions)

    logger.info(
        f"Simulation finished in {duration_ms:.1f}ms",
        extra={
            "extra_data": {
                "n_results": len(results),
                "duration_ms": round(duration_ms, 2),
            }
        },
    )

    return SimulationRun(config=config, results=results, duration_ms=duration_ms)
