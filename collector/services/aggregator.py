"""Reduce per-trial draw counts to summary statistics."""

import statistics
from collections.abc import Sequence

from collector.models.simulation_models import SimulationRun, SimulationSummary


def summarize(results: Sequence[int]) -> float | None:
    """Return the mean draw count, or None when there are no results."""
    if not results:
        return None
    return sum(results) / len(results)


def describe(run: SimulationRun) -> SimulationSummary:
    """Build the reported summary for a finished run.

    Empty runs report None for every statistic instead of failing.
    """
    results = run.results
    item_set = run.config.item_set
    has_data = bool(results)

    return SimulationSummary(
        n_trials=len(results),
        n_workers=run.config.n_workers,
        item_count=len(item_set.items),
        target_count=item_set.target_count,
        average=summarize(results),
        median=float(statistics.median(results)) if has_data else None,
        minimum=min(results) if has_data else None,
        maximum=max(results) if has_data else None,
        duration_ms=run.duration_ms,
    )
