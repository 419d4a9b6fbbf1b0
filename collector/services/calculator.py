"""Calculate-button workflow with last-good-result retention.

A Calculator turns raw input into a summary in one call. It remembers
the most recent successful summary; a failed invocation leaves that
summary untouched so callers can keep showing it.

Typical usage:
    calculator = Calculator()
    try:
        summary = calculator.calculate("5, 10, 15", "1,3", 10000)
    except InputError as e:
        show_error(e.message)
    show(calculator.last_result)
"""

import threading
from dataclasses import dataclass
from functools import lru_cache

from collector.core.errors import InputError, TrialCountError
from collector.core.logging_config import get_logger
from collector.core.settings import SimulationSettings, get_settings
from collector.models.simulation_models import RunConfig, SimulationSummary
from collector.services.aggregator import describe
from collector.services.executors import PartitionExecutor, get_executor
from collector.services.item_parser import parse_item_set
from collector.services.simulator import run_simulation

logger = get_logger(__name__)

# Initial field values of the original calculator window
DEFAULT_WEIGHTS = "5, 10, 15, 20, 25"
DEFAULT_TARGETS = "1,2,3,4,5"


@dataclass(frozen=True)
class CalculatorDefaults:
    """Initial input values and accepted trial range."""

    weights: str
    targets: str
    n_trials: int
    min_trials: int
    max_trials: int


class Calculator:
    """Runs one simulation per ``calculate`` call and keeps the last success."""

    def __init__(
        self,
        settings: SimulationSettings | None = None,
        executor: PartitionExecutor | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.executor = executor or get_executor(self.settings.executor)
        self._lock = threading.Lock()
        self._last_result: SimulationSummary | None = None

    @property
    def last_result(self) -> SimulationSummary | None:
        """Most recent successful summary, or None before the first success."""
        with self._lock:
            return self._last_result

    @property
    def defaults(self) -> CalculatorDefaults:
        return CalculatorDefaults(
            weights=DEFAULT_WEIGHTS,
            targets=DEFAULT_TARGETS,
            n_trials=self.settings.default_trials,
            min_trials=self.settings.min_trials,
            max_trials=self.settings.max_trials,
        )

    def validate_trial_count(self, n_trials: int) -> None:
        """Raise TrialCountError if ``n_trials`` is outside the configured bounds."""
        low, high = self.settings.min_trials, self.settings.max_trials
        if not low <= n_trials <= high:
            raise TrialCountError(f"Trial count {n_trials} is outside the allowed range {low}-{high}")

    def calculate(
        self,
        weights_text: str,
        targets_text: str,
        n_trials: int | None = None,
        seed: int | None = None,
    ) -> SimulationSummary:
        """Parse input, run the simulation and summarize it.

        Args:
            weights_text: Comma-separated item weights.
            targets_text: Comma-separated 1-based target indices.
            n_trials: Trials to run; defaults to the configured default.
            seed: Optional seed for a reproducible run.

        Returns:
            The new summary, which also becomes ``last_result``.

        Raises:
            InputError: On unusable input; ``last_result`` is unchanged.
            WorkerFailedError: If a worker fails; ``last_result`` is unchanged.
        """
        if n_trials is None:
            n_trials = self.settings.default_trials

        try:
            self.validate_trial_count(n_trials)
            item_set = parse_item_set(weights_text, targets_text)
        except InputError as e:
            logger.warning(
                f"Rejected calculator input: {e.message}",
                extra={"extra_data": {"error": e.code, "n_trials": n_trials}},
            )
            raise

        config = RunConfig(
            item_set=item_set,
            n_trials=n_trials,
            n_workers=self.settings.worker_count,
            seed=seed,
        )
        summary = describe(run_simulation(config, executor=self.executor))

        with self._lock:
            self._last_result = summary
        return summary


@lru_cache(maxsize=1)
def get_calculator() -> Calculator:
    """Process-wide calculator shared by the API."""
    return Calculator()
