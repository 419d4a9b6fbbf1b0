"""Exception hierarchy for the card collection calculator.

Input errors carry a short machine-readable ``code`` so the API and CLI
layers can report them without string matching. All of them are raised
before any worker is spawned.
"""


# =============================================================================
# Base
# =============================================================================


class CollectorError(Exception):
    """Base exception for calculator errors."""

    pass


# =============================================================================
# Input errors (rejected before a run starts)
# =============================================================================


class InputError(CollectorError):
    """Raised when a Calculate invocation is given unusable input."""

    code = "INPUT_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ParseError(InputError):
    """A weight or index token is not a valid non-negative integer."""

    code = "PARSE_ERROR"


class InvalidSelectionError(InputError):
    """A target index does not refer to any item in the weight list."""

    code = "INVALID_SELECTION"


class UnreachableTargetError(InputError):
    """A target item has weight 0 and could never be drawn."""

    code = "UNREACHABLE_TARGET"


class TrialCountError(InputError):
    """The requested trial count is outside the configured bounds."""

    code = "TRIAL_COUNT"


# =============================================================================
# Runtime errors
# =============================================================================


class SimulationError(CollectorError):
    """Base exception for failures during a simulation run."""

    pass


class WorkerFailedError(SimulationError):
    """Raised when any worker fails; the whole run is discarded."""

    def __init__(self, worker_index: int, cause: BaseException) -> None:
        super().__init__(f"Worker {worker_index} failed: {cause}")
        self.worker_index = worker_index
        self.cause = cause
