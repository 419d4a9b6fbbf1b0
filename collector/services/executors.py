"""Parallel-map primitives for running trial partitions.

An executor takes a list of partition sizes and a per-partition task,
runs every partition, and merges each partition's results into one
shared list. The simulation logic never touches threads directly, so a
deterministic serial backend can replace the threaded one in tests.
"""

import contextvars
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor

from collector.core.errors import WorkerFailedError
from collector.core.logging_config import get_logger

logger = get_logger(__name__)

# task(worker_index, trial_count) -> draw counts for that partition
PartitionTask = Callable[[int, int], list[int]]


class PartitionExecutor(ABC):
    """Runs partition tasks and merges their results.

    Subclasses decide how partitions are scheduled. Merging is shared:
    each partition appends its whole local batch once, under a lock.
    """

    name = "base"

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def map_partitions(
        self, task: PartitionTask, partitions: Sequence[int]
    ) -> tuple[list[int], float]:
        """Run ``task`` once per partition.

        Args:
            task: Callable taking (worker_index, trial_count).
            partitions: Trial count assigned to each worker.

        Returns:
            Tuple of (merged results in completion order, elapsed milliseconds).
            Elapsed time covers worker startup through the final join.

        Raises:
            WorkerFailedError: If any partition raised.
        """
        results: list[int] = []
        start_time = time.perf_counter()
        self._run_all(task, partitions, results)
        duration_ms = (time.perf_counter() - start_time) * 1000
        return results, duration_ms

    def _run_partition(
        self, task: PartitionTask, worker_index: int, count: int, results: list[int]
    ) -> None:
        local = task(worker_index, count)
        with self._lock:
            results.extend(local)
        logger.debug(
            f"Worker {worker_index} finished {count} trials",
            extra={"extra_data": {"worker": worker_index, "trials": count}},
        )

    @abstractmethod
    def _run_all(
        self, task: PartitionTask, partitions: Sequence[int], results: list[int]
    ) -> None:
        """Run every partition, blocking until all are done."""


class ThreadedExecutor(PartitionExecutor):
    """One fresh thread pool per run, one thread per partition."""

    name = "thread"

    def _run_all(
        self, task: PartitionTask, partitions: Sequence[int], results: list[int]
    ) -> None:
        # Leaving the with-block joins every worker thread. Each worker runs in
        # its own copy of the caller context so request ids reach its logs.
        with ThreadPoolExecutor(
            max_workers=max(len(partitions), 1), thread_name_prefix="sim-worker"
        ) as pool:
            futures = [
                pool.submit(
                    contextvars.copy_context().run,
                    self._run_partition,
                    task,
                    index,
                    count,
                    results,
                )
                for index, count in enumerate(partitions)
            ]

        for index, future in enumerate(futures):
            error = future.exception()
            if error is not None:
                logger.error(
                    f"Worker {index} failed",
                    extra={"extra_data": {"worker": index, "error": str(error)}},
                    exc_info=(type(error), error, error.__traceback__),
                )
                raise WorkerFailedError(index, error) from error


class SerialExecutor(PartitionExecutor):
    """Runs partitions one after another in the calling thread."""

    name = "serial"

    def _run_all(
        self, task: PartitionTask, partitions: Sequence[int], results: list[int]
    ) -> None:
        for index, count in enumerate(partitions):
            try:
                self._run_partition(task, index, count, results)
            except Exception as e:
                logger.error(
                    f"Worker {index} failed",
                    extra={"extra_data": {"worker": index, "error": str(e)}},
                    exc_info=True,
                )
                raise WorkerFailedError(index, e) from e


def get_executor(kind: str) -> PartitionExecutor:
    """Create an executor by name ("thread" or "serial")."""
    if kind == ThreadedExecutor.name:
        return ThreadedExecutor()
    if kind == SerialExecutor.name:
        return SerialExecutor()
    raise ValueError(f"Unknown executor kind: {kind!r}")
