"""Pydantic models for the weighted collection simulation.

This module defines the item pool, the per-invocation run configuration
and the result schemas for the simulator. All input-side models are
frozen: an ItemSet or RunConfig is built once per Calculate invocation
and never changes afterwards.
"""

from __future__ import annotations

from functools import cached_property

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from collector.core.errors import UnreachableTargetError
from collector.core.settings import DEFAULT_WORKER_COUNT


class Item(BaseModel):
    """A single weighted entry in the pool."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1, description="1-based position in the input weight list")
    weight: int = Field(ge=0, description="Relative draw probability mass")
    is_target: bool = Field(default=False, description="Whether a trial must collect this item")


class ItemSet(BaseModel):
    """Immutable weighted pool with the subset of items to collect.

    Invariants enforced at construction:
        - item ids are 1..len(items) in input order
        - every target item has weight > 0, so every trial terminates
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[Item, ...] = Field(min_length=1, description="Items in draw-scan order")

    @model_validator(mode="after")
    def _check_invariants(self) -> ItemSet:
        for position, item in enumerate(self.items, start=1):
            if item.id != position:
                raise ValueError(f"Item ids must be contiguous from 1; found {item.id} at position {position}")

        unreachable = [item.id for item in self.items if item.is_target and item.weight == 0]
        if unreachable:
            ids = ", ".join(str(i) for i in unreachable)
            raise UnreachableTargetError(f"Target item(s) {ids} have weight 0 and can never be drawn")
        return self

    @computed_field
    @cached_property
    def weight_sum(self) -> int:
        """Total weight of all items."""
        return sum(item.weight for item in self.items)

    @computed_field
    @cached_property
    def target_count(self) -> int:
        """Number of items a trial must collect."""
        return sum(1 for item in self.items if item.is_target)

    @cached_property
    def target_ids(self) -> frozenset[int]:
        """Ids of the items a trial must collect."""
        return frozenset(item.id for item in self.items if item.is_target)


class RunConfig(BaseModel):
    """Everything one simulation run needs, passed by value to the coordinator."""

    model_config = ConfigDict(frozen=True)

    item_set: ItemSet
    n_trials: int = Field(ge=0, description="Total number of trials (N)")
    n_workers: int = Field(default=DEFAULT_WORKER_COUNT, ge=1, description="Number of parallel workers (W)")
    seed: int | None = Field(
        default=None,
        description="Random seed for reproducibility (None uses OS entropy)",
    )


class SimulationRun(BaseModel):
    """Raw output of one coordinator run.

    ``results`` holds one draw count per trial in no particular order.
    """

    config: RunConfig
    results: list[int] = Field(default_factory=list)
    duration_ms: float = Field(ge=0.0, description="Wall-clock time from worker spawn to join")


class SimulationSummary(BaseModel):
    """Aggregated statistics reported back to the caller.

    Statistic fields are None when no trial completed ("no data").
    """

    n_trials: int = Field(description="Number of trial results collected")
    n_workers: int = Field(description="Workers used for the run")
    item_count: int = Field(description="Items in the pool")
    target_count: int = Field(description="Items each trial had to collect")
    average: float | None = Field(default=None, description="Mean draws per trial")
    median: float | None = Field(default=None, description="Median draws per trial")
    minimum: int | None = Field(default=None, description="Fewest draws in any trial")
    maximum: int | None = Field(default=None, description="Most draws in any trial")
    duration_ms: float = Field(ge=0.0, description="Elapsed run time in milliseconds")
