"""Pydantic models for the card collection calculator."""

from collector.models.simulation_models import (
    Item,
    ItemSet,
    RunConfig,
    SimulationRun,
    SimulationSummary,
)

__all__ = [
    # Input models
    "Item",
    "ItemSet",
    "RunConfig",
    # Result models
    "SimulationRun",
    "SimulationSummary",
]
