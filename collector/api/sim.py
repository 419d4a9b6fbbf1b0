"""Simulation API endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from collector.core.errors import InputError, WorkerFailedError
from collector.models.simulation_models import SimulationSummary
from collector.services.calculator import Calculator, get_calculator

router = APIRouter()


class SimulationRequest(BaseModel):
    """Request model for a simulation run."""

    weights: str = Field(description="Comma-separated item weights, e.g. '5, 10, 15'")
    targets: str = Field(default="", description="Comma-separated 1-based target indices")
    n_trials: int | None = Field(default=None, description="Trials to run (server default if omitted)")
    seed: int | None = Field(default=None, description="Random seed for reproducibility")


@router.post("/run", response_model=SimulationSummary)
def run_simulation(
    request: SimulationRequest,
    calculator: Calculator = Depends(get_calculator),
):
    """Run a collection simulation and return its summary."""
    # Sync handler: FastAPI runs it in a threadpool while the run blocks
    try:
        return calculator.calculate(
            request.weights,
            request.targets,
            n_trials=request.n_trials,
            seed=request.seed,
        )
    except InputError as e:
        raise HTTPException(status_code=422, detail={"error": e.code, "message": e.message})
    except WorkerFailedError as e:
        raise HTTPException(status_code=500, detail=f"Simulation failed: {str(e)}")


@router.get("/last", response_model=SimulationSummary)
def get_last_result(calculator: Calculator = Depends(get_calculator)):
    """Return the most recent successful summary."""
    result = calculator.last_result
    if result is None:
        raise HTTPException(status_code=404, detail="No simulation has completed yet")
    return result


@router.get("/defaults")
def get_defaults(calculator: Calculator = Depends(get_calculator)) -> dict:
    """Return the initial input values and trial bounds."""
    return asdict(calculator.defaults)
