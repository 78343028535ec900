"""API routes for the what-if simulation."""

from fastapi import APIRouter, Depends
from pydantic import Field

from procflow.library import FlowLibrary
from procflow.models.flow import ProcessNode, WireModel
from procflow.models.simulation import SimulationResult
from procflow.simulation.engine import calculate_simulation
from server.db import get_library

router = APIRouter()


class SimulateRequest(WireModel):
    """request body for a simulation run.

    Missing parameters fall back to the stored global settings.
    """

    nodes: list[ProcessNode] = Field(default_factory=list)
    hourly_rate: float | None = Field(default=None, ge=0, alias="hourlyRate")
    annual_frequency: float | None = Field(default=None, ge=0, alias="annualFrequency")


@router.post("/simulate")
def simulate(request: SimulateRequest, library: FlowLibrary = Depends(get_library)) -> SimulationResult:
    """compute current vs. improved cost for a set of nodes."""
    settings = library.get_settings()
    return calculate_simulation(
        request.nodes,
        settings.hourly_rate if request.hourly_rate is None else request.hourly_rate,
        settings.annual_frequency if request.annual_frequency is None else request.annual_frequency,
    )
