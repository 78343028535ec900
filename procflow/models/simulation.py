"""Models for the what-if cost simulation."""

from pydantic import Field

from procflow.models.flow import WireModel

DEFAULT_HOURLY_RATE = 3000
DEFAULT_ANNUAL_FREQUENCY = 250


class SimulationParams(WireModel):
    """Document-wide simulation parameters, persisted with the library."""

    hourly_rate: float = Field(default=DEFAULT_HOURLY_RATE, ge=0, alias="hourlyRate")
    annual_frequency: float = Field(default=DEFAULT_ANNUAL_FREQUENCY, ge=0, alias="annualFrequency")


class SimulationTotal(WireModel):
    duration: int = 0  # minutes per execution
    annual_hours: float = Field(default=0, alias="annualHours")
    annual_cost: float = Field(default=0, alias="annualCost")


class SimulationSavings(SimulationTotal):
    three_year_cost: float = Field(default=0, alias="threeYearCost")


class SimulationResult(WireModel):
    """Before/after aggregate derived from the graph. Never persisted."""

    current_total: SimulationTotal = Field(alias="currentTotal")
    improved_total: SimulationTotal = Field(alias="improvedTotal")
    savings: SimulationSavings
    roi: float | None = None
