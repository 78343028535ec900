"""What-if cost simulation over a process graph.

The result is fully derived: it is recomputed from the nodes and the two
document-wide parameters and never stored.
"""

from typing import Iterable

from procflow.models.flow import ProcessNode
from procflow.models.node_types import ImprovementType
from procflow.models.simulation import (
    DEFAULT_ANNUAL_FREQUENCY,
    DEFAULT_HOURLY_RATE,
    SimulationResult,
    SimulationSavings,
    SimulationTotal,
)

# savings are also reported over this many years
SAVINGS_HORIZON_YEARS = 3


def current_duration(node: ProcessNode) -> int:
    """Minutes the step takes today.

    ``simulation.currentDuration`` wins when set to a non-zero value,
    otherwise the node's ``duration``, otherwise 0.
    """
    sim = node.data.simulation
    if sim is not None and sim.current_duration:
        return sim.current_duration
    return node.data.duration or 0


def improved_duration(node: ProcessNode) -> int:
    """Minutes the step takes after its improvement.

    ``eliminate`` always yields 0, even over a stale ``improvedDuration``.
    """
    sim = node.data.simulation
    if sim is not None:
        if sim.improvement_type is ImprovementType.eliminate:
            return 0
        if sim.improved_duration is not None:
            return sim.improved_duration
    return current_duration(node)


def _total(minutes: int, hourly_rate: float, annual_frequency: float) -> SimulationTotal:
    annual_hours = minutes / 60 * annual_frequency
    return SimulationTotal(
        duration=minutes,
        annual_hours=annual_hours,
        annual_cost=annual_hours * hourly_rate,
    )


def calculate_simulation(
    nodes: Iterable[ProcessNode],
    hourly_rate: float = DEFAULT_HOURLY_RATE,
    annual_frequency: float = DEFAULT_ANNUAL_FREQUENCY,
) -> SimulationResult:
    """Aggregate current and improved cost/time across all nodes."""
    current_minutes = 0
    improved_minutes = 0
    for node in nodes:
        current_minutes += current_duration(node)
        improved_minutes += improved_duration(node)

    current = _total(current_minutes, hourly_rate, annual_frequency)
    improved = _total(improved_minutes, hourly_rate, annual_frequency)
    saved_cost = current.annual_cost - improved.annual_cost

    return SimulationResult(
        current_total=current,
        improved_total=improved,
        savings=SimulationSavings(
            duration=current_minutes - improved_minutes,
            annual_hours=current.annual_hours - improved.annual_hours,
            annual_cost=saved_cost,
            three_year_cost=saved_cost * SAVINGS_HORIZON_YEARS,
        ),
    )
