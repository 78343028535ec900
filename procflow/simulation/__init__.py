"""What-if simulation engine."""

from procflow.simulation.engine import (
    calculate_simulation,
    current_duration,
    improved_duration,
)

__all__ = [
    "calculate_simulation",
    "current_duration",
    "improved_duration",
]
