"""Storage protocol for the flow library."""

from procflow.models.flow import FlowData
from procflow.models.simulation import SimulationParams


class FlowStorage:
    """Protocol for persisting flow documents and simulation settings."""

    def list_flows(self) -> list[FlowData]:
        """Return all stored flows in insertion order."""
        raise NotImplementedError

    def get_flow(self, flow_id: str) -> FlowData | None:
        raise NotImplementedError

    def put_flow(self, flow: FlowData) -> None:
        """Insert or replace a flow keyed by its id."""
        raise NotImplementedError

    def delete_flow(self, flow_id: str) -> None:
        raise NotImplementedError

    def get_settings(self) -> SimulationParams | None:
        raise NotImplementedError

    def put_settings(self, params: SimulationParams) -> None:
        raise NotImplementedError
