"""In-memory flow storage."""

from procflow.models.flow import FlowData
from procflow.models.simulation import SimulationParams
from procflow.storage.base import FlowStorage


class MemoryFlowStorage(FlowStorage):
    """Keeps flows in a dict; copies on the way in and out."""

    def __init__(self) -> None:
        self.flows: dict[str, FlowData] = {}
        self.settings: SimulationParams | None = None

    def list_flows(self) -> list[FlowData]:
        return [flow.model_copy(deep=True) for flow in self.flows.values()]

    def get_flow(self, flow_id: str) -> FlowData | None:
        flow = self.flows.get(flow_id)
        return flow.model_copy(deep=True) if flow is not None else None

    def put_flow(self, flow: FlowData) -> None:
        self.flows[flow.id] = flow.model_copy(deep=True)

    def delete_flow(self, flow_id: str) -> None:
        self.flows.pop(flow_id, None)

    def get_settings(self) -> SimulationParams | None:
        return self.settings.model_copy() if self.settings is not None else None

    def put_settings(self, params: SimulationParams) -> None:
        self.settings = params.model_copy()
