"""Named, persistent collection of flow documents."""

import logging
from datetime import datetime, timedelta

from procflow import config
from procflow.models.flow import FlowData, FlowVersion, ProcessEdge, ProcessNode, clone_graph
from procflow.models.simulation import SimulationParams
from procflow.storage.base import FlowStorage
from procflow.storage.memory import MemoryFlowStorage
from procflow.utils.identifiers import generate_flow_id, utc_timestamp

logger = logging.getLogger(__name__)


class FlowLibrary:
    """Library of saved flows, keyed by name on save.

    Saving a flow whose name already exists overwrites that entry in place
    (keeping its id and creation time), so two entries never share a name.
    """

    def __init__(self, storage: FlowStorage | None = None) -> None:
        self.storage = storage if storage is not None else MemoryFlowStorage()

    def list_flows(self) -> list[FlowData]:
        return self.storage.list_flows()

    def find_by_name(self, name: str) -> FlowData | None:
        for flow in self.storage.list_flows():
            if flow.name == name:
                return flow
        return None

    def save(
        self,
        name: str,
        description: str | None,
        nodes: list[ProcessNode],
        edges: list[ProcessEdge],
        versions: list[FlowVersion],
    ) -> FlowData:
        """Upsert a flow by name and return the stored entry."""
        existing = self.find_by_name(name)
        now = utc_timestamp()
        if existing is not None and now <= existing.updated_at:
            # clock did not move between saves; keep updatedAt strictly increasing
            now = (datetime.fromisoformat(existing.updated_at) + timedelta(microseconds=1)).isoformat()
        node_copies, edge_copies = clone_graph(nodes, edges)
        flow = FlowData(
            id=existing.id if existing else generate_flow_id(),
            name=name,
            description=description,
            nodes=node_copies,
            edges=edge_copies,
            versions=list(versions),
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        self.storage.put_flow(flow)
        logger.info("%s flow %r (%s)", "updated" if existing else "saved", name, flow.id)
        return flow

    def load(self, flow_id: str) -> FlowData | None:
        return self.storage.get_flow(flow_id)

    def delete(self, flow_id: str) -> None:
        if self.storage.get_flow(flow_id) is None:
            logger.debug("delete ignored for unknown flow %s", flow_id)
            return
        self.storage.delete_flow(flow_id)
        logger.info("deleted flow %s", flow_id)

    # --- simulation settings ---

    def get_settings(self) -> SimulationParams:
        """Stored simulation parameters, or the defaults if none were saved."""
        return self.storage.get_settings() or SimulationParams(
            hourly_rate=config.HOURLY_RATE,
            annual_frequency=config.ANNUAL_FREQUENCY,
        )

    def save_settings(self, params: SimulationParams) -> None:
        self.storage.put_settings(params)
