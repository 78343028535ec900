"""Per-context service object owning one working flow document.

A FlowSession ties the graph store, version history, library, simulation
and analysis overlay together. Create one per editing context and pass it
to whatever needs the document; there is no module-level state.

Usage:
    from procflow import FlowSession

    session = FlowSession()
    start = session.add_node("start", {"x": 0, "y": 0})
    task = session.add_node("task", {"x": 0, "y": 120})
    session.connect(start.id, task.id)
    session.save_flow()
"""

import logging
from typing import Any

from procflow import config
from procflow.adapters.flow_analyzer import FlowAnalyzer
from procflow.adapters.flow_generator import FlowGenerator, GeneratedFlow
from procflow.analysis.overlay import AnalysisOverlay
from procflow.errors import ProcflowError
from procflow.graph.patches import (
    AddComment,
    AddNode,
    ApplyEdgeChanges,
    ApplyNodeChanges,
    Connect,
    DeleteComment,
    DeleteNode,
    EdgeChange,
    GraphPatch,
    NodeChange,
    ReplaceGraph,
    SetSelection,
    UpdateNodeData,
)
from procflow.graph.store import GraphStore
from procflow.graph.versions import VersionHistory
from procflow.library import FlowLibrary
from procflow.models.analysis import AnalysisResult
from procflow.models.flow import (
    Comment,
    FlowData,
    FlowVersion,
    Position,
    ProcessEdge,
    ProcessNode,
    clone_graph,
)
from procflow.models.node_types import ImprovementType, NodeType, improved_duration_for
from procflow.models.simulation import SimulationParams, SimulationResult
from procflow.serialization import export_flow, import_flow
from procflow.simulation.engine import calculate_simulation

logger = logging.getLogger(__name__)

# canvas placement for nodes added without an explicit position
NEW_NODE_X = 400
FIRST_NODE_Y = 100
NEW_NODE_SPACING = 120


class FlowSession:
    """The single writer for one working document."""

    def __init__(
        self,
        library: FlowLibrary | None = None,
        *,
        max_versions: int | None = None,
    ) -> None:
        self.library = library if library is not None else FlowLibrary()
        self.max_versions = max_versions
        self.graph = GraphStore()
        self.history = VersionHistory(max_versions=max_versions)
        self.flow_name = config.DEFAULT_FLOW_NAME
        self.flow_description = ""
        self.overlay = AnalysisOverlay()
        self.params: SimulationParams = self.library.get_settings()
        self.simulation_result: SimulationResult | None = None

    # --- read access ---

    @property
    def nodes(self) -> list[ProcessNode]:
        return self.graph.nodes

    @property
    def edges(self) -> list[ProcessEdge]:
        return self.graph.edges

    @property
    def selected_node_id(self) -> str | None:
        return self.graph.selected_node_id

    @property
    def versions(self) -> list[FlowVersion]:
        return self.history.versions

    @property
    def analysis_result(self) -> AnalysisResult | None:
        return self.overlay.result

    # --- graph mutation ---

    def apply(self, patch: GraphPatch) -> Any:
        """Apply one patch to the working graph and refresh derived state."""
        result = self.graph.apply(patch)
        if isinstance(patch, ReplaceGraph):
            self.overlay.clear()
        self.calculate_simulation()
        return result

    def add_node(self, node_type: NodeType | str, position: Position | dict | None = None) -> ProcessNode:
        """Add a node; without a position it is stacked below the lowest node."""
        if position is None:
            position = self._next_position()
        elif isinstance(position, dict):
            position = Position.model_validate(position)
        return self.apply(AddNode(node_type=node_type, position=position))

    def _next_position(self) -> Position:
        nodes = self.graph.nodes
        if not nodes:
            return Position(x=NEW_NODE_X, y=FIRST_NODE_Y)
        return Position(x=NEW_NODE_X, y=max(node.position.y for node in nodes) + NEW_NODE_SPACING)

    def update_node_data(self, node_id: str, fields: dict[str, Any]) -> ProcessNode | None:
        return self.apply(UpdateNodeData(node_id=node_id, fields=fields))

    def delete_node(self, node_id: str) -> None:
        self.apply(DeleteNode(node_id=node_id))

    def connect(self, source: str, target: str, label: str | None = None) -> ProcessEdge:
        return self.apply(Connect(source=source, target=target, label=label))

    def set_selection(self, node_id: str | None) -> None:
        self.apply(SetSelection(node_id=node_id))

    def apply_node_changes(self, changes: list[NodeChange]) -> None:
        self.apply(ApplyNodeChanges(changes=changes))

    def apply_edge_changes(self, changes: list[EdgeChange]) -> None:
        self.apply(ApplyEdgeChanges(changes=changes))

    def replace_graph(self, nodes: list[ProcessNode], edges: list[ProcessEdge]) -> None:
        node_copies, edge_copies = clone_graph(nodes, edges)
        self.apply(ReplaceGraph(nodes=node_copies, edges=edge_copies))

    def add_comment(self, node_id: str, author: str, text: str) -> Comment | None:
        return self.apply(AddComment(node_id=node_id, author=author, text=text))

    def delete_comment(self, node_id: str, comment_id: str) -> None:
        self.apply(DeleteComment(node_id=node_id, comment_id=comment_id))

    def set_improvement(
        self,
        node_id: str,
        improvement_type: ImprovementType | str,
    ) -> ProcessNode | None:
        """Pick an improvement for a step and derive its improved duration."""
        node = self.graph.get_node(node_id)
        if node is None:
            return None
        improvement_type = ImprovementType(improvement_type)
        duration = node.data.duration or 0
        current = node.data.simulation
        simulation = current.model_dump(by_alias=True, exclude_unset=True) if current else {}
        simulation.update(
            {
                "currentDuration": duration,
                "improvementType": improvement_type,
                "improvedDuration": improved_duration_for(improvement_type, duration),
            }
        )
        return self.update_node_data(node_id, {"simulation": simulation})

    # --- document metadata ---

    def set_flow_name(self, name: str) -> None:
        self.flow_name = name

    def set_flow_description(self, description: str) -> None:
        self.flow_description = description

    def _replace_document(
        self,
        name: str,
        description: str | None,
        nodes: list[ProcessNode],
        edges: list[ProcessEdge],
        versions: list[FlowVersion],
    ) -> None:
        node_copies, edge_copies = clone_graph(nodes, edges)
        self.graph.replace(node_copies, edge_copies)
        self.history = VersionHistory(versions, max_versions=self.max_versions)
        self.flow_name = name
        self.flow_description = description or ""
        self.overlay.clear()
        self.calculate_simulation()

    # --- library ---

    def new_flow(self) -> None:
        """Reset to an empty, unnamed document."""
        self.graph.replace([], [])
        self.history = VersionHistory(max_versions=self.max_versions)
        self.flow_name = config.DEFAULT_FLOW_NAME
        self.flow_description = ""
        self.overlay.clear()
        self.simulation_result = None

    def save_flow(self) -> FlowData:
        return self.library.save(
            self.flow_name,
            self.flow_description,
            self.graph.nodes,
            self.graph.edges,
            self.history.versions,
        )

    def load_flow(self, flow_id: str) -> bool:
        flow = self.library.load(flow_id)
        if flow is None:
            logger.debug("load_flow ignored for unknown flow %s", flow_id)
            return False
        self._replace_document(flow.name, flow.description, flow.nodes, flow.edges, flow.versions)
        return True

    def delete_flow(self, flow_id: str) -> None:
        self.library.delete(flow_id)

    def list_flows(self) -> list[FlowData]:
        return self.library.list_flows()

    # --- export / import ---

    def export_flow(self) -> str:
        return export_flow(
            self.flow_name,
            self.flow_description,
            self.graph.nodes,
            self.graph.edges,
            self.history.versions,
        )

    def import_flow(self, text: str | bytes) -> FlowData:
        """Replace the working document with an exported one.

        Raises:
            FlowParseError: on invalid input; the session is left unchanged.
        """
        flow = import_flow(text)
        self._replace_document(flow.name, flow.description, flow.nodes, flow.edges, flow.versions)
        return flow

    # --- versions ---

    def save_version(self, comment: str | None = None) -> FlowVersion:
        return self.history.save_version(
            self.flow_name,
            self.flow_description,
            self.graph.nodes,
            self.graph.edges,
            comment,
        )

    def load_version(self, version_id: str) -> bool:
        """Restore a snapshot's graph; the history itself is not changed."""
        restored = self.history.restore(version_id)
        if restored is None:
            logger.debug("load_version ignored for unknown version %s", version_id)
            return False
        nodes, edges = restored
        self.graph.replace(nodes, edges)
        self.overlay.clear()
        self.calculate_simulation()
        return True

    def delete_version(self, version_id: str) -> None:
        self.history.delete_version(version_id)

    # --- simulation ---

    def calculate_simulation(self) -> SimulationResult:
        self.simulation_result = calculate_simulation(
            self.graph.nodes,
            self.params.hourly_rate,
            self.params.annual_frequency,
        )
        return self.simulation_result

    def set_hourly_rate(self, rate: float) -> None:
        """Update and persist the hourly rate; negative values raise ValidationError."""
        self.params = SimulationParams.model_validate({**self.params.model_dump(), "hourly_rate": rate})
        self.library.save_settings(self.params)
        self.calculate_simulation()

    def set_annual_frequency(self, frequency: float) -> None:
        self.params = SimulationParams.model_validate({**self.params.model_dump(), "annual_frequency": frequency})
        self.library.save_settings(self.params)
        self.calculate_simulation()

    # --- AI collaborators ---

    def set_analysis_result(self, result: AnalysisResult | None) -> None:
        self.overlay.set_result(result)

    def apply_generated_flow(self, generated: GeneratedFlow) -> None:
        """Swap in a generated graph; the document name follows if one was given."""
        self.replace_graph(generated.nodes, generated.edges)
        if generated.flow_name:
            self.flow_name = generated.flow_name

    async def generate_flow(self, text: str, generator: FlowGenerator | None = None) -> GeneratedFlow:
        """Generate a graph from text and apply it once the response arrives.

        Raises:
            CollaboratorError: if generation failed; the graph is untouched.
        """
        generator = generator or FlowGenerator()
        generated = await generator.generate(text)
        self.apply_generated_flow(generated)
        return generated

    async def analyze(self, analyzer: FlowAnalyzer | None = None) -> AnalysisResult:
        """Request a bottleneck report for the current graph."""
        analyzer = analyzer or FlowAnalyzer()
        self.overlay.is_analyzing = True
        try:
            result = await analyzer.analyze(self.graph.nodes, self.graph.edges, self.flow_name)
        except ProcflowError:
            logger.warning("analysis of flow %r failed", self.flow_name)
            raise
        finally:
            self.overlay.is_analyzing = False
        self.overlay.set_result(result)
        return result
