"""Working node/edge collection of a flow document.

All graph mutation passes through GraphStore. Lookups are by id; iteration
follows creation order. Operations on unknown ids are silent no-ops, since
ids coming from the editor may race against the current state.
"""

import logging
from typing import Any, Iterable

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
from procflow.models.flow import (
    Comment,
    EdgeData,
    Position,
    ProcessEdge,
    ProcessNode,
    ProcessNodeData,
    SimulationData,
)
from procflow.models.node_types import (
    ImprovementType,
    NodeType,
    default_duration,
    get_descriptor,
)
from procflow.utils.identifiers import (
    generate_comment_id,
    generate_edge_id,
    generate_node_id,
    utc_timestamp,
)

logger = logging.getLogger(__name__)


class GraphStore:
    """Owns the nodes, edges and single-node selection of one document."""

    def __init__(
        self,
        nodes: Iterable[ProcessNode] = (),
        edges: Iterable[ProcessEdge] = (),
    ) -> None:
        self._nodes: dict[str, ProcessNode] = {}
        self._edges: dict[str, ProcessEdge] = {}
        self.selected_node_id: str | None = None
        self.replace(list(nodes), list(edges))

    # --- read access ---

    @property
    def nodes(self) -> list[ProcessNode]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[ProcessEdge]:
        return list(self._edges.values())

    def get_node(self, node_id: str) -> ProcessNode | None:
        return self._nodes.get(node_id)

    def get_edge(self, edge_id: str) -> ProcessEdge | None:
        return self._edges.get(edge_id)

    @property
    def selected_node(self) -> ProcessNode | None:
        if self.selected_node_id is None:
            return None
        return self._nodes.get(self.selected_node_id)

    def incident_edges(self, node_id: str) -> list[ProcessEdge]:
        return [edge for edge in self._edges.values() if edge.touches(node_id)]

    def __len__(self) -> int:
        return len(self._nodes)

    # --- node operations ---

    def add_node(self, node_type: NodeType | str, position: Position | dict | None = None) -> ProcessNode:
        """Create a node from the static descriptor and select it.

        Task-category nodes start at 30 minutes and ``wait`` at 60;
        the simulation record is seeded with the same duration.
        """
        node_type = NodeType(node_type)
        descriptor = get_descriptor(node_type)
        duration = default_duration(node_type)
        if position is None:
            position = Position()
        elif isinstance(position, dict):
            position = Position.model_validate(position)

        node = ProcessNode(
            id=generate_node_id(),
            position=position,
            data=ProcessNodeData(
                label=descriptor.label,
                node_type=node_type,
                assignee="",
                duration=duration,
                description="",
                issues=[],
                comments=[],
                simulation=SimulationData(
                    current_duration=duration or 0,
                    improvement_type=ImprovementType.none,
                ),
            ),
        )
        self._nodes[node.id] = node
        self.selected_node_id = node.id
        return node

    def update_node_data(self, node_id: str, fields: dict[str, Any]) -> ProcessNode | None:
        """Shallow-merge ``fields`` into a node's data."""
        node = self._nodes.get(node_id)
        if node is None:
            logger.debug("update_node_data ignored for unknown node %s", node_id)
            return None
        updated = node.model_copy(update={"data": node.data.merged(fields)})
        self._nodes[node_id] = updated
        return updated

    def delete_node(self, node_id: str) -> None:
        """Remove a node together with every edge touching it."""
        if node_id not in self._nodes:
            logger.debug("delete_node ignored for unknown node %s", node_id)
            return
        # build the surviving edge map first so the removal is all-or-nothing
        remaining = {
            edge_id: edge for edge_id, edge in self._edges.items() if not edge.touches(node_id)
        }
        del self._nodes[node_id]
        self._edges = remaining
        if self.selected_node_id == node_id:
            self.selected_node_id = None

    def set_selection(self, node_id: str | None) -> None:
        self.selected_node_id = node_id

    # --- edge operations ---

    def connect(self, source: str, target: str, label: str | None = None) -> ProcessEdge:
        """Add an edge between two nodes.

        Duplicate edges, self-loops and cycles are all accepted.
        """
        edge = ProcessEdge(
            id=generate_edge_id(),
            source=source,
            target=target,
            label=label,
            data=EdgeData(label=label) if label else None,
            type="smoothstep",
            animated=True,
        )
        self._edges[edge.id] = edge
        return edge

    # --- comments ---

    def add_comment(self, node_id: str, author: str, text: str) -> Comment | None:
        node = self._nodes.get(node_id)
        if node is None:
            logger.debug("add_comment ignored for unknown node %s", node_id)
            return None
        comment = Comment(
            id=generate_comment_id(),
            author=author,
            text=text,
            created_at=utc_timestamp(),
        )
        self.update_node_data(node_id, {"comments": [*(node.data.comments or []), comment]})
        return comment

    def delete_comment(self, node_id: str, comment_id: str) -> None:
        node = self._nodes.get(node_id)
        if node is None:
            return
        comments = [c for c in node.data.comments or [] if c.id != comment_id]
        self.update_node_data(node_id, {"comments": comments})

    # --- batches ---

    def apply_node_changes(self, changes: Iterable[NodeChange]) -> None:
        """Apply canvas changes in the order they were emitted."""
        for change in changes:
            node = self._nodes.get(change.id)
            if node is None:
                continue
            if change.type == "remove":
                self.delete_node(change.id)
            elif change.type == "position" and change.position is not None:
                self._nodes[change.id] = node.model_copy(
                    update={"position": change.position.model_copy()}
                )
            elif change.type == "select":
                if change.selected:
                    self.selected_node_id = change.id
                elif self.selected_node_id == change.id:
                    self.selected_node_id = None
            elif change.type == "dimensions" and change.dimensions is not None:
                self._nodes[change.id] = node.model_copy(
                    update={"measured": dict(change.dimensions)}
                )

    def apply_edge_changes(self, changes: Iterable[EdgeChange]) -> None:
        for change in changes:
            edge = self._edges.get(change.id)
            if edge is None:
                continue
            if change.type == "remove":
                del self._edges[change.id]
            elif change.type == "select":
                self._edges[change.id] = edge.model_copy(update={"selected": bool(change.selected)})

    def replace(self, nodes: list[ProcessNode], edges: list[ProcessEdge]) -> None:
        """Swap in a whole new graph and clear the selection."""
        self._nodes = {node.id: node for node in nodes}
        self._edges = {edge.id: edge for edge in edges}
        self.selected_node_id = None

    # --- patch entry point ---

    def apply(self, patch: GraphPatch) -> Any:
        """Apply a patch value and return what the matching operation returns."""
        if isinstance(patch, AddNode):
            return self.add_node(patch.node_type, patch.position)
        if isinstance(patch, UpdateNodeData):
            return self.update_node_data(patch.node_id, patch.fields)
        if isinstance(patch, DeleteNode):
            return self.delete_node(patch.node_id)
        if isinstance(patch, Connect):
            return self.connect(patch.source, patch.target, patch.label)
        if isinstance(patch, SetSelection):
            return self.set_selection(patch.node_id)
        if isinstance(patch, ApplyNodeChanges):
            return self.apply_node_changes(patch.changes)
        if isinstance(patch, ApplyEdgeChanges):
            return self.apply_edge_changes(patch.changes)
        if isinstance(patch, ReplaceGraph):
            return self.replace(patch.nodes, patch.edges)
        if isinstance(patch, AddComment):
            return self.add_comment(patch.node_id, patch.author, patch.text)
        if isinstance(patch, DeleteComment):
            return self.delete_comment(patch.node_id, patch.comment_id)
        raise TypeError(f"unsupported patch: {type(patch).__name__}")
