"""Command values describing graph mutations.

Every change to a working graph can be expressed as one of these patches
and applied through ``GraphStore.apply``. Patches are plain pydantic
models, so a sequence of them can be logged, stored and replayed.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from procflow.models.flow import Position, ProcessEdge, ProcessNode
from procflow.models.node_types import NodeType


class NodeChange(BaseModel):
    """A structural change emitted by the canvas (drag, select, remove)."""

    type: Literal["position", "select", "remove", "dimensions"]
    id: str
    position: Position | None = None
    dragging: bool | None = None
    selected: bool | None = None
    dimensions: dict[str, float] | None = None


class EdgeChange(BaseModel):
    type: Literal["select", "remove"]
    id: str
    selected: bool | None = None


class AddNode(BaseModel):
    kind: Literal["add_node"] = "add_node"
    node_type: NodeType
    position: Position = Field(default_factory=Position)


class UpdateNodeData(BaseModel):
    kind: Literal["update_node_data"] = "update_node_data"
    node_id: str
    fields: dict[str, Any]


class DeleteNode(BaseModel):
    kind: Literal["delete_node"] = "delete_node"
    node_id: str


class Connect(BaseModel):
    kind: Literal["connect"] = "connect"
    source: str
    target: str
    label: str | None = None


class SetSelection(BaseModel):
    kind: Literal["set_selection"] = "set_selection"
    node_id: str | None = None


class ApplyNodeChanges(BaseModel):
    kind: Literal["node_changes"] = "node_changes"
    changes: list[NodeChange]


class ApplyEdgeChanges(BaseModel):
    kind: Literal["edge_changes"] = "edge_changes"
    changes: list[EdgeChange]


class ReplaceGraph(BaseModel):
    """Wholesale replacement, e.g. from a generated flow."""

    kind: Literal["replace_graph"] = "replace_graph"
    nodes: list[ProcessNode]
    edges: list[ProcessEdge]


class AddComment(BaseModel):
    kind: Literal["add_comment"] = "add_comment"
    node_id: str
    author: str
    text: str


class DeleteComment(BaseModel):
    kind: Literal["delete_comment"] = "delete_comment"
    node_id: str
    comment_id: str


GraphPatch = Annotated[
    Union[
        AddNode,
        UpdateNodeData,
        DeleteNode,
        Connect,
        SetSelection,
        ApplyNodeChanges,
        ApplyEdgeChanges,
        ReplaceGraph,
        AddComment,
        DeleteComment,
    ],
    Field(discriminator="kind"),
]

_patch_adapter: TypeAdapter[GraphPatch] = TypeAdapter(GraphPatch)


def parse_patch(raw: dict[str, Any] | str) -> GraphPatch:
    """Build a patch from a dict or a JSON string."""
    if isinstance(raw, str):
        return _patch_adapter.validate_json(raw)
    return _patch_adapter.validate_python(raw)
