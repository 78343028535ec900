"""Data models for process-flow documents.

Field names are snake_case in Python and camelCase on the wire
(``nodeType``, ``currentDuration``, ``createdAt`` ...), so exported files
stay compatible with the diagram editor that produces them.
"""

from typing import Any

from pydantic import BaseModel, Field

from procflow.models.node_types import ImprovementType, NodeType


class WireModel(BaseModel):
    """Base for models exchanged with the editor as camelCase JSON."""

    model_config = {"populate_by_name": True}

    def to_wire(self) -> dict[str, Any]:
        """Dump with wire aliases, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Position(WireModel):
    x: float = 0.0
    y: float = 0.0


class Comment(WireModel):
    """A comment attached to a node."""

    id: str
    author: str
    text: str
    created_at: str = Field(alias="createdAt")


class SimulationData(WireModel):
    """Per-node what-if settings.

    ``hourly_rate`` and ``annual_frequency`` are part of the stored schema
    but the simulation always uses the document-wide parameters.
    """

    current_duration: int | None = Field(default=None, ge=0, alias="currentDuration")
    improved_duration: int | None = Field(default=None, ge=0, alias="improvedDuration")
    hourly_rate: float | None = Field(default=None, alias="hourlyRate")
    annual_frequency: int | None = Field(default=None, alias="annualFrequency")
    improvement_type: ImprovementType | None = Field(default=None, alias="improvementType")


class ProcessNodeData(WireModel):
    """Business payload of a node.

    Unknown keys are kept so that editor-specific fields survive a
    load/save cycle.
    """

    model_config = {"populate_by_name": True, "extra": "allow"}

    label: str = ""
    node_type: NodeType = Field(alias="nodeType")
    assignee: str | None = None
    department: str | None = None
    duration: int | None = Field(default=None, ge=0)  # minutes
    description: str | None = None
    issues: list[str] | None = None
    comments: list[Comment] | None = None
    simulation: SimulationData | None = None

    def merged(self, fields: dict[str, Any]) -> "ProcessNodeData":
        """Return a copy with ``fields`` shallow-merged over this data.

        Keys may be given either as wire aliases or as attribute names.
        Fields not named in ``fields`` are carried over untouched.
        """
        current = self.model_dump(by_alias=True, exclude_unset=True)
        for key, value in fields.items():
            current[_wire_key(key)] = value
        return ProcessNodeData.model_validate(current)


def _wire_key(key: str) -> str:
    field = ProcessNodeData.model_fields.get(key)
    if field is not None and field.alias:
        return field.alias
    return key


class ProcessNode(WireModel):
    """A vertex of the process diagram."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    id: str
    type: str = "processNode"  # renderer key
    position: Position = Field(default_factory=Position)
    data: ProcessNodeData

    def clone(self) -> "ProcessNode":
        return self.model_copy(deep=True)


class EdgeData(WireModel):
    model_config = {"populate_by_name": True, "extra": "allow"}

    label: str | None = None


class ProcessEdge(WireModel):
    """A directed arc between two nodes."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    id: str
    source: str
    target: str
    label: str | None = None
    data: EdgeData | None = None
    type: str | None = None
    animated: bool | None = None

    @property
    def display_label(self) -> str | None:
        if self.data is not None and self.data.label:
            return self.data.label
        return self.label

    def touches(self, node_id: str) -> bool:
        """True when either endpoint is ``node_id``."""
        return self.source == node_id or self.target == node_id

    def clone(self) -> "ProcessEdge":
        return self.model_copy(deep=True)


def clone_graph(
    nodes: list[ProcessNode],
    edges: list[ProcessEdge],
) -> tuple[list[ProcessNode], list[ProcessEdge]]:
    """Structural deep copy of a node/edge set."""
    return [node.clone() for node in nodes], [edge.clone() for edge in edges]


class FlowVersion(WireModel):
    """An immutable snapshot of a document's graph.

    Once created, a FlowVersion should not be modified. Restoring one
    hands out a fresh clone of its graph.
    """

    model_config = {"populate_by_name": True, "frozen": True}

    id: str
    name: str
    description: str | None = None
    nodes: list[ProcessNode]
    edges: list[ProcessEdge]
    saved_at: str = Field(alias="savedAt")
    comment: str | None = None


class FlowData(WireModel):
    """A complete flow document: graph, metadata and version history."""

    id: str
    name: str
    description: str | None = None
    nodes: list[ProcessNode] = Field(default_factory=list)
    edges: list[ProcessEdge] = Field(default_factory=list)
    versions: list[FlowVersion] = Field(default_factory=list)
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
