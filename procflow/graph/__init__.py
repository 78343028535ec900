"""Graph state: working store, patches and version history."""

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
    parse_patch,
)
from procflow.graph.store import GraphStore
from procflow.graph.versions import VersionHistory

__all__ = [
    "GraphStore",
    "VersionHistory",
    # Patches
    "AddComment",
    "AddNode",
    "ApplyEdgeChanges",
    "ApplyNodeChanges",
    "Connect",
    "DeleteComment",
    "DeleteNode",
    "EdgeChange",
    "GraphPatch",
    "NodeChange",
    "ReplaceGraph",
    "SetSelection",
    "UpdateNodeData",
    "parse_patch",
]
