"""procflow - editable business-process graphs with what-if cost simulation."""

from procflow.analysis.overlay import AnalysisOverlay
from procflow.errors import (
    CollaboratorError,
    ConfigurationError,
    FlowParseError,
    ProcflowError,
)
from procflow.graph.store import GraphStore
from procflow.graph.versions import VersionHistory
from procflow.library import FlowLibrary
from procflow.models.analysis import AnalysisResult
from procflow.models.flow import (
    FlowData,
    FlowVersion,
    ProcessEdge,
    ProcessNode,
)
from procflow.models.node_types import ImprovementType, NodeType
from procflow.models.simulation import SimulationParams, SimulationResult
from procflow.session import FlowSession
from procflow.simulation.engine import calculate_simulation

__all__ = [
    # Documents
    "FlowData",
    "FlowVersion",
    "ProcessEdge",
    "ProcessNode",
    "ImprovementType",
    "NodeType",
    # State
    "AnalysisOverlay",
    "FlowLibrary",
    "FlowSession",
    "GraphStore",
    "VersionHistory",
    # Simulation
    "AnalysisResult",
    "SimulationParams",
    "SimulationResult",
    "calculate_simulation",
    # Errors
    "CollaboratorError",
    "ConfigurationError",
    "FlowParseError",
    "ProcflowError",
]
