"""Core data models for procflow."""

from procflow.models.analysis import (
    AnalysisResult,
    Bottleneck,
    ImpactLevel,
    Improvement,
)
from procflow.models.flow import (
    Comment,
    EdgeData,
    FlowData,
    FlowVersion,
    Position,
    ProcessEdge,
    ProcessNode,
    ProcessNodeData,
    SimulationData,
    clone_graph,
)
from procflow.models.node_types import (
    IMPROVEMENT_TYPES,
    NODE_TYPE_CONFIG,
    ImprovementType,
    NodeCategory,
    NodeShape,
    NodeType,
    NodeTypeDescriptor,
)
from procflow.models.simulation import (
    SimulationParams,
    SimulationResult,
    SimulationSavings,
    SimulationTotal,
)

__all__ = [
    # Flow documents
    "Comment",
    "EdgeData",
    "FlowData",
    "FlowVersion",
    "Position",
    "ProcessEdge",
    "ProcessNode",
    "ProcessNodeData",
    "SimulationData",
    "clone_graph",
    # Static tables
    "IMPROVEMENT_TYPES",
    "NODE_TYPE_CONFIG",
    "ImprovementType",
    "NodeCategory",
    "NodeShape",
    "NodeType",
    "NodeTypeDescriptor",
    # Analysis
    "AnalysisResult",
    "Bottleneck",
    "ImpactLevel",
    "Improvement",
    # Simulation
    "SimulationParams",
    "SimulationResult",
    "SimulationSavings",
    "SimulationTotal",
]
