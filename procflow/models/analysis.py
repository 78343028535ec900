"""Models for the externally computed bottleneck report."""

from enum import Enum

from pydantic import Field

from procflow.models.flow import WireModel


class ImpactLevel(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class Bottleneck(WireModel):
    """A step the analysis flagged as slowing the flow down."""

    node_id: str = Field(alias="nodeId")
    node_name: str = Field(default="", alias="nodeName")
    reason: str = ""
    suggestion: str = ""


class Improvement(WireModel):
    # free text; the analyzer is asked for 自動化/統合/削除/並列化/その他
    category: str
    description: str
    impact: ImpactLevel = ImpactLevel.medium


class AnalysisResult(WireModel):
    """Report returned by the flow analysis collaborator, stored verbatim."""

    summary: str = ""
    total_duration: float = Field(default=0, alias="totalDuration")
    bottlenecks: list[Bottleneck] = Field(default_factory=list)
    improvements: list[Improvement] = Field(default_factory=list)
