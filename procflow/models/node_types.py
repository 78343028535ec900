"""Static node-type and improvement-type tables.

Every node carries a ``nodeType`` drawn from a fixed BPMN-style vocabulary.
The descriptor for that type decides how the node is drawn and which
connection handles it exposes, so nothing about a node's interaction
contract is stored on the node itself.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class NodeType(str, Enum):
    """BPMN-style node types."""

    # events
    start = "start"
    end = "end"
    intermediate = "intermediate"
    # tasks
    task = "task"
    user_task = "userTask"
    service_task = "serviceTask"
    script_task = "scriptTask"
    # gateways
    exclusive_gateway = "exclusiveGateway"  # XOR
    parallel_gateway = "parallelGateway"  # AND
    inclusive_gateway = "inclusiveGateway"  # OR
    # other
    wait = "wait"
    subprocess = "subprocess"


class NodeCategory(str, Enum):
    event = "event"
    task = "task"
    gateway = "gateway"
    other = "other"


class NodeShape(str, Enum):
    rectangle = "rectangle"
    circle = "circle"
    diamond = "diamond"
    rounded = "rounded"


class NodeTypeDescriptor(BaseModel):
    """Display and interaction metadata for a node type."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    label: str
    label_en: str = Field(alias="labelEn")
    color: str
    bg_color: str = Field(alias="bgColor")
    border_color: str = Field(alias="borderColor")
    shape: NodeShape
    category: NodeCategory


def _descriptor(
    label: str,
    label_en: str,
    color: str,
    bg_color: str,
    shape: NodeShape,
    category: NodeCategory,
) -> NodeTypeDescriptor:
    # border always matches the foreground colour
    return NodeTypeDescriptor(
        label=label,
        label_en=label_en,
        color=color,
        bg_color=bg_color,
        border_color=color,
        shape=shape,
        category=category,
    )


NODE_TYPE_CONFIG: dict[NodeType, NodeTypeDescriptor] = {
    NodeType.start: _descriptor(
        "開始イベント", "Start", "#22c55e", "#dcfce7", NodeShape.circle, NodeCategory.event
    ),
    NodeType.end: _descriptor(
        "終了イベント", "End", "#ef4444", "#fee2e2", NodeShape.circle, NodeCategory.event
    ),
    NodeType.intermediate: _descriptor(
        "中間イベント", "Intermediate", "#f59e0b", "#fef3c7", NodeShape.circle, NodeCategory.event
    ),
    NodeType.task: _descriptor(
        "タスク", "Task", "#3b82f6", "#dbeafe", NodeShape.rounded, NodeCategory.task
    ),
    NodeType.user_task: _descriptor(
        "ユーザータスク", "User Task", "#8b5cf6", "#ede9fe", NodeShape.rounded, NodeCategory.task
    ),
    NodeType.service_task: _descriptor(
        "サービスタスク", "Service Task", "#06b6d4", "#cffafe", NodeShape.rounded, NodeCategory.task
    ),
    NodeType.script_task: _descriptor(
        "スクリプトタスク", "Script Task", "#14b8a6", "#ccfbf1", NodeShape.rounded, NodeCategory.task
    ),
    NodeType.exclusive_gateway: _descriptor(
        "排他ゲートウェイ", "XOR Gateway", "#f59e0b", "#fef3c7", NodeShape.diamond, NodeCategory.gateway
    ),
    NodeType.parallel_gateway: _descriptor(
        "並列ゲートウェイ", "AND Gateway", "#10b981", "#d1fae5", NodeShape.diamond, NodeCategory.gateway
    ),
    NodeType.inclusive_gateway: _descriptor(
        "包含ゲートウェイ", "OR Gateway", "#6366f1", "#e0e7ff", NodeShape.diamond, NodeCategory.gateway
    ),
    NodeType.wait: _descriptor(
        "待機", "Wait", "#6b7280", "#f3f4f6", NodeShape.rounded, NodeCategory.other
    ),
    NodeType.subprocess: _descriptor(
        "サブプロセス", "Subprocess", "#ec4899", "#fce7f3", NodeShape.rounded, NodeCategory.other
    ),
}

# seeded duration (minutes) for freshly added nodes
TASK_DEFAULT_DURATION = 30
WAIT_DEFAULT_DURATION = 60


def get_descriptor(node_type: NodeType | str) -> NodeTypeDescriptor:
    """Look up the static descriptor for a node type."""
    return NODE_TYPE_CONFIG[NodeType(node_type)]


def default_duration(node_type: NodeType | str) -> int | None:
    """Duration seeded on a new node: 30 for tasks, 60 for wait, else None."""
    node_type = NodeType(node_type)
    if get_descriptor(node_type).category is NodeCategory.task:
        return TASK_DEFAULT_DURATION
    if node_type is NodeType.wait:
        return WAIT_DEFAULT_DURATION
    return None


def accepts_inbound(node_type: NodeType | str) -> bool:
    """Whether edges may end at this node type."""
    return NodeType(node_type) is not NodeType.start


def accepts_outbound(node_type: NodeType | str) -> bool:
    """Whether edges may start at this node type."""
    return NodeType(node_type) is not NodeType.end


def has_side_handles(node_type: NodeType | str) -> bool:
    """Gateways expose extra left/right handles for branches."""
    return get_descriptor(node_type).category is NodeCategory.gateway


class ImprovementType(str, Enum):
    """What-if improvement applied to a step in a simulation."""

    automate = "automate"
    eliminate = "eliminate"
    parallelize = "parallelize"
    optimize = "optimize"
    none = "none"


class ImprovementDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    description: str
    # fraction of the current duration that remains; None leaves it unset
    remaining_ratio: float | None = None


IMPROVEMENT_TYPES: dict[ImprovementType, ImprovementDescriptor] = {
    ImprovementType.automate: ImprovementDescriptor(
        label="自動化", description="RPAやシステム化により自動化", remaining_ratio=0.1
    ),
    ImprovementType.eliminate: ImprovementDescriptor(
        label="削除", description="不要なステップを削除", remaining_ratio=0.0
    ),
    ImprovementType.parallelize: ImprovementDescriptor(
        label="並列化", description="同時実行可能な作業を並列化"
    ),
    ImprovementType.optimize: ImprovementDescriptor(
        label="最適化", description="プロセスを効率化", remaining_ratio=0.5
    ),
    ImprovementType.none: ImprovementDescriptor(label="変更なし", description="現状維持"),
}


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; durations round half away from zero
    return int(value + 0.5)


def improved_duration_for(improvement_type: ImprovementType | str, duration: int | None) -> int | None:
    """Improved duration implied by an improvement type.

    ``automate`` keeps 10% of the duration, ``optimize`` 50%, ``eliminate``
    drops it to zero. ``parallelize`` and ``none`` return None so the
    simulation falls back to the current duration.
    """
    ratio = IMPROVEMENT_TYPES[ImprovementType(improvement_type)].remaining_ratio
    if ratio is None:
        return None
    return _round_half_up((duration or 0) * ratio)
