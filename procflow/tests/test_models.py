"""Tests for the flow models and static node-type tables."""

import json

import pytest
from pydantic import ValidationError

from procflow.models.flow import (
    FlowVersion,
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
    accepts_inbound,
    accepts_outbound,
    default_duration,
    get_descriptor,
    has_side_handles,
    improved_duration_for,
)
from procflow.utils.identifiers import utc_timestamp


class TestNodeTypeConfig:
    """Test the static descriptor table."""

    def test_every_node_type_has_a_descriptor(self):
        assert set(NODE_TYPE_CONFIG) == set(NodeType)

    def test_categories(self):
        assert get_descriptor("start").category is NodeCategory.event
        assert get_descriptor("userTask").category is NodeCategory.task
        assert get_descriptor("exclusiveGateway").category is NodeCategory.gateway
        assert get_descriptor("wait").category is NodeCategory.other
        assert get_descriptor("subprocess").category is NodeCategory.other

    def test_gateways_are_diamonds(self):
        for node_type, descriptor in NODE_TYPE_CONFIG.items():
            if descriptor.category is NodeCategory.gateway:
                assert descriptor.shape is NodeShape.diamond, node_type

    def test_descriptor_wire_aliases(self):
        data = get_descriptor(NodeType.task).model_dump(by_alias=True)
        assert data["labelEn"] == "Task"
        assert data["bgColor"] == "#dbeafe"
        assert data["borderColor"] == data["color"]

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError):
            get_descriptor("lane")


class TestInteractionContract:
    """Handles are decided by node type alone."""

    def test_start_has_no_inbound(self):
        assert not accepts_inbound("start")
        assert accepts_outbound("start")

    def test_end_has_no_outbound(self):
        assert accepts_inbound("end")
        assert not accepts_outbound("end")

    def test_only_gateways_get_side_handles(self):
        assert has_side_handles("parallelGateway")
        assert has_side_handles("inclusiveGateway")
        assert not has_side_handles("task")
        assert not has_side_handles("intermediate")


class TestDefaults:
    def test_default_durations(self):
        assert default_duration("task") == 30
        assert default_duration("serviceTask") == 30
        assert default_duration("wait") == 60
        assert default_duration("start") is None
        assert default_duration("exclusiveGateway") is None
        assert default_duration("subprocess") is None


class TestImprovementPolicy:
    def test_automate_keeps_ten_percent(self):
        assert improved_duration_for(ImprovementType.automate, 100) == 10

    def test_optimize_keeps_half(self):
        assert improved_duration_for("optimize", 45) == 23

    def test_rounds_half_up(self):
        assert improved_duration_for("automate", 25) == 3

    def test_eliminate_is_zero(self):
        assert improved_duration_for("eliminate", 90) == 0

    def test_parallelize_and_none_leave_unset(self):
        assert improved_duration_for("parallelize", 90) is None
        assert improved_duration_for("none", 90) is None

    def test_missing_duration_counts_as_zero(self):
        assert improved_duration_for("automate", None) == 0

    def test_table_covers_all_types(self):
        assert set(IMPROVEMENT_TYPES) == set(ImprovementType)


class TestProcessNodeWire:
    """Test camelCase wire format and extra-key preservation."""

    def test_accepts_wire_keys(self):
        node = ProcessNode.model_validate({
            "id": "n1",
            "type": "processNode",
            "position": {"x": 10, "y": 20},
            "data": {
                "label": "Approve",
                "nodeType": "exclusiveGateway",
                "simulation": {"currentDuration": 5, "improvementType": "none"},
            },
        })
        assert node.data.node_type is NodeType.exclusive_gateway
        assert node.data.simulation.current_duration == 5
        assert node.position.x == 10

    def test_to_wire_uses_aliases_and_drops_none(self):
        node = ProcessNode(
            id="n1",
            data=ProcessNodeData(label="Do it", node_type="task", duration=30),
        )
        wire = node.to_wire()
        assert wire["data"]["nodeType"] == "task"
        assert "assignee" not in wire["data"]
        assert "node_type" not in wire["data"]

    def test_extra_keys_survive_round_trip(self):
        raw = {
            "id": "n1",
            "position": {"x": 0, "y": 0},
            "measured": {"width": 120, "height": 40},
            "data": {"label": "x", "nodeType": "task", "color": "red"},
        }
        node = ProcessNode.model_validate(raw)
        restored = ProcessNode.model_validate_json(json.dumps(node.to_wire()))
        assert restored.to_wire()["measured"] == {"width": 120, "height": 40}
        assert restored.to_wire()["data"]["color"] == "red"

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            ProcessNodeData(label="x", node_type="task", duration=-1)

    def test_unknown_node_type_rejected(self):
        with pytest.raises(ValidationError):
            ProcessNodeData.model_validate({"label": "x", "nodeType": "swimlane"})


class TestMerge:
    """ProcessNodeData.merged is a shallow, name-scoped override."""

    def _data(self) -> ProcessNodeData:
        return ProcessNodeData(
            label="Review",
            node_type="userTask",
            assignee="alice",
            duration=30,
            issues=["slow"],
            simulation=SimulationData(current_duration=30, improvement_type="none"),
        )

    def test_unnamed_fields_unchanged(self):
        merged = self._data().merged({"label": "Review v2"})
        assert merged.label == "Review v2"
        assert merged.assignee == "alice"
        assert merged.duration == 30
        assert merged.issues == ["slow"]
        assert merged.simulation.current_duration == 30

    def test_accepts_alias_and_attribute_names(self):
        merged = self._data().merged({"nodeType": "serviceTask", "department": "ops"})
        assert merged.node_type is NodeType.service_task
        merged = self._data().merged({"node_type": "scriptTask"})
        assert merged.node_type is NodeType.script_task

    def test_nested_record_replaced_not_merged(self):
        merged = self._data().merged({"simulation": {"improvementType": "automate"}})
        assert merged.simulation.improvement_type is ImprovementType.automate
        assert merged.simulation.current_duration is None

    def test_original_untouched(self):
        data = self._data()
        data.merged({"label": "changed", "issues": []})
        assert data.label == "Review"
        assert data.issues == ["slow"]


class TestClone:
    def test_clone_graph_is_deep(self):
        nodes = [ProcessNode(id="a", data=ProcessNodeData(label="A", node_type="task", issues=["x"]))]
        edges = [ProcessEdge(id="e", source="a", target="a")]
        node_copies, edge_copies = clone_graph(nodes, edges)

        node_copies[0].data.issues.append("y")
        edge_copies[0].target = "b"

        assert nodes[0].data.issues == ["x"]
        assert edges[0].target == "a"

    def test_version_is_frozen(self):
        version = FlowVersion(
            id="v1",
            name="flow",
            nodes=[],
            edges=[],
            saved_at=utc_timestamp(),
        )
        with pytest.raises(ValidationError):
            version.name = "other"


class TestEdge:
    def test_display_label_prefers_data(self):
        edge = ProcessEdge.model_validate(
            {"id": "e", "source": "a", "target": "b", "label": "top", "data": {"label": "yes"}}
        )
        assert edge.display_label == "yes"

    def test_touches(self):
        edge = ProcessEdge(id="e", source="a", target="b")
        assert edge.touches("a")
        assert edge.touches("b")
        assert not edge.touches("c")
