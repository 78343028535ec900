"""Tests for the bottleneck analysis overlay."""

from procflow.adapters.flow_generator import GeneratedFlow
from procflow.analysis.overlay import AnalysisOverlay
from procflow.models.analysis import AnalysisResult, Bottleneck, Improvement
from procflow.session import FlowSession


def _report(*node_ids: str) -> AnalysisResult:
    return AnalysisResult(
        summary="承認待ちが長い",
        total_duration=120,
        bottlenecks=[Bottleneck(node_id=n, node_name=n, reason="slow", suggestion="automate") for n in node_ids],
        improvements=[Improvement(category="自動化", description="use OCR", impact="high")],
    )


class TestAnalysisOverlay:
    def test_empty(self):
        overlay = AnalysisOverlay()
        assert overlay.result is None
        assert not overlay.has_result
        assert not overlay.is_analyzing
        assert overlay.bottleneck_for("a") is None
        assert overlay.highlighted_node_ids == []

    def test_lookup_by_node(self):
        overlay = AnalysisOverlay()
        overlay.set_result(_report("a", "c"))
        assert overlay.is_bottleneck("a")
        assert not overlay.is_bottleneck("b")
        assert overlay.bottleneck_for("c").reason == "slow"
        assert overlay.highlighted_node_ids == ["a", "c"]

    def test_result_stored_verbatim(self):
        overlay = AnalysisOverlay()
        report = _report("ghost")
        overlay.set_result(report)
        # ids not present in any graph are kept as-is
        assert overlay.result is report
        assert overlay.is_bottleneck("ghost")

    def test_first_duplicate_wins(self):
        overlay = AnalysisOverlay()
        report = _report("a")
        report.bottlenecks.append(Bottleneck(node_id="a", reason="second"))
        overlay.set_result(report)
        assert overlay.bottleneck_for("a").reason == "slow"

    def test_clear(self):
        overlay = AnalysisOverlay()
        overlay.set_result(_report("a"))
        overlay.clear()
        assert overlay.result is None
        assert not overlay.is_bottleneck("a")


class TestSessionClearsOverlay:
    def _analyzed_session(self) -> FlowSession:
        session = FlowSession()
        node = session.add_node("task")
        session.set_analysis_result(_report(node.id))
        return session

    def test_kept_across_incremental_edits(self):
        session = self._analyzed_session()
        node_id = session.nodes[0].id
        session.update_node_data(node_id, {"label": "renamed"})
        session.add_node("wait")
        assert session.analysis_result is not None
        assert session.overlay.is_bottleneck(node_id)

    def test_cleared_on_import(self):
        session = self._analyzed_session()
        session.import_flow(session.export_flow())
        assert session.analysis_result is None

    def test_cleared_on_load_flow(self):
        session = self._analyzed_session()
        flow = session.save_flow()
        session.set_analysis_result(_report("x"))
        session.load_flow(flow.id)
        assert session.analysis_result is None

    def test_cleared_on_new_flow(self):
        session = self._analyzed_session()
        session.new_flow()
        assert session.analysis_result is None

    def test_cleared_on_version_restore(self):
        session = self._analyzed_session()
        version = session.save_version()
        session.load_version(version.id)
        assert session.analysis_result is None

    def test_cleared_on_generated_flow(self):
        session = self._analyzed_session()
        session.apply_generated_flow(GeneratedFlow(nodes=[], edges=[]))
        assert session.analysis_result is None
