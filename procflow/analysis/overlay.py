"""Holder for the externally computed bottleneck report."""

from procflow.models.analysis import AnalysisResult, Bottleneck


class AnalysisOverlay:
    """Keeps an AnalysisResult exactly as received, indexed by node id.

    The overlay does no computation of its own. It must be cleared whenever
    the graph is replaced wholesale, because bottleneck ids would otherwise
    point at nodes of a different graph.
    """

    def __init__(self) -> None:
        self._result: AnalysisResult | None = None
        self._by_node: dict[str, Bottleneck] = {}
        self.is_analyzing = False

    @property
    def result(self) -> AnalysisResult | None:
        return self._result

    def set_result(self, result: AnalysisResult | None) -> None:
        self._result = result
        # first entry wins when the report names a node twice
        self._by_node = {}
        if result is not None:
            for bottleneck in result.bottlenecks:
                self._by_node.setdefault(bottleneck.node_id, bottleneck)

    def clear(self) -> None:
        self.set_result(None)

    def bottleneck_for(self, node_id: str) -> Bottleneck | None:
        return self._by_node.get(node_id)

    def is_bottleneck(self, node_id: str) -> bool:
        return node_id in self._by_node

    @property
    def highlighted_node_ids(self) -> list[str]:
        return list(self._by_node)

    @property
    def has_result(self) -> bool:
        return self._result is not None
