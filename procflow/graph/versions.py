"""Append-only snapshot history of a flow document."""

from typing import Iterable, Iterator

from procflow.models.flow import FlowVersion, ProcessEdge, ProcessNode, clone_graph
from procflow.utils.identifiers import generate_version_id, utc_timestamp


class VersionHistory:
    """Ordered list of immutable graph snapshots.

    History is unbounded unless ``max_versions`` is set, in which case the
    oldest snapshots are dropped as new ones are appended. Snapshots are
    only ever handed out as deep copies.
    """

    def __init__(
        self,
        versions: Iterable[FlowVersion] = (),
        max_versions: int | None = None,
    ) -> None:
        if max_versions is not None and max_versions < 1:
            raise ValueError("max_versions must be at least 1")
        self.max_versions = max_versions
        self._versions: list[FlowVersion] = [version.model_copy(deep=True) for version in versions]

    def save_version(
        self,
        name: str,
        description: str | None,
        nodes: list[ProcessNode],
        edges: list[ProcessEdge],
        comment: str | None = None,
    ) -> FlowVersion:
        """Snapshot a deep copy of the graph and append it."""
        node_copies, edge_copies = clone_graph(nodes, edges)
        version = FlowVersion(
            id=generate_version_id(),
            name=name,
            description=description,
            nodes=node_copies,
            edges=edge_copies,
            saved_at=utc_timestamp(),
            comment=comment,
        )
        self._versions.append(version)
        if self.max_versions is not None and len(self._versions) > self.max_versions:
            del self._versions[: len(self._versions) - self.max_versions]
        return version.model_copy(deep=True)

    def get(self, version_id: str) -> FlowVersion | None:
        for version in self._versions:
            if version.id == version_id:
                return version.model_copy(deep=True)
        return None

    def restore(self, version_id: str) -> tuple[list[ProcessNode], list[ProcessEdge]] | None:
        """Fresh copy of a snapshot's graph; the snapshot itself is untouched."""
        version = self.get(version_id)
        if version is None:
            return None
        return list(version.nodes), list(version.edges)

    def delete_version(self, version_id: str) -> None:
        self._versions = [v for v in self._versions if v.id != version_id]

    @property
    def versions(self) -> list[FlowVersion]:
        return [version.model_copy(deep=True) for version in self._versions]

    def __iter__(self) -> Iterator[FlowVersion]:
        return iter(self.versions)

    def __len__(self) -> int:
        return len(self._versions)
