"""JSON export/import of flow documents."""

import json

from pydantic import ValidationError

from procflow.errors import FlowParseError
from procflow.models.flow import FlowData, FlowVersion, ProcessEdge, ProcessNode
from procflow.utils.identifiers import generate_flow_id, utc_timestamp


def build_document(
    name: str,
    description: str | None,
    nodes: list[ProcessNode],
    edges: list[ProcessEdge],
    versions: list[FlowVersion],
) -> FlowData:
    """Wrap a working graph in a document with a fresh id and timestamps.

    An export is a snapshot, so it never reuses the id of a library entry.
    """
    now = utc_timestamp()
    return FlowData(
        id=generate_flow_id(),
        name=name,
        description=description,
        nodes=nodes,
        edges=edges,
        versions=versions,
        created_at=now,
        updated_at=now,
    )


def dump_document(document: FlowData) -> str:
    """Pretty-printed JSON text of a document."""
    return json.dumps(document.to_wire(), ensure_ascii=False, indent=2)


def export_flow(
    name: str,
    description: str | None,
    nodes: list[ProcessNode],
    edges: list[ProcessEdge],
    versions: list[FlowVersion],
) -> str:
    return dump_document(build_document(name, description, nodes, edges, versions))


def import_flow(text: str | bytes) -> FlowData:
    """Parse exported text back into a document.

    Raises:
        FlowParseError: if the text is not JSON or not a flow document.
            Nothing is returned in that case, so callers never see a
            partially parsed document.
    """
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise FlowParseError(
            f"invalid JSON: {exc}",
            user_message="JSONの形式が正しくありません",
        ) from exc

    if not isinstance(payload, dict):
        raise FlowParseError(
            f"expected a JSON object, got {type(payload).__name__}",
            user_message="JSONの形式が正しくありません",
        )

    # id and timestamps are not required in hand-written files
    now = utc_timestamp()
    payload.setdefault("id", generate_flow_id())
    payload.setdefault("createdAt", now)
    payload.setdefault("updatedAt", now)
    if payload.get("versions") is None:
        payload["versions"] = []

    try:
        flow = FlowData.model_validate(payload)
    except ValidationError as exc:
        raise FlowParseError(
            f"invalid flow document: {exc.error_count()} validation error(s)",
            user_message="フローデータの形式が正しくありません",
            context={"errors": exc.errors(include_url=False)},
        ) from exc

    graphs = [("document", flow.nodes, flow.edges)]
    graphs += [(f"version {v.id}", v.nodes, v.edges) for v in flow.versions]
    for where, nodes, edges in graphs:
        for kind, ids in (("node", [n.id for n in nodes]), ("edge", [e.id for e in edges])):
            duplicates = _duplicates(ids)
            if duplicates:
                raise FlowParseError(
                    f"duplicate {kind} ids in {where}: {', '.join(duplicates)}",
                    user_message="フローデータの形式が正しくありません",
                    context={"kind": kind, "duplicates": duplicates},
                )
    return flow


def _duplicates(ids: list[str]) -> list[str]:
    seen: set[str] = set()
    repeated: list[str] = []
    for item in ids:
        if item in seen and item not in repeated:
            repeated.append(item)
        seen.add(item)
    return repeated
