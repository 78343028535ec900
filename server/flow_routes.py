"""API routes for the saved-flow library."""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response
from pydantic import Field

from procflow.errors import FlowParseError
from procflow.library import FlowLibrary
from procflow.models.flow import FlowData, FlowVersion, ProcessEdge, ProcessNode, WireModel
from procflow.models.simulation import SimulationParams
from procflow.serialization import export_flow, import_flow
from server.db import get_library

router = APIRouter()


class SaveFlowRequest(WireModel):
    """request body for saving a flow; upserts by name."""

    name: str
    description: str | None = None
    nodes: list[ProcessNode] = Field(default_factory=list)
    edges: list[ProcessEdge] = Field(default_factory=list)
    versions: list[FlowVersion] = Field(default_factory=list)


class FlowListItem(WireModel):
    """summary item for listing flows."""

    id: str
    name: str
    description: str | None = None
    node_count: int = Field(alias="nodeCount")
    version_count: int = Field(alias="versionCount")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


def _require_flow(library: FlowLibrary, flow_id: str) -> FlowData:
    flow = library.load(flow_id)
    if flow is None:
        raise HTTPException(status_code=404, detail=f"Flow not found: {flow_id}")
    return flow


@router.get("/flows", response_model_exclude_none=True)
def list_flows(library: FlowLibrary = Depends(get_library)) -> list[FlowListItem]:
    """list all saved flows."""
    return [
        FlowListItem(
            id=flow.id,
            name=flow.name,
            description=flow.description,
            node_count=len(flow.nodes),
            version_count=len(flow.versions),
            created_at=flow.created_at,
            updated_at=flow.updated_at,
        )
        for flow in library.list_flows()
    ]


@router.get("/flows/{flow_id}", response_model_exclude_none=True)
def get_flow(flow_id: str, library: FlowLibrary = Depends(get_library)) -> FlowData:
    """get a saved flow."""
    return _require_flow(library, flow_id)


@router.put("/flows", response_model_exclude_none=True)
def save_flow(request: SaveFlowRequest, library: FlowLibrary = Depends(get_library)) -> FlowData:
    """save a flow, overwriting any entry with the same name."""
    return library.save(
        request.name,
        request.description,
        request.nodes,
        request.edges,
        request.versions,
    )


@router.delete("/flows/{flow_id}")
def delete_flow(flow_id: str, library: FlowLibrary = Depends(get_library)) -> dict:
    """delete a saved flow."""
    _require_flow(library, flow_id)
    library.delete(flow_id)
    return {"deleted": flow_id}


@router.get("/flows/{flow_id}/export")
def export_saved_flow(flow_id: str, library: FlowLibrary = Depends(get_library)) -> Response:
    """download a saved flow as an export file."""
    flow = _require_flow(library, flow_id)
    text = export_flow(flow.name, flow.description, flow.nodes, flow.edges, flow.versions)
    return Response(
        content=text.encode("utf-8"),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{flow_id}.json"'},
    )


@router.post("/flows/import", response_model_exclude_none=True)
async def import_saved_flow(
    request: Request,
    save: bool = False,
    library: FlowLibrary = Depends(get_library),
) -> FlowData:
    """parse an export file; with ?save=true it is also upserted into the library."""
    try:
        flow = import_flow(await request.body())
    except FlowParseError as exc:
        raise HTTPException(status_code=400, detail=exc.user_message)
    if save:
        flow = library.save(flow.name, flow.description, flow.nodes, flow.edges, flow.versions)
    return flow


@router.get("/settings")
def get_settings(library: FlowLibrary = Depends(get_library)) -> SimulationParams:
    """get the global simulation parameters."""
    return library.get_settings()


@router.put("/settings")
def update_settings(
    params: SimulationParams,
    library: FlowLibrary = Depends(get_library),
) -> SimulationParams:
    """replace the global simulation parameters."""
    library.save_settings(params)
    return params
