"""API routes for the AI flow generator and analyzer."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field

from procflow.adapters.flow_analyzer import FlowAnalyzer
from procflow.adapters.flow_generator import FlowGenerator, GeneratedFlow
from procflow.errors import CollaboratorError, ConfigurationError
from procflow.models.analysis import AnalysisResult
from procflow.models.flow import ProcessEdge, ProcessNode, WireModel

logger = logging.getLogger(__name__)

router = APIRouter()


class GenerateFlowRequest(WireModel):
    text: str = ""


class AnalyzeRequest(WireModel):
    nodes: list[ProcessNode] = Field(default_factory=list)
    edges: list[ProcessEdge] = Field(default_factory=list)
    flow_name: str = Field(default="", alias="flowName")


def get_generator() -> FlowGenerator:
    return FlowGenerator()


def get_analyzer() -> FlowAnalyzer:
    return FlowAnalyzer()


@router.post("/generate-flow", response_model_exclude_none=True)
async def generate_flow(
    request: GenerateFlowRequest,
    generator: FlowGenerator = Depends(get_generator),
) -> GeneratedFlow:
    """convert a manual or procedure text into a flow graph."""
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")
    try:
        return await generator.generate(request.text)
    except ConfigurationError as exc:
        raise HTTPException(status_code=500, detail=exc.user_message)
    except CollaboratorError as exc:
        logger.error("Generate flow error: %s", exc.log_message())
        raise HTTPException(status_code=502, detail="Failed to generate flow")


@router.post("/analyze", response_model_exclude_none=True)
async def analyze_flow(
    request: AnalyzeRequest,
    analyzer: FlowAnalyzer = Depends(get_analyzer),
) -> AnalysisResult:
    """ask for bottlenecks and improvement suggestions for a flow."""
    if not request.nodes:
        raise HTTPException(status_code=400, detail="ノードがありません")
    try:
        return await analyzer.analyze(request.nodes, request.edges, request.flow_name)
    except ConfigurationError as exc:
        raise HTTPException(status_code=500, detail=exc.user_message)
    except CollaboratorError as exc:
        logger.error("Analysis error: %s", exc.log_message())
        raise HTTPException(status_code=502, detail="分析中にエラーが発生しました")
