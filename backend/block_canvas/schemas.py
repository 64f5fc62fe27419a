from typing import Any, List, Optional

from pydantic import BaseModel, Field

from block_canvas.visual.visual_schema import FlowEdge, FlowNode


class GenerateDiagramRequest(BaseModel):
    # typed loosely so a wrong type becomes our 400 instead of a 422
    description: Any = None


class GenerateDiagramResponse(BaseModel):
    diagram: dict


class ErrorResponse(BaseModel):
    error: str


class PresentationRequest(BaseModel):
    """Canonical diagram to project onto the canvas"""
    diagram: Any = None


class PresentationResponse(BaseModel):
    nodes: List[dict]
    edges: List[dict]


class ExportRequest(BaseModel):
    """Current canvas working set to wrap into an export document"""
    nodes: List[FlowNode] = Field(default_factory=list)
    edges: List[FlowEdge] = Field(default_factory=list)
    description: Optional[str] = ""
