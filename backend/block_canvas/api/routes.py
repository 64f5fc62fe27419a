from fastapi import APIRouter

from block_canvas.canvas.export import build_export
from block_canvas.catalog import EXAMPLE_DESCRIPTIONS, default_diagram, load_block_catalog
from block_canvas.inference.config import get_llm_client
from block_canvas.ir.errors import DESCRIPTION_REQUIRED, ValidationError
from block_canvas.observability import get_logger
from block_canvas.pipeline.generator import generate_block_diagram
from block_canvas.schemas import (
    ErrorResponse,
    ExportRequest,
    GenerateDiagramRequest,
    GenerateDiagramResponse,
    PresentationRequest,
    PresentationResponse,
)
from block_canvas.validation import validate_diagram
from block_canvas.visual import to_presentation

logger = get_logger(__name__)

router = APIRouter()

# every failure leaves as {"error": message}
GENERATION_ERRORS = {
    400: {"model": ErrorResponse},
    402: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}
CANVAS_ERRORS = {400: {"model": ErrorResponse}}


@router.post(
    "/generate-diagram",
    response_model=GenerateDiagramResponse,
    responses=GENERATION_ERRORS,
)
def generate_diagram(request: GenerateDiagramRequest):
    """
    Turn a product description into a five block diagram.

    Errors are raised as DiagramError subclasses and rendered as
    {"error": message} by the handlers in main.py:
    400 bad description, 429 rate limited, 402 quota, 500 anything else.
    """
    description = request.description
    if not isinstance(description, str) or not description.strip():
        raise ValidationError(DESCRIPTION_REQUIRED)

    client = get_llm_client()
    diagram = generate_block_diagram(description, client)

    return {"diagram": diagram.to_payload()}


# ============================================================
# TEMPLATES & CATALOG
# ============================================================

@router.get("/templates/default")
def get_default_template():
    return {"diagram": default_diagram().to_payload()}


@router.get("/block-types")
def list_block_types():
    return {
        **load_block_catalog().to_dict(),
        "examples": EXAMPLE_DESCRIPTIONS,
    }


# ============================================================
# CANVAS HELPERS
# ============================================================

@router.post(
    "/diagram/presentation",
    response_model=PresentationResponse,
    responses=CANVAS_ERRORS,
)
def present_diagram(request: PresentationRequest):
    """Validate a canonical diagram and lay it out as canvas nodes/edges."""
    diagram = validate_diagram(request.diagram)
    nodes, edges = to_presentation(diagram)
    return {
        "nodes": [n.model_dump() for n in nodes],
        "edges": [e.to_canvas() for e in edges],
    }


@router.post("/export", responses=CANVAS_ERRORS)
def export_diagram(request: ExportRequest):
    if not request.nodes:
        raise ValidationError("No diagram to export. Generate a diagram first.")
    return build_export(request.nodes, request.edges, request.description or "")


@router.get("/health")
def health():
    return {"status": "ok"}
