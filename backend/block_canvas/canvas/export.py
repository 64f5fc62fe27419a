"""
Export / import of the canvas working set.

The export document carries the canonical diagram AND the raw canvas
nodes/edges. The canonical form alone would lose user-arranged positions,
so reimport prefers the canvas data and only falls back to laying the
canonical diagram out again.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError as PydanticValidationError

from block_canvas.ir.errors import SchemaError
from block_canvas.observability import get_logger
from block_canvas.validation import validate_diagram
from block_canvas.visual import FlowEdge, FlowNode, to_canonical, to_presentation
from block_canvas.visual.visual_style import default_edge_options

logger = get_logger(__name__)

EXPORT_VERSION = "1.0"


def build_export(
    nodes: Sequence[FlowNode],
    edges: Sequence[FlowEdge],
    description: str,
    generated_at: Optional[datetime] = None,
) -> dict:
    generated_at = generated_at or datetime.now(timezone.utc)

    return {
        "version": EXPORT_VERSION,
        "generatedAt": generated_at.isoformat().replace("+00:00", "Z"),
        "description": description,
        "diagram": to_canonical(nodes, edges).to_payload(),
        "reactFlowData": {
            "nodes": [
                {
                    "id": n.id,
                    "type": n.type,
                    "position": n.position.model_dump(),
                    "data": n.data.model_dump(exclude_none=True),
                }
                for n in nodes
            ],
            "edges": [
                {
                    "id": e.id,
                    "source": e.source,
                    "target": e.target,
                    "label": e.label,
                }
                for e in edges
            ],
        },
    }


def export_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"block-diagram-{int(now.timestamp() * 1000)}.json"


def write_export(
    directory: Path,
    nodes: Sequence[FlowNode],
    edges: Sequence[FlowEdge],
    description: str,
) -> Path:
    document = build_export(nodes, edges, description)
    path = Path(directory) / export_filename()
    path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Exported diagram to %s", path)
    return path


def load_export(document: Any) -> Tuple[List[FlowNode], List[FlowEdge], str]:
    """
    Rebuild the canvas working set from an export document.

    Returns (nodes, edges, description). Raises SchemaError when neither
    the canvas data nor the canonical diagram can be used.
    """
    if not isinstance(document, Mapping):
        raise SchemaError("export document must be a JSON object")

    description = document.get("description") or ""
    if not isinstance(description, str):
        raise SchemaError("'description' must be a string")

    canvas = document.get("reactFlowData")
    if isinstance(canvas, Mapping) and canvas.get("nodes"):
        nodes, edges = _load_canvas_data(canvas)
        return nodes, edges, description

    if "diagram" not in document:
        raise SchemaError("export document has neither 'reactFlowData' nor 'diagram'")

    logger.info("Export has no canvas data, laying out canonical diagram")
    nodes, edges = to_presentation(validate_diagram(document["diagram"]))
    return nodes, edges, description


def read_export(path: Path) -> Tuple[List[FlowNode], List[FlowEdge], str]:
    try:
        document = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SchemaError(f"export file is not valid JSON: {e.msg}") from e
    return load_export(document)


# ------------------------------------------------
# Helpers
# ------------------------------------------------

def _load_canvas_data(canvas: Mapping) -> Tuple[List[FlowNode], List[FlowEdge]]:
    raw_nodes = canvas.get("nodes") or []
    raw_edges = canvas.get("edges") or []

    if not isinstance(raw_nodes, list) or not isinstance(raw_edges, list):
        raise SchemaError("'reactFlowData' nodes and edges must be lists")

    try:
        nodes = [FlowNode.model_validate(n) for n in raw_nodes]
        # exported edges carry no style; restore the canvas default
        edges = [
            FlowEdge.model_validate({**default_edge_options(), **e})
            for e in raw_edges
        ]
    except (PydanticValidationError, TypeError) as e:
        raise SchemaError(f"invalid canvas data in export: {e}") from e

    return nodes, edges
