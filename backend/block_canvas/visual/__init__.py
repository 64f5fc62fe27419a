# Canvas projection of the canonical diagram
# Canonical Diagram <-> FlowNode/FlowEdge, plus the fixed layout table

from block_canvas.visual.visual_schema import BlockData, FlowEdge, FlowNode, Position
from block_canvas.visual.visual_style import DEFAULT_EDGE_OPTIONS, default_edge_options
from block_canvas.visual.layout import BLOCK_POSITIONS, DEFAULT_POSITION, position_for
from block_canvas.visual.visual_mapper import (
    connections_to_edges,
    diagram_to_nodes,
    to_canonical,
    to_presentation,
)

__all__ = [
    "BlockData",
    "FlowEdge",
    "FlowNode",
    "Position",
    "DEFAULT_EDGE_OPTIONS",
    "default_edge_options",
    "BLOCK_POSITIONS",
    "DEFAULT_POSITION",
    "position_for",
    "connections_to_edges",
    "diagram_to_nodes",
    "to_canonical",
    "to_presentation",
]
