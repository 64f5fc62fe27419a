from typing import Iterable, List, Sequence, Tuple

from block_canvas.ir.diagram import Block, Connection, Diagram
from block_canvas.visual.layout import position_for
from block_canvas.visual.visual_schema import BlockData, FlowEdge, FlowNode
from block_canvas.visual.visual_style import default_edge_options


def edge_id(source: str, target: str, index: int) -> str:
    return f"edge-{source}-{target}-{index}"


# -------------------------
# Canonical -> canvas
# -------------------------

def block_to_node(block: Block) -> FlowNode:
    return FlowNode(
        id=block.id,
        position=position_for(block.type),
        data=BlockData(
            type=block.type,
            title=block.title,
            components=list(block.components),
            annotation=block.annotation,
        ),
    )


def diagram_to_nodes(diagram: Diagram) -> List[FlowNode]:
    return [block_to_node(block) for block in diagram.blocks]


def connections_to_edges(connections: Iterable[Connection]) -> List[FlowEdge]:
    """
    One edge per connection. The ordinal index keeps parallel edges
    between the same pair of blocks apart.
    """
    return [
        FlowEdge(
            id=edge_id(conn.source, conn.target, index),
            source=conn.source,
            target=conn.target,
            label=conn.label,
            **default_edge_options(),
        )
        for index, conn in enumerate(connections)
    ]


def to_presentation(diagram: Diagram) -> Tuple[List[FlowNode], List[FlowEdge]]:
    return diagram_to_nodes(diagram), connections_to_edges(diagram.connections)


# -------------------------
# Canvas -> canonical
# -------------------------

def to_canonical(nodes: Sequence[FlowNode], edges: Sequence[FlowEdge]) -> Diagram:
    """
    Drop position, style and generated edge ids. Only plain string edge
    labels survive; rich label objects become None.
    """
    blocks = [
        Block(
            id=node.id,
            type=node.data.type,
            title=node.data.title,
            components=list(node.data.components),
            annotation=node.data.annotation,
        )
        for node in nodes
    ]

    connections = [
        Connection(
            source=edge.source,
            target=edge.target,
            label=edge.label if isinstance(edge.label, str) else None,
        )
        for edge in edges
    ]

    return Diagram(blocks=blocks, connections=connections)
