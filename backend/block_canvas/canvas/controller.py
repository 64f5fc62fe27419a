"""
Canvas editing controller.

The controller is the single owner of the live node/edge working set.
An externally owned CanvasStore receives a copy after every mutation, so
export and reset never need to reach into the controller.

Reads hand out deep copies; the only way to change the working set is
through the methods below.
"""

from typing import Callable, Iterable, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from block_canvas.canvas.editor import BlockEditor
from block_canvas.ir.diagram import Diagram
from block_canvas.ir.errors import EdgeNotFoundError, NodeNotFoundError, ValidationError
from block_canvas.observability import get_logger
from block_canvas.visual import (
    BlockData,
    FlowEdge,
    FlowNode,
    Position,
    to_canonical,
    to_presentation,
)
from block_canvas.visual.visual_mapper import edge_id as make_edge_id
from block_canvas.visual.visual_style import default_edge_options

logger = get_logger(__name__)

EDITABLE_FIELDS = ("title", "components", "annotation")


class CanvasStore:
    """The store of record the rest of the application reads from."""

    def __init__(self, on_change: Optional[Callable[["CanvasStore"], None]] = None):
        self.nodes: List[FlowNode] = []
        self.edges: List[FlowEdge] = []
        self.on_change = on_change

    def sync(self, nodes: Iterable[FlowNode], edges: Iterable[FlowEdge]) -> None:
        self.nodes = [n.model_copy(deep=True) for n in nodes]
        self.edges = [e.model_copy(deep=True) for e in edges]
        if self.on_change is not None:
            self.on_change(self)


class CanvasController:
    def __init__(self, store: Optional[CanvasStore] = None):
        self.store = store or CanvasStore()
        self._nodes: List[FlowNode] = []
        self._edges: List[FlowEdge] = []

    # -------------------------
    # Snapshots
    # -------------------------

    @property
    def nodes(self) -> Tuple[FlowNode, ...]:
        return tuple(n.model_copy(deep=True) for n in self._nodes)

    @property
    def edges(self) -> Tuple[FlowEdge, ...]:
        return tuple(e.model_copy(deep=True) for e in self._edges)

    @property
    def is_empty(self) -> bool:
        return not self._nodes

    def get_node(self, node_id: str) -> FlowNode:
        return self._find_node(node_id).model_copy(deep=True)

    def to_diagram(self) -> Diagram:
        return to_canonical(self._nodes, self._edges)

    # -------------------------
    # Whole-set operations
    # -------------------------

    def replace(self, nodes: Iterable[FlowNode], edges: Iterable[FlowEdge]) -> None:
        self._nodes = [n.model_copy(deep=True) for n in nodes]
        self._edges = [e.model_copy(deep=True) for e in edges]
        self._sync()

    def load_diagram(self, diagram: Diagram) -> None:
        nodes, edges = to_presentation(diagram)
        self.replace(nodes, edges)

    def reset(self) -> None:
        self._nodes = []
        self._edges = []
        self._sync()

    # -------------------------
    # Node operations
    # -------------------------

    def move_node(self, node_id: str, x: float, y: float) -> None:
        node = self._find_node(node_id)
        node.position = Position(x=x, y=y)
        self._sync()

    def update_node(self, node_id: str, **fields) -> None:
        """Merge edited block fields into the node data; id, type and position never change."""
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot edit block fields: {', '.join(sorted(unknown))}")

        node = self._find_node(node_id)
        try:
            data = BlockData.model_validate({**node.data.model_dump(), **fields})
        except PydanticValidationError as e:
            fields_in_error = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise ValidationError(
                f"Invalid value for block fields: {', '.join(fields_in_error)}"
            ) from e

        node.data = data
        self._sync()

    def begin_edit(self, node_id: str) -> BlockEditor:
        return BlockEditor(self, self.get_node(node_id))

    def delete_node(self, node_id: str) -> None:
        """Remove the node and every edge that touches it."""
        self._find_node(node_id)
        self._nodes = [n for n in self._nodes if n.id != node_id]

        before = len(self._edges)
        self._edges = [
            e for e in self._edges if e.source != node_id and e.target != node_id
        ]
        logger.debug(
            "Deleted node %s and %d incident edges", node_id, before - len(self._edges)
        )
        self._sync()

    # -------------------------
    # Edge operations
    # -------------------------

    def connect(self, source: str, target: str, label: Optional[str] = None) -> FlowEdge:
        """
        Append an edge with the default style. Parallel edges between the
        same pair are allowed; only the id has to be unique.
        """
        self._find_node(source)
        self._find_node(target)

        taken = {e.id for e in self._edges}
        index = len(self._edges)
        while make_edge_id(source, target, index) in taken:
            index += 1

        edge = FlowEdge(
            id=make_edge_id(source, target, index),
            source=source,
            target=target,
            label=label,
            **default_edge_options(),
        )
        self._edges.append(edge)
        self._sync()
        return edge.model_copy(deep=True)

    def delete_edge(self, edge_id: str) -> None:
        if not any(e.id == edge_id for e in self._edges):
            raise EdgeNotFoundError(f"Edge '{edge_id}' not found")
        self._edges = [e for e in self._edges if e.id != edge_id]
        self._sync()

    # -------------------------
    # Helpers
    # -------------------------

    def _find_node(self, node_id: str) -> FlowNode:
        for node in self._nodes:
            if node.id == node_id:
                return node
        raise NodeNotFoundError(f"Node '{node_id}' not found")

    def _sync(self) -> None:
        self.store.sync(self._nodes, self._edges)
