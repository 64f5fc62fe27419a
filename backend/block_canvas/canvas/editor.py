from typing import List, Optional

from block_canvas.ir.errors import ValidationError
from block_canvas.visual import FlowNode


class BlockEditor:
    """
    Inline edit session for one block.

    Works on a private copy of title, components and annotation captured
    when the session opens. confirm() merges the copy into the node;
    cancel() throws it away. Either one closes the session.
    """

    def __init__(self, controller, node: FlowNode):
        self._controller = controller
        self.node_id = node.id
        self._original = node.data.model_copy(deep=True)

        self.title: str = node.data.title
        self.components: List[str] = list(node.data.components)
        self.annotation: str = node.data.annotation or ""
        self.closed = False

    def set_title(self, title: str) -> None:
        self._ensure_open()
        self.title = title

    def add_component(self, name: str) -> bool:
        """Append a trimmed component name. Blank names are ignored."""
        self._ensure_open()
        name = name.strip()
        if not name:
            return False
        self.components.append(name)
        return True

    def remove_component(self, index: int) -> str:
        self._ensure_open()
        if not 0 <= index < len(self.components):
            raise ValidationError(f"No component at position {index}")
        return self.components.pop(index)

    def set_annotation(self, text: Optional[str]) -> None:
        self._ensure_open()
        self.annotation = text or ""

    @property
    def is_dirty(self) -> bool:
        return (
            self.title != self._original.title
            or self.components != self._original.components
            or (self.annotation or None) != self._original.annotation
        )

    def confirm(self) -> None:
        self._ensure_open()
        self._controller.update_node(
            self.node_id,
            title=self.title,
            components=list(self.components),
            annotation=self.annotation or None,
        )
        self.closed = True

    def cancel(self) -> None:
        self._ensure_open()
        self.title = self._original.title
        self.components = list(self._original.components)
        self.annotation = self._original.annotation or ""
        self.closed = True

    def _ensure_open(self) -> None:
        if self.closed:
            raise ValidationError(f"Edit session for '{self.node_id}' is closed")
