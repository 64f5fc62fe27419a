"""
Workspace - the page-level state around one canvas.

Holds the current description, whether anything has been generated, and
the canvas controller. Generation results are applied through a
monotonic request sequence so a late answer to an older request can
never overwrite the result of a newer one.
"""

from itertools import count
from pathlib import Path

from block_canvas.canvas.controller import CanvasController
from block_canvas.canvas.export import build_export, read_export, write_export
from block_canvas.catalog import DEFAULT_TEMPLATE_DESCRIPTION, default_diagram
from block_canvas.ir.diagram import Diagram
from block_canvas.ir.errors import DESCRIPTION_REQUIRED, ValidationError
from block_canvas.observability import get_logger

logger = get_logger(__name__)

NOTHING_TO_EXPORT = "No diagram to export. Generate a diagram first."


class DiagramWorkspace:
    def __init__(self, client=None, controller: CanvasController | None = None):
        self.client = client
        self.controller = controller or CanvasController()
        self.description = ""
        self.has_generated = False
        self._sequence = count(1)
        self._latest_request = 0

    # -------------------------
    # Generation
    # -------------------------

    def begin_request(self, description: str) -> int:
        token = next(self._sequence)
        self._latest_request = token
        self.description = description
        return token

    def apply_result(self, token: int, diagram: Diagram) -> bool:
        """Install a generation result. Returns False when the result is stale."""
        if token != self._latest_request:
            logger.info(
                "Discarding stale generation result %d (latest is %d)",
                token,
                self._latest_request,
            )
            return False

        self.controller.load_diagram(diagram)
        self.has_generated = True
        logger.info("Generated diagram with %d blocks", len(diagram.blocks))
        return True

    def generate(self, description: str) -> bool:
        if self.client is None:
            raise ValidationError("No diagram client configured")
        if not isinstance(description, str) or not description.strip():
            raise ValidationError(DESCRIPTION_REQUIRED)

        token = self.begin_request(description.strip())
        diagram = self.client.generate(description)
        return self.apply_result(token, diagram)

    # -------------------------
    # Templates / reset
    # -------------------------

    def load_default(self) -> None:
        # a template load supersedes any request still in flight
        self._latest_request = next(self._sequence)
        self.controller.load_diagram(default_diagram())
        self.description = DEFAULT_TEMPLATE_DESCRIPTION
        self.has_generated = True

    def reset(self) -> None:
        self._latest_request = next(self._sequence)
        self.controller.reset()
        self.description = ""
        self.has_generated = False

    # -------------------------
    # Export / import
    # -------------------------

    def export(self) -> dict:
        store = self.controller.store
        if not store.nodes:
            raise ValidationError(NOTHING_TO_EXPORT)
        return build_export(store.nodes, store.edges, self.description)

    def export_to(self, directory: Path) -> Path:
        store = self.controller.store
        if not store.nodes:
            raise ValidationError(NOTHING_TO_EXPORT)
        return write_export(directory, store.nodes, store.edges, self.description)

    def import_from(self, path: Path) -> None:
        nodes, edges, description = read_export(path)
        self._latest_request = next(self._sequence)
        self.controller.replace(nodes, edges)
        self.description = description
        self.has_generated = True
