from block_canvas.canvas.controller import CanvasController, CanvasStore
from block_canvas.canvas.editor import BlockEditor
from block_canvas.canvas.export import (
    build_export,
    export_filename,
    load_export,
    read_export,
    write_export,
)
from block_canvas.canvas.workspace import DiagramWorkspace

__all__ = [
    "CanvasController",
    "CanvasStore",
    "BlockEditor",
    "DiagramWorkspace",
    "build_export",
    "export_filename",
    "load_export",
    "read_export",
    "write_export",
]
