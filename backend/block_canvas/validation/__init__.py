"""
Validation module: the strict schema check and the non-raising inspector.
"""

from block_canvas.validation.schema import validate_diagram

from block_canvas.validation.diagram_validator import (
    DiagramInspector,
    DiagramValidationResult,
    ValidationIssue,
    ValidationSeverity,
    inspect_diagram,
)

__all__ = [
    "validate_diagram",
    "inspect_diagram",
    "DiagramInspector",
    "DiagramValidationResult",
    "ValidationIssue",
    "ValidationSeverity",
]
