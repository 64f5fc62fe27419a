"""
Diagram Inspector - Reports the gaps the schema check lets through.

A diagram that passed validate_diagram can still have:
- Two blocks of the same category (and so a missing one)
- Duplicate block IDs
- Connections pointing at block IDs that do not exist
- Self connections

None of these are fixed here. The generator and the client log the
findings; dangling edges reach the canvas unchanged.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional
from enum import Enum
from collections import Counter

from block_canvas.ir.diagram import BLOCK_TYPES, Diagram


class ValidationSeverity(Enum):
    ERROR = "error"      # Diagram cannot be used as-is
    WARNING = "warning"  # Diagram renders but breaks a convention
    INFO = "info"        # Worth knowing


@dataclass
class ValidationIssue:
    """A single finding"""
    severity: ValidationSeverity
    code: str           # Machine-readable issue code
    message: str        # Human-readable description
    block_id: Optional[str] = None
    connection_info: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "block_id": self.block_id,
            "connection_info": self.connection_info,
        }


@dataclass
class DiagramValidationResult:
    is_valid: bool
    issues: List[ValidationIssue] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.INFO)

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "info_count": self.info_count,
            "issues": [i.to_dict() for i in self.issues],
            "stats": self.stats,
        }

    def get_summary(self) -> str:
        status = "Valid" if self.is_valid else "Invalid"
        return (
            f"{status} | "
            f"Errors: {self.error_count}, Warnings: {self.warning_count}, Info: {self.info_count}"
        )


class DiagramInspector:
    """
    Audits a schema-valid Diagram.

    Usage:
        result = DiagramInspector().inspect(diagram)
        for issue in result.issues:
            logger.warning("[%s] %s", issue.code, issue.message)

    With strict_mode=True warnings make the result invalid.
    """

    def __init__(self, strict_mode: bool = False):
        self.strict_mode = strict_mode

    def inspect(self, diagram: Diagram) -> DiagramValidationResult:
        issues: List[ValidationIssue] = []
        block_ids = diagram.block_ids()

        issues.extend(self._check_block_types(diagram))
        issues.extend(self._check_duplicate_block_ids(diagram))
        issues.extend(self._check_dangling_connections(diagram, block_ids))
        issues.extend(self._check_self_connections(diagram))

        has_errors = any(i.severity == ValidationSeverity.ERROR for i in issues)
        has_warnings = any(i.severity == ValidationSeverity.WARNING for i in issues)

        is_valid = not has_errors
        if self.strict_mode:
            is_valid = not has_errors and not has_warnings

        return DiagramValidationResult(
            is_valid=is_valid,
            issues=issues,
            stats={
                "blocks": len(diagram.blocks),
                "connections": len(diagram.connections),
                "block_types": len({b.type for b in diagram.blocks}),
            },
        )

    def _check_block_types(self, diagram: Diagram) -> List[ValidationIssue]:
        issues = []
        counts = Counter(b.type for b in diagram.blocks)

        for block_type, count in counts.items():
            if count > 1:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    code="DUPLICATE_BLOCK_TYPE",
                    message=f"Block type '{block_type}' appears {count} times",
                ))

        for block_type in BLOCK_TYPES:
            if block_type not in counts:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    code="MISSING_BLOCK_TYPE",
                    message=f"No block of type '{block_type}'",
                ))
        return issues

    def _check_duplicate_block_ids(self, diagram: Diagram) -> List[ValidationIssue]:
        counts = Counter(b.id for b in diagram.blocks)
        return [
            ValidationIssue(
                severity=ValidationSeverity.ERROR,
                code="DUPLICATE_BLOCK_ID",
                message=f"Duplicate block ID '{block_id}' appears {count} times",
                block_id=block_id,
            )
            for block_id, count in counts.items()
            if count > 1
        ]

    def _check_dangling_connections(self, diagram: Diagram, block_ids: set) -> List[ValidationIssue]:
        issues = []
        for conn in diagram.connections:
            missing = [end for end in (conn.source, conn.target) if end not in block_ids]
            for block_id in missing:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    code="DANGLING_CONNECTION",
                    message=f"Connection references unknown block '{block_id}'",
                    block_id=block_id,
                    connection_info=f"{conn.source} -> {conn.target}",
                ))
        return issues

    def _check_self_connections(self, diagram: Diagram) -> List[ValidationIssue]:
        return [
            ValidationIssue(
                severity=ValidationSeverity.INFO,
                code="SELF_CONNECTION",
                message=f"Block '{conn.source}' is connected to itself",
                block_id=conn.source,
                connection_info=f"{conn.source} -> {conn.target}",
            )
            for conn in diagram.connections
            if conn.source == conn.target
        ]


def inspect_diagram(diagram: Diagram, strict: bool = False) -> DiagramValidationResult:
    """Convenience function to audit a diagram."""
    return DiagramInspector(strict_mode=strict).inspect(diagram)
