"""
Schema check for candidate diagrams.

Everything that crosses a trust boundary (model tool output, endpoint
responses, imported files) goes through validate_diagram before it is
rendered. Either the whole diagram is accepted or SchemaError is raised;
there is no partial result.

Deliberately NOT checked here (see diagram_validator.inspect_diagram):
- one block per category
- connections pointing at existing block ids
"""

from typing import Any, Mapping

from block_canvas.ir.diagram import BLOCK_COUNT, BLOCK_TYPES, Diagram
from block_canvas.ir.errors import SchemaError


REQUIRED_BLOCK_FIELDS = ("id", "type", "title", "components")
REQUIRED_CONNECTION_FIELDS = ("source", "target")


def validate_diagram(payload: Any) -> Diagram:
    if isinstance(payload, Diagram):
        payload = payload.to_payload()

    if not isinstance(payload, Mapping):
        raise SchemaError("diagram must be a JSON object")

    blocks = payload.get("blocks")
    if blocks is None:
        raise SchemaError("missing required field 'blocks'")
    if not isinstance(blocks, list):
        raise SchemaError("'blocks' must be a list")
    if len(blocks) != BLOCK_COUNT:
        raise SchemaError(f"expected {BLOCK_COUNT} blocks, got {len(blocks)}")

    for index, block in enumerate(blocks):
        _check_block(index, block)

    connections = payload.get("connections")
    if connections is None:
        raise SchemaError("missing required field 'connections'")
    if not isinstance(connections, list):
        raise SchemaError("'connections' must be a list")

    for index, connection in enumerate(connections):
        _check_connection(index, connection)

    return Diagram.model_validate(
        {
            "blocks": [_pick(b, REQUIRED_BLOCK_FIELDS + ("annotation",)) for b in blocks],
            "connections": [
                _pick(c, REQUIRED_CONNECTION_FIELDS + ("label",)) for c in connections
            ],
        }
    )


# ------------------------------------------------
# Helpers
# ------------------------------------------------

def _check_block(index: int, block: Any) -> None:
    where = f"block {index}"

    if not isinstance(block, Mapping):
        raise SchemaError(f"{where}: must be an object")

    for name in REQUIRED_BLOCK_FIELDS:
        if name not in block or block[name] is None:
            raise SchemaError(f"{where}: missing required field '{name}'")

    if not isinstance(block["id"], str) or not block["id"]:
        raise SchemaError(f"{where}: 'id' must be a non-empty string")

    if block["type"] not in BLOCK_TYPES:
        raise SchemaError(
            f"{where}: unknown type {block['type']!r} "
            f"(expected one of {', '.join(BLOCK_TYPES)})"
        )

    if not isinstance(block["title"], str) or not block["title"].strip():
        raise SchemaError(f"{where}: 'title' must be a non-empty string")

    components = block["components"]
    if not isinstance(components, list) or not all(isinstance(c, str) for c in components):
        raise SchemaError(f"{where}: 'components' must be a list of strings")

    annotation = block.get("annotation")
    if annotation is not None and not isinstance(annotation, str):
        raise SchemaError(f"{where}: 'annotation' must be a string")


def _check_connection(index: int, connection: Any) -> None:
    where = f"connection {index}"

    if not isinstance(connection, Mapping):
        raise SchemaError(f"{where}: must be an object")

    for name in REQUIRED_CONNECTION_FIELDS:
        value = connection.get(name)
        if value is None:
            raise SchemaError(f"{where}: missing required field '{name}'")
        if not isinstance(value, str):
            raise SchemaError(f"{where}: '{name}' must be a string")

    label = connection.get("label")
    if label is not None and not isinstance(label, str):
        raise SchemaError(f"{where}: 'label' must be a string")


def _pick(data: Mapping, keys: tuple) -> dict:
    return {k: data[k] for k in keys if data.get(k) is not None}
