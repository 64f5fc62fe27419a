import copy

import pytest

from block_canvas.ir.diagram import Diagram
from block_canvas.ir.errors import SchemaError, ValidationError
from block_canvas.validation import inspect_diagram, validate_diagram


def test_valid_payload_becomes_diagram(speaker_payload):
    diagram = validate_diagram(speaker_payload)

    assert isinstance(diagram, Diagram)
    assert [b.type for b in diagram.blocks] == [
        "power", "inputs", "processing", "outputs", "peripherals"
    ]
    assert diagram.blocks[2].annotation == "Handles A2DP decoding"
    assert diagram.connections[2].label is None


def test_block_count_must_be_five(speaker_payload):
    speaker_payload["blocks"] = speaker_payload["blocks"][:4]

    with pytest.raises(SchemaError) as exc:
        validate_diagram(speaker_payload)

    assert str(exc.value) == "expected 5 blocks, got 4"


def test_six_blocks_rejected(speaker_payload):
    speaker_payload["blocks"].append(copy.deepcopy(speaker_payload["blocks"][0]))

    with pytest.raises(SchemaError, match="expected 5 blocks, got 6"):
        validate_diagram(speaker_payload)


def test_schema_error_is_a_validation_error(speaker_payload):
    del speaker_payload["blocks"]

    with pytest.raises(ValidationError, match="'blocks'"):
        validate_diagram(speaker_payload)


@pytest.mark.parametrize("field", ["id", "type", "title", "components"])
def test_missing_block_field(speaker_payload, field):
    del speaker_payload["blocks"][1][field]

    with pytest.raises(SchemaError, match=f"block 1: missing required field '{field}'"):
        validate_diagram(speaker_payload)


def test_unknown_block_type(speaker_payload):
    speaker_payload["blocks"][0]["type"] = "battery"

    with pytest.raises(SchemaError, match="unknown type 'battery'"):
        validate_diagram(speaker_payload)


def test_components_must_be_strings(speaker_payload):
    speaker_payload["blocks"][3]["components"] = ["LED", 42]

    with pytest.raises(SchemaError, match="block 3: 'components' must be a list of strings"):
        validate_diagram(speaker_payload)


def test_blank_title_rejected(speaker_payload):
    speaker_payload["blocks"][0]["title"] = "   "

    with pytest.raises(SchemaError, match="'title'"):
        validate_diagram(speaker_payload)


def test_connections_required_but_may_be_empty(speaker_payload):
    speaker_payload["connections"] = []
    assert validate_diagram(speaker_payload).connections == []

    del speaker_payload["connections"]
    with pytest.raises(SchemaError, match="'connections'"):
        validate_diagram(speaker_payload)


def test_connection_needs_source_and_target(speaker_payload):
    del speaker_payload["connections"][0]["target"]

    with pytest.raises(SchemaError, match="connection 0: missing required field 'target'"):
        validate_diagram(speaker_payload)


def test_non_object_payload_rejected():
    with pytest.raises(SchemaError):
        validate_diagram(["not", "a", "diagram"])


def test_extra_keys_are_dropped(speaker_payload):
    speaker_payload["blocks"][0]["color"] = "red"
    speaker_payload["connections"][0]["weight"] = 3

    diagram = validate_diagram(speaker_payload)

    assert "color" not in diagram.blocks[0].model_dump()
    assert "weight" not in diagram.connections[0].model_dump()


# ----------------------------------------------------------
# Gaps the schema lets through
# ----------------------------------------------------------

def test_duplicate_types_pass_schema_but_are_reported(speaker_payload):
    speaker_payload["blocks"][3]["type"] = "power"

    diagram = validate_diagram(speaker_payload)
    report = inspect_diagram(diagram)

    assert "DUPLICATE_BLOCK_TYPE" in report.codes()
    assert "MISSING_BLOCK_TYPE" in report.codes()
    assert report.is_valid
    assert not inspect_diagram(diagram, strict=True).is_valid


def test_dangling_connection_passes_schema_but_is_reported(speaker_payload):
    speaker_payload["connections"].append({"source": "cpu", "target": "ghost"})

    diagram = validate_diagram(speaker_payload)
    report = inspect_diagram(diagram)

    assert len(diagram.connections) == 5
    assert report.codes() == ["DANGLING_CONNECTION"]
    assert report.issues[0].block_id == "ghost"


def test_clean_diagram_has_no_findings(diagram_payload):
    report = inspect_diagram(validate_diagram(diagram_payload))

    assert report.issues == []
    assert report.stats == {"blocks": 5, "connections": 4, "block_types": 5}
    assert report.to_dict()["warning_count"] == 0


def test_duplicate_block_id_is_an_error(speaker_payload):
    speaker_payload["blocks"][4]["id"] = "cpu"

    report = inspect_diagram(validate_diagram(speaker_payload))

    assert "DUPLICATE_BLOCK_ID" in report.codes()
    assert report.error_count == 1
    assert not report.is_valid
